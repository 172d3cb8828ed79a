"""Parlay and round-robin assembly."""
