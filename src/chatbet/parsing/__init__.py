"""Tokenizers, field extractors and classifiers for chat bets."""
