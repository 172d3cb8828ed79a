"""Dataclasses for parlay sizing and round-robin combinations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from chatbet.types import RiskType


@dataclass
class ParlaySize:
    risk: float
    to_win: float | None = None
    use_fair: bool = True


@dataclass
class RoundRobinSize:
    risk: float | None
    risk_type: RiskType = RiskType.PER_SELECTION
    to_win: float | None = None
    use_fair: bool = True


@dataclass
class ComboQuote:
    legs: tuple[int, ...]
    decimal_odds: float
    risk: float
    to_win: float


@dataclass
class RoundRobinQuote:
    parlay_count: int
    risk_per_parlay: float
    total_risk: float
    to_win: float
    combos: List[ComboQuote] = field(default_factory=list)
