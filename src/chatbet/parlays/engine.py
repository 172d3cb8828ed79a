"""Parlay odds and round-robin combination logic."""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterable, Sequence
from math import comb

from chatbet.parlays.types import ComboQuote, RoundRobinQuote
from chatbet.types import RiskType

logger = logging.getLogger(__name__)


def american_to_decimal(odds: float) -> float:
    return 1 + (odds / 100) if odds > 0 else 1 + (100 / abs(odds))


def decimal_to_american(decimal: float) -> float:
    if decimal >= 2:
        return (decimal - 1) * 100
    return -100 / (decimal - 1)


def combine_odds(prices: Iterable[float]) -> float:
    decimal = 1.0
    for price in prices:
        decimal *= american_to_decimal(price)
    return decimal


def fair_to_win(risk: float, prices: Iterable[float]) -> float:
    """Payout on ``risk`` for a parlay of ``prices``, excluding the stake."""

    return risk * (combine_odds(prices) - 1)


def combination_sizes(parlay_size: int, is_at_most: bool) -> range:
    return range(2, parlay_size + 1) if is_at_most else range(parlay_size, parlay_size + 1)


def parlay_count(total_legs: int, parlay_size: int, is_at_most: bool = False) -> int:
    return sum(comb(total_legs, r) for r in combination_sizes(parlay_size, is_at_most))


def build_combinations(
    leg_count: int,
    parlay_size: int,
    is_at_most: bool = False,
) -> list[tuple[int, ...]]:
    """Index tuples for every parlay a round robin expands into."""

    combos: list[tuple[int, ...]] = []
    for r in combination_sizes(parlay_size, is_at_most):
        combos.extend(itertools.combinations(range(leg_count), r))
    return combos


def quote_round_robin(
    prices: Sequence[float],
    parlay_size: int,
    is_at_most: bool,
    risk: float,
    risk_type: RiskType,
    precision: int = 2,
) -> RoundRobinQuote:
    """Spread ``risk`` over every combination and total the fair payouts.

    ``perSelection`` stakes ``risk`` on each combination; ``total`` splits it
    evenly across them.
    """

    combos = build_combinations(len(prices), parlay_size, is_at_most)
    count = len(combos)
    if risk_type is RiskType.TOTAL:
        per_parlay = risk / count
        total_risk = risk
    else:
        per_parlay = risk
        total_risk = risk * count

    quotes: list[ComboQuote] = []
    for combo in combos:
        decimal_odds = combine_odds(prices[i] for i in combo)
        quotes.append(
            ComboQuote(
                legs=combo,
                decimal_odds=decimal_odds,
                risk=per_parlay,
                to_win=per_parlay * (decimal_odds - 1),
            )
        )
    to_win = sum(quote.to_win for quote in quotes)
    logger.debug("Round robin expanded into %d parlays (risk %.2f each)", count, per_parlay)
    return RoundRobinQuote(
        parlay_count=count,
        risk_per_parlay=round(per_parlay, precision),
        total_risk=round(total_risk, precision),
        to_win=round(to_win, precision),
        combos=quotes,
    )
