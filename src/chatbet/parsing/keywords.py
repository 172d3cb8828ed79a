"""``key:value`` modifier extraction.

Modifiers may appear anywhere in a leg. They are first collected into an
ordered list and only then validated, so ``date:5/14 league:MLB`` and
``league:MLB date:5/14`` resolve identically.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from chatbet.errors import (
    InvalidKeywordSyntaxError,
    InvalidKeywordValueError,
    UnknownKeywordError,
)
from chatbet.types import League

LEG_KEYWORDS: frozenset[str] = frozenset({"date", "league"})
STRAIGHT_KEYWORDS: frozenset[str] = LEG_KEYWORDS | {"freebet"}
HEADER_KEYWORDS: frozenset[str] = frozenset({"pusheslose", "tieslose", "freebet"})

_TRUE_ONLY = frozenset({"freebet", "pusheslose", "tieslose"})


@dataclass(frozen=True)
class Modifier:
    key: str
    value: str
    token: str


@dataclass(frozen=True)
class Modifiers:
    date: str | None = None
    league: League | None = None
    free_bet: bool = False
    pushes_lose: bool = False


def is_modifier(token: str) -> bool:
    return ":" in token


def parse_modifier(token: str, raw_input: str) -> Modifier:
    key, _, value = token.partition(":")
    if not key or not value:
        raise InvalidKeywordSyntaxError(
            raw_input, token, "Invalid keyword syntax: no spaces allowed around colon"
        )
    return Modifier(key=key.lower(), value=value, token=token)


def split_modifiers(
    tokens: Iterable[str],
    allowed: frozenset[str],
    raw_input: str,
) -> tuple[list[str], list[Modifier]]:
    """Separate modifier tokens from the rest, rejecting keys outside ``allowed``."""

    remaining: list[str] = []
    modifiers: list[Modifier] = []
    for token in tokens:
        if not is_modifier(token):
            remaining.append(token)
            continue
        modifier = parse_modifier(token, raw_input)
        if modifier.key not in allowed:
            raise UnknownKeywordError(raw_input, modifier.key)
        modifiers.append(modifier)
    return remaining, modifiers


def parse_league(value: str, raw_input: str) -> League:
    try:
        return League(value.upper())
    except ValueError:
        raise InvalidKeywordValueError(
            raw_input, "league", value, f'Invalid league value: "{value}"'
        ) from None


def resolve_modifiers(modifiers: Sequence[Modifier], raw_input: str) -> Modifiers:
    """Apply the per-key validators to an ordered modifier list."""

    seen: set[str] = set()
    date: str | None = None
    league: League | None = None
    free_bet = False
    pushes_lose = False

    for modifier in modifiers:
        # tieslose and pusheslose are the same flag
        slot = "pusheslose" if modifier.key == "tieslose" else modifier.key
        if slot in seen:
            raise InvalidKeywordSyntaxError(
                raw_input, modifier.token, f"Keyword {modifier.key} specified more than once"
            )
        seen.add(slot)

        if modifier.key in _TRUE_ONLY and modifier.value != "true":
            raise InvalidKeywordValueError(
                raw_input,
                modifier.key,
                modifier.value,
                f'Invalid {modifier.key} value: must be "true"',
            )
        if modifier.key == "date":
            date = modifier.value
        elif modifier.key == "league":
            league = parse_league(modifier.value, raw_input)
        elif modifier.key == "freebet":
            free_bet = True
        else:
            pushes_lose = True

    return Modifiers(date=date, league=league, free_bet=free_bet, pushes_lose=pushes_lose)
