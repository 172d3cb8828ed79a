"""Parlay and round-robin messages: header, leg split, sizing and totals."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime

from chatbet.config import Settings
from chatbet.errors import (
    InvalidChatFormatError,
    InvalidKeywordSyntaxError,
    InvalidParlayLegError,
    InvalidParlayStructureError,
    InvalidParlayToWinError,
    InvalidRiskTypeError,
    InvalidRoundRobinLegError,
    InvalidRoundRobinToWinError,
    InvalidSizeFormatError,
    LegCountMismatchError,
    MissingNcrNotationError,
    MissingRiskTypeError,
    MissingSizeForFillError,
    UnknownKeywordError,
)
from chatbet.parlays.engine import combine_odds, decimal_to_american, parlay_count, quote_round_robin
from chatbet.parlays.types import ParlaySize, RoundRobinSize
from chatbet.parsing.fields import is_numeric_team_name
from chatbet.parsing.keywords import (
    HEADER_KEYWORDS,
    LEG_KEYWORDS,
    Modifier,
    Modifiers,
    parse_modifier,
    resolve_modifiers,
)
from chatbet.parsing.ncr import NcrSpec, is_strict_ncr, looks_like_ncr, parse_ncr
from chatbet.parsing.pricing import looks_like_embedded_price, parse_fill_size
from chatbet.parsing.straight import parse_leg
from chatbet.types import Bet, ChatType, ParlayResult, RiskType, RoundRobinResult, StraightResult

logger = logging.getLogger(__name__)

_AMOUNT = r"\$?[\d.,]+k?"
_AMOUNT_RE = re.compile(rf"^{_AMOUNT}$", re.IGNORECASE)
_RISK_TW_RE = re.compile(rf"^({_AMOUNT})\s+tw\s+({_AMOUNT})$", re.IGNORECASE)
_TWO_AMOUNTS_RE = re.compile(rf"^{_AMOUNT}\s+{_AMOUNT}$", re.IGNORECASE)
_TW_RE = re.compile(r"(?:^|\s)tw(?=\s|$)", re.IGNORECASE)
# "A&M" is part of a name; any other & separates legs
_LEG_SEPARATOR_RE = re.compile(r"(?<![A-Za-z])&|&(?![A-Za-z])")
_EVEN_TOKENS = frozenset({"ev", "even", "evs"})

TOWIN_KEYWORD_HINT = 'Invalid to-win format: use "tw $500" not "towin:500"'
TW_REQUIRED = 'Invalid to-win syntax: must use "tw" keyword'
TW_REPEATED = "To-win amount specified multiple times"


@dataclass
class ParlayMessage:
    """A parlay or round-robin body split into header, legs and size."""

    modifiers: Modifiers
    legs: list[str] = field(default_factory=list)
    size_text: str | None = None
    ncr: NcrSpec | None = None


def _header(
    tokens: list[str],
    raw_input: str,
    round_robin: bool,
) -> tuple[int, list[Modifier], NcrSpec | None]:
    """Consume header modifiers (and the nCr token for round robins)."""

    pairs: list[Modifier] = []
    ncr: NcrSpec | None = None
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token.lower() in HEADER_KEYWORDS:
            raise InvalidKeywordSyntaxError(raw_input, token)
        if ":" in token:
            modifier = parse_modifier(token, raw_input)
            if modifier.key in LEG_KEYWORDS:
                break
            if modifier.key not in HEADER_KEYWORDS:
                raise UnknownKeywordError(raw_input, modifier.key)
            pairs.append(modifier)
        elif (
            round_robin
            and ncr is None
            and looks_like_ncr(token)
            and not is_numeric_team_name(" ".join(tokens[i:]))
        ):
            ncr = parse_ncr(token, raw_input)
        else:
            break
        i += 1
    return i, pairs, ncr


def split_message(body: str, raw_input: str, round_robin: bool = False) -> ParlayMessage:
    """Split the text after the prefix into header, legs and size tail.

    Legs are separated by ``&``; in the multi-line form each line is a leg.
    The size is whatever follows the ``=``.
    """

    if body.count("=") > 1:
        raise InvalidChatFormatError(raw_input, 'Only one "=" is allowed')
    legs_part, sep, tail = body.partition("=")
    size_text = (" ".join(tail.split()) or None) if sep else None

    lines = [line.strip() for line in legs_part.splitlines() if line.strip()]
    first = lines[0].split() if lines else []
    end, pairs, ncr = _header(first, raw_input, round_robin)
    modifiers = resolve_modifiers(pairs, raw_input)

    rest = " ".join(first[end:])
    leg_lines = ([rest] if rest else []) + lines[1:]
    legs: list[str] = []
    for line in leg_lines:
        legs.extend(part.strip() for part in _LEG_SEPARATOR_RE.split(line))
    return ParlayMessage(modifiers=modifiers, legs=legs, size_text=size_text, ncr=ncr)


def _check_separators(legs: list[str], raw_input: str, noun: str) -> None:
    for leg in legs:
        if leg.count("@") > 1 or (len(legs) == 1 and "," in leg):
            raise InvalidParlayStructureError(raw_input, f"{noun} legs must be separated by &")


def _leg_problem(leg: str, noun: str) -> str | None:
    """Describe why ``leg`` cannot be priced, or ``None`` when it can."""

    tokens = leg.split()
    if "@" in leg:
        after = leg.split("@", 1)[1].strip()
        if not after or after.lower().endswith("k") or after.startswith("$"):
            return f"Each {noun} leg must have a price"
        return None
    if any(looks_like_embedded_price(token) or token.lower() in _EVEN_TOKENS for token in tokens):
        return "Invalid leg format: missing @ symbol"
    return f"Each {noun} leg must have a price"


def parse_parlay_size(text: str, raw_input: str) -> ParlaySize:
    """``R`` or ``R tw W``. Amounts use fill notation."""

    cleaned = " ".join(text.split())
    if "towin" in cleaned.lower():
        raise InvalidParlayToWinError(raw_input, TOWIN_KEYWORD_HINT)
    if len(_TW_RE.findall(cleaned)) > 1:
        raise InvalidParlayToWinError(raw_input, TW_REPEATED)

    match = _RISK_TW_RE.match(cleaned)
    if match:
        return ParlaySize(
            risk=parse_fill_size(match.group(1), raw_input).value,
            to_win=parse_fill_size(match.group(2), raw_input).value,
            use_fair=False,
        )
    if _TWO_AMOUNTS_RE.match(cleaned):
        raise InvalidSizeFormatError(raw_input, cleaned, TW_REQUIRED)
    if _AMOUNT_RE.match(cleaned):
        return ParlaySize(risk=parse_fill_size(cleaned, raw_input).value)
    raise InvalidSizeFormatError(raw_input, cleaned, 'an amount, optionally followed by "tw" and a to-win amount')


def parse_round_robin_size(text: str, raw_input: str) -> RoundRobinSize:
    """``R per|total`` with an optional ``tw W``."""

    cleaned = " ".join(text.split())
    if "towin" in cleaned.lower():
        raise InvalidRoundRobinToWinError(raw_input, TOWIN_KEYWORD_HINT)
    if len(_TW_RE.findall(cleaned)) > 1:
        raise InvalidRoundRobinToWinError(raw_input, TW_REPEATED)

    tokens = cleaned.split()
    if tokens[0].lower() in ("per", "total"):
        raise InvalidSizeFormatError(raw_input, cleaned, "Risk type must come after size amount")
    risk = parse_fill_size(tokens[0], raw_input).value
    if len(tokens) == 1 or tokens[1].lower() == "tw":
        raise MissingRiskTypeError(raw_input)

    word = tokens[1].lower()
    if word not in ("per", "total"):
        if _AMOUNT_RE.match(word):
            raise InvalidSizeFormatError(raw_input, cleaned, TW_REQUIRED)
        raise InvalidRiskTypeError(raw_input, tokens[1])
    risk_type = RiskType.TOTAL if word == "total" else RiskType.PER_SELECTION

    rest = tokens[2:]
    if not rest:
        return RoundRobinSize(risk=risk, risk_type=risk_type)
    if len(rest) == 2 and rest[0].lower() == "tw":
        return RoundRobinSize(
            risk=risk,
            risk_type=risk_type,
            to_win=parse_fill_size(rest[1], raw_input).value,
            use_fair=False,
        )
    if len(rest) == 1 and _AMOUNT_RE.match(rest[0]):
        raise InvalidSizeFormatError(raw_input, cleaned, TW_REQUIRED)
    raise InvalidSizeFormatError(raw_input, cleaned, '"<risk> per|total" optionally followed by "tw <to win>"')


def _parse_legs(
    legs: list[str],
    raw_input: str,
    chat_type: ChatType,
    settings: Settings,
    reference: datetime,
) -> tuple[StraightResult, ...]:
    return tuple(parse_leg(leg, raw_input, chat_type, settings, reference) for leg in legs)


def _prices(legs: tuple[StraightResult, ...]) -> list[float]:
    return [leg.bet.price for leg in legs if leg.bet.price is not None]


def build_parlay(
    body: str,
    raw_input: str,
    chat_type: ChatType,
    settings: Settings,
    reference: datetime,
) -> ParlayResult:
    message = split_message(body, raw_input)
    legs = message.legs

    _check_separators(legs, raw_input, "Parlay")
    if any(not leg for leg in legs):
        raise InvalidParlayLegError(raw_input, "Empty parlay leg")
    if len(legs) < 2:
        raise InvalidParlayStructureError(raw_input, "Parlay requires at least 2 legs")
    for leg in legs:
        problem = _leg_problem(leg, "parlay")
        if problem:
            raise InvalidParlayLegError(raw_input, problem)
    if message.size_text is None and chat_type is ChatType.FILL:
        raise MissingSizeForFillError(raw_input)

    parsed = _parse_legs(legs, raw_input, chat_type, settings, reference)
    decimal_odds = combine_odds(_prices(parsed))
    logger.debug("Parlay of %d legs at decimal odds %.4f", len(parsed), decimal_odds)

    size = parse_parlay_size(message.size_text, raw_input) if message.size_text else None
    to_win: float | None = None
    if size is not None:
        fair = round(size.risk * (decimal_odds - 1), settings.to_win_precision)
        to_win = fair if size.use_fair else size.to_win

    return ParlayResult(
        chat_type=chat_type,
        bet=Bet(
            price=round(decimal_to_american(decimal_odds), 2),
            risk=size.risk if size else None,
            to_win=to_win,
            execution_dtm=reference if chat_type is ChatType.FILL else None,
            is_free_bet=message.modifiers.free_bet,
        ),
        legs=parsed,
        use_fair=size.use_fair if size else True,
        pushes_lose=message.modifiers.pushes_lose,
    )


def _require_ncr(message: ParlayMessage, raw_input: str) -> NcrSpec:
    if message.ncr is not None:
        return message.ncr
    tokens = [token for leg in message.legs for token in leg.split()]
    if any(is_strict_ncr(token) for token in tokens):
        raise MissingNcrNotationError(raw_input, "nCr notation must appear before legs")
    raise MissingNcrNotationError(raw_input)


def build_round_robin(
    body: str,
    raw_input: str,
    chat_type: ChatType,
    settings: Settings,
    reference: datetime,
) -> RoundRobinResult:
    message = split_message(body, raw_input, round_robin=True)
    ncr = _require_ncr(message, raw_input)
    legs = message.legs

    _check_separators(legs, raw_input, "Round robin")
    if any(not leg for leg in legs):
        raise InvalidRoundRobinLegError(raw_input, "Empty round robin leg")
    if len(legs) != ncr.total_legs:
        raise LegCountMismatchError(raw_input, ncr.total_legs, len(legs))
    for number, leg in enumerate(legs, start=1):
        problem = _leg_problem(leg, "round robin")
        if problem:
            raise InvalidRoundRobinLegError(raw_input, f"Leg {number}: {problem}")
    if message.size_text is None and chat_type is ChatType.FILL:
        raise MissingSizeForFillError(raw_input)

    parsed = _parse_legs(legs, raw_input, chat_type, settings, reference)
    size = (
        parse_round_robin_size(message.size_text, raw_input)
        if message.size_text
        else RoundRobinSize(risk=None)
    )

    prices = _prices(parsed)
    risk: float | None = None
    to_win: float | None = None
    per_parlay: float | None = None
    if size.risk is not None:
        quote = quote_round_robin(
            prices,
            ncr.parlay_size,
            ncr.is_at_most,
            size.risk,
            size.risk_type,
            settings.to_win_precision,
        )
        risk = quote.total_risk
        per_parlay = quote.risk_per_parlay
        to_win = quote.to_win if size.use_fair else size.to_win
        count = quote.parlay_count
    else:
        count = parlay_count(ncr.total_legs, ncr.parlay_size, ncr.is_at_most)

    return RoundRobinResult(
        chat_type=chat_type,
        bet=Bet(
            risk=risk,
            to_win=to_win,
            execution_dtm=reference if chat_type is ChatType.FILL else None,
            is_free_bet=message.modifiers.free_bet,
        ),
        legs=parsed,
        use_fair=size.use_fair,
        pushes_lose=message.modifiers.pushes_lose,
        total_legs=ncr.total_legs,
        parlay_size=ncr.parlay_size,
        is_at_most=ncr.is_at_most,
        risk_type=size.risk_type,
        parlay_count=count,
        risk_per_parlay=per_parlay,
    )
