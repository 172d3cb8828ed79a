"""American odds, size notation and risk / to-win math."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from chatbet.errors import InvalidPriceFormatError, InvalidSizeFormatError
from chatbet.parlays.engine import american_to_decimal
from chatbet.types import ChatType

_PRICE_RE = re.compile(r"^([+-])(\d+(?:\.\d+)?)$")
_NUMBER_RE = re.compile(r"^\d*\.?\d+$")
_EVEN_TOKENS = {"ev", "even", "evs"}


def parse_price(text: str, raw_input: str) -> float:
    """Parse USA odds: ``+150``, ``-110``, ``-115.5``, ``ev`` or ``even``."""

    cleaned = text.strip()
    if cleaned.lower() in _EVEN_TOKENS:
        return 100.0
    match = _PRICE_RE.match(cleaned)
    if not match:
        raise InvalidPriceFormatError(raw_input, text)
    value = float(match.group(2))
    # American odds never sit inside (-100, +100)
    if value < 100:
        raise InvalidPriceFormatError(raw_input, text)
    return value if match.group(1) == "+" else -value


def looks_like_embedded_price(token: str) -> bool:
    """Signed numbers too large to be a spread line are prices (``+145``, ``-125``)."""

    match = _PRICE_RE.match(token)
    if not match:
        return False
    value = float(match.group(2))
    return value > 50 and (value > 100 or value.is_integer())


def is_size_token(token: str) -> bool:
    """A ``k`` or ``$`` amount sitting where a price was expected."""

    return token.lower().endswith("k") or token.startswith("$")


def to_win_from_risk(risk: float, price: float) -> float:
    return risk * (american_to_decimal(price) - 1)


def risk_from_to_win(to_win: float, price: float) -> float:
    return to_win / (american_to_decimal(price) - 1)


class SizeFormat(str, Enum):
    UNIT = "unit"
    DECIMAL_THOUSANDS = "decimal_thousands"
    K_NOTATION = "k_notation"
    DOLLAR = "dollar"
    PLAIN_NUMBER = "plain_number"


@dataclass(frozen=True)
class ParsedSize:
    value: float
    format: SizeFormat


def _amount(text: str) -> float | None:
    cleaned = text.replace(",", "")
    if not _NUMBER_RE.match(cleaned):
        return None
    return float(cleaned)


def parse_size(text: str, raw_input: str, chat_type: ChatType) -> ParsedSize:
    """Interpret a size token in order (units) or fill (decimal thousands) context."""

    cleaned = text.strip()
    lowered = cleaned.lower()

    if cleaned.startswith("$"):
        body = lowered[1:]
        multiplier = 1.0
        if body.endswith("k"):
            body, multiplier = body[:-1], 1000.0
        value = _amount(body)
        if value is None:
            raise InvalidSizeFormatError(raw_input, text, "positive dollar amount like $100 or $2.50")
        return ParsedSize(round(value * multiplier, 6), SizeFormat.DOLLAR)

    if lowered.endswith("k"):
        value = _amount(lowered[:-1])
        if value is None:
            raise InvalidSizeFormatError(raw_input, text, "positive number with k like 4k or 2.5k")
        return ParsedSize(round(value * 1000, 6), SizeFormat.K_NOTATION)

    value = _amount(cleaned)
    if value is None:
        hint = (
            "positive number like 100 (=$100) or 2.5 (=$2500)"
            if chat_type is ChatType.FILL
            else "positive decimal number like 2.0 or 0.50"
        )
        raise InvalidSizeFormatError(raw_input, text, hint)

    if chat_type is ChatType.ORDER:
        return ParsedSize(value, SizeFormat.UNIT)
    if "." in cleaned:
        return ParsedSize(round(value * 1000, 6), SizeFormat.DECIMAL_THOUSANDS)
    return ParsedSize(value, SizeFormat.PLAIN_NUMBER)


def parse_order_size(text: str, raw_input: str) -> ParsedSize:
    return parse_size(text, raw_input, ChatType.ORDER)


def parse_fill_size(text: str, raw_input: str) -> ParsedSize:
    return parse_size(text, raw_input, ChatType.FILL)


@dataclass(frozen=True)
class SizeQuote:
    """Resolved stake for a straight bet."""

    size: float | None
    risk: float | None
    to_win: float | None


_TW_WORDS = ("to win", "towin", "tw")
_TP_WORDS = ("to pay", "topay", "tp")
_EXTENDED_RE = re.compile(
    r"^(?:(?P<lead>risk|to\s+win|towin|tw)\s+(?P<lead_amount>\S+)"
    r"|(?P<risk>\S+)\s+(?P<op>to\s+win|towin|tw|to\s+pay|topay|tp)\s+(?P<amount>\S+))$",
    re.IGNORECASE,
)


def _normalize(word: str) -> str:
    return re.sub(r"\s+", " ", word.lower())


def parse_bet_size(
    text: str,
    raw_input: str,
    chat_type: ChatType,
    price: float,
    precision: int = 2,
) -> SizeQuote:
    """Parse everything after ``=`` for a straight bet.

    Legacy sizes (``= 2.5``, ``= 1k``, ``= $500``) set ``size`` and back-fill
    risk and to-win from the price. The extended forms name both sides
    (``= 500 tw 450``, ``= 500 tp 950``) or one side (``= risk 500``,
    ``= tw 450``) and compute the other.
    """

    cleaned = " ".join(text.split())
    if not cleaned:
        raise InvalidSizeFormatError(raw_input, text, 'an amount after "=", e.g. "= 1k"')

    match = _EXTENDED_RE.match(cleaned)
    if not match:
        if " " in cleaned:
            raise InvalidSizeFormatError(
                raw_input, text, 'a single amount, or "<risk> tw <to win>" / "<risk> tp <to pay>"'
            )
        size = parse_size(cleaned, raw_input, chat_type).value
        return SizeQuote(
            size=size,
            risk=size,
            to_win=round(to_win_from_risk(size, price), precision),
        )

    if match.group("lead"):
        lead = _normalize(match.group("lead"))
        amount = parse_size(match.group("lead_amount"), raw_input, chat_type).value
        if lead == "risk":
            return SizeQuote(size=None, risk=amount, to_win=round(to_win_from_risk(amount, price), precision))
        return SizeQuote(size=None, risk=round(risk_from_to_win(amount, price), precision), to_win=amount)

    risk = parse_size(match.group("risk"), raw_input, chat_type).value
    op = _normalize(match.group("op"))
    amount = parse_size(match.group("amount"), raw_input, chat_type).value
    if op in _TW_WORDS:
        return SizeQuote(size=None, risk=risk, to_win=amount)
    if op in _TP_WORDS:
        if amount < risk:
            raise InvalidSizeFormatError(raw_input, text, "to-pay amount of at least the risk amount")
        return SizeQuote(size=None, risk=risk, to_win=round(amount - risk, precision))
    raise InvalidSizeFormatError(raw_input, text, 'a "tw" or "tp" operator')  # pragma: no cover
