"""Price and size parsing tests."""

from __future__ import annotations

import re

import pytest

from chatbet.errors import InvalidPriceFormatError, InvalidSizeFormatError
from chatbet.parsing.pricing import (
    SizeFormat,
    looks_like_embedded_price,
    parse_bet_size,
    parse_fill_size,
    parse_order_size,
    parse_price,
)
from chatbet.types import ChatType

RAW = "raw chat"


@pytest.mark.parametrize(
    ("text", "expected"),
    [("+150", 150.0), ("-110", -110.0), ("-115.5", -115.5), ("ev", 100.0), ("EVEN", 100.0)],
)
def test_parse_price(text: str, expected: float) -> None:
    assert parse_price(text, RAW) == expected


@pytest.mark.parametrize("text", ["150", "abc", "+-110", ""])
def test_parse_price_rejects_unsigned_and_junk(text: str) -> None:
    with pytest.raises(InvalidPriceFormatError):
        parse_price(text, RAW)


@pytest.mark.parametrize("text", ["+0", "-0", "+0.0", "+50", "-99.5"])
def test_parse_price_rejects_values_inside_even_money(text: str) -> None:
    with pytest.raises(InvalidPriceFormatError, match=f'"{re.escape(text)}"'):
        parse_price(text, RAW)


def test_parse_price_accepts_exactly_even() -> None:
    assert parse_price("+100", RAW) == 100.0
    assert parse_price("-100", RAW) == -100.0


def test_embedded_price_detection() -> None:
    assert looks_like_embedded_price("-125")
    assert looks_like_embedded_price("+100")
    assert looks_like_embedded_price("-109.8") is True
    assert not looks_like_embedded_price("+1.5")
    assert not looks_like_embedded_price("-7")
    assert not looks_like_embedded_price("+60.5")


def test_fill_sizes_are_thousands_when_decimal() -> None:
    assert parse_fill_size("2.5", RAW).value == 2500
    assert parse_fill_size("2.5", RAW).format is SizeFormat.DECIMAL_THOUSANDS
    assert parse_fill_size("0.094", RAW).value == 94
    assert parse_fill_size("100", RAW).format is SizeFormat.PLAIN_NUMBER


def test_k_and_dollar_notation() -> None:
    assert parse_fill_size("4k", RAW).value == 4000
    assert parse_fill_size("$2.5k", RAW).value == 2500
    assert parse_fill_size("$1,250", RAW).value == 1250
    assert parse_order_size("4k", RAW).format is SizeFormat.K_NOTATION


def test_order_sizes_are_units() -> None:
    size = parse_order_size("2.0", RAW)
    assert size.value == 2.0
    assert size.format is SizeFormat.UNIT


@pytest.mark.parametrize("text", ["abc", "$", "xk", "-5"])
def test_invalid_sizes(text: str) -> None:
    with pytest.raises(InvalidSizeFormatError):
        parse_fill_size(text, RAW)


def test_legacy_size_back_fills_to_win() -> None:
    quote = parse_bet_size("1k", RAW, ChatType.FILL, -110)
    assert quote.size == 1000
    assert quote.risk == 1000
    assert quote.to_win == pytest.approx(909.09)


def test_risk_and_to_win_pair() -> None:
    quote = parse_bet_size("500 tw 450", RAW, ChatType.FILL, -110)
    assert quote.size is None
    assert (quote.risk, quote.to_win) == (500, 450)


def test_to_pay_subtracts_risk() -> None:
    quote = parse_bet_size("500 tp 950", RAW, ChatType.FILL, -110)
    assert quote.to_win == 450


def test_single_sided_forms() -> None:
    risk_only = parse_bet_size("risk 500", RAW, ChatType.FILL, -110)
    assert risk_only.to_win == pytest.approx(454.55)
    to_win_only = parse_bet_size("tw 450", RAW, ChatType.FILL, 150)
    assert to_win_only.risk == pytest.approx(300)


def test_to_pay_below_risk_is_rejected() -> None:
    with pytest.raises(InvalidSizeFormatError):
        parse_bet_size("500 tp 400", RAW, ChatType.FILL, -110)


def test_two_bare_amounts_are_rejected() -> None:
    with pytest.raises(InvalidSizeFormatError):
        parse_bet_size("1k 2k", RAW, ChatType.FILL, -110)
