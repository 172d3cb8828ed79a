"""nCr notation tests."""

from __future__ import annotations

import pytest

from chatbet.errors import InvalidNcrNotationError
from chatbet.parsing.ncr import NcrSpec, is_strict_ncr, looks_like_ncr, parse_ncr

RAW = "IWRR raw"


def test_parse_exact_size() -> None:
    assert parse_ncr("4c2", RAW) == NcrSpec(total_legs=4, parlay_size=2)


def test_parse_at_most_and_uppercase() -> None:
    assert parse_ncr("5C3-", RAW) == NcrSpec(total_legs=5, parlay_size=3, is_at_most=True)


@pytest.mark.parametrize(
    ("notation", "reason"),
    [
        ("2c1", "Total legs must be at least 3"),
        ("4c1", "Parlay size must be at least 2"),
        ("4c4", "Parlay size must be less than total legs"),
        ("4c2--", "Invalid at-most modifier"),
        ("4c2,3", "Comma-separated parlay sizes not supported"),
        ("4.5c2", "Total legs must be an integer"),
        ("xc2", "Total legs must be a number"),
        ("4cx", "Parlay size must be a number"),
        ("4x2", "Invalid nCr notation format"),
    ],
)
def test_invalid_notation(notation: str, reason: str) -> None:
    with pytest.raises(InvalidNcrNotationError) as excinfo:
        parse_ncr(notation, RAW)
    assert excinfo.value.reason == reason
    assert RAW in excinfo.value.message


def test_candidate_detection_skips_rotation_numbers() -> None:
    assert looks_like_ncr("4c2")
    assert looks_like_ncr("4.5c2")
    assert not looks_like_ncr("701")
    assert not looks_like_ncr("Lakers")


def test_strict_shape() -> None:
    assert is_strict_ncr("4c2-")
    assert not is_strict_ncr("4.5c2")
