"""Round robin nCr sizing notation (``4c2``, ``5c3-``)."""

from __future__ import annotations

import re
from dataclasses import dataclass

from chatbet.errors import InvalidNcrNotationError

_COMMA_AFTER_C_RE = re.compile(r"[cC].*,")
_SHAPE_RE = re.compile(r"^(-?[\d.]+|[A-Za-z]+)[cC](-?[\d.]+|[A-Za-z]+|[^-\s]+)(-+)?$")
_NUMBER_RE = re.compile(r"^-?\d+(?:\.\d+)?$")
_CANDIDATE_RE = re.compile(r"^-?[\d.]+[^\s/:]*$")
_STRICT_RE = re.compile(r"^\d+[cC]\d+-?$")


@dataclass(frozen=True)
class NcrSpec:
    total_legs: int
    parlay_size: int
    is_at_most: bool = False


def looks_like_ncr(token: str) -> bool:
    """Return True for tokens shaped like sizing notation rather than a leg.

    Bare integers are rotation numbers and never count.
    """

    return bool(_CANDIDATE_RE.match(token)) and not token.isdigit()


def is_strict_ncr(token: str) -> bool:
    return bool(_STRICT_RE.match(token))


def parse_ncr(notation: str, raw_input: str) -> NcrSpec:
    """Parse ``NcR`` with an optional trailing ``-`` meaning "at most R"."""

    text = notation.strip()
    if _COMMA_AFTER_C_RE.search(text):
        raise InvalidNcrNotationError(raw_input, "Comma-separated parlay sizes not supported")

    match = _SHAPE_RE.match(text)
    if not match:
        raise InvalidNcrNotationError(raw_input, "Invalid nCr notation format")

    total_text, size_text, minus = match.group(1), match.group(2), match.group(3) or ""
    if len(minus) > 1:
        raise InvalidNcrNotationError(raw_input, "Invalid at-most modifier")

    operands = (("Total legs", total_text), ("Parlay size", size_text))
    for label, value in operands:
        if not _NUMBER_RE.match(value):
            raise InvalidNcrNotationError(raw_input, f"{label} must be a number")
    for label, value in operands:
        if "." in value:
            raise InvalidNcrNotationError(raw_input, f"{label} must be an integer")
    total_legs, parlay_size = int(total_text), int(size_text)
    for label, number in (("Total legs", total_legs), ("Parlay size", parlay_size)):
        if number < 0:
            raise InvalidNcrNotationError(raw_input, f"{label} must be positive")

    if total_legs < 3:
        raise InvalidNcrNotationError(raw_input, "Total legs must be at least 3")
    if parlay_size < 2:
        raise InvalidNcrNotationError(raw_input, "Parlay size must be at least 2")
    if parlay_size >= total_legs:
        raise InvalidNcrNotationError(raw_input, "Parlay size must be less than total legs")

    return NcrSpec(total_legs=total_legs, parlay_size=parlay_size, is_at_most=minus == "-")
