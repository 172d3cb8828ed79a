"""Decide which contract type a piece of contract text describes."""

from __future__ import annotations

import logging
import re

from chatbet.errors import InvalidContractTypeError, InvalidTeamFormatError
from chatbet.parsing.props import PropShape, detect_prop, looks_like_prop, validate_prop_format
from chatbet.types import ContractType

logger = logging.getLogger(__name__)

SERIES_RE = re.compile(r"\bseries\b", re.IGNORECASE)
TEAM_TOTAL_RE = re.compile(r"(?:^|\s)tt(?=\s|$)", re.IGNORECASE)
OVER_UNDER_RE = re.compile(r"(?:^|\s)((?:over|under|o|u)\s*(\d*\.?\d+))(?=\s|$)", re.IGNORECASE)
SIGNED_NUMBER_RE = re.compile(r"(?:^|\s)([+-](\d*\.?\d+))(?=\s|$)")
# three or more plain lowercase words name no contestant
_FREE_TEXT_RE = re.compile(r"^[a-z]+(?: [a-z]+){2,}$")


def has_over_under(text: str) -> bool:
    return bool(OVER_UNDER_RE.search(text))


def _signed_number_type(value: float) -> ContractType:
    if value == 0:
        return ContractType.HANDICAP_CONTESTANT_ML
    if value <= 50 or not value.is_integer():
        return ContractType.HANDICAP_CONTESTANT_LINE
    if value > 100:
        # a whole number this large is a price the tokenizer could not lift
        return ContractType.HANDICAP_CONTESTANT_ML
    return ContractType.HANDICAP_CONTESTANT_LINE


def classify(text: str, raw_input: str) -> ContractType:
    """Return the contract type for ``text``.

    Checks run in a fixed priority order: series, team total, props,
    signed spread, game total and finally moneyline.
    """

    cleaned = " ".join(text.split())
    if not cleaned:
        raise InvalidContractTypeError(raw_input, text)

    if SERIES_RE.search(cleaned):
        return _logged(cleaned, ContractType.SERIES)

    if TEAM_TOTAL_RE.search(cleaned):
        if cleaned.lower().split()[0] == "tt":
            raise InvalidTeamFormatError(raw_input, "", "Team name cannot be empty")
        return _logged(cleaned, ContractType.TOTAL_POINTS_CONTESTANT)

    has_line = has_over_under(cleaned)
    if detect_prop(cleaned) is not None or looks_like_prop(cleaned):
        definition = validate_prop_format(cleaned, has_line, raw_input)
        kind = ContractType.PROP_OU if definition.shape is PropShape.OVER_UNDER else ContractType.PROP_YN
        return _logged(cleaned, kind)

    signed = SIGNED_NUMBER_RE.search(cleaned)
    if signed:
        return _logged(cleaned, _signed_number_type(float(signed.group(2))))

    if has_line:
        return _logged(cleaned, ContractType.TOTAL_POINTS)

    if "/" in cleaned:
        raise InvalidContractTypeError(raw_input, cleaned)

    if _FREE_TEXT_RE.match(cleaned):
        raise InvalidContractTypeError(raw_input, cleaned)

    return _logged(cleaned, ContractType.HANDICAP_CONTESTANT_ML)


def _logged(text: str, kind: ContractType) -> ContractType:
    logger.debug("Classified %r as %s", text, kind.value)
    return kind
