"""Contract classification and prop dictionary tests."""

from __future__ import annotations

import pytest

from chatbet.errors import InvalidContractTypeError, InvalidTeamFormatError
from chatbet.parsing.classifier import classify
from chatbet.parsing.props import (
    PROP_KEYWORDS,
    PropShape,
    detect_prop,
    looks_like_prop,
    validate_prop_format,
)
from chatbet.types import ContestantType, ContractType

RAW = "raw chat"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Lakers", ContractType.HANDICAP_CONTESTANT_ML),
        ("Lakers ml", ContractType.HANDICAP_CONTESTANT_ML),
        ("KC F7 +0", ContractType.HANDICAP_CONTESTANT_ML),
        ("Lakers -3.5", ContractType.HANDICAP_CONTESTANT_LINE),
        ("Patriots +7", ContractType.HANDICAP_CONTESTANT_LINE),
        ("Lakers/Celtics o210.5", ContractType.TOTAL_POINTS),
        ("Padres/Pirates 1st inning u0.5", ContractType.TOTAL_POINTS),
        ("LAA TT o3.5", ContractType.TOTAL_POINTS_CONTESTANT),
        ("Red Sox series", ContractType.SERIES),
        ("Yankees 4 game series", ContractType.SERIES),
        ("B. Falter ks o5.5", ContractType.PROP_OU),
        ("CIN first team to score", ContractType.PROP_YN),
        ("2h Vanderbilt +2.5", ContractType.HANDICAP_CONTESTANT_LINE),
        ("Colorado Rockies ml", ContractType.HANDICAP_CONTESTANT_ML),
    ],
)
def test_classify(text: str, expected: ContractType) -> None:
    assert classify(text, RAW) is expected


def test_two_teams_without_a_line_is_ambiguous() -> None:
    with pytest.raises(InvalidContractTypeError):
        classify("Lakers/Celtics", RAW)


def test_team_total_needs_a_team() -> None:
    with pytest.raises(InvalidTeamFormatError, match="Team name cannot be empty"):
        classify("TT o3.5", RAW)


def test_empty_contract() -> None:
    with pytest.raises(InvalidContractTypeError):
        classify("   ", RAW)


@pytest.mark.parametrize("text", ["some random text", "who knows what"])
def test_lowercase_free_text_is_rejected(text: str) -> None:
    with pytest.raises(InvalidContractTypeError, match=f'"{text}"'):
        classify(text, RAW)


def test_prop_heuristic_needs_whole_words() -> None:
    assert not looks_like_prop("2h Vanderbilt +2.5")
    assert not looks_like_prop("Mississippi Scorers ml")
    assert looks_like_prop("Jokic fantasy score o40.5")


def test_longest_prop_keyword_wins() -> None:
    found = detect_prop("Jokic pts rebs asts o45.5")
    assert found is not None
    assert found.definition.name == "PRA"
    found = detect_prop("CIN first team to score")
    assert found is not None
    assert found.definition.name == "FirstToScore"
    assert found.definition.contestant_type is ContestantType.TEAM_LEAGUE


def test_prop_keywords_are_word_bounded() -> None:
    assert detect_prop("Hawks") is None
    assert detect_prop("Spurs") is None


def test_over_under_prop_requires_line() -> None:
    with pytest.raises(InvalidContractTypeError, match="require an over/under line"):
        validate_prop_format("Mahomes passing yards", False, RAW)


def test_yes_no_prop_rejects_line() -> None:
    with pytest.raises(InvalidContractTypeError, match="yes/no bets only"):
        validate_prop_format("Jokic double double o1.5", True, RAW)


def test_every_keyword_is_lowercase() -> None:
    assert all(keyword == keyword.lower() for keyword in PROP_KEYWORDS)
    assert {definition.shape for definition in PROP_KEYWORDS.values()} == set(PropShape)
