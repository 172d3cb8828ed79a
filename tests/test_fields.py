"""Field extractor tests."""

from __future__ import annotations

import pytest

from chatbet.config import Settings
from chatbet.errors import (
    InvalidContractTypeError,
    InvalidGameNumberError,
    InvalidLineValueError,
    InvalidPeriodFormatError,
    InvalidRotationNumberError,
    InvalidTeamFormatError,
)
from chatbet.parsing import fields
from chatbet.types import League, Period, PeriodTypeCode, Sport

RAW = "raw chat"
SETTINGS = Settings()


@pytest.mark.parametrize(
    ("text", "code", "number"),
    [
        ("F5", PeriodTypeCode.HALF, 1),
        ("1h", PeriodTypeCode.HALF, 1),
        ("2nd half", PeriodTypeCode.HALF, 2),
        ("F7", PeriodTypeCode.HALF, 17),
        ("f3", PeriodTypeCode.HALF, 13),
        ("Q3", PeriodTypeCode.QUARTER, 3),
        ("4th quarter", PeriodTypeCode.QUARTER, 4),
        ("1st inning", PeriodTypeCode.INNING, 1),
        ("i7", PeriodTypeCode.INNING, 7),
        ("p2", PeriodTypeCode.PERIOD, 2),
        ("fg", PeriodTypeCode.MATCH, 0),
    ],
)
def test_parse_period(text: str, code: PeriodTypeCode, number: int) -> None:
    assert fields.parse_period(text, RAW, SETTINGS) == Period(period_type_code=code, period_number=number)


@pytest.mark.parametrize("text", ["16th inning", "q5", "p9", "3rd half"])
def test_parse_period_out_of_range(text: str) -> None:
    with pytest.raises(InvalidPeriodFormatError):
        fields.parse_period(text, RAW, SETTINGS)


def test_max_inning_follows_settings() -> None:
    settings = Settings(max_inning=9)
    with pytest.raises(InvalidPeriodFormatError):
        fields.parse_period("10th inning", RAW, settings)


def test_extract_period_removes_marker() -> None:
    period, rest = fields.extract_period("Padres/Pirates 1st inning", RAW, SETTINGS)
    assert period.period_type_code is PeriodTypeCode.INNING
    assert rest == "Padres/Pirates"
    period, rest = fields.extract_period("Lakers", RAW, SETTINGS)
    assert period.period_type_code is PeriodTypeCode.MATCH
    assert rest == "Lakers"


@pytest.mark.parametrize(("text", "expected"), [("G2", 2), ("GM1", 1), ("#2", 2), ("game 3", 3)])
def test_parse_game_number(text: str, expected: int) -> None:
    assert fields.parse_game_number(text, RAW, SETTINGS) == expected


@pytest.mark.parametrize("text", ["G11", "G0", "gx"])
def test_invalid_game_number(text: str) -> None:
    with pytest.raises(InvalidGameNumberError):
        fields.parse_game_number(text, RAW, SETTINGS)


def test_extract_game_number() -> None:
    number, rest = fields.extract_game_number("COL/ARI #2", RAW, SETTINGS)
    assert number == 2
    assert rest == "COL/ARI"


@pytest.mark.parametrize("text", ["SEA Gx", "SEA Gmx TT", "#a Lakers"])
def test_extract_malformed_game_number(text: str) -> None:
    with pytest.raises(InvalidGameNumberError, match="Invalid game number format"):
        fields.extract_game_number(text, RAW, SETTINGS)


@pytest.mark.parametrize("text", ["Giants", "GB Packers", "Gators", "G. Antetokounmpo"])
def test_extract_game_number_leaves_names_alone(text: str) -> None:
    assert fields.extract_game_number(text, RAW, SETTINGS) == (None, text)


def test_rotation_number_bounds() -> None:
    assert fields.parse_rotation_number("872", RAW, SETTINGS) == 872
    for text in ("0", "99999", "12a"):
        with pytest.raises(InvalidRotationNumberError):
            fields.parse_rotation_number(text, RAW, SETTINGS)


def test_numeric_team_names() -> None:
    assert fields.is_numeric_team_name("49ers")
    assert fields.is_numeric_team_name("76ers u226.5")
    assert not fields.is_numeric_team_name("872 Athletics")


def test_lines_must_be_half_points() -> None:
    assert fields.parse_line("-3.5", RAW) == -3.5
    assert fields.parse_line("7", RAW) == 7
    with pytest.raises(InvalidLineValueError):
        fields.parse_line("3.3", RAW)


@pytest.mark.parametrize(
    ("text", "is_over", "line"),
    [("o4.5", True, 4.5), ("u.5", False, 0.5), ("Over 47", True, 47), ("under 210", False, 210)],
)
def test_parse_over_under(text: str, is_over: bool, line: float) -> None:
    assert fields.parse_over_under(text, RAW) == fields.OverUnder(is_over=is_over, line=line)


def test_parse_teams() -> None:
    assert fields.parse_teams("Padres/Pirates", RAW, SETTINGS) == fields.Teams("Padres", "Pirates")
    assert fields.parse_teams("Lakers", RAW, SETTINGS) == fields.Teams("Lakers")


@pytest.mark.parametrize("text", ["MIN/MIN", "A/B/C", "", "Lakers!"])
def test_invalid_teams(text: str) -> None:
    with pytest.raises(InvalidTeamFormatError):
        fields.parse_teams(text, RAW, SETTINGS)


def test_team_name_length_limit() -> None:
    with pytest.raises(InvalidTeamFormatError):
        fields.parse_team("x" * 51, RAW, SETTINGS)


def test_parse_contestant_affiliation_and_initial() -> None:
    assert fields.parse_contestant("Ohtani (LAA)", RAW, SETTINGS) == fields.Contestant(
        name="Ohtani", player_team="LAA", is_individual=True
    )
    assert fields.parse_contestant("B. Falter", RAW, SETTINGS).is_individual
    assert not fields.parse_contestant("Red Sox", RAW, SETTINGS).is_individual


@pytest.mark.parametrize(
    ("rotation", "sport"),
    [(457, Sport.FOOTBALL), (507, Sport.BASKETBALL), (872, Sport.BASEBALL), (9901, Sport.BASEBALL), (950, None)],
)
def test_sport_from_rotation_band(rotation: int, sport: Sport | None) -> None:
    assert fields.infer_sport_and_league(RAW, rotation) == (sport, None)


def test_league_wins_over_rotation() -> None:
    assert fields.infer_sport_and_league(RAW, 507, League.NFL) == (Sport.FOOTBALL, League.NFL)
    assert fields.infer_sport_and_league(RAW, None, League.FCS) == (Sport.FOOTBALL, League.CFB)


def test_conflicting_league_and_sport() -> None:
    with pytest.raises(InvalidContractTypeError):
        fields.infer_sport_and_league(RAW, None, League.NFL, Sport.BASKETBALL)
