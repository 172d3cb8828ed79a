"""Straight bet parsing tests."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from chatbet import ParseOptions, parse_chat
from chatbet.errors import (
    InvalidChatFormatError,
    InvalidContractTypeError,
    InvalidDateError,
    InvalidGameNumberError,
    InvalidKeywordSyntaxError,
    InvalidKeywordValueError,
    InvalidLineValueError,
    InvalidPeriodFormatError,
    InvalidPriceFormatError,
    InvalidRotationNumberError,
    InvalidTeamFormatError,
    MissingSizeForFillError,
    UnknownKeywordError,
)
from chatbet.types import (
    ChatType,
    ContestantType,
    ContractType,
    League,
    PeriodTypeCode,
    Sport,
    StraightResult,
)

REFERENCE = datetime(2025, 6, 1, 12, tzinfo=timezone.utc)


def _parse(text: str) -> StraightResult:
    result = parse_chat(text, ParseOptions(reference_date=REFERENCE))
    assert isinstance(result, StraightResult)
    return result


def test_first_inning_under_fill() -> None:
    result = _parse("YG Padres/Pirates 1st inning u0.5 @ +100 = 0.094")
    assert result.is_fill
    assert result.contract_type is ContractType.TOTAL_POINTS
    contract = result.contract
    assert contract.match.team1 == "Padres"
    assert contract.match.team2 == "Pirates"
    assert contract.line == 0.5
    assert not contract.is_over
    assert contract.period.period_type_code is PeriodTypeCode.INNING
    assert contract.period.period_number == 1
    assert contract.sport is Sport.BASEBALL
    assert result.bet.price == 100
    assert result.bet.size == pytest.approx(94)
    assert result.bet.to_win == pytest.approx(94)
    assert result.bet.execution_dtm == REFERENCE


def test_league_and_date_before_contract() -> None:
    result = _parse("YG NBA 11/28/2025 76ers u226.5 @ -115 = 1k")
    contract = result.contract
    assert contract.league is League.NBA
    assert contract.sport is Sport.BASKETBALL
    assert contract.match.team1 == "76ers"
    assert contract.match.date == datetime(2025, 11, 28, tzinfo=timezone.utc)
    assert result.bet.risk == 1000
    assert result.bet.to_win == pytest.approx(869.57)


def test_rotation_number_default_price_and_k_size() -> None:
    result = _parse("YG 872 Athletics @ 4k")
    assert result.contract_type is ContractType.HANDICAP_CONTESTANT_ML
    assert result.rotation_number == 872
    assert result.contract.sport is Sport.BASEBALL
    assert result.bet.price == -110
    assert result.bet.size == 4000
    assert result.bet.to_win == pytest.approx(3636.36)


def test_embedded_price_without_at() -> None:
    result = _parse("IW 871 Rangers +1.5 -125 = 3.0")
    assert result.is_order
    assert result.contract_type is ContractType.HANDICAP_CONTESTANT_LINE
    assert result.contract.line == 1.5
    assert result.bet.price == -125
    assert result.bet.size == 3.0
    assert result.bet.to_win == pytest.approx(2.4)
    assert result.bet.execution_dtm is None


def test_pick_em_is_moneyline_with_period() -> None:
    result = _parse("YG KC F7 +0 @ +125 = 2.0")
    assert result.contract_type is ContractType.HANDICAP_CONTESTANT_ML
    assert result.contract.contestant == "KC"
    assert result.contract.period.period_type_code is PeriodTypeCode.HALF
    assert result.contract.period.period_number == 17
    assert result.bet.size == 2000


@pytest.mark.parametrize(
    ("text", "line", "period_number"),
    [
        ("YG 2h Vanderbilt +2.5 @ +100 = 1k", 2.5, 2),
        ("YG 1H Vanderbilt -3 @ -110 = 1k", -3, 1),
    ],
)
def test_team_name_containing_prop_word_is_a_spread(text: str, line: float, period_number: int) -> None:
    result = _parse(text)
    assert result.contract_type is ContractType.HANDICAP_CONTESTANT_LINE
    assert result.contract.contestant == "Vanderbilt"
    assert result.contract.line == line
    assert result.contract.period.period_type_code is PeriodTypeCode.HALF
    assert result.contract.period.period_number == period_number
    assert result.bet.size == 1000


def test_game_number_in_contract() -> None:
    result = _parse("YG COL/ARI #2 1st inning u0.5 @ +120 = $200")
    assert result.contract.match.day_sequence == 2
    assert result.contract.match.team1 == "COL"
    assert result.bet.to_win == pytest.approx(240)


def test_order_without_price_or_size() -> None:
    result = _parse("IW 507 Thunder/Nuggets o213.5")
    assert result.contract.sport is Sport.BASKETBALL
    assert result.contract.is_over
    assert result.bet.price == -110
    assert result.bet.size is None
    assert result.bet.risk is None


def test_bare_team_moneyline() -> None:
    result = _parse("IW 457 Dolphins")
    assert result.contract_type is ContractType.HANDICAP_CONTESTANT_ML
    assert result.contract.sport is Sport.FOOTBALL


def test_team_total() -> None:
    result = _parse("IW LAA TT o3.5 runs @ -110")
    assert result.contract_type is ContractType.TOTAL_POINTS_CONTESTANT
    assert result.contract.contestant == "LAA"
    assert result.contract.sport is Sport.BASEBALL


def test_yes_no_prop() -> None:
    result = _parse("YG CIN first team to score @ -109.8 = $265")
    assert result.contract_type is ContractType.PROP_YN
    assert result.contract.prop == "FirstToScore"
    assert result.contract.contestant == "CIN"
    assert result.contract.contestant_type is ContestantType.TEAM_LEAGUE
    assert result.contract.is_yes
    assert result.bet.price == -109.8
    assert result.bet.to_win == pytest.approx(241.35)


def test_player_over_under_prop() -> None:
    result = _parse("YG B. Falter ks o5.5 @ -120 = 1k")
    contract = result.contract
    assert result.contract_type is ContractType.PROP_OU
    assert contract.prop == "Ks"
    assert contract.contestant == "B. Falter"
    assert contract.contestant_type is ContestantType.INDIVIDUAL
    assert contract.match.player == "B. Falter"
    assert contract.line == 5.5
    assert result.bet.to_win == pytest.approx(833.33)


def test_series_out_of() -> None:
    result = _parse("YG Red Sox series out of 4 -120 = 2.0")
    assert result.contract_type is ContractType.SERIES
    assert result.contract.contestant == "Red Sox"
    assert result.contract.series_length == 4
    assert result.bet.price == -120


def test_series_game_count_and_default_length() -> None:
    result = _parse("IW 854 Yankees 4 game series +110 = 1.0")
    assert result.contract.series_length == 4
    assert result.contract.sport is Sport.BASEBALL
    assert result.bet.to_win == pytest.approx(1.1)
    assert _parse("IW Yankees series").contract.series_length == 3


def test_attached_price_after_total() -> None:
    result = _parse("IW Lakers/Celtics u210.5-125")
    assert result.contract.line == 210.5
    assert result.bet.price == -125


def test_extended_size_forms() -> None:
    result = _parse("YG Lakers @ -110 = 500 tw 450")
    assert result.bet.size is None
    assert (result.bet.risk, result.bet.to_win) == (500, 450)


def test_freebet_modifier() -> None:
    assert _parse("IW Lakers freebet:true @ -110 = 2.0").bet.is_free_bet
    assert not _parse("IW Lakers @ -110 = 2.0").bet.is_free_bet


def test_league_keyword_sets_sport() -> None:
    result = _parse("IW Lakers league:NBA @ -110")
    assert result.contract.league is League.NBA
    assert result.contract.sport is Sport.BASKETBALL


def test_serialized_field_names() -> None:
    dumped = _parse("YG Lakers -3.5 @ -110 = 1k").model_dump(by_alias=True)
    assert dumped["chatType"] == ChatType.FILL
    assert dumped["betType"] == "straight"
    assert dumped["contract"]["Contestant"] == "Lakers"
    assert dumped["bet"]["ToWin"] == pytest.approx(909.09)


@pytest.mark.parametrize(
    ("text", "error"),
    [
        ("IW LAA TT o3.3 @ -110", InvalidLineValueError),
        ("YG 99999 Athletics @ 4k", InvalidRotationNumberError),
        ("YG Lakers @ -110", MissingSizeForFillError),
        ("IW Lakers @ -110 @ +100", InvalidChatFormatError),
        ("IW Lakers @ -110 tonight", InvalidChatFormatError),
        ("IW Lakers @ -110 = 1 = 2", InvalidChatFormatError),
        ("YG 070125 Yankees @ -110 = 1k", InvalidDateError),
        ("IW Lakers @ abc", InvalidPriceFormatError),
        ("IW Lakers date: 7/1 @ -110", InvalidKeywordSyntaxError),
        ("IW Lakers foo:bar @ -110", UnknownKeywordError),
        ("IW Lakers freebet:yes @ -110", InvalidKeywordValueError),
        ("IW MIN/MIN o8.5", InvalidTeamFormatError),
        ("IW TT o3.5 @ -110", InvalidTeamFormatError),
        ("IW Yankees 99th inning u0.5", InvalidPeriodFormatError),
        ("IW 7/1 Lakers date:7/2 @ -110", InvalidChatFormatError),
        ("IW NBA Lakers league:NFL @ -110", InvalidChatFormatError),
        ("YG Lakers @ +0 = 1k", InvalidPriceFormatError),
        ("IW Lakers @ -0", InvalidPriceFormatError),
        ("IW Lakers @ +75", InvalidPriceFormatError),
        ("YG abc Athletics @ 4k", InvalidRotationNumberError),
        ("YG SEA Gx TT u4.5 @ -110 = 1.0", InvalidGameNumberError),
        ("IW some random text @ -110", InvalidContractTypeError),
    ],
)
def test_invalid_straight_bets(text: str, error: type[Exception]) -> None:
    with pytest.raises(error) as excinfo:
        _parse(text)
    assert text in str(excinfo.value)
