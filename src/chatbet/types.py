"""Pydantic schemas for parsed chat bets."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel, to_pascal


class Sport(str, Enum):
    BASEBALL = "Baseball"
    BASKETBALL = "Basketball"
    BOXING = "Boxing"
    FOOTBALL = "Football"
    GOLF = "Golf"
    HOCKEY = "Hockey"
    MMA = "MMA"
    MOTOR = "Motor"
    POLITICS = "Politics"
    SOCCER = "Soccer"
    TENNIS = "Tennis"


class League(str, Enum):
    MLB = "MLB"
    NBA = "NBA"
    WNBA = "WNBA"
    CBK = "CBK"
    CBB = "CBB"
    NFL = "NFL"
    CFL = "CFL"
    CFB = "CFB"
    UFL = "UFL"
    FCS = "FCS"
    LPGA = "LPGA"
    PGA = "PGA"
    NHL = "NHL"
    UFC = "UFC"
    WTA = "WTA"
    ATP = "ATP"


LEAGUE_SPORT: dict[League, Sport] = {
    League.MLB: Sport.BASEBALL,
    League.NBA: Sport.BASKETBALL,
    League.WNBA: Sport.BASKETBALL,
    League.CBK: Sport.BASKETBALL,
    League.CBB: Sport.BASKETBALL,
    League.NFL: Sport.FOOTBALL,
    League.CFL: Sport.FOOTBALL,
    League.CFB: Sport.FOOTBALL,
    League.UFL: Sport.FOOTBALL,
    League.FCS: Sport.FOOTBALL,
    League.LPGA: Sport.GOLF,
    League.PGA: Sport.GOLF,
    League.NHL: Sport.HOCKEY,
    League.UFC: Sport.MMA,
    League.WTA: Sport.TENNIS,
    League.ATP: Sport.TENNIS,
}


class PeriodTypeCode(str, Enum):
    MATCH = "M"
    HALF = "H"
    QUARTER = "Q"
    INNING = "I"
    PERIOD = "P"


class ContractType(str, Enum):
    TOTAL_POINTS = "TotalPoints"
    TOTAL_POINTS_CONTESTANT = "TotalPointsContestant"
    HANDICAP_CONTESTANT_ML = "HandicapContestantML"
    HANDICAP_CONTESTANT_LINE = "HandicapContestantLine"
    PROP_OU = "PropOU"
    PROP_YN = "PropYN"
    SERIES = "Series"
    WRITEIN = "Writein"


class ContestantType(str, Enum):
    INDIVIDUAL = "Individual"
    TEAM_LEAGUE = "TeamLeague"


class ChatType(str, Enum):
    ORDER = "order"
    FILL = "fill"


class BetType(str, Enum):
    STRAIGHT = "straight"
    PARLAY = "parlay"
    ROUND_ROBIN = "roundRobin"


class RiskType(str, Enum):
    PER_SELECTION = "perSelection"
    TOTAL = "total"


class Record(BaseModel):
    """Immutable record serialized with PascalCase field names."""

    model_config = ConfigDict(frozen=True, alias_generator=to_pascal, populate_by_name=True)


class Period(Record):
    period_type_code: PeriodTypeCode = PeriodTypeCode.MATCH
    period_number: int = 0


FULL_GAME = Period()


class Match(Record):
    team1: str | None = None
    team2: str | None = None
    player: str | None = None
    player_team: str | None = None
    date: datetime | None = None
    day_sequence: int | None = None


class Bet(Record):
    price: float | None = None
    size: float | None = None
    risk: float | None = None
    to_win: float | None = None
    execution_dtm: datetime | None = None
    is_free_bet: bool = False


class MatchContract(Record):
    sport: Sport | None = None
    league: League | None = None
    match: Match
    rotation_number: int | None = None


class PeriodContract(MatchContract):
    period: Period = FULL_GAME


class TotalPoints(PeriodContract):
    kind: Literal[ContractType.TOTAL_POINTS] = ContractType.TOTAL_POINTS
    line: float
    is_over: bool


class TotalPointsContestant(PeriodContract):
    kind: Literal[ContractType.TOTAL_POINTS_CONTESTANT] = ContractType.TOTAL_POINTS_CONTESTANT
    contestant: str
    line: float
    is_over: bool


class HandicapContestantML(PeriodContract):
    kind: Literal[ContractType.HANDICAP_CONTESTANT_ML] = ContractType.HANDICAP_CONTESTANT_ML
    contestant: str
    ties_lose: bool = False


class HandicapContestantLine(PeriodContract):
    kind: Literal[ContractType.HANDICAP_CONTESTANT_LINE] = ContractType.HANDICAP_CONTESTANT_LINE
    contestant: str
    line: float


class PropOU(PeriodContract):
    kind: Literal[ContractType.PROP_OU] = ContractType.PROP_OU
    prop: str
    contestant: str
    contestant_type: ContestantType | None = None
    line: float
    is_over: bool


class PropYN(PeriodContract):
    kind: Literal[ContractType.PROP_YN] = ContractType.PROP_YN
    prop: str
    contestant: str
    contestant_type: ContestantType | None = None
    is_yes: bool = True


class Series(MatchContract):
    kind: Literal[ContractType.SERIES] = ContractType.SERIES
    contestant: str
    series_length: int


class Writein(Record):
    kind: Literal[ContractType.WRITEIN] = ContractType.WRITEIN
    event_date: datetime
    description: str
    sport: Sport | None = None
    league: League | None = None


Contract = Annotated[
    Union[
        TotalPoints,
        TotalPointsContestant,
        HandicapContestantML,
        HandicapContestantLine,
        PropOU,
        PropYN,
        Series,
        Writein,
    ],
    Field(discriminator="kind"),
]


class Result(BaseModel):
    """Immutable parse result serialized with camelCase field names."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    chat_type: ChatType
    bet: Bet

    @property
    def is_order(self) -> bool:
        return self.chat_type is ChatType.ORDER

    @property
    def is_fill(self) -> bool:
        return self.chat_type is ChatType.FILL


class StraightResult(Result):
    bet_type: Literal[BetType.STRAIGHT] = BetType.STRAIGHT
    contract_type: ContractType
    contract: Contract
    rotation_number: int | None = None


class ParlayResult(Result):
    bet_type: Literal[BetType.PARLAY] = BetType.PARLAY
    legs: Tuple[StraightResult, ...]
    use_fair: bool = True
    pushes_lose: bool = False


class RoundRobinResult(Result):
    bet_type: Literal[BetType.ROUND_ROBIN] = BetType.ROUND_ROBIN
    legs: Tuple[StraightResult, ...]
    use_fair: bool = True
    pushes_lose: bool = False
    total_legs: int
    parlay_size: int
    is_at_most: bool = False
    risk_type: RiskType = RiskType.PER_SELECTION
    parlay_count: int
    risk_per_parlay: float | None = None


ParseResult = Union[StraightResult, ParlayResult, RoundRobinResult]
