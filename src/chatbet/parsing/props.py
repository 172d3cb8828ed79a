"""Prop keyword dictionary.

Each keyword maps to a canonical prop name, the shape the bet must take
(over/under with a line, or yes/no without one) and the contestant type the
prop is normally written against. Matching is word-bounded and tries longer
keywords first so "first team to score" wins over "to score first".
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from chatbet.errors import InvalidContractTypeError, InvalidPropFormatError
from chatbet.types import ContestantType


class PropShape(str, Enum):
    OVER_UNDER = "OU"
    YES_NO = "YN"


@dataclass(frozen=True)
class PropDefinition:
    name: str
    shape: PropShape
    contestant_type: ContestantType


_OU = PropShape.OVER_UNDER
_YN = PropShape.YES_NO
_PLAYER = ContestantType.INDIVIDUAL
_TEAM = ContestantType.TEAM_LEAGUE

_DEFINITIONS: tuple[tuple[str, PropShape, ContestantType, tuple[str, ...]], ...] = (
    # football
    ("PassingYards", _OU, _PLAYER, ("passing yards", "passingyards", "pass yards", "pass yds", "passing yds")),
    ("RushingYards", _OU, _PLAYER, ("rushing yards", "rushingyards", "rush yards", "rush yds", "rushing yds")),
    ("ReceivingYards", _OU, _PLAYER, ("receiving yards", "receivingyards", "rec yards", "rec yds", "receiving yds")),
    ("PassingTDs", _OU, _PLAYER, ("passing touchdowns", "passing tds", "pass tds", "passing td")),
    ("RushingAttempts", _OU, _PLAYER, ("rushing attempts", "rush attempts", "carries")),
    ("PassAttempts", _OU, _PLAYER, ("passing attempts", "pass attempts")),
    ("Completions", _OU, _PLAYER, ("completions", "pass completions")),
    ("Receptions", _OU, _PLAYER, ("receptions", "recs", "catches")),
    ("InterceptionsThrown", _OU, _PLAYER, ("interceptions thrown", "ints thrown")),
    ("LongestReception", _OU, _PLAYER, ("longest reception", "longest rec")),
    ("LongestRush", _OU, _PLAYER, ("longest rush",)),
    ("Tackles", _OU, _PLAYER, ("tackles", "tackles and assists")),
    ("Sacks", _OU, _PLAYER, ("sacks",)),
    ("FieldGoalsMade", _OU, _PLAYER, ("field goals made", "fgs made")),
    ("KickingPoints", _OU, _PLAYER, ("kicking points",)),
    ("TeamTouchdowns", _OU, _TEAM, ("team touchdowns", "team tds")),
    # basketball
    ("Points", _OU, _PLAYER, ("points", "pts")),
    ("Rebounds", _OU, _PLAYER, ("rebounds", "rebs", "boards")),
    ("Assists", _OU, _PLAYER, ("assists", "asts")),
    ("Threes", _OU, _PLAYER, ("threes", "threes made", "three pointers", "3pt made", "3pm")),
    ("Steals", _OU, _PLAYER, ("steals", "stls")),
    ("Blocks", _OU, _PLAYER, ("blocks", "blks")),
    ("Turnovers", _OU, _PLAYER, ("turnovers",)),
    ("PRA", _OU, _PLAYER, ("pra", "points rebounds assists", "pts rebs asts")),
    ("PointsRebounds", _OU, _PLAYER, ("points rebounds", "pts rebs")),
    ("PointsAssists", _OU, _PLAYER, ("points assists", "pts asts")),
    ("DoubleDouble", _YN, _PLAYER, ("double double", "double-double", "dbl dbl")),
    ("TripleDouble", _YN, _PLAYER, ("triple double", "triple-double", "trpl dbl")),
    # baseball
    ("RBI", _OU, _PLAYER, ("rbi", "rbis")),
    ("Ks", _OU, _PLAYER, ("ks", "strikeouts", "pitcher strikeouts")),
    ("Hits", _OU, _PLAYER, ("hits",)),
    ("HitsAllowed", _OU, _PLAYER, ("hits allowed",)),
    ("TotalBases", _OU, _PLAYER, ("total bases",)),
    ("HomeRuns", _OU, _PLAYER, ("home runs", "homers", "hrs")),
    ("EarnedRuns", _OU, _PLAYER, ("earned runs", "earned runs allowed")),
    ("OutsRecorded", _OU, _PLAYER, ("outs recorded", "pitching outs")),
    ("Walks", _OU, _PLAYER, ("walks", "walks allowed")),
    ("StolenBases", _OU, _PLAYER, ("stolen bases",)),
    ("RunsScored", _OU, _PLAYER, ("runs scored",)),
    ("HitsRunsRbis", _OU, _PLAYER, ("hits runs rbis", "h+r+rbi")),
    ("ToHitHomeRun", _YN, _PLAYER, ("to hit a home run", "to hit a hr", "to homer")),
    ("YRFI", _YN, _TEAM, ("yrfi", "score in first inning", "score in 1st inning")),
    ("NRFI", _YN, _TEAM, ("nrfi", "no run first inning")),
    # hockey / soccer
    ("ShotsOnGoal", _OU, _PLAYER, ("shots on goal", "sog")),
    ("Saves", _OU, _PLAYER, ("saves", "goalie saves")),
    ("PlayerGoals", _OU, _PLAYER, ("goals scored", "player goals")),
    ("ShotsOnTarget", _OU, _PLAYER, ("shots on target",)),
    ("Corners", _OU, _TEAM, ("corners", "corner kicks")),
    ("Cards", _OU, _TEAM, ("total cards", "bookings", "booking points")),
    ("AnytimeGoal", _YN, _PLAYER, ("anytime goal", "anytime goalscorer", "anytime scorer")),
    ("FirstGoalScorer", _YN, _PLAYER, ("first goal scorer", "first goalscorer", "1st goal scorer")),
    ("BothTeamsToScore", _YN, _TEAM, ("both teams to score", "btts")),
    ("CleanSheet", _YN, _TEAM, ("clean sheet", "shutout", "to keep a clean sheet")),
    ("WinToNil", _YN, _TEAM, ("win to nil",)),
    # touchdown scorers
    ("AnytimeTD", _YN, _PLAYER, ("anytime td", "anytime touchdown", "anytime td scorer", "atd")),
    ("FirstTDScorer", _YN, _PLAYER, ("first td scorer", "first touchdown scorer", "1st td scorer", "ftd")),
    # tennis / golf / combat
    ("Aces", _OU, _PLAYER, ("aces served", "total aces")),
    ("DoubleFaults", _OU, _PLAYER, ("double faults",)),
    ("GamesWon", _OU, _PLAYER, ("games won",)),
    ("Birdies", _OU, _PLAYER, ("birdies",)),
    ("MakeCut", _YN, _PLAYER, ("make the cut", "make cut", "to make the cut")),
    ("TopFive", _YN, _PLAYER, ("top 5 finish", "top five finish", "top 5")),
    ("TopTen", _YN, _PLAYER, ("top 10 finish", "top ten finish", "top 10")),
    ("SignificantStrikes", _OU, _PLAYER, ("significant strikes", "sig strikes")),
    ("Takedowns", _OU, _PLAYER, ("takedowns",)),
    ("WinByKO", _YN, _PLAYER, ("by ko", "by tko", "by knockout", "wins by ko")),
    ("WinBySubmission", _YN, _PLAYER, ("by submission", "by sub")),
    ("WinByDecision", _YN, _PLAYER, ("by decision", "by dec")),
    ("GoesTheDistance", _YN, _TEAM, ("goes the distance", "gtd")),
    # match level
    ("FirstToScore", _YN, _TEAM, ("first team to score", "1st team to score", "first to score", "to score first")),
    ("LastToScore", _YN, _TEAM, ("last team to score", "last to score", "to score last")),
    ("Overtime", _YN, _TEAM, ("goes to overtime", "overtime", "goes to ot")),
    ("SafetyScored", _YN, _TEAM, ("safety scored", "a safety")),
    ("Race", _YN, _TEAM, ("race to 10", "race to 15", "race to 20")),
)


def _build() -> dict[str, PropDefinition]:
    table: dict[str, PropDefinition] = {}
    for name, shape, contestant_type, keywords in _DEFINITIONS:
        definition = PropDefinition(name=name, shape=shape, contestant_type=contestant_type)
        for keyword in keywords:
            table[keyword] = definition
    return table


PROP_KEYWORDS: Mapping[str, PropDefinition] = MappingProxyType(_build())

_PATTERNS: tuple[tuple[re.Pattern[str], PropDefinition], ...] = tuple(
    (
        re.compile(r"(?<![\w])" + r"\s+".join(map(re.escape, keyword.split())) + r"(?![\w])", re.IGNORECASE),
        definition,
    )
    for keyword, definition in sorted(PROP_KEYWORDS.items(), key=lambda item: len(item[0]), reverse=True)
)

_PROP_LIKE_RE = re.compile(
    r"^[a-zA-Z0-9]+\s+[a-zA-Z\s]+\b(yards|rbi|rebounds|score|strikeouts|prop)\b", re.IGNORECASE
)


@dataclass(frozen=True)
class PropMatch:
    definition: PropDefinition
    start: int
    end: int


def detect_prop(text: str) -> PropMatch | None:
    """Return the longest known prop keyword found in ``text``."""

    for pattern, definition in _PATTERNS:
        match = pattern.search(text)
        if match:
            return PropMatch(definition=definition, start=match.start(), end=match.end())
    return None


def prop_names() -> list[str]:
    return sorted({definition.name for definition in PROP_KEYWORDS.values()})


def looks_like_prop(text: str) -> bool:
    return bool(_PROP_LIKE_RE.match(text))


def validate_prop_format(text: str, has_line: bool, raw_input: str) -> PropDefinition:
    """Check that a prop carries a line exactly when its shape requires one."""

    found = detect_prop(text)
    if found is None:
        raise InvalidPropFormatError(raw_input, text, prop_names())
    definition = found.definition
    if definition.shape is PropShape.OVER_UNDER and not has_line:
        raise InvalidContractTypeError(
            raw_input, f'{definition.name} props require an over/under line (e.g., "o12.5")'
        )
    if definition.shape is PropShape.YES_NO and has_line:
        raise InvalidContractTypeError(
            raw_input, f"{definition.name} props cannot have a line - they are yes/no bets only"
        )
    return definition
