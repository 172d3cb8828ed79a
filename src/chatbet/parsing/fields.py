"""Field extractors: periods, rotation and game numbers, teams, lines, sport and league."""

from __future__ import annotations

import re
from dataclasses import dataclass

from chatbet.config import Settings
from chatbet.errors import (
    InvalidContractTypeError,
    InvalidGameNumberError,
    InvalidLineValueError,
    InvalidPeriodFormatError,
    InvalidRotationNumberError,
    InvalidTeamFormatError,
)
from chatbet.types import FULL_GAME, LEAGUE_SPORT, League, Period, PeriodTypeCode, Sport

# Team names that start with digits. Consulted before any number handling so
# "49ers" is never read as a rotation number, line or game number.
NUMERIC_TEAM_NAMES: frozenset[str] = frozenset(
    {"49ers", "76ers", "1860 munich", "04 leverkusen"}
)

_ORDINAL = r"(?:st|nd|rd|th)?"

_FIXED_PERIODS: dict[str, Period] = {
    "fg": FULL_GAME,
    "full game": FULL_GAME,
    "f3": Period(period_type_code=PeriodTypeCode.HALF, period_number=13),
    "f7": Period(period_type_code=PeriodTypeCode.HALF, period_number=17),
}
for _alias in (
    "f5", "h1", "1h", "first half", "1st half", "first h", "1st h",
    "first five", "1st five", "first 5", "1st 5",
):
    _FIXED_PERIODS[_alias] = Period(period_type_code=PeriodTypeCode.HALF, period_number=1)
for _alias in ("h2", "2h", "second half", "2nd half", "second h", "2nd h"):
    _FIXED_PERIODS[_alias] = Period(period_type_code=PeriodTypeCode.HALF, period_number=2)
_FIXED_PERIODS["first inning"] = Period(period_type_code=PeriodTypeCode.INNING, period_number=1)

_QUARTER_RE = re.compile(rf"^(?:(\d+){_ORDINAL}\s*(?:quarter|q)|q(\d+))$")
_INNING_RE = re.compile(rf"^(?:(\d+){_ORDINAL}\s*(?:inning|i)|i(\d+))$")
_HOCKEY_RE = re.compile(rf"^(?:(\d+){_ORDINAL}\s*(?:period|p)|p(\d+))$")

# Order matters: innings before the generic half tokens so "1st inning" is
# never split into "1st" + "i".
PERIOD_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(rf"\b(\d+{_ORDINAL}\s*(?:inning|i))\b", re.IGNORECASE),
    re.compile(r"\b(f5|f3|f7|h1|1h|h2|2h|q[1-4]|p[1-4]|fg)\b", re.IGNORECASE),
    re.compile(rf"\b(\d+{_ORDINAL}\s*(?:quarter|q))\b", re.IGNORECASE),
    re.compile(rf"\b(\d+{_ORDINAL}\s*(?:period|p))\b", re.IGNORECASE),
    re.compile(r"\b((?:first|1st)\s*(?:half|five|5)|first inning)\b", re.IGNORECASE),
    re.compile(r"\b((?:second|2nd)\s*half)\b", re.IGNORECASE),
    re.compile(r"\b(full game)\b", re.IGNORECASE),
)

_GAME_NUMBER_RE = re.compile(r"^(?:(?:game|gm|g)\s*(\d+)|#\s*(\d+))$", re.IGNORECASE)
GAME_NUMBER_IN_TEXT_RE = re.compile(r"(?:^|\s)((?:game|gm|g)\s*\d+|#\s*\d+)(?=\s|$)", re.IGNORECASE)
# "Gx" is a game marker missing its number; "GB" stays a team code
_MALFORMED_GAME_RE = re.compile(r"(?:^|\s)((?:G|Gm|GM|#)[a-z])(?=\s|$)")

_TEAM_CHARS_RE = re.compile(r"^[a-zA-Z0-9\s&\-.']+$")
_INDIVIDUAL_RE = re.compile(r"^[A-Z]\.\s+[A-Za-z]+")
_AFFILIATION_RE = re.compile(r"^(?P<name>.+?)\s*\((?P<team>[A-Za-z0-9 .&'-]+)\)$")
_OVER_UNDER_RE = re.compile(r"^(over|under|o|u)\s*(\d*\.?\d+)$", re.IGNORECASE)


def parse_period(text: str, raw_input: str, settings: Settings) -> Period:
    """Parse a period token such as ``F5``, ``2h``, ``Q3``, ``1st inning`` or ``p2``."""

    cleaned = " ".join(text.lower().split())
    if not cleaned:
        return FULL_GAME
    if cleaned in _FIXED_PERIODS:
        return _FIXED_PERIODS[cleaned]

    checks = (
        (_QUARTER_RE, PeriodTypeCode.QUARTER, 4),
        (_INNING_RE, PeriodTypeCode.INNING, settings.max_inning),
        (_HOCKEY_RE, PeriodTypeCode.PERIOD, 4),
    )
    for pattern, code, upper in checks:
        match = pattern.match(cleaned)
        if match:
            number = int(match.group(1) or match.group(2))
            if 1 <= number <= upper:
                return Period(period_type_code=code, period_number=number)
            raise InvalidPeriodFormatError(raw_input, text)
    raise InvalidPeriodFormatError(raw_input, text)


def extract_period(text: str, raw_input: str, settings: Settings) -> tuple[Period, str]:
    """Find the first period marker in ``text``; return it and the text without it."""

    for pattern in PERIOD_PATTERNS:
        match = pattern.search(text)
        if match:
            period = parse_period(match.group(1), raw_input, settings)
            remaining = (text[: match.start()] + " " + text[match.end():]).strip()
            return period, " ".join(remaining.split())
    return FULL_GAME, text


def parse_game_number(text: str, raw_input: str, settings: Settings) -> int:
    """Parse ``G2``, ``GM1``, ``game 3`` or ``#2``."""

    match = _GAME_NUMBER_RE.match(text.strip())
    if not match:
        raise InvalidGameNumberError(raw_input, text)
    number = int(match.group(1) or match.group(2))
    if not 1 <= number <= settings.max_game_number:
        raise InvalidGameNumberError(raw_input, text)
    return number


def extract_game_number(text: str, raw_input: str, settings: Settings) -> tuple[int | None, str]:
    match = GAME_NUMBER_IN_TEXT_RE.search(text)
    if not match:
        malformed = _MALFORMED_GAME_RE.search(text)
        if malformed:
            raise InvalidGameNumberError(raw_input, malformed.group(1))
        return None, text
    number = parse_game_number(match.group(1), raw_input, settings)
    remaining = (text[: match.start()] + " " + text[match.end():]).strip()
    return number, " ".join(remaining.split())


def parse_rotation_number(text: str, raw_input: str, settings: Settings) -> int:
    """Parse the leading rotation number of a leg."""

    cleaned = text.strip()
    if not cleaned.isdigit():
        raise InvalidRotationNumberError(raw_input, text)
    value = int(cleaned)
    if not 1 <= value <= settings.max_rotation_number:
        raise InvalidRotationNumberError(raw_input, text)
    return value


def is_numeric_team_name(text: str) -> bool:
    lowered = text.lower()
    return any(lowered == name or lowered.startswith(name + " ") for name in NUMERIC_TEAM_NAMES)


def parse_line(text: str, raw_input: str) -> float:
    """Parse a line value; every line is a multiple of 0.5."""

    try:
        value = float(text)
    except ValueError:
        raise InvalidLineValueError(raw_input, text) from None
    if (value * 2) % 1 != 0:
        raise InvalidLineValueError(raw_input, text)
    return value


@dataclass(frozen=True)
class OverUnder:
    is_over: bool
    line: float


def parse_over_under(text: str, raw_input: str) -> OverUnder:
    """Parse ``o4.5``, ``u.5``, ``Over 47`` or ``Under 47``."""

    match = _OVER_UNDER_RE.match(text.strip())
    if not match:
        raise InvalidLineValueError(raw_input, text)
    return OverUnder(
        is_over=match.group(1).lower().startswith("o"),
        line=parse_line(match.group(2), raw_input),
    )


def parse_team(text: str, raw_input: str, settings: Settings) -> str:
    cleaned = " ".join(text.split())
    if not cleaned:
        raise InvalidTeamFormatError(raw_input, text, "Team name cannot be empty")
    if not _TEAM_CHARS_RE.match(cleaned):
        raise InvalidTeamFormatError(raw_input, text, "Team name contains invalid characters")
    if len(cleaned) > settings.max_team_name_length:
        raise InvalidTeamFormatError(
            raw_input,
            text,
            f"Team name too long (max {settings.max_team_name_length} characters)",
        )
    return cleaned


@dataclass(frozen=True)
class Teams:
    team1: str
    team2: str | None = None


def parse_teams(text: str, raw_input: str, settings: Settings) -> Teams:
    """Parse ``Team1/Team2`` or a single ``Team1``."""

    parts = text.split("/")
    if len(parts) == 1:
        return Teams(team1=parse_team(parts[0], raw_input, settings))
    if len(parts) == 2:
        team1 = parse_team(parts[0], raw_input, settings)
        team2 = parse_team(parts[1], raw_input, settings)
        if team1 == team2:
            raise InvalidTeamFormatError(
                raw_input, text, f'Team1 and Team2 cannot be the same: "{team1}"'
            )
        return Teams(team1=team1, team2=team2)
    raise InvalidTeamFormatError(raw_input, text, 'Too many "/" separators')


@dataclass(frozen=True)
class Contestant:
    name: str
    player_team: str | None = None
    is_individual: bool = False


def parse_contestant(text: str, raw_input: str, settings: Settings) -> Contestant:
    """Split an optional ``(TEAM)`` affiliation and detect individual players."""

    cleaned = " ".join(text.split())
    match = _AFFILIATION_RE.match(cleaned)
    if match:
        name = parse_team(match.group("name"), raw_input, settings)
        team = parse_team(match.group("team"), raw_input, settings)
        return Contestant(name=name, player_team=team, is_individual=True)
    name = parse_team(cleaned, raw_input, settings)
    return Contestant(name=name, is_individual=bool(_INDIVIDUAL_RE.match(name)))


def infer_sport_and_league(
    raw_input: str,
    rotation_number: int | None = None,
    league: League | None = None,
    sport: Sport | None = None,
) -> tuple[Sport | None, League | None]:
    """Resolve sport and league from explicit tokens, else from rotation bands."""

    if league is not None and sport is not None and LEAGUE_SPORT[league] is not sport:
        raise InvalidContractTypeError(
            raw_input, f"conflicting league {league.value} and sport {sport.value}"
        )
    if league is League.FCS:
        league = League.CFB
    if league is not None:
        return LEAGUE_SPORT[league], league
    if sport is not None or rotation_number is None:
        return sport, None

    if 100 <= rotation_number < 499:
        return Sport.FOOTBALL, None
    if 500 <= rotation_number < 800:
        return Sport.BASKETBALL, None
    if 800 <= rotation_number < 900 or 9900 <= rotation_number < 10000:
        return Sport.BASEBALL, None
    return None, None
