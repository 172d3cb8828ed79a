"""Build typed contracts from classified contract text."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime

from chatbet.config import Settings
from chatbet.errors import (
    InvalidContractTypeError,
    InvalidPropFormatError,
    InvalidSeriesLengthError,
    InvalidWriteinDescriptionError,
)
from chatbet.parsing.classifier import OVER_UNDER_RE, SIGNED_NUMBER_RE, TEAM_TOTAL_RE
from chatbet.parsing.fields import (
    Contestant,
    OverUnder,
    extract_game_number,
    extract_period,
    infer_sport_and_league,
    parse_contestant,
    parse_line,
    parse_over_under,
    parse_team,
    parse_teams,
)
from chatbet.parsing.props import PropShape, detect_prop, prop_names
from chatbet.types import (
    LEAGUE_SPORT,
    ContestantType,
    Contract,
    ContractType,
    HandicapContestantLine,
    HandicapContestantML,
    League,
    Match,
    Period,
    PeriodTypeCode,
    PropOU,
    PropYN,
    Series,
    Sport,
    TotalPoints,
    TotalPointsContestant,
    Writein,
)

_RUNS_RE = re.compile(r"(?:^|\s)runs(?=\s|$)", re.IGNORECASE)
_ML_RE = re.compile(r"(?:^|\s)(?:ml|moneyline)(?=\s|$)", re.IGNORECASE)
_YES_NO_RE = re.compile(r"(?:^|\s)(yes|no)(?=\s|$)", re.IGNORECASE)
_SERIES_RE = re.compile(
    r"^(?P<team>.*?)\s*(?:(?P<games>\S+?)[\s-]*game\s*series"
    r"|series(?:\s*/\s*(?P<slash>\S+)|\s+out\s+of\s+(?P<out_of>\S+))?)$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class LegContext:
    """Leg-level facts gathered before the contract text is read."""

    raw_input: str
    settings: Settings
    sport: Sport | None = None
    league: League | None = None
    rotation_number: int | None = None
    day_sequence: int | None = None
    event_date: datetime | None = None


@dataclass(frozen=True)
class _Scope:
    sport: Sport | None
    league: League | None
    period: Period
    day_sequence: int | None
    text: str


def _remove(text: str, start: int, end: int) -> str:
    return " ".join((text[:start] + " " + text[end:]).split())


def _strip_pattern(text: str, pattern: re.Pattern[str]) -> tuple[str, bool]:
    match = pattern.search(text)
    if not match:
        return text, False
    return _remove(text, match.start(), match.end()), True


def _take_over_under(text: str, raw_input: str) -> tuple[OverUnder, str]:
    match = OVER_UNDER_RE.search(text)
    if not match:
        raise InvalidContractTypeError(raw_input, text)
    return parse_over_under(match.group(1), raw_input), _remove(text, match.start(), match.end())


def _scope(text: str, ctx: LegContext, baseball_hint: bool = False) -> _Scope:
    """Pull game number and period out of ``text`` and settle sport / league."""

    day_sequence, text = extract_game_number(text, ctx.raw_input, ctx.settings)
    if day_sequence is not None and ctx.day_sequence is not None and day_sequence != ctx.day_sequence:
        raise InvalidContractTypeError(ctx.raw_input, text)
    period, text = extract_period(text, ctx.raw_input, ctx.settings)
    sport, league = infer_sport_and_league(ctx.raw_input, ctx.rotation_number, ctx.league, ctx.sport)
    if sport is None and (baseball_hint or period.period_type_code is PeriodTypeCode.INNING):
        sport = Sport.BASEBALL
    return _Scope(
        sport=sport,
        league=league,
        period=period,
        day_sequence=day_sequence if day_sequence is not None else ctx.day_sequence,
        text=text,
    )


def _match_for(contestant: Contestant, ctx: LegContext, day_sequence: int | None) -> Match:
    if contestant.is_individual:
        return Match(
            player=contestant.name,
            player_team=contestant.player_team,
            date=ctx.event_date,
            day_sequence=day_sequence,
        )
    return Match(team1=contestant.name, date=ctx.event_date, day_sequence=day_sequence)


def build_total_points(text: str, ctx: LegContext) -> TotalPoints:
    ou, text = _take_over_under(text, ctx.raw_input)
    text, runs = _strip_pattern(text, _RUNS_RE)
    scope = _scope(text, ctx, baseball_hint=runs)
    teams = parse_teams(scope.text, ctx.raw_input, ctx.settings)
    return TotalPoints(
        sport=scope.sport,
        league=scope.league,
        rotation_number=ctx.rotation_number,
        period=scope.period,
        match=Match(
            team1=teams.team1,
            team2=teams.team2,
            date=ctx.event_date,
            day_sequence=scope.day_sequence,
        ),
        line=ou.line,
        is_over=ou.is_over,
    )


def build_team_total(text: str, ctx: LegContext) -> TotalPointsContestant:
    text, _ = _strip_pattern(text, TEAM_TOTAL_RE)
    ou, text = _take_over_under(text, ctx.raw_input)
    text, runs = _strip_pattern(text, _RUNS_RE)
    scope = _scope(text, ctx, baseball_hint=runs)
    team = parse_team(scope.text, ctx.raw_input, ctx.settings)
    return TotalPointsContestant(
        sport=scope.sport,
        league=scope.league,
        rotation_number=ctx.rotation_number,
        period=scope.period,
        match=Match(team1=team, date=ctx.event_date, day_sequence=scope.day_sequence),
        contestant=team,
        line=ou.line,
        is_over=ou.is_over,
    )


def build_moneyline(text: str, ctx: LegContext) -> HandicapContestantML:
    text, _ = _strip_pattern(text, _ML_RE)
    signed = SIGNED_NUMBER_RE.search(text)
    if signed:
        # +0 or a leftover whole-number price
        text = _remove(text, signed.start(), signed.end())
    scope = _scope(text, ctx)
    contestant = parse_contestant(scope.text, ctx.raw_input, ctx.settings)
    return HandicapContestantML(
        sport=scope.sport,
        league=scope.league,
        rotation_number=ctx.rotation_number,
        period=scope.period,
        match=_match_for(contestant, ctx, scope.day_sequence),
        contestant=contestant.name,
    )


def build_spread(text: str, ctx: LegContext) -> HandicapContestantLine:
    signed = SIGNED_NUMBER_RE.search(text)
    if not signed:
        raise InvalidContractTypeError(ctx.raw_input, text)
    line = parse_line(signed.group(1), ctx.raw_input)
    scope = _scope(_remove(text, signed.start(), signed.end()), ctx)
    contestant = parse_contestant(scope.text, ctx.raw_input, ctx.settings)
    return HandicapContestantLine(
        sport=scope.sport,
        league=scope.league,
        rotation_number=ctx.rotation_number,
        period=scope.period,
        match=_match_for(contestant, ctx, scope.day_sequence),
        contestant=contestant.name,
        line=line,
    )


def _prop_subject(
    text: str,
    default_type: ContestantType,
    ctx: LegContext,
    day_sequence: int | None,
) -> tuple[str, ContestantType, Match]:
    """Return ``(contestant, contestant_type, match)`` for a prop."""

    if "/" in text:
        teams = parse_teams(text, ctx.raw_input, ctx.settings)
        match = Match(team1=teams.team1, team2=teams.team2, date=ctx.event_date, day_sequence=day_sequence)
        return f"{teams.team1}/{teams.team2}", ContestantType.TEAM_LEAGUE, match
    contestant = parse_contestant(text, ctx.raw_input, ctx.settings)
    if contestant.is_individual:
        return contestant.name, ContestantType.INDIVIDUAL, _match_for(contestant, ctx, day_sequence)
    return contestant.name, default_type, _match_for(contestant, ctx, day_sequence)


def build_prop(text: str, ctx: LegContext) -> PropOU | PropYN:
    found = detect_prop(text)
    if found is None:
        raise InvalidPropFormatError(ctx.raw_input, text, prop_names())
    definition = found.definition
    text = _remove(text, found.start, found.end)

    if definition.shape is PropShape.OVER_UNDER:
        ou, text = _take_over_under(text, ctx.raw_input)
        scope = _scope(text, ctx)
        contestant, contestant_type, match = _prop_subject(
            scope.text, definition.contestant_type, ctx, scope.day_sequence
        )
        return PropOU(
            sport=scope.sport,
            league=scope.league,
            rotation_number=ctx.rotation_number,
            period=scope.period,
            match=match,
            prop=definition.name,
            contestant=contestant,
            contestant_type=contestant_type,
            line=ou.line,
            is_over=ou.is_over,
        )

    is_yes = True
    answer = _YES_NO_RE.search(text)
    if answer:
        is_yes = answer.group(1).lower() == "yes"
        text = _remove(text, answer.start(), answer.end())
    scope = _scope(text, ctx)
    contestant, contestant_type, match = _prop_subject(
        scope.text, definition.contestant_type, ctx, scope.day_sequence
    )
    return PropYN(
        sport=scope.sport,
        league=scope.league,
        rotation_number=ctx.rotation_number,
        period=scope.period,
        match=match,
        prop=definition.name,
        contestant=contestant,
        contestant_type=contestant_type,
        is_yes=is_yes,
    )


def _series_length(text: str, ctx: LegContext) -> int:
    if not text.isdigit() or int(text) < 1:
        raise InvalidSeriesLengthError(ctx.raw_input, text)
    return int(text)


def build_series(text: str, ctx: LegContext) -> Series:
    match = _SERIES_RE.match(" ".join(text.split()))
    if not match:
        raise InvalidContractTypeError(ctx.raw_input, text)
    length_text = match.group("games") or match.group("slash") or match.group("out_of")
    length = (
        _series_length(length_text, ctx) if length_text else ctx.settings.default_series_length
    )
    day_sequence, team_text = extract_game_number(match.group("team"), ctx.raw_input, ctx.settings)
    team = parse_team(team_text, ctx.raw_input, ctx.settings)
    sport, league = infer_sport_and_league(ctx.raw_input, ctx.rotation_number, ctx.league, ctx.sport)
    day_sequence = day_sequence if day_sequence is not None else ctx.day_sequence
    return Series(
        sport=sport,
        league=league,
        rotation_number=ctx.rotation_number,
        match=Match(team1=team, date=ctx.event_date, day_sequence=day_sequence),
        contestant=team,
        series_length=length,
    )


def build_writein(description: str, event_date: datetime, ctx: LegContext) -> Writein:
    cleaned = description.strip()
    settings = ctx.settings
    if not cleaned:
        raise InvalidWriteinDescriptionError(ctx.raw_input, description, "Description cannot be empty")
    if len(cleaned) < settings.min_description_length:
        raise InvalidWriteinDescriptionError(
            ctx.raw_input,
            description,
            f"Description must be at least {settings.min_description_length} characters long "
            f"(currently {len(cleaned)})",
        )
    if len(cleaned) > settings.max_description_length:
        raise InvalidWriteinDescriptionError(
            ctx.raw_input,
            description,
            f"Description cannot exceed {settings.max_description_length} characters "
            f"(currently {len(cleaned)})",
        )
    league = League.CFB if ctx.league is League.FCS else ctx.league
    return Writein(
        event_date=event_date,
        description=cleaned,
        league=league,
        sport=LEAGUE_SPORT[league] if league else ctx.sport,
    )


_BUILDERS = {
    ContractType.TOTAL_POINTS: build_total_points,
    ContractType.TOTAL_POINTS_CONTESTANT: build_team_total,
    ContractType.HANDICAP_CONTESTANT_ML: build_moneyline,
    ContractType.HANDICAP_CONTESTANT_LINE: build_spread,
    ContractType.PROP_OU: build_prop,
    ContractType.PROP_YN: build_prop,
    ContractType.SERIES: build_series,
}


def build_contract(kind: ContractType, text: str, ctx: LegContext) -> Contract:
    """Dispatch to the builder for ``kind``. Write-ins go through :func:`build_writein`."""

    try:
        builder = _BUILDERS[kind]
    except KeyError:
        raise InvalidContractTypeError(ctx.raw_input, text) from None
    return builder(text, ctx)
