"""Split one bet leg into contract text, price, size and leading context.

A leg looks like::

    [date] [league] [rotation] [game] contract [@ price] [= size]

with the leading fields in any order and ``key:value`` modifiers anywhere.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime

from chatbet.config import Settings
from chatbet.errors import (
    InvalidChatFormatError,
    InvalidContractTypeError,
    InvalidRotationNumberError,
    InvalidWriteinFormatError,
)
from chatbet.parsing.dates import looks_like_date, parse_event_date
from chatbet.parsing.fields import is_numeric_team_name, parse_game_number, parse_rotation_number
from chatbet.parsing.keywords import Modifiers, resolve_modifiers, split_modifiers
from chatbet.parsing.pricing import is_size_token, looks_like_embedded_price
from chatbet.types import ChatType, League, Sport

logger = logging.getLogger(__name__)

FILL_FORMAT = 'Expected format for fills is: "YG" [rotation_number] contract ["@" usa_price] "=" fill_size'
ORDER_FORMAT = 'Expected format for orders is: "IW" [rotation_number] contract ["@" usa_price] ["=" unit_size]'

_EQUALS_RE = re.compile(r"\s*=\s*")
_AT_RE = re.compile(r"\s*@\s*")
_GAME_TOKEN_RE = re.compile(r"^(?:(?:game|gm|g)\d+|#\d+)$", re.IGNORECASE)
_GAME_WORDS = frozenset({"game", "gm", "g", "#"})
_SIGNED_ZERO_RE = re.compile(r"^[+-]0(?:\.0+)?$")
_ATTACHED_PRICE_RE = re.compile(
    r"(?<![\w.])((?:o|u)\d*\.?\d+)([+-]\d+(?:\.\d+)?)(?![\w.])", re.IGNORECASE
)
_COMPACT_DATE_LENGTHS = (6, 8)
# a short lowercase token in front of a capitalized team sits where the rotation number goes
_BAD_ROTATION_RE = re.compile(r"^[a-z]{1,3}$")

_LEAGUES = {league.value: league for league in League}
_SPORTS = {sport.value.lower(): sport for sport in Sport}
_SHORT_WORDS = frozenset(
    {league.lower() for league in _LEAGUES} | _GAME_WORDS | {"mma", "tt", "ml", "fg", "o", "u", "ev", "the"}
)


@dataclass(frozen=True)
class LegTokens:
    """Everything a leg says, before the contract text is interpreted."""

    contract_text: str
    price_text: str | None = None
    size_text: str | None = None
    rotation_number: int | None = None
    day_sequence: int | None = None
    league: League | None = None
    sport: Sport | None = None
    event_date: datetime | None = None
    modifiers: Modifiers = Modifiers()
    is_writein: bool = False


def normalize(text: str) -> str:
    """Collapse whitespace and pad ``=`` / ``@`` so they always stand alone."""

    text = _EQUALS_RE.sub(" = ", text)
    text = _AT_RE.sub(" @ ", text)
    return " ".join(text.split())


def split_size(text: str, raw_input: str) -> tuple[str, str | None]:
    """Return the text before ``=`` and the size after it (``None`` when absent)."""

    body, sep, tail = normalize(text).partition(" = ")
    if not sep:
        if body.endswith(" =") or body == "=":
            return body.rstrip("= ").strip(), None
        return body, None
    if "=" in tail.split():
        raise InvalidChatFormatError(raw_input, 'Only one "=" is allowed')
    return body.strip(), tail.strip() or None


def _merge_league(positional: League | None, keyword: League | None, raw_input: str) -> League | None:
    if positional and keyword and positional is not keyword:
        raise InvalidChatFormatError(
            raw_input, f"conflicting leagues {positional.value} and {keyword.value}"
        )
    return keyword or positional


def _pick_date_text(positional: str | None, keyword: str | None, raw_input: str) -> str | None:
    if positional and keyword:
        raise InvalidChatFormatError(raw_input, "Event date specified more than once")
    return keyword or positional


def _split_price(
    tokens: list[str],
    raw_input: str,
    chat_type: ChatType,
) -> tuple[list[str], str | None, str | None]:
    """Return ``(contract_tokens, price_text, size_from_price_slot)``."""

    at_positions = [i for i, token in enumerate(tokens) if token == "@"]
    if len(at_positions) > 1:
        raise InvalidChatFormatError(
            raw_input, FILL_FORMAT if chat_type is ChatType.FILL else ORDER_FORMAT
        )
    if not at_positions:
        return tokens, None, None

    at = at_positions[0]
    after = tokens[at + 1:]
    if not after:
        raise InvalidChatFormatError(raw_input, "No contract details found")
    if len(after) > 1:
        raise InvalidChatFormatError(raw_input, f'Unexpected text after price: "{" ".join(after[1:])}"')
    token = after[0]
    if is_size_token(token):
        return tokens[:at], None, token
    return tokens[:at], token, None


def _split_embedded_price(
    tokens: list[str],
    raw_input: str,
) -> tuple[list[str], str | None]:
    for i, token in enumerate(tokens):
        if _SIGNED_ZERO_RE.match(token):
            break
        if looks_like_embedded_price(token):
            if i + 1 < len(tokens):
                raise InvalidChatFormatError(
                    raw_input, f'Unexpected text after price: "{" ".join(tokens[i + 1:])}"'
                )
            return tokens[:i], token
    return tokens, None


def _is_bad_rotation(tokens: list[str]) -> bool:
    first = tokens[0]
    return (
        bool(_BAD_ROTATION_RE.match(first))
        and first not in _SHORT_WORDS
        and len(tokens) > 1
        and tokens[1][:1].isupper()
    )


@dataclass
class _Leading:
    end: int = 0
    rotation: int | None = None
    date_text: str | None = None
    league: League | None = None
    sport: Sport | None = None
    game: int | None = None


def _leading_context(
    tokens: list[str],
    raw_input: str,
    settings: Settings,
    reference: datetime,
) -> _Leading:
    """Consume the leading date / league / sport / rotation / game tokens."""

    found = _Leading()
    i = 0
    while i < len(tokens):
        token = tokens[i]
        lowered = token.lower()
        if found.rotation is None and token.isdigit():
            if is_numeric_team_name(" ".join(tokens[i:])):
                break
            if len(token) in _COMPACT_DATE_LENGTHS:
                # 070125 is a date written without separators, not a rotation
                parse_event_date(token, raw_input, reference)
            found.rotation = parse_rotation_number(token, raw_input, settings)
        elif found.date_text is None and looks_like_date(token):
            found.date_text = token
        elif found.league is None and token in _LEAGUES:
            found.league = _LEAGUES[token]
        elif found.sport is None and lowered in _SPORTS:
            found.sport = _SPORTS[lowered]
        elif found.game is None and _GAME_TOKEN_RE.match(token):
            found.game = parse_game_number(token, raw_input, settings)
        elif (
            found.game is None
            and lowered in _GAME_WORDS
            and i + 1 < len(tokens)
            and tokens[i + 1].isdigit()
        ):
            found.game = parse_game_number(token + tokens[i + 1], raw_input, settings)
            i += 1
        else:
            if i == 0 and _is_bad_rotation(tokens):
                raise InvalidRotationNumberError(raw_input, token)
            break
        i += 1
    found.end = i
    return found


def _writein_head(
    tokens: list[str],
    keyword_date: str | None,
    raw_input: str,
) -> tuple[str, League | None, list[str]]:
    """Pull the date and optional league off the front of a write-in."""

    league: League | None = None
    rest = list(tokens)
    if rest and rest[0] in _LEAGUES:
        league = _LEAGUES[rest.pop(0)]
    if keyword_date is not None:
        date_text = keyword_date
    elif rest and rest[0] != "@":
        date_text = rest.pop(0)
    else:
        raise InvalidWriteinFormatError(raw_input, "Writein contracts require a date and description")
    if league is None and rest and rest[0] in _LEAGUES:
        league = _LEAGUES[rest.pop(0)]
    if not rest or rest[0] == "@":
        raise InvalidWriteinFormatError(raw_input, "Writein contracts require a date and description")
    return date_text, league, rest


def tokenize_leg(
    text: str,
    raw_input: str,
    chat_type: ChatType,
    settings: Settings,
    reference: datetime,
    allowed_keywords: frozenset[str],
) -> LegTokens:
    """Break a leg (prefix already removed) into its parts."""

    body, size_text = split_size(text, raw_input)
    tokens, pairs = split_modifiers(body.split(), allowed_keywords, raw_input)
    modifiers = resolve_modifiers(pairs, raw_input)

    if tokens and tokens[0].lower().startswith("writein"):
        if tokens[0].lower() != "writein":
            raise InvalidContractTypeError(raw_input, tokens[0])
        date_text, league, rest = _writein_head(tokens[1:], modifiers.date, raw_input)
        description, price_text, size_slot = _split_price(rest, raw_input, chat_type)
        return LegTokens(
            contract_text=" ".join(description),
            price_text=price_text,
            size_text=size_text or size_slot,
            league=_merge_league(league, modifiers.league, raw_input),
            event_date=parse_event_date(date_text, raw_input, reference, writein=True),
            modifiers=modifiers,
            is_writein=True,
        )

    found = _leading_context(tokens, raw_input, settings, reference)
    contract_tokens, price_text, size_slot = _split_price(tokens[found.end:], raw_input, chat_type)
    if price_text is None and size_slot is None:
        contract_tokens, price_text = _split_embedded_price(contract_tokens, raw_input)

    contract_text = " ".join(contract_tokens)
    if price_text is None:
        attached = _ATTACHED_PRICE_RE.search(contract_text)
        if attached:
            price_text = attached.group(2)
            contract_text = contract_text[: attached.start()] + attached.group(1) + contract_text[attached.end():]
    if not contract_text:
        raise InvalidChatFormatError(raw_input, "No contract details found")

    date_text = _pick_date_text(found.date_text, modifiers.date, raw_input)
    event_date = parse_event_date(date_text, raw_input, reference) if date_text else None
    leg = LegTokens(
        contract_text=contract_text,
        price_text=price_text,
        size_text=size_text or size_slot,
        rotation_number=found.rotation,
        day_sequence=found.game,
        league=_merge_league(found.league, modifiers.league, raw_input),
        sport=found.sport,
        event_date=event_date,
        modifiers=modifiers,
    )
    logger.debug("Tokenized leg %r -> %r", text, leg)
    return leg
