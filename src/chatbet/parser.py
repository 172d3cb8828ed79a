"""Public entry points: turn a chat message into a typed bet."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from chatbet.config import Settings, get_settings
from chatbet.errors import InvalidChatFormatError, UnrecognizedChatPrefixError
from chatbet.parlays.builder import build_parlay, build_round_robin
from chatbet.parsing.straight import parse_straight
from chatbet.types import BetType, ChatType, ParseResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParseOptions:
    """Per-call parser options.

    ``reference_date`` stands in for "now": it anchors year inference for
    dates written without a year and stamps fill execution times.
    """

    reference_date: datetime | None = None
    settings: Settings | None = None


@dataclass(frozen=True)
class _Prefix:
    chat_type: ChatType
    bet_type: BetType
    writein: bool = False


# Longest first so "IWRR" never matches as "IW".
PREFIXES: dict[str, _Prefix] = {
    "IWRR": _Prefix(ChatType.ORDER, BetType.ROUND_ROBIN),
    "YGRR": _Prefix(ChatType.FILL, BetType.ROUND_ROBIN),
    "IWP": _Prefix(ChatType.ORDER, BetType.PARLAY),
    "YGP": _Prefix(ChatType.FILL, BetType.PARLAY),
    "IWW": _Prefix(ChatType.ORDER, BetType.STRAIGHT, writein=True),
    "YGW": _Prefix(ChatType.FILL, BetType.STRAIGHT, writein=True),
    "IW": _Prefix(ChatType.ORDER, BetType.STRAIGHT),
    "YG": _Prefix(ChatType.FILL, BetType.STRAIGHT),
}


def _reference(options: ParseOptions) -> datetime:
    reference = options.reference_date or datetime.now(timezone.utc)
    if reference.tzinfo is None:
        reference = reference.replace(tzinfo=timezone.utc)
    return reference


def _split_prefix(text: str) -> tuple[str, _Prefix, str]:
    stripped = text.strip()
    if not stripped:
        raise InvalidChatFormatError(text, "Message too short")
    word = stripped.split(maxsplit=1)[0]
    prefix = PREFIXES.get(word.upper())
    if prefix is None:
        raise UnrecognizedChatPrefixError(text, word)
    body = stripped[len(word):]
    if not body.strip():
        raise InvalidChatFormatError(text, "Message too short")
    return word.upper(), prefix, body


def parse_chat(text: str, options: ParseOptions | None = None) -> ParseResult:
    """Parse an order (``IW...``) or fill (``YG...``) chat message."""

    options = options or ParseOptions()
    settings = options.settings or get_settings()
    reference = _reference(options)

    word, prefix, body = _split_prefix(text)
    logger.debug("Parsing %s message %r", word, text)

    if prefix.bet_type is BetType.PARLAY:
        return build_parlay(body, text, prefix.chat_type, settings, reference)
    if prefix.bet_type is BetType.ROUND_ROBIN:
        return build_round_robin(body, text, prefix.chat_type, settings, reference)
    if prefix.writein:
        body = "writein " + body.strip()
    return parse_straight(body, text, prefix.chat_type, settings, reference)


def parse_chat_order(text: str, options: ParseOptions | None = None) -> ParseResult:
    """Like :func:`parse_chat` but only accepts orders."""

    _, prefix, _ = _split_prefix(text)
    if prefix.chat_type is not ChatType.ORDER:
        raise InvalidChatFormatError(text, "Expected order (IW) message")
    return parse_chat(text, options)


def parse_chat_fill(text: str, options: ParseOptions | None = None) -> ParseResult:
    """Like :func:`parse_chat` but only accepts fills."""

    _, prefix, _ = _split_prefix(text)
    if prefix.chat_type is not ChatType.FILL:
        raise InvalidChatFormatError(text, "Expected fill (YG) message")
    return parse_chat(text, options)
