"""Assemble a single straight bet (or a parlay leg) from its text."""

from __future__ import annotations

import logging
from datetime import datetime

from chatbet.config import Settings
from chatbet.errors import InvalidWriteinFormatError, MissingSizeForFillError
from chatbet.parsing.classifier import classify
from chatbet.parsing.contracts import LegContext, build_contract, build_writein
from chatbet.parsing.keywords import LEG_KEYWORDS, STRAIGHT_KEYWORDS
from chatbet.parsing.pricing import SizeQuote, parse_bet_size, parse_price
from chatbet.parsing.tokenizer import LegTokens, tokenize_leg
from chatbet.types import Bet, ChatType, Contract, ContractType, StraightResult

logger = logging.getLogger(__name__)


def resolve_contract(
    leg: LegTokens,
    raw_input: str,
    settings: Settings,
) -> tuple[ContractType, Contract]:
    ctx = LegContext(
        raw_input=raw_input,
        settings=settings,
        sport=leg.sport,
        league=leg.league,
        rotation_number=leg.rotation_number,
        day_sequence=leg.day_sequence,
        event_date=leg.event_date,
    )
    if leg.is_writein:
        if leg.event_date is None:
            raise InvalidWriteinFormatError(raw_input, "Writein contracts require a date and description")
        return ContractType.WRITEIN, build_writein(leg.contract_text, leg.event_date, ctx)
    kind = classify(leg.contract_text, raw_input)
    return kind, build_contract(kind, leg.contract_text, ctx)


def resolve_price(leg: LegTokens, raw_input: str, settings: Settings) -> float:
    if leg.price_text is None:
        return settings.default_price
    return parse_price(leg.price_text, raw_input)


def parse_straight(
    text: str,
    raw_input: str,
    chat_type: ChatType,
    settings: Settings,
    reference: datetime,
) -> StraightResult:
    """Parse a straight bet; ``text`` is everything after the prefix."""

    leg = tokenize_leg(text, raw_input, chat_type, settings, reference, STRAIGHT_KEYWORDS)
    kind, contract = resolve_contract(leg, raw_input, settings)
    price = resolve_price(leg, raw_input, settings)

    if leg.size_text is not None:
        quote = parse_bet_size(leg.size_text, raw_input, chat_type, price, settings.to_win_precision)
    elif chat_type is ChatType.FILL:
        raise MissingSizeForFillError(raw_input)
    else:
        quote = SizeQuote(size=None, risk=None, to_win=None)

    bet = Bet(
        price=price,
        size=quote.size,
        risk=quote.risk,
        to_win=quote.to_win,
        execution_dtm=reference if chat_type is ChatType.FILL else None,
        is_free_bet=leg.modifiers.free_bet,
    )
    logger.debug("Parsed straight %s bet at %s", kind.value, price)
    return StraightResult(
        chat_type=chat_type,
        contract_type=kind,
        contract=contract,
        bet=bet,
        rotation_number=leg.rotation_number,
    )


def parse_leg(
    text: str,
    raw_input: str,
    chat_type: ChatType,
    settings: Settings,
    reference: datetime,
) -> StraightResult:
    """Parse one parlay or round-robin leg. Legs carry a price but no size."""

    leg = tokenize_leg(text, raw_input, chat_type, settings, reference, LEG_KEYWORDS)
    kind, contract = resolve_contract(leg, raw_input, settings)
    return StraightResult(
        chat_type=chat_type,
        contract_type=kind,
        contract=contract,
        bet=Bet(price=resolve_price(leg, raw_input, settings)),
        rotation_number=leg.rotation_number,
    )
