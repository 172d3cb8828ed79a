"""Typed parse failures.

Every failure raised by the parser is a subclass of :class:`ChatBetParseError`
and carries the raw chat text plus a human readable message that echoes the
offending fragment.
"""

from __future__ import annotations

from collections.abc import Iterable


class ChatBetParseError(Exception):
    """Base class for all chat parsing errors."""

    def __init__(self, message: str, raw_input: str, position: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.raw_input = raw_input
        self.position = position

    def with_position(self, position: int) -> "ChatBetParseError":
        self.position = position
        return self


def _suffix(raw_input: str) -> str:
    return f'Input: "{raw_input}"'


class InvalidChatFormatError(ChatBetParseError):
    def __init__(self, raw_input: str, reason: str) -> None:
        super().__init__(f"Invalid chat format: {reason}. {_suffix(raw_input)}", raw_input)
        self.reason = reason


class UnrecognizedChatPrefixError(ChatBetParseError):
    def __init__(self, raw_input: str, prefix: str) -> None:
        super().__init__(
            f'Unrecognized chat prefix: "{prefix}". Chat must be either a chat order '
            '(start with "IW" for "i want") or a chat fill (start with "YG", for "you got"). '
            f"{_suffix(raw_input)}",
            raw_input,
        )
        self.prefix = prefix


class InvalidContractTypeError(ChatBetParseError):
    def __init__(self, raw_input: str, contract_portion: str) -> None:
        super().__init__(
            f'Unable to determine contract type from: "{contract_portion}". {_suffix(raw_input)}',
            raw_input,
        )
        self.contract_portion = contract_portion


class InvalidPriceFormatError(ChatBetParseError):
    def __init__(self, raw_input: str, price: str) -> None:
        super().__init__(
            f'Invalid USA price format: "{price}". Expected format: +150, -110, -115.5, ev, or even. '
            f"{_suffix(raw_input)}",
            raw_input,
        )
        self.price = price


class InvalidSizeFormatError(ChatBetParseError):
    def __init__(self, raw_input: str, size: str, expected_format: str) -> None:
        super().__init__(
            f'Invalid size format: "{size}". Expected: {expected_format}. {_suffix(raw_input)}',
            raw_input,
        )
        self.size = size


class MissingSizeForFillError(ChatBetParseError):
    def __init__(self, raw_input: str) -> None:
        super().__init__(
            'Fill (YG/YGP/YGRR) messages require a size, e.g. "= 1k" or "= $100". '
            f"{_suffix(raw_input)}",
            raw_input,
        )


class InvalidLineValueError(ChatBetParseError):
    def __init__(self, raw_input: str, line: float | str) -> None:
        super().__init__(
            f"Invalid line value: {line}. Line must be divisible by 0.5. {_suffix(raw_input)}",
            raw_input,
        )
        self.line = line


class InvalidTeamFormatError(ChatBetParseError):
    def __init__(self, raw_input: str, team: str, reason: str) -> None:
        super().__init__(f'Invalid team format: "{team}". {reason}. {_suffix(raw_input)}', raw_input)
        self.team = team


class InvalidPeriodFormatError(ChatBetParseError):
    def __init__(self, raw_input: str, period: str) -> None:
        super().__init__(
            f'Invalid period format: "{period}". Expected formats: 1st inning, F5, 1H, Q1, etc. '
            f"{_suffix(raw_input)}",
            raw_input,
        )
        self.period = period


class InvalidGameNumberError(ChatBetParseError):
    def __init__(self, raw_input: str, game: str) -> None:
        super().__init__(
            f'Invalid game number format: "{game}". Expected formats: G2, GM1, #2, etc. '
            f"{_suffix(raw_input)}",
            raw_input,
        )
        self.game = game


class InvalidRotationNumberError(ChatBetParseError):
    def __init__(self, raw_input: str, rotation: str) -> None:
        super().__init__(
            f'Invalid rotation number: "{rotation}". Must be a positive integer. {_suffix(raw_input)}',
            raw_input,
        )
        self.rotation = rotation


class InvalidPropFormatError(ChatBetParseError):
    def __init__(self, raw_input: str, prop: str, available_props: Iterable[str]) -> None:
        super().__init__(
            f'Invalid prop format: "{prop}". Available props: {", ".join(available_props)}. '
            f"{_suffix(raw_input)}",
            raw_input,
        )
        self.prop = prop


class InvalidSeriesLengthError(ChatBetParseError):
    def __init__(self, raw_input: str, length: str) -> None:
        super().__init__(
            f'Invalid series length: "{length}". Must be a positive integer. {_suffix(raw_input)}',
            raw_input,
        )
        self.length = length


class InvalidDateError(ChatBetParseError):
    def __init__(self, raw_input: str, date_text: str, reason: str) -> None:
        super().__init__(f'Invalid date "{date_text}": {reason}. {_suffix(raw_input)}', raw_input)
        self.date_text = date_text


class InvalidWriteinDateError(InvalidDateError):
    def __init__(self, raw_input: str, date_text: str, reason: str) -> None:
        ChatBetParseError.__init__(
            self, f'Invalid writein date "{date_text}": {reason}. {_suffix(raw_input)}', raw_input
        )
        self.date_text = date_text


class InvalidWriteinDescriptionError(ChatBetParseError):
    def __init__(self, raw_input: str, description: str, reason: str) -> None:
        super().__init__(f"Invalid writein description: {reason}. {_suffix(raw_input)}", raw_input)
        self.description = description


class InvalidWriteinFormatError(ChatBetParseError):
    def __init__(self, raw_input: str, reason: str) -> None:
        super().__init__(f"Invalid writein format: {reason}. {_suffix(raw_input)}", raw_input)


class InvalidKeywordSyntaxError(ChatBetParseError):
    def __init__(self, raw_input: str, token: str, reason: str = "Invalid keyword syntax") -> None:
        super().__init__(f'{reason}: "{token}". {_suffix(raw_input)}', raw_input)
        self.token = token


class InvalidKeywordValueError(ChatBetParseError):
    def __init__(self, raw_input: str, key: str, value: str, reason: str) -> None:
        super().__init__(f'{reason} (got "{value}"). {_suffix(raw_input)}', raw_input)
        self.key = key
        self.value = value


class UnknownKeywordError(ChatBetParseError):
    def __init__(self, raw_input: str, key: str) -> None:
        super().__init__(f"Unknown keyword: {key}. {_suffix(raw_input)}", raw_input)
        self.key = key


class InvalidNcrNotationError(ChatBetParseError):
    def __init__(self, raw_input: str, reason: str) -> None:
        super().__init__(f"{reason}. {_suffix(raw_input)}", raw_input)
        self.reason = reason


class MissingNcrNotationError(ChatBetParseError):
    def __init__(self, raw_input: str, reason: str = "Round robin requires nCr notation") -> None:
        super().__init__(f'{reason} (e.g. "4c2"). {_suffix(raw_input)}', raw_input)


class LegCountMismatchError(ChatBetParseError):
    def __init__(self, raw_input: str, expected: int, found: int) -> None:
        super().__init__(
            f"Expected {expected} legs from nCr notation, but found {found}. {_suffix(raw_input)}",
            raw_input,
        )
        self.expected = expected
        self.found = found


class InvalidParlayStructureError(ChatBetParseError):
    def __init__(self, raw_input: str, reason: str) -> None:
        super().__init__(f"{reason}. {_suffix(raw_input)}", raw_input)


class InvalidParlayLegError(ChatBetParseError):
    def __init__(self, raw_input: str, reason: str) -> None:
        super().__init__(f"{reason}. {_suffix(raw_input)}", raw_input)


class InvalidRoundRobinLegError(ChatBetParseError):
    def __init__(self, raw_input: str, reason: str) -> None:
        super().__init__(f"{reason}. {_suffix(raw_input)}", raw_input)


class InvalidParlayToWinError(ChatBetParseError):
    def __init__(self, raw_input: str, reason: str) -> None:
        super().__init__(f"{reason}. {_suffix(raw_input)}", raw_input)


class InvalidRoundRobinToWinError(ChatBetParseError):
    def __init__(self, raw_input: str, reason: str) -> None:
        super().__init__(f"{reason}. {_suffix(raw_input)}", raw_input)


class MissingRiskTypeError(ChatBetParseError):
    def __init__(self, raw_input: str) -> None:
        super().__init__(
            f'Round robin requires risk type: "per" or "total". {_suffix(raw_input)}', raw_input
        )


class InvalidRiskTypeError(ChatBetParseError):
    def __init__(self, raw_input: str, risk_type: str) -> None:
        super().__init__(
            f'Invalid risk type: must be "per" or "total" (got "{risk_type}"). {_suffix(raw_input)}',
            raw_input,
        )
        self.risk_type = risk_type
