"""Chat-shorthand bet parser."""

from importlib import metadata

from chatbet.config import Settings, get_settings
from chatbet.errors import ChatBetParseError
from chatbet.parser import ParseOptions, parse_chat, parse_chat_fill, parse_chat_order

__all__ = [
    "__version__",
    "ChatBetParseError",
    "ParseOptions",
    "Settings",
    "get_settings",
    "parse_chat",
    "parse_chat_fill",
    "parse_chat_order",
]

try:
    __version__ = metadata.version("chatbet-parse")
except metadata.PackageNotFoundError:  # pragma: no cover - local dev fallback
    __version__ = "0.0.0"
