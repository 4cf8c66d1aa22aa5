"""Stream Deck host transport."""

from .connection import StreamDeckConnection
from .events import StreamDeckEvent, parse_info, set_title_message

__all__ = ["StreamDeckConnection", "StreamDeckEvent", "parse_info", "set_title_message"]
