"""Stream Deck transport error hierarchy.

All exceptions carry an optional ``operation_type`` (``connect``, ``send``,
``receive``) for log context.
"""


class StreamDeckError(Exception):
    """Base exception for all Stream Deck host transport errors.

    Args:
        message (str): Error message.
        operation_type (str | None): Optional operation type (e.g., 'connect', 'send').

    Example:
        >>> raise StreamDeckError("Generic error", operation_type="connect")
    """

    def __init__(self, message: str, operation_type: str | None = None) -> None:
        super().__init__(message)
        self.operation_type = operation_type


class StreamDeckConnectionError(StreamDeckError):
    """Raised when the connection to the Stream Deck application cannot be
    established, is not open, or fails while sending or receiving."""


__all__ = ["StreamDeckError", "StreamDeckConnectionError"]
