"""Centralized internal error hierarchy.

These exceptions provide semantic categories for the controller's failure
handling. Only raise these inside application/network boundaries – never
surface raw aiohttp / JSON errors to the controller; wrap them instead.

Classes:
  InternalError              – Base for all internal errors.
  ConfigurationMissingError  – Button has no player name configured.
  StatsProviderError         – Stats provider answered with a non-success status.
  NetworkError               – Transport failure talking to the provider.
  ParsingError               – Provider body is not the expected JSON document.
  RateLimitError             – Provider signalled rate limiting (HTTP 429).
  PlayerNotFoundError        – Provider could not resolve the player.
"""

from __future__ import annotations

from collections.abc import Mapping


class InternalError(Exception):
    """Base class for all internal application errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class ConfigurationMissingError(InternalError):
    """Raised when a button has no player name to look up."""


class StatsProviderError(InternalError):
    """Exception raised when the stats provider cannot serve a request.

    This covers non-success HTTP statuses as well as the transport and
    parsing failures below, which all render the same prompt on the button.

    Attributes:
        status: HTTP status code when the provider answered, otherwise None.
    """

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        data: Mapping[str, object] | None = None,
    ) -> None:
        super().__init__(message, data=data)
        self.status = status


class NetworkError(StatsProviderError):
    """Exception raised for network or transport layer errors.

    This includes connection failures, resets and timeouts.
    """


class ParsingError(StatsProviderError):
    """Exception raised for response parsing or schema validation errors."""


class RateLimitError(StatsProviderError):
    """Exception raised when the provider answers with HTTP 429."""

    def __init__(self, message: str = "Rate limited", *, retry_after: str | None = None):
        super().__init__(message, status=429, data={"retry_after": retry_after})
        self.retry_after = retry_after


class PlayerNotFoundError(InternalError):
    """Raised when the provider reports errors or returns no resolvable name."""


__all__ = [
    "InternalError",
    "ConfigurationMissingError",
    "StatsProviderError",
    "NetworkError",
    "ParsingError",
    "RateLimitError",
    "PlayerNotFoundError",
]
