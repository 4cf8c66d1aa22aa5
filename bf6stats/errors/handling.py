from __future__ import annotations

import json
import time
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import aiohttp

from ..logging_config import log_structured_error
from .internal import (
    ConfigurationMissingError,
    InternalError,
    NetworkError,
    ParsingError,
    PlayerNotFoundError,
    RateLimitError,
    StatsProviderError,
)
from .streamdeck import StreamDeckError

T = TypeVar("T")


def error_category(error: BaseException) -> str:
    """Return the log category for an exception."""
    if isinstance(error, NetworkError | OSError | ConnectionError):
        return "network"
    if isinstance(error, RateLimitError):
        return "ratelimit"
    if isinstance(error, ParsingError):
        return "parsing"
    if isinstance(error, StatsProviderError):
        return "provider"
    if isinstance(error, PlayerNotFoundError):
        return "player"
    if isinstance(error, ConfigurationMissingError):
        return "config"
    if isinstance(error, StreamDeckError):
        return "transport"
    if isinstance(error, InternalError):
        return "internal"
    return "unknown"


def log_error(
    message: str, error: Exception, context: dict[str, Any] | None = None
) -> None:
    """Logs an error message with the associated exception details.

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging.
    """
    log_structured_error(
        error_type=error_category(error),
        message=f"{message}: {str(error)}",
        exception=error,
        context=context,
    )


async def handle_api_error(operation: Callable[[], Awaitable[T]], context: str) -> T:
    """Run a provider operation and translate raw failures into internal errors.

    Internal errors raised by the operation pass through untouched; raw
    aiohttp, timeout, OS and JSON errors are wrapped so that callers only
    ever see the internal hierarchy.

    Args:
        operation: The async provider operation to execute.
        context: Descriptive context for the operation (e.g., "stats lookup").

    Returns:
        The result of the operation if successful.

    Raises:
        InternalError subclasses: NetworkError, ParsingError, RateLimitError,
        StatsProviderError, PlayerNotFoundError.
    """
    try:
        return await operation()
    except InternalError:
        raise
    except (aiohttp.ContentTypeError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ParsingError(
            f"Stats provider returned an unreadable body in {context}. Error: {str(e)}"
        ) from e
    except aiohttp.ClientResponseError as e:
        error_context = {"operation": context, "http_status": e.status, "timestamp": time.time()}
        if e.status == 429:
            raise RateLimitError(f"Stats provider rate limit exceeded in {context}") from e
        raise StatsProviderError(
            f"Stats provider returned HTTP {e.status} in {context}",
            status=e.status,
            data=error_context,
        ) from e
    except (aiohttp.ClientError, TimeoutError, OSError) as e:
        raise NetworkError(
            f"Network connectivity issue in {context}. Check internet connection and DNS resolution. Error: {str(e) or type(e).__name__}"
        ) from e
