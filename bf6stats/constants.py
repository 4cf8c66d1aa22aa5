"""
Configuration constants for the BF6 Stats Stream Deck plugin

This module contains all configurable constants used throughout the plugin.
Each constant can be overridden by setting an environment variable with the same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, prints a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Args:
        name: The name of the environment variable to read.
        default: The default float value to return if parsing fails.

    Returns:
        The parsed float value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is not None and value.strip():
        return value.strip()
    return default


# Stats provider
STATS_API_BASE_URL = _get_env_str(
    "STATS_API_BASE_URL", "https://api.gametools.network/bf6/stats/"
)
STATS_REFRESH_INTERVAL_SECONDS = _get_env_float(
    "STATS_REFRESH_INTERVAL_SECONDS", 300.0
)  # Per-button refresh period (5 min default)
HTTP_REQUEST_TIMEOUT_SECONDS = _get_env_float(
    "HTTP_REQUEST_TIMEOUT_SECONDS", 15.0
)  # Total timeout for one stats request

# Player settings
DEFAULT_PLATFORM = _get_env_str("DEFAULT_PLATFORM", "pc")
KNOWN_PLATFORMS = frozenset(
    {"pc", "ps5", "ps4", "xboxseries", "xboxone", "steam", "ea"}
)

# Stream Deck host connection
STREAMDECK_HOST = _get_env_str("STREAMDECK_HOST", "127.0.0.1")
STREAMDECK_CONNECT_MAX_ATTEMPTS = _get_env_int(
    "STREAMDECK_CONNECT_MAX_ATTEMPTS", 5
)  # Attempts for the initial socket connect
STREAMDECK_CONNECT_MAX_BACKOFF_SECONDS = _get_env_float(
    "STREAMDECK_CONNECT_MAX_BACKOFF_SECONDS", 10.0
)  # Upper bound for exponential connect backoff

# setTitle target: 0 = hardware and software, 1 = hardware only, 2 = software only
TITLE_TARGET_BOTH = 0

# Error aggregation
ERROR_AGGREGATOR_MAX_PER_TYPE = _get_env_int(
    "ERROR_AGGREGATOR_MAX_PER_TYPE", 200
)  # Recent errors retained per category
