"""Player statistics models, aggregation and formatting."""

from .aggregation import (
    PROMPT_API_ERROR,
    PROMPT_PLAYER_NOT_FOUND,
    PROMPT_SET_PLAYER,
    aggregate,
    format_number,
    format_title,
    kd_ratio,
    win_rate,
)
from .models import (
    STAT_MODES,
    ButtonSettings,
    CachedStats,
    ClassStats,
    GameModeStats,
    PlayerStatsResponse,
    StatMode,
)

__all__ = [
    "PROMPT_API_ERROR",
    "PROMPT_PLAYER_NOT_FOUND",
    "PROMPT_SET_PLAYER",
    "STAT_MODES",
    "ButtonSettings",
    "CachedStats",
    "ClassStats",
    "GameModeStats",
    "PlayerStatsResponse",
    "StatMode",
    "aggregate",
    "format_number",
    "format_title",
    "kd_ratio",
    "win_rate",
]
