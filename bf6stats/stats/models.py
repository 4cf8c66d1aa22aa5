"""Data models for button settings, provider payloads and cached stats."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..constants import DEFAULT_PLATFORM


class StatMode(Enum):
    """Metric family shown on a button, in press-cycle order."""

    KD = "kd"
    KILLS = "kills"
    WINS = "wins"


STAT_MODES: tuple[StatMode, ...] = (StatMode.KD, StatMode.KILLS, StatMode.WINS)


def _coerce_count(value: Any) -> float:
    """Turn a loosely typed counter into a number, defaulting to zero.

    The provider may send ints, floats, numeric strings (optionally with
    thousands separators) or nothing at all.
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, int | float):
        return value if math.isfinite(value) else 0
    if isinstance(value, str):
        text = value.strip().replace(",", "")
        try:
            number = float(text)
        except ValueError:
            return 0
        if not math.isfinite(number):
            return 0
        return int(number) if number.is_integer() else number
    return 0


class ButtonSettings(BaseModel):
    """Per-button settings written by the property inspector.

    Attributes:
        player_name: Player to look up; None when not configured.
        platform: Provider platform identifier, ``pc`` by default.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    player_name: str | None = Field(default=None, alias="playerName")
    platform: str = DEFAULT_PLATFORM

    @field_validator("player_name", mode="before")
    @classmethod
    def validate_player_name(cls, v: Any) -> str | None:
        if not isinstance(v, str):
            return None
        stripped = v.strip()
        return stripped or None

    @field_validator("platform", mode="before")
    @classmethod
    def validate_platform(cls, v: Any) -> str:
        if not isinstance(v, str) or not v.strip():
            return DEFAULT_PLATFORM
        return v.strip().lower()

    @classmethod
    def from_payload(cls, payload: Any) -> ButtonSettings:
        """Build settings from an event payload, tolerating any shape."""
        settings = payload.get("settings") if isinstance(payload, dict) else None
        if not isinstance(settings, dict):
            settings = {}
        return cls.model_validate(settings)


class _Breakdown(BaseModel):
    model_config = ConfigDict(extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def coerce_counts(cls, v: Any) -> float:
        return _coerce_count(v)


class ClassStats(_Breakdown):
    """Cumulative counters for one soldier class."""

    kills: float = 0
    deaths: float = 0


class GameModeStats(_Breakdown):
    """Cumulative counters for one game mode."""

    wins: float = 0
    losses: float = 0


class PlayerStatsResponse(BaseModel):
    """Provider response document.

    Only the fields the plugin reads are modelled; everything else is
    ignored. Breakdowns that are not lists become empty and entries that are
    not objects are dropped.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    user_name: str | None = Field(default=None, alias="userName")
    errors: Any = None
    classes: list[ClassStats] = Field(default_factory=list)
    gamemodes: list[GameModeStats] = Field(default_factory=list)

    @field_validator("user_name", mode="before")
    @classmethod
    def validate_user_name(cls, v: Any) -> str | None:
        if isinstance(v, str) and v.strip():
            return v
        return None

    @field_validator("classes", "gamemodes", mode="before")
    @classmethod
    def validate_breakdown(cls, v: Any) -> list[dict[str, Any]]:
        if not isinstance(v, list):
            return []
        return [entry for entry in v if isinstance(entry, dict)]

    @property
    def is_resolved(self) -> bool:
        """True when the provider resolved the player without errors.

        Any list or dict in ``errors`` counts as an error, even an empty one.
        """
        errored = isinstance(self.errors, list | dict) or bool(self.errors)
        return not errored and self.user_name is not None


@dataclass(frozen=True)
class CachedStats:
    """Derived values for one button, replaced wholesale on each successful fetch."""

    kills: float
    deaths: float
    kd: str
    wins: float
    losses: float
    win_rate: str
    player_name: str
