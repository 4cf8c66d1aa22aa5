"""Inbound Stream Deck message models."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

WILL_APPEAR = "willAppear"
WILL_DISAPPEAR = "willDisappear"
KEY_UP = "keyUp"
DID_RECEIVE_SETTINGS = "didReceiveSettings"
SET_TITLE = "setTitle"

HANDLED_EVENTS = frozenset({WILL_APPEAR, WILL_DISAPPEAR, KEY_UP, DID_RECEIVE_SETTINGS})


class StreamDeckEvent(BaseModel):
    """One event sent by the Stream Deck application to the plugin."""

    model_config = ConfigDict(extra="ignore")

    event: str
    context: str | None = None
    action: str | None = None
    device: str | None = None
    payload: dict[str, Any] = Field(default_factory=dict)

    @field_validator("payload", mode="before")
    @classmethod
    def validate_payload(cls, v: Any) -> dict[str, Any]:
        return v if isinstance(v, dict) else {}

    @classmethod
    def from_frame(cls, frame: str | bytes) -> StreamDeckEvent:
        """Decode one websocket frame.

        Raises:
            ValueError: The frame is not a JSON object with an ``event`` string.
        """
        try:
            raw = json.loads(frame)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ValueError(f"frame is not valid JSON: {e}") from e
        if not isinstance(raw, dict):
            raise ValueError("frame is not a JSON object")
        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            raise ValueError(f"frame is not a Stream Deck event: {e}") from e


def set_title_message(context: str, title: str, target: int = 0) -> dict[str, Any]:
    return {
        "event": SET_TITLE,
        "context": context,
        "payload": {"title": title, "target": target},
    }


def parse_info(raw: str | None) -> dict[str, Any]:
    """Parse the ``-info`` launch argument, returning {} when unusable."""
    if not raw:
        return {}
    try:
        info = json.loads(raw)
    except json.JSONDecodeError:
        return {}
    return info if isinstance(info, dict) else {}
