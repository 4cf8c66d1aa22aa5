"""Stat display controller: per-button state, polling and title rendering."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Protocol

from ..constants import KNOWN_PLATFORMS, STATS_REFRESH_INTERVAL_SECONDS, TITLE_TARGET_BOTH
from ..errors.handling import log_error
from ..errors.internal import (
    ConfigurationMissingError,
    PlayerNotFoundError,
    StatsProviderError,
)
from ..errors.streamdeck import StreamDeckError
from ..logs import logger
from ..stats import (
    PROMPT_API_ERROR,
    PROMPT_PLAYER_NOT_FOUND,
    PROMPT_SET_PLAYER,
    STAT_MODES,
    ButtonSettings,
    CachedStats,
    PlayerStatsResponse,
    StatMode,
    aggregate,
    format_number,
    format_title,
)
from ..streamdeck.events import (
    DID_RECEIVE_SETTINGS,
    KEY_UP,
    WILL_APPEAR,
    WILL_DISAPPEAR,
    StreamDeckEvent,
    set_title_message,
)


class Transport(Protocol):
    async def send_json(self, data: dict[str, Any]) -> None: ...


class StatsClient(Protocol):
    async def fetch_player_stats(
        self, name: str, platform: str | None = ...
    ) -> PlayerStatsResponse: ...


@dataclass(eq=False)
class ButtonContext:
    """State owned by one visible button.

    Compared by identity: a fetch started for one instance must not update a
    newer instance registered under the same context id.
    """

    context: str
    settings: ButtonSettings
    stat_index: int = 0
    refresh_task: asyncio.Task | None = None
    fetch_task: asyncio.Task | None = None
    fetch_count: int = 0

    @property
    def mode(self) -> StatMode:
        return STAT_MODES[self.stat_index]

    def cancel_tasks(self) -> None:
        for task in (self.refresh_task, self.fetch_task):
            if task is not None and not task.done():
                task.cancel()
        self.refresh_task = None
        self.fetch_task = None


class StatDisplayController:
    """Cycles a button's title between K/D, kills and win rate for one player.

    All methods run on a single event loop. Every context is independent:
    failures for one button only ever change that button's title.

    Attributes:
        contexts: Registered buttons keyed by host context id.
        stats_cache: Last successful stats per context id.
    """

    def __init__(
        self,
        transport: Transport,
        stats_client: StatsClient,
        *,
        refresh_interval: float = STATS_REFRESH_INTERVAL_SECONDS,
    ) -> None:
        self.transport = transport
        self.stats_client = stats_client
        self.refresh_interval = refresh_interval
        self.contexts: dict[str, ButtonContext] = {}
        self.stats_cache: dict[str, CachedStats] = {}

    # ---- inbound events ----
    async def handle_event(self, event: StreamDeckEvent) -> None:
        """Dispatch one host event; unknown kinds and context-less events are ignored."""
        if event.context is None:
            logger.log_event(
                "streamdeck", "unhandled_event", level=logging.DEBUG, event=event.event
            )
            return
        if event.event == WILL_APPEAR:
            self.on_appear(event.context, ButtonSettings.from_payload(event.payload))
        elif event.event == WILL_DISAPPEAR:
            self.on_disappear(event.context)
        elif event.event == KEY_UP:
            await self.on_press(event.context)
        elif event.event == DID_RECEIVE_SETTINGS:
            self.on_settings_changed(
                event.context, ButtonSettings.from_payload(event.payload)
            )
        else:
            logger.log_event(
                "streamdeck",
                "unhandled_event",
                level=logging.DEBUG,
                event=event.event,
                context=event.context,
            )

    def on_appear(self, context: str, settings: ButtonSettings) -> None:
        """Register a button, start its periodic refresh and fetch immediately.

        Re-registering an existing context replaces its state and timer.
        """
        previous = self.contexts.pop(context, None)
        if previous is not None:
            previous.cancel_tasks()
        self.stats_cache.pop(context, None)

        button = ButtonContext(context=context, settings=settings)
        self.contexts[context] = button
        logger.log_event("button", "appear", context=context, player=settings.player_name)
        self._warn_unknown_platform(button)
        button.refresh_task = asyncio.create_task(
            self._refresh_loop(button), name=f"bf6stats-refresh-{context}"
        )
        self._schedule_fetch(button)

    def on_disappear(self, context: str) -> None:
        """Cancel the button's tasks and forget it. Unknown contexts are ignored."""
        button = self.contexts.pop(context, None)
        self.stats_cache.pop(context, None)
        if button is None:
            return
        button.cancel_tasks()
        logger.log_event(
            "button", "disappear", context=context, player=button.settings.player_name
        )

    async def on_press(self, context: str) -> None:
        """Advance to the next stat mode and re-render from cache, without fetching."""
        button = self.contexts.get(context)
        if button is None:
            return
        button.stat_index = (button.stat_index + 1) % len(STAT_MODES)
        logger.log_event(
            "button",
            "press",
            level=logging.DEBUG,
            context=context,
            player=button.settings.player_name,
            mode=button.mode.value,
        )
        await self.render(context)

    def on_settings_changed(self, context: str, settings: ButtonSettings) -> None:
        """Replace the button's settings and fetch immediately."""
        button = self.contexts.get(context)
        if button is None:
            return
        button.settings = settings
        logger.log_event(
            "button",
            "settings",
            context=context,
            player=settings.player_name,
            platform=settings.platform,
        )
        self._warn_unknown_platform(button)
        self._schedule_fetch(button)

    # ---- refresh ----
    def _schedule_fetch(self, button: ButtonContext) -> None:
        # A newer request supersedes one still in flight.
        if button.fetch_task is not None and not button.fetch_task.done():
            button.fetch_task.cancel()
        button.fetch_task = asyncio.create_task(
            self.refresh(button.context), name=f"bf6stats-fetch-{button.context}"
        )

    async def _refresh_loop(self, button: ButtonContext) -> None:
        while True:
            await asyncio.sleep(self.refresh_interval)
            if self.contexts.get(button.context) is not button:
                return
            self._schedule_fetch(button)

    def _is_current(self, context: str, button: ButtonContext) -> bool:
        return self.contexts.get(context) is button

    async def refresh(self, context: str) -> None:
        """Fetch stats for ``context`` and update its cache and title.

        Failures render a prompt and leave the previous cache untouched. A
        result arriving after the button disappeared is discarded.
        """
        button = self.contexts.get(context)
        if button is None:
            return
        settings = button.settings
        button.fetch_count += 1
        try:
            if not settings.player_name:
                raise ConfigurationMissingError("No player name configured")
            logger.log_event(
                "stats",
                "fetch_start",
                level=logging.DEBUG,
                context=context,
                player=settings.player_name,
                platform=settings.platform,
            )
            response = await self.stats_client.fetch_player_stats(
                settings.player_name, settings.platform
            )
            stats = aggregate(response)
        except ConfigurationMissingError:
            logger.log_event("stats", "player_missing", level=logging.DEBUG, context=context)
            await self._set_title_if_current(context, button, PROMPT_SET_PLAYER)
            return
        except PlayerNotFoundError:
            logger.log_event(
                "stats",
                "player_not_found",
                level=logging.WARNING,
                context=context,
                player=settings.player_name,
            )
            await self._set_title_if_current(context, button, PROMPT_PLAYER_NOT_FOUND)
            return
        except StatsProviderError as e:
            log_error(
                "Stats fetch failed",
                e,
                context={"context": context, "player": settings.player_name, "status": e.status},
            )
            await self._set_title_if_current(context, button, PROMPT_API_ERROR)
            return
        except Exception as e:  # noqa: BLE001
            log_error(
                "Unexpected error while refreshing stats",
                e,
                context={"context": context, "player": settings.player_name},
            )
            await self._set_title_if_current(context, button, PROMPT_API_ERROR)
            return

        if not self._is_current(context, button):
            logger.log_event("stats", "stale_result", level=logging.DEBUG, context=context)
            return
        self.stats_cache[context] = stats
        logger.log_event(
            "stats",
            "fetch_success",
            context=context,
            player=stats.player_name,
            kd=stats.kd,
            kills=format_number(stats.kills),
            win_rate=stats.win_rate,
        )
        await self.render(context)

    # ---- outbound ----
    async def render(self, context: str) -> None:
        """Send the title for the button's current mode; no-op without cached stats."""
        button = self.contexts.get(context)
        stats = self.stats_cache.get(context)
        if button is None or stats is None:
            return
        await self.set_title(context, format_title(button.mode, stats))

    async def set_title(self, context: str, title: str) -> None:
        try:
            await self.transport.send_json(
                set_title_message(context, title, TITLE_TARGET_BOTH)
            )
        except StreamDeckError as e:
            logger.log_event(
                "button",
                "title_send_failed",
                level=logging.WARNING,
                context=context,
                error=str(e),
            )

    async def _set_title_if_current(
        self, context: str, button: ButtonContext, title: str
    ) -> None:
        if self._is_current(context, button):
            await self.set_title(context, title)

    # ---- lifecycle ----
    async def wait_idle(self) -> None:
        """Wait until no fetch is in flight for any button."""
        while True:
            pending = [
                b.fetch_task
                for b in self.contexts.values()
                if b.fetch_task is not None and not b.fetch_task.done()
            ]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    async def shutdown(self) -> None:
        """Cancel every button's tasks and drop all state."""
        tasks: list[asyncio.Task] = []
        for button in self.contexts.values():
            tasks.extend(t for t in (button.refresh_task, button.fetch_task) if t is not None)
            button.cancel_tasks()
        self.contexts.clear()
        self.stats_cache.clear()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    @staticmethod
    def _warn_unknown_platform(button: ButtonContext) -> None:
        platform = button.settings.platform
        if platform not in KNOWN_PLATFORMS:
            logger.log_event(
                "button",
                "unknown_platform",
                level=logging.WARNING,
                context=button.context,
                player=button.settings.player_name,
                platform=platform,
            )
