"""WebSocket connection to the Stream Deck application."""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import websockets
from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..constants import (
    STREAMDECK_CONNECT_MAX_ATTEMPTS,
    STREAMDECK_CONNECT_MAX_BACKOFF_SECONDS,
    STREAMDECK_HOST,
)
from ..errors.streamdeck import StreamDeckConnectionError
from ..logs import logger
from .events import StreamDeckEvent

WEBSOCKET_NOT_CONNECTED_ERROR = "WebSocket not connected"

EventHandler = Callable[[StreamDeckEvent], Awaitable[None]]


class StreamDeckConnection:
    """Registers the plugin with the Stream Deck application and relays messages.

    Attributes:
        port (int): Local port announced by the host on launch.
        plugin_uuid (str): Plugin instance id announced by the host.
        register_event (str): Event name to register with.
        ws: Active websocket connection, or None.
    """

    def __init__(
        self,
        port: int,
        plugin_uuid: str,
        register_event: str,
        *,
        host: str = STREAMDECK_HOST,
        max_attempts: int = STREAMDECK_CONNECT_MAX_ATTEMPTS,
        max_backoff: float = STREAMDECK_CONNECT_MAX_BACKOFF_SECONDS,
    ) -> None:
        self.port = port
        self.plugin_uuid = plugin_uuid
        self.register_event = register_event
        self.url = f"ws://{host}:{port}"
        self.max_attempts = max(1, max_attempts)
        self.max_backoff = max_backoff
        self.ws: Any = None

    async def connect(self) -> None:
        """Open the socket, retrying refused connects, then register.

        Raises:
            StreamDeckConnectionError: All attempts failed or registration failed.
        """
        logger.log_event("streamdeck", "connecting", url=self.url)

        def before_sleep(retry_state) -> None:  # noqa: ANN001
            logger.log_event(
                "streamdeck",
                "connect_retry",
                level=logging.WARNING,
                attempt=retry_state.attempt_number,
            )

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=0.5, max=self.max_backoff),
            retry=retry_if_exception_type((OSError, TimeoutError)),
            before_sleep=before_sleep,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    self.ws = await websockets.connect(self.url, ping_interval=None)
        except RetryError as e:
            cause = e.last_attempt.exception()
            raise StreamDeckConnectionError(
                f"WebSocket connection failed after {self.max_attempts} attempts: {cause}",
                operation_type="connect",
            ) from cause
        except (OSError, TimeoutError, websockets.InvalidHandshake) as e:
            raise StreamDeckConnectionError(
                f"WebSocket connection failed: {str(e)}", operation_type="connect"
            ) from e
        logger.log_event("streamdeck", "connected")

        await self.send_json({"event": self.register_event, "uuid": self.plugin_uuid})
        logger.log_event("streamdeck", "registered", uuid=self.plugin_uuid)

    async def send_json(self, data: dict[str, Any]) -> None:
        """Send one JSON message to the host.

        Raises:
            StreamDeckConnectionError: If not connected or the send fails.
        """
        if self.ws is None:
            raise StreamDeckConnectionError(
                WEBSOCKET_NOT_CONNECTED_ERROR, operation_type="send"
            )
        try:
            await self.ws.send(json.dumps(data))
        except websockets.ConnectionClosed as e:
            raise StreamDeckConnectionError(
                f"WebSocket closed: {str(e)}", operation_type="send"
            ) from e
        except OSError as e:
            raise StreamDeckConnectionError(
                f"WebSocket send failed: {str(e)}", operation_type="send"
            ) from e

    async def listen(self, handler: EventHandler) -> None:
        """Dispatch inbound events to ``handler`` until the host closes the socket.

        Malformed frames are logged and skipped.

        Raises:
            StreamDeckConnectionError: If not connected or the socket drops abnormally.
        """
        if self.ws is None:
            raise StreamDeckConnectionError(
                WEBSOCKET_NOT_CONNECTED_ERROR, operation_type="receive"
            )
        try:
            async for frame in self.ws:
                try:
                    event = StreamDeckEvent.from_frame(frame)
                except ValueError as e:
                    logger.log_event(
                        "streamdeck",
                        "malformed_frame",
                        level=logging.WARNING,
                        error=str(e)[:200],
                    )
                    continue
                await handler(event)
        except websockets.ConnectionClosedOK:
            pass
        except websockets.ConnectionClosed as e:
            raise StreamDeckConnectionError(
                f"WebSocket closed unexpectedly: {str(e)}", operation_type="receive"
            ) from e
        logger.log_event(
            "streamdeck", "closed", code=getattr(self.ws, "close_code", None)
        )

    async def close(self) -> None:
        """Close the socket if open."""
        if self.ws is None:
            return
        try:
            await self.ws.close()
        except (OSError, websockets.ConnectionClosed) as e:
            logging.warning(f"⚠️ WebSocket close error: {str(e)}")
        self.ws = None
