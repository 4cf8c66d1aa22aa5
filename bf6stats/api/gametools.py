"""Thin asynchronous client for the gametools.network Battlefield 6 stats API.

Wraps only the player stats endpoint the plugin needs. If more endpoints are
needed, prefer adding focused methods instead of sprinkling raw request logic
across modules.
"""

from __future__ import annotations

import logging
from typing import Any

import aiohttp
from pydantic import ValidationError

from ..constants import (
    DEFAULT_PLATFORM,
    HTTP_REQUEST_TIMEOUT_SECONDS,
    STATS_API_BASE_URL,
)
from ..errors.handling import handle_api_error
from ..errors.internal import (
    ParsingError,
    PlayerNotFoundError,
    RateLimitError,
    StatsProviderError,
)
from ..stats.models import PlayerStatsResponse


class GameToolsAPI:
    """Asynchronous client for the player stats endpoint.

    Attributes:
        base_url (str): Endpoint URL queried with ``name``/``platform`` params.
        timeout (aiohttp.ClientTimeout): Per-request timeout.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        *,
        base_url: str = STATS_API_BASE_URL,
        timeout: float = HTTP_REQUEST_TIMEOUT_SECONDS,
    ):
        """Initialize the client.

        Args:
            session (aiohttp.ClientSession): The aiohttp session to use for requests.
            base_url (str): Stats endpoint URL.
            timeout (float): Total request timeout in seconds.

        Raises:
            ValueError: If session is not provided.
        """
        if not session:
            raise ValueError("aiohttp session required")
        self._session = session
        self.base_url = base_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)

    @staticmethod
    def build_params(name: str, platform: str | None) -> dict[str, str]:
        """Query parameters for one lookup; aiohttp URL-encodes the values."""
        return {
            "name": name,
            "platform": platform or DEFAULT_PLATFORM,
            "format_values": "true",
        }

    async def fetch_player_stats(
        self, name: str, platform: str | None = DEFAULT_PLATFORM
    ) -> PlayerStatsResponse:
        """Fetch cumulative stats for one player.

        Args:
            name (str): Player name as shown in game.
            platform (str | None): Provider platform id, ``pc`` when empty.

        Returns:
            PlayerStatsResponse: The validated, resolved response.

        Raises:
            RateLimitError: Provider answered 429.
            StatsProviderError: Provider answered any other non-2xx status.
            NetworkError: Connection failure or timeout.
            ParsingError: Body is not a JSON object.
            PlayerNotFoundError: Provider reported errors or no user name.
        """
        params = self.build_params(name, platform)

        async def operation() -> dict[str, Any]:
            async with self._session.get(
                self.base_url, params=params, timeout=self.timeout
            ) as resp:
                logging.debug(
                    f"Stats API response: status={resp.status}, "
                    f"content-type={resp.headers.get('content-type', 'none')}, "
                    f"name={name}, platform={params['platform']}"
                )
                if resp.status == 429:
                    raise RateLimitError(
                        "Stats provider rate limit exceeded",
                        retry_after=resp.headers.get("Retry-After"),
                    )
                if not 200 <= resp.status < 300:
                    raise StatsProviderError(
                        f"Stats provider returned HTTP {resp.status}",
                        status=resp.status,
                    )
                return await resp.json(content_type=None)

        data = await handle_api_error(operation, f"stats lookup for {name}")
        return self.parse_response(data)

    @staticmethod
    def parse_response(data: Any) -> PlayerStatsResponse:
        """Validate a decoded body and ensure it names a resolved player.

        Raises:
            ParsingError: ``data`` is not a JSON object.
            PlayerNotFoundError: The document reports errors or lacks ``userName``.
        """
        if not isinstance(data, dict):
            raise ParsingError(
                f"Stats provider returned {type(data).__name__}, expected an object"
            )
        try:
            response = PlayerStatsResponse.model_validate(data)
        except ValidationError as e:
            raise ParsingError(f"Stats provider body failed validation: {e}") from e
        if not response.is_resolved:
            raise PlayerNotFoundError(
                "Stats provider could not resolve the player",
                data={"errors": response.errors},
            )
        return response
