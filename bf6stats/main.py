"""Plugin entry point.

The Stream Deck application starts the plugin executable with::

    -port <port> -pluginUUID <uuid> -registerEvent <event> -info <json>
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

import aiohttp

from . import __version__
from .api.gametools import GameToolsAPI
from .errors.handling import log_error
from .errors.streamdeck import StreamDeckConnectionError
from .logging_config import LoggerConfigurator
from .logs import logger
from .plugin.controller import StatDisplayController
from .streamdeck.connection import StreamDeckConnection
from .streamdeck.events import parse_info


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="bf6stats", description="Battlefield 6 stats Stream Deck plugin"
    )
    parser.add_argument("-port", dest="port", type=int, required=True)
    parser.add_argument("-pluginUUID", dest="plugin_uuid", required=True)
    parser.add_argument("-registerEvent", dest="register_event", required=True)
    parser.add_argument("-info", dest="info", default=None)
    # The host may add arguments in future SDK versions.
    args, _unknown = parser.parse_known_args(argv)
    return args


def _log_host_info(raw_info: str | None) -> None:
    info = parse_info(raw_info)
    application = info.get("application")
    if not isinstance(application, dict):
        return
    logger.log_event(
        "app",
        "host_info",
        application_version=application.get("version", "unknown"),
        application_platform=application.get("platform", "unknown"),
    )


async def run(args: argparse.Namespace) -> None:
    """Connect to the host and serve events until the socket closes."""
    connection = StreamDeckConnection(args.port, args.plugin_uuid, args.register_event)
    async with aiohttp.ClientSession() as session:
        controller = StatDisplayController(connection, GameToolsAPI(session))
        try:
            await connection.connect()
            await connection.listen(controller.handle_event)
        finally:
            await controller.shutdown()
            await connection.close()


def cli(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    LoggerConfigurator().configure()
    logger.log_event("app", "start", version=__version__)
    _log_host_info(args.info)
    try:
        asyncio.run(run(args))
    except KeyboardInterrupt:
        logger.log_event("app", "interrupted", level=logging.WARNING)
    except StreamDeckConnectionError as e:
        log_error("Lost connection to Stream Deck", e, context={"port": args.port})
        return 1
    finally:
        logger.log_event("app", "shutdown")
    return 0


if __name__ == "__main__":
    sys.exit(cli())
