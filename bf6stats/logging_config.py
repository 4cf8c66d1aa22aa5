r"""
Logging configuration module for the BF6 Stats Stream Deck plugin.

Provides a configurable logging setup using the colorlog library with
structured error logging and aggregation capabilities.
"""

import atexit
import logging
import os
import sys
import time
from collections import defaultdict
from typing import Any

import colorlog

from .constants import ERROR_AGGREGATOR_MAX_PER_TYPE


class ErrorAggregator:
    """Aggregates error occurrences per category for summary reporting.

    The plugin runs for as long as the Stream Deck application is open, so
    only the most recent entries per category are retained.
    """

    def __init__(self, max_per_type: int = ERROR_AGGREGATOR_MAX_PER_TYPE):
        self.errors: dict[str, list[dict[str, Any]]] = defaultdict(list)
        self.max_per_type = max_per_type
        self.start_time = time.time()

    def record_error(
        self, error_type: str, message: str, context: dict[str, Any] | None = None
    ) -> None:
        """Record an error occurrence with context."""
        entries = self.errors[error_type]
        entries.append(
            {"timestamp": time.time(), "message": message, "context": context or {}}
        )
        if len(entries) > self.max_per_type:
            del entries[: len(entries) - self.max_per_type]

    def get_error_summary(self) -> dict[str, Any]:
        """Get a summary of error patterns."""
        summary = {}
        current_time = time.time()
        for error_type, occurrences in self.errors.items():
            recent_count = len(
                [e for e in occurrences if current_time - e["timestamp"] < 3600]
            )
            summary[error_type] = {
                "total_count": len(occurrences),
                "recent_count": recent_count,
                "last_occurrence": occurrences[-1] if occurrences else None,
            }
        return summary

    def clear(self) -> None:
        self.errors.clear()

    def log_summary_report(self) -> None:
        """Log a summary report of error patterns."""
        summary = self.get_error_summary()
        if not summary:
            logging.info("No errors recorded in current session")
            return

        logging.warning("🚨 ERROR SUMMARY REPORT")
        for error_type, stats in summary.items():
            logging.warning(
                f"  {error_type}: {stats['total_count']} total, "
                f"{stats['recent_count']} in last hour"
            )
            if stats["last_occurrence"]:
                logging.warning(f"    Last: {stats['last_occurrence']['message']}")


# Global error aggregator instance
error_aggregator = ErrorAggregator()


def log_structured_error(
    error_type: str,
    message: str,
    exception: Exception | None = None,
    context: dict[str, Any] | None = None,
    level: int = logging.ERROR,
) -> None:
    """Log an error with structured context and record it in the aggregator.

    Args:
        error_type: Category of the error (e.g., 'network', 'provider', 'transport')
        message: Descriptive error message
        exception: The exception that occurred (optional)
        context: Additional context data for debugging
        level: Logging level (default: ERROR)
    """
    structured_message = f"[{error_type.upper()}] {message}"

    if exception:
        structured_message += (
            f" | Exception: {type(exception).__name__}: {str(exception)}"
        )

    if context:
        context_str = " | ".join(f"{k}={v}" for k, v in context.items())
        structured_message += f" | Context: {context_str}"

    logging.log(level, structured_message)
    error_aggregator.record_error(error_type, message, context)


class LoggerConfigurator:
    """Handles logging configuration using colorlog.

    Supports environment variable configuration for log level and log file.
    """

    # The exit summary is registered once per process however often logging
    # is reconfigured.
    _summary_registered = False

    def __init__(self, config: dict[str, Any] | None = None):
        """Initialize the configurator.

        Args:
            config: Optional overrides; recognised keys are ``debug`` and ``log_file``.
        """
        self.config = config or {}

    def _log_level(self) -> int:
        if "debug" in self.config:
            return logging.DEBUG if self.config["debug"] else logging.INFO
        debug_env = os.environ.get("DEBUG", "").lower()
        return logging.DEBUG if debug_env in ("true", "1", "yes") else logging.INFO

    def _log_file(self) -> str | None:
        return self.config.get("log_file") or os.environ.get("BF6STATS_LOG_FILE")

    def configure(self) -> None:
        """Configure the root logger with colored console output.

        Uses environment variables:
        - DEBUG: Set to 'true', '1', or 'yes' for DEBUG level, otherwise INFO
        - BF6STATS_LOG_FILE: Optional path of a plain-text log file
        """
        log_level = self._log_level()

        formatter = colorlog.ColoredFormatter(
            "%(asctime)s %(log_color)s%(levelname)-8s%(reset)s %(message_log_color)s%(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "magenta",
            },
            secondary_log_colors={
                "message": {
                    "ERROR": "red",
                    "CRITICAL": "magenta",
                }
            },
            reset=True,
        )

        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(formatter)
        handlers: list[logging.Handler] = [handler]

        log_file = self._log_file()
        if log_file:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
                )
            )
            handlers.append(file_handler)

        logging.basicConfig(level=log_level, handlers=handlers, force=True)
        logging.getLogger().setLevel(log_level)

        # Library chatter is only useful when debugging the libraries themselves
        logging.getLogger("websockets").setLevel(logging.INFO)
        logging.getLogger("aiohttp").setLevel(logging.INFO)

        if not LoggerConfigurator._summary_registered:
            atexit.register(self._log_final_error_summary)
            LoggerConfigurator._summary_registered = True

    def _log_final_error_summary(self) -> None:
        """Log final error summary on plugin exit."""
        try:
            logging.info("📊 Final error summary before shutdown:")
            error_aggregator.log_summary_report()
        except Exception as e:
            logging.error(f"Failed to log final error summary: {e}")
