"""Event logger used across the plugin.

Records are emitted through the ``bf6stats`` stdlib logger and rendered by
whatever handlers :class:`~bf6stats.logging_config.LoggerConfigurator`
installed on the root logger.
"""

from __future__ import annotations

import logging
import os


class PluginLogger:
    def __init__(self, name: str = "bf6stats") -> None:
        self.logger = logging.getLogger(name)

    def set_level(self, level: int) -> None:
        self.logger.setLevel(level)

    def log_event(
        self,
        domain: str,
        action: str,
        level: int = logging.INFO,
        human: str | None = None,
        *,
        exc_info: bool = False,
        **kwargs: object,
    ) -> None:
        event_name = f"{domain}_{action}".lower()
        human_text = human
        derived = False
        if human_text is None:
            # Local import to avoid cyclic import issues during module init.
            from .event_catalog import EVENT_TEMPLATES as _event_templates

            template = _event_templates.get((domain, action))
            if template:
                try:
                    human_text = template.format(**kwargs)
                except (KeyError, IndexError, ValueError):
                    human_text = template
            else:
                human_text = f"{domain.replace('_', ' ')}: {action.replace('_', ' ')}"
                derived = True
        if derived:
            kwargs.setdefault("derived", True)
        self._log(level, event_name, human_text, exc_info=exc_info, **kwargs)

    def _log(
        self,
        level: int,
        event_name: str,
        human_text: str | None,
        exc_info: bool = False,
        **kwargs: object,
    ) -> None:
        kw: dict[str, object] = dict(kwargs)
        player, context = self._extract_reserved(kw)
        prefix = self._build_prefix(player, context)
        msg = (
            self._build_debug_message(event_name, prefix, human_text, kw)
            if self._is_debug_enabled()
            else self._build_concise_message(event_name, prefix, human_text)
        )
        self.logger.log(level, msg, exc_info=exc_info)

    @staticmethod
    def _is_debug_enabled() -> bool:
        return os.environ.get("DEBUG", "false").lower() in ("true", "1", "yes")

    @staticmethod
    def _extract_reserved(kwargs: dict[str, object]) -> tuple[str | None, str | None]:
        player_o = kwargs.pop("player", None)
        context_o = kwargs.pop("context", None)
        player = player_o if isinstance(player_o, str) and player_o else None
        context = context_o if isinstance(context_o, str) and context_o else None
        return player, context

    @staticmethod
    def _build_prefix(player: str | None, context: str | None) -> str:
        # Host context ids are long hex strings; the tail is enough to tell buttons apart
        label = player or "plugin"
        core = f"{label}@{context[-8:]}" if context else label
        padded = core.ljust(28)[:28]
        return f"[{padded}]"

    @staticmethod
    def _build_debug_message(
        event_name: str,
        prefix: str,
        human_text: str | None,
        kwargs: dict[str, object],
    ) -> str:
        context = ", ".join(f"{k}={v}" for k, v in kwargs.items())
        width = 28
        if len(event_name) <= width:
            ev = event_name.ljust(width)
        else:
            ev = event_name[: width - 1] + "…"
        base = f"{ev} {prefix}"
        if human_text:
            base = f"{base} {human_text}"
        if context:
            base = f"{base} ({context})"
        return base

    @staticmethod
    def _build_concise_message(
        event_name: str, prefix: str, human_text: str | None
    ) -> str:
        return f"{prefix} {human_text or event_name}"


logger = PluginLogger()
