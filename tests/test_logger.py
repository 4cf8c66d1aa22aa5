"""
Tests for the event logger and template catalog
"""

import json
import logging

import pytest

from bf6stats.logs import EVENT_TEMPLATES, PluginLogger, reload_event_templates


@pytest.fixture
def plugin_logger(caplog, monkeypatch):
    monkeypatch.delenv("DEBUG", raising=False)
    caplog.set_level(logging.DEBUG, logger="bf6stats.test")
    return PluginLogger("bf6stats.test")


class TestPluginLogger:
    def test_template_is_formatted(self, plugin_logger, caplog):
        plugin_logger.log_event("button", "press", context="0123456789abcdef", player="Foo", mode="kills")
        assert "[Foo@89abcdef" in caplog.text
        assert "Stat mode switched to kills" in caplog.text

    def test_missing_template_is_derived(self, plugin_logger, caplog):
        plugin_logger.log_event("custom_domain", "some_action")
        assert "custom domain: some action" in caplog.text
        assert "[plugin" in caplog.text

    def test_missing_placeholder_falls_back_to_raw_template(self, plugin_logger, caplog):
        plugin_logger.log_event("button", "press")
        assert "Stat mode switched to {mode}" in caplog.text

    def test_explicit_human_text(self, plugin_logger, caplog):
        plugin_logger.log_event("stats", "fetch_start", human="hello there")
        assert "hello there" in caplog.text

    def test_level_is_respected(self, plugin_logger, caplog):
        plugin_logger.log_event("stats", "fetch_failed", level=logging.ERROR)
        assert caplog.records[-1].levelno == logging.ERROR

    def test_debug_mode_includes_event_name_and_context(self, plugin_logger, caplog, monkeypatch):
        monkeypatch.setenv("DEBUG", "true")
        plugin_logger.log_event("stats", "fetch_start", context="ctx", platform="pc")
        message = caplog.records[-1].getMessage()
        assert message.startswith("stats_fetch_start")
        assert "(platform=pc)" in message


class TestEventCatalog:
    def test_catalog_loaded(self):
        assert ("stats", "fetch_success") in EVENT_TEMPLATES

    def test_reload_from_missing_file(self, tmp_path):
        try:
            reload_event_templates(tmp_path / "missing.json")
            assert EVENT_TEMPLATES == {("app", "load_error"): "Event templates file missing"}
        finally:
            reload_event_templates()
        assert ("stats", "fetch_success") in EVENT_TEMPLATES

    def test_reload_ignores_non_string_entries(self, tmp_path):
        path = tmp_path / "templates.json"
        path.write_text(json.dumps({"a": {"b": "text", "c": 1}, "d": "not a mapping"}))
        try:
            reload_event_templates(path)
            assert EVENT_TEMPLATES == {("a", "b"): "text"}
        finally:
            reload_event_templates()
