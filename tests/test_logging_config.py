"""Tests for structured logging configuration."""

import logging

import structlog

from cli.logging_config import _strip_query_strings, setup_logging


class TestLoggingConfig:
    """Test structlog setup modes."""

    def test_console_mode(self, capsys):
        """Console mode uses dev renderer."""
        setup_logging(json_mode=False, level="DEBUG")
        logger = structlog.get_logger()
        logger.info("test message", key="value")
        # Smoke test: no crash
        capsys.readouterr()

    def test_json_mode(self):
        setup_logging(json_mode=True, level="DEBUG")
        logging.getLogger("test_json").info("json test")

    def test_level_filtering(self):
        """Log level filters lower messages."""
        setup_logging(json_mode=False, level="WARNING")
        assert logging.getLogger().level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self):
        setup_logging(level="chatty")
        assert logging.getLogger().level == logging.INFO

    def test_single_root_handler(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger().handlers) == 1

    def test_processor_chain(self):
        setup_logging(json_mode=True, level="DEBUG")
        processors = structlog.get_config()["processors"]
        assert _strip_query_strings in processors

    def test_default_level_is_info(self):
        """Default level param is INFO."""
        setup_logging()
        assert logging.getLogger().level == logging.INFO


class TestStripQueryStrings:
    def test_query_removed(self):
        event = {
            "event": "feed.fetch",
            "url": "https://feed.example.com/v2/history/getLastResult?gameId=ktrng_3932&tableId=1",
        }
        out = _strip_query_strings(None, "info", event)
        assert out["url"] == "https://feed.example.com/v2/history/getLastResult?..."

    def test_url_inside_message(self):
        event = {"event": "x", "error": "GET http://a.example/p?x=1 failed"}
        assert _strip_query_strings(None, "info", event)["error"] == "GET http://a.example/p?... failed"

    def test_plain_values_untouched(self):
        event = {"event": "ensemble.prediction", "session": "#0000112", "confidence": 0.7}
        assert _strip_query_strings(None, "info", dict(event)) == event

    def test_url_without_query_untouched(self):
        event = {"url": "https://feed.example.com/v2/history"}
        assert _strip_query_strings(None, "info", dict(event)) == event
