"""Tests for logging helpers."""
import io
import logging
import sys

from common.logging_utils import Timer, configure_logging, extra_context, safe_url


class TestSafeUrl:
    """URL scrubbing for logs."""

    def test_strips_credentials_and_query(self):
        assert safe_url("https://user:pw@host.example:8443/pypi/x/json?token=abc") == \
            "https://host.example:8443/pypi/x/json"

    def test_plain_url_unchanged(self):
        assert safe_url("https://pypi.org/pypi/six/json") == "https://pypi.org/pypi/six/json"


class TestExtraContext:
    """Structured log payloads."""

    def test_drops_none_and_redacts(self):
        ctx = extra_context(event="x", outcome=None, api_token="abc")
        assert ctx == {"event": "x", "api_token": "***"}


class TestConfigureLogging:
    """Root logger setup."""

    def test_single_handler(self):
        configure_logging("DEBUG")
        configure_logging("WARNING")
        root = logging.getLogger()
        ours = [h for h in root.handlers if getattr(h, "_modgen_handler", False)]
        assert len(ours) == 1
        assert root.level == logging.WARNING

    def test_reconfigure_after_stderr_closed(self, monkeypatch):
        first = io.StringIO()
        monkeypatch.setattr(sys, "stderr", first)
        configure_logging("INFO")
        first.close()

        second = io.StringIO()
        monkeypatch.setattr(sys, "stderr", second)
        configure_logging("INFO")
        logging.getLogger("modgen.test").warning("still logging")
        assert "still logging" in second.getvalue()

    def test_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("MODGEN_LOG_LEVEL", "error")
        configure_logging(None)
        assert logging.getLogger().level == logging.ERROR


def test_timer_measures_duration():
    with Timer() as t:
        pass
    assert t.duration_ms() >= 0
