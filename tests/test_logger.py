import json
import logging

from app.observability.logger import init_sentry, log_briefing, log_error, redact_subject, timing


def _entries(caplog):
    return [json.loads(r.getMessage()) for r in caplog.records if r.name == "app.observability.logger"]


class TestRedaction:
    """Test subject redaction before logging."""

    def test_redact_subject(self):
        """Test that secret-looking subjects are hidden and long ones truncated."""
        assert redact_subject("Meeting Reflection Briefing - Sync") == "Meeting Reflection Briefing - Sync"
        assert redact_subject("Your password reset") == "[REDACTED]"
        assert redact_subject("x" * 150) == "x" * 97 + "..."


class TestStructuredLogs:
    """Test the JSON log lines."""

    def test_log_briefing_sent(self, caplog):
        """Test that a sent briefing logs counts and ids, not addresses."""
        caplog.set_level(logging.INFO, logger="app.observability.logger")

        log_briefing(
            "sent",
            "m1",
            "console",
            "Meeting Reflection Briefing - Sync",
            ["ava@example.com"],
            message_id="MSG-1",
            duration_ms=12.3456,
            answers_count=2,
        )

        record = caplog.records[-1]
        entry = json.loads(record.getMessage())
        assert record.levelno == logging.INFO
        assert entry["event"] == "briefing"
        assert entry["outcome"] == "sent"
        assert entry["driver"] == "console"
        assert entry["meeting_id"] == "m1"
        assert entry["recipients_count"] == 1
        assert entry["message_id"] == "MSG-1"
        assert entry["duration_ms"] == 12.35
        assert entry["answers_count"] == 2
        assert entry["timestamp"].endswith("Z")
        assert "ava@example.com" not in record.getMessage()

    def test_log_briefing_failed_is_error(self, caplog):
        """Test that a failed delivery is logged at ERROR."""
        caplog.set_level(logging.INFO, logger="app.observability.logger")
        log_briefing("failed", "m1", "smtp", "Subject", ["a@example.com"], error="relay down")
        assert caplog.records[-1].levelno == logging.ERROR
        assert json.loads(caplog.records[-1].getMessage())["error"] == "relay down"

    def test_log_error_includes_type_and_context(self, caplog):
        """Test that errors log their type and the given context."""
        caplog.set_level(logging.INFO, logger="app.observability.logger")
        log_error(RuntimeError("boom"), {"route": "send-meeting-briefing"})
        entry = _entries(caplog)[-1]
        assert entry["error_type"] == "RuntimeError"
        assert entry["route"] == "send-meeting-briefing"


class TestTiming:
    """Test the timing helper."""

    def test_records_and_logs_duration(self, caplog):
        """Test that the operation name and duration are logged at DEBUG."""
        caplog.set_level(logging.DEBUG, logger="app.observability.logger")
        with timing("send_briefing") as watch:
            pass

        assert watch.duration_ms is not None and watch.duration_ms >= 0
        entry = _entries(caplog)[-1]
        assert entry["operation"] == "send_briefing"
        assert entry["ok"] is True


class TestSentry:
    """Test Sentry gating."""

    def test_sentry_disabled_by_default(self, monkeypatch):
        """Test that Sentry stays off without OBS_ENABLED and a DSN."""
        monkeypatch.delenv("OBS_ENABLED", raising=False)
        assert init_sentry() is False

        monkeypatch.setenv("OBS_ENABLED", "true")
        monkeypatch.delenv("SENTRY_DSN", raising=False)
        assert init_sentry() is False
