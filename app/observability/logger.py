"""
Structured JSON log lines and optional Sentry reporting.

Every line is one compact JSON object with a UTC ``timestamp``. Briefing
deliveries are logged with the recipient count only, never the addresses,
and subjects that look like they carry secrets are redacted.
"""

import json
import logging
import os
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional

import sentry_sdk


logger = logging.getLogger(__name__)

REDACT_WORDS = ("password", "secret", "token", "credential")
MAX_SUBJECT_CHARS = 100


def _emit(level: int, fields: Dict[str, Any]) -> None:
    entry = {"timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")}
    entry.update(fields)
    logger.log(level, json.dumps(entry, separators=(",", ":"), default=str))


class Stopwatch:
    """Measures one named operation; the duration is logged at DEBUG on exit."""

    def __init__(self, operation: str):
        self.operation = operation
        self._started: Optional[float] = None
        self.duration_ms: Optional[float] = None

    def __enter__(self) -> "Stopwatch":
        self._started = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.duration_ms = (time.perf_counter() - self._started) * 1000
        _emit(
            logging.DEBUG,
            {
                "operation": self.operation,
                "duration_ms": round(self.duration_ms, 2),
                "ok": exc_type is None,
            },
        )


@contextmanager
def timing(operation: str) -> Iterator[Stopwatch]:
    with Stopwatch(operation) as watch:
        yield watch


def redact_subject(subject: str) -> str:
    lowered = subject.lower()
    if any(word in lowered for word in REDACT_WORDS):
        return "[REDACTED]"
    if len(subject) > MAX_SUBJECT_CHARS:
        return subject[: MAX_SUBJECT_CHARS - 3] + "..."
    return subject


def log_briefing(
    outcome: str,
    meeting_id: str,
    driver: str,
    subject: str,
    recipients: List[str],
    message_id: Optional[str] = None,
    duration_ms: Optional[float] = None,
    **details: Any,
) -> None:
    """
    Log one briefing delivery attempt.

    Args:
        outcome: "sent" or "failed"
        meeting_id: Meeting the briefing summarizes
        driver: Email driver name (console, smtp, sendgrid)
        subject: Email subject, redacted before logging
        recipients: Addresses the briefing went to; only the count is logged
        message_id: Id reported by the driver on success
        duration_ms: Time spent in the driver
        **details: Extra fields such as ``answers_count`` or ``error``
    """
    fields: Dict[str, Any] = {
        "event": "briefing",
        "outcome": outcome,
        "meeting_id": meeting_id,
        "driver": driver,
        "subject": redact_subject(subject),
        "recipients_count": len(recipients),
    }
    if message_id is not None:
        fields["message_id"] = message_id
    if duration_ms is not None:
        fields["duration_ms"] = round(duration_ms, 2)
    fields.update(details)
    _emit(logging.ERROR if outcome == "failed" else logging.INFO, fields)


def log_error(error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
    fields: Dict[str, Any] = {"level": "ERROR", "error": str(error), "error_type": type(error).__name__}
    fields.update(context or {})
    _emit(logging.ERROR, fields)


def log_info(message: str, context: Optional[Dict[str, Any]] = None) -> None:
    fields: Dict[str, Any] = {"level": "INFO", "message": message}
    fields.update(context or {})
    _emit(logging.INFO, fields)


def init_sentry() -> bool:
    """Start Sentry when OBS_ENABLED=true and SENTRY_DSN is set; returns whether it started."""
    if os.getenv("OBS_ENABLED", "false").lower() != "true":
        return False
    dsn = os.getenv("SENTRY_DSN")
    if not dsn:
        logger.info("OBS_ENABLED is set but SENTRY_DSN is empty; Sentry stays off")
        return False

    from sentry_sdk.integrations.fastapi import FastApiIntegration
    from sentry_sdk.integrations.logging import LoggingIntegration

    try:
        sentry_sdk.init(
            dsn=dsn,
            integrations=[
                FastApiIntegration(),
                LoggingIntegration(level=logging.INFO, event_level=logging.ERROR),
            ],
            traces_sample_rate=0.1,
            environment=os.getenv("ENVIRONMENT", "development"),
        )
    except Exception as exc:
        logger.error(f"Sentry initialization failed: {exc}")
        return False
    logger.info("Sentry initialized")
    return True
