"""
Structured log entry in the shape Cloud Logging expects.

See https://cloud.google.com/logging/docs/structured-logging
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import orjson

from .core import get_fallback_logger
from .levels import Level

DEFAULT_SEVERITY = "INFO"
TRACE_FIELD = "logging.googleapis.com/trace"

SEVERITIES: Dict[Level, str] = {
    Level.TRACE: "DEFAULT",
    Level.DEBUG: "DEBUG",
    Level.INFO: "INFO",
    Level.WARN: "WARNING",
    Level.ERROR: "ERROR",
}


def severity_for(level: Level) -> str:
    return SEVERITIES.get(level, DEFAULT_SEVERITY)


@dataclass(frozen=True)
class LogEntry:
    """One log call, built per emit and discarded after hand-off."""

    message: str
    severity: str = ""
    # Shown by the Log Viewer as jsonPayload.component.
    component: str = ""
    trace: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "message": self.message,
            "severity": self.severity or DEFAULT_SEVERITY,
        }
        if self.component:
            payload["component"] = self.component
        return payload

    def render(self, fallback: Optional[Any] = None) -> Optional[str]:
        """JSON line understood by the Cloud Run / Cloud Functions log agent.

        Returns ``None`` when the entry cannot be serialized; the failure goes
        to ``fallback``.
        """
        record = self.to_payload()
        if self.trace:
            record[TRACE_FIELD] = self.trace
        try:
            return orjson.dumps(record).decode()
        except orjson.JSONEncodeError as exc:
            (fallback or get_fallback_logger()).error(
                "log entry serialization failed", error=str(exc)
            )
            return None
