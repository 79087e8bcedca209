"""
Core logging configuration and initialization logic.

``configure_logging`` is the one explicit process-start step: it wires the
structlog pipeline that backs ``DefaultLogger`` and the fallback logger the
cloud transports report their own failures to.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

import structlog
from structlog.typing import EventDict, FilteringBoundLogger, WrappedLogger

from .config import LogFormat
from .levels import Level
from .sinks import BaseSink, StdioSink

# =============================================================================
# Global State
# =============================================================================

_sinks: list[BaseSink] = []

# Threshold seeded by configure_logging for factories created without one.
_default_level: Level = Level.INFO

FALLBACK_LOGGER_NAME = "gclogger"


def get_logger(name: str | None = None) -> FilteringBoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(_name=name or "root")


def get_fallback_logger() -> FilteringBoundLogger:
    """Local logger used when an entry cannot reach its transport."""
    return get_logger(FALLBACK_LOGGER_NAME)


# =============================================================================
# Structlog Processors
# =============================================================================


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add ISO 8601 timestamp to log event."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def add_logger_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add logger name to log event."""
    event_dict["logger"] = event_dict.get("_name", "root")
    event_dict.pop("_name", None)
    return event_dict


def apply_severity(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Let an explicit ``severity`` (e.g. TRACE) override the method-derived level."""
    severity = event_dict.pop("severity", None)
    if severity:
        event_dict["level"] = str(severity).lower()
    return event_dict


def rename_event_key(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Rename 'event' to 'message' for GCloud compatibility."""
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


def multi_sink_renderer(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
    """Render log to all configured sinks. Returns empty to suppress default output."""
    for sink in _sinks:
        try:
            sink.emit(event_dict)
        except Exception:
            pass  # a broken sink must not break the caller
    return ""


# =============================================================================
# Configuration Logic
# =============================================================================


class _NopFile:
    def write(self, s: str) -> None:
        pass

    def flush(self) -> None:
        pass


_NOP_FILE = _NopFile()


class SilentPrintLoggerFactory:
    """Logger factory that returns a logger writing to nowhere."""

    def __call__(self, *args: Any) -> structlog.PrintLogger:
        return structlog.PrintLogger(file=_NOP_FILE)


def _initialize_sinks(sinks: str, fmt: str | LogFormat, stream: TextIO | None) -> None:
    """Initialize configured sinks based on input."""
    for sink in _sinks:
        sink.close()
    _sinks.clear()

    log_format = LogFormat.JSON if fmt.lower() == LogFormat.JSON.value else LogFormat.CONSOLE

    for name in (s.strip().lower() for s in sinks.split(",")):
        if name == "stdio":
            _sinks.append(StdioSink(fmt=log_format, stream=stream or sys.stdout))


def _configure_structlog() -> None:
    """Configure structlog processors and factory."""
    shared_processors = [
        structlog.stdlib.add_log_level,
        apply_severity,
        add_timestamp,
        add_logger_name,
        rename_event_key,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=shared_processors + [multi_sink_renderer],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
        context_class=dict,
        logger_factory=SilentPrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def configure_logging(
    *,
    level: str | Level = "INFO",
    sinks: str = "stdio",
    fmt: str | LogFormat = LogFormat.CONSOLE,
    stream: TextIO | None = None,
) -> None:
    """
    Configure the local logging pipeline.

    Output lines carry no prefix beyond what the sink renders, so JSON lines
    stay parseable by log agents that read stdout.

    Args:
        level: Default threshold for loggers built without one (TRACE ... OFF).
            The structlog pipeline itself does not filter; each logger's
            level gate is the only threshold.
        sinks: Comma-separated sink names (stdio)
        fmt: Output format for stdio sink (console, json)
        stream: Stream for the stdio sink (default: sys.stdout)
    """
    global _default_level
    if not isinstance(level, Level):
        level = Level.parse(level)
    _default_level = level
    _initialize_sinks(sinks, fmt, stream)
    _configure_structlog()


def reset_logging() -> None:
    """Close sinks and restore structlog defaults."""
    global _default_level
    _default_level = Level.INFO
    for sink in _sinks:
        sink.close()
    _sinks.clear()
    structlog.reset_defaults()


def default_level() -> Level:
    """Threshold seeded by the last ``configure_logging`` call."""
    return _default_level
