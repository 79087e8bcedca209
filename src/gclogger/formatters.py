"""
Console rendering for the local sink.
"""

from __future__ import annotations

from datetime import datetime, timezone
from structlog.typing import EventDict


class ConsoleFormatter:
    """Human-readable console rendering (fixed width, right-aligned columns)."""

    _RESET = "\x1b[0m"
    _DIM = "\x1b[2m"
    _TIMESTAMP = "\x1b[90m"
    _LOGGER = "\x1b[35m"
    _KEY = "\x1b[34m"
    _LEVEL_COLORS = {
        "TRACE": "\x1b[2;36m",
        "DEBUG": "\x1b[36m",
        "INFO": "\x1b[32m",
        "WARNING": "\x1b[33m",
        "WARN": "\x1b[33m",
        "ERROR": "\x1b[31m",
        "CRITICAL": "\x1b[1;31m",
    }

    EXCLUDED_KEYS = {"level", "message", "event", "logger", "timestamp", "_name"}
    TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
    TIMESTAMP_WIDTH = 19
    LEVEL_WIDTH = 8
    LOGGER_WIDTH = 32
    SEPARATOR = " | "

    @staticmethod
    def _fit_right(text: str, width: int) -> str:
        if len(text) > width:
            text = "..." + text[-(width - 3) :] if width > 3 else text[-width:]
        return f"{text:>{width}}"

    @classmethod
    def _format_timestamp(cls, raw_timestamp: str | None) -> str:
        if raw_timestamp:
            try:
                dt = datetime.fromisoformat(raw_timestamp.replace("Z", "+00:00"))
                if dt.tzinfo is None:
                    dt = dt.replace(tzinfo=timezone.utc)
                return dt.astimezone().strftime(cls.TIMESTAMP_FORMAT)
            except (ValueError, TypeError):
                pass
        return datetime.now().strftime(cls.TIMESTAMP_FORMAT)

    @classmethod
    def _paint(cls, text: str, color: str | None, use_color: bool) -> str:
        if not use_color or not color:
            return text
        return f"{color}{text}{cls._RESET}"

    @classmethod
    def format(cls, event_dict: EventDict, *, use_color: bool = True) -> str:
        """Format an event dict into an aligned string."""
        level = str(event_dict.get("level", "info")).upper()
        message = str(event_dict.get("message", event_dict.get("event", "")))
        logger_name = str(event_dict.get("logger", "root"))

        extras = [
            f"{cls._paint(k, cls._KEY, use_color)}={cls._paint(str(v), cls._DIM, use_color)}"
            for k, v in event_dict.items()
            if k not in cls.EXCLUDED_KEYS
        ]
        if extras:
            message = f"{message} " + " ".join(extras)

        timestamp = cls._format_timestamp(event_dict.get("timestamp"))
        return cls.SEPARATOR.join(
            [
                cls._paint(cls._fit_right(timestamp, cls.TIMESTAMP_WIDTH), cls._TIMESTAMP, use_color),
                cls._paint(cls._fit_right(level, cls.LEVEL_WIDTH), cls._LEVEL_COLORS.get(level), use_color),
                cls._paint(cls._fit_right(logger_name, cls.LOGGER_WIDTH), cls._LOGGER, use_color),
                message,
            ]
        )
