"""
Log levels and the level gate shared by every logger implementation.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Optional

from .exceptions import InvalidLevelError

# structlog / stdlib have no TRACE; keep it below DEBUG.
TRACE_STDLIB = 5


class Level(IntEnum):
    """Ordered log severity threshold.

    ``UNINITIALIZED`` is the zero value and never a real threshold: a logger
    holding it defers to its parent.
    """

    UNINITIALIZED = 0
    TRACE = 1
    DEBUG = 2
    INFO = 3
    WARN = 4
    ERROR = 5
    OFF = 6

    @classmethod
    def parse(cls, name: str) -> "Level":
        key = name.strip().upper()
        key = _ALIASES.get(key, key)
        if key == "UNINITIALIZED" or key not in cls.__members__:
            raise InvalidLevelError(name)
        return cls[key]

    @property
    def stdlib(self) -> int:
        return _STDLIB_LEVELS[self]


_ALIASES = {"WARNING": "WARN", "CRITICAL": "ERROR", "NONE": "OFF"}

_STDLIB_LEVELS = {
    Level.UNINITIALIZED: logging.NOTSET,
    Level.TRACE: TRACE_STDLIB,
    Level.DEBUG: logging.DEBUG,
    Level.INFO: logging.INFO,
    Level.WARN: logging.WARNING,
    Level.ERROR: logging.ERROR,
    Level.OFF: logging.CRITICAL + 10,
}


class LevelGate:
    """Level threshold with parent inheritance.

    ``parent`` is a plain back-reference to a longer-lived logger; children
    never own their parent and parents never track their children.
    """

    def __init__(self, parent: Optional["LevelGate"] = None) -> None:
        self._level = Level.UNINITIALIZED
        self.parent = parent

    @property
    def level(self) -> Level:
        """Level of this logger or the nearest ancestor that has one set."""
        gate: Optional[LevelGate] = self
        while gate is not None:
            if gate._level != Level.UNINITIALIZED:
                return gate._level
            gate = gate.parent
        return Level.OFF

    def set_level(self, level: Level) -> None:
        self._level = Level(level)

    def loggable(self, level: Level) -> bool:
        return level >= self.level
