"""
Logger facade shared by every backend.

Design Pattern: Template Method. Subclasses implement a single
level-parameterized primitive; the per-level methods are defined once here.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

from .context import RequestContext, current_context
from .levels import Level, LevelGate


def format_message(fmt: str, args: Sequence[Any]) -> str:
    """%-format ``args`` into ``fmt``, never raising."""
    if not args:
        return fmt
    try:
        return fmt % tuple(args)
    except (TypeError, ValueError, KeyError):
        return f"{fmt} {list(args)!r}"


class Logger(LevelGate, ABC):
    """Formatting method and enabled-check per level."""

    @abstractmethod
    def printf(self, level: Level, fmt: str, args: Sequence[Any]) -> None:
        """Emit ``fmt % args`` at ``level``."""
        ...

    def _log(self, level: Level, fmt: str, args: Sequence[Any]) -> None:
        # Guard before formatting so disabled calls never touch their args.
        if self.loggable(level):
            self.printf(level, fmt, args)

    def trace(self, fmt: str, *args: Any) -> None:
        self._log(Level.TRACE, fmt, args)

    def trace_enabled(self) -> bool:
        return self.loggable(Level.TRACE)

    def debug(self, fmt: str, *args: Any) -> None:
        self._log(Level.DEBUG, fmt, args)

    def debug_enabled(self) -> bool:
        return self.loggable(Level.DEBUG)

    def info(self, fmt: str, *args: Any) -> None:
        self._log(Level.INFO, fmt, args)

    def info_enabled(self) -> bool:
        return self.loggable(Level.INFO)

    def warn(self, fmt: str, *args: Any) -> None:
        self._log(Level.WARN, fmt, args)

    warning = warn

    def warn_enabled(self) -> bool:
        return self.loggable(Level.WARN)

    def error(self, fmt: str, *args: Any) -> None:
        self._log(Level.ERROR, fmt, args)

    def error_enabled(self) -> bool:
        return self.loggable(Level.ERROR)


class CtxLogger(Logger):
    """Logger whose calls can carry a request context for trace correlation."""

    @abstractmethod
    def print_ctx(self, ctx: Optional[RequestContext], level: Level, fmt: str, args: Sequence[Any]) -> None:
        ...

    def printf(self, level: Level, fmt: str, args: Sequence[Any]) -> None:
        self.print_ctx(current_context(), level, fmt, args)

    def _log_ctx(self, ctx: Optional[RequestContext], level: Level, fmt: str, args: Sequence[Any]) -> None:
        if self.loggable(level):
            self.print_ctx(ctx, level, fmt, args)

    def trace_ctx(self, ctx: Optional[RequestContext], fmt: str, *args: Any) -> None:
        self._log_ctx(ctx, Level.TRACE, fmt, args)

    def debug_ctx(self, ctx: Optional[RequestContext], fmt: str, *args: Any) -> None:
        self._log_ctx(ctx, Level.DEBUG, fmt, args)

    def info_ctx(self, ctx: Optional[RequestContext], fmt: str, *args: Any) -> None:
        self._log_ctx(ctx, Level.INFO, fmt, args)

    def warn_ctx(self, ctx: Optional[RequestContext], fmt: str, *args: Any) -> None:
        self._log_ctx(ctx, Level.WARN, fmt, args)

    def error_ctx(self, ctx: Optional[RequestContext], fmt: str, *args: Any) -> None:
        self._log_ctx(ctx, Level.ERROR, fmt, args)


class LoggerFactory(ABC):
    """Produces named loggers bound to one backend."""

    @abstractmethod
    def get_logger(self, name: str) -> Logger:
        ...
