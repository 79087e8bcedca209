"""
Default backend: delegates to the local structlog pipeline.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from .api import CtxLogger, LoggerFactory, format_message
from .context import RequestContext, trace_from
from .core import default_level, get_logger
from .levels import Level

_METHODS = {
    Level.TRACE: "debug",
    Level.DEBUG: "debug",
    Level.INFO: "info",
    Level.WARN: "warning",
    Level.ERROR: "error",
}


class DefaultLogger(CtxLogger):
    """Logger backed by ``structlog``; call ``configure_logging`` once at startup."""

    def __init__(self, name: str, parent: Optional["DefaultLogger"] = None):
        super().__init__(parent)
        self.name = name
        self._logger = get_logger(name)

    def print_ctx(self, ctx: Optional[RequestContext], level: Level, fmt: str, args: Sequence[Any]) -> None:
        if not self.loggable(level):
            return
        method = _METHODS.get(level)
        if method is None:
            return
        kw: dict[str, Any] = {}
        if level == Level.TRACE:
            kw["severity"] = "TRACE"
        trace = trace_from(ctx)
        if trace:
            kw["trace"] = trace
        getattr(self._logger, method)(format_message(fmt, args), **kw)


class DefaultLoggerFactory(LoggerFactory):
    """Loggers share a root holding ``level``, or the ``configure_logging`` default."""

    def __init__(self, *, level: Optional[Level] = None):
        self.root = DefaultLogger("root")
        self.root.set_level(default_level() if level is None else level)

    def get_logger(self, name: str) -> DefaultLogger:
        return DefaultLogger(name, parent=self.root)
