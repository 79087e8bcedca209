"""
Google Cloud Logging backend, see https://cloud.google.com/logging
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from .api import CtxLogger, LoggerFactory, format_message
from .context import RequestContext, trace_from
from .entry import LogEntry, severity_for
from .levels import Level
from .middleware import CloudTraceMiddleware
from .transports import CloudLoggingTransport, Transport


class GCLogger(CtxLogger):
    """Logger writing to the Cloud Logging log ``log_name``."""

    def __init__(
        self,
        project_id: Optional[str],
        log_name: str,
        component_name: str = "",
        *,
        parent: Optional["GCLogger"] = None,
        transport: Optional[Transport] = None,
    ):
        super().__init__(parent)
        self.project_id = project_id
        self.log_name = log_name
        self.component_name = component_name
        self.transport = transport or CloudLoggingTransport(project_id)

    def print_ctx(self, ctx: Optional[RequestContext], level: Level, fmt: str, args: Sequence[Any]) -> None:
        if not self.loggable(level):
            return
        entry = LogEntry(
            message=format_message(fmt, args),
            severity=severity_for(level),
            component=self.component_name,
            trace=trace_from(ctx),
        )
        self.transport.send(self.log_name, entry)

    def middleware(self) -> tuple[type, dict[str, Any]]:
        """``app.add_middleware(cls, **kwargs)`` arguments for trace propagation."""
        return CloudTraceMiddleware, {"project_id": self.project_id}


class GCLoggerFactory(LoggerFactory):
    """Creates GCLoggers sharing one project, component and transport.

    Loggers are children of a root logger holding the configured level, so
    ``factory.root.set_level`` retunes every logger without its own level.
    """

    def __init__(
        self,
        project_id: Optional[str],
        *,
        level: Level = Level.INFO,
        component: str = "",
        log_name: str = "app",
        transport: Optional[Transport] = None,
    ):
        self.project_id = project_id
        self.component = component
        self.transport = transport or CloudLoggingTransport(project_id)
        self.root = GCLogger(project_id, log_name, component, transport=self.transport)
        self.root.set_level(level)

    def get_logger(self, name: str) -> GCLogger:
        return GCLogger(self.project_id, name, self.component, parent=self.root, transport=self.transport)
