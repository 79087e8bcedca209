"""
Structured logging facade with a Google Cloud Logging backend.

- Logger / CtxLogger: per-level formatting methods and enabled checks
- DefaultLogger: local structlog pipeline (console/json on stdio)
- GCLogger: Cloud Logging entries with severity mapping and trace correlation
- CloudTraceMiddleware: copies X-Cloud-Trace-Context into the request context

Design Pattern: Strategy Pattern for transport abstraction.
Library: structlog + orjson locally, google-cloud-logging remotely.
"""

from .api import CtxLogger, Logger, LoggerFactory
from .context import CLOUD_TRACE_CONTEXT, current_context, use_context, with_value
from .core import configure_logging, get_logger
from .default import DefaultLogger, DefaultLoggerFactory
from .factory import create_factory, setup
from .gcl import GCLogger, GCLoggerFactory
from .levels import Level
from .middleware import CloudTraceMiddleware

__all__ = [
    "CLOUD_TRACE_CONTEXT",
    "CloudTraceMiddleware",
    "CtxLogger",
    "DefaultLogger",
    "DefaultLoggerFactory",
    "GCLogger",
    "GCLoggerFactory",
    "Level",
    "Logger",
    "LoggerFactory",
    "configure_logging",
    "create_factory",
    "current_context",
    "get_logger",
    "setup",
    "use_context",
    "with_value",
]
