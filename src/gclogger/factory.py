"""
Backend selection from LoggingSettings.
"""

from __future__ import annotations

from typing import Optional

from .api import LoggerFactory
from .config import LoggingSettings, get_settings
from .core import configure_logging
from .default import DefaultLoggerFactory
from .gcl import GCLoggerFactory
from .transports import CloudLoggingTransport, StructuredStdoutTransport


def create_factory(settings: Optional[LoggingSettings] = None) -> LoggerFactory:
    """Build the logger factory for the configured backend."""
    settings = settings or get_settings()

    if settings.backend == "gcloud":
        transport = CloudLoggingTransport(
            settings.project_id,
            fatal_on_client_error=settings.fatal_on_client_error,
        )
        return GCLoggerFactory(
            settings.project_id,
            level=settings.level,
            component=settings.component,
            log_name=settings.log_name,
            transport=transport,
        )
    if settings.backend == "structured":
        return GCLoggerFactory(
            settings.project_id,
            level=settings.level,
            component=settings.component,
            log_name=settings.log_name,
            transport=StructuredStdoutTransport(),
        )
    return DefaultLoggerFactory(level=settings.level)


def setup(settings: Optional[LoggingSettings] = None) -> LoggerFactory:
    """Process-start helper: configure the local pipeline, then build the factory."""
    settings = settings or get_settings()
    configure_logging(level=settings.level, sinks=settings.sinks, fmt=settings.format)
    return create_factory(settings)
