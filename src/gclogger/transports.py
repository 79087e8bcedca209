"""
Transports that ship a finished LogEntry to Google Cloud Logging.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Optional, TextIO

from .core import get_fallback_logger
from .entry import DEFAULT_SEVERITY, LogEntry
from .exceptions import ClientUnavailableError

if TYPE_CHECKING:
    from google.cloud.logging import Client as GCloudLoggingClient

ClientFactory = Callable[..., "GCloudLoggingClient"]


class Transport(ABC):
    """Backend that persists or ships a log entry."""

    @abstractmethod
    def send(self, log_name: str, entry: LogEntry) -> None:
        ...


class CloudLoggingTransport(Transport):
    """Sends each entry through the Cloud Logging API.

    A client is created per entry and closed right after the write. Failing
    to create one exits the process unless ``fatal_on_client_error`` is off,
    in which case the entry is dropped.
    """

    def __init__(
        self,
        project_id: Optional[str],
        *,
        client_factory: Optional[ClientFactory] = None,
        fallback: Any = None,
        fatal_on_client_error: bool = True,
    ):
        self.project_id = project_id
        self._client_factory = client_factory
        self._fallback = fallback or get_fallback_logger()
        self._fatal_on_client_error = fatal_on_client_error

    def _acquire_client(self) -> "GCloudLoggingClient":
        factory = self._client_factory
        if factory is None:
            from google.cloud import logging as gcloud_logging

            factory = gcloud_logging.Client
        try:
            return factory(project=self.project_id)
        except Exception as exc:
            raise ClientUnavailableError(project_id=self.project_id, cause=exc) from exc

    def send(self, log_name: str, entry: LogEntry) -> None:
        if entry.render(self._fallback) is None:
            return

        try:
            client = self._acquire_client()
        except ClientUnavailableError as exc:
            self._fallback.critical(str(exc), project_id=self.project_id, log_name=log_name)
            if self._fatal_on_client_error:
                sys.exit(1)
            return

        kwargs: dict[str, Any] = {"severity": entry.severity or DEFAULT_SEVERITY}
        if entry.trace:
            kwargs["trace"] = entry.trace
        try:
            client.logger(log_name).log_struct(entry.to_payload(), **kwargs)
        except Exception as exc:
            # Write failures never reach the caller; the entry is dropped.
            self._fallback.error("cloud logging write failed", error=str(exc), log_name=log_name)
        finally:
            client.close()


class StructuredStdoutTransport(Transport):
    """Writes one JSON line per entry for the Cloud Run / Functions log agent."""

    def __init__(self, stream: Optional[TextIO] = None, *, fallback: Any = None):
        self._stream = stream
        self._fallback = fallback or get_fallback_logger()

    def send(self, log_name: str, entry: LogEntry) -> None:
        line = entry.render(self._fallback)
        if line is None:
            return
        stream = self._stream or sys.stdout
        stream.write(line + "\n")
        stream.flush()
