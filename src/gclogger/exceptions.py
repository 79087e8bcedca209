"""
gclogger exception hierarchy.

Logging must stay out of the caller's way, so almost nothing here reaches
application code: these types travel between the transports and the
adapter that decides whether a failure is fatal.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class GCLoggerError(Exception):
    """Root of all gclogger errors."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class InvalidLevelError(GCLoggerError, ValueError):
    """Raised when a level name cannot be parsed."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Unknown log level '{name}'",
            code="INVALID_LEVEL",
            details={"name": name},
        )


class ClientUnavailableError(GCLoggerError):
    """The Cloud Logging client could not be created."""

    def __init__(self, *, project_id: Optional[str], cause: BaseException) -> None:
        super().__init__(
            f"Failed to create client: {cause}",
            code="CLIENT_UNAVAILABLE",
            details={"project_id": project_id},
        )
        self.__cause__ = cause
