"""
Request-scoped context used to correlate log entries with a Cloud Trace.

A request context is an immutable mapping. The active one lives in a
ContextVar so it follows the request across ``await`` points and threadpool
hand-offs without being threaded through every call.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional

CLOUD_TRACE_CONTEXT = "X-Cloud-Trace-Context"

RequestContext = Mapping[str, Any]

EMPTY_CONTEXT: RequestContext = MappingProxyType({})

_request_context: ContextVar[RequestContext] = ContextVar("gclogger_request_context", default=EMPTY_CONTEXT)


def with_value(ctx: Optional[RequestContext], key: str, value: Any) -> RequestContext:
    """Return a copy of ``ctx`` carrying ``key``; ``ctx`` itself is untouched."""
    data = dict(ctx or {})
    data[key] = value
    return MappingProxyType(data)


def current_context() -> RequestContext:
    return _request_context.get()


@contextmanager
def use_context(ctx: RequestContext) -> Iterator[RequestContext]:
    """Make ``ctx`` the current request context for the enclosed block."""
    token = _request_context.set(ctx)
    try:
        yield ctx
    finally:
        _request_context.reset(token)


def trace_from(ctx: Optional[RequestContext] = None) -> Optional[str]:
    """Trace token stored in ``ctx`` (or the current context), if any."""
    if ctx is None:
        ctx = current_context()
    try:
        token = ctx.get(CLOUD_TRACE_CONTEXT)
    except AttributeError:
        return None
    if isinstance(token, str) and token:
        return token
    return None


def trace_resource(project_id: Optional[str], header: Optional[str]) -> Optional[str]:
    """
    Build the Cloud Trace resource name from an ``X-Cloud-Trace-Context`` value.

    The header looks like ``TRACE_ID/SPAN_ID;o=OPTIONS``; only the trace id is
    kept. See https://cloud.google.com/trace/docs/trace-context
    """
    if not project_id or not header:
        return None
    trace_id = header.split("/")[0].strip()
    if not trace_id:
        return None
    return f"projects/{project_id}/traces/{trace_id}"
