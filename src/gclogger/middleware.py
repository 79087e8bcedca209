"""
Trace propagation for Cloud Logging, see
https://cloud.google.com/endpoints/docs/openapi/tracing
"""

from __future__ import annotations

from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from .context import CLOUD_TRACE_CONTEXT, current_context, trace_resource, use_context, with_value


class CloudTraceMiddleware(BaseHTTPMiddleware):
    """Copies ``X-Cloud-Trace-Context`` into the request context.

    Downstream handlers log with ``info_ctx(None, ...)`` (or pass
    ``current_context()``) and the entry is correlated with the request trace.
    Requests without the header, or apps without a project id, pass through
    untouched.
    """

    def __init__(self, app: ASGIApp, project_id: Optional[str] = None):
        super().__init__(app)
        self.project_id = project_id

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        trace = trace_resource(self.project_id, request.headers.get(CLOUD_TRACE_CONTEXT))
        if trace is None:
            return await call_next(request)

        request.state.trace = trace
        with use_context(with_value(current_context(), CLOUD_TRACE_CONTEXT, trace)):
            return await call_next(request)
