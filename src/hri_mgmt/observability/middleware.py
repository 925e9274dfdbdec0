"""
hri_mgmt.observability.middleware

HTTP middleware for request-scoped logging context.

Responsibilities:
- Take the request id from `X-Request-Id` (or generate one) and expose it on `request.state`.
- Bind request metadata into structlog contextvars.
"""

from __future__ import annotations

import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from hri_mgmt.observability.logging import REQUEST_ID_FIELD

REQUEST_ID_HEADER = "x-request-id"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    - Ensures every request has a request id, echoed back on the response
    - Binds request-scoped contextvars for structured logs
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            **{REQUEST_ID_FIELD: request_id},
            path=request.url.path,
            method=request.method,
        )
        try:
            response: Response = await call_next(request)
        finally:
            # Avoid leaking context across requests under async concurrency.
            structlog.contextvars.clear_contextvars()

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


# --- Module Notes -----------------------------------------------------------
# Pairs with `observability.logging.get_request_logger`: handlers read the id from
# `request.state.request_id` (see `api.deps.get_request_id`) and bind it explicitly.
