"""
hri_mgmt.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings, the shared validator and the request id.
- Encapsulate app.state / request.state access patterns.
"""

from __future__ import annotations

import uuid

from fastapi import Request

from hri_mgmt.auth.validator import Validator
from hri_mgmt.settings import Settings


def settings_dep(request: Request) -> Settings:
    # Settings are fixed when the app is built in `hri_mgmt.api.app.create_app`.
    return request.app.state.settings  # type: ignore[attr-defined]


def validator_from_app(request: Request) -> Validator:
    return request.app.state.validator  # type: ignore[attr-defined]


def get_request_id(request: Request) -> str:
    # Set by RequestContextMiddleware; fall back to the header when mounted without it.
    request_id = getattr(request.state, "request_id", None)
    return request_id or request.headers.get("x-request-id") or str(uuid.uuid4())
