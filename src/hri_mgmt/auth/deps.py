"""
hri_mgmt.auth.deps

FastAPI dependency functions for authentication and authorization.

Responsibilities:
- Gate "any trusted caller" endpoints through `Validator.validate_for_tenant`.
- Gate tenant-scoped endpoints through `Validator.validate_roles`, yielding `Claims`.
"""

from __future__ import annotations

from fastapi import Depends, Request
from starlette.status import HTTP_400_BAD_REQUEST

from hri_mgmt.api.deps import get_request_id, settings_dep, validator_from_app
from hri_mgmt.auth.errors import RequestError
from hri_mgmt.auth.models import Claims
from hri_mgmt.auth.permissions import check_tenant_id
from hri_mgmt.auth.validator import Validator
from hri_mgmt.observability.logging import get_request_logger
from hri_mgmt.settings import Settings


async def authorized_caller(
    request: Request,
    request_id: str = Depends(get_request_id),
    validator: Validator = Depends(validator_from_app),
    settings: Settings = Depends(settings_dep),
) -> None:
    if settings.auth_disabled:
        return
    await validator.validate_for_tenant(request_id, request.headers.get("authorization"))


async def tenant_claims(
    tenant_id: str,
    request: Request,
    request_id: str = Depends(get_request_id),
    validator: Validator = Depends(validator_from_app),
    settings: Settings = Depends(settings_dep),
) -> Claims:
    # tenant_id is bound from the route's path parameter of the same name.
    msg = check_tenant_id(tenant_id)
    if msg is not None:
        get_request_logger(__name__, request_id=request_id, prefix="auth/tenantClaims").error(msg)
        raise RequestError(HTTP_400_BAD_REQUEST, request_id, msg)

    if settings.auth_disabled:
        return Claims()
    return await validator.validate_roles(request_id, request.headers.get("authorization"), tenant_id)


# --- Module Notes -----------------------------------------------------------
# Batch handlers add capability checks from `auth.permissions` on the returned claims.
