"""
hri_mgmt.auth.permissions

Capability checks that batch handlers apply on top of the tenant gate.

Responsibilities:
- Require integrator, internal or reader roles for a tenant.
- Require a populated subject and batch ownership for data integrators.
- Validate tenant id format before it is used to build role strings.
"""

from __future__ import annotations

import string

from starlette.status import HTTP_401_UNAUTHORIZED

from hri_mgmt.auth.errors import AuthorizationError
from hri_mgmt.auth.models import (
    HRI_CONSUMER,
    HRI_INTEGRATOR,
    HRI_INTERNAL,
    Claims,
    LogicalRole,
    build_role_string,
)
from hri_mgmt.observability.logging import get_request_logger

MSG_ACCESS_TOKEN_MISSING_SCOPES = (
    "The access token must have one of these scopes: hri_consumer, hri_data_integrator"
)
MSG_INTEGRATOR_SUB_CLAIM_NO_MATCH = (
    "The token's sub claim (clientId): {subject} does not match the data integratorId: {integrator_id}"
)
MSG_INTEGRATOR_ROLE_REQUIRED = "Must have hri_data_integrator role to {action} a batch"
MSG_INTERNAL_ROLE_REQUIRED = "Must have hri_data_internal role to mark a batch as {action}"
MSG_SUB_CLAIM_REQUIRED = "JWT access token 'sub' claim must be populated"
MSG_INVALID_TENANT_ID = "TenantId: {tenant_id} must be lower-case alpha-numeric, '-', or '_'. '{char}' is not allowed."

# ASCII only.
_TENANT_ID_CHARS = frozenset(string.ascii_lowercase + string.digits + "-_")


def check_tenant_id(tenant_id: str) -> str | None:
    """Return an error message for an invalid tenant id, None when it is valid."""
    for char in tenant_id:
        if char not in _TENANT_ID_CHARS:
            return MSG_INVALID_TENANT_ID.format(tenant_id=tenant_id, char=char)
    return None


def _deny(request_id: str, prefix: str, msg: str, claims: Claims) -> AuthorizationError:
    get_request_logger(__name__, request_id=request_id, prefix=prefix).error(msg, subject=claims.subject)
    return AuthorizationError(HTTP_401_UNAUTHORIZED, request_id, msg, claims=claims)


def _has_tenant_role(claims: Claims, tenant_id: str, global_role: str, role: LogicalRole) -> bool:
    return claims.has_role(global_role) and claims.has_role(build_role_string(tenant_id, role))


def is_integrator(claims: Claims, tenant_id: str) -> bool:
    return _has_tenant_role(claims, tenant_id, HRI_INTEGRATOR, LogicalRole.DATA_INTEGRATOR)


def is_consumer(claims: Claims, tenant_id: str) -> bool:
    return _has_tenant_role(claims, tenant_id, HRI_CONSUMER, LogicalRole.DATA_CONSUMER)


def is_internal(claims: Claims, tenant_id: str) -> bool:
    return _has_tenant_role(claims, tenant_id, HRI_INTERNAL, LogicalRole.DATA_INTERNAL)


def require_integrator(request_id: str, claims: Claims, tenant_id: str, action: str) -> None:
    if not is_integrator(claims, tenant_id):
        msg = MSG_INTEGRATOR_ROLE_REQUIRED.format(action=action)
        raise _deny(request_id, "auth/requireIntegrator", msg, claims)


def require_internal(request_id: str, claims: Claims, tenant_id: str, action: str) -> None:
    if not is_internal(claims, tenant_id):
        msg = MSG_INTERNAL_ROLE_REQUIRED.format(action=action)
        raise _deny(request_id, "auth/requireInternal", msg, claims)


def require_reader(request_id: str, claims: Claims, tenant_id: str) -> None:
    if not (is_consumer(claims, tenant_id) or is_integrator(claims, tenant_id)):
        raise _deny(request_id, "auth/requireReader", MSG_ACCESS_TOKEN_MISSING_SCOPES, claims)


def require_subject(request_id: str, claims: Claims) -> None:
    if not claims.subject:
        raise _deny(request_id, "auth/requireSubject", MSG_SUB_CLAIM_REQUIRED, claims)


def check_batch_owner(request_id: str, claims: Claims, tenant_id: str, integrator_id: str) -> None:
    """
    Consumers may read any batch of their tenant; integrators only the batches
    they created (their `sub` is recorded as the batch's integratorId).
    """
    if is_consumer(claims, tenant_id):
        return
    if is_integrator(claims, tenant_id):
        if claims.subject != integrator_id:
            msg = MSG_INTEGRATOR_SUB_CLAIM_NO_MATCH.format(subject=claims.subject, integrator_id=integrator_id)
            raise _deny(request_id, "auth/checkBatchOwner", msg, claims)
        return
    raise _deny(request_id, "auth/checkBatchOwner", MSG_ACCESS_TOKEN_MISSING_SCOPES, claims)
