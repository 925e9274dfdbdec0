"""
hri_mgmt.auth.validator

Authorization engine used by tenant and batch endpoints.

Responsibilities:
- Strip the bearer prefix, resolve the issuer, verify the token.
- Decode claims and enforce the tenant scope for tenant-scoped endpoints.
- Turn every failure into a logged, classified `AuthorizationError`.
"""

from __future__ import annotations

import re

import structlog
from starlette.status import HTTP_401_UNAUTHORIZED

from hri_mgmt.auth.classify import classify_provider_error, classify_verification_error
from hri_mgmt.auth.errors import (
    AuthorizationError,
    ClaimsDecodeError,
    ProviderUnavailableError,
    TokenVerificationError,
)
from hri_mgmt.auth.models import TENANT_SCOPE_PREFIX, Claims, extract_claims
from hri_mgmt.auth.oidc import ClaimsHolder, IssuerResolver, verify_token
from hri_mgmt.observability.logging import get_request_logger

MSG_MISSING_AUTH_HEADER = "Missing Authorization header"
MSG_TENANT_NOT_AUTHORIZED = (
    "Unauthorized tenant access. Tenant '{tenant_id}' is not included in the "
    "authorized roles:{role}."
)

_BEARER_PREFIX = re.compile(r"^(?:bearer(?:\s+|$))+", re.IGNORECASE)


def strip_bearer_prefix(auth_header: str) -> str:
    """Idempotent: repeated or mixed-case prefixes are all removed in one pass."""
    return _BEARER_PREFIX.sub("", auth_header.strip())


class Validator:
    """
    Per-request, stateless gate. The issuer/audience pair is fixed at construction;
    the issuer is re-resolved on every call.
    """

    def __init__(
        self,
        *,
        issuer: str,
        audience_id: str,
        resolver: IssuerResolver,
        issuer_platform: str = "Azure AD",
    ) -> None:
        self.issuer = issuer
        self.audience_id = audience_id
        self.issuer_platform = issuer_platform
        self._resolver = resolver

    async def validate_for_tenant(self, request_id: str, auth_header: str | None) -> None:
        """Only checks that the caller holds a valid, trusted token."""
        log = get_request_logger(__name__, request_id=request_id, prefix="auth/validateForTenant")
        await self._verified_token(log, request_id, auth_header)

    async def validate_roles(self, request_id: str, auth_header: str | None, tenant_id: str) -> Claims:
        """
        Verify the token and require the `tenant_<tenant_id>` role.

        On a tenant mismatch the raised error still carries the decoded claims.
        """
        log = get_request_logger(__name__, request_id=request_id, prefix="auth/validateRoles")
        holder = await self._verified_token(log, request_id, auth_header)

        try:
            claims = extract_claims(holder)
        except ClaimsDecodeError as e:
            log.error("claims extraction failed", error=str(e))
            raise AuthorizationError(HTTP_401_UNAUTHORIZED, request_id, str(e)) from e

        role = TENANT_SCOPE_PREFIX + tenant_id
        if not claims.has_role(role):
            msg = MSG_TENANT_NOT_AUTHORIZED.format(tenant_id=tenant_id, role=role)
            log.error(msg, subject=claims.subject)
            raise AuthorizationError(HTTP_401_UNAUTHORIZED, request_id, msg, claims=claims)
        return claims

    async def _verified_token(
        self, log: structlog.stdlib.BoundLogger, request_id: str, auth_header: str | None
    ) -> ClaimsHolder:
        raw_token = strip_bearer_prefix(auth_header or "")
        if not raw_token:
            log.error(MSG_MISSING_AUTH_HEADER)
            raise AuthorizationError(HTTP_401_UNAUTHORIZED, request_id, MSG_MISSING_AUTH_HEADER)

        try:
            provider = await self._resolver.resolve(self.issuer)
        except ProviderUnavailableError as e:
            status_code, msg = classify_provider_error(str(e))
            log.error(msg, issuer=self.issuer)
            raise AuthorizationError(status_code, request_id, msg) from e

        try:
            return await verify_token(provider, self.audience_id, raw_token)
        except TokenVerificationError as e:
            status_code, msg = classify_verification_error(str(e), issuer_platform=self.issuer_platform)
            log.error("authorization token validation failed", error=str(e))
            raise AuthorizationError(status_code, request_id, msg) from e


# --- Module Notes -----------------------------------------------------------
# Callers construct one `Validator` per process (see `api.app.create_app`) and
# share it across requests; it holds no per-request state.
