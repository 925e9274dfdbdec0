"""
hri_mgmt.auth.errors

Exception types raised by the authorization subsystem.

Responsibilities:
- Internal failure types for each pipeline stage (discovery, verification, claims decode).
- The externally visible `RequestError` / `AuthorizationError` carrying an HTTP status
  and the `{errorEventId, errorDescription}` response body.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from hri_mgmt.auth.models import Claims


class ProviderUnavailableError(Exception):
    """OIDC discovery for the issuer failed (network, TLS or malformed metadata)."""


class TokenVerificationError(Exception):
    """The bearer token failed signature, expiry, issuer or audience checks."""


class ClaimsDecodeError(Exception):
    """A verified token's claims could not be shaped into `Claims`."""


class ErrorDetail(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    error_event_id: str = Field(alias="errorEventId")
    error_description: str = Field(alias="errorDescription")


class RequestError(Exception):
    """
    Terminal error for the current request. The HTTP layer serializes it as-is.
    """

    def __init__(self, status_code: int, request_id: str, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.request_id = request_id
        self.message = message

    def body(self) -> dict[str, Any]:
        detail = ErrorDetail(error_event_id=self.request_id, error_description=self.message)
        return detail.model_dump(by_alias=True)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.status_code}, {self.request_id!r}, {self.message!r})"


class AuthorizationError(RequestError):
    """
    Authentication or authorization failure.

    `claims` is set when the token verified but the caller lacks the required
    tenant role, so the caller can still record who attempted access.
    """

    def __init__(
        self,
        status_code: int,
        request_id: str,
        message: str,
        *,
        claims: Claims | None = None,
    ) -> None:
        super().__init__(status_code, request_id, message)
        self.claims = claims
