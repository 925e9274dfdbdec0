"""
hri_mgmt.auth.models

Auth domain models.

Responsibilities:
- Define the verified caller identity (`Claims`) handed to tenant and batch handlers.
- Decode an opaque verified-token holder into `Claims`.
- Build the tenant-scoped role strings handlers assert with `Claims.has_role`.
"""

from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from hri_mgmt.auth.errors import ClaimsDecodeError

if TYPE_CHECKING:
    from hri_mgmt.auth.oidc import ClaimsHolder

HRI_PREFIX = "hri_"
TENANT_SCOPE_PREFIX = "tenant_"

HRI_INTEGRATOR = "hri_data_integrator"
HRI_CONSUMER = "hri_consumer"
HRI_INTERNAL = "hri_data_internal"


class LogicalRole(enum.Enum):
    """Capability requested on a tenant; the value is the role-string suffix."""

    DATA_INTEGRATOR = "_data_integrator"
    DATA_CONSUMER = "_data_consumer"
    DATA_INTERNAL = "_data_internal"


def build_role_string(tenant_id: str, logical_role: LogicalRole) -> str:
    return f"{HRI_PREFIX}{TENANT_SCOPE_PREFIX}{tenant_id}{logical_role.value}"


@dataclass(frozen=True, slots=True)
class Claims:
    """
    Verified token claims.

    Some identity providers grant access through the space-delimited `scope`
    claim, others through a `roles` array; both are always present here and
    `has_role` searches both.
    """

    scope: str = ""
    roles: tuple[str, ...] = ()
    subject: str = ""
    audience: tuple[str, ...] = ()

    def has_role(self, role: str) -> bool:
        # Exact token match; "hri_consumer" must not match "hri_other_hri_consumer".
        return role in self.scope.split() or role in self.roles


def extract_claims(holder: ClaimsHolder) -> Claims:
    payload = holder.claims()
    return Claims(
        scope=_string_claim(payload, "scope"),
        roles=_string_list_claim(payload, "roles"),
        subject=_string_claim(payload, "sub"),
        audience=_audience_claim(payload),
    )


def _string_claim(payload: dict[str, Any], name: str) -> str:
    value = payload.get(name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ClaimsDecodeError(
            f"cannot decode claim '{name}': expected a string, got {type(value).__name__}"
        )
    return value


def _string_list_claim(payload: dict[str, Any], name: str) -> tuple[str, ...]:
    value = payload.get(name)
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise ClaimsDecodeError(
            f"cannot decode claim '{name}': expected an array of strings, got {type(value).__name__}"
        )
    if not all(isinstance(v, str) for v in value):
        raise ClaimsDecodeError(f"cannot decode claim '{name}': array contains non-string values")
    return tuple(value)


def _audience_claim(payload: dict[str, Any]) -> tuple[str, ...]:
    # "aud" may be a single string or an array of strings.
    if isinstance(payload.get("aud"), str):
        return (payload["aud"],)
    return _string_list_claim(payload, "aud")


# --- Module Notes -----------------------------------------------------------
# The bare "tenant_<id>" check used by the tenant gate lives in `auth.validator`;
# the capability checks built on `build_role_string` live in `auth.permissions`.
