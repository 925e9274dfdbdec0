"""
tests.test_models

Claims decoding, role matching and role-string construction.
"""

from __future__ import annotations

from typing import Any

import pytest

from hri_mgmt.auth.errors import ClaimsDecodeError
from hri_mgmt.auth.models import Claims, LogicalRole, build_role_string, extract_claims
from hri_mgmt.auth.oidc import JwtClaimsHolder


def _extract(payload: dict[str, Any]) -> Claims:
    return extract_claims(JwtClaimsHolder(payload))


@pytest.mark.parametrize(
    ("scope", "role", "expected"),
    [
        ("hri_consumer other_scope", "hri_consumer", True),
        ("other_scope hri_consumer", "hri_consumer", True),
        ("hri_other_hri_consumer", "hri_consumer", False),
        ("hri_consumer,other_scope", "hri_consumer", False),
        ("HRI_CONSUMER", "hri_consumer", False),
        ("  tenant_123\ttenant_456\n", "tenant_456", True),
        ("", "hri_consumer", False),
    ],
)
def test_has_role_matches_whole_scope_tokens(scope: str, role: str, expected: bool) -> None:
    assert Claims(scope=scope).has_role(role) is expected


def test_has_role_checks_role_list() -> None:
    claims = Claims(roles=("hri_data_integrator", "hri_tenant_t1_data_integrator"))

    assert claims.has_role("hri_tenant_t1_data_integrator")
    assert not claims.has_role("hri_tenant_t1")
    assert not claims.has_role("hri_data")


def test_has_role_checks_both_sources() -> None:
    claims = Claims(scope="tenant_1", roles=("hri_consumer",))

    assert claims.has_role("tenant_1")
    assert claims.has_role("hri_consumer")


@pytest.mark.parametrize("tenant_id", ["123", "tenant-a", "t_1"])
def test_build_role_string(tenant_id: str) -> None:
    assert build_role_string(tenant_id, LogicalRole.DATA_INTEGRATOR) == f"hri_tenant_{tenant_id}_data_integrator"
    assert build_role_string(tenant_id, LogicalRole.DATA_CONSUMER) == f"hri_tenant_{tenant_id}_data_consumer"
    assert build_role_string(tenant_id, LogicalRole.DATA_INTERNAL) == f"hri_tenant_{tenant_id}_data_internal"


def test_extract_claims_full_payload() -> None:
    claims = _extract(
        {
            "scope": "tenant_1 hri_consumer",
            "roles": ["hri_data_integrator"],
            "sub": "client-1",
            "aud": ["hri-mgmt-api", "other"],
            "exp": 1700000000,
        }
    )

    assert claims == Claims(
        scope="tenant_1 hri_consumer",
        roles=("hri_data_integrator",),
        subject="client-1",
        audience=("hri-mgmt-api", "other"),
    )


def test_extract_claims_defaults_when_absent() -> None:
    claims = _extract({"aud": "hri-mgmt-api"})

    assert claims.scope == ""
    assert claims.roles == ()
    assert claims.subject == ""
    assert claims.audience == ("hri-mgmt-api",)


@pytest.mark.parametrize(
    "payload",
    [
        {"scope": 42},
        {"scope": ["tenant_1"]},
        {"roles": "hri_consumer"},
        {"roles": ["hri_consumer", 7]},
        {"sub": {"id": 1}},
        {"aud": 5},
    ],
)
def test_extract_claims_rejects_malformed_shapes(payload: dict[str, Any]) -> None:
    with pytest.raises(ClaimsDecodeError):
        _extract(payload)
