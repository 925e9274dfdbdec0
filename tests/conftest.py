"""
tests.conftest

Shared fixtures: an RSA signing key, its JWKS, a token minter, and an in-process
OIDC issuer served through `httpx.MockTransport`.
"""

from __future__ import annotations

import json
import time
from collections.abc import Callable
from typing import Any

import httpx
import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa
from jwt.algorithms import RSAAlgorithm

ISSUER = "https://issuer.example.com/oauth/v2.0"
AUDIENCE = "hri-mgmt-api"
JWKS_URI = ISSUER + "/keys"
KID = "test-key"


@pytest.fixture(scope="session")
def rsa_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def jwks(rsa_key: rsa.RSAPrivateKey) -> dict[str, Any]:
    jwk = json.loads(RSAAlgorithm.to_jwk(rsa_key.public_key()))
    jwk.update(kid=KID, use="sig", alg="RS256")
    return {"keys": [jwk]}


@pytest.fixture
def mint(rsa_key: rsa.RSAPrivateKey) -> Callable[..., str]:
    def _mint(*, key: Any = None, **claims: Any) -> str:
        now = int(time.time())
        payload: dict[str, Any] = {
            "iss": ISSUER,
            "aud": AUDIENCE,
            "sub": "integrator-1",
            "iat": now,
            "exp": now + 300,
        }
        payload.update(claims)
        return jwt.encode(payload, key or rsa_key, algorithm="RS256", headers={"kid": KID})

    return _mint


@pytest.fixture
def oidc_transport(jwks: dict[str, Any]) -> Callable[..., httpx.MockTransport]:
    def _transport(
        *,
        discovery: dict[str, Any] | None = None,
        keys: dict[str, Any] | None = None,
        keys_status: int = 200,
    ) -> httpx.MockTransport:
        document = discovery or {
            "issuer": ISSUER,
            "jwks_uri": JWKS_URI,
            "id_token_signing_alg_values_supported": ["RS256"],
        }

        def handler(request: httpx.Request) -> httpx.Response:
            if str(request.url) == ISSUER + "/.well-known/openid-configuration":
                return httpx.Response(200, json=document)
            if str(request.url) == JWKS_URI:
                return httpx.Response(keys_status, json=keys or jwks)
            return httpx.Response(404)

        return httpx.MockTransport(handler)

    return _transport
