"""
hri_mgmt.auth.oidc

OIDC issuer resolution and bearer-token verification.

Responsibilities:
- Define the provider/verifier seam (`IssuerResolver` -> `Provider` -> `TokenVerifier`).
- Network-backed implementation: OIDC discovery + JWKS signature checks via PyJWT.
- Report verification failures in OIDC-verifier phrasing, unclassified.

Note:
- Discovery is performed on every call; keys rotated at the issuer are picked up
  immediately at the cost of extra round trips.
"""

from __future__ import annotations

import abc
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import httpx
import jwt

from hri_mgmt.auth.errors import ProviderUnavailableError, TokenVerificationError

DISCOVERY_PATH = "/.well-known/openid-configuration"
DEFAULT_ALGORITHMS = ("RS256",)


class ClaimsHolder(abc.ABC):
    """Opaque result of a successful verification."""

    @abc.abstractmethod
    def claims(self) -> dict[str, Any]: ...


class TokenVerifier(abc.ABC):
    @abc.abstractmethod
    async def verify(self, raw_token: str) -> ClaimsHolder:
        """Raise `TokenVerificationError` when the token cannot be trusted."""


class Provider(abc.ABC):
    issuer: str

    @abc.abstractmethod
    def verifier(self, audience_id: str) -> TokenVerifier:
        """Build a verifier that rejects tokens issued for any other audience."""


class IssuerResolver(abc.ABC):
    @abc.abstractmethod
    async def resolve(self, issuer_url: str) -> Provider:
        """Raise `ProviderUnavailableError` when discovery fails for any reason."""


async def verify_token(provider: Provider, audience_id: str, raw_token: str) -> ClaimsHolder:
    return await provider.verifier(audience_id).verify(raw_token)


class JwtClaimsHolder(ClaimsHolder):
    def __init__(self, payload: dict[str, Any]) -> None:
        self._payload = payload

    def claims(self) -> dict[str, Any]:
        return dict(self._payload)


class OidcIssuerResolver(IssuerResolver):
    """
    Resolves an issuer through its `/.well-known/openid-configuration` document.

    A new HTTP client is opened per call; `transport` exists so tests can serve
    discovery and JWKS documents in-process.
    """

    def __init__(
        self,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    async def resolve(self, issuer_url: str) -> Provider:
        url = issuer_url.rstrip("/") + DISCOVERY_PATH
        try:
            async with self._client() as http:
                r = await http.get(url)
                r.raise_for_status()
                metadata = r.json()
        except httpx.HTTPError as e:
            raise ProviderUnavailableError(f"oidc: unable to fetch {url}: {e}") from e
        except ValueError as e:
            raise ProviderUnavailableError(f"oidc: failed to decode provider discovery object: {e}") from e

        if not isinstance(metadata, dict):
            raise ProviderUnavailableError("oidc: failed to decode provider discovery object")
        advertised = metadata.get("issuer")
        if advertised != issuer_url:
            raise ProviderUnavailableError(
                "oidc: issuer did not match the issuer returned by provider, "
                f"expected {issuer_url!r} got {advertised!r}"
            )
        jwks_uri = metadata.get("jwks_uri")
        if not isinstance(jwks_uri, str) or not jwks_uri:
            raise ProviderUnavailableError("oidc: provider discovery object has no jwks_uri")

        algorithms = metadata.get("id_token_signing_alg_values_supported") or DEFAULT_ALGORITHMS
        return OidcProvider(
            issuer=advertised,
            jwks_uri=jwks_uri,
            algorithms=tuple(a for a in algorithms if a != "none"),
            client_factory=self._client,
        )


class OidcProvider(Provider):
    def __init__(
        self,
        *,
        issuer: str,
        jwks_uri: str,
        algorithms: tuple[str, ...],
        client_factory: Callable[[], httpx.AsyncClient],
    ) -> None:
        self.issuer = issuer
        self.jwks_uri = jwks_uri
        self.algorithms = algorithms
        self._client_factory = client_factory

    def verifier(self, audience_id: str) -> TokenVerifier:
        return OidcTokenVerifier(provider=self, audience_id=audience_id)

    async def signing_keys(self) -> list[jwt.PyJWK]:
        try:
            async with self._client_factory() as http:
                r = await http.get(self.jwks_uri)
                r.raise_for_status()
                document = r.json()
            if not isinstance(document, dict):
                raise ValueError("JWKS document is not a JSON object")
            return list(jwt.PyJWKSet.from_dict(document).keys)
        except (httpx.HTTPError, ValueError, jwt.PyJWKSetError) as e:
            raise TokenVerificationError(f"failed to verify signature: fetching keys {e}") from e


class OidcTokenVerifier(TokenVerifier):
    def __init__(self, *, provider: OidcProvider, audience_id: str) -> None:
        self._provider = provider
        self._audience_id = audience_id

    async def verify(self, raw_token: str) -> ClaimsHolder:
        if raw_token.count(".") != 2:
            raise TokenVerificationError("oidc: malformed jwt: compact JWS format must have three parts")
        try:
            header = jwt.get_unverified_header(raw_token)
        except jwt.DecodeError as e:
            raise TokenVerificationError(f"oidc: malformed jwt: {e}") from e

        alg = header.get("alg")
        if alg not in self._provider.algorithms:
            raise TokenVerificationError(
                "oidc: id token signed with unsupported algorithm, "
                f"expected {list(self._provider.algorithms)!r} got {alg!r}"
            )

        # A key is only tried under its own algorithm.
        kid = header.get("kid")
        keys = [
            k
            for k in await self._provider.signing_keys()
            if (kid is None or k.key_id == kid) and k.algorithm_name == alg
        ]
        for key in keys:
            try:
                payload = jwt.decode(
                    raw_token,
                    key.key,
                    algorithms=[alg],
                    audience=self._audience_id,
                    issuer=self._provider.issuer,
                    options={"require": ["exp", "iss"]},
                )
            except jwt.InvalidSignatureError:
                continue
            except jwt.InvalidTokenError as e:
                raise TokenVerificationError(self._describe(raw_token, e)) from e
            except (jwt.PyJWTError, TypeError, ValueError) as e:
                raise TokenVerificationError(f"failed to verify signature: {e}") from e
            return JwtClaimsHolder(payload)

        raise TokenVerificationError("failed to verify signature: failed to verify id token signature")

    def _describe(self, raw_token: str, error: jwt.InvalidTokenError) -> str:
        unverified = _unverified_claims(raw_token)
        if isinstance(error, jwt.ExpiredSignatureError):
            expiry = datetime.fromtimestamp(unverified.get("exp", 0), tz=UTC)
            return f"oidc: token is expired (Token Expiry: {expiry.isoformat()})"
        if isinstance(error, jwt.InvalidAudienceError):
            return f"oidc: expected audience {self._audience_id!r} got {unverified.get('aud')!r}"
        if isinstance(error, jwt.InvalidIssuerError):
            return (
                "oidc: id token issued by a different provider, "
                f"expected {self._provider.issuer!r} got {unverified.get('iss')!r}"
            )
        if isinstance(error, jwt.DecodeError):
            return f"oidc: malformed jwt: {error}"
        return f"oidc: {error}"


def _unverified_claims(raw_token: str) -> dict[str, Any]:
    try:
        return jwt.decode(raw_token, options={"verify_signature": False})
    except jwt.InvalidTokenError:
        return {}


# --- Module Notes -----------------------------------------------------------
# The in-memory counterpart of this module is `auth.static`; both satisfy the
# same `IssuerResolver` contract, so the validator cannot tell them apart.
