"""
hri_mgmt.auth.static

In-memory issuer resolver.

Responsibilities:
- Stand in for the network-backed OIDC resolver with fixed accept/reject decisions.
- Keep the audience scoping of a real verifier so audience handling stays testable.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from hri_mgmt.auth.errors import ProviderUnavailableError, TokenVerificationError
from hri_mgmt.auth.oidc import ClaimsHolder, IssuerResolver, JwtClaimsHolder, Provider, TokenVerifier

UNKNOWN_TOKEN_MSG = "failed to verify signature: failed to verify id token signature"

TokenOutcome = Mapping[str, Any] | TokenVerificationError


class StaticIssuerResolver(IssuerResolver):
    """
    Maps raw tokens to either a claims payload (accept) or a
    `TokenVerificationError` (reject). Unknown tokens are rejected.
    Passing `unavailable` makes every resolve fail as if discovery were down.
    """

    def __init__(
        self,
        tokens: Mapping[str, TokenOutcome] | None = None,
        *,
        unavailable: str | None = None,
    ) -> None:
        self._tokens = dict(tokens or {})
        self._unavailable = unavailable
        self.resolved: list[str] = []

    async def resolve(self, issuer_url: str) -> Provider:
        self.resolved.append(issuer_url)
        if self._unavailable is not None:
            raise ProviderUnavailableError(self._unavailable)
        return StaticProvider(issuer_url, self._tokens)


class StaticProvider(Provider):
    def __init__(self, issuer: str, tokens: Mapping[str, TokenOutcome]) -> None:
        self.issuer = issuer
        self._tokens = tokens

    def verifier(self, audience_id: str) -> TokenVerifier:
        return StaticTokenVerifier(self._tokens, audience_id)


class StaticTokenVerifier(TokenVerifier):
    def __init__(self, tokens: Mapping[str, TokenOutcome], audience_id: str) -> None:
        self._tokens = tokens
        self._audience_id = audience_id

    async def verify(self, raw_token: str) -> ClaimsHolder:
        outcome = self._tokens.get(raw_token)
        if outcome is None:
            raise TokenVerificationError(UNKNOWN_TOKEN_MSG)
        if isinstance(outcome, TokenVerificationError):
            raise outcome

        aud = outcome.get("aud")
        if aud is not None:
            audiences = [aud] if isinstance(aud, str) else list(aud)
            if self._audience_id not in audiences:
                raise TokenVerificationError(f"oidc: expected audience {self._audience_id!r} got {aud!r}")
        return JwtClaimsHolder(dict(outcome))
