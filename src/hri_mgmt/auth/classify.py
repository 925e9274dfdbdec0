"""
hri_mgmt.auth.classify

Maps pipeline failures to externally visible (HTTP status, message) pairs.

Responsibilities:
- Recognize malformed/expired token phrasings and replace them with a generic,
  provider-branded message.
- Forward any other verifier text unchanged.
"""

from __future__ import annotations

from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_500_INTERNAL_SERVER_ERROR

MSG_PROVIDER_FAILED = "Failed to create OIDC provider: {error}"
MSG_GENERIC_401 = "{platform} authentication returned 401"

# Matched case-insensitively against the verifier's error text.
GENERIC_401_MARKERS = (
    "jws format must have three parts",
    "malformed jwt",
    "token expiry",
)


def classify_provider_error(error: str) -> tuple[int, str]:
    return HTTP_500_INTERNAL_SERVER_ERROR, MSG_PROVIDER_FAILED.format(error=error)


def classify_verification_error(error: str, *, issuer_platform: str) -> tuple[int, str]:
    lowered = error.lower()
    if any(marker in lowered for marker in GENERIC_401_MARKERS):
        return HTTP_401_UNAUTHORIZED, MSG_GENERIC_401.format(platform=issuer_platform)
    # TODO: decide with operators whether to stop forwarding raw verifier text here.
    return HTTP_401_UNAUTHORIZED, error
