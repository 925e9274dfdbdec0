"""
hri_mgmt.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide env-driven settings for the API, logging and OIDC trust configuration.
- Reject an unusable OIDC issuer URL at startup rather than on the first request.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal
from urllib.parse import urlparse

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Process-level configuration. The issuer/audience pair is read once and is
    immutable for the lifetime of the process.
    """

    model_config = SettingsConfigDict(env_prefix="HRI_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "hri-mgmt-api"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 1323

    # OIDC trust configuration
    oidc_issuer: str = "http://localhost:8080/oidc"
    jwt_audience_id: str = "hri-mgmt-api"
    # Branding used in the generic 401 message for malformed/expired tokens.
    issuer_platform: str = "Azure AD"
    oidc_timeout_seconds: float = Field(default=10.0, gt=0)

    # Skips token validation entirely; only for local development behind another gate.
    auth_disabled: bool = False

    @model_validator(mode="after")
    def _check_issuer(self) -> Settings:
        if self.auth_disabled:
            return self
        parsed = urlparse(self.oidc_issuer)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"OIDC Issuer is an invalid URL: {self.oidc_issuer}")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Persistence and event-stream settings belong to the business services that
# consume this authorization layer, not here.
