"""
hri_mgmt.api.app

FastAPI app factory for the HRI Management API.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Construct the process-wide `Validator` from the OIDC trust settings.
- Serialize `RequestError`s into `{errorEventId, errorDescription}` bodies.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from hri_mgmt import __version__
from hri_mgmt.api.routers.health import router as health_router
from hri_mgmt.auth.errors import RequestError
from hri_mgmt.auth.oidc import IssuerResolver, OidcIssuerResolver
from hri_mgmt.auth.validator import Validator
from hri_mgmt.observability.logging import configure_logging, get_logger
from hri_mgmt.observability.middleware import RequestContextMiddleware
from hri_mgmt.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings, resolver: IssuerResolver | None = None) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    app = FastAPI(
        title="HRI Management API",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
    )

    app.state.settings = settings
    app.state.validator = Validator(
        issuer=settings.oidc_issuer,
        audience_id=settings.jwt_audience_id,
        resolver=resolver or OidcIssuerResolver(timeout=settings.oidc_timeout_seconds),
        issuer_platform=settings.issuer_platform,
    )

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])

    @app.exception_handler(RequestError)
    async def _request_error(_: Request, exc: RequestError) -> JSONResponse:
        # Already logged where detected; only serialize here.
        return JSONResponse(status_code=exc.status_code, content=exc.body())

    @app.on_event("startup")
    async def _startup() -> None:
        if settings.auth_disabled:
            log.warning("authorization disabled", env=settings.env)
        log.info("startup", env=settings.env, issuer=settings.oidc_issuer)

    return app


# --- Module Notes -----------------------------------------------------------
# Tenant, batch and stream routers mount onto this app and depend on
# `hri_mgmt.auth.deps` for their authorization gate.
