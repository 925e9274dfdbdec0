"""
hri_mgmt.api.routers.health

Liveness endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter

router = APIRouter(prefix="/hri")


@router.get("/healthcheck")
async def healthcheck() -> dict[str, str]:
    # Unauthenticated; polled by load balancers.
    return {"status": "ok"}
