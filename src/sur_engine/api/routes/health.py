"""GET /api/v1/health — server health check."""

from __future__ import annotations

from fastapi import APIRouter, Request

from sur_engine import __version__
from sur_engine.api.schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=__version__,
        raag_count=len(request.app.state.catalog),
    )
