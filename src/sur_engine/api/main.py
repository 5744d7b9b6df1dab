"""Sur Engine — FastAPI application serving swara mapping and raag identification."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sur_engine import __version__
from sur_engine.api.routes import health, raag, swara


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Pre-load the raag catalog and detection settings on startup."""
    from sur_engine.config import load_settings
    from sur_engine.raag.catalog import default_catalog
    from sur_engine.raag.matcher import RaagMatcher

    settings = load_settings()
    app.state.settings = settings
    app.state.catalog = default_catalog()
    app.state.raag_matcher = RaagMatcher(
        app.state.catalog, min_confidence=settings.min_confidence,
    )
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Sur Engine",
        description="Sargam note mapping and raag identification API",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router, prefix="/api/v1", tags=["health"])
    app.include_router(swara.router, prefix="/api/v1", tags=["swara"])
    app.include_router(raag.router, prefix="/api/v1", tags=["raag"])

    return app


app = create_app()
