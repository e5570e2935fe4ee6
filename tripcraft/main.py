"""FastAPI application."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from tripcraft.api.deps import get_registry
from tripcraft.api.routes.health import router as health_router
from tripcraft.api.routes.metrics import router as metrics_router
from tripcraft.api.routes.sessions import router as sessions_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # Startup: drop stale oracle results once
    removed = get_registry().gateway.sweep_cache()
    logger.info(f"Cache sweep removed {removed} stale entries")
    yield


app = FastAPI(title="Tripcraft API", version="0.1.0", lifespan=lifespan)

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(sessions_router)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Tripcraft API", "version": "0.1.0"}
