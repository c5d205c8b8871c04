"""Grading API FastAPI application."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from diag_core.settings import ServiceSettings
from grading_api.api.routes import router as grading_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Configure logging on startup."""
    settings = ServiceSettings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting %s", settings.name)

    yield

    logger.info("Stopping %s", settings.name)


app = FastAPI(
    title="EU AI Act Diagnostics Grading API",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(grading_router)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/ready")
async def ready() -> dict[str, str]:
    return {"status": "ready"}


if __name__ == "__main__":
    import uvicorn

    service_settings = ServiceSettings()
    uvicorn.run(app, host=service_settings.host, port=service_settings.port)
