"""FastAPI application factory."""
from __future__ import annotations

import logging
import sys

from fastapi import FastAPI

from .config import get_config
from .db import dispose_db, init_db
from .routers import clients, policies, templates

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if get_config().is_dev else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stdout,
)

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="Policy Generation Service")
app.include_router(clients.router)
app.include_router(templates.router)
app.include_router(policies.router)


@app.on_event("startup")
async def startup() -> None:
    """Initialize database on application startup."""
    config = get_config()
    LOGGER.info(
        "Starting policy service (env=%s, db=%s, ai_tailoring=%s)",
        config.APP_ENV,
        config.DATABASE_URL.split("://")[0],
        config.AI_TAILORING_ENABLED,
    )
    await init_db()
    LOGGER.info("Database initialized successfully")


@app.on_event("shutdown")
async def shutdown() -> None:
    await dispose_db()


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint with basic system info."""
    config = get_config()
    db_type = config.DATABASE_URL.split("://")[0] if "://" in config.DATABASE_URL else "unknown"
    return {
        "status": "ok",
        "env": config.APP_ENV,
        "db_type": db_type,
        "ai_tailoring": "enabled" if config.AI_TAILORING_ENABLED else "disabled",
    }
