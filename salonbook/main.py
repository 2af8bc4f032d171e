"""FastAPI application entry point for SalonBook."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from salonbook import __version__
from salonbook.api.v1.router import router as api_v1_router
from salonbook.config import get_settings
from salonbook.database import async_session_factory, engine
from salonbook.models import Base
from salonbook.services.service_catalog import ensure_default_services

logger = logging.getLogger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan - startup and shutdown events."""
    logger.info("Starting SalonBook API...")
    logger.info(f"Environment: {settings.app_env}")
    logger.info(f"Database: {settings.async_database_url.split('@')[-1]}")  # Hide credentials

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_factory() as db:
        await ensure_default_services(db)
        await db.commit()

    if not settings.whatsapp_enabled:
        logger.warning("Twilio credentials not set - reminders are returned as wa.me links")

    yield

    logger.info("Shutting down SalonBook API...")
    await engine.dispose()


app = FastAPI(
    title="SalonBook API",
    description="Client book and WhatsApp visit reminders for salons",
    version=__version__,
    lifespan=lifespan,
)

allowed_origins = [
    settings.frontend_url,
    "http://localhost:5173",  # Local development
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins if not settings.is_development else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/")
async def root() -> dict[str, str]:
    return {"name": app.title, "version": __version__, "docs": "/docs"}


@app.get("/health")
async def health() -> dict[str, str]:
    """Global health check."""
    return {"status": "ok"}
