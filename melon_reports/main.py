"""
FastAPI application entrypoint for the analytics report service.
"""

from __future__ import annotations

from fastapi import FastAPI

from melon_reports.api.routes import router as api_router
from melon_reports.core.config import get_settings
from melon_reports.core.logging import configure_logging


def create_app() -> FastAPI:
    """Factory for the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="MelonAI Analytics Reports",
        version="0.1.0",
        description="Generates analytics PDF reports and publishes them behind signed links.",
    )
    app.include_router(api_router, prefix="/api")
    return app


app = create_app()

__all__ = ["app", "create_app"]
