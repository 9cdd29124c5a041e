"""FastAPI application factory for the El Arca treasury API."""

from __future__ import annotations

from fastapi import FastAPI

from el_arca.api.error_handlers import register_error_handlers
from el_arca.api.routes import health, v1_router
from el_arca.core.logging import configure_logging

OPENAPI_TAGS = [
    {
        "name": "Distributions",
        "description": "Split an amount across active chapters by member count.",
    },
    {"name": "Debts", "description": "Debt listing and overdue housekeeping."},
    {"name": "Chapters", "description": "Active chapter roster."},
]


def create_app() -> FastAPI:
    """Create and configure FastAPI application instance."""

    configure_logging()
    app = FastAPI(
        title="El Arca Treasury API",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
    )
    register_error_handlers(app)
    app.include_router(health.router)
    app.include_router(v1_router)
    return app


app = create_app()
