"""API router registration."""

from fastapi import APIRouter

from el_arca.api.routes import chapters, debts, distributions, health

v1_router = APIRouter(prefix="/v1")
v1_router.include_router(chapters.router)
v1_router.include_router(distributions.router)
v1_router.include_router(debts.router)

__all__ = ["health", "v1_router"]
