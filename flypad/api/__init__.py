"""API routers for the flypad backend."""

from fastapi import APIRouter

from .briefing import router as briefing_router
from .health import router as health_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(briefing_router)

__all__ = ["api_router"]
