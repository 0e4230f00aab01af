"""API routers package."""

from api.routers.health import router as health_router
from api.routers.sessions import router as sessions_router

__all__ = ["health_router", "sessions_router"]
