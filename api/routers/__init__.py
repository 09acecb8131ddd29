"""
Router package for the Session Composer API.

This package contains all API routers organized by domain:
- health: Health check endpoints
- sessions: Session persistence and editing endpoints
- modules: Reusable block library
"""

from api.routers.health import router as health_router
from api.routers.sessions import router as sessions_router
from api.routers.modules import router as modules_router

__all__ = [
    "health_router",
    "sessions_router",
    "modules_router",
]
