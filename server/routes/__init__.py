"""Register all route modules on the FastAPI app."""

from fastapi import FastAPI

from .root import router as root_router
from .users import router as users_router
from .projects import router as projects_router
from .interests import router as interests_router
from .notifications import router as notifications_router


def register_routes(app: FastAPI) -> None:
    """Attach all API routers to the app."""
    app.include_router(root_router)
    app.include_router(users_router, prefix="/api/users", tags=["users"])
    app.include_router(projects_router, prefix="/api/projects", tags=["projects"])
    app.include_router(interests_router, prefix="/api", tags=["interests"])
    app.include_router(notifications_router, prefix="/api/notifications", tags=["notifications"])
