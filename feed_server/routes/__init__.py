"""Register all route modules on the FastAPI app."""

from fastapi import FastAPI

from .feeds import router as feeds_router
from .root import router as root_router
from .users import router as users_router
from .videos import router as videos_router


def register_routes(app: FastAPI) -> None:
    """Attach all API routers to the app."""
    app.include_router(root_router)
    app.include_router(feeds_router, prefix="/api/feed", tags=["feed"])
    app.include_router(videos_router, prefix="/api/videos", tags=["videos"])
    app.include_router(users_router, prefix="/api/users", tags=["users"])
