"""Root and health endpoints."""

from fastapi import APIRouter

from ..state import get_state

router = APIRouter()


@router.get("/")
def root():
    state = get_state()
    config = state.config
    return {
        "name": "Clipbite Feed API",
        "version": "1.0.0",
        "data_source": config.data_source,
        "store": type(state.store).__name__ if state.store is not None else None,
        "media": type(state.media).__name__,
        "endpoints": {
            "feed": ["/api/feed/recommended", "/api/feed/following", "/api/feed/latest"],
            "videos": ["/api/videos/search", "/api/videos/{video_id}/views"],
            "users": [
                "/api/users/search",
                "/api/users/{user_id}/uploads",
                "/api/users/{user_id}/likes",
                "/api/users/{user_id}/stats",
            ],
        },
    }


@router.get("/api/health")
def health():
    state = get_state()
    ok, errors = state.config.validate()
    if not state.is_ready:
        errors = errors + ["Document store not configured"]
    return {
        "status": "healthy" if ok and state.is_ready else "degraded",
        "config_errors": errors,
        "fan_out_limit": state.config.fan_out_limit,
        "profile_lookup": state.config.profile_lookup,
    }
