"""
Clipbite Feed API: FastAPI app factory.

Use: uvicorn feed_server.app:app
Or:  from feed_server import app
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_config
from .routes import register_routes
from .state import get_state


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app() -> FastAPI:
    """Build FastAPI app with CORS, routes, and startup."""
    app = FastAPI(
        title="Clipbite Feed API",
        description="Co-like video recommendations and feeds over a document store",
        version="1.0.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_routes(app)

    @app.on_event("startup")
    def _startup():
        config = get_config()
        configure_logging(config.log_level)
        ok, errors = config.validate()
        for err in errors:
            print(f"[startup] WARNING: {err}")
        state = get_state()
        print("Clipbite Feed API starting...")
        print(f"Data source: {config.data_source}")
        print(f"Fan-out limit: {state.config.fan_out_limit}")
        print(f"Profile lookup: {state.config.profile_lookup}")
        print(f"[startup] Config valid: {ok}, store ready: {state.is_ready}")

    return app


app = create_app()
