"""
DevMatch API — FastAPI app factory.

Use: uvicorn server.app:app
Or:  from server import app
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_config
from .routes import register_routes
from .state import get_state


def create_app() -> FastAPI:
    """Build FastAPI app with CORS, routes, and startup."""
    config = get_config()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FastAPI(
        title="DevMatch API",
        description="Side-project matching: browse, recommendations, and interests",
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
    async def _startup_logging():
        print("DevMatch API starting...")
        _, errors = config.validate()
        for error in errors:
            print(f"[startup] WARNING: {error}")
        state = get_state()
        print(f"[startup] Data source: {state.config.data_source}")
        mc = state.matching_config
        print(
            f"[startup] Scoring weights: skills={mc.weight_skills} "
            f"experience={mc.weight_experience} completeness={mc.weight_completeness}, "
            f"recommendation floor={mc.recommendation_floor}"
        )

    return app


app = create_app()
