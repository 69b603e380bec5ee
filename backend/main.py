# Role: FastAPI app bootstrap. Loads environment config early, builds Settings once, registers the tutor
# router, and exposes health/docs endpoints.

from typing import Optional

from fastapi import FastAPI

import backend.config
backend.config.load_env()

from backend.api.tutor import router as tutor_router
from backend.config import Settings


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    app = FastAPI(title="Language Tutor API", version="0.1.0")
    # Key line: one immutable Settings per process; handlers get it via backend.api.deps.get_settings.
    app.state.settings = settings or Settings.from_env()
    app.include_router(tutor_router)

    @app.get("/")
    def root() -> dict:
        # Role: quick discoverability for clients (where are docs/health).
        return {
            "message": "Language Tutor API is running",
            "docs": "/docs",
            "health": "/health",
            "tutor": "/tutor",
        }

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()
