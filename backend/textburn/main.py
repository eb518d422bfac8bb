import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from textburn.core.config import get_settings
from textburn.core.logging import configure_logging
from textburn.api.v1 import api_router as api_v1_router

settings = get_settings()


def create_app() -> FastAPI:
    configure_logging()

    # Ensure dirs exist
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    os.makedirs(settings.OUTPUT_DIR, exist_ok=True)

    app = FastAPI(
        title=settings.PROJECT_NAME,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_v1_router, prefix=settings.API_V1_PREFIX)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()
