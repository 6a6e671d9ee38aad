# /app/main.py

import logging
import os
import time
from contextlib import asynccontextmanager
from typing import Optional

# --- Core FastAPI Imports ---
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# --- Application-specific Imports ---
from .core.config import Settings
from .core.errors import AppError, InternalError
from .core.rate_limiter import RateLimiter
from .db import base
from .db.database import engine
from .routers import (
    groups_router,
    artworks_router,
    generate_router,
    models_router,
    pages_router,
)
from .services.model_catalog_service import ModelCatalog
from .services.openrouter_service import OpenRouterClient

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Runs once at startup: make sure both tables exist.
    base.Base.metadata.create_all(bind=engine)
    logger.info("Database initialized at: %s", engine.url.render_as_string(hide_password=True))
    yield


def register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if isinstance(exc, InternalError):
            # Stack detail stays in the server log; the client gets the message only.
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc.__cause__)
            return JSONResponse(status_code=exc.status_code, content={"message": exc.message})
        logger.info("%s %s -> %d: %s", request.method, request.url.path, exc.status_code, exc.message)
        return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=jsonable_encoder({"message": "Invalid request body", "details": {"errors": exc.errors()}}),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "An unexpected server error occurred."},
        )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()

    if settings.openrouter_api_key:
        logger.info("OPENROUTER_API_KEY found - artwork generation is enabled")
    else:
        logger.warning("OPENROUTER_API_KEY environment variable not found - artwork generation will fail")

    # --- FastAPI Application Instance Creation ---
    app = FastAPI(
        title="Pelican Art Gallery API",
        description="Generates SVG artwork for a prompt across many language models and serves the gallery.",
        version="1.0.0",
        lifespan=lifespan,
    )

    # --- Process-scoped Components ---
    app.state.settings = settings
    app.state.generation_client = OpenRouterClient(
        api_key=settings.openrouter_api_key,
        base_url=settings.openrouter_base_url,
        timeout_seconds=settings.generation_timeout_seconds,
        referer=settings.app_url,
        title=settings.app_title,
    )
    app.state.model_catalog = ModelCatalog(
        base_url=settings.openrouter_base_url,
        ttl_seconds=settings.models_cache_ttl_seconds,
    )
    app.state.rate_limiter = RateLimiter(
        window_seconds=settings.rate_limit_window_seconds,
        limit=settings.rate_limit_requests,
    )

    # --- Middleware Configuration ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        logger.info("Started %s %s", request.method, request.url.path)
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info("Completed %s %s with status %d in %.1fms", request.method, request.url.path, response.status_code, elapsed_ms)
        return response

    register_exception_handlers(app)

    # --- API Router Inclusion ---
    app.include_router(models_router.router, prefix="/api/models", tags=["Models"])
    app.include_router(groups_router.router, prefix="/api/groups", tags=["Groups"])
    app.include_router(artworks_router.router, prefix="/api/artworks", tags=["Artworks"])
    app.include_router(generate_router.router, prefix="/api/generate", tags=["Generation"])

    # Read-only page data for the homepage, gallery, group and workshop views.
    app.include_router(pages_router.router, tags=["Pages"])

    # --- Health Check Endpoint ---
    @app.get("/health", tags=["Health Check"])
    async def health():
        """Liveness check; always 200 while the process is serving."""
        return {"status": "ok"}

    return app


app = create_app()
