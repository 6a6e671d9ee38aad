# /app/dependencies.py

"""
FastAPI dependencies for the process-scoped components. Each one is built
once in `app.main.create_app` and stored on `app.state`; handlers receive
them through `Depends` instead of reaching for module-level globals.
"""

import logging

from fastapi import Depends, Request

from .core.config import Settings
from .core.errors import ForbiddenError, RateLimitError
from .core.rate_limiter import RateLimiter, get_client_ip
from .services.model_catalog_service import ModelCatalog
from .services.openrouter_service import OpenRouterClient

logger = logging.getLogger(__name__)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_generation_client(request: Request) -> OpenRouterClient:
    return request.app.state.generation_client


def get_model_catalog(request: Request) -> ModelCatalog:
    return request.app.state.model_catalog


def get_rate_limiter(request: Request) -> RateLimiter:
    return request.app.state.rate_limiter


def enforce_rate_limit(request: Request, limiter: RateLimiter = Depends(get_rate_limiter)) -> None:
    client_ip = get_client_ip(request)
    if not limiter.allow(client_ip):
        logger.warning("Rate limit exceeded for %s on %s", client_ip, request.url.path)
        raise RateLimitError("Rate limit exceeded")


def require_editing(request: Request, settings: Settings = Depends(get_settings)) -> None:
    """Rejects every mutating request while the deployment is read-only."""
    if not settings.editing_enabled:
        logger.warning("%s %s denied: editing is disabled", request.method, request.url.path)
        raise ForbiddenError("Artwork editing is currently disabled")


# Shared by every route that creates, changes, deletes or generates.
MUTATING_DEPENDENCIES = [Depends(enforce_rate_limit), Depends(require_editing)]
