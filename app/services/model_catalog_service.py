# /app/services/model_catalog_service.py

import asyncio
import logging
import time
from typing import Callable, List, Optional

import httpx

from ..models.generation_model import ModelInfo, model_info_from_api

logger = logging.getLogger(__name__)

AUTO_ROUTER_MODEL_ID = "openrouter/auto"
# Models at or below this price (USD per 1M output tokens) are pre-selected.
DEFAULT_MODEL_COST_CEILING = 0.20


class ModelCatalog:
    """
    The list of models a user can pick from, fetched from the OpenRouter
    models endpoint and cached until an explicit expiry time.

    One instance is created at startup and shared by every request.
    """

    def __init__(
        self,
        base_url: str = "https://openrouter.ai/api/v1",
        ttl_seconds: float = 300.0,
        timeout_seconds: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.base_url = base_url.rstrip("/")
        self.ttl_seconds = ttl_seconds
        self.timeout_seconds = timeout_seconds
        self._transport = transport
        self._clock = clock
        self._cache: List[ModelInfo] = []
        self._expires_at = 0.0
        self._lock = asyncio.Lock()

    async def _fetch(self) -> List[ModelInfo]:
        async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport) as client:
            response = await client.get(f"{self.base_url}/models")
        response.raise_for_status()
        entries = response.json().get("data") or []
        return [model_info_from_api(entry) for entry in entries if entry.get("id")]

    async def _raw_models(self) -> List[ModelInfo]:
        async with self._lock:
            if self._cache and self._clock() < self._expires_at:
                return list(self._cache)
            try:
                fetched = await self._fetch()
            except (httpx.HTTPError, ValueError) as e:
                # A stale list beats an empty dropdown.
                logger.warning("Failed to refresh model catalog: %s", e)
                return list(self._cache)
            self._cache = fetched
            self._expires_at = self._clock() + self.ttl_seconds
            logger.info("Fetched %d models from OpenRouter", len(fetched))
            return list(fetched)

    async def get_models(self) -> List[ModelInfo]:
        """Available models, cheapest first, with the default selection marked."""
        models = [m for m in await self._raw_models() if m.id != AUTO_ROUTER_MODEL_ID]
        models.sort(key=lambda m: m.cost)
        return [m.model_copy(update={"checked": m.cost < DEFAULT_MODEL_COST_CEILING}) for m in models]

    def display_name(self, model_id: str) -> str:
        """The catalog's name for a model, or the id itself when it is not cached."""
        for model in self._cache:
            if model.id == model_id:
                return model.name
        return model_id
