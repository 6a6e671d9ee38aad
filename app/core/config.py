# /app/core/config.py

"""
Runtime configuration. Values are read from the environment (a local `.env`
file is loaded first) and collected into a single `Settings` record that is
built once at startup and handed to the components that need it.
"""

import os
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

MIN_TEMPERATURE = 0.0
MAX_TEMPERATURE = 2.0


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("true", "1")


class Settings(BaseModel):
    openrouter_api_key: Optional[str] = None
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    app_url: str = "http://localhost:8000"
    app_title: str = "Pelican Art Gallery"

    # Editing is off unless explicitly enabled.
    editing_enabled: bool = False

    default_temperature: float = Field(default=0.7, ge=MIN_TEMPERATURE, le=MAX_TEMPERATURE)
    default_max_tokens: int = Field(default=50000, gt=0)
    reasoning_enabled: bool = False
    reasoning_effort: Literal["low", "medium", "high"] = "medium"

    # Large-model completions are slow; minutes, not seconds.
    generation_timeout_seconds: float = 300.0
    models_cache_ttl_seconds: float = 300.0

    rate_limit_window_seconds: float = 60.0
    rate_limit_requests: int = 100

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            openrouter_api_key=os.getenv("OPENROUTER_API_KEY") or None,
            openrouter_base_url=os.getenv("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1"),
            app_url=os.getenv("APP_URL", "http://localhost:8000"),
            app_title=os.getenv("APP_TITLE", "Pelican Art Gallery"),
            editing_enabled=_env_flag("ENABLE_EDITING"),
            default_temperature=float(os.getenv("DEFAULT_TEMPERATURE", "0.7")),
            default_max_tokens=int(os.getenv("DEFAULT_MAX_TOKENS", "50000")),
            reasoning_enabled=_env_flag("REASONING_ENABLED"),
            reasoning_effort=os.getenv("REASONING_EFFORT", "medium"),
            generation_timeout_seconds=float(os.getenv("GENERATION_TIMEOUT_SECONDS", "300")),
            models_cache_ttl_seconds=float(os.getenv("MODELS_CACHE_TTL_SECONDS", "300")),
            rate_limit_window_seconds=float(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "60")),
            rate_limit_requests=int(os.getenv("RATE_LIMIT_REQUESTS", "100")),
        )
