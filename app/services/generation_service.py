# /app/services/generation_service.py

"""
Orchestrates SVG generation. For a stored artwork the prompt always comes
from the owning group and the model/parameters from the artwork itself, so
every artwork in a group renders the same prompt.

The SVG column is written only after the API call succeeds. A failed
regeneration therefore leaves the previous artwork exactly as it was.
"""

import logging
from typing import Optional

from ..core.config import Settings
from ..core.errors import ValidationError
from ..models.artwork_model import Artwork
from ..models.generation_model import GenerateRequest, ReasoningConfig
from .artwork_service import validated_params
from .database_service import DatabaseService
from .openrouter_service import OpenRouterClient

logger = logging.getLogger(__name__)


def default_reasoning(settings: Settings) -> Optional[ReasoningConfig]:
    if not settings.reasoning_enabled:
        return None
    return ReasoningConfig(enabled=True, effort=settings.reasoning_effort)


async def generate_for_artwork(
    artwork_id: int, db: DatabaseService, client: OpenRouterClient, settings: Settings
) -> Artwork:
    artwork = db.get_artwork(artwork_id)
    group = db.get_group(artwork.group_id)
    prompt = group.prompt
    model = artwork.model
    temperature = artwork.temperature
    max_tokens = artwork.max_tokens
    regenerating = bool(artwork.svg)

    # The call can take minutes; no connection may stay checked out meanwhile.
    db.release()

    logger.info(
        "%s artwork %d: model=%s, prompt length=%d",
        "Regenerating" if regenerating else "Generating", artwork_id, model, len(prompt),
    )
    svg = await client.generate_svg(
        prompt,
        model,
        temperature,
        max_tokens,
        reasoning=default_reasoning(settings),
    )

    saved = db.save_artwork_svg(artwork_id, svg)
    logger.info("Saved %d characters of SVG for artwork %d", len(svg), artwork_id)
    return Artwork.model_validate(saved)


async def generate_preview(request: GenerateRequest, client: OpenRouterClient, settings: Settings) -> str:
    """One-off generation straight from a prompt; nothing is persisted."""
    prompt = (request.prompt or "").strip()
    model = (request.model or "").strip()
    if not prompt:
        raise ValidationError("Prompt is required", details={"field": "prompt"})
    if not model:
        raise ValidationError("Model is required", details={"field": "model"})
    temperature, max_tokens = validated_params(request.temperature, request.max_tokens, settings)

    logger.info("Generate SVG request: model=%s, prompt length=%d", model, len(prompt))
    return await client.generate_svg(
        prompt,
        model,
        temperature,
        max_tokens,
        reasoning=request.reasoning or default_reasoning(settings),
    )
