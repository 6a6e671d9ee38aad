# /app/services/artwork_service.py

import logging
from typing import Optional, Tuple

from ..core.config import MAX_TEMPERATURE, MIN_TEMPERATURE, Settings
from ..core.errors import ValidationError
from ..models.artwork_model import Artwork, ArtworkCreate, ArtworkDeleteResponse, ArtworkParamsUpdate
from .database_service import DatabaseService
from .group_service import validated_group_record

logger = logging.getLogger(__name__)


def validated_params(
    temperature: Optional[float], max_tokens: Optional[int], settings: Settings
) -> Tuple[float, int]:
    """Applies the deployment defaults and checks the generation parameters' ranges."""
    if temperature is None:
        temperature = settings.default_temperature
    if max_tokens is None:
        max_tokens = settings.default_max_tokens

    if not MIN_TEMPERATURE <= temperature <= MAX_TEMPERATURE:
        raise ValidationError(
            f"Temperature must be between {MIN_TEMPERATURE} and {MAX_TEMPERATURE}",
            details={"field": "temperature", "value": temperature},
        )
    if max_tokens <= 0:
        raise ValidationError(
            "Max tokens must be a positive integer",
            details={"field": "max_tokens", "value": max_tokens},
        )
    return temperature, max_tokens


def create_artwork(artwork_data: ArtworkCreate, db: DatabaseService, settings: Settings) -> Artwork:
    """
    Attaches an empty placeholder artwork for one model to a group.

    When no `group_id` is given, the inline `group` payload is saved first so
    the artwork always has an owner. Everything is validated before anything
    is written, so a bad request never leaves a stray group behind.
    """
    model = artwork_data.model.strip()
    if not model:
        raise ValidationError("Model is required", details={"field": "model"})
    temperature, max_tokens = validated_params(artwork_data.temperature, artwork_data.max_tokens, settings)

    if artwork_data.group_id is not None:
        group_id = db.get_group(artwork_data.group_id).id
    elif artwork_data.group is not None:
        group_id = db.create_group(validated_group_record(artwork_data.group)).id
        logger.info("Created group %d implicitly for its first artwork", group_id)
    else:
        raise ValidationError("Either 'group_id' or 'group' is required", details={"field": "group_id"})

    new_artwork = db.create_artwork({
        "group_id": group_id,
        "model": model,
        "temperature": temperature,
        "max_tokens": max_tokens,
    })
    logger.info("Created artwork %d for group %d with model %s", new_artwork.id, group_id, model)
    return Artwork.model_validate(new_artwork)


def get_artwork(artwork_id: int, db: DatabaseService) -> Artwork:
    return Artwork.model_validate(db.get_artwork(artwork_id))


def update_artwork_params(artwork_id: int, params: ArtworkParamsUpdate, db: DatabaseService, settings: Settings) -> Artwork:
    temperature, max_tokens = validated_params(params.temperature, params.max_tokens, settings)
    return Artwork.model_validate(db.update_artwork_params(artwork_id, temperature, max_tokens))


def delete_artwork(artwork_id: int, db: DatabaseService) -> ArtworkDeleteResponse:
    group_id = db.get_artwork(artwork_id).group_id
    db.delete_artwork(artwork_id)
    remaining = db.count_artworks_in_group(group_id)
    logger.info("Deleted artwork %d; %d artwork(s) left in group %d", artwork_id, remaining, group_id)
    return ArtworkDeleteResponse(
        success=True,
        message="Artwork deleted successfully",
        group_id=group_id,
        group_empty=remaining == 0,
    )
