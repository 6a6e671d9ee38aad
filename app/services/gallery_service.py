# /app/services/gallery_service.py

"""
Assembles the read-only page data: the homepage's featured side-by-side
comparison, the per-category gallery, the single-group page and the workshop
editor. All reads go through the batched queries of the DatabaseService.
"""

import logging
from typing import Callable, Dict, Iterable, List, Optional

from ..core.config import Settings
from ..core.errors import NotFoundError
from ..models.artwork_model import Artwork
from ..models.gallery_model import GalleryPage, GroupDetail, GroupPage, HomePage, WorkshopPage
from ..models.generation_model import ModelInfo
from ..models.group_model import Group
from .database_service import DatabaseService

logger = logging.getLogger(__name__)

# The gallery only shows artworks from these models (exact, case-insensitive).
SHOWCASE_MODELS = (
    "anthropic/claude-sonnet-4",
    "google/gemini-2.5-pro",
    "openai/gpt-5",
)

# Homepage comparison, tried in order until a group qualifies.
FEATURED_MODEL_PAIRS = (
    ("anthropic/claude-sonnet-4", "openai/gpt-5"),
    ("anthropic", "openai"),
)

KNOWN_PROVIDERS = ("openai", "anthropic", "google")
OTHER_PROVIDER_FILTER = "other"


def is_showcase_model(model: str) -> bool:
    return bool(model) and model.lower() in SHOWCASE_MODELS


def matches_provider_filters(model: str, filters: List[str]) -> bool:
    """
    True when the model belongs to any of the requested providers. "other"
    matches every model outside the known providers.
    """
    low_model = model.lower()
    for model_filter in filters:
        wanted = model_filter.lower()
        if wanted == OTHER_PROVIDER_FILTER:
            if not any(provider in low_model for provider in KNOWN_PROVIDERS):
                return True
        elif wanted in low_model:
            return True
    return False


def _same_id(model_id: str) -> str:
    return model_id


def model_names(artworks: Iterable[Artwork], display_name: Callable[[str], str]) -> Dict[str, str]:
    return {artwork.model: display_name(artwork.model) for artwork in artworks}


def get_home_page(db: DatabaseService, settings: Settings, display_name: Callable[[str], str] = _same_id) -> HomePage:
    for model_a, model_b in FEATURED_MODEL_PAIRS:
        try:
            group, artworks = db.get_random_group_with_model_artworks(model_a, model_b)
        except NotFoundError as e:
            logger.info("No featured group for %s vs %s: %s", model_a, model_b, e.message)
            continue
        featured = [Artwork.model_validate(a) for a in artworks]
        return HomePage(
            editing_enabled=settings.editing_enabled,
            featured_group=Group.model_validate(group),
            featured_artworks=featured,
            model_names=model_names(featured, display_name),
        )
    return HomePage(editing_enabled=settings.editing_enabled)


def get_first_category(db: DatabaseService) -> Optional[str]:
    categories = db.get_distinct_categories()
    return categories[0] if categories else None


def get_gallery_page(
    db: DatabaseService, settings: Settings, category: str = "", display_name: Callable[[str], str] = _same_id
) -> GalleryPage:
    groups, artworks_by_group = db.list_groups_with_artworks(category or None)
    categories = db.get_distinct_categories()

    gallery_groups = []
    for group in groups:
        shown = [
            Artwork.model_validate(a)
            for a in artworks_by_group.get(group.id, [])
            if is_showcase_model(a.model)
        ]
        gallery_groups.append(GroupDetail(**Group.model_validate(group).model_dump(), artworks=shown))

    logger.info("Fetched %d groups and %d categories for gallery", len(gallery_groups), len(categories))
    return GalleryPage(
        category=category,
        categories=categories,
        groups=gallery_groups,
        model_names=model_names((a for g in gallery_groups for a in g.artworks), display_name),
        editing_enabled=settings.editing_enabled,
    )


def get_group_page(
    group_id: int,
    db: DatabaseService,
    settings: Settings,
    model_filters: List[str],
    display_name: Callable[[str], str] = _same_id,
) -> GroupPage:
    group = db.get_group(group_id)
    artworks = db.list_artworks_by_group(group_id)
    if model_filters:
        artworks = [a for a in artworks if matches_provider_filters(a.model, model_filters)]
    shown = [Artwork.model_validate(a) for a in artworks]
    return GroupPage(
        group=Group.model_validate(group),
        artworks=shown,
        model_names=model_names(shown, display_name),
        model_filters=model_filters,
        editing_enabled=settings.editing_enabled,
    )


def get_workshop_page(
    db: DatabaseService,
    settings: Settings,
    models: List[ModelInfo],
    edit_group_id: Optional[int] = None,
    display_name: Callable[[str], str] = _same_id,
) -> WorkshopPage:
    page = WorkshopPage(
        models=models,
        default_temperature=settings.default_temperature,
        default_max_tokens=settings.default_max_tokens,
        reasoning_enabled=settings.reasoning_enabled,
        reasoning_effort=settings.reasoning_effort,
    )
    if edit_group_id is not None:
        try:
            group = db.get_group(edit_group_id)
        except NotFoundError:
            # An unknown edit id just opens an empty workshop.
            logger.info("Workshop edit requested for missing group %d", edit_group_id)
            return page
        page.edit_group = Group.model_validate(group)
        page.edit_artworks = [Artwork.model_validate(a) for a in db.list_artworks_by_group(edit_group_id)]
        page.model_names = model_names(page.edit_artworks, display_name)
    return page
