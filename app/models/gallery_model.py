# /app/models/gallery_model.py

"""
View models for the read-only pages: the homepage's featured comparison, the
category gallery, the single-group page and the workshop editor. The HTML
templates consume exactly these shapes. Every page carries `model_names`,
mapping each model id it shows to the catalog display name printed in the
artwork headers.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .artwork_model import Artwork
from .generation_model import ModelInfo
from .group_model import Group


class GroupDetail(Group):
    """A group together with its artworks, ordered by model name."""
    artworks: List[Artwork] = Field(default_factory=list)


class GalleryPage(BaseModel):
    title: str = "Gallery - Pelican Art Gallery"
    category: str = ""
    categories: List[str] = Field(default_factory=list)
    groups: List[GroupDetail] = Field(default_factory=list)
    model_names: Dict[str, str] = Field(default_factory=dict)
    editing_enabled: bool = False


class HomePage(BaseModel):
    editing_enabled: bool = False
    featured_group: Optional[Group] = None
    featured_artworks: List[Artwork] = Field(default_factory=list)
    model_names: Dict[str, str] = Field(default_factory=dict)


class GroupPage(BaseModel):
    title: str = "Artwork Group - Pelican Art Gallery"
    group: Group
    artworks: List[Artwork] = Field(default_factory=list)
    model_filters: List[str] = Field(default_factory=list)
    model_names: Dict[str, str] = Field(default_factory=dict)
    editing_enabled: bool = False


class WorkshopPage(BaseModel):
    models: List[ModelInfo] = Field(default_factory=list)
    edit_group: Optional[Group] = None
    edit_artworks: List[Artwork] = Field(default_factory=list)
    model_names: Dict[str, str] = Field(default_factory=dict)
    default_temperature: float
    default_max_tokens: int
    reasoning_enabled: bool = False
    reasoning_effort: str = "medium"
