# /app/models/artwork_model.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict

from .group_model import GroupCreate


class ArtworkCreate(BaseModel):
    """
    Payload for attaching a model to a group. Either `group_id` points at an
    existing group, or `group` carries a new one which is created first.
    Missing parameters fall back to the deployment defaults.
    """
    group_id: Optional[int] = None
    group: Optional[GroupCreate] = None
    model: str = Field(..., description="Model identifier, e.g. 'openai/gpt-5'.")
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None


class ArtworkParamsUpdate(BaseModel):
    temperature: float
    max_tokens: int


class Artwork(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    group_id: int
    model: str
    temperature: float
    max_tokens: int
    svg: str = ""
    created_at: datetime
    updated_at: datetime


class ArtworkDeleteResponse(BaseModel):
    success: bool
    message: str
    group_id: int
    # True when the deleted artwork was the last one in its group; the
    # client refreshes or redirects, the group itself is kept.
    group_empty: bool
