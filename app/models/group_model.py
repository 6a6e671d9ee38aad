# /app/models/group_model.py

from datetime import datetime

from pydantic import BaseModel, Field, ConfigDict


class GroupBase(BaseModel):
    """
    Fields common to creating, replacing and reading an artwork group.
    Emptiness of title/prompt is checked by the group service so the API can
    answer with a 400 and a readable message.
    """
    title: str = Field(..., description="Short display title for the prompt.")
    prompt: str = Field(..., description="The creative prompt every artwork in the group renders.")
    category: str = Field(default="", description="Gallery category, e.g. 'Art' or 'Nature'.")
    original_url: str = Field(default="", description="Optional link to the original artwork being reinterpreted.")
    artist_name: str = Field(default="", description="Optional name of the original artist.")


class GroupCreate(GroupBase):
    pass


class GroupUpdate(GroupBase):
    """Full replacement of a group's mutable fields."""
    pass


class Group(GroupBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime
    updated_at: datetime
