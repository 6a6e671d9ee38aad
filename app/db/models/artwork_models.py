# /app/db/models/artwork_models.py

"""
This module defines the SQLAlchemy ORM models for the `ArtworkGroup` and
`Artwork` entities. A group holds one creative prompt plus its descriptive
metadata; each artwork is one model's attempt at rendering that prompt as SVG.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ArtworkGroup(Base):
    """
    SQLAlchemy model representing one prompt and the artworks rendered from it.
    """
    __tablename__ = "artwork_groups"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String, nullable=False)
    prompt = Column(Text, nullable=False)
    category = Column(String, nullable=False, default="", server_default="", index=True)
    original_url = Column(String, nullable=False, default="", server_default="")
    artist_name = Column(String, nullable=False, default="", server_default="")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    # Deleting a group deletes its artworks through the ON DELETE CASCADE on
    # the foreign key. `passive_deletes` leaves that to the database instead
    # of loading and deleting each child from the session.
    artworks = relationship(
        "Artwork",
        back_populates="group",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Artwork.model",
    )


class Artwork(Base):
    """
    SQLAlchemy model representing a single model's SVG rendering of a group's
    prompt, together with the generation parameters used for it.
    """
    id = Column(Integer, primary_key=True, autoincrement=True)
    group_id = Column(Integer, ForeignKey("artwork_groups.id", ondelete="CASCADE"), nullable=False, index=True)
    model = Column(String, nullable=False)
    temperature = Column(Float, nullable=False)
    max_tokens = Column(Integer, nullable=False)
    # Empty until the first successful generation.
    svg = Column(Text, nullable=False, default="", server_default="")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    group = relationship("ArtworkGroup", back_populates="artworks")
