# /app/services/database_helpers/artwork_repository_sql.py

"""
This module contains all the SQLAlchemy queries for the ArtworkGroup and
Artwork tables. It is the direct interface to the database for gallery data.

Lookups by id raise `NotFoundError` when the row is absent, and any driver
failure is rolled back and re-raised as `InternalError` naming the operation
that failed, so callers never see a half-applied session.
"""

import logging
import random
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, Tuple

from sqlalchemy import exists, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import InternalError, NotFoundError
from app.db.models.artwork_models import Artwork, ArtworkGroup, utcnow

logger = logging.getLogger(__name__)

GROUP_FIELDS = ("title", "prompt", "category", "original_url", "artist_name")


class ArtworkRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    @contextmanager
    def _write(self, action: str) -> Iterator[None]:
        try:
            yield
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Database error while trying to %s", action)
            raise InternalError(f"Failed to {action}.") from e

    def release(self) -> None:
        """
        Ends the current read transaction so the pooled connection goes back
        to the engine. The next query on this session opens a fresh one.
        """
        self.db.commit()

    # --- Group Methods ---

    def create_group(self, record: Dict) -> ArtworkGroup:
        """Creates a new ArtworkGroup; both timestamps are set to now."""
        now = utcnow()
        new_group = ArtworkGroup(**record, created_at=now, updated_at=now)
        with self._write("create group"):
            self.db.add(new_group)
        self.db.refresh(new_group)
        return new_group

    def get_group(self, group_id: int) -> ArtworkGroup:
        group = self.db.query(ArtworkGroup).filter(ArtworkGroup.id == group_id).first()
        if group is None:
            raise NotFoundError(f"Group with ID {group_id} not found")
        return group

    def list_groups(self, category: Optional[str] = None) -> List[ArtworkGroup]:
        """Retrieves groups, most recently created first, optionally for one category."""
        query = self.db.query(ArtworkGroup)
        if category:
            query = query.filter(ArtworkGroup.category == category)
        return query.order_by(ArtworkGroup.created_at.desc(), ArtworkGroup.id.desc()).all()

    def update_group(self, group_id: int, data: Dict) -> ArtworkGroup:
        """Replaces every mutable field of a group."""
        group = self.get_group(group_id)
        with self._write(f"update group {group_id}"):
            for key in GROUP_FIELDS:
                setattr(group, key, data.get(key, ""))
            group.updated_at = utcnow()
        self.db.refresh(group)
        return group

    def delete_group(self, group_id: int) -> None:
        """Deletes a group. The foreign key cascade removes its artworks."""
        group = self.get_group(group_id)
        with self._write(f"delete group {group_id}"):
            self.db.delete(group)

    def get_distinct_categories(self) -> List[str]:
        rows = (
            self.db.query(ArtworkGroup.category)
            .filter(ArtworkGroup.category != "")
            .distinct()
            .order_by(ArtworkGroup.category)
            .all()
        )
        return [row[0] for row in rows]

    # --- Artwork Methods ---

    def create_artwork(self, record: Dict) -> Artwork:
        """Creates a placeholder Artwork; its SVG stays empty until generated."""
        now = utcnow()
        record = {"svg": "", **record}
        new_artwork = Artwork(**record, created_at=now, updated_at=now)
        with self._write("create artwork"):
            self.db.add(new_artwork)
        self.db.refresh(new_artwork)
        return new_artwork

    def get_artwork(self, artwork_id: int) -> Artwork:
        artwork = self.db.query(Artwork).filter(Artwork.id == artwork_id).first()
        if artwork is None:
            raise NotFoundError(f"Artwork with ID {artwork_id} not found")
        return artwork

    def list_artworks_by_group(self, group_id: int) -> List[Artwork]:
        return (
            self.db.query(Artwork)
            .filter(Artwork.group_id == group_id)
            .order_by(Artwork.model.asc(), Artwork.id.asc())
            .all()
        )

    def count_artworks_in_group(self, group_id: int) -> int:
        return self.db.query(Artwork).filter(Artwork.group_id == group_id).count()

    def update_artwork_params(self, artwork_id: int, temperature: float, max_tokens: int) -> Artwork:
        """Updates only the generation parameters; the SVG is left untouched."""
        artwork = self.get_artwork(artwork_id)
        with self._write(f"update parameters of artwork {artwork_id}"):
            artwork.temperature = temperature
            artwork.max_tokens = max_tokens
            artwork.updated_at = utcnow()
        self.db.refresh(artwork)
        return artwork

    def save_artwork_svg(self, artwork_id: int, svg: str) -> Artwork:
        """Overwrites the stored SVG wholesale."""
        artwork = self.get_artwork(artwork_id)
        with self._write(f"save SVG of artwork {artwork_id}"):
            artwork.svg = svg
            artwork.updated_at = utcnow()
        self.db.refresh(artwork)
        return artwork

    def delete_artwork(self, artwork_id: int) -> None:
        artwork = self.get_artwork(artwork_id)
        with self._write(f"delete artwork {artwork_id}"):
            self.db.delete(artwork)

    # --- Gallery Queries ---

    def list_groups_with_artworks(
        self, category: Optional[str] = None
    ) -> Tuple[List[ArtworkGroup], Dict[int, List[Artwork]]]:
        """
        Fetches the matching groups and all of their artworks in two queries:
        one for the groups and one IN-clause query for the artworks, which are
        then bucketed by group id.
        """
        groups = self.list_groups(category)
        artworks_by_group: Dict[int, List[Artwork]] = {}
        if not groups:
            return groups, artworks_by_group

        group_ids = [group.id for group in groups]
        artworks = (
            self.db.query(Artwork)
            .filter(Artwork.group_id.in_(group_ids))
            .order_by(Artwork.group_id, Artwork.model.asc(), Artwork.id.asc())
            .all()
        )
        for artwork in artworks:
            artworks_by_group.setdefault(artwork.group_id, []).append(artwork)
        return groups, artworks_by_group

    def get_random_group_with_model_artworks(
        self, model_a: str, model_b: str
    ) -> Tuple[ArtworkGroup, List[Artwork]]:
        """
        Picks, uniformly at random, one group that has an artwork from each of
        two models (case-insensitive substring match) and returns it with those
        artworks, `model_a`'s first.
        """
        pattern_a = f"%{model_a}%"
        pattern_b = f"%{model_b}%"
        has_a = exists().where(Artwork.group_id == ArtworkGroup.id, Artwork.model.ilike(pattern_a))
        has_b = exists().where(Artwork.group_id == ArtworkGroup.id, Artwork.model.ilike(pattern_b))

        candidate_ids = [row[0] for row in self.db.query(ArtworkGroup.id).filter(has_a, has_b).all()]
        if not candidate_ids:
            raise NotFoundError(
                f"No group has artworks from both '{model_a}' and '{model_b}'",
                details={"model_a": model_a, "model_b": model_b},
            )

        group = self.get_group(random.choice(candidate_ids))
        matching = (
            self.db.query(Artwork)
            .filter(
                Artwork.group_id == group.id,
                or_(Artwork.model.ilike(pattern_a), Artwork.model.ilike(pattern_b)),
            )
            .order_by(Artwork.model.asc(), Artwork.id.asc())
            .all()
        )
        first = [a for a in matching if model_a.lower() in a.model.lower()]
        second = [a for a in matching if model_a.lower() not in a.model.lower()]
        return group, first + second
