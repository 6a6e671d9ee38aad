# /app/services/group_service.py

"""
Business logic for artwork groups. A group must exist before any artwork can
be attached to it, and its title and prompt can never be blank; both rules
are enforced here rather than in the storage layer.
"""

import logging
from typing import Dict, List, Optional

from ..core.errors import ValidationError
from ..models.artwork_model import Artwork
from ..models.gallery_model import GroupDetail
from ..models.group_model import Group, GroupBase, GroupCreate, GroupUpdate
from .database_service import DatabaseService

logger = logging.getLogger(__name__)


def validated_group_record(group_data: GroupBase) -> Dict:
    record = group_data.model_dump()
    record["title"] = record["title"].strip()
    record["prompt"] = record["prompt"].strip()
    if not record["title"]:
        raise ValidationError("Title is required", details={"field": "title"})
    if not record["prompt"]:
        raise ValidationError("Prompt is required", details={"field": "prompt"})
    return record


def create_group(group_data: GroupCreate, db: DatabaseService) -> Group:
    new_group = db.create_group(validated_group_record(group_data))
    logger.info("Created group %d: %s", new_group.id, new_group.title)
    return Group.model_validate(new_group)


def get_group_detail(group_id: int, db: DatabaseService) -> GroupDetail:
    group = db.get_group(group_id)
    artworks = [Artwork.model_validate(a) for a in db.list_artworks_by_group(group_id)]
    return GroupDetail(**Group.model_validate(group).model_dump(), artworks=artworks)


def list_groups(db: DatabaseService, category: Optional[str] = None) -> List[Group]:
    return [Group.model_validate(group) for group in db.list_groups(category)]


def update_group(group_id: int, group_update: GroupUpdate, db: DatabaseService) -> Group:
    updated = db.update_group(group_id, validated_group_record(group_update))
    logger.info("Updated group %d", group_id)
    return Group.model_validate(updated)


def delete_group(group_id: int, db: DatabaseService) -> None:
    db.delete_group(group_id)
    logger.info("Deleted group %d and its artworks", group_id)
