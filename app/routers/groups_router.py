# /app/routers/groups_router.py

from fastapi import APIRouter, Depends, Response, status
from typing import List, Optional

from ..dependencies import MUTATING_DEPENDENCIES
from ..models import gallery_model, group_model
from ..services import group_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()

# --- GROUP COLLECTION ENDPOINTS (/api/groups) ---

@router.post(
    "",
    response_model=group_model.Group,
    status_code=status.HTTP_201_CREATED,
    summary="Create an Artwork Group",
    dependencies=MUTATING_DEPENDENCIES,
)
def create_group(group_create: group_model.GroupCreate, db: DatabaseService = Depends(get_db_service)):
    return group_service.create_group(group_data=group_create, db=db)


@router.get("", response_model=List[group_model.Group], summary="List Artwork Groups")
def list_groups(category: Optional[str] = None, db: DatabaseService = Depends(get_db_service)):
    return group_service.list_groups(db=db, category=category)

# --- INDIVIDUAL GROUP ENDPOINTS (/api/groups/{group_id}) ---

@router.get("/{group_id}", response_model=gallery_model.GroupDetail, summary="Get a Group with its Artworks")
def get_group(group_id: int, db: DatabaseService = Depends(get_db_service)):
    return group_service.get_group_detail(group_id=group_id, db=db)


@router.put(
    "/{group_id}",
    response_model=group_model.Group,
    summary="Replace a Group's Metadata",
    dependencies=MUTATING_DEPENDENCIES,
)
def update_group(group_id: int, group_update: group_model.GroupUpdate, db: DatabaseService = Depends(get_db_service)):
    return group_service.update_group(group_id=group_id, group_update=group_update, db=db)


@router.delete(
    "/{group_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a Group and All its Artworks",
    dependencies=MUTATING_DEPENDENCIES,
)
def delete_group(group_id: int, db: DatabaseService = Depends(get_db_service)):
    group_service.delete_group(group_id=group_id, db=db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
