# /app/routers/artworks_router.py

from fastapi import APIRouter, Depends, status

from ..core.config import Settings
from ..dependencies import MUTATING_DEPENDENCIES, get_settings
from ..models import artwork_model
from ..services import artwork_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.post(
    "",
    response_model=artwork_model.Artwork,
    status_code=status.HTTP_201_CREATED,
    summary="Attach a Model to a Group",
    description="Creates an empty artwork placeholder. A new group is created first when only an inline group is given.",
    dependencies=MUTATING_DEPENDENCIES,
)
def create_artwork(
    artwork_create: artwork_model.ArtworkCreate,
    db: DatabaseService = Depends(get_db_service),
    settings: Settings = Depends(get_settings),
):
    return artwork_service.create_artwork(artwork_data=artwork_create, db=db, settings=settings)


@router.get("/{artwork_id}", response_model=artwork_model.Artwork, summary="Get a Single Artwork")
def get_artwork(artwork_id: int, db: DatabaseService = Depends(get_db_service)):
    return artwork_service.get_artwork(artwork_id=artwork_id, db=db)


@router.patch(
    "/{artwork_id}",
    response_model=artwork_model.Artwork,
    summary="Update an Artwork's Generation Parameters",
    dependencies=MUTATING_DEPENDENCIES,
)
def update_artwork_params(
    artwork_id: int,
    params: artwork_model.ArtworkParamsUpdate,
    db: DatabaseService = Depends(get_db_service),
    settings: Settings = Depends(get_settings),
):
    return artwork_service.update_artwork_params(artwork_id=artwork_id, params=params, db=db, settings=settings)


@router.delete(
    "/{artwork_id}",
    response_model=artwork_model.ArtworkDeleteResponse,
    summary="Delete a Single Artwork",
    description="`group_empty` is true when this was the group's last artwork; the group itself is kept.",
    dependencies=MUTATING_DEPENDENCIES,
)
def delete_artwork(artwork_id: int, db: DatabaseService = Depends(get_db_service)):
    return artwork_service.delete_artwork(artwork_id=artwork_id, db=db)
