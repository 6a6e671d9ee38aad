# /app/routers/pages_router.py

"""
Read-only page routes. They return the view models the HTML templates are
rendered from; the templates themselves live with the frontend.

Model display names come from whatever the catalog has cached; only the
workshop refreshes the catalog, since it needs the full model list anyway.
"""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import RedirectResponse
from typing import List, Optional
from urllib.parse import quote

from ..core.config import Settings
from ..dependencies import get_model_catalog, get_settings
from ..models import gallery_model
from ..services import gallery_service
from ..services.database_service import DatabaseService, get_db_service
from ..services.model_catalog_service import ModelCatalog

router = APIRouter()


@router.get("/", response_model=gallery_model.HomePage, summary="Homepage with a Featured Comparison")
def home_page(
    db: DatabaseService = Depends(get_db_service),
    settings: Settings = Depends(get_settings),
    catalog: ModelCatalog = Depends(get_model_catalog),
):
    return gallery_service.get_home_page(db=db, settings=settings, display_name=catalog.display_name)


@router.get("/workshop", response_model=gallery_model.WorkshopPage, summary="Workshop (Creation UI) Data")
async def workshop_page(
    edit: Optional[int] = None,
    db: DatabaseService = Depends(get_db_service),
    settings: Settings = Depends(get_settings),
    catalog: ModelCatalog = Depends(get_model_catalog),
):
    if not settings.editing_enabled:
        return RedirectResponse(url="/", status_code=status.HTTP_302_FOUND)
    models = await catalog.get_models()
    return gallery_service.get_workshop_page(
        db=db, settings=settings, models=models, edit_group_id=edit, display_name=catalog.display_name
    )


@router.get("/gallery", response_model=gallery_model.GalleryPage, summary="Gallery, First Category")
def gallery_page(
    db: DatabaseService = Depends(get_db_service),
    settings: Settings = Depends(get_settings),
    catalog: ModelCatalog = Depends(get_model_catalog),
):
    first_category = gallery_service.get_first_category(db)
    if first_category:
        return RedirectResponse(url=f"/gallery/category/{quote(first_category)}", status_code=status.HTTP_302_FOUND)
    return gallery_service.get_gallery_page(db=db, settings=settings, display_name=catalog.display_name)


# `path` so that categories containing a slash still match.
@router.get("/gallery/category/{category:path}", response_model=gallery_model.GalleryPage, summary="Gallery for One Category")
def gallery_category_page(
    category: str,
    db: DatabaseService = Depends(get_db_service),
    settings: Settings = Depends(get_settings),
    catalog: ModelCatalog = Depends(get_model_catalog),
):
    return gallery_service.get_gallery_page(
        db=db, settings=settings, category=category, display_name=catalog.display_name
    )


@router.get("/group/{group_id}", response_model=gallery_model.GroupPage, summary="A Group and its Artworks")
def group_page(
    group_id: int,
    model: List[str] = Query(default=[]),
    db: DatabaseService = Depends(get_db_service),
    settings: Settings = Depends(get_settings),
    catalog: ModelCatalog = Depends(get_model_catalog),
):
    return gallery_service.get_group_page(
        group_id=group_id, db=db, settings=settings, model_filters=model, display_name=catalog.display_name
    )
