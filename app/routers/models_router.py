# /app/routers/models_router.py

from fastapi import APIRouter, Depends
from typing import List

from ..dependencies import get_model_catalog
from ..models.generation_model import ModelInfo
from ..services.model_catalog_service import ModelCatalog

router = APIRouter()


@router.get(
    "",
    response_model=List[ModelInfo],
    summary="List Available Models",
    description="Models with display name and cost per million output tokens, cheapest first.",
)
async def list_models(catalog: ModelCatalog = Depends(get_model_catalog)):
    return await catalog.get_models()
