# /app/routers/generate_router.py

from fastapi import APIRouter, Depends

from ..core.config import Settings
from ..dependencies import MUTATING_DEPENDENCIES, get_generation_client, get_settings
from ..models import generation_model
from ..services import generation_service
from ..services.database_service import DatabaseService, get_db_service
from ..services.openrouter_service import OpenRouterClient

router = APIRouter()


@router.post(
    "",
    response_model=generation_model.GenerateResponse,
    summary="Generate SVG",
    description=(
        "With `artwork_id`, generates for a stored artwork and saves the result, "
        "overwriting any previous SVG only on success. With `prompt` and `model`, "
        "returns a one-off SVG without storing it."
    ),
    dependencies=MUTATING_DEPENDENCIES,
)
async def generate_svg(
    request: generation_model.GenerateRequest,
    db: DatabaseService = Depends(get_db_service),
    client: OpenRouterClient = Depends(get_generation_client),
    settings: Settings = Depends(get_settings),
):
    if request.artwork_id is not None:
        artwork = await generation_service.generate_for_artwork(
            artwork_id=request.artwork_id, db=db, client=client, settings=settings
        )
        return generation_model.GenerateResponse(svg=artwork.svg, artwork_id=artwork.id)

    svg = await generation_service.generate_preview(request=request, client=client, settings=settings)
    return generation_model.GenerateResponse(svg=svg)
