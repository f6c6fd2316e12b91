"""HTTP endpoint for looking up available models."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Query
from fastapi.responses import JSONResponse

from audience_tagger.core import UnknownProviderError
from audience_tagger.use_cases import ModelsService

router = APIRouter(prefix="/AutoParentalTags", tags=["models"])
logger = logging.getLogger(__name__)


def get_models_service() -> ModelsService:
    return ModelsService()


@router.get("/Models", response_model=list[str])
async def get_models(
    provider: str = Query(...),
    api_key: Optional[str] = Query(None, alias="apiKey"),
    endpoint: Optional[str] = Query(None),
    service: ModelsService = Depends(get_models_service),
):
    """Return model identifiers for the given provider."""
    try:
        return await service.get_models(provider, api_key=api_key, endpoint=endpoint)
    except UnknownProviderError:
        return JSONResponse(status_code=400, content={"error": f"Invalid provider: {provider}"})
    except Exception as e:
        logger.error("Error fetching models: %s", e, exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "An unexpected error occurred while fetching models."},
        )


def create_app() -> FastAPI:
    app = FastAPI(title="Audience Tagger")
    app.include_router(router)
    return app
