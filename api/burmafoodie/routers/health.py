import logging

from fastapi import APIRouter

from burmafoodie.config import VERSION
from burmafoodie.dependencies import RecipeHandlerDep, SettingsDep
from burmafoodie.schemas.health import HealthResponse

logger = logging.getLogger("burmafoodie")
router = APIRouter()


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health(app_settings: SettingsDep, handler: RecipeHandlerDep):
    """Reports whether the model credential is configured. Does not call the model."""
    configured = handler.configured
    return HealthResponse(
        status="healthy" if configured else "degraded",
        version=VERSION,
        llm_configured=configured,
        model=app_settings.claude_model,
    )
