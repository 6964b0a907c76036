"""
Health check endpoints.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from core.config import Settings
from core.dependencies import get_rephrase_engine, get_settings
from db.pool import database_pool
from services.rephrase_service import RephraseEngine


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="API version")
    rephrase_provider: str = Field(..., description="Strategy tried first when rephrasing")
    database_available: bool = Field(..., description="Whether analysis results can be stored")


router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: Settings = Depends(get_settings),
    engine: RephraseEngine = Depends(get_rephrase_engine),
):
    """
    Health check endpoint.

    Reports which rephrasing strategy is active and whether result storage is up.
    """
    return HealthResponse(
        status="healthy",
        version=settings.api_version,
        rephrase_provider=engine.provider,
        database_available=database_pool.is_available(),
    )
