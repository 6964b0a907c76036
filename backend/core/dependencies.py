"""
FastAPI dependencies for the application.
"""

from fastapi import Request

from core.config import Settings
from services.analysis_results_service import AnalysisResultsService
from services.classification import DetectionSettings
from services.pipeline import ContentPipeline
from services.rephrase_service import RephraseEngine


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_rephrase_engine(request: Request) -> RephraseEngine:
    """Engine created at startup; holds the remote rephraser and its concurrency cap."""
    return request.app.state.rephrase_engine


def get_content_pipeline(request: Request) -> ContentPipeline:
    return ContentPipeline(get_rephrase_engine(request))


def get_results_service(request: Request) -> AnalysisResultsService:
    return AnalysisResultsService(max_kept=get_settings(request).analysis_results_max_kept)


def with_server_limits(detection: DetectionSettings, settings: Settings) -> DetectionSettings:
    """Apply server-side scanning limits to a client settings snapshot."""
    return detection.model_copy(update={"sentiment_min_length": settings.sentiment_min_length})
