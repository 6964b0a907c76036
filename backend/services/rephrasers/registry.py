"""
Rephraser registry to resolve the remote strategy from settings.
"""

from __future__ import annotations

from typing import Optional

from core.config import Settings
from services.rephrasers.base import RemoteRephraserProtocol
from services.rephrasers.gemini import GeminiRephraser
from services.rephrasers.huggingface import HuggingFaceRephraser


def resolve_provider(settings: Settings) -> str:
    """Name of the remote provider the settings select, or "rules" when none is usable."""
    provider = settings.rephrase_provider
    if provider == "auto":
        if settings.huggingface_api_key:
            return "huggingface"
        if settings.gemini_api_key:
            return "gemini"
        return "rules"
    if provider == "huggingface" and not settings.huggingface_api_key:
        return "rules"
    if provider == "gemini" and not settings.gemini_api_key:
        return "rules"
    return provider


def build_remote_rephraser(settings: Settings) -> Optional[RemoteRephraserProtocol]:
    """Instantiate the configured remote rephraser; None means rule-based only."""
    provider = resolve_provider(settings)
    if provider == "huggingface":
        return HuggingFaceRephraser(
            api_key=settings.huggingface_api_key,
            model_url=settings.huggingface_model_url,
            timeout_seconds=settings.rephrase_timeout_seconds,
        )
    if provider == "gemini":
        return GeminiRephraser(api_key=settings.gemini_api_key, model_name=settings.gemini_model)
    return None
