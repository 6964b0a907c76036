"""Verdict policy combining the offensive-content filter and sentiment scoring."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from services.content_filter import Sensitivity, is_offensive
from services.sentiment_service import DEFAULT_MIN_LENGTH, score_sentiment, threshold_for


class ContentType(str, Enum):
    """Kind of flagged content; also selects the rephrasing template."""

    warning = "warning"  # offensive language
    negative = "negative"  # negative sentiment
    info = "info"  # potentially misleading claims, only requested explicitly


class DetectionSettings(BaseModel):
    """Snapshot of the extension's detection toggles and sensitivities."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    content_detection: bool = True
    sentiment_analysis: bool = True
    content_rephrasing: bool = True
    content_sensitivity: Sensitivity = Sensitivity.MEDIUM
    sentiment_sensitivity: Sensitivity = Sensitivity.MEDIUM
    sentiment_min_length: int = Field(default=DEFAULT_MIN_LENGTH, ge=0, exclude=True)


def classify(text: str, settings: DetectionSettings) -> Optional[ContentType]:
    """
    Decide whether text is offensive, negative, or needs no action.

    Offensive detection runs first; when it triggers, sentiment is not evaluated.

    Returns:
        ContentType.warning, ContentType.negative, or None
    """
    if not settings.content_detection and not settings.sentiment_analysis:
        return None

    if settings.content_detection and is_offensive(text, settings.content_sensitivity):
        return ContentType.warning

    if settings.sentiment_analysis:
        sentiment = score_sentiment(
            text,
            threshold=threshold_for(settings.sentiment_sensitivity),
            min_length=settings.sentiment_min_length,
        )
        if sentiment.is_negative:
            return ContentType.negative

    return None
