"""Lexicon-based sentiment scoring."""

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from services.content_filter import Sensitivity
from services.lexicons import NEGATIVE_WORDS, POSITIVE_WORDS

SentimentLabel = Literal["positive", "negative", "neutral"]

DEFAULT_NEGATIVE_THRESHOLD = 0.5
DEFAULT_MIN_LENGTH = 10

# Label boundaries are fixed and independent of the caller's is_negative threshold
POSITIVE_LABEL_BOUNDARY = 0.6
NEGATIVE_LABEL_BOUNDARY = 0.4

# Sentiment sensitivity -> is_negative threshold; higher sensitivity flags more text
SENTIMENT_THRESHOLDS = {
    Sensitivity.LOW: 0.4,
    Sensitivity.MEDIUM: 0.5,
    Sensitivity.HIGH: 0.6,
}

_WORD_SPLIT = re.compile(r"\W+", re.ASCII)


class SentimentResult(BaseModel):
    """Score in [0, 1] (0 = very negative), its label, and whether it falls under the caller's threshold."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    score: float = Field(..., ge=0.0, le=1.0)
    label: SentimentLabel
    is_negative: bool = Field(..., alias="isNegative")


NEUTRAL_RESULT = SentimentResult(score=0.5, label="neutral", is_negative=False)


def threshold_for(sensitivity: Sensitivity) -> float:
    return SENTIMENT_THRESHOLDS[Sensitivity(sensitivity)]


def score_sentiment(
    text: str,
    threshold: float = DEFAULT_NEGATIVE_THRESHOLD,
    min_length: int = DEFAULT_MIN_LENGTH,
) -> SentimentResult:
    """
    Score text against the positive and negative lexicons.

    score = 0.5 + (positive_share - negative_share) * 2, clamped to [0, 1],
    where each share is the lexicon hit count over the total word count.

    Args:
        text: Text to score
        threshold: Scores strictly below this are reported as negative
        min_length: Shorter text is returned as neutral without scanning

    Returns:
        SentimentResult; neutral for short text or text with no words
    """
    if not text or len(text) < min_length:
        return NEUTRAL_RESULT

    words = [word for word in _WORD_SPLIT.split(text.lower()) if word]
    total = len(words)
    if total == 0:
        return NEUTRAL_RESULT

    negative_count = 0
    positive_count = 0
    for word in words:
        if word in NEGATIVE_WORDS:
            negative_count += 1
        elif word in POSITIVE_WORDS:
            positive_count += 1

    raw_score = 0.5 + (positive_count / total - negative_count / total) * 2
    score = max(0.0, min(1.0, raw_score))

    if score > POSITIVE_LABEL_BOUNDARY:
        label = "positive"
    elif score < NEGATIVE_LABEL_BOUNDARY:
        label = "negative"
    else:
        label = "neutral"

    return SentimentResult(score=score, label=label, is_negative=score < threshold)
