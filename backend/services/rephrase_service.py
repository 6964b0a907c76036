"""Rephrase engine: remote strategy first, rule-based fallback, never fails outward."""

import asyncio
from typing import Optional

from pydantic import BaseModel, Field
from tenacity import AsyncRetrying, stop_after_attempt, wait_exponential

from services.classification import ContentType
from services.rephrasers import RemoteRephraserProtocol, RuleBasedRephraser
from utils.logging import get_logger

logger = get_logger(__name__)

UNABLE_TO_REPHRASE = "Unable to rephrase content. The original text may contain language that could be improved."


class RephraseResult(BaseModel):
    """Outcome of a rephrase attempt; ``original`` is always the unmodified input."""

    original: str = Field(..., description="Text as submitted")
    rephrased: str = Field(..., description="Replacement text")
    type: ContentType = Field(..., description="Content type the rephrasing was framed for")
    strategy: str = Field("rules", description="Strategy that produced the replacement", exclude=True)

    @property
    def usable(self) -> bool:
        return bool(self.rephrased.strip()) and self.rephrased != UNABLE_TO_REPHRASE


class RephraseEngine:
    """
    Produce replacement text for flagged content.

    When a remote rephraser is configured it is attempted first, bounded by a
    timeout and a concurrency cap. Any failure there is logged and answered by
    the rule-based strategy exactly once.
    """

    def __init__(
        self,
        remote: Optional[RemoteRephraserProtocol] = None,
        *,
        timeout_seconds: float = 15.0,
        max_concurrency: int = 1,
        max_attempts: int = 1,
        backoff_base: float = 0.5,
    ):
        self.remote = remote
        self.rules = RuleBasedRephraser()
        self.timeout_seconds = timeout_seconds
        self.max_attempts = max_attempts
        self.backoff_base = backoff_base
        self._sem = asyncio.Semaphore(max_concurrency)

    @property
    def provider(self) -> str:
        return self.remote.name if self.remote else self.rules.name

    async def rephrase(self, text: str, content_type: ContentType) -> RephraseResult:
        content_type = ContentType(content_type)

        if self.remote is not None:
            try:
                rephrased = await self._rephrase_remote(text, content_type)
                return RephraseResult(original=text, rephrased=rephrased, type=content_type, strategy=self.remote.name)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.warning(
                    "Remote rephrase failed, using rule-based fallback",
                    provider=self.remote.name,
                    content_type=content_type.value,
                    error_type=type(e).__name__,
                    error=str(e),
                )

        return self._rephrase_rules(text, content_type)

    async def _rephrase_remote(self, text: str, content_type: ContentType) -> str:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=self.backoff_base, min=0.5, max=4),
            reraise=True,
        ):
            with attempt:
                async with self._sem:
                    return await asyncio.wait_for(self.remote.rephrase(text, content_type), timeout=self.timeout_seconds)

    def _rephrase_rules(self, text: str, content_type: ContentType) -> RephraseResult:
        try:
            rephrased = self.rules.rephrase(text, content_type)
        except Exception:
            logger.error("Rule-based rephrase failed", content_type=content_type.value, text_length=len(text), exc_info=True)
            rephrased = UNABLE_TO_REPHRASE
        return RephraseResult(original=text, rephrased=rephrased, type=content_type, strategy=self.rules.name)
