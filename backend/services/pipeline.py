"""Per-unit classification and rephrasing pipeline, plus bounded batch scanning."""

import asyncio
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from pydantic import BaseModel, Field

from services.classification import ContentType, DetectionSettings, classify
from services.rephrase_service import RephraseEngine
from utils.logging import get_logger

logger = get_logger(__name__)

# Fragments shorter than this are skipped before classification
MIN_UNIT_LENGTH = 10


@dataclass(frozen=True)
class TextUnit:
    """A span of page text plus where it came from; ``handle`` is opaque to the pipeline."""

    text: str
    url: str = ""
    domain: str = ""
    handle: Any = None


class AnalysisDraft(BaseModel):
    """Fields the caller needs to persist and display a flagged-and-rephrased unit."""

    type: ContentType
    original_content: str
    rephrased_content: str
    url: str = ""
    domain: str = ""
    handle: Any = Field(default=None, exclude=True)


@dataclass
class ScanOutcome:
    drafts: List[AnalysisDraft] = field(default_factory=list)
    scanned: int = 0
    failed: int = 0


class ContentPipeline:
    """Classify a unit, and rephrase it when flagged. Holds no per-unit state."""

    def __init__(self, engine: RephraseEngine):
        self.engine = engine

    async def process(self, unit: TextUnit, settings: DetectionSettings) -> Optional[AnalysisDraft]:
        text = unit.text
        if not text or len(text) < MIN_UNIT_LENGTH:
            return None

        verdict = classify(text, settings)
        if verdict is None or not settings.content_rephrasing:
            return None

        result = await self.engine.rephrase(text, verdict)
        if not result.usable:
            logger.info("Rephrase produced no usable output", content_type=verdict.value, url=unit.url)
            return None

        return AnalysisDraft(
            type=verdict,
            original_content=text,
            rephrased_content=result.rephrased,
            url=unit.url,
            domain=unit.domain,
            handle=unit.handle,
        )

    async def scan(
        self,
        units: Sequence[TextUnit],
        settings: DetectionSettings,
        max_concurrency: int = 1,
    ) -> ScanOutcome:
        """
        Process many units with at most ``max_concurrency`` in flight.

        A failure in one unit is logged and counted; sibling units still run.
        Drafts come back in input order.
        """
        sem = asyncio.Semaphore(max_concurrency)

        async def _run(unit: TextUnit) -> Optional[AnalysisDraft]:
            async with sem:
                return await self.process(unit, settings)

        results = await asyncio.gather(*(_run(unit) for unit in units), return_exceptions=True)

        outcome = ScanOutcome(scanned=len(units))
        for unit, result in zip(units, results):
            if isinstance(result, asyncio.CancelledError):
                raise result
            if isinstance(result, BaseException):
                outcome.failed += 1
                logger.error(
                    "Scanning text unit failed",
                    url=unit.url,
                    text_length=len(unit.text or ""),
                    error_type=type(result).__name__,
                    error=str(result),
                    exc_info=result,
                )
            elif result is not None:
                outcome.drafts.append(result)

        return outcome
