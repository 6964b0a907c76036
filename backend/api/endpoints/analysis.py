"""
Sentiment, classification, rephrasing and page-scan endpoints.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from core.config import Settings
from core.dependencies import (
    get_content_pipeline,
    get_rephrase_engine,
    get_results_service,
    get_settings,
    with_server_limits,
)
from core.errors import RephraseFailedError, SentimentAnalysisError
from db.pool import database_pool
from db.session import get_async_session
from schemas.analysis import (
    ClassifyRequest,
    ClassifyResponse,
    PageScanRequest,
    PageScanResponse,
    PageScanResult,
    RephraseRequest,
    SentimentRequest,
)
from services.analysis_results_service import AnalysisResultsService
from services.classification import classify
from services.pipeline import AnalysisDraft, ContentPipeline, TextUnit
from services.rephrase_service import RephraseEngine, RephraseResult
from services.sentiment_service import SentimentResult, score_sentiment
from utils.logging import get_logger
from utils.urls import domain_from_url

logger = get_logger(__name__)
router = APIRouter()


@router.post("/analyze/sentiment", response_model=SentimentResult)
async def analyze_sentiment(request: SentimentRequest, settings: Settings = Depends(get_settings)) -> SentimentResult:
    """Score text against the sentiment lexicons."""
    try:
        return score_sentiment(request.text, threshold=request.threshold, min_length=settings.sentiment_min_length)
    except Exception as e:
        logger.error("Sentiment analysis error", text_length=len(request.text), error=str(e), exc_info=True)
        raise SentimentAnalysisError(detail=str(e)) from e


@router.post("/rephrase", response_model=RephraseResult)
async def rephrase_content(request: RephraseRequest, engine: RephraseEngine = Depends(get_rephrase_engine)) -> RephraseResult:
    """
    Rephrase flagged text.

    Uses the configured remote model when available and falls back to the
    rule-based rewrite on any remote failure.
    """
    try:
        result = await engine.rephrase(request.text, request.type)
    except Exception as e:
        logger.error("Rephrasing error", content_type=request.type.value, error=str(e), exc_info=True)
        raise RephraseFailedError(detail=str(e)) from e

    logger.info("Content rephrased", content_type=result.type.value, strategy=result.strategy, text_length=len(request.text))
    return result


@router.post("/analyze/classify", response_model=ClassifyResponse)
async def classify_text(request: ClassifyRequest, settings: Settings = Depends(get_settings)) -> ClassifyResponse:
    """Verdict for a single text unit, without rephrasing."""
    return ClassifyResponse(type=classify(request.text, with_server_limits(request.settings, settings)))


@router.post("/analyze/page", response_model=PageScanResponse)
async def scan_page(
    request: PageScanRequest,
    settings: Settings = Depends(get_settings),
    pipeline: ContentPipeline = Depends(get_content_pipeline),
    results_service: AnalysisResultsService = Depends(get_results_service),
) -> PageScanResponse:
    """
    Scan the text units of one page.

    Units are processed with bounded concurrency; a failing unit does not
    abort the others. Flagged units are stored when ``persist`` is set and a
    database is available.
    """
    if len(request.units) > settings.scan_max_units:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Too many text units: {len(request.units)} (limit {settings.scan_max_units})",
        )

    domain = request.domain or domain_from_url(request.url)
    units = [TextUnit(text=unit.text.strip(), url=request.url, domain=domain, handle=unit.id) for unit in request.units]

    outcome = await pipeline.scan(
        units,
        with_server_limits(request.settings, settings),
        max_concurrency=settings.scan_max_concurrency,
    )

    results = [
        PageScanResult(
            unit_id=draft.handle,
            type=draft.type,
            original_content=draft.original_content,
            rephrased_content=draft.rephrased_content,
        )
        for draft in outcome.drafts
    ]

    if request.persist and results and database_pool.is_available():
        await _persist_drafts(results_service, outcome.drafts, results)

    logger.info(
        "Page scanned",
        url=request.url,
        domain=domain,
        scanned=outcome.scanned,
        flagged=len(results),
        failed=outcome.failed,
    )

    return PageScanResponse(
        url=request.url,
        domain=domain,
        scanned=outcome.scanned,
        flagged=len(results),
        failed=outcome.failed,
        results=results,
    )


async def _persist_drafts(
    results_service: AnalysisResultsService,
    drafts: List[AnalysisDraft],
    results: List[PageScanResult],
) -> None:
    """Store drafts and set ``record_id`` on results whose rows survive pruning; storage errors leave them unset."""
    try:
        async with get_async_session() as db:
            record_ids = []
            for draft in drafts:
                record = await results_service.create_result(
                    db,
                    content_type=draft.type,
                    original_content=draft.original_content,
                    rephrased_content=draft.rephrased_content,
                    url=draft.url,
                    domain=draft.domain,
                )
                record_ids.append(record.id)
            surviving = await results_service.existing_ids(db, record_ids)
    except SQLAlchemyError as e:
        logger.error("Storing page scan results failed", flagged=len(drafts), error_type=type(e).__name__, error=str(e))
        return

    for result, record_id in zip(results, record_ids):
        result.record_id = record_id if record_id in surviving else None
