"""Analysis result endpoints: list, store, delete one, clear all."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.dependencies import get_results_service
from db.session import get_db
from schemas.analysis import AnalysisResultCreate, AnalysisResultResponse, ClearResultsResponse
from services.analysis_results_service import AnalysisResultsService
from utils.logging import get_logger
from utils.urls import domain_from_url

logger = get_logger(__name__)
router = APIRouter()


@router.get("", response_model=List[AnalysisResultResponse])
async def list_analysis_results(
    limit: Optional[int] = Query(None, ge=1, le=1000, description="Maximum number of results, newest first"),
    db: AsyncSession = Depends(get_db),
    service: AnalysisResultsService = Depends(get_results_service),
) -> List[AnalysisResultResponse]:
    records = await service.list_results(db, limit=limit)
    return [AnalysisResultResponse.model_validate(record) for record in records]


@router.post("", response_model=AnalysisResultResponse, status_code=status.HTTP_201_CREATED)
async def create_analysis_result(
    request: AnalysisResultCreate,
    db: AsyncSession = Depends(get_db),
    service: AnalysisResultsService = Depends(get_results_service),
) -> AnalysisResultResponse:
    """Store a result the extension produced after rephrasing a passage."""
    record = await service.create_result(
        db,
        content_type=request.type,
        original_content=request.original_content,
        rephrased_content=request.rephrased_content,
        url=request.url,
        domain=request.domain or domain_from_url(request.url),
    )
    return AnalysisResultResponse.model_validate(record)


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_analysis_result(
    record_id: int,
    db: AsyncSession = Depends(get_db),
    service: AnalysisResultsService = Depends(get_results_service),
) -> Response:
    if not await service.delete_result(db, record_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Analysis result {record_id} not found")

    logger.info("Analysis result deleted", record_id=record_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("", response_model=ClearResultsResponse)
async def clear_analysis_results(
    db: AsyncSession = Depends(get_db),
    service: AnalysisResultsService = Depends(get_results_service),
) -> ClearResultsResponse:
    return ClearResultsResponse(deleted=await service.clear_results(db))
