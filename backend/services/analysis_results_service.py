"""Storage of flagged-and-rephrased analysis results."""

from typing import List, Optional, Set

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from db.models import AnalysisResult
from services.classification import ContentType
from utils.logging import get_logger

logger = get_logger(__name__)


class AnalysisResultsService:
    """Create, list and delete analysis results; keeps only the newest ``max_kept`` rows."""

    def __init__(self, max_kept: int = 20):
        self.max_kept = max_kept

    async def list_results(self, db: AsyncSession, limit: Optional[int] = None) -> List[AnalysisResult]:
        query = select(AnalysisResult).order_by(AnalysisResult.id.desc())
        if limit:
            query = query.limit(limit)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def create_result(
        self,
        db: AsyncSession,
        *,
        content_type: ContentType,
        original_content: str,
        rephrased_content: Optional[str],
        url: str,
        domain: str,
    ) -> AnalysisResult:
        record = AnalysisResult(
            type=ContentType(content_type).value,
            original_content=original_content,
            rephrased_content=rephrased_content,
            url=url,
            domain=domain,
        )
        db.add(record)
        await db.flush()
        await db.refresh(record)

        pruned = await self._prune(db)
        logger.info("Analysis result stored", record_id=record.id, content_type=record.type, domain=domain, pruned=pruned)
        return record

    async def delete_result(self, db: AsyncSession, record_id: int) -> bool:
        result = await db.execute(delete(AnalysisResult).where(AnalysisResult.id == record_id))
        return result.rowcount > 0

    async def clear_results(self, db: AsyncSession) -> int:
        result = await db.execute(delete(AnalysisResult))
        logger.info("Analysis results cleared", deleted=result.rowcount)
        return result.rowcount

    async def existing_ids(self, db: AsyncSession, record_ids: List[int]) -> Set[int]:
        """Subset of ``record_ids`` still stored (pruning may remove earlier inserts)."""
        if not record_ids:
            return set()
        result = await db.execute(select(AnalysisResult.id).where(AnalysisResult.id.in_(record_ids)))
        return set(result.scalars().all())

    async def count_results(self, db: AsyncSession) -> int:
        return (await db.execute(select(func.count()).select_from(AnalysisResult))).scalar_one()

    async def _prune(self, db: AsyncSession) -> int:
        if not self.max_kept:
            return 0

        cutoff = (
            await db.execute(
                select(AnalysisResult.id).order_by(AnalysisResult.id.desc()).offset(self.max_kept - 1).limit(1)
            )
        ).scalar_one_or_none()
        if cutoff is None:
            return 0

        result = await db.execute(delete(AnalysisResult).where(AnalysisResult.id < cutoff))
        return result.rowcount
