"""QC inspection repository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from brimis.db.models.qc_inspection import QCInspectionRow
from brimis.repositories.base import BaseRepository


class QCInspectionRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, QCInspectionRow)

    async def latest_by_job(self, job_id: str) -> QCInspectionRow | None:
        stmt = (
            select(QCInspectionRow)
            .where(QCInspectionRow.job_id == job_id)
            .order_by(QCInspectionRow.inspected_at.desc(), QCInspectionRow.created_at.desc())
            .limit(1)
        )
        result = await self._execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_job(self, job_id: str) -> list[QCInspectionRow]:
        return await self.list_by_field("job_id", job_id)
