"""Technical report repository."""

from sqlalchemy.ext.asyncio import AsyncSession

from brimis.db.models.report import TechnicalReportRow
from brimis.repositories.base import BaseRepository


class TechnicalReportRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, TechnicalReportRow)

    async def get_by_job(self, job_id: str) -> TechnicalReportRow | None:
        return await self.get_by_id("job_id", job_id)
