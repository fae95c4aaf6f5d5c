"""Job part repository."""

from sqlalchemy.ext.asyncio import AsyncSession

from brimis.db.models.part import JobPartRow
from brimis.repositories.base import BaseRepository


class JobPartRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, JobPartRow)

    async def list_by_job(self, job_id: str) -> list[JobPartRow]:
        return await self.list_by_field("job_id", job_id)
