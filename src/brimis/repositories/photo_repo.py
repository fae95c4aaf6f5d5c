"""Job photo metadata repository."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from brimis.db.models.photo import JobPhotoRow
from brimis.repositories.base import BaseRepository


class JobPhotoRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, JobPhotoRow)

    async def count_by_job_and_step(self, job_id: str, step: str) -> int:
        stmt = select(func.count()).select_from(JobPhotoRow).where(
            JobPhotoRow.job_id == job_id,
            JobPhotoRow.step == step,
        )
        result = await self._execute(stmt)
        return result.scalar_one()

    async def list_by_job(self, job_id: str) -> list[JobPhotoRow]:
        return await self.list_by_field("job_id", job_id)
