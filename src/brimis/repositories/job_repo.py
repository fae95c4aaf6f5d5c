"""Job repository."""

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from brimis.db.base import utcnow
from brimis.db.models.job import JobRow
from brimis.errors.exceptions import NotFoundError
from brimis.models.enums import JobStatus, WorkflowStep
from brimis.repositories.base import BaseRepository


class JobRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, JobRow)

    async def get(self, job_id: str) -> JobRow | None:
        stmt = (
            select(JobRow)
            .where(JobRow.job_id == job_id)
            .execution_options(populate_existing=True)
        )
        result = await self._execute(stmt)
        return result.scalar_one_or_none()

    async def update_step(
        self, job_id: str, expected_step: str, step: str, status: str
    ) -> JobRow | None:
        """Compare-and-swap the job's workflow position.

        Returns the refreshed row, or None if the job is no longer at
        ``expected_step``. Raises NotFoundError if the job does not exist.
        """
        stmt = (
            update(JobRow)
            .where(JobRow.job_id == job_id, JobRow.current_step == expected_step)
            .values(current_step=step, status=status, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await self._execute(stmt)
        row = await self.get(job_id)
        if row is None:
            raise NotFoundError("Job", job_id)
        if result.rowcount == 0:
            return None
        return row

    async def mark_dispatched(self, job_id: str, expected_status: str) -> JobRow | None:
        """Set status ``dispatched`` and the completion time on a job at Dispatch.

        Guarded on ``expected_status`` like ``update_step``.
        """
        now = utcnow()
        stmt = (
            update(JobRow)
            .where(
                JobRow.job_id == job_id,
                JobRow.current_step == WorkflowStep.DISPATCH,
                JobRow.status == expected_status,
            )
            .values(status=JobStatus.DISPATCHED, actual_completion_at=now, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self._execute(stmt)
        row = await self.get(job_id)
        if row is None:
            raise NotFoundError("Job", job_id)
        if result.rowcount == 0:
            return None
        return row

    async def latest_job_number(self, prefix: str) -> str | None:
        """Highest job number starting with ``prefix`` (e.g. ``BRIM-2026-``)."""
        stmt = (
            select(JobRow.job_number)
            .where(JobRow.job_number.like(f"{prefix}%"))
            .order_by(func.length(JobRow.job_number).desc(), JobRow.job_number.desc())
            .limit(1)
        )
        result = await self._execute(stmt)
        return result.scalar_one_or_none()
