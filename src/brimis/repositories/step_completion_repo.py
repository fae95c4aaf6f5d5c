"""Step completion repository with atomic (job, step) upsert."""

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from brimis.db.base import utcnow
from brimis.db.models.step_completion import StepCompletionRow
from brimis.repositories.base import BaseRepository
from brimis.services.id_generator import generate_id

_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class StepCompletionRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, StepCompletionRow)

    async def upsert(
        self,
        job_id: str,
        step: str,
        completed_by: str,
        notes: str | None = None,
        measurements: dict | None = None,
        checklist: dict | None = None,
    ) -> None:
        """Insert or overwrite the completion for (job_id, step) in one statement.

        Actor, time and notes are always overwritten; measurements and
        checklist keep their stored value when the new call omits them.
        """
        dialect = self.session.get_bind().dialect.name
        insert = _INSERTS[dialect]
        stmt = insert(StepCompletionRow).values(
            completion_id=generate_id("sc_"),
            job_id=job_id,
            step=step,
            completed_at=utcnow(),
            completed_by=completed_by,
            notes=notes,
            measurements=measurements,
            checklist=checklist,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[StepCompletionRow.job_id, StepCompletionRow.step],
            set_={
                "completed_at": stmt.excluded.completed_at,
                "completed_by": stmt.excluded.completed_by,
                "notes": stmt.excluded.notes,
                "measurements": func.coalesce(stmt.excluded.measurements, StepCompletionRow.measurements),
                "checklist": func.coalesce(stmt.excluded.checklist, StepCompletionRow.checklist),
            },
        )
        await self._execute(stmt)

    async def get_for_step(self, job_id: str, step: str) -> StepCompletionRow | None:
        stmt = (
            select(StepCompletionRow)
            .where(StepCompletionRow.job_id == job_id, StepCompletionRow.step == step)
            .execution_options(populate_existing=True)
        )
        result = await self._execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_job(self, job_id: str) -> list[StepCompletionRow]:
        stmt = (
            select(StepCompletionRow)
            .where(StepCompletionRow.job_id == job_id)
            .execution_options(populate_existing=True)
        )
        result = await self._execute(stmt)
        return list(result.scalars().all())
