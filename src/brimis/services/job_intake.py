"""Job intake: register newly received equipment at step 1."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from brimis.db.base import utcnow
from brimis.db.models.job import JobRow
from brimis.models.enums import WorkflowStep
from brimis.models.job import JobCreate
from brimis.repositories.job_repo import JobRepository
from brimis.services.id_generator import generate_id, next_job_number
from brimis.services.workflow.status import status_for_step

logger = logging.getLogger(__name__)


async def create_job(session: AsyncSession, data: JobCreate, prefix: str) -> JobRow:
    """Create a job with the next sequential number for the current year.

    Two concurrent intakes can compute the same number; the unique
    constraint on job_number rejects the loser with a StorageError.
    """
    now = utcnow()
    repo = JobRepository(session)
    latest = await repo.latest_job_number(f"{prefix}-{now.year}-")
    row = await repo.create(
        job_id=generate_id("job_"),
        job_number=next_job_number(prefix, now.year, latest),
        current_step=WorkflowStep.RECEIVING,
        status=status_for_step(WorkflowStep.RECEIVING),
        received_at=now,
        **data.model_dump(exclude_none=True),
    )
    logger.info("job_received", extra={"job_id": row.job_id, "job_number": row.job_number})
    return row
