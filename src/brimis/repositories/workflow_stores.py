"""Bind the workflow engine's storage contracts to an AsyncSession."""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from brimis.errors.exceptions import StorageError
from brimis.repositories.job_repo import JobRepository
from brimis.repositories.part_repo import JobPartRepository
from brimis.repositories.photo_repo import JobPhotoRepository
from brimis.repositories.qc_inspection_repo import QCInspectionRepository
from brimis.repositories.report_repo import TechnicalReportRepository
from brimis.repositories.step_completion_repo import StepCompletionRepository
from brimis.services.workflow.engine import WorkflowEngine
from brimis.services.workflow.interfaces import WorkflowStores


class SessionUnitOfWork:
    """Commit/rollback on the request's session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def commit(self) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as exc:
            raise StorageError(f"commit failed: {exc.__class__.__name__}") from exc

    async def rollback(self) -> None:
        await self.session.rollback()


def build_stores(session: AsyncSession) -> WorkflowStores:
    return WorkflowStores(
        jobs=JobRepository(session),
        completions=StepCompletionRepository(session),
        parts=JobPartRepository(session),
        reports=TechnicalReportRepository(session),
        inspections=QCInspectionRepository(session),
        photos=JobPhotoRepository(session),
        unit_of_work=SessionUnitOfWork(session),
    )


def workflow_engine(session: AsyncSession) -> WorkflowEngine:
    return WorkflowEngine(build_stores(session))
