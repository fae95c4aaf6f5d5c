"""Shared test fixtures."""

from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from brimis.db.engine import create_all_tables, create_db_engine
from brimis.errors.exceptions import NotFoundError
from brimis.models.enums import JobStatus, WorkflowStep
from brimis.models.job import Job
from brimis.models.workflow import StepCompletion
from brimis.services.workflow.engine import WorkflowEngine
from brimis.services.workflow.interfaces import WorkflowStores


@pytest.fixture
async def db_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_db_engine("sqlite+aiosqlite:///")
    await create_all_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine):
    """Create a test database session."""
    session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
def app(db_engine):
    """Create a test application instance with in-memory DB."""
    from brimis.main import create_app

    _app = create_app()
    _app.state.db_engine = db_engine
    _app.state.db_session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    return _app


@pytest.fixture
async def client(app):
    """Async HTTP test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ---------------------------------------------------------------------------
# In-memory stores for engine tests
# ---------------------------------------------------------------------------

class MemoryJobStore:
    def __init__(self) -> None:
        self.rows: dict[str, Job] = {}

    def add(self, job_id: str = "job_test0001", **fields) -> Job:
        job = Job(
            job_id=job_id,
            job_number=fields.pop("job_number", "BRIM-2026-001"),
            equipment_type=fields.pop("equipment_type", "Hydraulic pump"),
            serial_number=fields.pop("serial_number", "SN-1001"),
            **fields,
        )
        self.rows[job_id] = job
        return job

    def set(self, job_id: str, **fields) -> Job:
        self.rows[job_id] = self.rows[job_id].model_copy(update=fields)
        return self.rows[job_id]

    async def get(self, job_id: str) -> Job | None:
        return self.rows.get(job_id)

    async def update_step(self, job_id: str, expected_step: str, step: str, status: str) -> Job | None:
        job = self.rows.get(job_id)
        if job is None:
            raise NotFoundError("Job", job_id)
        if job.current_step != expected_step:
            return None
        return self.set(
            job_id,
            current_step=WorkflowStep(step),
            status=JobStatus(status),
            updated_at=datetime.now(timezone.utc),
        )

    async def mark_dispatched(self, job_id: str, expected_status: str) -> Job | None:
        job = self.rows.get(job_id)
        if job is None:
            raise NotFoundError("Job", job_id)
        if job.current_step != WorkflowStep.DISPATCH or job.status != expected_status:
            return None
        now = datetime.now(timezone.utc)
        return self.set(
            job_id, status=JobStatus.DISPATCHED, actual_completion_at=now, updated_at=now
        )


class MemoryCompletionStore:
    def __init__(self) -> None:
        self.rows: dict[tuple[str, str], StepCompletion] = {}
        self.upserts = 0

    async def upsert(self, job_id, step, completed_by, notes=None, measurements=None, checklist=None) -> None:
        self.upserts += 1
        existing = self.rows.get((job_id, step))
        self.rows[(job_id, step)] = StepCompletion(
            job_id=job_id,
            step=step,
            completed_at=datetime.now(timezone.utc),
            completed_by=completed_by,
            notes=notes,
            measurements=measurements if measurements is not None else (existing and existing.measurements),
            checklist=checklist if checklist is not None else (existing and existing.checklist),
        )

    async def get_for_step(self, job_id, step):
        return self.rows.get((job_id, step))

    async def list_by_job(self, job_id):
        return [c for (jid, _), c in self.rows.items() if jid == job_id]


class MemoryListStore:
    """Parts / photos / reports / inspections keyed by job."""

    def __init__(self) -> None:
        self.rows: dict[str, list] = {}

    def add(self, job_id: str, item) -> None:
        self.rows.setdefault(job_id, []).append(item)

    async def list_by_job(self, job_id):
        return list(self.rows.get(job_id, []))

    async def get_by_job(self, job_id):
        items = self.rows.get(job_id)
        return items[-1] if items else None

    async def latest_by_job(self, job_id):
        return await self.get_by_job(job_id)

    async def count_by_job_and_step(self, job_id, step):
        return sum(1 for p in self.rows.get(job_id, []) if p.step == step)


class MemoryUnitOfWork:
    def __init__(self) -> None:
        self.commits = 0
        self.rollbacks = 0

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1


@pytest.fixture
def stores() -> WorkflowStores:
    return WorkflowStores(
        jobs=MemoryJobStore(),
        completions=MemoryCompletionStore(),
        parts=MemoryListStore(),
        reports=MemoryListStore(),
        inspections=MemoryListStore(),
        photos=MemoryListStore(),
        unit_of_work=MemoryUnitOfWork(),
    )


@pytest.fixture
def engine(stores) -> WorkflowEngine:
    return WorkflowEngine(stores)
