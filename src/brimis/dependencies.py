"""FastAPI dependency injection providers."""

from collections.abc import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from brimis.logging_config import bind_job_context
from brimis.repositories.workflow_stores import workflow_engine
from brimis.services.workflow.engine import WorkflowEngine


async def get_db(request: Request) -> AsyncGenerator:
    """Yield a database session from the app's session factory."""
    session_factory = request.app.state.db_session_factory
    async with session_factory() as session:
        yield session


async def get_workflow_engine(db: AsyncSession = Depends(get_db)) -> WorkflowEngine:
    """Workflow engine bound to the request's session."""
    return workflow_engine(db)


async def job_log_context(request: Request) -> None:
    """Bind the path's job_id into the log context, when the route has one."""
    job_id = request.path_params.get("job_id")
    if job_id:
        bind_job_context(job_id)
