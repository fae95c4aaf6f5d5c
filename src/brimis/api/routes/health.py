"""Health check endpoints."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

router = APIRouter()


@router.get("/health")
async def health_check():
    """Return service health status."""
    return {"status": "healthy", "service": "brimis-workflow", "version": "1.0.0"}


@router.get("/health/ready")
async def readiness(request: Request):
    """Readiness check: database connectivity."""
    try:
        session_factory = request.app.state.db_session_factory
        async with session_factory() as session:
            await session.execute(text("SELECT 1"))
        checks = {"database": "ok"}
        overall_ok = True
    except SQLAlchemyError as exc:
        checks = {"database": f"error: {exc.__class__.__name__}"}
        overall_ok = False

    return JSONResponse(
        status_code=200 if overall_ok else 503,
        content={"status": "ready" if overall_ok else "not_ready", "checks": checks},
    )
