"""Workflow engine endpoints: advance, step data, back-navigation and progress."""

from fastapi import APIRouter, Depends, Query

from brimis.dependencies import get_workflow_engine, job_log_context
from brimis.errors.exceptions import RequestValidationError
from brimis.models.enums import WorkflowStep
from brimis.models.workflow import (
    AdvanceRequest,
    DispatchRequest,
    ReturnToStepRequest,
    StepDataRequest,
)
from brimis.services.workflow.engine import WorkflowEngine, can_access_step
from brimis.services.workflow.status import status_for_step
from brimis.services.workflow.step_catalog import ordered_steps, progress_percentage

router = APIRouter(tags=["Workflow"], dependencies=[Depends(job_log_context)])


@router.post("/jobs/{job_id}/workflow/advance")
async def advance_job(
    job_id: str,
    body: AdvanceRequest,
    engine: WorkflowEngine = Depends(get_workflow_engine),
) -> dict:
    result = await engine.advance(
        job_id,
        body.actor_id,
        notes=body.notes,
        measurements=body.measurements,
        checklist=body.checklist,
    )
    result.raise_for_failure()
    return result.model_dump(mode="json", exclude_none=True)


@router.post("/jobs/{job_id}/workflow/dispatch")
async def dispatch_job(
    job_id: str,
    body: DispatchRequest,
    engine: WorkflowEngine = Depends(get_workflow_engine),
) -> dict:
    """Complete the Dispatch step; the job leaves the workshop."""
    result = await engine.complete_dispatch(
        job_id, body.actor_id, notes=body.notes, checklist=body.checklist
    )
    result.raise_for_failure()
    return result.model_dump(mode="json", exclude_none=True)


@router.put("/jobs/{job_id}/workflow/step-data")
async def save_step_data(
    job_id: str,
    body: StepDataRequest,
    engine: WorkflowEngine = Depends(get_workflow_engine),
) -> dict:
    completion = await engine.save_step_data(
        job_id,
        body.actor_id,
        notes=body.notes,
        measurements=body.measurements,
        checklist=body.checklist,
    )
    return completion.model_dump(mode="json", exclude_none=True)


@router.post("/jobs/{job_id}/workflow/return")
async def return_to_step(
    job_id: str,
    body: ReturnToStepRequest,
    engine: WorkflowEngine = Depends(get_workflow_engine),
) -> dict:
    result = await engine.return_to_step(job_id, body.target_step)
    result.raise_for_failure()
    return result.model_dump(mode="json", exclude_none=True)


@router.get("/jobs/{job_id}/workflow/steps")
async def completed_steps(
    job_id: str,
    engine: WorkflowEngine = Depends(get_workflow_engine),
) -> list[dict]:
    summary = await engine.completed_steps_summary(job_id)
    return [s.model_dump(mode="json") for s in summary]


@router.get("/jobs/{job_id}/workflow/progress")
async def workflow_progress(
    job_id: str,
    engine: WorkflowEngine = Depends(get_workflow_engine),
) -> dict:
    progress = await engine.workflow_progress(job_id)
    return progress.model_dump(mode="json")


@router.get("/jobs/{job_id}/workflow/repair-unlocked")
async def repair_unlocked(
    job_id: str,
    engine: WorkflowEngine = Depends(get_workflow_engine),
) -> dict:
    return {
        "job_id": job_id,
        "po_received": await engine.is_po_received(job_id),
        "repair_unlocked": await engine.is_repair_unlocked(job_id),
    }


@router.get("/workflow/steps")
async def list_steps() -> list[dict]:
    return [
        {
            "step": d.step,
            "number": d.number,
            "title": d.title,
            "description": d.description,
            "can_go_back": d.can_go_back,
            "next_step": d.next_step,
            "status": status_for_step(d.step),
            "progress_pct": progress_percentage(d.step),
        }
        for d in ordered_steps()
    ]


@router.get("/workflow/access")
async def check_step_access(
    current: str = Query(...),
    target: str = Query(...),
) -> dict:
    try:
        current_step, target_step = WorkflowStep(current), WorkflowStep(target)
    except ValueError as exc:
        raise RequestValidationError(str(exc)) from exc
    return {
        "current": current_step,
        "target": target_step,
        "allowed": can_access_step(current_step, target_step),
    }
