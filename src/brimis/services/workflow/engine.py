"""Gated transitions through the 11-step process.

1. Resolve the job's current step from the catalog
2. Run the step's exit gate against related data
3. Compare-and-swap the job onto the successor step with its derived status
4. Upsert the completion record for the step being left
5. Commit both writes as one unit of work

Dispatch has no successor. ``complete_dispatch`` records its completion and
closes the job instead.
"""

import logging

from brimis.errors.exceptions import ConcurrencyConflictError, NotFoundError, TerminalStateError
from brimis.models.enums import JobStatus, TransitionFailure, WorkflowStep
from brimis.models.job import Job
from brimis.models.workflow import (
    StepCompletion,
    StepProgress,
    StepSummary,
    TransitionResult,
    WorkflowProgress,
)
from brimis.services.workflow.interfaces import JobLike, WorkflowStores
from brimis.services.workflow.status import status_for_step
from brimis.services.workflow.step_catalog import (
    TOTAL_STEPS,
    StepDefinition,
    get_step,
    ordered_steps,
)
from brimis.services.workflow.validation import StepSubmission, validate_step, validate_transition

logger = logging.getLogger(__name__)

REPAIR_GATE_NUMBER = get_step(WorkflowStep.AWAIT_PO).number


def can_access_step(current_step: WorkflowStep | str, target_step: WorkflowStep | str) -> bool:
    """Whether navigation from ``current_step`` to ``target_step`` is allowed.

    Forward at most one step; backward only onto steps flagged ``can_go_back``.
    """
    current = get_step(current_step)
    target = get_step(target_step)
    if target.number > current.number + 1:
        return False
    if target.number < current.number and not target.can_go_back:
        return False
    return True


def _po_fields_set(job: JobLike) -> bool:
    return bool(job.po_received_at and job.po_number)


def _is_dispatched(job: JobLike) -> bool:
    return job.status == JobStatus.DISPATCHED


def _blocked(job: JobLike, failure: TransitionFailure, message: str, errors=None, warnings=None) -> TransitionResult:
    return TransitionResult(
        success=False,
        failure=failure,
        message=message,
        errors=errors or [],
        warnings=warnings or [],
        job=Job.model_validate(job),
    )


def _summary(definition: StepDefinition, completed: bool) -> StepSummary:
    return StepSummary(
        step=definition.step,
        number=definition.number,
        title=definition.title,
        description=definition.description,
        requires_photos=definition.requires_photos,
        requires_checklist=definition.requires_checklist,
        requires_measurements=definition.requires_measurements,
        requires_hazmat_clearance=definition.requires_hazmat_clearance,
        requires_po_approval=definition.requires_po_approval,
        can_go_back=definition.can_go_back,
        next_step=definition.next_step,
        completed=completed,
    )


class WorkflowEngine:
    """Request-scoped engine over a set of storage collaborators."""

    def __init__(self, stores: WorkflowStores):
        self.stores = stores

    async def _require_job(self, job_id: str) -> JobLike:
        job = await self.stores.jobs.get(job_id)
        if job is None:
            raise NotFoundError("Job", job_id)
        return job

    async def _swap_step(self, job: JobLike, target: WorkflowStep) -> JobLike:
        job_id, expected = job.job_id, str(job.current_step)
        updated = await self.stores.jobs.update_step(job_id, expected, target, status_for_step(target))
        if updated is None:
            logger.warning(
                "job_transition_conflict",
                extra={"job_id": job_id, "expected_step": expected},
            )
            raise ConcurrencyConflictError(job_id, expected)
        return updated

    async def advance(
        self,
        job_id: str,
        actor_id: str,
        notes: str | None = None,
        measurements: dict[str, float] | None = None,
        checklist: dict[str, bool] | None = None,
    ) -> TransitionResult:
        """Complete the current step and move the job to its successor.

        ``measurements`` and ``checklist`` are stored on the completion record
        and count toward the current step's gate.
        """
        job = await self._require_job(job_id)
        current = get_step(job.current_step)

        if current.is_terminal:
            return _blocked(job, TransitionFailure.TERMINAL_STATE, "Job is already at the final step")

        submitted = StepSubmission(measurements=measurements, checklist=checklist)
        validation = await validate_transition(job, current.next_step, self.stores, submitted)
        if not validation.can_proceed:
            logger.info(
                "job_advance_blocked",
                extra={"job_id": job_id, "step": str(current.step), "errors": validation.errors},
            )
            return _blocked(
                job,
                TransitionFailure.VALIDATION_FAILED,
                ". ".join(validation.errors),
                errors=validation.errors,
                warnings=validation.warnings,
            )

        next_step = get_step(current.next_step)
        try:
            updated = await self._swap_step(job, next_step.step)
            await self.stores.completions.upsert(
                job_id,
                current.step,
                actor_id,
                notes=notes,
                measurements=measurements,
                checklist=checklist,
            )
            await self.stores.unit_of_work.commit()
        except Exception:
            await self.stores.unit_of_work.rollback()
            raise

        logger.info(
            "job_advanced",
            extra={
                "job_id": job_id,
                "from_step": str(current.step),
                "to_step": str(next_step.step),
                "actor_id": actor_id,
            },
        )
        return TransitionResult(
            success=True,
            message=f"Job advanced to {next_step.title}",
            warnings=validation.warnings,
            job=Job.model_validate(updated),
            completed_step=current.step,
            next_step=next_step.step,
        )

    async def return_to_step(self, job_id: str, target_step: WorkflowStep) -> TransitionResult:
        """Send the job back to an earlier step that allows revisiting.

        Completion records are left in place; the status is re-derived.
        """
        job = await self._require_job(job_id)
        current = get_step(job.current_step)
        target = get_step(target_step)

        if _is_dispatched(job):
            return _blocked(job, TransitionFailure.TERMINAL_STATE, "Job has already been dispatched")
        if target.number >= current.number or not can_access_step(current.step, target.step):
            message = f"Cannot return from {current.title} to {target.title}"
            return _blocked(job, TransitionFailure.STEP_NOT_ACCESSIBLE, message, errors=[message])

        try:
            updated = await self._swap_step(job, target.step)
            await self.stores.unit_of_work.commit()
        except Exception:
            await self.stores.unit_of_work.rollback()
            raise

        logger.info(
            "job_returned",
            extra={"job_id": job_id, "from_step": str(current.step), "to_step": str(target.step)},
        )
        return TransitionResult(
            success=True,
            message=f"Job returned to {target.title}",
            job=Job.model_validate(updated),
            next_step=target.step,
        )

    async def save_step_data(
        self,
        job_id: str,
        actor_id: str,
        notes: str | None = None,
        measurements: dict[str, float] | None = None,
        checklist: dict[str, bool] | None = None,
    ) -> StepCompletion:
        """Record notes, measurements or checklist results for the current step
        without advancing. Resubmitting overwrites the earlier submission."""
        job = await self._require_job(job_id)
        if _is_dispatched(job):
            raise TerminalStateError("Job has already been dispatched")
        step = WorkflowStep(job.current_step)
        try:
            await self.stores.completions.upsert(
                job_id, step, actor_id, notes=notes, measurements=measurements, checklist=checklist
            )
            await self.stores.unit_of_work.commit()
        except Exception:
            await self.stores.unit_of_work.rollback()
            raise
        completion = await self.stores.completions.get_for_step(job_id, step)
        return StepCompletion.model_validate(completion)

    async def complete_dispatch(
        self,
        job_id: str,
        actor_id: str,
        notes: str | None = None,
        checklist: dict[str, bool] | None = None,
    ) -> TransitionResult:
        """Record the Dispatch completion and close the job as dispatched."""
        job = await self._require_job(job_id)
        current = get_step(job.current_step)

        if _is_dispatched(job):
            return _blocked(job, TransitionFailure.TERMINAL_STATE, "Job has already been dispatched")
        if not current.is_terminal:
            message = f"Job is at {current.title} and cannot be dispatched yet"
            return _blocked(job, TransitionFailure.STEP_NOT_ACCESSIBLE, message, errors=[message])

        validation = await validate_step(job, self.stores, StepSubmission(checklist=checklist))
        if not validation.can_proceed:
            return _blocked(
                job,
                TransitionFailure.VALIDATION_FAILED,
                ". ".join(validation.errors),
                errors=validation.errors,
                warnings=validation.warnings,
            )

        expected = str(job.status)
        try:
            updated = await self.stores.jobs.mark_dispatched(job_id, expected)
            if updated is None:
                logger.warning(
                    "job_transition_conflict",
                    extra={"job_id": job_id, "expected_status": expected},
                )
                raise ConcurrencyConflictError(job_id, str(current.step))
            await self.stores.completions.upsert(
                job_id, current.step, actor_id, notes=notes, checklist=checklist
            )
            await self.stores.unit_of_work.commit()
        except Exception:
            await self.stores.unit_of_work.rollback()
            raise

        logger.info("job_dispatched", extra={"job_id": job_id, "actor_id": actor_id})
        return TransitionResult(
            success=True,
            message="Job dispatched",
            warnings=validation.warnings,
            job=Job.model_validate(updated),
            completed_step=current.step,
        )

    async def completed_steps_summary(self, job_id: str) -> list[StepSummary]:
        """The full catalog in step order, flagged with per-job completion."""
        completions = await self.stores.completions.list_by_job(job_id)
        done = {WorkflowStep(c.step) for c in completions}
        return [_summary(d, d.step in done) for d in ordered_steps()]

    async def workflow_progress(self, job_id: str) -> WorkflowProgress:
        job = await self._require_job(job_id)
        completions = {
            WorkflowStep(c.step): c for c in await self.stores.completions.list_by_job(job_id)
        }
        current = get_step(job.current_step)

        steps = []
        for d in ordered_steps():
            completion = completions.get(d.step)
            steps.append(
                StepProgress(
                    step=d.step,
                    number=d.number,
                    title=d.title,
                    is_completed=completion is not None,
                    is_current=d.step == current.step,
                    is_locked=d.number > current.number and completion is None,
                    completion=StepCompletion.model_validate(completion) if completion else None,
                )
            )

        return WorkflowProgress(
            job_id=job_id,
            current_step=current.step,
            status=job.status,
            steps=steps,
            completed_count=len(completions),
            total_steps=TOTAL_STEPS,
            progress_pct=round(len(completions) / TOTAL_STEPS * 100),
        )

    async def is_po_received(self, job_id: str) -> bool:
        job = await self.stores.jobs.get(job_id)
        return job is not None and _po_fields_set(job)

    async def is_repair_unlocked(self, job_id: str) -> bool:
        """Repair opens once the job is past Await PO, or at it with a PO on file."""
        job = await self.stores.jobs.get(job_id)
        if job is None:
            return False
        number = get_step(job.current_step).number
        if number > REPAIR_GATE_NUMBER:
            return True
        if number == REPAIR_GATE_NUMBER:
            return _po_fields_set(job)
        return False
