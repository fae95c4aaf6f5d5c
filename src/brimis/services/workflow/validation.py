"""Per-step exit gates.

Every workflow step has exactly one gate in ``STEP_GATES``; steps without a
business rule use ``_always_open``. Gates only read. Missing related data
(no report, no parts, no inspection) is an unmet condition, not an error;
storage exceptions propagate unchanged.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from brimis.models.enums import QCStatus, ReportStatus, WorkflowStep
from brimis.models.workflow import StepValidationResult
from brimis.services.workflow.interfaces import JobLike, WorkflowStores
from brimis.services.workflow.step_catalog import get_step


@dataclass(frozen=True)
class StepSubmission:
    """Step data sent with an advance that is not yet stored."""

    measurements: dict[str, float] | None = None
    checklist: dict[str, bool] | None = None


GateCheck = Callable[[JobLike, WorkflowStores, StepSubmission], Awaitable[StepValidationResult]]


async def _always_open(job: JobLike, stores: WorkflowStores, submitted: StepSubmission) -> StepValidationResult:
    return StepValidationResult.from_messages([])


async def _hazmat_cleared(job: JobLike, stores: WorkflowStores, submitted: StepSubmission) -> StepValidationResult:
    errors = []
    if job.has_hazmat and not job.hazmat_cleaned:
        errors.append("Hazmat cleaning procedure must be completed before proceeding")
    return StepValidationResult.from_messages(errors)


async def _strip_photos_taken(job: JobLike, stores: WorkflowStores, submitted: StepSubmission) -> StepValidationResult:
    errors = []
    count = await stores.photos.count_by_job_and_step(job.job_id, WorkflowStep.STRIP_ASSESS)
    if not count:
        errors.append("At least one photo must be uploaded during Strip & Assess")
    return StepValidationResult.from_messages(errors)


async def _parts_documented(job: JobLike, stores: WorkflowStores, submitted: StepSubmission) -> StepValidationResult:
    errors = []
    parts = await stores.parts.list_by_job(job.job_id)
    if not parts:
        errors.append("At least one part must be documented")
    return StepValidationResult.from_messages(errors)


async def _report_finalized(job: JobLike, stores: WorkflowStores, submitted: StepSubmission) -> StepValidationResult:
    errors = []
    report = await stores.reports.get_by_job(job.job_id)
    if report is None or report.status != ReportStatus.FINAL:
        errors.append("Technical report must be finalized before sending to client")
    return StepValidationResult.from_messages(errors)


async def _po_received(job: JobLike, stores: WorkflowStores, submitted: StepSubmission) -> StepValidationResult:
    errors = []
    if not (job.po_received_at and job.po_number):
        errors.append("Purchase Order must be received before starting repairs")
        errors.append("This is a hard stop - equipment cannot proceed until client approves")
    return StepValidationResult.from_messages(errors)


async def _repair_measured(job: JobLike, stores: WorkflowStores, submitted: StepSubmission) -> StepValidationResult:
    errors = []
    if not submitted.measurements:
        completion = await stores.completions.get_for_step(job.job_id, WorkflowStep.REPAIR)
        if completion is None or not completion.measurements:
            errors.append("Repair measurements must be recorded")
    return StepValidationResult.from_messages(errors)


async def _function_test_checked(job: JobLike, stores: WorkflowStores, submitted: StepSubmission) -> StepValidationResult:
    errors = []
    if not submitted.checklist:
        completion = await stores.completions.get_for_step(job.job_id, WorkflowStep.FUNCTION_TEST)
        if completion is None or not completion.checklist:
            errors.append("Function test checklist must be completed")
    return StepValidationResult.from_messages(errors)


async def _qc_passed(job: JobLike, stores: WorkflowStores, submitted: StepSubmission) -> StepValidationResult:
    errors: list[str] = []
    warnings: list[str] = []
    inspection = await stores.inspections.latest_by_job(job.job_id)
    if inspection is None:
        errors.append("QC Inspection must be completed")
    elif inspection.overall_status == QCStatus.FAILED:
        errors.append("Equipment failed QC inspection and cannot be dispatched")
    elif inspection.overall_status == QCStatus.CONDITIONAL:
        warnings.append("Equipment has conditional QC approval - verify conditions are met")
    return StepValidationResult.from_messages(errors, warnings)


STEP_GATES: dict[WorkflowStep, GateCheck] = {
    WorkflowStep.RECEIVING: _always_open,
    WorkflowStep.LOGGING: _hazmat_cleared,
    WorkflowStep.STRIP_ASSESS: _strip_photos_taken,
    WorkflowStep.DOCUMENT_FAULTS: _parts_documented,
    WorkflowStep.TECHNICAL_REPORT: _report_finalized,
    WorkflowStep.AWAIT_PO: _po_received,
    WorkflowStep.REPAIR: _repair_measured,
    WorkflowStep.REASSEMBLE: _always_open,
    WorkflowStep.FUNCTION_TEST: _function_test_checked,
    WorkflowStep.QC_INSPECTION: _qc_passed,
    WorkflowStep.DISPATCH: _always_open,
}

_ungated = set(WorkflowStep) - set(STEP_GATES)
if _ungated:
    raise RuntimeError(f"No exit gate registered for steps: {sorted(_ungated)}")


async def validate_step(
    job: JobLike, stores: WorkflowStores, submitted: StepSubmission | None = None
) -> StepValidationResult:
    """Check the exit criteria of the job's current step.

    Measurements or a checklist in ``submitted`` satisfy the step's own data
    requirement as if they were already recorded.
    """
    gate = STEP_GATES[WorkflowStep(job.current_step)]
    return await gate(job, stores, submitted or StepSubmission())


async def validate_transition(
    job: JobLike,
    target: WorkflowStep,
    stores: WorkflowStores,
    submitted: StepSubmission | None = None,
) -> StepValidationResult:
    """Check that ``target`` is the current step's successor and its gate is open."""
    current = get_step(job.current_step)
    if current.next_step != target:
        return StepValidationResult.from_messages(
            [f"Cannot skip from {current.title} to {get_step(target).title}"]
        )
    return await validate_step(job, stores, submitted)
