"""Derive the coarse job status label from a workflow step."""

from types import MappingProxyType

from brimis.models.enums import JobStatus, WorkflowStep

# Technical Report shares "assessed" with Document Faults, and QC Inspection
# shares "tested" with Function Test.
STEP_STATUS = MappingProxyType({
    WorkflowStep.RECEIVING: JobStatus.RECEIVED,
    WorkflowStep.LOGGING: JobStatus.LOGGED,
    WorkflowStep.STRIP_ASSESS: JobStatus.STRIPPED,
    WorkflowStep.DOCUMENT_FAULTS: JobStatus.ASSESSED,
    WorkflowStep.TECHNICAL_REPORT: JobStatus.ASSESSED,
    WorkflowStep.AWAIT_PO: JobStatus.AWAITING_QUOTE_APPROVAL,
    WorkflowStep.REPAIR: JobStatus.IN_REPAIR,
    WorkflowStep.REASSEMBLE: JobStatus.ASSEMBLED,
    WorkflowStep.FUNCTION_TEST: JobStatus.TESTED,
    WorkflowStep.QC_INSPECTION: JobStatus.TESTED,
    WorkflowStep.DISPATCH: JobStatus.READY_FOR_DISPATCH,
})

_unmapped = set(WorkflowStep) - set(STEP_STATUS)
if _unmapped:
    raise RuntimeError(f"No status mapping for steps: {sorted(_unmapped)}")


def status_for_step(step: WorkflowStep | str) -> JobStatus:
    return STEP_STATUS[WorkflowStep(step)]
