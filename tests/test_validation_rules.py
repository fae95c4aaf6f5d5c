"""Tests for per-step exit gates, run against in-memory stores."""

from types import SimpleNamespace

import pytest

from brimis.models.enums import QCStatus, ReportStatus, WorkflowStep
from brimis.services.workflow.validation import (
    STEP_GATES,
    StepSubmission,
    validate_step,
    validate_transition,
)


def _at(stores, step, **fields):
    return stores.jobs.add(current_step=step, **fields)


def test_every_step_has_a_gate():
    assert set(STEP_GATES) == set(WorkflowStep)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "step", [WorkflowStep.RECEIVING, WorkflowStep.REASSEMBLE, WorkflowStep.DISPATCH]
)
async def test_ungated_steps_always_pass(stores, step):
    job = _at(stores, step)
    result = await validate_step(job, stores)
    assert result.can_proceed
    assert result.errors == []


# --- Logging & Hazmat ---


@pytest.mark.asyncio
async def test_hazmat_uncleaned_blocks(stores):
    job = _at(stores, WorkflowStep.LOGGING, has_hazmat=True, hazmat_cleaned=False)
    result = await validate_step(job, stores)
    assert not result.can_proceed
    assert result.errors == ["Hazmat cleaning procedure must be completed before proceeding"]


@pytest.mark.asyncio
async def test_hazmat_cleaned_passes(stores):
    job = _at(stores, WorkflowStep.LOGGING, has_hazmat=True, hazmat_cleaned=True)
    assert (await validate_step(job, stores)).can_proceed


@pytest.mark.asyncio
async def test_no_hazmat_passes(stores):
    job = _at(stores, WorkflowStep.LOGGING)
    assert (await validate_step(job, stores)).can_proceed


# --- Strip & Assess ---


@pytest.mark.asyncio
async def test_strip_without_photos_blocks(stores):
    job = _at(stores, WorkflowStep.STRIP_ASSESS)
    stores.photos.add(job.job_id, SimpleNamespace(step=WorkflowStep.RECEIVING))
    result = await validate_step(job, stores)
    assert result.errors == ["At least one photo must be uploaded during Strip & Assess"]


@pytest.mark.asyncio
async def test_strip_with_photo_passes(stores):
    job = _at(stores, WorkflowStep.STRIP_ASSESS)
    stores.photos.add(job.job_id, SimpleNamespace(step=WorkflowStep.STRIP_ASSESS))
    assert (await validate_step(job, stores)).can_proceed


# --- Document Faults ---


@pytest.mark.asyncio
async def test_no_parts_blocks(stores):
    job = _at(stores, WorkflowStep.DOCUMENT_FAULTS)
    result = await validate_step(job, stores)
    assert result.errors == ["At least one part must be documented"]


@pytest.mark.asyncio
async def test_parts_documented_passes(stores):
    job = _at(stores, WorkflowStep.DOCUMENT_FAULTS)
    stores.parts.add(job.job_id, SimpleNamespace(part_name="Seal kit"))
    assert (await validate_step(job, stores)).can_proceed


# --- Technical Report ---


@pytest.mark.asyncio
async def test_missing_report_blocks(stores):
    job = _at(stores, WorkflowStep.TECHNICAL_REPORT)
    result = await validate_step(job, stores)
    assert result.errors == ["Technical report must be finalized before sending to client"]


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [ReportStatus.DRAFT, ReportStatus.SENT])
async def test_report_not_final_blocks(stores, status):
    job = _at(stores, WorkflowStep.TECHNICAL_REPORT)
    stores.reports.add(job.job_id, SimpleNamespace(status=status))
    assert not (await validate_step(job, stores)).can_proceed


@pytest.mark.asyncio
async def test_final_report_passes(stores):
    job = _at(stores, WorkflowStep.TECHNICAL_REPORT)
    stores.reports.add(job.job_id, SimpleNamespace(status=ReportStatus.FINAL))
    assert (await validate_step(job, stores)).can_proceed


# --- Await PO ---


@pytest.mark.asyncio
async def test_missing_po_is_hard_stop(stores):
    job = _at(stores, WorkflowStep.AWAIT_PO)
    result = await validate_step(job, stores)
    assert result.errors == [
        "Purchase Order must be received before starting repairs",
        "This is a hard stop - equipment cannot proceed until client approves",
    ]


@pytest.mark.asyncio
async def test_po_number_without_receipt_time_blocks(stores):
    job = _at(stores, WorkflowStep.AWAIT_PO, po_number="PO-7781")
    assert not (await validate_step(job, stores)).can_proceed


@pytest.mark.asyncio
async def test_po_received_passes(stores):
    job = _at(
        stores, WorkflowStep.AWAIT_PO, po_number="PO-7781", po_received_at="2026-03-02T08:00:00Z"
    )
    assert (await validate_step(job, stores)).can_proceed


# --- Repair / Function Test ---


@pytest.mark.asyncio
async def test_repair_without_measurements_blocks(stores):
    job = _at(stores, WorkflowStep.REPAIR)
    await stores.completions.upsert(job.job_id, WorkflowStep.REPAIR, "usr_tech", notes="torqued")
    result = await validate_step(job, stores)
    assert result.errors == ["Repair measurements must be recorded"]


@pytest.mark.asyncio
async def test_repair_with_measurements_passes(stores):
    job = _at(stores, WorkflowStep.REPAIR)
    await stores.completions.upsert(
        job.job_id, WorkflowStep.REPAIR, "usr_tech", measurements={"shaft_runout_mm": 0.02}
    )
    assert (await validate_step(job, stores)).can_proceed


@pytest.mark.asyncio
async def test_function_test_empty_checklist_blocks(stores):
    job = _at(stores, WorkflowStep.FUNCTION_TEST)
    await stores.completions.upsert(job.job_id, WorkflowStep.FUNCTION_TEST, "usr_tech", checklist={})
    result = await validate_step(job, stores)
    assert result.errors == ["Function test checklist must be completed"]


@pytest.mark.asyncio
async def test_function_test_checklist_passes(stores):
    job = _at(stores, WorkflowStep.FUNCTION_TEST)
    await stores.completions.upsert(
        job.job_id, WorkflowStep.FUNCTION_TEST, "usr_tech", checklist={"pressure_hold": True}
    )
    assert (await validate_step(job, stores)).can_proceed


# --- QC Inspection ---


@pytest.mark.asyncio
async def test_no_inspection_blocks(stores):
    job = _at(stores, WorkflowStep.QC_INSPECTION)
    result = await validate_step(job, stores)
    assert result.errors == ["QC Inspection must be completed"]


@pytest.mark.asyncio
async def test_failed_inspection_blocks(stores):
    job = _at(stores, WorkflowStep.QC_INSPECTION)
    stores.inspections.add(job.job_id, SimpleNamespace(overall_status=QCStatus.FAILED))
    result = await validate_step(job, stores)
    assert result.errors == ["Equipment failed QC inspection and cannot be dispatched"]


@pytest.mark.asyncio
async def test_conditional_inspection_passes_with_warning(stores):
    job = _at(stores, WorkflowStep.QC_INSPECTION)
    stores.inspections.add(job.job_id, SimpleNamespace(overall_status=QCStatus.CONDITIONAL))
    result = await validate_step(job, stores)
    assert result.can_proceed
    assert result.warnings == [
        "Equipment has conditional QC approval - verify conditions are met"
    ]


@pytest.mark.asyncio
async def test_latest_inspection_wins(stores):
    """A passing re-inspection after a failure opens the gate."""
    job = _at(stores, WorkflowStep.QC_INSPECTION)
    stores.inspections.add(job.job_id, SimpleNamespace(overall_status=QCStatus.FAILED))
    stores.inspections.add(job.job_id, SimpleNamespace(overall_status=QCStatus.PASSED))
    result = await validate_step(job, stores)
    assert result.can_proceed
    assert result.warnings == []


# --- validate_transition ---


@pytest.mark.asyncio
async def test_transition_to_non_successor_rejected(stores):
    job = _at(stores, WorkflowStep.LOGGING)
    result = await validate_transition(job, WorkflowStep.DOCUMENT_FAULTS, stores)
    assert not result.can_proceed
    assert result.errors == ["Cannot skip from Logging & Hazmat Check to Document Faults"]


@pytest.mark.asyncio
async def test_transition_to_successor_runs_gate(stores):
    job = _at(stores, WorkflowStep.LOGGING, has_hazmat=True)
    result = await validate_transition(job, WorkflowStep.STRIP_ASSESS, stores)
    assert result.errors == ["Hazmat cleaning procedure must be completed before proceeding"]


@pytest.mark.asyncio
async def test_submitted_measurements_open_repair_gate(stores):
    job = _at(stores, WorkflowStep.REPAIR)
    result = await validate_step(job, stores, StepSubmission(measurements={"bore_mm": 40.0}))
    assert result.can_proceed


@pytest.mark.asyncio
async def test_submitted_checklist_opens_function_test_gate(stores):
    job = _at(stores, WorkflowStep.FUNCTION_TEST)
    result = await validate_step(job, stores, StepSubmission(checklist={"pressure_hold": True}))
    assert result.can_proceed


@pytest.mark.asyncio
async def test_submitted_data_does_not_open_other_gates(stores):
    job = _at(stores, WorkflowStep.DOCUMENT_FAULTS)
    result = await validate_step(job, stores, StepSubmission(measurements={"bore_mm": 40.0}))
    assert result.errors == ["At least one part must be documented"]
