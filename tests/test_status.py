"""Tests for step to status derivation."""

import pytest

from brimis.models.enums import JobStatus, WorkflowStep
from brimis.services.workflow.status import STEP_STATUS, status_for_step


@pytest.mark.parametrize(
    "step,status",
    [
        (WorkflowStep.RECEIVING, JobStatus.RECEIVED),
        (WorkflowStep.LOGGING, JobStatus.LOGGED),
        (WorkflowStep.STRIP_ASSESS, JobStatus.STRIPPED),
        (WorkflowStep.DOCUMENT_FAULTS, JobStatus.ASSESSED),
        (WorkflowStep.TECHNICAL_REPORT, JobStatus.ASSESSED),
        (WorkflowStep.AWAIT_PO, JobStatus.AWAITING_QUOTE_APPROVAL),
        (WorkflowStep.REPAIR, JobStatus.IN_REPAIR),
        (WorkflowStep.REASSEMBLE, JobStatus.ASSEMBLED),
        (WorkflowStep.FUNCTION_TEST, JobStatus.TESTED),
        (WorkflowStep.QC_INSPECTION, JobStatus.TESTED),
        (WorkflowStep.DISPATCH, JobStatus.READY_FOR_DISPATCH),
    ],
)
def test_status_for_step(step, status):
    assert status_for_step(step) is status


def test_every_step_has_a_status():
    assert set(STEP_STATUS) == set(WorkflowStep)


def test_dispatched_is_not_derived_from_a_step():
    derived = set(STEP_STATUS.values())
    assert JobStatus.DISPATCHED not in derived


def test_status_for_string_step():
    assert status_for_step("step_7_repair") is JobStatus.IN_REPAIR
