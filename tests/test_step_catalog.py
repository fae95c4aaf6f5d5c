"""Tests for the step catalog and step navigation rules."""

import pytest

from brimis.models.enums import WorkflowStep
from brimis.services.workflow.engine import can_access_step
from brimis.services.workflow.step_catalog import (
    STEP_CATALOG,
    TOTAL_STEPS,
    get_step,
    ordered_steps,
    progress_percentage,
)


def test_catalog_covers_every_step():
    assert set(STEP_CATALOG) == set(WorkflowStep)
    assert TOTAL_STEPS == 11


def test_numbers_are_contiguous_and_ordered():
    numbers = [d.number for d in ordered_steps()]
    assert numbers == list(range(1, 12))


def test_successor_chain_ends_at_dispatch():
    """Each step's next_step is the step numbered one higher; dispatch has none."""
    steps = ordered_steps()
    for current, following in zip(steps, steps[1:]):
        assert current.next_step == following.step
    assert steps[-1].step == WorkflowStep.DISPATCH
    assert steps[-1].next_step is None
    assert steps[-1].is_terminal


def test_only_flagged_steps_allow_going_back():
    back = {d.step for d in ordered_steps() if d.can_go_back}
    assert back == {
        WorkflowStep.LOGGING,
        WorkflowStep.STRIP_ASSESS,
        WorkflowStep.DOCUMENT_FAULTS,
        WorkflowStep.TECHNICAL_REPORT,
        WorkflowStep.REASSEMBLE,
        WorkflowStep.FUNCTION_TEST,
    }


def test_requirement_flags():
    assert get_step(WorkflowStep.LOGGING).requires_hazmat_clearance
    assert get_step(WorkflowStep.AWAIT_PO).requires_po_approval
    assert get_step(WorkflowStep.REPAIR).requires_measurements
    assert not get_step(WorkflowStep.TECHNICAL_REPORT).requires_photos


def test_catalog_is_read_only():
    with pytest.raises(TypeError):
        STEP_CATALOG[WorkflowStep.RECEIVING] = None  # type: ignore[index]


def test_get_step_accepts_string_ids():
    assert get_step("step_6_await_po").title == "Await Purchase Order"


def test_get_step_rejects_unknown_id():
    with pytest.raises(ValueError):
        get_step("step_12_invoice")


def test_progress_percentage():
    assert progress_percentage(WorkflowStep.RECEIVING) == 9
    assert progress_percentage(WorkflowStep.AWAIT_PO) == 55
    assert progress_percentage(WorkflowStep.DISPATCH) == 100


# --- can_access_step ---


def test_access_same_step():
    assert can_access_step(WorkflowStep.REPAIR, WorkflowStep.REPAIR)


def test_access_immediate_successor():
    assert can_access_step(WorkflowStep.REPAIR, WorkflowStep.REASSEMBLE)


def test_access_denies_skipping_forward():
    assert not can_access_step(WorkflowStep.LOGGING, WorkflowStep.DOCUMENT_FAULTS)
    assert not can_access_step(WorkflowStep.RECEIVING, WorkflowStep.DISPATCH)


def test_access_back_to_revisitable_step():
    assert can_access_step(WorkflowStep.REPAIR, WorkflowStep.STRIP_ASSESS)
    assert can_access_step(WorkflowStep.DISPATCH, WorkflowStep.FUNCTION_TEST)


def test_access_denies_back_to_locked_step():
    assert not can_access_step(WorkflowStep.REPAIR, WorkflowStep.AWAIT_PO)
    assert not can_access_step(WorkflowStep.REPAIR, WorkflowStep.RECEIVING)
    assert not can_access_step(WorkflowStep.DISPATCH, WorkflowStep.QC_INSPECTION)
