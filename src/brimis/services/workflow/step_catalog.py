"""The Brimis 11-step process definition.

Each step carries an explicit sequence number; ordering never depends on the
position of an entry in the table. The catalog is built once at import time
and exposed through a read-only mapping.
"""

from dataclasses import dataclass
from types import MappingProxyType

from brimis.models.enums import WorkflowStep

TOTAL_STEPS = 11


@dataclass(frozen=True)
class StepDefinition:
    step: WorkflowStep
    number: int
    title: str
    description: str
    requires_photos: bool = False
    requires_checklist: bool = False
    requires_measurements: bool = False
    requires_hazmat_clearance: bool = False
    requires_po_approval: bool = False
    can_go_back: bool = False
    next_step: WorkflowStep | None = None

    @property
    def is_terminal(self) -> bool:
        return self.next_step is None


_DEFINITIONS = (
    StepDefinition(
        step=WorkflowStep.RECEIVING,
        number=1,
        title="Receiving",
        description="Log equipment arrival and create job",
        requires_photos=True,
        next_step=WorkflowStep.LOGGING,
    ),
    StepDefinition(
        step=WorkflowStep.LOGGING,
        number=2,
        title="Logging & Hazmat Check",
        description="Record equipment details and check for hazardous materials",
        requires_checklist=True,
        requires_hazmat_clearance=True,
        can_go_back=True,
        next_step=WorkflowStep.STRIP_ASSESS,
    ),
    StepDefinition(
        step=WorkflowStep.STRIP_ASSESS,
        number=3,
        title="Strip & Assess",
        description="Dismantle equipment and photograph components",
        requires_photos=True,
        can_go_back=True,
        next_step=WorkflowStep.DOCUMENT_FAULTS,
    ),
    StepDefinition(
        step=WorkflowStep.DOCUMENT_FAULTS,
        number=4,
        title="Document Faults",
        description="Record all defects and create parts list",
        requires_photos=True,
        can_go_back=True,
        next_step=WorkflowStep.TECHNICAL_REPORT,
    ),
    StepDefinition(
        step=WorkflowStep.TECHNICAL_REPORT,
        number=5,
        title="Generate Technical Report",
        description="Report generation for client quote",
        can_go_back=True,
        next_step=WorkflowStep.AWAIT_PO,
    ),
    StepDefinition(
        step=WorkflowStep.AWAIT_PO,
        number=6,
        title="Await Purchase Order",
        description="Wait for client approval and PO",
        requires_po_approval=True,
        next_step=WorkflowStep.REPAIR,
    ),
    StepDefinition(
        step=WorkflowStep.REPAIR,
        number=7,
        title="Repair",
        description="Execute repairs and replace parts",
        requires_photos=True,
        requires_checklist=True,
        requires_measurements=True,
        next_step=WorkflowStep.REASSEMBLE,
    ),
    StepDefinition(
        step=WorkflowStep.REASSEMBLE,
        number=8,
        title="Reassemble",
        description="Reassemble equipment using strip photos as reference",
        requires_photos=True,
        requires_checklist=True,
        can_go_back=True,
        next_step=WorkflowStep.FUNCTION_TEST,
    ),
    StepDefinition(
        step=WorkflowStep.FUNCTION_TEST,
        number=9,
        title="Function Test",
        description="Test equipment operation and performance",
        requires_photos=True,
        requires_checklist=True,
        requires_measurements=True,
        can_go_back=True,
        next_step=WorkflowStep.QC_INSPECTION,
    ),
    StepDefinition(
        step=WorkflowStep.QC_INSPECTION,
        number=10,
        title="QC Inspection",
        description="Quality control inspection and measurements",
        requires_photos=True,
        requires_checklist=True,
        requires_measurements=True,
        next_step=WorkflowStep.DISPATCH,
    ),
    StepDefinition(
        step=WorkflowStep.DISPATCH,
        number=11,
        title="Dispatch",
        description="Package and prepare for delivery",
        requires_photos=True,
        requires_checklist=True,
    ),
)

STEP_CATALOG: MappingProxyType[WorkflowStep, StepDefinition] = MappingProxyType(
    {d.step: d for d in _DEFINITIONS}
)


def _check_catalog() -> None:
    missing = set(WorkflowStep) - set(STEP_CATALOG)
    if missing:
        raise RuntimeError(f"Step catalog is missing definitions for: {sorted(missing)}")
    numbers = sorted(d.number for d in STEP_CATALOG.values())
    if numbers != list(range(1, TOTAL_STEPS + 1)):
        raise RuntimeError(f"Step numbers must be 1..{TOTAL_STEPS}, got {numbers}")
    for d in STEP_CATALOG.values():
        if d.next_step is not None and STEP_CATALOG[d.next_step].number != d.number + 1:
            raise RuntimeError(f"{d.step} must be followed by the step numbered {d.number + 1}")


_check_catalog()


def get_step(step: WorkflowStep | str) -> StepDefinition:
    """Look up a step definition. Raises ValueError for unknown identifiers."""
    return STEP_CATALOG[WorkflowStep(step)]


def ordered_steps() -> list[StepDefinition]:
    """All step definitions ordered by sequence number."""
    return sorted(STEP_CATALOG.values(), key=lambda d: d.number)


def progress_percentage(step: WorkflowStep | str) -> int:
    """Position of the step in the process as a rounded percentage."""
    return round(get_step(step).number / TOTAL_STEPS * 100)
