"""Pydantic models for step completions, gate results and transitions."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from brimis.errors.exceptions import TerminalStateError, ValidationFailedError
from brimis.models.enums import JobStatus, TransitionFailure, WorkflowStep
from brimis.models.job import Job


class StepCompletion(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    job_id: str
    step: WorkflowStep
    completed_at: datetime
    completed_by: str
    notes: str | None = None
    measurements: dict[str, float] | None = None
    checklist: dict[str, bool] | None = None


class StepValidationResult(BaseModel):
    can_proceed: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @classmethod
    def from_messages(cls, errors: list[str], warnings: list[str] | None = None) -> "StepValidationResult":
        return cls(can_proceed=not errors, errors=errors, warnings=warnings or [])


class TransitionResult(BaseModel):
    """Outcome of advance, return_to_step or complete_dispatch.

    Gate failures and terminal-state attempts are expected outcomes and are
    returned here rather than raised; ``raise_for_failure`` converts them for
    callers that prefer exceptions.
    """

    success: bool
    message: str
    failure: TransitionFailure | None = None
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    job: Job | None = None
    completed_step: WorkflowStep | None = None
    next_step: WorkflowStep | None = None

    def raise_for_failure(self) -> "TransitionResult":
        if self.failure is TransitionFailure.TERMINAL_STATE:
            raise TerminalStateError(self.message)
        if self.failure is not None:
            raise ValidationFailedError(self.errors or [self.message])
        return self


class StepSummary(BaseModel):
    step: WorkflowStep
    number: int
    title: str
    description: str
    requires_photos: bool
    requires_checklist: bool
    requires_measurements: bool
    requires_hazmat_clearance: bool
    requires_po_approval: bool
    can_go_back: bool
    next_step: WorkflowStep | None = None
    completed: bool = False


class StepProgress(BaseModel):
    step: WorkflowStep
    number: int
    title: str
    is_completed: bool
    is_current: bool
    is_locked: bool
    completion: StepCompletion | None = None


class WorkflowProgress(BaseModel):
    job_id: str
    current_step: WorkflowStep
    status: JobStatus
    steps: list[StepProgress]
    completed_count: int
    total_steps: int
    progress_pct: int


class AdvanceRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    actor_id: str = Field(..., min_length=1)
    notes: str | None = None
    measurements: dict[str, float] | None = None
    checklist: dict[str, bool] | None = None


class StepDataRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    actor_id: str = Field(..., min_length=1)
    notes: str | None = None
    measurements: dict[str, float] | None = None
    checklist: dict[str, bool] | None = None


class ReturnToStepRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    target_step: WorkflowStep


class DispatchRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    actor_id: str = Field(..., min_length=1)
    notes: str | None = None
    checklist: dict[str, bool] | None = None
