"""Storage contracts the workflow engine depends on.

The SQLAlchemy repositories satisfy these structurally; tests substitute
in-memory fakes.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol


class JobLike(Protocol):
    job_id: str
    current_step: str
    status: str
    has_hazmat: bool
    hazmat_cleaned: bool
    po_number: str | None
    po_received_at: datetime | None


class CompletionLike(Protocol):
    step: str
    measurements: dict[str, Any] | None
    checklist: dict[str, Any] | None


class ReportLike(Protocol):
    status: str


class InspectionLike(Protocol):
    overall_status: str


class JobStore(Protocol):
    async def get(self, job_id: str) -> JobLike | None:
        ...

    async def update_step(
        self, job_id: str, expected_step: str, step: str, status: str
    ) -> JobLike | None:
        ...

    async def mark_dispatched(self, job_id: str, expected_status: str) -> JobLike | None:
        """Close a job sitting at Dispatch; None if its status moved on."""
        ...


class StepCompletionStore(Protocol):
    async def upsert(
        self,
        job_id: str,
        step: str,
        completed_by: str,
        notes: str | None = None,
        measurements: dict | None = None,
        checklist: dict | None = None,
    ) -> None:
        ...

    async def get_for_step(self, job_id: str, step: str) -> CompletionLike | None:
        ...

    async def list_by_job(self, job_id: str) -> list[CompletionLike]:
        ...


class PartStore(Protocol):
    async def list_by_job(self, job_id: str) -> list[Any]:
        ...


class ReportStore(Protocol):
    async def get_by_job(self, job_id: str) -> ReportLike | None:
        ...


class QCInspectionStore(Protocol):
    async def latest_by_job(self, job_id: str) -> InspectionLike | None:
        ...


class PhotoStore(Protocol):
    async def count_by_job_and_step(self, job_id: str, step: str) -> int:
        ...


class UnitOfWork(Protocol):
    async def commit(self) -> None:
        ...

    async def rollback(self) -> None:
        ...


@dataclass
class WorkflowStores:
    """Everything the engine reads from or writes to."""

    jobs: JobStore
    completions: StepCompletionStore
    parts: PartStore
    reports: ReportStore
    inspections: QCInspectionStore
    photos: PhotoStore
    unit_of_work: UnitOfWork
