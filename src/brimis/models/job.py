"""Pydantic models for the Job entity and its write requests."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from brimis.models.enums import HazmatLevel, JobStatus, WorkflowStep


class Job(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    job_id: str = Field(..., pattern=r"^job_[A-Za-z0-9_-]+$")
    job_number: str
    client_id: str | None = None

    equipment_type: str
    serial_number: str
    manufacturer: str | None = None
    model: str | None = None
    model_number: str | None = None

    current_step: WorkflowStep = WorkflowStep.RECEIVING
    status: JobStatus = JobStatus.RECEIVED

    has_hazmat: bool = False
    hazmat_level: HazmatLevel | None = None
    hazmat_notes: str | None = None
    hazmat_cleaned: bool = False
    hazmat_cleaned_at: datetime | None = None
    hazmat_cleaned_by: str | None = None

    quote_amount: Decimal | None = None
    quote_sent_at: datetime | None = None
    quote_approved_at: datetime | None = None
    po_number: str | None = None
    po_received_at: datetime | None = None

    assigned_technician_id: str | None = None
    receiving_notes: str | None = None

    received_at: datetime | None = None
    target_completion_at: datetime | None = None
    actual_completion_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class JobCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    client_id: str | None = None
    equipment_type: str = Field(..., min_length=1)
    serial_number: str = Field(..., min_length=1)
    manufacturer: str | None = None
    model: str | None = None
    model_number: str | None = None
    has_hazmat: bool = False
    hazmat_level: HazmatLevel | None = None
    hazmat_notes: str | None = None
    receiving_notes: str | None = None
    assigned_technician_id: str | None = None
    target_completion_at: datetime | None = None


class HazmatUpdate(BaseModel):
    """Hazmat state recorded during logging; cleaned_by is required when cleaned."""

    model_config = ConfigDict(extra="forbid")

    has_hazmat: bool
    hazmat_level: HazmatLevel | None = None
    hazmat_notes: str | None = None
    hazmat_cleaned: bool = False
    hazmat_cleaned_by: str | None = None


class QuoteUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)


class PurchaseOrderReceipt(BaseModel):
    model_config = ConfigDict(extra="forbid")

    po_number: str = Field(..., min_length=1, max_length=100)
