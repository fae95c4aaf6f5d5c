"""Pydantic models for QC inspections."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from brimis.models.enums import QCStatus


class QCInspection(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    inspection_id: str
    job_id: str
    inspector_id: str
    measurements: dict[str, float] = Field(default_factory=dict)
    visual_inspection_passed: bool
    function_test_passed: bool
    leak_test_passed: bool
    documentation_complete: bool
    overall_status: QCStatus
    failed_items: list[str] = Field(default_factory=list)
    notes: str | None = None
    inspected_at: datetime


class QCInspectionCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    inspector_id: str = Field(..., min_length=1)
    measurements: dict[str, float]
    visual_inspection_passed: bool
    function_test_passed: bool
    leak_test_passed: bool
    documentation_complete: bool
    overall_status: QCStatus
    failed_items: list[str] = Field(default_factory=list)
    notes: str | None = None
