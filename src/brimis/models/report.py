"""Pydantic models for the per-job technical report."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from brimis.models.enums import ReportStatus


class TechnicalReport(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    report_id: str
    job_id: str
    executive_summary: str | None = None
    findings: str | None = None
    recommendations: str | None = None
    ai_generated: bool = False
    status: ReportStatus = ReportStatus.DRAFT
    sent_at: datetime | None = None
    updated_at: datetime | None = None


class TechnicalReportDraft(BaseModel):
    model_config = ConfigDict(extra="forbid")

    executive_summary: str | None = None
    findings: str | None = None
    recommendations: str | None = None
    ai_generated: bool = False
