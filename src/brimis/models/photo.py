"""Pydantic models for photo metadata."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from brimis.models.enums import WorkflowStep


class JobPhoto(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    photo_id: str
    job_id: str
    step: WorkflowStep | None = None
    url: str | None = None
    caption: str | None = None
    uploaded_by: str
    taken_at: datetime


class JobPhotoCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    step: WorkflowStep | None = None
    url: str | None = None
    caption: str | None = None
    uploaded_by: str
