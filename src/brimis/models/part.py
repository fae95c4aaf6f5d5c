"""Pydantic models for job parts identified during assessment."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from brimis.models.enums import PartCondition


class JobPart(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    part_id: str
    job_id: str
    part_name: str
    part_number: str | None = None
    quantity: int = 1
    condition: PartCondition = PartCondition.GOOD
    defects: list[str] = Field(default_factory=list)
    defect_notes: str | None = None
    cost: Decimal | None = None
    created_at: datetime | None = None


class JobPartCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    part_name: str = Field(..., min_length=1)
    part_number: str | None = None
    quantity: int = Field(1, gt=0)
    condition: PartCondition
    defects: list[str] = Field(default_factory=list)
    defect_notes: str | None = None
    cost: Decimal | None = Field(None, gt=0)
