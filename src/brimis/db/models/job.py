"""Job table: one piece of equipment moving through the repair workflow."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from brimis.db.base import Base, TimestampMixin, utcnow
from brimis.models.enums import JobStatus, WorkflowStep


class JobRow(Base, TimestampMixin):
    __tablename__ = "jobs"

    job_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    job_number: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    client_id: Mapped[str | None] = mapped_column(String(128), nullable=True, index=True)

    # Equipment
    equipment_type: Mapped[str] = mapped_column(String(200), nullable=False)
    serial_number: Mapped[str] = mapped_column(String(200), nullable=False)
    manufacturer: Mapped[str | None] = mapped_column(String(200), nullable=True)
    model: Mapped[str | None] = mapped_column(String(200), nullable=True)
    model_number: Mapped[str | None] = mapped_column(String(200), nullable=True)

    # Workflow position
    current_step: Mapped[str] = mapped_column(
        String(50), nullable=False, default=WorkflowStep.RECEIVING, index=True
    )
    status: Mapped[str] = mapped_column(String(50), nullable=False, default=JobStatus.RECEIVED, index=True)

    # Hazmat
    has_hazmat: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    hazmat_level: Mapped[str | None] = mapped_column(String(20), nullable=True)
    hazmat_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    hazmat_cleaned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    hazmat_cleaned_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    hazmat_cleaned_by: Mapped[str | None] = mapped_column(String(128), nullable=True)

    # Quote / purchase order
    quote_amount: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    quote_sent_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    quote_approved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    po_number: Mapped[str | None] = mapped_column(String(100), nullable=True)
    po_received_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    assigned_technician_id: Mapped[str | None] = mapped_column(String(128), nullable=True, index=True)
    receiving_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    received_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    target_completion_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    actual_completion_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
