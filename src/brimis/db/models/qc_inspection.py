"""QC inspection table: append-only, one row per inspection attempt."""

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from brimis.db.base import Base, CreatedAtMixin, utcnow


class QCInspectionRow(Base, CreatedAtMixin):
    __tablename__ = "qc_inspections"

    inspection_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    job_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("jobs.job_id", ondelete="CASCADE"), nullable=False, index=True
    )
    inspector_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    measurements: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    visual_inspection_passed: Mapped[bool] = mapped_column(Boolean, nullable=False)
    function_test_passed: Mapped[bool] = mapped_column(Boolean, nullable=False)
    leak_test_passed: Mapped[bool] = mapped_column(Boolean, nullable=False)
    documentation_complete: Mapped[bool] = mapped_column(Boolean, nullable=False)
    overall_status: Mapped[str] = mapped_column(String(20), nullable=False)
    failed_items: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    inspected_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
