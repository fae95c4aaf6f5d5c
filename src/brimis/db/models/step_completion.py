"""Step completion table: at most one row per (job, step)."""

from datetime import datetime

from sqlalchemy import JSON, DateTime, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from brimis.db.base import Base, utcnow


class StepCompletionRow(Base):
    __tablename__ = "step_completions"
    __table_args__ = (UniqueConstraint("job_id", "step"),)

    completion_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    job_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("jobs.job_id", ondelete="CASCADE"), nullable=False, index=True
    )
    step: Mapped[str] = mapped_column(String(50), nullable=False)
    completed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    completed_by: Mapped[str] = mapped_column(String(128), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    # none_as_null keeps "not provided" as SQL NULL so upserts can COALESCE
    measurements: Mapped[dict | None] = mapped_column(JSON(none_as_null=True), nullable=True)
    checklist: Mapped[dict | None] = mapped_column(JSON(none_as_null=True), nullable=True)
