from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rollcall.db.base import Base


class SummaryRow(Base):
    """Cached point total per student; rebuilt from history, never patched."""

    __tablename__ = "summary"

    student_id: Mapped[int] = mapped_column(Integer, ForeignKey("students.id", ondelete="RESTRICT"), primary_key=True)
    points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    stale: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    refreshed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    student = relationship("Student", back_populates="summary")
