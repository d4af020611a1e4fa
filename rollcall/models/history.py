from sqlalchemy import Boolean, ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rollcall.db.base import Base
from rollcall.models.common import CreatedAtMixin, IntegerPrimaryKeyMixin


class HistoryEvent(IntegerPrimaryKeyMixin, CreatedAtMixin, Base):
    """One participation event. Only ``satisfactory`` is ever rewritten."""

    __tablename__ = "history"
    __table_args__ = (Index("ix_history_student_created", "student_id", "created_at"),)

    student_id: Mapped[int] = mapped_column(Integer, ForeignKey("students.id", ondelete="RESTRICT"), nullable=False)
    category_id: Mapped[int] = mapped_column(Integer, ForeignKey("categories.id", ondelete="RESTRICT"), nullable=False)
    satisfactory: Mapped[bool] = mapped_column(Boolean, nullable=False)

    student = relationship("Student", back_populates="history")
    category = relationship("Category", back_populates="history")
