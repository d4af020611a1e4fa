from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rollcall.db.base import Base
from rollcall.models.common import IntegerPrimaryKeyMixin, utcnow


class Student(IntegerPrimaryKeyMixin, Base):
    __tablename__ = "students"

    roster_number: Mapped[str] = mapped_column(String(32), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    username: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    enrolled_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    status_id: Mapped[int] = mapped_column(Integer, ForeignKey("statuses.id", ondelete="RESTRICT"), nullable=False, index=True)
    status_changed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    status = relationship("Status", back_populates="students")
    history = relationship("HistoryEvent", back_populates="student")
    summary = relationship("SummaryRow", back_populates="student", uselist=False)
