from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rollcall.db.base import Base
from rollcall.models.common import CreatedAtMixin, IntegerPrimaryKeyMixin


class Status(IntegerPrimaryKeyMixin, CreatedAtMixin, Base):
    __tablename__ = "statuses"

    name: Mapped[str] = mapped_column(String(15), nullable=False, unique=True, index=True)

    students = relationship("Student", back_populates="status")
