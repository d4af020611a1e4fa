from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rollcall.db.base import Base
from rollcall.models.common import CreatedAtMixin, IntegerPrimaryKeyMixin


class Category(IntegerPrimaryKeyMixin, CreatedAtMixin, Base):
    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(25), nullable=False, unique=True, index=True)

    history = relationship("HistoryEvent", back_populates="category")
