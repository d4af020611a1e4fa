from datetime import datetime

from sqlalchemy import DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column

from rollcall.db.base import Base
from rollcall.models.common import utcnow

METADATA_ROW_ID = 1


class StoreMetadata(Base):
    __tablename__ = "metadata"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=METADATA_ROW_ID)
    first_created: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    last_opened: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    summary_last_updated: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
