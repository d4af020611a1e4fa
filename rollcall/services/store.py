"""Reference data and operational bookkeeping for the persistent store."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from rollcall.core.config import get_settings
from rollcall.core.errors import StoreError, UnknownCategory
from rollcall.db.session import atomic
from rollcall.models import Category, Status, StoreMetadata
from rollcall.models.common import utcnow
from rollcall.models.metadata import METADATA_ROW_ID

logger = logging.getLogger(__name__)


def init_store(db: Session) -> StoreMetadata:
    """Seed statuses and categories if missing and stamp the open time."""
    settings = get_settings()
    with atomic(db):
        for name in (settings.enrolled_status, settings.dropped_status):
            if db.scalar(select(Status).where(Status.name == name)) is None:
                db.add(Status(name=name))
        for name in settings.default_categories:
            if db.scalar(select(Category).where(Category.name == name)) is None:
                db.add(Category(name=name))

        metadata = db.get(StoreMetadata, METADATA_ROW_ID)
        if metadata is None:
            metadata = StoreMetadata(id=METADATA_ROW_ID)
            db.add(metadata)
            logger.info("Initialized new store")
        metadata.last_opened = utcnow()
    return metadata


def get_metadata(db: Session) -> StoreMetadata | None:
    return db.get(StoreMetadata, METADATA_ROW_ID)


def get_status(db: Session, name: str) -> Status:
    status = db.scalar(select(Status).where(Status.name == name))
    if status is None:
        raise StoreError(f"Status {name!r} is not seeded; run init_store first")
    return status


def list_categories(db: Session) -> list[Category]:
    return list(db.scalars(select(Category).order_by(Category.id)).all())


def resolve_category(db: Session, category: int | str) -> Category:
    if isinstance(category, int):
        found = db.get(Category, category)
    else:
        found = db.scalar(select(Category).where(Category.name == category))
    if found is None:
        raise UnknownCategory(f"Category {category!r} not found")
    return found


def add_category(db: Session, name: str) -> Category:
    """Append a category; an existing name is returned unchanged."""
    name = name.strip()
    if not name:
        raise ValueError("Category name must not be empty")
    existing = db.scalar(select(Category).where(Category.name == name))
    if existing is not None:
        return existing
    with atomic(db):
        category = Category(name=name)
        db.add(category)
    logger.info("Added category %s", name)
    return category
