"""Retroactive correction of the satisfactory flag on a student's past events."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from sqlalchemy import select
from sqlalchemy.orm import Session

from rollcall.core.config import get_settings
from rollcall.core.errors import EventNotFound, UnknownStudent
from rollcall.db.session import atomic
from rollcall.models import Category, HistoryEvent, Student
from rollcall.services.recorder import mark_stale

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryItem:
    event_id: int
    category: str
    created_at: datetime
    satisfactory: bool


@dataclass(frozen=True)
class _Window:
    student_id: int
    day: date
    event_ids: frozenset[int]


def day_bounds(day: date, tz: ZoneInfo) -> tuple[datetime, datetime]:
    """UTC instants delimiting the calendar ``day`` in ``tz``."""
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz)
    return start.astimezone(UTC), end.astimezone(UTC)


class RedemptionEngine:
    """Fetch one student's events for a day, then commit a batch of flag flips.

    ``apply_corrections`` only accepts events from the last fetched window and
    re-reads that window from the store before writing anything.
    """

    def __init__(self, db: Session, tz: ZoneInfo | None = None) -> None:
        self.db = db
        self.tz = tz or get_settings().tzinfo
        self._window: _Window | None = None

    def _query_window(self, student_id: int, day: date) -> list[HistoryItem]:
        start, end = day_bounds(day, self.tz)
        rows = self.db.execute(
            select(HistoryEvent.id, Category.name, HistoryEvent.created_at, HistoryEvent.satisfactory)
            .join(Category, Category.id == HistoryEvent.category_id)
            .where(
                HistoryEvent.student_id == student_id,
                HistoryEvent.created_at >= start,
                HistoryEvent.created_at < end,
            )
            .order_by(HistoryEvent.created_at, HistoryEvent.id)
        ).all()
        return [
            HistoryItem(event_id=row[0], category=row[1], created_at=row[2], satisfactory=row[3])
            for row in rows
        ]

    def fetch_window(self, student_id: int, day: date) -> list[HistoryItem]:
        if self.db.get(Student, student_id) is None:
            raise UnknownStudent(f"Student {student_id} not found")
        items = self._query_window(student_id, day)
        self._window = _Window(student_id=student_id, day=day, event_ids=frozenset(item.event_id for item in items))
        return items

    def apply_corrections(self, edits: Mapping[int, bool]) -> None:
        """Apply every flip or none of them."""
        window = self._window
        if window is None:
            raise EventNotFound("No event window has been fetched")

        outside = sorted(set(edits) - window.event_ids)
        if outside:
            logger.warning("Rejected corrections for events outside the window: %s", outside)
            raise EventNotFound(f"Events not in the fetched window: {outside}")
        if not edits:
            return

        db = self.db
        with atomic(db):
            current = {item.event_id for item in self._query_window(window.student_id, window.day)}
            missing = sorted(set(edits) - current)
            if missing:
                raise EventNotFound(f"Events no longer present: {missing}")

            events = db.scalars(select(HistoryEvent).where(HistoryEvent.id.in_(list(edits)))).all()
            for event in events:
                event.satisfactory = bool(edits[event.id])
            mark_stale(db, {window.student_id})

        logger.info("Applied %s corrections for student %s on %s", len(edits), window.student_id, window.day)
