import logging

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from rollcall.core.errors import UnknownStudent
from rollcall.db.session import atomic
from rollcall.models import HistoryEvent, Student, SummaryRow
from rollcall.services.store import resolve_category

logger = logging.getLogger(__name__)


def mark_stale(db: Session, student_ids: set[int]) -> None:
    """Flag cached summaries as out of date; caller owns the transaction."""
    if not student_ids:
        return
    db.execute(update(SummaryRow).where(SummaryRow.student_id.in_(student_ids)).values(stale=True))
    existing = set(db.scalars(select(SummaryRow.student_id).where(SummaryRow.student_id.in_(student_ids))).all())
    for student_id in sorted(student_ids - existing):
        db.add(SummaryRow(student_id=student_id, points=0, stale=True))


class EventRecorder:
    def __init__(self, db: Session) -> None:
        self.db = db

    def record(self, student_id: int, category: int | str, satisfactory: bool) -> int:
        """Commit one event and invalidate the student's cached summary."""
        db = self.db
        with atomic(db):
            student = db.get(Student, student_id)
            if student is None:
                raise UnknownStudent(f"Student {student_id} not found")
            resolved = resolve_category(db, category)

            event = HistoryEvent(student_id=student.id, category_id=resolved.id, satisfactory=bool(satisfactory))
            db.add(event)
            db.flush()
            mark_stale(db, {student.id})
            event_id = event.id
            category_name = resolved.name

        logger.info(
            "Recorded %s %s event %s for student %s",
            "satisfactory" if satisfactory else "unsatisfactory",
            category_name,
            event_id,
            student_id,
        )
        return event_id
