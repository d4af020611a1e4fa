import logging
from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session

from rollcall.core.config import get_settings
from rollcall.db.session import atomic
from rollcall.models import Status, Student, SummaryRow
from rollcall.models.common import utcnow
from rollcall.services.store import get_status

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RosterEntry:
    roster_number: str
    name: str
    username: str


@dataclass(frozen=True)
class RosterImportResult:
    created: int = 0
    updated: int = 0
    dropped: int = 0
    unchanged: int = 0


def list_students(db: Session, include_inactive: bool = False) -> list[Student]:
    stmt = select(Student).order_by(Student.id)
    if not include_inactive:
        stmt = stmt.join(Status, Student.status_id == Status.id).where(Status.name == get_settings().enrolled_status)
    return list(db.scalars(stmt).all())


def import_roster(db: Session, entries: Iterable[RosterEntry]) -> RosterImportResult:
    """Upsert a roster: enroll new or changed students, drop the absent ones, delete nothing."""
    settings = get_settings()
    incoming = {entry.roster_number: entry for entry in entries}
    created = updated = dropped = unchanged = 0

    with atomic(db):
        enrolled = get_status(db, settings.enrolled_status)
        dropped_status = get_status(db, settings.dropped_status)
        existing = {student.roster_number: student for student in db.scalars(select(Student)).all()}
        now = utcnow()

        for roster_number, entry in incoming.items():
            student = existing.get(roster_number)
            if student is None:
                db.add(
                    Student(
                        roster_number=roster_number,
                        name=entry.name,
                        username=entry.username,
                        status_id=enrolled.id,
                        enrolled_at=now,
                        status_changed_at=now,
                    )
                )
                created += 1
                continue
            if (student.name, student.username, student.status_id) == (entry.name, entry.username, enrolled.id):
                unchanged += 1
                continue
            student.name = entry.name
            student.username = entry.username
            student.status_id = enrolled.id
            student.status_changed_at = now
            updated += 1

        for roster_number, student in existing.items():
            if roster_number in incoming or student.status_id == dropped_status.id:
                continue
            student.status_id = dropped_status.id
            student.status_changed_at = now
            dropped += 1

        db.flush()
        cached = set(db.scalars(select(SummaryRow.student_id)).all())
        for student_id in db.scalars(select(Student.id)).all():
            if student_id not in cached:
                db.add(SummaryRow(student_id=student_id, points=0, stale=True))

    result = RosterImportResult(created=created, updated=updated, dropped=dropped, unchanged=unchanged)
    logger.info("Imported roster: %s", result)
    return result
