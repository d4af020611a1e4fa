"""Summary aggregation: cached per-student point totals rebuilt from history."""

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from rollcall.core.config import get_settings
from rollcall.db.session import atomic
from rollcall.models import Category, HistoryEvent, Student, SummaryRow
from rollcall.models.common import utcnow
from rollcall.services.scoring import PointPolicy, policy_from_settings
from rollcall.services.store import get_metadata

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SummaryEntry:
    student_id: int
    name: str
    username: str
    points: int
    stale: bool


def compute_totals(
    db: Session,
    policy: PointPolicy,
    *,
    since: datetime | None = None,
    until: datetime | None = None,
) -> dict[int, int]:
    """Aggregate points per student straight from history, optionally in ``[since, until)``."""
    join_condition = HistoryEvent.student_id == Student.id
    if since is not None:
        join_condition = join_condition & (HistoryEvent.created_at >= since)
    if until is not None:
        join_condition = join_condition & (HistoryEvent.created_at < until)

    points = func.coalesce(func.sum(policy.expression()), 0).label("points")
    stmt = (
        select(Student.id, points)
        .select_from(Student)
        .outerjoin(HistoryEvent, join_condition)
        .outerjoin(Category, Category.id == HistoryEvent.category_id)
        .group_by(Student.id)
        .order_by(Student.id)
    )
    return {row.id: int(row.points) for row in db.execute(stmt).all()}


class SummaryAggregator:
    def __init__(self, db: Session, policy: PointPolicy | None = None) -> None:
        self.db = db
        self.policy = policy or policy_from_settings(get_settings())

    def refresh_all(self) -> None:
        """Recompute every student's total and overwrite the cache in one unit of work."""
        db = self.db
        with atomic(db):
            totals = compute_totals(db, self.policy)
            rows = {row.student_id: row for row in db.scalars(select(SummaryRow)).all()}
            now = utcnow()
            for student_id, points in totals.items():
                row = rows.get(student_id)
                if row is None:
                    row = SummaryRow(student_id=student_id)
                    db.add(row)
                row.points = points
                row.stale = False
                row.refreshed_at = now

            metadata = get_metadata(db)
            if metadata is not None:
                metadata.summary_last_updated = now
        logger.info("Refreshed summary for %s students", len(totals))

    def get_summary(self) -> list[SummaryEntry]:
        """Return the last computed snapshot for every known student, ordered by id."""
        stmt = (
            select(Student.id, Student.name, Student.username, SummaryRow.points, SummaryRow.stale)
            .outerjoin(SummaryRow, SummaryRow.student_id == Student.id)
            .order_by(Student.id)
        )
        return [
            SummaryEntry(
                student_id=row.id,
                name=row.name,
                username=row.username,
                points=row.points or 0,
                stale=True if row.stale is None else row.stale,
            )
            for row in self.db.execute(stmt).all()
        ]

    def is_stale(self) -> bool:
        stale_rows = self.db.scalar(select(func.count()).select_from(SummaryRow).where(SummaryRow.stale.is_(True))) or 0
        students = self.db.scalar(select(func.count()).select_from(Student)) or 0
        cached = self.db.scalar(select(func.count()).select_from(SummaryRow)) or 0
        return stale_rows > 0 or cached < students
