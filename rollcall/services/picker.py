import random

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from rollcall.core.config import get_settings
from rollcall.core.errors import NoStudents
from rollcall.models import Status, Student
from rollcall.services.lookup import LookupIndex, StudentRef


def load_active_students(db: Session) -> list[StudentRef]:
    settings = get_settings()
    rows = db.execute(
        select(Student.id, Student.name, Student.username)
        .join(Status, Student.status_id == Status.id)
        .where(Status.name == settings.enrolled_status)
        .order_by(Student.id)
    ).all()
    return [StudentRef(id=row.id, name=row.name, username=row.username) for row in rows]


def roster_version(db: Session) -> tuple:
    """Changes whenever a student is added or has their name, username or status changed."""
    count, last_change = db.execute(select(func.count(Student.id), func.max(Student.status_changed_at))).one()
    return count, last_change


class StudentPicker:
    """Turns operator input into exactly one enrolled student.

    A supplied index is reused only while it matches the stored roster; any
    roster change made through another session triggers a rebuild.
    """

    def __init__(self, db: Session, rng: random.Random | None = None, index: LookupIndex | None = None) -> None:
        self.db = db
        self.rng = rng or random.Random()
        self._index = index

    @property
    def index(self) -> LookupIndex:
        if self._index is None or self._index.version != roster_version(self.db):
            self.reload()
        return self._index

    @property
    def built_index(self) -> LookupIndex | None:
        return self._index

    def reload(self) -> LookupIndex:
        version = roster_version(self.db)
        self._index = LookupIndex.build(load_active_students(self.db), version=version)
        return self._index

    def pick(self, query: str) -> StudentRef:
        """Empty input draws uniformly at random; anything else is fuzzy-resolved."""
        index = self.index
        if query.strip():
            return index.resolve(query)

        students = index.students
        if not students:
            raise NoStudents()
        return self.rng.choice(students)
