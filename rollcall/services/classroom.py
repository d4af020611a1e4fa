"""One explicit handle over a database session for an interactive session."""

import random
from collections.abc import Iterable

from sqlalchemy.orm import Session

from rollcall.services.lookup import LookupIndex
from rollcall.services.picker import StudentPicker
from rollcall.services.recorder import EventRecorder
from rollcall.services.redemption import RedemptionEngine
from rollcall.services.roster import RosterEntry, RosterImportResult, import_roster
from rollcall.services.scoring import PointPolicy
from rollcall.services.store import init_store
from rollcall.services.summary import SummaryAggregator


class Classroom:
    def __init__(
        self,
        db: Session,
        *,
        index: LookupIndex | None = None,
        policy: PointPolicy | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.db = db
        self.picker = StudentPicker(db, rng=rng, index=index)
        self.recorder = EventRecorder(db)
        self.summary = SummaryAggregator(db, policy=policy)
        self.redemption = RedemptionEngine(db)

    @property
    def index(self) -> LookupIndex:
        return self.picker.index

    def import_roster(self, entries: Iterable[RosterEntry]) -> RosterImportResult:
        result = import_roster(self.db, entries)
        self.picker.reload()
        return result


def open_classroom(db: Session, **kwargs) -> Classroom:
    """Initialize the store and build the lookup index from the current roster."""
    init_store(db)
    classroom = Classroom(db, **kwargs)
    classroom.picker.reload()
    return classroom
