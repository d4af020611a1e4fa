import random

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from rollcall.core.errors import StoreError

from rollcall.models import HistoryEvent, SummaryRow
from rollcall.services.scoring import CategoryWeighted
from rollcall.services.store import get_metadata
from rollcall.services.summary import SummaryAggregator
from tests.conftest import roster_entry


def _points(entries) -> list[tuple[int, int]]:
    return [(entry.student_id, entry.points) for entry in entries]


def test_refresh_then_summary_counts_satisfactory_events(classroom):
    classroom.recorder.record(1, "question", True)
    classroom.recorder.record(2, "homework", False)

    classroom.summary.refresh_all()

    assert _points(classroom.summary.get_summary()) == [(1, 1), (2, 0)]


def test_get_summary_does_not_refresh(classroom):
    classroom.summary.refresh_all()
    classroom.recorder.record(1, "question", True)

    entries = classroom.summary.get_summary()

    assert _points(entries) == [(1, 0), (2, 0)]
    assert [entry.stale for entry in entries] == [True, False]
    assert classroom.summary.is_stale() is True


def test_refresh_is_idempotent(classroom):
    classroom.recorder.record(1, "review", True)
    classroom.recorder.record(2, "practice", True)
    classroom.recorder.record(2, "error", False)

    classroom.summary.refresh_all()
    first = classroom.summary.get_summary()
    classroom.summary.refresh_all()
    second = classroom.summary.get_summary()

    assert first == second
    assert classroom.summary.is_stale() is False


def test_summary_is_derived_from_history(classroom):
    classroom.import_roster(
        [
            roster_entry("50000001", "Alice Adams", "aadams"),
            roster_entry("50000002", "Bob Brown", "bbrown"),
            roster_entry("50000003", "Carla Cruz", "ccruz"),
        ]
    )
    rng = random.Random(7)
    categories = ["comment", "error", "homework", "practice", "question", "review"]
    for _ in range(60):
        classroom.recorder.record(rng.randint(1, 3), rng.choice(categories), rng.random() < 0.6)

    classroom.summary.refresh_all()

    events = classroom.db.scalars(select(HistoryEvent)).all()
    expected = {student_id: 0 for student_id in (1, 2, 3)}
    for event in events:
        expected[event.student_id] += int(event.satisfactory)
    assert _points(classroom.summary.get_summary()) == sorted(expected.items())


def test_summary_includes_zero_point_and_dropped_students(classroom):
    classroom.recorder.record(2, "question", True)
    classroom.import_roster([roster_entry("50000002", "Bob Brown", "bbrown")])

    classroom.summary.refresh_all()

    assert _points(classroom.summary.get_summary()) == [(1, 0), (2, 1)]


def test_weighted_policy_scores_by_category(classroom):
    classroom.recorder.record(1, "homework", True)
    classroom.recorder.record(1, "question", True)
    classroom.recorder.record(2, "homework", False)

    aggregator = SummaryAggregator(classroom.db, policy=CategoryWeighted({"homework": 3}))
    aggregator.refresh_all()

    assert _points(aggregator.get_summary()) == [(1, 4), (2, 0)]


def test_refresh_stamps_metadata(classroom):
    assert get_metadata(classroom.db).summary_last_updated is None

    classroom.summary.refresh_all()

    assert get_metadata(classroom.db).summary_last_updated is not None


def test_failed_refresh_keeps_previous_snapshot(classroom, monkeypatch):
    classroom.recorder.record(1, "question", True)
    last_updated = get_metadata(classroom.db).summary_last_updated
    flush = classroom.db.flush

    def failing_commit(*args, **kwargs):
        flush()
        raise OperationalError("UPDATE summary", {}, Exception("disk I/O error"))

    monkeypatch.setattr(classroom.db, "commit", failing_commit)
    with pytest.raises(StoreError):
        classroom.summary.refresh_all()
    monkeypatch.undo()

    row = classroom.db.get(SummaryRow, 1)
    assert (row.points, row.stale) == (0, True)
    assert get_metadata(classroom.db).summary_last_updated == last_updated
    assert classroom.summary.is_stale() is True
