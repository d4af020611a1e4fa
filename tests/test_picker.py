import random
from collections import Counter

import pytest

from rollcall.core.errors import NoStudents
from rollcall.services.picker import StudentPicker
from rollcall.services.roster import import_roster
from tests.conftest import roster_entry


def test_pick_on_empty_roster_fails(db_session):
    picker = StudentPicker(db_session)
    with pytest.raises(NoStudents):
        picker.pick("")
    with pytest.raises(NoStudents):
        picker.pick("anything")


def test_pick_with_query_resolves_by_name(classroom):
    student = classroom.picker.pick("bob")
    assert (student.id, student.name) == (2, "Bob Brown")


def test_blank_query_counts_as_random_draw(classroom):
    student = classroom.picker.pick("   ")
    assert student.id in {1, 2}


def test_random_draw_is_uniform_over_roster(classroom):
    classroom.import_roster(
        [
            roster_entry("50000001", "Alice Adams", "aadams"),
            roster_entry("50000002", "Bob Brown", "bbrown"),
            roster_entry("50000003", "Carla Cruz", "ccruz"),
        ]
    )
    picker = StudentPicker(classroom.db, rng=random.Random(42))

    counts = Counter(picker.pick("").id for _ in range(3000))

    assert set(counts) == {1, 2, 3}
    for value in counts.values():
        assert 880 <= value <= 1120


def test_random_draw_skips_dropped_students(classroom):
    classroom.import_roster([roster_entry("50000001", "Alice Adams", "aadams")])

    picks = {classroom.picker.pick("").id for _ in range(50)}
    assert picks == {1}
    assert classroom.picker.pick("bob").id == 1


def test_index_follows_roster_changes_from_another_session(classroom):
    assert classroom.picker.pick("bob").id == 2

    import_roster(classroom.db, [roster_entry("50000001", "Alice Adams", "aadams")])

    assert classroom.picker.pick("bob").id == 1
    assert {classroom.picker.pick("").id for _ in range(50)} == {1}
