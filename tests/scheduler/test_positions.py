"""Tests for position resolution inside a slot."""

import pytest

from duty_roster.models import Person, Population
from duty_roster.scheduler.models import AssignmentMatrix, Slot
from duty_roster.scheduler.positions import apply_positions, order_slot, resolve_positions

SENIOR_FACULTY = Person("Prof. Adams", Population.PRIMARY, 0)
JUNIOR_FACULTY = Person("Dr. Evans", Population.PRIMARY, 4)
SENIOR_STAFF = Person("Fiona", Population.SECONDARY, 0)
JUNIOR_STAFF = Person("Julia", Population.SECONDARY, 4)


class TestResolvePositions:
    """Tests for resolve_positions."""

    @pytest.mark.parametrize(
        "a,b,expected",
        [
            (JUNIOR_FACULTY, SENIOR_FACULTY, (SENIOR_FACULTY, JUNIOR_FACULTY)),
            (SENIOR_FACULTY, JUNIOR_FACULTY, (SENIOR_FACULTY, JUNIOR_FACULTY)),
            (JUNIOR_STAFF, SENIOR_STAFF, (SENIOR_STAFF, JUNIOR_STAFF)),
            (SENIOR_STAFF, JUNIOR_FACULTY, (JUNIOR_FACULTY, SENIOR_STAFF)),
            (JUNIOR_FACULTY, SENIOR_STAFF, (JUNIOR_FACULTY, SENIOR_STAFF)),
        ],
    )
    def test_rules(self, a, b, expected):
        assert resolve_positions(a, b) == expected

    def test_same_person_rejected(self):
        with pytest.raises(ValueError):
            resolve_positions(SENIOR_STAFF, SENIOR_STAFF)


class TestOrderSlot:
    """Tests for order_slot and apply_positions."""

    def test_reorders(self):
        slot = Slot(day=1, room=1, primary=SENIOR_STAFF, secondary=JUNIOR_FACULTY)
        ordered = order_slot(slot)
        assert ordered.primary == JUNIOR_FACULTY
        assert ordered.secondary == SENIOR_STAFF

    def test_idempotent(self):
        slot = Slot(day=1, room=1, primary=SENIOR_FACULTY, secondary=JUNIOR_STAFF)
        assert order_slot(slot) is slot
        assert order_slot(order_slot(slot)) is slot

    def test_apply_positions_counts_changes(self):
        matrix = AssignmentMatrix(days=1, rooms=2)
        matrix.add(Slot(1, 1, SENIOR_STAFF, JUNIOR_FACULTY))
        matrix.add(Slot(1, 2, SENIOR_FACULTY, JUNIOR_STAFF))

        assert apply_positions(matrix) == 1
        assert matrix.get(1, 1).primary == JUNIOR_FACULTY
        assert apply_positions(matrix) == 0
