"""Tests for ScheduleValidator."""

import pytest

from duty_roster.models import PinRequest, Roster
from duty_roster.scheduler.models import FindingKind, Slot
from duty_roster.scheduler.validator import ScheduleValidator


@pytest.fixture
def people(small_roster):
    return {p.name: p for p in small_roster.people}


@pytest.fixture
def entries(people):
    """A clean 3-day, 2-room schedule for the small roster."""
    layout = [
        (1, 1, "Junior", "Vic"),
        (1, 2, "Uma", "Tess"),
        (2, 1, "Sam", "Uma"),
        (2, 2, "Junior", "Vic"),
        (3, 1, "Senior", "Tess"),
        (3, 2, "Senior", "Sam"),
    ]
    return [Slot(day, room, people[a], people[b]) for day, room, a, b in layout]


@pytest.fixture
def validator(small_roster):
    def _make(pins=None):
        return ScheduleValidator(
            small_roster.primary, small_roster.secondary, 3, 2, 2, pins=pins
        )

    return _make


def _kinds(findings):
    return [f.kind for f in findings]


class TestScheduleValidator:
    """Tests for ScheduleValidator."""

    def test_clean_schedule(self, validator, entries):
        assert validator().validate(entries) == []

    def test_missing_slot(self, validator, entries):
        findings = validator().validate(entries[:-1])
        kinds = _kinds(findings)
        assert FindingKind.SLOT_COUNT_MISMATCH in kinds
        unfilled = [f for f in findings if f.kind == FindingKind.UNFILLED_SLOT]
        assert [(f.day, f.room) for f in unfilled] == [(3, 2)]

    def test_same_person_in_slot(self, validator, entries, people):
        entries[0] = Slot(1, 1, people["Vic"], people["Vic"])
        findings = validator().validate(entries)
        same = [f for f in findings if f.kind == FindingKind.SAME_PERSON_IN_SLOT]
        assert len(same) == 1
        assert same[0].person == "Vic"

    def test_duplicate_day_assignment(self, validator, entries, people):
        entries[1] = Slot(1, 2, people["Vic"], people["Tess"])
        findings = validator().validate(entries)
        dup = [f for f in findings if f.kind == FindingKind.DUPLICATE_DAY_ASSIGNMENT]
        assert len(dup) == 1
        assert (dup[0].day, dup[0].person) == (1, "Vic")

    def test_consecutive_room_repeat(self, validator, entries, people):
        # Tess takes Uma's day 2 place and holds room 1 again on day 3
        entries[2] = Slot(2, 1, people["Sam"], people["Tess"])
        findings = validator().validate(entries)
        repeats = [f for f in findings if f.kind == FindingKind.CONSECUTIVE_ROOM_REPEAT]
        assert [(f.person, f.day, f.room) for f in repeats] == [("Tess", 3, 1)]

    def test_reported_counts(self, validator, entries):
        counts = {"Senior": 2, "Junior": 2, "Sam": 2, "Tess": 2, "Uma": 2, "Vic": 1}
        findings = validator().validate(entries, reported_counts=counts)
        mismatches = [f for f in findings if f.kind == FindingKind.DUTY_COUNT_MISMATCH]
        assert [f.person for f in mismatches] == ["Vic"]

    def test_secondary_target(self, validator, entries, people):
        entries[0] = Slot(1, 1, people["Junior"], people["Sam"])
        findings = validator().validate(entries)
        deviations = [f for f in findings if f.kind == FindingKind.SECONDARY_TARGET_DEVIATION]
        assert sorted(f.person for f in deviations) == ["Sam", "Vic"]

    def test_seniority_violation(self, validator, entries, people):
        entries[0] = Slot(1, 1, people["Senior"], people["Vic"])
        findings = validator().validate(entries)
        violations = [f for f in findings if f.kind == FindingKind.SENIORITY_VIOLATION]
        assert len(violations) == 1
        assert violations[0].person == "Senior"

    def test_every_pair_reported(self):
        roster = Roster.from_names(["A", "B", "C"], ["X"])
        a, b, c = roster.primary
        x = roster.secondary[0]
        # A: 2, B: 1, C: 1 breaks (A, B) and (A, C)
        entries = [Slot(1, 1, a, x), Slot(1, 2, b, c), Slot(2, 1, a, x)]
        findings = ScheduleValidator(roster.primary, roster.secondary, 2, 2, 1).validate(entries)
        violations = [f for f in findings if f.kind == FindingKind.SENIORITY_VIOLATION]
        assert len(violations) == 2
        assert {f.person for f in violations} == {"A"}

    def test_pins(self, validator, entries):
        pins = [PinRequest("Tess", 3), PinRequest("Vic", 3)]
        findings = validator(pins).validate(entries)
        not_honored = [f for f in findings if f.kind == FindingKind.PIN_NOT_HONORED]
        assert [(f.person, f.day) for f in not_honored] == [("Vic", 3)]

    def test_does_not_mutate(self, validator, entries):
        before = [e.to_dict() for e in entries]
        validator().validate(entries)
        assert [e.to_dict() for e in entries] == before
