"""Tests for the greedy room filler."""

import logging
import random

from duty_roster.models import Roster
from duty_roster.scheduler.filler import GreedyFiller


def _assert_hard_constraints(tracker):
    for day in range(1, tracker.config.days + 1):
        names = [p.name for slot in tracker.matrix.slots_on(day) for p in slot.occupants]
        assert len(names) == len(set(names)), f"double booking on day {day}"
    for slot in tracker.matrix:
        assert slot.primary.name != slot.secondary.name
        for person in slot.occupants:
            assert tracker.room_of(person.name, slot.day + 1) != slot.room


class TestDayQuota:
    """Tests for GreedyFiller.day_quota."""

    def test_first_day(self, roster, make_tracker):
        tracker = make_tracker(roster, days=6, rooms=3)
        # ceil(25 / 6) = 5 beats the per-day minimum of 4
        assert GreedyFiller(tracker, random.Random(0)).day_quota(1) == 5

    def test_clipped_to_available_people(self, make_tracker):
        roster = Roster.from_names(["A", "B", "C", "D"], ["X"])
        tracker = make_tracker(roster, days=2, rooms=2)
        # Target 1, one staff member: a day can never hold more than one
        assert GreedyFiller(tracker, random.Random(0)).day_quota(1) == 1


class TestGreedyFiller:
    """Tests for GreedyFiller."""

    def test_fills_every_room(self, roster, make_tracker):
        for seed in range(5):
            tracker = make_tracker(roster, days=6, rooms=3)
            unfilled = GreedyFiller(tracker, random.Random(seed)).fill()
            assert unfilled == []
            assert tracker.matrix.is_complete
            _assert_hard_constraints(tracker)

    def test_first_day_meets_quota(self, roster, make_tracker):
        tracker = make_tracker(roster, days=6, rooms=3)
        filler = GreedyFiller(tracker, random.Random(0))
        filler.fill_day(1)
        assert filler.quotas[1] == 5
        assert tracker.secondary_count_on(1) == 5
        # The only faculty member on day 1 is the least senior one
        faculty = [p.name for s in tracker.matrix.slots_on(1) for p in s.occupants if p.is_primary]
        assert faculty == ["Dr. Evans"]

    def test_top_up_replaces_faculty(self, roster, make_tracker):
        tracker = make_tracker(roster, days=6, rooms=3)
        filler = GreedyFiller(tracker, random.Random(0))
        filler.fill_day(1)
        filler.fill_day(2)

        assert filler.quotas[2] == 4
        assert tracker.secondary_count_on(2) == 4
        # Dr. Clark was picked for room 2, then swapped out for a staff member
        assert tracker.duties("Dr. Clark") == 0
        slot = tracker.matrix.get(2, 2)
        assert slot.primary.is_secondary and slot.secondary.is_secondary

    def test_skips_rooms_already_filled_by_pins(self, small_roster, make_tracker):
        tracker = make_tracker(small_roster, days=3, rooms=2)
        tracker.place_slot(2, 1, small_roster.primary[0], small_roster.secondary[0])

        GreedyFiller(tracker, random.Random(0)).fill()

        assert tracker.matrix.is_complete
        assert tracker.matrix.get(2, 1).has("Senior")
        _assert_hard_constraints(tracker)

    def test_relaxes_cap_when_everyone_is_full(self, make_tracker):
        roster = Roster.from_names(["A"], ["X", "Y", "Z"])
        tracker = make_tracker(roster, days=2, rooms=2)

        unfilled = GreedyFiller(tracker, random.Random(0)).fill()

        # Every staff member reaches the target of 1 on day 1
        assert unfilled == []
        assert tracker.matrix.is_complete
        assert sum(tracker.duties(p.name) for p in roster.secondary) == 6
        _assert_hard_constraints(tracker)

    def test_adjacent_room_rule_never_relaxed(self, make_tracker, caplog):
        roster = Roster.from_names(["A"], ["X"])
        tracker = make_tracker(roster, days=2, rooms=1)

        with caplog.at_level(logging.WARNING):
            unfilled = GreedyFiller(tracker, random.Random(0)).fill()

        # Both people held room 1 on day 1, so day 2 cannot be staffed
        assert unfilled == [(2, 1)]
        assert "unfilled" in caplog.text
        assert len(tracker.matrix) == 1
