"""Tests for ConstraintTracker class."""

import pytest

from duty_roster.scheduler.models import Position


class TestConstraintTracker:
    """Tests for ConstraintTracker class."""

    def test_initially_empty(self, small_roster, make_tracker):
        tracker = make_tracker(small_roster, days=3, rooms=2)
        assert len(tracker.matrix) == 0
        assert tracker.duties("Senior") == 0
        assert tracker.open_rooms(1) == [1, 2]
        assert not tracker.is_assigned_on("Senior", 1)

    def test_place_slot_records_both(self, small_roster, make_tracker):
        tracker = make_tracker(small_roster, days=3, rooms=2)
        senior, junior = small_roster.primary
        slot = tracker.place_slot(1, 2, junior, senior)

        assert slot.primary == senior
        assert slot.secondary == junior
        assert tracker.duties("Senior") == 1
        assert tracker.duties("Junior") == 1
        assert tracker.is_assigned_on("Senior", 1)
        assert tracker.room_of("Junior", 1) == 2
        assert tracker.open_rooms(1) == [1]
        assert tracker.matrix.get(1, 2) is slot

    def test_place_slot_twice_fails(self, small_roster, make_tracker):
        tracker = make_tracker(small_roster, days=3, rooms=2)
        tracker.place_slot(1, 1, *small_roster.primary)
        with pytest.raises(ValueError):
            tracker.place_slot(1, 1, *small_roster.secondary[:2])

    def test_assign_same_day_twice_fails(self, small_roster, make_tracker):
        tracker = make_tracker(small_roster, days=3, rooms=2)
        tracker.place_slot(1, 1, *small_roster.primary)
        with pytest.raises(ValueError):
            tracker.place_slot(1, 2, small_roster.primary[0], small_roster.secondary[0])

    def test_replace_swaps_occupant(self, small_roster, make_tracker):
        tracker = make_tracker(small_roster, days=3, rooms=2)
        senior, junior = small_roster.primary
        sam = small_roster.secondary[0]
        slot = tracker.place_slot(1, 1, senior, junior)

        updated = tracker.replace(slot, senior, sam)

        assert updated.primary == junior
        assert updated.secondary == sam
        assert updated.position_of("Sam") == Position.SECONDARY
        assert tracker.duties("Senior") == 0
        assert tracker.duties("Sam") == 1
        assert not tracker.is_assigned_on("Senior", 1)
        assert tracker.matrix.get(1, 1) == updated

    def test_replace_requires_occupant(self, small_roster, make_tracker):
        tracker = make_tracker(small_roster, days=3, rooms=2)
        slot = tracker.place_slot(1, 1, *small_roster.primary)
        with pytest.raises(ValueError):
            tracker.replace(slot, small_roster.secondary[0], small_roster.secondary[1])

    def test_adjacent_room_conflict_both_directions(self, small_roster, make_tracker):
        tracker = make_tracker(small_roster, days=3, rooms=2)
        tracker.place_slot(2, 1, *small_roster.primary)

        assert tracker.has_adjacent_room_conflict("Senior", 1, 1)
        assert tracker.has_adjacent_room_conflict("Senior", 3, 1)
        assert not tracker.has_adjacent_room_conflict("Senior", 3, 2)
        assert not tracker.has_adjacent_room_conflict("Sam", 3, 1)

    def test_protection_flag(self, small_roster, make_tracker):
        tracker = make_tracker(small_roster, days=3, rooms=2)
        tracker.protect("Uma", 2)
        assert tracker.is_protected("Uma", 2)
        assert not tracker.is_protected("Uma", 1)
        assert tracker.protected == {("Uma", 2)}

    def test_caps(self, small_roster, make_tracker):
        tracker = make_tracker(small_roster, days=3, rooms=2)
        senior = small_roster.primary[0]
        sam = small_roster.secondary[0]
        assert tracker.cap_for(senior) == 2
        assert tracker.cap_for(sam) == 2

        tracker.place_slot(1, 1, senior, sam)
        tracker.place_slot(2, 2, senior, sam)
        assert not tracker.is_under_cap(senior)
        assert tracker.over_cap(senior) == 1

    def test_secondary_count_and_demand(self, small_roster, make_tracker):
        tracker = make_tracker(small_roster, days=3, rooms=2)
        assert tracker.remaining_secondary_demand() == 8

        tracker.place_slot(1, 1, small_roster.primary[0], small_roster.secondary[0])
        tracker.place_slot(1, 2, *small_roster.secondary[1:3])

        assert tracker.secondary_count_on(1) == 3
        assert tracker.secondary_count_on(2) == 0
        assert tracker.remaining_secondary_demand() == 5
        assert tracker.remaining_primary_demand() == 3

    def test_hierarchy_violations(self, roster, make_tracker):
        tracker = make_tracker(roster, days=6, rooms=3)
        names = [p.name for p in roster.primary]
        counts = dict(zip(names, [3, 2, 2, 2, 1]))
        # Senior-most beats four juniors, each middle person beats the last
        assert tracker.hierarchy_violations(counts) == 4 + 3
        assert tracker.hierarchy_violations() == 0

    def test_violates_hierarchy_after(self, small_roster, make_tracker):
        tracker = make_tracker(small_roster, days=3, rooms=2)
        senior, junior = small_roster.primary
        assert tracker.violates_hierarchy_after(senior)
        assert not tracker.violates_hierarchy_after(junior)
        assert not tracker.violates_hierarchy_after(small_roster.secondary[0])

        tracker.place_slot(1, 1, junior, small_roster.secondary[0])
        assert not tracker.violates_hierarchy_after(senior)
