"""Greedy day-by-day room filling."""

import logging
import math
import random

from ..models import Person
from .constants import POSITIONS_PER_SLOT
from .models import Position, Slot
from .selection import eligible_candidates, is_eligible, pick_candidate, pick_over_cap
from .tracker import ConstraintTracker

logger = logging.getLogger(__name__)


class GreedyFiller:
    """Fills every open room of every day with a pair of people.

    Per day:
    1. Compute the day's secondary quota
    2. For each open room pick a primary-slot and a secondary-slot candidate
    3. Top up the day's secondary count by replacing primary occupants
    """

    def __init__(self, tracker: ConstraintTracker, rng: random.Random) -> None:
        self.tracker = tracker
        self.rng = rng
        self.quotas: dict[int, int] = {}

    def fill(self) -> list[tuple[int, int]]:
        """Fill all days.

        Returns:
            (day, room) pairs left unfilled
        """
        unfilled: list[tuple[int, int]] = []
        for day in range(1, self.tracker.config.days + 1):
            unfilled.extend(self.fill_day(day))

        logger.info(
            f"Greedy fill placed {len(self.tracker.matrix)} of "
            f"{self.tracker.matrix.expected_slots} slots"
        )
        return unfilled

    def fill_day(self, day: int) -> list[tuple[int, int]]:
        """Fill the open rooms of one day and apply the secondary top-up."""
        tracker = self.tracker
        quota = self.day_quota(day)
        self.quotas[day] = quota

        unfilled: list[tuple[int, int]] = []
        open_rooms = tracker.open_rooms(day)
        for i, room in enumerate(open_rooms):
            positions_left = (len(open_rooms) - i) * POSITIONS_PER_SLOT
            shortfall = quota - tracker.secondary_count_on(day)

            first = self._pick_first(day, room, forced=shortfall >= positions_left)
            if first is None:
                logger.warning(f"No candidate for day {day} room {room}; leaving it unfilled")
                unfilled.append((day, room))
                continue

            shortfall -= 1 if first.is_secondary else 0
            second = self._pick_second(day, room, first, forced=shortfall > 0)
            if second is None:
                logger.warning(f"No partner for day {day} room {room}; leaving it unfilled")
                unfilled.append((day, room))
                continue

            tracker.place_slot(day, room, first, second)

        self._top_up(day, quota)
        return unfilled

    def day_quota(self, day: int) -> int:
        """Secondary assignments the day should reach.

        The larger of the configured per-day minimum and the remaining demand
        spread over the remaining days, clipped to what the day can hold.
        """
        tracker = self.tracker
        config = tracker.config
        remaining_days = config.days - day + 1
        already_today = tracker.secondary_count_on(day)
        demand = tracker.remaining_secondary_demand() + already_today

        quota = max(config.min_secondary_per_day, math.ceil(demand / remaining_days))

        available = sum(
            1
            for p in tracker.secondary
            if not tracker.is_assigned_on(p.name, day) and tracker.is_under_cap(p)
        )
        capacity = min(config.rooms * POSITIONS_PER_SLOT, already_today + available)
        return min(quota, capacity)

    def _pick_first(self, day: int, room: int, forced: bool) -> Person | None:
        tracker = self.tracker
        pools = [tracker.secondary, tracker.primary] if forced else [tracker.primary, tracker.secondary]
        return self._pick(day, room, pools, exclude=set())

    def _pick_second(self, day: int, room: int, first: Person, forced: bool) -> Person | None:
        tracker = self.tracker
        pools = [tracker.secondary, tracker.everyone] if forced else [tracker.everyone]
        return self._pick(day, room, pools, exclude={first.name})

    def _pick(
        self,
        day: int,
        room: int,
        pools: list[list[Person]],
        exclude: set[str],
    ) -> Person | None:
        """Pick from the first pool that has an eligible candidate.

        When no pool has anybody below their cap, the cap is relaxed. The
        adjacent-day room rule is never relaxed.
        """
        for pool in pools:
            candidates = eligible_candidates(self.tracker, pool, day, room, exclude)
            if candidates:
                return pick_candidate(self.tracker, candidates, self.rng)

        relaxed = eligible_candidates(
            self.tracker, self.tracker.everyone, day, room, exclude, respect_cap=False
        )
        chosen = pick_over_cap(self.tracker, relaxed, self.rng)
        if chosen is not None:
            logger.debug(f"Relaxed cap for {chosen.name} on day {day} room {room}")
        return chosen

    def _top_up(self, day: int, quota: int) -> int:
        """Swap primary occupants for secondary people until the quota is met.

        Returns:
            Number of swaps made
        """
        tracker = self.tracker
        swaps = 0

        while tracker.secondary_count_on(day) < quota:
            best: tuple[tuple, Slot, Person, Person] | None = None
            for slot in tracker.matrix.slots_on(day):
                # secondary-typed position first
                for position, occupant in (
                    (Position.SECONDARY, slot.secondary),
                    (Position.PRIMARY, slot.primary),
                ):
                    if not occupant.is_primary or tracker.is_protected(occupant.name, day):
                        continue
                    incoming = pick_candidate(
                        tracker,
                        [
                            p
                            for p in tracker.secondary
                            if is_eligible(tracker, p, day, slot.room)
                        ],
                        self.rng,
                    )
                    if incoming is None:
                        continue
                    key = (
                        tracker.duties(incoming.name),
                        position != Position.SECONDARY,
                        -tracker.over_cap(occupant),
                        occupant.rank,
                    )
                    if best is None or key < best[0]:
                        best = (key, slot, occupant, incoming)

            if best is None:
                break
            _, slot, occupant, incoming = best
            tracker.replace(slot, occupant, incoming)
            swaps += 1
            logger.debug(
                f"Day {day} top-up: {incoming.name} replaces {occupant.name} in room {slot.room}"
            )

        if tracker.secondary_count_on(day) < quota:
            logger.debug(
                f"Day {day} secondary count {tracker.secondary_count_on(day)} below quota {quota}"
            )
        return swaps
