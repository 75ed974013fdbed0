"""Local-search repair of a filled duty matrix.

Each round runs three phases, each with its own swap budget:

1. Secondary-target correction: bring every secondary person to exactly
   the target by moving duties to or from primary people.
2. Seniority-hierarchy correction: move duties from more senior primary
   people to less senior ones while that lowers the number of violated pairs.
3. Fairness smoothing: move duties from over-ceiling primary people to
   under-ceiling ones, then narrow gaps of two or more duties, never adding
   hierarchy violations.

All phases use the same swap primitive, ``_try_move``, which replaces one
occupant of a slot with another person and re-resolves positions. When the
adjacent-room rule blocks every direct swap, phases 1 and 2 fall back to a
two-step move through a third person (``_try_chain``).
"""

import logging
import random
from collections.abc import Callable

from ..models import Person
from .constants import (
    DEFAULT_BALANCE_ROUNDS,
    MAX_HIERARCHY_PASSES,
    MAX_SWAPS_PER_PHASE,
    PHASE_SECONDARY_TARGET,
    PHASE_SENIORITY,
    PHASE_SMOOTHING,
    REPAIR_PHASES,
)
from .models import Position, Slot
from .tracker import ConstraintTracker

logger = logging.getLogger(__name__)


class Balancer:
    """Repairs duty counts by swapping people between slots."""

    def __init__(
        self,
        tracker: ConstraintTracker,
        rng: random.Random,
        max_swaps: int = MAX_SWAPS_PER_PHASE,
    ) -> None:
        self.tracker = tracker
        self.rng = rng
        self.max_swaps = max_swaps
        self.swaps_by_phase: dict[str, int] = {phase: 0 for phase in REPAIR_PHASES}
        self._budget = 0

    def run(self, rounds: int = DEFAULT_BALANCE_ROUNDS) -> dict[str, int]:
        """Run repair rounds until one makes no swap.

        Args:
            rounds: Maximum number of rounds

        Returns:
            Total swaps per phase
        """
        for round_number in range(1, rounds + 1):
            made = (
                self._run_phase(PHASE_SECONDARY_TARGET, self.correct_secondary_targets)
                + self._run_phase(PHASE_SENIORITY, self.correct_hierarchy)
                + self._run_phase(PHASE_SMOOTHING, self.smooth)
            )
            logger.info(f"Balance round {round_number}: {made} swaps")
            if made == 0:
                break
        return dict(self.swaps_by_phase)

    def _run_phase(self, phase: str, step: Callable[[], None]) -> int:
        self._budget = self.max_swaps
        step()
        made = self.max_swaps - self._budget
        self.swaps_by_phase[phase] += made
        if made:
            logger.debug(f"Phase {phase}: {made} swaps")
        return made

    # Swap primitive

    def can_move(
        self,
        slot: Slot,
        outgoing: Person,
        incoming: Person,
        respect_cap: bool = True,
    ) -> bool:
        """Check if incoming may take outgoing's place in a slot.

        Args:
            slot: Slot holding outgoing
            outgoing: Person giving up the duty
            incoming: Person taking the duty
            respect_cap: Keep incoming within their ceiling or target
        """
        tracker = self.tracker
        if not slot.has(outgoing.name) or slot.has(incoming.name):
            return False
        if tracker.is_protected(outgoing.name, slot.day):
            return False
        if tracker.is_assigned_on(incoming.name, slot.day):
            return False
        if tracker.has_adjacent_room_conflict(incoming.name, slot.day, slot.room):
            return False
        if respect_cap and not tracker.is_under_cap(incoming):
            return False
        return True

    def can_chain(
        self,
        slot: Slot,
        outgoing: Person,
        other: Slot,
        middle: Person,
        incoming: Person,
        respect_cap: bool = True,
    ) -> bool:
        """Check a two-step move through a third person.

        Incoming takes middle's place in other, then middle takes outgoing's
        place in slot. Middle keeps the same number of duties.

        Args:
            slot: Slot holding outgoing
            outgoing: Person giving up the duty
            other: Slot holding middle
            middle: Person moving from other to slot
            incoming: Person taking the duty
            respect_cap: Keep incoming within their ceiling or target
        """
        tracker = self.tracker
        if other.key == slot.key or middle.name in (outgoing.name, incoming.name):
            return False
        if not slot.has(outgoing.name) or slot.has(middle.name):
            return False
        if not other.has(middle.name) or other.has(incoming.name):
            return False
        if tracker.is_protected(outgoing.name, slot.day):
            return False
        if tracker.is_protected(middle.name, other.day):
            return False

        if tracker.is_assigned_on(incoming.name, other.day):
            return False
        if tracker.has_adjacent_room_conflict(incoming.name, other.day, other.room):
            return False
        if respect_cap and not tracker.is_under_cap(incoming):
            return False

        # middle leaves other first, so other no longer counts against them
        if other.day != slot.day and tracker.is_assigned_on(middle.name, slot.day):
            return False
        for day in (slot.day - 1, slot.day + 1):
            if (day, slot.room) != other.key and tracker.was_in_room(middle.name, day, slot.room):
                return False
        return True

    def _try_move(
        self,
        outgoing: Person,
        incoming: Person,
        respect_cap: bool = True,
        max_violations: int | None = None,
        chain: bool = False,
    ) -> bool:
        """Hand one of outgoing's duties to incoming.

        Args:
            outgoing: Person giving up a duty
            incoming: Person taking it
            respect_cap: Keep incoming within their cap
            max_violations: Reject the move if hierarchy violations afterwards
                would exceed this number
            chain: When no direct move exists, route the duty through a
                third person (see can_chain)

        Returns:
            True if a swap was made
        """
        if self._budget <= 0:
            return False

        tracker = self.tracker
        if max_violations is not None:
            counts = tracker.counts()
            counts[outgoing.name] -= 1
            counts[incoming.name] += 1
            if tracker.hierarchy_violations(counts) > max_violations:
                return False

        for slot in tracker.matrix.slots_of(outgoing.name):
            if self.can_move(slot, outgoing, incoming, respect_cap):
                tracker.replace(slot, outgoing, incoming)
                self._budget -= 1
                logger.debug(
                    f"Day {slot.day} room {slot.room}: {incoming.name} replaces {outgoing.name}"
                )
                return True

        if chain:
            return self._try_chain(outgoing, incoming, respect_cap)
        return False

    def _try_chain(self, outgoing: Person, incoming: Person, respect_cap: bool) -> bool:
        tracker = self.tracker
        for slot in tracker.matrix.slots_of(outgoing.name):
            for other in tracker.matrix:
                for middle in other.occupants:
                    if not self.can_chain(slot, outgoing, other, middle, incoming, respect_cap):
                        continue
                    tracker.replace(other, middle, incoming)
                    tracker.replace(tracker.matrix.get(*slot.key), outgoing, middle)
                    self._budget -= 1
                    logger.debug(
                        f"Day {other.day} room {other.room}: {incoming.name} replaces "
                        f"{middle.name}, who replaces {outgoing.name} on day {slot.day} "
                        f"room {slot.room}"
                    )
                    return True
        return False

    # Phase 1

    def correct_secondary_targets(self) -> None:
        """Bring every secondary person to the exact duty target."""
        tracker = self.tracker
        target = tracker.config.secondary_duty_target

        for person in tracker.secondary:
            while tracker.duties(person.name) > target and self._budget > 0:
                if not self._shed_secondary_duty(person, target):
                    break

        for person in tracker.secondary:
            while tracker.duties(person.name) < target and self._budget > 0:
                if not self._take_secondary_duty(person, target):
                    break

    def _shed_secondary_duty(self, person: Person, target: int) -> bool:
        tracker = self.tracker
        receivers = sorted(
            (p for p in tracker.primary if tracker.is_under_cap(p)),
            key=lambda p: (tracker.duties(p.name), -p.rank),
        )
        receivers += [
            p for p in tracker.secondary if tracker.duties(p.name) < target
        ]
        return any(self._try_move(person, receiver) for receiver in receivers) or any(
            self._try_move(person, receiver, chain=True) for receiver in receivers
        )

    def _take_secondary_duty(self, person: Person, target: int) -> bool:
        """Move a duty from a primary or over-target occupant to a person below target."""
        tracker = self.tracker
        options: list[tuple[tuple, Slot, Person]] = []

        for slot in tracker.matrix:
            for position, occupant in (
                (Position.SECONDARY, slot.secondary),
                (Position.PRIMARY, slot.primary),
            ):
                if not self.can_move(slot, occupant, person):
                    continue
                if occupant.is_primary:
                    key = (
                        0,
                        position != Position.SECONDARY,
                        tracker.duties(occupant.name) <= tracker.cap_for(occupant),
                        occupant.rank,
                    )
                elif tracker.duties(occupant.name) > target:
                    key = (1, position != Position.SECONDARY, False, -occupant.rank)
                else:
                    continue
                options.append((key, slot, occupant))

        if self._budget <= 0:
            return False
        if not options:
            # No direct swap; route a duty through a third person instead
            donors = sorted(
                tracker.primary,
                key=lambda p: (tracker.duties(p.name) <= tracker.cap_for(p), p.rank),
            )
            donors += [p for p in tracker.secondary if tracker.duties(p.name) > target]
            return any(self._try_move(donor, person, chain=True) for donor in donors)

        best = min(key for key, _, _ in options)
        _, slot, occupant = self.rng.choice([option for option in options if option[0] == best])
        tracker.replace(slot, occupant, person)
        self._budget -= 1
        logger.debug(
            f"Day {slot.day} room {slot.room}: {person.name} replaces {occupant.name}"
        )
        return True

    # Phase 2

    def correct_hierarchy(self) -> None:
        """Move duties from senior to junior primary people.

        A move is kept only when it lowers the total number of violated
        (senior, junior) pairs; juniors may end above their ceiling.
        """
        tracker = self.tracker

        for _ in range(MAX_HIERARCHY_PASSES):
            if tracker.hierarchy_violations() == 0 or self._budget <= 0:
                return

            moved = False
            for i, senior in enumerate(tracker.primary):
                for junior in tracker.primary[i + 1 :]:
                    if tracker.duties(senior.name) <= tracker.duties(junior.name):
                        continue
                    current = tracker.hierarchy_violations()
                    if self._try_move(
                        senior,
                        junior,
                        respect_cap=False,
                        max_violations=current - 1,
                        chain=True,
                    ):
                        moved = True
            if not moved:
                return

    # Phase 3

    def smooth(self) -> None:
        """Even out primary duty counts without adding hierarchy violations."""
        tracker = self.tracker

        over = [p for p in tracker.primary if tracker.duties(p.name) > tracker.cap_for(p)]
        for giver in over:
            while tracker.duties(giver.name) > tracker.cap_for(giver) and self._budget > 0:
                receivers = sorted(
                    (p for p in tracker.primary if tracker.is_under_cap(p)),
                    key=lambda p: (tracker.duties(p.name), -p.rank),
                )
                current = tracker.hierarchy_violations()
                if not any(
                    self._try_move(giver, receiver, max_violations=current)
                    for receiver in receivers
                ):
                    break

        self._narrow_gaps()

    def _narrow_gaps(self) -> None:
        """Move duties between primary people at least two duties apart."""
        tracker = self.tracker

        while self._budget > 0:
            mean = sum(tracker.duties(p.name) for p in tracker.primary) / len(tracker.primary)
            givers = sorted(
                (p for p in tracker.primary if tracker.duties(p.name) > mean),
                key=lambda p: (-tracker.duties(p.name), p.rank),
            )
            receivers = sorted(
                (p for p in tracker.primary if tracker.duties(p.name) < mean),
                key=lambda p: (tracker.duties(p.name), -p.rank),
            )
            current = tracker.hierarchy_violations()
            moved = False
            for giver in givers:
                for receiver in receivers:
                    if tracker.duties(giver.name) - tracker.duties(receiver.name) < 2:
                        continue
                    if self._try_move(giver, receiver, max_violations=current):
                        moved = True
                        break
                if moved:
                    break
            if not moved:
                return
