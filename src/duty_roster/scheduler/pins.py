"""Validation and placement of pinned (person, day) requests."""

import logging
import random
from collections import Counter, defaultdict

from ..exceptions import PinValidationError
from ..models import Person, PinRequest
from .selection import eligible_candidates, pick_partner
from .tracker import ConstraintTracker

logger = logging.getLogger(__name__)


def validate_pins(
    pins: list[PinRequest],
    people: dict[str, Person],
    days: int,
    rooms: int,
) -> None:
    """Check pin requests and report every problem at once.

    Args:
        pins: Requested pins
        people: Known people by name
        days: Number of days
        rooms: Number of rooms per day

    Raises:
        PinValidationError: With the list of all problems found
    """
    errors: list[str] = []

    for pin in pins:
        if pin.name not in people:
            errors.append(f"Unknown person '{pin.name}' pinned on day {pin.day}")
        if not 1 <= pin.day <= days:
            errors.append(f"Day {pin.day} for '{pin.name}' is outside 1..{days}")

    for (name, day), count in Counter((p.name, p.day) for p in pins).items():
        if count > 1:
            errors.append(f"'{name}' is pinned {count} times on day {day}")

    per_day = Counter(day for _, day in {(p.name, p.day) for p in pins})
    for day in sorted(per_day):
        if per_day[day] > rooms:
            errors.append(f"Day {day} has {per_day[day]} pins but only {rooms} rooms")

    if errors:
        raise PinValidationError(errors)


class PinPlacer:
    """Places pinned people before the greedy fill and protects them."""

    def __init__(self, tracker: ConstraintTracker, rng: random.Random) -> None:
        self.tracker = tracker
        self.rng = rng

    def place(self, pins: list[PinRequest]) -> list[PinRequest]:
        """Place every pin in day order.

        Args:
            pins: Validated pin requests

        Returns:
            Pins that could not be placed
        """
        pinned_by_day: dict[int, set[str]] = defaultdict(set)
        for pin in pins:
            pinned_by_day[pin.day].add(pin.name)

        unsatisfied: list[PinRequest] = []
        # sorted() is stable, so input order holds within a day
        for pin in sorted(pins, key=lambda p: p.day):
            if not self._place_one(pin, pinned_by_day[pin.day]):
                logger.warning(f"Could not place pinned person '{pin.name}' on day {pin.day}")
                unsatisfied.append(pin)

        logger.info(f"Placed {len(pins) - len(unsatisfied)} of {len(pins)} pins")
        return unsatisfied

    def _place_one(self, pin: PinRequest, pinned_today: set[str]) -> bool:
        tracker = self.tracker
        person = tracker.people[pin.name]

        for room in tracker.open_rooms(pin.day):
            if tracker.has_adjacent_room_conflict(person.name, pin.day, room):
                continue

            partners = eligible_candidates(
                tracker, tracker.everyone, pin.day, room, exclude=pinned_today
            )
            partner = pick_partner(tracker, partners, self.rng)
            if partner is None:
                continue

            tracker.place_slot(pin.day, room, person, partner)
            tracker.protect(person.name, pin.day)
            logger.debug(
                f"Pinned {person.name} on day {pin.day} room {room} with {partner.name}"
            )
            return True

        return False
