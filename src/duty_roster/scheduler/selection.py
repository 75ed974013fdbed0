"""Candidate eligibility and ranking shared by the pipeline stages."""

import random
from collections.abc import Callable, Iterable

from ..models import Person
from .tracker import ConstraintTracker


def is_eligible(
    tracker: ConstraintTracker,
    person: Person,
    day: int,
    room: int,
    exclude: Iterable[str] = (),
    respect_cap: bool = True,
) -> bool:
    """Check if a person may take a position in a room on a day.

    Args:
        tracker: Run state
        person: Candidate
        day: Day number
        room: Room number
        exclude: Names already picked for this room or otherwise barred
        respect_cap: Require the person to be below their cap

    Returns:
        True if the candidate passes every check
    """
    if person.name in exclude:
        return False
    if tracker.is_assigned_on(person.name, day):
        return False
    if tracker.has_adjacent_room_conflict(person.name, day, room):
        return False
    if respect_cap and not tracker.is_under_cap(person):
        return False
    return True


def eligible_candidates(
    tracker: ConstraintTracker,
    pool: Iterable[Person],
    day: int,
    room: int,
    exclude: Iterable[str] = (),
    respect_cap: bool = True,
) -> list[Person]:
    """Filter a pool down to eligible candidates, keeping pool order."""
    excluded = set(exclude)
    return [
        p for p in pool if is_eligible(tracker, p, day, room, excluded, respect_cap)
    ]


def _pick_among(
    candidates: list[Person],
    key: Callable[[Person], tuple],
    rng: random.Random,
) -> Person | None:
    """Pick uniformly at random among the candidates sharing the best key."""
    if not candidates:
        return None
    best = min(key(p) for p in candidates)
    tied = [p for p in candidates if key(p) == best]
    return tied[0] if len(tied) == 1 else rng.choice(tied)


def pick_candidate(
    tracker: ConstraintTracker,
    candidates: list[Person],
    rng: random.Random,
) -> Person | None:
    """Choose the best candidate.

    Priority:
    1. Fewest current duties
    2. Primary people whose extra duty keeps the seniority hierarchy intact
    3. Less senior (higher rank)
    4. Random among exact ties
    """
    return _pick_among(
        candidates,
        lambda p: (
            tracker.duties(p.name),
            tracker.violates_hierarchy_after(p),
            -p.rank,
        ),
        rng,
    )


def pick_over_cap(
    tracker: ConstraintTracker,
    candidates: list[Person],
    rng: random.Random,
) -> Person | None:
    """Choose a candidate when nobody is below their cap.

    Primary people come first, then whoever ends least over their cap.
    """
    return _pick_among(
        candidates,
        lambda p: (
            not p.is_primary,
            tracker.over_cap(p),
            tracker.duties(p.name),
            tracker.violates_hierarchy_after(p),
            -p.rank,
        ),
        rng,
    )


def pick_partner(
    tracker: ConstraintTracker,
    candidates: list[Person],
    rng: random.Random,
) -> Person | None:
    """Choose a partner for a pinned person.

    Priority: fewest duties, then the population with the larger remaining
    demand, then less senior, then random.
    """
    primary_demand = tracker.remaining_primary_demand()
    secondary_demand = tracker.remaining_secondary_demand()

    def needs_coverage(person: Person) -> bool:
        if person.is_primary:
            return primary_demand >= secondary_demand
        return secondary_demand > primary_demand

    return _pick_among(
        candidates,
        lambda p: (tracker.duties(p.name), not needs_coverage(p), -p.rank),
        rng,
    )
