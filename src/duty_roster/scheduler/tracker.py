"""Constraint tracking for duty roster generation."""

from collections import defaultdict

from ..models import Person
from .config import SchedulerConfig
from .models import AssignmentMatrix, Slot
from .positions import resolve_positions


class ConstraintTracker:
    """Tracks the state of one generation run.

    This class owns everything the pipeline stages read and mutate:
    - matrix: Filled slots of the days x rooms grid
    - duty_counts: Running duty total per person
    - history: Room a person holds on each day, per person
    - day_people: Names assigned on each day
    - day_rooms: Occupied rooms on each day
    - _protected: (name, day) pairs that no repair step may touch

    Query methods never mutate state.
    """

    def __init__(
        self,
        config: SchedulerConfig,
        primary: list[Person],
        secondary: list[Person],
    ) -> None:
        self.config = config
        self.primary = sorted(primary, key=lambda p: p.rank)
        self.secondary = sorted(secondary, key=lambda p: p.rank)
        self.people: dict[str, Person] = {p.name: p for p in [*self.primary, *self.secondary]}

        self.matrix = AssignmentMatrix(config.days, config.rooms)
        # name -> duty count
        self.duty_counts: dict[str, int] = defaultdict(int)
        # name -> {day: room}
        self.history: dict[str, dict[int, int]] = defaultdict(dict)
        # day -> set of names
        self.day_people: dict[int, set[str]] = defaultdict(set)
        # day -> set of rooms
        self.day_rooms: dict[int, set[int]] = defaultdict(set)
        self._protected: set[tuple[str, int]] = set()

    @property
    def everyone(self) -> list[Person]:
        """All people, primary population first."""
        return [*self.primary, *self.secondary]

    # Mutations

    def assign(self, person: Person, day: int, room: int) -> None:
        """Record that a person holds a room on a day."""
        if person.name in self.day_people[day]:
            raise ValueError(f"{person.name} is already assigned on day {day}")
        self.duty_counts[person.name] += 1
        self.history[person.name][day] = room
        self.day_people[day].add(person.name)

    def unassign(self, person: Person, day: int, room: int) -> None:
        """Remove a person's record for a day."""
        if self.history[person.name].get(day) != room:
            raise ValueError(f"{person.name} is not in room {room} on day {day}")
        self.duty_counts[person.name] -= 1
        del self.history[person.name][day]
        self.day_people[day].discard(person.name)

    def place_slot(self, day: int, room: int, a: Person, b: Person) -> Slot:
        """Fill an open room with a pair.

        Returns:
            The new slot with positions resolved
        """
        if room in self.day_rooms[day]:
            raise ValueError(f"Room {room} is already occupied on day {day}")
        primary, secondary = resolve_positions(a, b)
        slot = Slot(day=day, room=room, primary=primary, secondary=secondary)

        self.assign(primary, day, room)
        self.assign(secondary, day, room)
        self.matrix.add(slot)
        self.day_rooms[day].add(room)
        return slot

    def replace(self, slot: Slot, outgoing: Person, incoming: Person) -> Slot:
        """Swap one occupant of a slot for another person.

        Returns:
            The updated slot with positions re-resolved
        """
        partner = slot.partner_of(outgoing.name)
        if partner is None:
            raise ValueError(f"{outgoing.name} is not in room {slot.room} on day {slot.day}")

        self.unassign(outgoing, slot.day, slot.room)
        self.assign(incoming, slot.day, slot.room)

        primary, secondary = resolve_positions(partner, incoming)
        updated = Slot(day=slot.day, room=slot.room, primary=primary, secondary=secondary)
        self.matrix.update(updated)
        return updated

    def protect(self, name: str, day: int) -> None:
        self._protected.add((name, day))

    # Queries

    def is_protected(self, name: str, day: int) -> bool:
        return (name, day) in self._protected

    @property
    def protected(self) -> set[tuple[str, int]]:
        return set(self._protected)

    def is_assigned_on(self, name: str, day: int) -> bool:
        return name in self.day_people.get(day, ())

    def room_of(self, name: str, day: int) -> int | None:
        """Get the room a person holds on a day."""
        return self.history.get(name, {}).get(day)

    def was_in_room(self, name: str, day: int, room: int) -> bool:
        return self.room_of(name, day) == room

    def has_adjacent_room_conflict(self, name: str, day: int, room: int) -> bool:
        """Check if the person holds the same room on the day before or after."""
        return self.was_in_room(name, day - 1, room) or self.was_in_room(name, day + 1, room)

    def is_room_open(self, day: int, room: int) -> bool:
        return room not in self.day_rooms.get(day, ())

    def open_rooms(self, day: int) -> list[int]:
        """Get unoccupied rooms of a day in ascending order."""
        taken = self.day_rooms.get(day, set())
        return [room for room in range(1, self.config.rooms + 1) if room not in taken]

    def duties(self, name: str) -> int:
        return self.duty_counts.get(name, 0)

    def cap_for(self, person: Person) -> int:
        """Ceiling for primary people, exact target for secondary people."""
        if person.is_primary:
            return self.config.ceiling_for(person.name)
        return self.config.secondary_duty_target

    def is_under_cap(self, person: Person) -> bool:
        return self.duties(person.name) < self.cap_for(person)

    def over_cap(self, person: Person) -> int:
        """How far the next duty would take a person over their cap."""
        return self.duties(person.name) + 1 - self.cap_for(person)

    def secondary_count_on(self, day: int) -> int:
        """Number of secondary-population people assigned on a day."""
        return sum(
            1 for name in self.day_people.get(day, ()) if self.people[name].is_secondary
        )

    def remaining_secondary_demand(self) -> int:
        """Duties still needed to bring every secondary person to target."""
        target = self.config.secondary_duty_target
        return sum(max(0, target - self.duties(p.name)) for p in self.secondary)

    def remaining_primary_demand(self) -> int:
        """Duties still available under primary ceilings."""
        return sum(max(0, self.cap_for(p) - self.duties(p.name)) for p in self.primary)

    def counts(self) -> dict[str, int]:
        """Snapshot of duty counts for everybody."""
        return {p.name: self.duties(p.name) for p in self.everyone}

    def hierarchy_violations(self, counts: dict[str, int] | None = None) -> int:
        """Count (senior, junior) primary pairs where the senior has more duties.

        Args:
            counts: Hypothetical counts to evaluate instead of the current ones
        """
        if counts is None:
            counts = self.duty_counts
        values = [counts.get(p.name, 0) for p in self.primary]
        return sum(
            1
            for i, senior in enumerate(values)
            for junior in values[i + 1 :]
            if senior > junior
        )

    def violates_hierarchy_after(self, person: Person) -> bool:
        """Check if one more duty for a primary person breaks the hierarchy."""
        if not person.is_primary:
            return False
        after = self.duties(person.name) + 1
        return any(
            after > self.duties(junior.name)
            for junior in self.primary
            if junior.rank > person.rank
        )
