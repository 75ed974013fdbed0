"""Data models for the duty scheduling engine."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from ..models import Person, PinRequest


class Position(str, Enum):
    """Position inside a slot."""

    PRIMARY = "primary"
    SECONDARY = "secondary"


class FindingKind(str, Enum):
    """Kinds of problems reported by the validator."""

    UNFILLED_SLOT = "unfilled_slot"
    SLOT_COUNT_MISMATCH = "slot_count_mismatch"
    SAME_PERSON_IN_SLOT = "same_person_in_slot"
    DUPLICATE_DAY_ASSIGNMENT = "duplicate_day_assignment"
    CONSECUTIVE_ROOM_REPEAT = "consecutive_room_repeat"
    DUTY_COUNT_MISMATCH = "duty_count_mismatch"
    SECONDARY_TARGET_DEVIATION = "secondary_target_deviation"
    SENIORITY_VIOLATION = "seniority_violation"
    PIN_NOT_HONORED = "pin_not_honored"


@dataclass
class Slot:
    """One room on one day, holding two people."""

    day: int
    room: int
    primary: Person
    secondary: Person

    @property
    def key(self) -> tuple[int, int]:
        return (self.day, self.room)

    @property
    def occupants(self) -> tuple[Person, Person]:
        return (self.primary, self.secondary)

    def has(self, name: str) -> bool:
        """Check if a person occupies either position."""
        return self.primary.name == name or self.secondary.name == name

    def position_of(self, name: str) -> Position | None:
        if self.primary.name == name:
            return Position.PRIMARY
        if self.secondary.name == name:
            return Position.SECONDARY
        return None

    def partner_of(self, name: str) -> Person | None:
        """Get the other occupant, or None if the person is not in the slot."""
        if self.primary.name == name:
            return self.secondary
        if self.secondary.name == name:
            return self.primary
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the flat output record."""
        return {
            "day": self.day,
            "room": self.room,
            "primary": self.primary.name,
            "secondary": self.secondary.name,
        }


class AssignmentMatrix:
    """All filled slots of a days x rooms grid."""

    def __init__(self, days: int, rooms: int) -> None:
        self.days = days
        self.rooms = rooms
        self._slots: dict[tuple[int, int], Slot] = {}

    def add(self, slot: Slot) -> None:
        if slot.key in self._slots:
            raise ValueError(f"Slot day {slot.day} room {slot.room} is already filled")
        self._slots[slot.key] = slot

    def update(self, slot: Slot) -> None:
        """Replace the slot stored at the same (day, room)."""
        if slot.key not in self._slots:
            raise ValueError(f"Slot day {slot.day} room {slot.room} is not filled")
        self._slots[slot.key] = slot

    def get(self, day: int, room: int) -> Slot | None:
        return self._slots.get((day, room))

    def is_filled(self, day: int, room: int) -> bool:
        return (day, room) in self._slots

    def slots_on(self, day: int) -> list[Slot]:
        """Get slots of a day ordered by room."""
        return [self._slots[key] for key in sorted(self._slots) if key[0] == day]

    def slots_of(self, name: str) -> list[Slot]:
        """Get slots a person occupies, ordered by day."""
        return [slot for slot in self if slot.has(name)]

    def missing(self) -> list[tuple[int, int]]:
        """Get (day, room) pairs that have no slot."""
        return [
            (day, room)
            for day in range(1, self.days + 1)
            for room in range(1, self.rooms + 1)
            if (day, room) not in self._slots
        ]

    @property
    def expected_slots(self) -> int:
        return self.days * self.rooms

    @property
    def is_complete(self) -> bool:
        return len(self._slots) == self.expected_slots

    def __iter__(self) -> Iterator[Slot]:
        for key in sorted(self._slots):
            yield self._slots[key]

    def __len__(self) -> int:
        return len(self._slots)

    def to_records(self) -> list[dict[str, Any]]:
        """Flat list of {day, room, primary, secondary} records."""
        return [slot.to_dict() for slot in self]


@dataclass
class Finding:
    """A problem found in a generated schedule."""

    kind: FindingKind
    message: str
    day: int | None = None
    room: int | None = None
    person: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "day": self.day,
            "room": self.room,
            "person": self.person,
        }


@dataclass
class DutyCount:
    """Final duty tally of one person."""

    name: str
    count: int

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "count": self.count}


@dataclass
class ScheduleStatistics:
    """Statistics about the generated schedule."""

    primary_avg: float = 0.0
    secondary_avg: float = 0.0
    primary_min: int = 0
    primary_max: int = 0
    secondary_min: int = 0
    secondary_max: int = 0
    secondary_by_day: dict[int, int] = field(default_factory=dict)
    primary_ceilings: dict[str, int] = field(default_factory=dict)
    swaps_by_phase: dict[str, int] = field(default_factory=dict)
    findings_count: int = 0

    @classmethod
    def from_counts(
        cls,
        primary: list[DutyCount],
        secondary: list[DutyCount],
    ) -> "ScheduleStatistics":
        """Compute average/min/max for both populations."""
        stats = cls()
        if primary:
            values = [d.count for d in primary]
            stats.primary_avg = round(sum(values) / len(values), 2)
            stats.primary_min = min(values)
            stats.primary_max = max(values)
        if secondary:
            values = [d.count for d in secondary]
            stats.secondary_avg = round(sum(values) / len(values), 2)
            stats.secondary_min = min(values)
            stats.secondary_max = max(values)
        return stats

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "primary_avg": self.primary_avg,
            "secondary_avg": self.secondary_avg,
            "primary_min": self.primary_min,
            "primary_max": self.primary_max,
            "secondary_min": self.secondary_min,
            "secondary_max": self.secondary_max,
            "secondary_by_day": {str(day): n for day, n in self.secondary_by_day.items()},
            "primary_ceilings": self.primary_ceilings,
            "swaps_by_phase": self.swaps_by_phase,
            "findings_count": self.findings_count,
        }


def rank_duties(people: list[Person], counts: dict[str, int]) -> list[DutyCount]:
    """Build duty tallies sorted by descending count.

    People with equal counts keep seniority order.
    """
    tallies = [DutyCount(name=p.name, count=counts.get(p.name, 0)) for p in people]
    return sorted(tallies, key=lambda d: -d.count)


@dataclass
class ScheduleResult:
    """Result of one generation run."""

    days: int
    rooms: int
    entries: list[Slot] = field(default_factory=list)
    primary_duties: list[DutyCount] = field(default_factory=list)
    secondary_duties: list[DutyCount] = field(default_factory=list)
    findings: list[Finding] = field(default_factory=list)
    statistics: ScheduleStatistics = field(default_factory=ScheduleStatistics)
    config: dict[str, Any] = field(default_factory=dict)
    pins: list[PinRequest] = field(default_factory=list)
    unsatisfied_pins: list[PinRequest] = field(default_factory=list)
    seed: int | None = None
    generation_date: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def is_valid(self) -> bool:
        """True when the validator found no problems."""
        return not self.findings

    @property
    def total_slots(self) -> int:
        return len(self.entries)

    def duty_count(self, name: str) -> int:
        """Get the final duty count of a person (0 if unknown)."""
        for tally in (*self.primary_duties, *self.secondary_duties):
            if tally.name == name:
                return tally.count
        return 0

    def entries_on(self, day: int) -> list[Slot]:
        """Get the entries of a day ordered by room."""
        return sorted((e for e in self.entries if e.day == day), key=lambda e: e.room)

    def findings_of(self, kind: FindingKind) -> list[Finding]:
        return [f for f in self.findings if f.kind == kind]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "generation_date": self.generation_date,
            "days": self.days,
            "rooms": self.rooms,
            "seed": self.seed,
            "config": self.config,
            "entries": [e.to_dict() for e in self.entries],
            "primary_duties": [d.to_dict() for d in self.primary_duties],
            "secondary_duties": [d.to_dict() for d in self.secondary_duties],
            "pins": [p.to_dict() for p in self.pins],
            "unsatisfied_pins": [p.to_dict() for p in self.unsatisfied_pins],
            "findings": [f.to_dict() for f in self.findings],
            "statistics": self.statistics.to_dict(),
        }
