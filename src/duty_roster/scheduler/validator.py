"""Read-only checks of a generated duty schedule."""

import logging
from collections import Counter, defaultdict

from ..models import Person, PinRequest
from .models import Finding, FindingKind, Slot

logger = logging.getLogger(__name__)


class ScheduleValidator:
    """Collects findings for a list of schedule entries.

    The validator never mutates what it checks. Primary ceilings are
    guidance for the generator and are not reported when exceeded.
    """

    def __init__(
        self,
        primary: list[Person],
        secondary: list[Person],
        days: int,
        rooms: int,
        secondary_duty_target: int,
        pins: list[PinRequest] | None = None,
    ) -> None:
        self.primary = sorted(primary, key=lambda p: p.rank)
        self.secondary = sorted(secondary, key=lambda p: p.rank)
        self.days = days
        self.rooms = rooms
        self.secondary_duty_target = secondary_duty_target
        self.pins = pins or []

    def validate(
        self,
        entries: list[Slot],
        reported_counts: dict[str, int] | None = None,
    ) -> list[Finding]:
        """Check entries against every schedule rule.

        Args:
            entries: Filled slots
            reported_counts: Duty tallies to cross-check against the entries

        Returns:
            List of findings, empty for a clean schedule
        """
        findings: list[Finding] = []
        counts = Counter(person.name for slot in entries for person in slot.occupants)

        findings.extend(self._check_grid(entries))
        findings.extend(self._check_days(entries))
        findings.extend(self._check_rooms(entries))
        if reported_counts is not None:
            findings.extend(self._check_reported_counts(counts, reported_counts))
        findings.extend(self._check_secondary_targets(counts))
        findings.extend(self._check_hierarchy(counts))
        findings.extend(self._check_pins(entries))

        if findings:
            logger.info(f"Validation found {len(findings)} problems")
        return findings

    def _check_grid(self, entries: list[Slot]) -> list[Finding]:
        findings: list[Finding] = []
        expected = self.days * self.rooms
        if len(entries) != expected:
            findings.append(
                Finding(
                    FindingKind.SLOT_COUNT_MISMATCH,
                    f"Schedule has {len(entries)} slots, expected {expected}",
                )
            )

        filled = {slot.key for slot in entries}
        for day in range(1, self.days + 1):
            for room in range(1, self.rooms + 1):
                if (day, room) not in filled:
                    findings.append(
                        Finding(
                            FindingKind.UNFILLED_SLOT,
                            f"Day {day} room {room} is not filled",
                            day=day,
                            room=room,
                        )
                    )

        for slot in entries:
            if slot.primary.name == slot.secondary.name:
                findings.append(
                    Finding(
                        FindingKind.SAME_PERSON_IN_SLOT,
                        f"{slot.primary.name} holds both positions on day {slot.day} "
                        f"room {slot.room}",
                        day=slot.day,
                        room=slot.room,
                        person=slot.primary.name,
                    )
                )
        return findings

    def _check_days(self, entries: list[Slot]) -> list[Finding]:
        findings: list[Finding] = []
        per_day: dict[int, Counter] = defaultdict(Counter)
        for slot in entries:
            per_day[slot.day].update({p.name for p in slot.occupants})

        for day in sorted(per_day):
            for name, count in sorted(per_day[day].items()):
                if count > 1:
                    findings.append(
                        Finding(
                            FindingKind.DUPLICATE_DAY_ASSIGNMENT,
                            f"{name} is assigned {count} times on day {day}",
                            day=day,
                            person=name,
                        )
                    )
        return findings

    def _check_rooms(self, entries: list[Slot]) -> list[Finding]:
        findings: list[Finding] = []
        rooms_by_day: dict[str, dict[int, set[int]]] = defaultdict(lambda: defaultdict(set))
        for slot in entries:
            for person in slot.occupants:
                rooms_by_day[person.name][slot.day].add(slot.room)

        for name in sorted(rooms_by_day):
            days = rooms_by_day[name]
            for day in sorted(days):
                repeated = days[day] & days.get(day + 1, set())
                for room in sorted(repeated):
                    findings.append(
                        Finding(
                            FindingKind.CONSECUTIVE_ROOM_REPEAT,
                            f"{name} is in room {room} on days {day} and {day + 1}",
                            day=day + 1,
                            room=room,
                            person=name,
                        )
                    )
        return findings

    def _check_reported_counts(
        self,
        counts: Counter,
        reported: dict[str, int],
    ) -> list[Finding]:
        findings: list[Finding] = []
        for person in [*self.primary, *self.secondary]:
            actual = counts.get(person.name, 0)
            claimed = reported.get(person.name, 0)
            if actual != claimed:
                findings.append(
                    Finding(
                        FindingKind.DUTY_COUNT_MISMATCH,
                        f"{person.name} is reported with {claimed} duties but holds {actual}",
                        person=person.name,
                    )
                )
        return findings

    def _check_secondary_targets(self, counts: Counter) -> list[Finding]:
        findings: list[Finding] = []
        target = self.secondary_duty_target
        for person in self.secondary:
            actual = counts.get(person.name, 0)
            if actual != target:
                findings.append(
                    Finding(
                        FindingKind.SECONDARY_TARGET_DEVIATION,
                        f"{person.name} has {actual} duties, target is {target}",
                        person=person.name,
                    )
                )
        return findings

    def _check_hierarchy(self, counts: Counter) -> list[Finding]:
        findings: list[Finding] = []
        for i, senior in enumerate(self.primary):
            for junior in self.primary[i + 1 :]:
                senior_count = counts.get(senior.name, 0)
                junior_count = counts.get(junior.name, 0)
                if senior_count > junior_count:
                    findings.append(
                        Finding(
                            FindingKind.SENIORITY_VIOLATION,
                            f"{senior.name} ({senior_count}) has more duties than less "
                            f"senior {junior.name} ({junior_count})",
                            person=senior.name,
                        )
                    )
        return findings

    def _check_pins(self, entries: list[Slot]) -> list[Finding]:
        findings: list[Finding] = []
        for pin in self.pins:
            held = sum(1 for slot in entries if slot.day == pin.day and slot.has(pin.name))
            if held != 1:
                findings.append(
                    Finding(
                        FindingKind.PIN_NOT_HONORED,
                        f"{pin.name} is pinned on day {pin.day} but holds {held} slots that day",
                        day=pin.day,
                        person=pin.name,
                    )
                )
        return findings
