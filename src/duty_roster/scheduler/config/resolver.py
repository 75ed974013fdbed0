"""Derivation of run parameters from population sizes and grid dimensions."""

import logging
from dataclasses import dataclass, field
from typing import Any

from ...constants import MAX_DAYS, MAX_ROOMS, MIN_DAYS, MIN_ROOMS
from ...exceptions import CapacityError, ConfigError
from ...models import Person
from ..constants import MIN_SECONDARY_DUTY_TARGET, POSITIONS_PER_SLOT

logger = logging.getLogger(__name__)


@dataclass
class SchedulerConfig:
    """Numeric parameters for one generation run.

    Attributes:
        days: Number of duty days
        rooms: Number of rooms per day
        total_positions: days * rooms * 2
        secondary_duty_target: Exact duty count for every secondary person
        total_secondary_duties: Secondary population size * target
        total_primary_duties: Positions left for the primary population
        min_secondary_per_day: Soft per-day minimum of secondary assignments
        primary_ceilings: Per-person duty ceiling, non-decreasing by rank
    """

    days: int
    rooms: int
    total_positions: int
    secondary_duty_target: int
    total_secondary_duties: int
    total_primary_duties: int
    min_secondary_per_day: int
    primary_ceilings: dict[str, int] = field(default_factory=dict)

    def ceiling_for(self, name: str) -> int:
        return self.primary_ceilings.get(name, 0)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "days": self.days,
            "rooms": self.rooms,
            "total_positions": self.total_positions,
            "secondary_duty_target": self.secondary_duty_target,
            "total_secondary_duties": self.total_secondary_duties,
            "total_primary_duties": self.total_primary_duties,
            "min_secondary_per_day": self.min_secondary_per_day,
            "primary_ceilings": dict(self.primary_ceilings),
        }


def validate_grid(days: int, rooms: int) -> None:
    """Check grid dimensions against supported bounds.

    Raises:
        ConfigError: If days or rooms are out of bounds
    """
    if not MIN_DAYS <= days <= MAX_DAYS:
        raise ConfigError(f"Number of days must be between {MIN_DAYS} and {MAX_DAYS}, got {days}")
    if not MIN_ROOMS <= rooms <= MAX_ROOMS:
        raise ConfigError(
            f"Number of rooms must be between {MIN_ROOMS} and {MAX_ROOMS}, got {rooms}"
        )


def validate_populations(primary: list[Person], secondary: list[Person]) -> None:
    """Check that both populations are present and names are unique.

    Raises:
        ConfigError: On an empty population or a repeated name
    """
    if not primary:
        raise ConfigError("At least one primary (faculty) member is required")
    if not secondary:
        raise ConfigError("At least one secondary (staff) member is required")

    seen: set[str] = set()
    duplicates: list[str] = []
    for person in [*primary, *secondary]:
        if person.name in seen:
            duplicates.append(person.name)
        seen.add(person.name)
    if duplicates:
        raise ConfigError(f"Duplicate names in roster: {', '.join(sorted(set(duplicates)))}")


def compute_primary_ceilings(primary: list[Person], total_primary_duties: int) -> dict[str, int]:
    """Split primary duties across people by seniority.

    Everybody gets the same base share; the remainder goes one by one to the
    least senior people. The result never gives a more senior person a higher
    ceiling than a less senior one and sums to total_primary_duties.

    Args:
        primary: Primary population in seniority order
        total_primary_duties: Duties to distribute (>= 0)

    Returns:
        Mapping of name to ceiling
    """
    ordered = sorted(primary, key=lambda p: p.rank)
    base, extra = divmod(total_primary_duties, len(ordered))
    ceilings = {p.name: base for p in ordered}
    # Most junior first
    for i in range(extra):
        ceilings[ordered[-1 - i].name] += 1
    return ceilings


def resolve_config(
    primary: list[Person],
    secondary: list[Person],
    days: int,
    rooms: int,
) -> SchedulerConfig:
    """Derive the run configuration.

    Args:
        primary: Primary population in seniority order
        secondary: Secondary population in seniority order
        days: Number of days
        rooms: Number of rooms

    Returns:
        SchedulerConfig for the run

    Raises:
        ConfigError: Invalid grid or populations
        CapacityError: Secondary duties exceed grid positions
    """
    validate_grid(days, rooms)
    validate_populations(primary, secondary)

    total_positions = days * rooms * POSITIONS_PER_SLOT
    secondary_duty_target = max(MIN_SECONDARY_DUTY_TARGET, days - 1)
    total_secondary_duties = len(secondary) * secondary_duty_target
    total_primary_duties = total_positions - total_secondary_duties

    if total_primary_duties < 0:
        raise CapacityError(total_positions, total_secondary_duties)

    ceilings = compute_primary_ceilings(primary, total_primary_duties)

    if len(primary) + len(secondary) < rooms * POSITIONS_PER_SLOT:
        logger.warning(
            f"Only {len(primary) + len(secondary)} people for {rooms * POSITIONS_PER_SLOT} "
            "positions per day; some rooms will stay unfilled"
        )
    if ceilings and max(ceilings.values()) > days:
        logger.warning(
            f"Primary ceiling {max(ceilings.values())} exceeds {days} days; "
            "primary duties cannot all be placed within ceilings"
        )

    config = SchedulerConfig(
        days=days,
        rooms=rooms,
        total_positions=total_positions,
        secondary_duty_target=secondary_duty_target,
        total_secondary_duties=total_secondary_duties,
        total_primary_duties=total_primary_duties,
        min_secondary_per_day=total_secondary_duties // days,
        primary_ceilings=ceilings,
    )
    logger.info(
        f"Resolved config: {days} days x {rooms} rooms, secondary target "
        f"{secondary_duty_target}, {total_primary_duties} primary duties"
    )
    return config
