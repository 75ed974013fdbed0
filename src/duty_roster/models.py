"""Data models for roster input."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Self


class Population(str, Enum):
    """Population a person belongs to."""

    PRIMARY = "primary"
    SECONDARY = "secondary"


@dataclass(frozen=True)
class Person:
    """A person available for duty.

    Attributes:
        name: Unique name across both populations
        population: primary (faculty) or secondary (staff)
        rank: Seniority inside the population, 0 is the most senior
    """

    name: str
    population: Population
    rank: int

    @property
    def is_primary(self) -> bool:
        return self.population == Population.PRIMARY

    @property
    def is_secondary(self) -> bool:
        return self.population == Population.SECONDARY

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "population": self.population.value,
            "rank": self.rank,
        }


@dataclass(frozen=True)
class PinRequest:
    """Obligation to put a person on duty on a given (1-based) day."""

    name: str
    day: int

    @classmethod
    def parse(cls, value: str) -> Self:
        """Parse a 'NAME:DAY' string.

        The day is taken after the last colon so names may contain colons.

        Raises:
            ValueError: If the value has no colon or the day is not an integer
        """
        name, sep, day = value.rpartition(":")
        if not sep or not name.strip():
            raise ValueError(f"Expected NAME:DAY, got '{value}'")
        try:
            day_number = int(day.strip())
        except ValueError:
            raise ValueError(f"Day must be an integer in '{value}'") from None
        return cls(name=name.strip(), day=day_number)

    def to_dict(self) -> dict:
        return {"name": self.name, "day": self.day}


def build_population(names: list[str], population: Population) -> list[Person]:
    """Create people ranked by list order (first name is the most senior)."""
    return [Person(name=name, population=population, rank=i) for i, name in enumerate(names)]


@dataclass
class Roster:
    """People loaded from a roster file, in seniority order."""

    primary: list[Person] = field(default_factory=list)
    secondary: list[Person] = field(default_factory=list)
    source: str = ""
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def from_names(
        cls,
        primary_names: list[str],
        secondary_names: list[str],
        source: str = "",
    ) -> Self:
        """Create a roster from two ordered name lists."""
        return cls(
            primary=build_population(primary_names, Population.PRIMARY),
            secondary=build_population(secondary_names, Population.SECONDARY),
            source=source,
        )

    @property
    def people(self) -> list[Person]:
        """All people, primary population first."""
        return [*self.primary, *self.secondary]

    @property
    def total_people(self) -> int:
        return len(self.primary) + len(self.secondary)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "source": self.source,
            "primary": [p.name for p in self.primary],
            "secondary": [p.name for p in self.secondary],
            "warnings": self.warnings,
        }
