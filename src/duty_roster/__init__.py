"""Duty Roster - exam duty schedule generator.

This module builds a duty roster for a days x rooms grid from two ordered
populations: faculty (primary) and staff (secondary), each listed from most
to least senior. Every room gets two people per day.

Example usage:
    from duty_roster import RosterParser
    from duty_roster.scheduler import create_scheduler

    roster = RosterParser().parse("roster.xlsx")
    scheduler = create_scheduler(roster, days=6, rooms=11, seed=7)
    result = scheduler.schedule()

    for entry in result.entries:
        print(f"Day {entry.day} | Room {entry.room} | {entry.primary.name} | {entry.secondary.name}")

    # Export to Excel
    from duty_roster.exporters import ExcelExporter
    exporter = ExcelExporter()
    exporter.export(result, "schedule.xlsx")
"""

from .exceptions import (
    CapacityError,
    ConfigError,
    PinValidationError,
    RosterError,
    RosterFileError,
)
from .exporters import CSVExporter, ExcelExporter, JSONExporter, get_exporter
from .models import Person, PinRequest, Population, Roster
from .parser import RosterParser

__version__ = "0.1.0"

__all__ = [
    # Roster import
    "RosterParser",
    # Models
    "Person",
    "PinRequest",
    "Population",
    "Roster",
    # Exporters
    "JSONExporter",
    "CSVExporter",
    "ExcelExporter",
    "get_exporter",
    # Exceptions
    "RosterError",
    "ConfigError",
    "CapacityError",
    "PinValidationError",
    "RosterFileError",
]
