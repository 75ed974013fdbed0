"""Duty assignment engine.

This package fills a days x rooms grid with two people per room, balancing
duty counts between a primary (faculty) and a secondary (staff) population
under seniority, locality and pin constraints.

Main classes:
- DutyScheduler: Runs the full pipeline and returns a ScheduleResult
- ConstraintTracker: Per-run state shared by the pipeline stages
- ConfigLoader: Loads run settings and pins from JSON

Usage:
    from duty_roster.scheduler import DutyScheduler

    scheduler = DutyScheduler(roster.primary, roster.secondary, days=6, rooms=11, seed=42)
    result = scheduler.schedule()
"""

from .algorithm import DutyScheduler, create_scheduler, generate_schedule
from .balancer import Balancer
from .config import ConfigLoader, PinConfig, SchedulerConfig, resolve_config
from .filler import GreedyFiller
from .models import (
    AssignmentMatrix,
    DutyCount,
    Finding,
    FindingKind,
    Position,
    ScheduleResult,
    ScheduleStatistics,
    Slot,
)
from .pins import PinPlacer, validate_pins
from .positions import apply_positions, order_slot, resolve_positions
from .tracker import ConstraintTracker
from .validator import ScheduleValidator

__all__ = [
    # Main scheduler
    "DutyScheduler",
    "create_scheduler",
    "generate_schedule",
    # Pipeline stages
    "Balancer",
    "ConstraintTracker",
    "GreedyFiller",
    "PinPlacer",
    "ScheduleValidator",
    "apply_positions",
    "order_slot",
    "resolve_positions",
    "validate_pins",
    # Configuration
    "ConfigLoader",
    "PinConfig",
    "SchedulerConfig",
    "resolve_config",
    # Models
    "AssignmentMatrix",
    "DutyCount",
    "Finding",
    "FindingKind",
    "Position",
    "ScheduleResult",
    "ScheduleStatistics",
    "Slot",
]
