"""Duty roster generation pipeline."""

import logging
import random
from datetime import datetime

from ..models import Person, PinRequest, Roster
from .balancer import Balancer
from .config import SchedulerConfig, resolve_config
from .constants import DEFAULT_BALANCE_ROUNDS, MAX_TRIALS
from .filler import GreedyFiller
from .models import ScheduleResult, ScheduleStatistics, rank_duties
from .pins import PinPlacer, validate_pins
from .positions import apply_positions
from .tracker import ConstraintTracker
from .validator import ScheduleValidator

logger = logging.getLogger(__name__)


class DutyScheduler:
    """Generates a duty roster for a days x rooms grid.

    Pipeline for one run:
    1. Resolve configuration (ceilings, secondary target, per-day minimum)
    2. Place pinned people and protect them on their day
    3. Greedily fill every open room, day by day
    4. Repair duty counts with the balancer
    5. Re-apply position ordering and validate

    Configuration and pins are checked when the scheduler is created, so
    fatal errors surface before any assignment is made.
    """

    def __init__(
        self,
        primary: list[Person],
        secondary: list[Person],
        days: int,
        rooms: int,
        pins: list[PinRequest] | None = None,
        seed: int | None = None,
        balance_rounds: int = DEFAULT_BALANCE_ROUNDS,
    ) -> None:
        """Initialize the scheduler.

        Args:
            primary: Primary population in seniority order
            secondary: Secondary population in seniority order
            days: Number of days
            rooms: Number of rooms per day
            pins: Optional (person, day) pin requests
            seed: Seed for random tie-breaks; None for a fresh random source
            balance_rounds: Maximum repair rounds

        Raises:
            ConfigError: Invalid grid or populations
            CapacityError: Grid too small for the secondary target
            PinValidationError: Bad pin requests
        """
        self.primary = list(primary)
        self.secondary = list(secondary)
        self.pins = list(pins or [])
        self.seed = seed
        self.balance_rounds = balance_rounds

        self.config: SchedulerConfig = resolve_config(self.primary, self.secondary, days, rooms)
        people = {p.name: p for p in [*self.primary, *self.secondary]}
        validate_pins(self.pins, people, days, rooms)

    def schedule(self) -> ScheduleResult:
        """Run the pipeline once with the configured seed."""
        return self._run(self.seed)

    def schedule_best_of(self, trials: int) -> ScheduleResult:
        """Run several independent trials and keep the best one.

        Trials use seeds seed, seed + 1, ... The result with the fewest
        findings wins; the earliest trial wins ties.

        Args:
            trials: Number of runs (1..MAX_TRIALS)
        """
        if not 1 <= trials <= MAX_TRIALS:
            raise ValueError(f"Number of trials must be between 1 and {MAX_TRIALS}, got {trials}")

        base_seed = self.seed if self.seed is not None else random.randrange(2**32)
        best: ScheduleResult | None = None
        for trial in range(trials):
            result = self._run(base_seed + trial)
            logger.info(f"Trial {trial + 1}/{trials}: {len(result.findings)} findings")
            if best is None or len(result.findings) < len(best.findings):
                best = result
            if not best.findings:
                break
        return best

    def _run(self, seed: int | None) -> ScheduleResult:
        config = self.config
        rng = random.Random(seed)
        tracker = ConstraintTracker(config, self.primary, self.secondary)

        unsatisfied = PinPlacer(tracker, rng).place(self.pins) if self.pins else []

        GreedyFiller(tracker, rng).fill()

        balancer = Balancer(tracker, rng)
        swaps = balancer.run(self.balance_rounds)

        apply_positions(tracker.matrix)

        entries = list(tracker.matrix)
        counts = tracker.counts()
        validator = ScheduleValidator(
            self.primary,
            self.secondary,
            config.days,
            config.rooms,
            config.secondary_duty_target,
            self.pins,
        )
        findings = validator.validate(entries, counts)
        for finding in findings:
            logger.debug(f"Finding {finding.kind.value}: {finding.message}")

        primary_duties = rank_duties(tracker.primary, counts)
        secondary_duties = rank_duties(tracker.secondary, counts)

        statistics = ScheduleStatistics.from_counts(primary_duties, secondary_duties)
        statistics.secondary_by_day = {
            day: tracker.secondary_count_on(day) for day in range(1, config.days + 1)
        }
        statistics.primary_ceilings = dict(config.primary_ceilings)
        statistics.swaps_by_phase = swaps
        statistics.findings_count = len(findings)

        logger.info(
            f"Generated {len(entries)} of {config.days * config.rooms} slots "
            f"with {len(findings)} findings"
        )

        return ScheduleResult(
            days=config.days,
            rooms=config.rooms,
            entries=entries,
            primary_duties=primary_duties,
            secondary_duties=secondary_duties,
            findings=findings,
            statistics=statistics,
            config=config.to_dict(),
            pins=list(self.pins),
            unsatisfied_pins=unsatisfied,
            seed=seed,
            generation_date=datetime.now().isoformat(),
        )


def create_scheduler(
    roster: Roster,
    days: int,
    rooms: int,
    pins: list[PinRequest] | None = None,
    seed: int | None = None,
    balance_rounds: int = DEFAULT_BALANCE_ROUNDS,
) -> DutyScheduler:
    """Factory function to create a scheduler for a loaded roster.

    Args:
        roster: Parsed roster
        days: Number of days
        rooms: Number of rooms per day
        pins: Optional pin requests
        seed: Optional random seed
        balance_rounds: Maximum repair rounds

    Returns:
        Configured DutyScheduler instance
    """
    return DutyScheduler(
        roster.primary,
        roster.secondary,
        days,
        rooms,
        pins=pins,
        seed=seed,
        balance_rounds=balance_rounds,
    )


def generate_schedule(
    primary_names: list[str],
    secondary_names: list[str],
    days: int,
    rooms: int,
    pins: list[PinRequest] | None = None,
    seed: int | None = None,
    trials: int = 1,
) -> ScheduleResult:
    """Generate a schedule from two ordered name lists.

    Args:
        primary_names: Primary population, most senior first
        secondary_names: Secondary population, most senior first
        days: Number of days
        rooms: Number of rooms per day
        pins: Optional pin requests
        seed: Optional random seed
        trials: Number of randomized runs to pick the best from

    Returns:
        ScheduleResult of the best run
    """
    roster = Roster.from_names(primary_names, secondary_names)
    scheduler = create_scheduler(roster, days, rooms, pins=pins, seed=seed)
    if trials > 1:
        return scheduler.schedule_best_of(trials)
    return scheduler.schedule()
