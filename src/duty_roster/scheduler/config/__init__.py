"""Configuration for the scheduler."""

from .loader import ConfigLoader
from .pins import PinConfig, pins_from_data
from .resolver import (
    SchedulerConfig,
    compute_primary_ceilings,
    resolve_config,
    validate_grid,
    validate_populations,
)

__all__ = [
    "ConfigLoader",
    "PinConfig",
    "SchedulerConfig",
    "compute_primary_ceilings",
    "pins_from_data",
    "resolve_config",
    "validate_grid",
    "validate_populations",
]
