"""Run settings loader."""

import json
from pathlib import Path

from ...constants import DEFAULT_DAYS, DEFAULT_ROOMS
from ...exceptions import ConfigError
from ...models import PinRequest
from ..constants import DEFAULT_TRIALS
from .pins import PinConfig, pins_from_data


class ConfigLoader:
    """Loader for a JSON run file.

    Expected keys (all optional):
        days: Number of days
        rooms: Number of rooms
        seed: Random seed for tie-breaks
        trials: Number of randomized runs to pick the best from
        pins: Inline pin requests (list of {"name", "day"} or {day: [names]})
        pins_file: Path to a pins JSON/CSV file, relative to the run file
    """

    def __init__(self, config_path: Path | None = None):
        self.config_path = Path(config_path) if config_path else None

        self.days: int = DEFAULT_DAYS
        self.rooms: int = DEFAULT_ROOMS
        self.seed: int | None = None
        self.trials: int = DEFAULT_TRIALS
        self.pins: list[PinRequest] = []

        if self.config_path and self.config_path.exists():
            self._load(self.config_path)

    def _load(self, path: Path) -> None:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ConfigError(f"Run file {path} must contain a JSON object")

        try:
            self.days = int(data.get("days", self.days))
            self.rooms = int(data.get("rooms", self.rooms))
            self.trials = int(data.get("trials", self.trials))
            if data.get("seed") is not None:
                self.seed = int(data["seed"])
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid number in run file {path}: {e}") from e

        if "pins" in data:
            self.pins.extend(pins_from_data(data["pins"]))
        if data.get("pins_file"):
            pins_path = path.parent / data["pins_file"]
            if not pins_path.exists():
                raise ConfigError(f"Pins file not found: {pins_path}")
            self.pins.extend(PinConfig(pins_path).get_pins())
