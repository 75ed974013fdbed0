"""Pin request configuration loader."""

import csv
import json
from pathlib import Path
from typing import Any

from ...exceptions import ConfigError
from ...models import PinRequest


def pins_from_data(data: Any) -> list[PinRequest]:
    """Build pin requests from decoded JSON.

    Two shapes are accepted:
    - a list of {"name": ..., "day": ...} objects
    - a mapping of day to a list of names, e.g. {"3": ["Alice", "Bob"]}

    Raises:
        ConfigError: If the data has neither shape
    """
    pins: list[PinRequest] = []

    if isinstance(data, list):
        for entry in data:
            if not isinstance(entry, dict) or "name" not in entry or "day" not in entry:
                raise ConfigError(f"Pin entry must have 'name' and 'day': {entry!r}")
            pins.append(PinRequest(name=str(entry["name"]).strip(), day=int(entry["day"])))
    elif isinstance(data, dict):
        for day, names in data.items():
            if not isinstance(names, list):
                raise ConfigError(f"Pins for day {day} must be a list of names")
            pins.extend(PinRequest(name=str(name).strip(), day=int(day)) for name in names)
    else:
        raise ConfigError("Pins must be a list of objects or a mapping of day to names")

    return pins


class PinConfig:
    """Loader for pin requests from a JSON or CSV file."""

    def __init__(self, pins_path: Path | None = None):
        self.pins: list[PinRequest] = []

        if pins_path and pins_path.exists():
            self._load(pins_path)

    def _load(self, path: Path) -> None:
        if path.suffix.lower() == ".csv":
            self._load_csv(path)
        else:
            self._load_json(path)

    def _load_json(self, path: Path) -> None:
        """Load pins from JSON."""
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        self.pins.extend(pins_from_data(data))

    def _load_csv(self, path: Path) -> None:
        """Load pins from a CSV file with name and day columns."""
        with open(path, encoding="utf-8") as f:
            reader = csv.DictReader(f)
            if not reader.fieldnames or not {"name", "day"} <= set(reader.fieldnames):
                raise ConfigError(f"Pins CSV {path} must have 'name' and 'day' columns")
            for row in reader:
                name = (row["name"] or "").strip()
                if not name:
                    continue
                try:
                    day = int(row["day"])
                except (TypeError, ValueError):
                    raise ConfigError(f"Invalid day '{row['day']}' for '{name}' in {path}") from None
                self.pins.append(PinRequest(name=name, day=day))

    def get_pins(self) -> list[PinRequest]:
        """Get all loaded pin requests."""
        return list(self.pins)
