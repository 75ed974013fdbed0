"""Custom exceptions for the duty roster generator."""


class RosterError(Exception):
    """Base exception for roster generation errors."""

    pass


class ConfigError(RosterError):
    """Grid size or population input is invalid."""

    pass


class CapacityError(RosterError):
    """Grid is too small for the required secondary coverage."""

    def __init__(self, total_positions: int, total_secondary_duties: int):
        self.total_positions = total_positions
        self.total_secondary_duties = total_secondary_duties
        super().__init__(
            f"Secondary population needs {total_secondary_duties} duties "
            f"but the grid only has {total_positions} positions. "
            "Add days or rooms, or reduce the secondary population."
        )


class PinValidationError(RosterError):
    """One or more pin requests are invalid.

    All problems found are collected in ``errors``.
    """

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__(f"Pin validation failed: {'; '.join(self.errors)}")


class RosterFileError(RosterError):
    """Roster file could not be read or has an unexpected layout."""

    def __init__(self, message: str, file_path: str | None = None):
        self.file_path = file_path
        location = f" ({file_path})" if file_path else ""
        super().__init__(f"Invalid roster file{location}: {message}")
