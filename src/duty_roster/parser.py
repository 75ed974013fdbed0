"""Roster file parser."""

import logging
from pathlib import Path

import pandas as pd

from .constants import CSV_EXTENSIONS, EXCEL_EXTENSIONS, PRIMARY_COLUMNS, SECONDARY_COLUMNS
from .exceptions import RosterFileError
from .models import Roster

logger = logging.getLogger(__name__)


def find_column(df: pd.DataFrame, candidates: list[str]) -> str | None:
    """Find the first column whose name matches a candidate (case-insensitive).

    Args:
        df: DataFrame to search
        candidates: Lowercase column names in order of preference

    Returns:
        Original column name or None
    """
    by_lower = {str(col).strip().lower(): col for col in df.columns}
    for candidate in candidates:
        if candidate in by_lower:
            return by_lower[candidate]
    return None


def column_names(series: pd.Series) -> list[str]:
    """Get non-empty trimmed string cells of a column, in order."""
    names = []
    for value in series:
        if pd.isna(value):
            continue
        name = str(value).strip()
        if name:
            names.append(name)
    return names


class RosterParser:
    """Parser for roster files with a faculty column and a staff column.

    Each column lists one population from most to least senior. The two
    columns may have different lengths.
    """

    def parse(self, file_path: str | Path) -> Roster:
        """Parse a roster file.

        Args:
            file_path: Path to .xlsx, .xls or .csv file

        Returns:
            Roster with both populations in seniority order

        Raises:
            RosterFileError: If the file is missing, unreadable, lacks the
                expected columns or lists no names
        """
        file_path = Path(file_path)
        df = self._read(file_path)

        primary_col = find_column(df, PRIMARY_COLUMNS)
        secondary_col = find_column(df, SECONDARY_COLUMNS)
        missing = []
        if primary_col is None:
            missing.append("/".join(c.title() for c in PRIMARY_COLUMNS))
        if secondary_col is None:
            missing.append("/".join(c.title() for c in SECONDARY_COLUMNS))
        if missing:
            raise RosterFileError(f"Missing columns: {', '.join(missing)}", str(file_path))

        warnings: list[str] = []
        primary_names = self._unique(column_names(df[primary_col]), "faculty", warnings)
        secondary_names = self._unique(column_names(df[secondary_col]), "staff", warnings)

        if not primary_names and not secondary_names:
            raise RosterFileError("No names found", str(file_path))

        roster = Roster.from_names(primary_names, secondary_names, source=str(file_path))
        roster.warnings = warnings
        for warning in warnings:
            logger.warning(warning)
        logger.info(
            f"Loaded {len(primary_names)} faculty and {len(secondary_names)} staff "
            f"from {file_path.name}"
        )
        return roster

    def validate(self, file_path: str | Path) -> dict:
        """Check a roster file without raising.

        Returns:
            Dictionary with valid flag, population sizes, errors and warnings
        """
        report: dict = {
            "file_path": str(file_path),
            "valid": False,
            "primary_count": 0,
            "secondary_count": 0,
            "errors": [],
            "warnings": [],
        }

        try:
            roster = self.parse(file_path)
        except RosterFileError as e:
            report["errors"].append(str(e))
            return report

        report["primary_count"] = len(roster.primary)
        report["secondary_count"] = len(roster.secondary)
        report["warnings"] = list(roster.warnings)
        if not roster.primary:
            report["errors"].append("No faculty names found")
        if not roster.secondary:
            report["errors"].append("No staff names found")

        cross = {p.name for p in roster.primary} & {p.name for p in roster.secondary}
        for name in sorted(cross):
            report["errors"].append(f"'{name}' is listed as both faculty and staff")

        report["valid"] = not report["errors"]
        return report

    def _read(self, file_path: Path) -> pd.DataFrame:
        if not file_path.exists():
            raise RosterFileError("File not found", str(file_path))

        suffix = file_path.suffix.lower()
        try:
            if suffix in EXCEL_EXTENSIONS:
                return pd.read_excel(file_path, sheet_name=0, dtype=object)
            if suffix in CSV_EXTENSIONS:
                return pd.read_csv(file_path, dtype=object)
        except Exception as e:
            raise RosterFileError(f"Failed to read file: {e}", str(file_path)) from e

        raise RosterFileError(
            f"Unsupported file type '{suffix}'. "
            f"Supported: {', '.join(sorted(EXCEL_EXTENSIONS | CSV_EXTENSIONS))}",
            str(file_path),
        )

    def _unique(self, names: list[str], label: str, warnings: list[str]) -> list[str]:
        """Drop repeated names inside one column, keeping the first occurrence."""
        seen: set[str] = set()
        unique: list[str] = []
        for name in names:
            if name in seen:
                warnings.append(f"Duplicate {label} name '{name}' ignored")
                continue
            seen.add(name)
            unique.append(name)
        return unique
