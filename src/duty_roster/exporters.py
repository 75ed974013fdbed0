"""Export functionality for generated duty schedules."""

import csv
import json
from abc import ABC, abstractmethod
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, Side
from openpyxl.utils import get_column_letter

from .constants import (
    EXCEL_CORNER_LABEL,
    EXCEL_DATE_CLASSROOM_WIDTH,
    EXCEL_DAY_COLUMN_WIDTH,
    EXCEL_MAIN_SHEET_NAME,
    EXCEL_STATS_SHEET_NAME,
    PRIMARY_DUTIES_TITLE,
    SECONDARY_DUTIES_TITLE,
    day_label,
    room_label,
)
from .scheduler.models import ScheduleResult

# Fonts
FONT_HEADER = Font(bold=True)
FONT_TITLE = Font(bold=True, size=12)

# Alignments
ALIGN_CENTER = Alignment(horizontal="center", vertical="center", wrap_text=True)

# Borders
THIN_BORDER = Border(
    left=Side(style="thin"),
    right=Side(style="thin"),
    top=Side(style="thin"),
    bottom=Side(style="thin"),
)


class BaseExporter(ABC):
    """Base class for exporters."""

    @abstractmethod
    def export(self, result: ScheduleResult, output_path: str | Path) -> None:
        """Export schedule result to file.

        Args:
            result: ScheduleResult to export
            output_path: Path to output file or directory
        """
        pass


class JSONExporter(BaseExporter):
    """Export to JSON format."""

    def __init__(self, indent: int = 2, ensure_ascii: bool = False):
        """Initialize exporter.

        Args:
            indent: JSON indentation level
            ensure_ascii: If False, allows non-ASCII characters
        """
        self.indent = indent
        self.ensure_ascii = ensure_ascii

    def export(self, result: ScheduleResult, output_path: str | Path) -> None:
        """Export schedule result to JSON file.

        Args:
            result: ScheduleResult to export
            output_path: Path to output JSON file
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(
                result.to_dict(),
                f,
                indent=self.indent,
                ensure_ascii=self.ensure_ascii,
            )


class CSVExporter(BaseExporter):
    """Export to CSV format (multiple files)."""

    def export(self, result: ScheduleResult, output_path: str | Path) -> None:
        """Export schedule result to CSV files.

        Creates three files:
        - schedule.csv: One row per slot
        - duties.csv: Duty counts of both populations
        - findings.csv: Validator findings

        Args:
            result: ScheduleResult to export
            output_path: Path to output directory
        """
        output_dir = Path(output_path)
        output_dir.mkdir(parents=True, exist_ok=True)

        self._write_csv(
            output_dir / "schedule.csv",
            ["day", "room", "primary", "secondary"],
            [entry.to_dict() for entry in result.entries],
        )
        self._write_csv(
            output_dir / "duties.csv",
            ["population", "name", "count"],
            [
                {"population": "primary", **d.to_dict()} for d in result.primary_duties
            ]
            + [
                {"population": "secondary", **d.to_dict()} for d in result.secondary_duties
            ],
        )
        self._write_csv(
            output_dir / "findings.csv",
            ["kind", "message", "day", "room", "person"],
            [f.to_dict() for f in result.findings],
        )

    def _write_csv(self, output_path: Path, fieldnames: list[str], rows: list[dict]) -> None:
        """Write rows to CSV file, header included even when empty."""
        with open(output_path, "w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            writer.writerows(rows)


class ExcelExporter(BaseExporter):
    """Export to Excel format.

    Sheet layout:
    - Examination Schedule: day columns, two rows per room (primary row,
      then secondary row) with the room label merged across both rows
    - Duty Counts: faculty and staff duty tables
    """

    def export(self, result: ScheduleResult, output_path: str | Path) -> None:
        """Export schedule result to Excel file.

        Args:
            result: ScheduleResult to export
            output_path: Path to output Excel file
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        wb = self.create_workbook(result)
        wb.save(output_path)

    def create_workbook(self, result: ScheduleResult) -> Workbook:
        """Build the workbook without saving it."""
        wb = Workbook()
        wb.remove(wb.active)

        self._fill_schedule_sheet(wb.create_sheet(title=EXCEL_MAIN_SHEET_NAME), result)
        self._fill_stats_sheet(wb.create_sheet(title=EXCEL_STATS_SHEET_NAME), result)
        return wb

    def _fill_schedule_sheet(self, ws, result: ScheduleResult) -> None:
        last_col = result.days + 1
        last_row = result.rooms * 2 + 2

        ws.column_dimensions["A"].width = EXCEL_DATE_CLASSROOM_WIDTH
        for day in range(1, result.days + 1):
            ws.column_dimensions[get_column_letter(day + 1)].width = EXCEL_DAY_COLUMN_WIDTH

        ws.cell(row=1, column=1, value=EXCEL_CORNER_LABEL).font = FONT_HEADER
        for day in range(1, result.days + 1):
            cell = ws.cell(row=1, column=day + 1, value=day_label(day))
            cell.font = FONT_HEADER
            cell.alignment = ALIGN_CENTER

        # Room r occupies rows 2r+1 (primary) and 2r+2 (secondary)
        for room in range(1, result.rooms + 1):
            top = room * 2 + 1
            label = ws.cell(row=top, column=1, value=room_label(room))
            label.alignment = ALIGN_CENTER
            ws.merge_cells(start_row=top, start_column=1, end_row=top + 1, end_column=1)

        for entry in result.entries:
            top = entry.room * 2 + 1
            ws.cell(row=top, column=entry.day + 1, value=entry.primary.name)
            ws.cell(row=top + 1, column=entry.day + 1, value=entry.secondary.name)

        for row in ws.iter_rows(min_row=1, max_row=last_row, min_col=1, max_col=last_col):
            for cell in row:
                cell.border = THIN_BORDER

    def _fill_stats_sheet(self, ws, result: ScheduleResult) -> None:
        ws.column_dimensions["A"].width = EXCEL_DATE_CLASSROOM_WIDTH

        row = 1
        for title, duties in (
            (PRIMARY_DUTIES_TITLE, result.primary_duties),
            (SECONDARY_DUTIES_TITLE, result.secondary_duties),
        ):
            ws.cell(row=row, column=1, value=title).font = FONT_TITLE
            ws.cell(row=row + 1, column=1, value="Name").font = FONT_HEADER
            ws.cell(row=row + 1, column=2, value="Count").font = FONT_HEADER
            row += 2
            for tally in duties:
                ws.cell(row=row, column=1, value=tally.name)
                ws.cell(row=row, column=2, value=tally.count)
                row += 1
            # blank separator row
            row += 1


def get_exporter(format_type: str) -> BaseExporter:
    """Get appropriate exporter for format type.

    Args:
        format_type: Export format ('json', 'csv', 'excel')

    Returns:
        Exporter instance

    Raises:
        ValueError: If format type is not supported
    """
    exporters = {
        "json": JSONExporter,
        "csv": CSVExporter,
        "excel": ExcelExporter,
    }

    if format_type not in exporters:
        raise ValueError(
            f"Unsupported format: {format_type}. Supported: {', '.join(exporters.keys())}"
        )

    return exporters[format_type]()


def load_schedule_json(input_path: Path | str) -> dict:
    """Load an exported schedule from JSON file.

    Args:
        input_path: Path to schedule JSON file

    Returns:
        Dictionary with schedule data
    """
    with open(input_path, encoding="utf-8") as f:
        return json.load(f)
