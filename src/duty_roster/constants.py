"""Constants for the duty roster generator."""

# Grid bounds
MIN_DAYS = 1
MAX_DAYS = 10
MIN_ROOMS = 1
MAX_ROOMS = 20

# Defaults used by the CLI
DEFAULT_DAYS = 6
DEFAULT_ROOMS = 11

# Roster file column names (matched case-insensitively)
PRIMARY_COLUMNS = ["faculty", "primary"]
SECONDARY_COLUMNS = ["staff", "secondary"]

# Supported roster file extensions
EXCEL_EXTENSIONS = {".xlsx", ".xls"}
CSV_EXTENSIONS = {".csv"}

# Excel export layout
EXCEL_DEFAULT_FILENAME = "examination-schedule.xlsx"
EXCEL_MAIN_SHEET_NAME = "Examination Schedule"
EXCEL_STATS_SHEET_NAME = "Duty Counts"
EXCEL_CORNER_LABEL = "Date&Day/Classroom"
EXCEL_DATE_CLASSROOM_WIDTH = 20
EXCEL_DAY_COLUMN_WIDTH = 12

# Population labels used in exported duty tables
PRIMARY_DUTIES_TITLE = "Faculty Duties"
SECONDARY_DUTIES_TITLE = "Staff Duties"


def day_label(day: int) -> str:
    """Get the display label for a 1-based day number (e.g. 'Day 3')."""
    return f"Day {day}"


def room_label(room: int) -> str:
    """Get the display label for a 1-based room number (e.g. 'Room 2')."""
    return f"Room {room}"
