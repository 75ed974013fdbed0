"""Test fixtures for duty roster tests."""

import random

import pandas as pd
import pytest

from duty_roster.models import Roster
from duty_roster.scheduler.config import resolve_config
from duty_roster.scheduler.tracker import ConstraintTracker


@pytest.fixture
def faculty_names():
    """Five faculty members, most senior first."""
    return ["Prof. Adams", "Prof. Baker", "Dr. Clark", "Dr. Davis", "Dr. Evans"]


@pytest.fixture
def staff_names():
    """Five staff members, most senior first."""
    return ["Fiona", "George", "Hannah", "Ivan", "Julia"]


@pytest.fixture
def roster(faculty_names, staff_names):
    return Roster.from_names(faculty_names, staff_names)


@pytest.fixture
def small_roster():
    """Two faculty members and four staff members."""
    return Roster.from_names(["Senior", "Junior"], ["Sam", "Tess", "Uma", "Vic"])


@pytest.fixture
def rng():
    return random.Random(0)


@pytest.fixture
def make_tracker():
    """Factory building a tracker for a roster and grid size."""

    def _make(roster: Roster, days: int, rooms: int) -> ConstraintTracker:
        config = resolve_config(roster.primary, roster.secondary, days, rooms)
        return ConstraintTracker(config, roster.primary, roster.secondary)

    return _make


@pytest.fixture
def roster_csv(tmp_path):
    """Roster CSV with columns of different lengths."""
    path = tmp_path / "roster.csv"
    path.write_text(
        "Faculty,Staff\nProf. Adams,Fiona\nDr. Clark,George\n,Hannah\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def roster_xlsx(tmp_path, faculty_names, staff_names):
    path = tmp_path / "roster.xlsx"
    pd.DataFrame({"Faculty": faculty_names, "Staff": staff_names}).to_excel(path, index=False)
    return path
