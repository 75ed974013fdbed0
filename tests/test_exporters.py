"""Tests for schedule exporters."""

import csv

import pytest
from openpyxl import load_workbook

from duty_roster.exporters import (
    CSVExporter,
    ExcelExporter,
    JSONExporter,
    get_exporter,
    load_schedule_json,
)
from duty_roster.scheduler import create_scheduler


@pytest.fixture
def result(small_roster):
    return create_scheduler(small_roster, days=3, rooms=2, seed=0).schedule()


def _read_csv(path):
    with open(path, encoding="utf-8", newline="") as f:
        return list(csv.DictReader(f))


class TestJSONExporter:
    """Tests for JSONExporter."""

    def test_export_and_load(self, result, tmp_path):
        output = tmp_path / "out" / "schedule.json"
        JSONExporter().export(result, output)

        data = load_schedule_json(output)
        assert data["days"] == 3
        assert data["rooms"] == 2
        assert len(data["entries"]) == 6
        assert data["entries"] == [e.to_dict() for e in result.entries]
        assert data["statistics"]["findings_count"] == len(result.findings)


class TestCSVExporter:
    """Tests for CSVExporter."""

    def test_creates_three_files(self, result, tmp_path):
        CSVExporter().export(result, tmp_path / "csv")

        schedule = _read_csv(tmp_path / "csv" / "schedule.csv")
        assert len(schedule) == 6
        assert set(schedule[0]) == {"day", "room", "primary", "secondary"}

        duties = _read_csv(tmp_path / "csv" / "duties.csv")
        assert [row["population"] for row in duties] == ["primary"] * 2 + ["secondary"] * 4

    def test_findings_header_without_findings(self, result, tmp_path):
        result.findings = []
        CSVExporter().export(result, tmp_path)

        with open(tmp_path / "findings.csv", encoding="utf-8") as f:
            assert f.read().strip() == "kind,message,day,room,person"


class TestExcelExporter:
    """Tests for ExcelExporter."""

    def test_sheets(self, result):
        wb = ExcelExporter().create_workbook(result)
        assert wb.sheetnames == ["Examination Schedule", "Duty Counts"]

    def test_schedule_layout(self, result, tmp_path):
        output = tmp_path / "schedule.xlsx"
        ExcelExporter().export(result, output)

        ws = load_workbook(output)["Examination Schedule"]
        assert ws["A1"].value == "Date&Day/Classroom"
        assert [ws.cell(row=1, column=c).value for c in range(2, 5)] == ["Day 1", "Day 2", "Day 3"]
        assert ws["A3"].value == "Room 1"
        assert ws["A5"].value == "Room 2"
        merged = {str(r) for r in ws.merged_cells.ranges}
        assert {"A3:A4", "A5:A6"} <= merged

        for entry in result.entries:
            top = entry.room * 2 + 1
            assert ws.cell(row=top, column=entry.day + 1).value == entry.primary.name
            assert ws.cell(row=top + 1, column=entry.day + 1).value == entry.secondary.name

    def test_duty_counts_layout(self, result):
        ws = ExcelExporter().create_workbook(result)["Duty Counts"]

        assert ws["A1"].value == "Faculty Duties"
        assert (ws["A2"].value, ws["B2"].value) == ("Name", "Count")
        assert ws["A3"].value == result.primary_duties[0].name
        assert ws["B3"].value == result.primary_duties[0].count
        # two faculty rows, then a blank row
        assert ws["A5"].value is None
        assert ws["A6"].value == "Staff Duties"
        assert ws["A8"].value == result.secondary_duties[0].name


class TestGetExporter:
    """Tests for get_exporter."""

    @pytest.mark.parametrize(
        "name,cls",
        [("json", JSONExporter), ("csv", CSVExporter), ("excel", ExcelExporter)],
    )
    def test_known_formats(self, name, cls):
        assert isinstance(get_exporter(name), cls)

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="Unsupported format"):
            get_exporter("pdf")
