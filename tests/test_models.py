"""Tests for roster data models."""

import pytest

from duty_roster.models import Person, PinRequest, Population, Roster, build_population


class TestPerson:
    """Tests for Person dataclass."""

    def test_population_flags(self):
        faculty = Person("Prof. Adams", Population.PRIMARY, 0)
        staff = Person("Fiona", Population.SECONDARY, 0)
        assert faculty.is_primary and not faculty.is_secondary
        assert staff.is_secondary and not staff.is_primary

    def test_immutable(self):
        person = Person("Prof. Adams", Population.PRIMARY, 0)
        with pytest.raises(AttributeError):
            person.rank = 3

    def test_to_dict(self):
        person = Person("Fiona", Population.SECONDARY, 2)
        assert person.to_dict() == {"name": "Fiona", "population": "secondary", "rank": 2}


class TestPinRequest:
    """Tests for PinRequest parsing."""

    def test_parse(self):
        pin = PinRequest.parse("Hannah:3")
        assert pin == PinRequest(name="Hannah", day=3)

    def test_parse_strips_whitespace(self):
        assert PinRequest.parse("  Dr. Clark : 2 ") == PinRequest(name="Dr. Clark", day=2)

    def test_parse_name_with_colon(self):
        assert PinRequest.parse("Room:Lead:4") == PinRequest(name="Room:Lead", day=4)

    @pytest.mark.parametrize("value", ["Hannah", "Hannah:", ":3", "Hannah:three"])
    def test_parse_invalid(self, value):
        with pytest.raises(ValueError):
            PinRequest.parse(value)

    def test_to_dict(self):
        assert PinRequest("Ivan", 5).to_dict() == {"name": "Ivan", "day": 5}


class TestRoster:
    """Tests for Roster."""

    def test_build_population_ranks_by_order(self):
        people = build_population(["A", "B", "C"], Population.PRIMARY)
        assert [p.rank for p in people] == [0, 1, 2]
        assert all(p.population == Population.PRIMARY for p in people)

    def test_from_names(self, roster, faculty_names, staff_names):
        assert [p.name for p in roster.primary] == faculty_names
        assert [p.name for p in roster.secondary] == staff_names
        assert roster.total_people == 10

    def test_people_primary_first(self, small_roster):
        names = [p.name for p in small_roster.people]
        assert names == ["Senior", "Junior", "Sam", "Tess", "Uma", "Vic"]

    def test_to_dict(self):
        data = Roster.from_names(["A"], ["B"], source="roster.csv").to_dict()
        assert data == {
            "source": "roster.csv",
            "primary": ["A"],
            "secondary": ["B"],
            "warnings": [],
        }
