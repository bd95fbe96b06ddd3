"""
Pytest fixtures for succession engine tests.
"""
from __future__ import annotations

import pytest
from datetime import date

from succession_engine.config import SuccessionConfig
from succession_engine.house import PolygamousHouse
from succession_engine.marriage import MarriageRecord, MarriageType
from succession_engine.person import Gender, Person
from succession_engine.relationship import RelationshipEdge, RelationshipType


@pytest.fixture
def make_person():
    """Factory for Person records."""
    def _create(member_id: str, gender: Gender = Gender.UNKNOWN, born: str = None, **kwargs) -> Person:
        dob = date.fromisoformat(born) if born else None
        return Person(id=member_id, gender=gender, date_of_birth=dob, name=kwargs.pop('name', member_id), **kwargs)
    return _create


@pytest.fixture
def default_config():
    return SuccessionConfig()


@pytest.fixture
def nuclear_family(make_person):
    """
    D (deceased father) married to W; children C1 (older), C2 and dead child X.
    X left G1 (living) and G2 (dead). P is D's living mother.
    """
    members = [
        make_person("P", Gender.FEMALE, "1930-01-01"),
        make_person("D", Gender.MALE, "1950-05-05", is_deceased=True),
        make_person("W", Gender.FEMALE, "1952-02-02"),
        make_person("C2", Gender.MALE, "1982-03-03"),
        make_person("C1", Gender.FEMALE, "1978-04-04"),
        make_person("X", Gender.MALE, "1975-06-06", is_deceased=True),
        make_person("G1", Gender.FEMALE, "2000-07-07"),
        make_person("G2", Gender.MALE, "2002-08-08", is_deceased=True),
    ]
    relationships = [
        RelationshipEdge("P", "D", RelationshipType.PARENT),
        RelationshipEdge("D", "C1", RelationshipType.PARENT),
        RelationshipEdge("C2", "D", RelationshipType.CHILD),
        RelationshipEdge("D", "X", RelationshipType.PARENT),
        RelationshipEdge("X", "G1", RelationshipType.PARENT),
        RelationshipEdge("X", "G2", RelationshipType.PARENT),
    ]
    marriages = [MarriageRecord("D", "W", MarriageType.CIVIL)]
    return members, relationships, marriages


@pytest.fixture
def polygamous_family(make_person):
    """
    D (deceased) with two customary wives.
    House A: wife WA (living), children A1, A2.
    House B: wife WB (dead), child B1 and dead child B2 who left BG1, BG2.
    House C: wife WC (dead), no children.
    """
    members = [
        make_person("D", Gender.MALE, "1940-01-01", is_deceased=True),
        make_person("WA", Gender.FEMALE, "1945-01-01", polygamous_house_id="HA"),
        make_person("WB", Gender.FEMALE, "1947-01-01", is_deceased=True, polygamous_house_id="HB"),
        make_person("WC", Gender.FEMALE, "1950-01-01", is_deceased=True, polygamous_house_id="HC"),
        make_person("A1", Gender.MALE, "1970-01-01", polygamous_house_id="HA"),
        make_person("A2", Gender.FEMALE, "1972-01-01", polygamous_house_id="HA"),
        make_person("B1", Gender.MALE, "1971-01-01", polygamous_house_id="HB"),
        make_person("B2", Gender.MALE, "1969-01-01", is_deceased=True, polygamous_house_id="HB"),
        make_person("BG1", Gender.FEMALE, "1995-01-01"),
        make_person("BG2", Gender.MALE, "1997-01-01"),
    ]
    relationships = [
        RelationshipEdge("D", "A1", RelationshipType.PARENT),
        RelationshipEdge("D", "A2", RelationshipType.PARENT),
        RelationshipEdge("D", "B1", RelationshipType.PARENT),
        RelationshipEdge("D", "B2", RelationshipType.PARENT),
        RelationshipEdge("B2", "BG1", RelationshipType.PARENT),
        RelationshipEdge("B2", "BG2", RelationshipType.PARENT),
    ]
    marriages = [
        MarriageRecord("D", "WA", MarriageType.CUSTOMARY, polygamous_house_id="HA"),
        MarriageRecord("D", "WB", MarriageType.CUSTOMARY, polygamous_house_id="HB"),
        MarriageRecord("D", "WC", MarriageType.CUSTOMARY, polygamous_house_id="HC"),
    ]
    houses = [
        PolygamousHouse("HA", 1, head_member_id="WA"),
        PolygamousHouse("HB", 2, head_member_id="WB"),
        PolygamousHouse("HC", 3, head_member_id="WC"),
    ]
    return members, relationships, marriages, houses
