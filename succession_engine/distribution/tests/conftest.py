"""
Pytest fixtures for distribution policy tests.
"""
from __future__ import annotations

import pytest
from types import MappingProxyType

from succession_engine.analyzer import HouseStructure, SuccessionStructure
from succession_engine.config import SuccessionConfig
from succession_engine.distribution import IntestateDistributionPolicy, PolygamousDistributionPolicy
from succession_engine.house import PolygamousHouse


@pytest.fixture
def make_house_structure():
    """Factory for HouseStructure values."""
    def _create(house_id: str, head: str = None, children=(), stirpes=None) -> HouseStructure:
        return HouseStructure(
            house_id=house_id,
            house_head_id=head,
            living_children_ids=tuple(children),
            deceased_children_with_issue=MappingProxyType({k: tuple(v) for k, v in (stirpes or {}).items()}),
        )
    return _create


@pytest.fixture
def make_structure():
    """Factory for SuccessionStructure values."""
    def _create(spouses=(), children=(), stirpes=None, parents=(), houses=(), deceased_id="D") -> SuccessionStructure:
        return SuccessionStructure(
            deceased_id=deceased_id,
            surviving_spouse_ids=frozenset(spouses),
            living_children_ids=tuple(children),
            deceased_children_with_living_issue=MappingProxyType({k: tuple(v) for k, v in (stirpes or {}).items()}),
            living_parent_ids=frozenset(parents),
            polygamous_houses=tuple(houses),
        )
    return _create


@pytest.fixture
def two_house_structure(make_structure, make_house_structure):
    """
    House A: surviving wife WA and children A1, A2 (3 units).
    House B: dead wife WB, child B1 and dead child B2 with BG1, BG2 (2 units).
    """
    house_a = make_house_structure("HA", head="WA", children=("A1", "A2"))
    house_b = make_house_structure("HB", head="WB", children=("B1",), stirpes={"B2": ("BG1", "BG2")})
    return make_structure(
        spouses=("WA",),
        children=("A1", "B1", "A2"),
        stirpes={"B2": ("BG1", "BG2")},
        houses=(house_a, house_b),
    )


@pytest.fixture
def two_houses():
    return [PolygamousHouse("HA", 1, head_member_id="WA"), PolygamousHouse("HB", 2, head_member_id="WB")]


@pytest.fixture
def polygamous_policy():
    return PolygamousDistributionPolicy(config=SuccessionConfig())


@pytest.fixture
def intestate_policy():
    return IntestateDistributionPolicy(config=SuccessionConfig())
