"""
Pytest fixtures for dependant qualification tests.
"""
from __future__ import annotations

import pytest

from succession_engine.config import SuccessionConfig
from succession_engine.dependants import DependantQualificationPolicy
from succession_engine.person import Gender, Person


@pytest.fixture
def policy():
    return DependantQualificationPolicy(config=SuccessionConfig())


@pytest.fixture
def husband():
    return Person("H", gender=Gender.MALE, age=60, is_deceased=True)


@pytest.fixture
def wife():
    return Person("W", gender=Gender.FEMALE, age=58, is_deceased=True)


@pytest.fixture
def claimant():
    """Factory for candidate dependants."""
    def _create(member_id: str = "C", gender: Gender = Gender.UNKNOWN, **kwargs) -> Person:
        kwargs.setdefault('age', 30)
        return Person(member_id, gender=gender, **kwargs)
    return _create
