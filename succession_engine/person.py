"""
person.py - Read-only family member records consumed by the succession engine.

This module provides the Person value and helpers for the facts the statutory
rules depend on. It supports:
    - Age from a date of birth or a recorded age
    - Minority relative to a configurable age of majority
    - Eldest-first ordering by birth date

The member directory owns these records; the engine never mutates them.

Module: succession_engine.person
"""

__all__ = ['Gender', 'Person']

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional, Tuple

logger = logging.getLogger(__name__)


class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class Person:
    """
    Represents a family member as supplied by the member directory.

    Attributes:
        id (str): Member identifier.
        gender (Gender): Recorded gender.
        date_of_birth (Optional[date]): Date of birth, if known.
        age (Optional[int]): Recorded age, used when no date of birth is known.
        is_deceased (bool): Whether the member has died.
        is_minor (Optional[bool]): Explicit minority flag; derived from age when None.
        polygamous_house_id (Optional[str]): House the member belongs to, if any.
        is_disabled (bool): Disability flag from the evidence subsystem.
        is_student (bool): In full-time education.
        name (Optional[str]): Display name.
    """
    id: str
    gender: Gender = Gender.UNKNOWN
    date_of_birth: Optional[date] = None
    age: Optional[int] = None
    is_deceased: bool = False
    is_minor: Optional[bool] = None
    polygamous_house_id: Optional[str] = None
    is_disabled: bool = False
    is_student: bool = False
    name: Optional[str] = None

    def __str__(self) -> str:
        return f"Person(id={self.id}, name={self.name})"

    @property
    def is_alive(self) -> bool:
        return not self.is_deceased

    def current_age(self, on: Optional[date] = None) -> Optional[int]:
        """
        Age in whole years on the given date (today by default).

        Returns:
            Optional[int]: Age from date of birth, else the recorded age, else None.
        """
        if self.date_of_birth is None:
            return self.age
        on = on or date.today()
        years = on.year - self.date_of_birth.year
        if (on.month, on.day) < (self.date_of_birth.month, self.date_of_birth.day):
            years -= 1
        return max(years, 0)

    def is_minor_on(self, majority_age: int, on: Optional[date] = None) -> bool:
        """Explicit flag wins; otherwise age below majority. Unknown age counts as adult."""
        if self.is_minor is not None:
            return self.is_minor
        age = self.current_age(on)
        return age is not None and age < majority_age

    def birth_sort_key(self) -> Tuple[int, date]:
        # Unknown birth dates sort after known ones; sorted() keeps ties stable.
        if self.date_of_birth is None:
            return (1, date.max)
        return (0, self.date_of_birth)
