"""
marriage.py - Marriage records as supplied by the relationship/marriage store.

Only the current state of a union is consumed here; its lifecycle belongs to
the store.

Module: succession_engine.marriage
"""
from __future__ import annotations

__all__ = ['MarriageType', 'MarriageEndReason', 'MarriageRecord']

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class MarriageType(str, Enum):
    CIVIL = "CIVIL"
    CHRISTIAN = "CHRISTIAN"
    CUSTOMARY = "CUSTOMARY"
    ISLAMIC = "ISLAMIC"
    HINDU = "HINDU"
    OTHER = "OTHER"


class MarriageEndReason(str, Enum):
    DEATH_OF_SPOUSE = "DEATH_OF_SPOUSE"
    DIVORCE = "DIVORCE"
    ANNULMENT = "ANNULMENT"
    CUSTOMARY_DISSOLUTION = "CUSTOMARY_DISSOLUTION"
    STILL_ACTIVE = "STILL_ACTIVE"


POLYGAMOUS_TYPES = frozenset({MarriageType.CUSTOMARY, MarriageType.ISLAMIC})
FORMER_END_REASONS = frozenset({
    MarriageEndReason.DIVORCE,
    MarriageEndReason.ANNULMENT,
    MarriageEndReason.CUSTOMARY_DISSOLUTION,
})


@dataclass(frozen=True)
class MarriageRecord:
    """
    Represents a union between two members.

    Attributes:
        spouse1_id (str): First spouse.
        spouse2_id (str): Second spouse.
        type (MarriageType): Form of the union.
        is_active (bool): Whether the store reports the union as active.
        end_reason (Optional[MarriageEndReason]): Why the union ended, if it did.
        polygamous_house_id (Optional[str]): House created by a customary or Islamic union.
    """
    spouse1_id: str
    spouse2_id: str
    type: MarriageType = MarriageType.CIVIL
    is_active: bool = True
    end_reason: Optional[MarriageEndReason] = None
    polygamous_house_id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.spouse1_id == self.spouse2_id:
            raise ValueError(f"Marriage cannot join member {self.spouse1_id} to themselves")
        if self.polygamous_house_id is not None and self.type not in POLYGAMOUS_TYPES:
            raise ValueError(
                f"Only customary or Islamic marriages may carry a polygamous house "
                f"(got {self.type.value} with house {self.polygamous_house_id})"
            )

    def __str__(self) -> str:
        return f"Marriage({self.spouse1_id} & {self.spouse2_id}, {self.type.value})"

    @property
    def is_current(self) -> bool:
        """True while the union subsists: active and not ended."""
        return self.is_active and self.end_reason in (None, MarriageEndReason.STILL_ACTIVE)

    @property
    def is_former(self) -> bool:
        """True when the union was ended by divorce, annulment or customary dissolution."""
        return self.end_reason in FORMER_END_REASONS

    @property
    def is_potentially_polygamous(self) -> bool:
        return self.type in POLYGAMOUS_TYPES

    def involves(self, member_id: str) -> bool:
        return member_id in (self.spouse1_id, self.spouse2_id)

    def partner(self, member_id: str) -> Optional[str]:
        """Return the other spouse, or None if member_id is not a party to this marriage.

        Args:
            member_id (str): The spouse to exclude.
        Returns:
            Optional[str]: The other spouse's id.
        """
        if member_id == self.spouse1_id:
            return self.spouse2_id
        if member_id == self.spouse2_id:
            return self.spouse1_id
        return None
