"""
house.py - Polygamous house records from the house registry.

A house groups a wife in a polygamous union with her children for the
purposes of S.40 distribution. Records are immutable; freezing and
dissolving return new values.

Module: succession_engine.house
"""
from __future__ import annotations

__all__ = ['PolygamousHouse', 'validate_house_order']

import logging
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional

from succession_engine.model import Issue

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PolygamousHouse:
    """
    Attributes:
        id (str): House identifier.
        order (int): Seniority of the house, starting at 1.
        head_member_id (Optional[str]): The wife heading the house.
        dissolved (bool): Whether the house has been dissolved.
        assets_frozen (bool): Distribution blocked pending a court order.
        name (Optional[str]): Display name.
    """
    id: str
    order: int
    head_member_id: Optional[str] = None
    dissolved: bool = False
    assets_frozen: bool = False
    name: Optional[str] = None

    def __post_init__(self) -> None:
        if self.order < 1:
            raise ValueError(f"House {self.id} order must be at least 1 (got {self.order})")

    def __str__(self) -> str:
        return f"House({self.id}, order={self.order})"

    def freeze(self) -> PolygamousHouse:
        return replace(self, assets_frozen=True)

    def unfreeze(self) -> PolygamousHouse:
        if self.dissolved:
            raise ValueError(f"House {self.id} is dissolved; its assets cannot be unfrozen")
        return replace(self, assets_frozen=False)

    def dissolve(self) -> PolygamousHouse:
        """Dissolve the house; a dissolved house is always frozen."""
        if self.dissolved:
            raise ValueError(f"House {self.id} is already dissolved")
        return replace(self, dissolved=True, assets_frozen=True)


def validate_house_order(houses: Iterable[PolygamousHouse]) -> List[Issue]:
    """
    Check that non-dissolved houses are numbered 1..n without gaps or duplicates.

    Args:
        houses: House records of one family.

    Returns:
        List[Issue]: One warning per problem found; empty when the order is valid.
    """
    issues: List[Issue] = []
    active = [h for h in houses if not h.dissolved]
    seen = {}
    for house in active:
        if house.order in seen:
            issues.append(Issue(
                issue_type="duplicate_house_order",
                severity="warning",
                message=f"Houses {seen[house.order]} and {house.id} share order {house.order}",
            ))
        else:
            seen[house.order] = house.id

    expected = set(range(1, len(seen) + 1))
    missing = sorted(expected - set(seen))
    if missing:
        issues.append(Issue(
            issue_type="house_order_gap",
            severity="warning",
            message=f"House order has gaps; missing {missing} among {len(seen)} active houses",
        ))

    for issue in issues:
        logger.debug(f"House order check: {issue}")
    return issues
