"""
Distribution plan models and money helpers.

All amounts are Decimal. Shares are floored to whole currency units with
exact rational arithmetic, and whatever is left over is handed to the first
recipient, so a split never loses or invents currency.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from fractions import Fraction
from typing import List, Optional, Tuple, Union

from succession_engine.law import LawSection
from succession_engine.model import Issue

Money = Union[int, str, Decimal]

ZERO = Decimal(0)


def to_money(value: Money, what: str = "Estate value") -> Decimal:
    """Parse an amount, rejecting negative or non-finite values."""
    if isinstance(value, bool):
        raise ValueError(f"{what} must be a number, got {value!r}")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValueError(f"{what} is not a valid amount: {value!r}")
    if not amount.is_finite():
        raise ValueError(f"{what} must be finite, got {value!r}")
    if amount < 0:
        raise ValueError(f"{what} cannot be negative, got {value!r}")
    return amount


def floor_share(total: Decimal, numerator: int, denominator: int) -> Decimal:
    """floor(total * numerator / denominator) in whole currency units, computed exactly."""
    return Decimal(math.floor(Fraction(total) * numerator / denominator))


def percentage(part: Union[int, Decimal], whole: Union[int, Decimal], places: int = 4) -> Decimal:
    """part / whole as a percentage, rounded half-up to the given places; 0 when whole is 0."""
    quantum = Decimal(1).scaleb(-places)
    if not whole:
        return ZERO.quantize(quantum)
    exact = Fraction(Decimal(part)) * 100 / Fraction(Decimal(whole))
    return (Decimal(exact.numerator) / Decimal(exact.denominator)).quantize(quantum, rounding=ROUND_HALF_UP)


def split_evenly(total: Decimal, count: int) -> List[Decimal]:
    """Equal floored parts; the remainder goes to the first part."""
    if count <= 0:
        return []
    parts = [floor_share(total, 1, count) for _ in range(count)]
    parts[0] += total - sum(parts, ZERO)
    return parts


class ShareRole(str, Enum):
    SPOUSE = "SPOUSE"
    CHILD = "CHILD"
    PER_STIRPES = "PER_STIRPES"
    PARENT = "PARENT"


class InterestType(str, Enum):
    ABSOLUTE = "ABSOLUTE"
    PERSONAL_EFFECTS = "PERSONAL_EFFECTS"
    LIFE_INTEREST = "LIFE_INTEREST"
    REMAINDER = "REMAINDER"
    CONTINGENT = "CONTINGENT"


@dataclass(frozen=True)
class Share:
    """
    One beneficiary's entitlement under the monogamous rules.

    A LIFE_INTEREST share_value is the capital the interest runs over; it is
    not added to the other shares, which together make up the estate.
    """
    beneficiary_id: str
    role: ShareRole
    interest: InterestType
    share_percentage: Decimal
    share_value: Decimal
    legal_basis: LawSection
    substitutes: Tuple[str, ...] = ()
    conditions: Tuple[str, ...] = ()

    @property
    def is_capital(self) -> bool:
        return self.interest != InterestType.LIFE_INTEREST


@dataclass(frozen=True)
class IntestateDistributionPlan:
    total_estate_value: Decimal
    section: Optional[LawSection]
    shares: Tuple[Share, ...] = ()
    unallocated_value: Decimal = ZERO
    warnings: Tuple[Issue, ...] = ()

    @property
    def distributed_value(self) -> Decimal:
        return sum((s.share_value for s in self.shares if s.is_capital), ZERO)

    def shares_for(self, beneficiary_id: str) -> List[Share]:
        return [s for s in self.shares if s.beneficiary_id == beneficiary_id]


@dataclass(frozen=True)
class HouseAllocation:
    """
    A house's S.40 entitlement.

    Attributes:
        house_id: The house.
        units: Surviving wife + living children + per-stirpes substitutions.
        share_percentage: units / total units as a percentage.
        share_value: Floored share, plus the remainder for the first house.
        beneficiary_ids: Head (if counted), living children, per-stirpes dead children.
        warnings: Issues specific to this house.
        is_blocked: Share computed but must not be disbursed.
    """
    house_id: str
    units: int
    share_percentage: Decimal
    share_value: Decimal
    beneficiary_ids: Tuple[str, ...] = ()
    warnings: Tuple[Issue, ...] = ()
    is_blocked: bool = False


@dataclass(frozen=True)
class PolygamousDistributionPlan:
    total_estate_value: Decimal
    total_units: int
    allocations: Tuple[HouseAllocation, ...] = ()
    unallocated_value: Decimal = ZERO
    warnings: Tuple[Issue, ...] = ()

    @property
    def allocated_value(self) -> Decimal:
        return sum((a.share_value for a in self.allocations), ZERO)

    def allocation(self, house_id: str) -> Optional[HouseAllocation]:
        for allocation in self.allocations:
            if allocation.house_id == house_id:
                return allocation
        return None
