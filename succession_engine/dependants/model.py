"""
Dependant qualification inputs and results.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from succession_engine.law import LawSection
from succession_engine.marriage import MarriageRecord
from succession_engine.relationship import RelationshipStrength


class DependencyLevel(str, Enum):
    NONE = "NONE"
    PARTIAL = "PARTIAL"
    FULL = "FULL"


@dataclass(frozen=True)
class DependantContext:
    """
    Facts from the evidence subsystem, taken at face value.

    Attributes:
        was_maintained: The deceased maintained the candidate before death.
        maintenance_order_exists: A court maintenance order was in force (former spouses).
        marriage: The union between deceased and candidate, for spouse claims.
        is_cohabitant: The candidate lived with the deceased as a spouse.
        strength: Strength of the candidate's relationship (step/foster children).
    """
    was_maintained: bool = False
    maintenance_order_exists: bool = False
    marriage: Optional[MarriageRecord] = None
    is_cohabitant: bool = False
    strength: Optional[RelationshipStrength] = None


@dataclass(frozen=True)
class DependantAssessment:
    """
    Outcome of a qualification check.

    Attributes:
        is_dependant: Whether the candidate qualifies.
        statutory_basis: Section the decision rests on; None when no category applies.
        dependency_level: FULL for automatic dependants, PARTIAL where proof is needed, NONE otherwise.
        requires_maintenance_proof: Qualification depends on proof of maintenance.
        reason: Explanation citing the statutory basis.
        considerations: Candidate facts relevant to the amount of provision.
    """
    is_dependant: bool
    statutory_basis: Optional[LawSection]
    dependency_level: DependencyLevel
    requires_maintenance_proof: bool
    reason: str
    considerations: Tuple[str, ...] = ()
