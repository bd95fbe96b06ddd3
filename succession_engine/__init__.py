"""succession_engine package: Exposes the family graph, succession analysis, distribution and dependant policies."""

from succession_engine.analyzer import HouseStructure, SuccessionStructure, SuccessionStructureAnalyzer
from succession_engine.config import SuccessionConfig
from succession_engine.dependants import (
    DependantAssessment,
    DependantContext,
    DependantQualificationPolicy,
    DependencyLevel,
)
from succession_engine.distribution import (
    HouseAllocation,
    InterestType,
    IntestateDistributionPlan,
    IntestateDistributionPolicy,
    PolygamousDistributionPlan,
    PolygamousDistributionPolicy,
    Share,
    ShareRole,
)
from succession_engine.exceptions import DataIntegrityError, NotFoundError, SuccessionError
from succession_engine.family_graph import FamilyGraph, FamilyGraphNode
from succession_engine.house import PolygamousHouse, validate_house_order
from succession_engine.law import CITATIONS, LawSection, cite
from succession_engine.marriage import MarriageEndReason, MarriageRecord, MarriageType
from succession_engine.model import Issue
from succession_engine.path_finder import PathResult, PathStep, RelationshipPathFinder
from succession_engine.person import Gender, Person
from succession_engine.relationship import (
    InheritanceRights,
    RelationshipEdge,
    RelationshipStrength,
    RelationshipType,
    inverse_type,
)
from succession_engine.succession import DistributionPlan, Succession

__all__ = [
    "CITATIONS",
    "DataIntegrityError",
    "DependantAssessment",
    "DependantContext",
    "DependantQualificationPolicy",
    "DependencyLevel",
    "DistributionPlan",
    "FamilyGraph",
    "FamilyGraphNode",
    "Gender",
    "HouseAllocation",
    "HouseStructure",
    "InheritanceRights",
    "InterestType",
    "IntestateDistributionPlan",
    "IntestateDistributionPolicy",
    "Issue",
    "LawSection",
    "MarriageEndReason",
    "MarriageRecord",
    "MarriageType",
    "NotFoundError",
    "PathResult",
    "PathStep",
    "Person",
    "PolygamousDistributionPlan",
    "PolygamousDistributionPolicy",
    "PolygamousHouse",
    "RelationshipEdge",
    "RelationshipPathFinder",
    "RelationshipStrength",
    "RelationshipType",
    "Share",
    "ShareRole",
    "Succession",
    "SuccessionConfig",
    "SuccessionError",
    "SuccessionStructure",
    "SuccessionStructureAnalyzer",
    "cite",
    "inverse_type",
    "validate_house_order",
]
