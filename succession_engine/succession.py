"""
succession.py - High-level interface to the succession engine.

Module: succession_engine.succession
"""
from __future__ import annotations

__all__ = ['DistributionPlan', 'Succession']

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple

from succession_engine.analyzer import SuccessionStructure, SuccessionStructureAnalyzer
from succession_engine.config import SuccessionConfig
from succession_engine.dependants import DependantAssessment, DependantContext, DependantQualificationPolicy
from succession_engine.distribution import (
    IntestateDistributionPlan,
    PolygamousDistributionPlan,
    get_policy_registry,
    to_money,
)
from succession_engine.distribution.model import Money
from succession_engine.exceptions import NotFoundError
from succession_engine.family_graph import FamilyGraph
from succession_engine.house import PolygamousHouse
from succession_engine.marriage import MarriageRecord
from succession_engine.model import Issue
from succession_engine.path_finder import PathResult, RelationshipPathFinder
from succession_engine.person import Person
from succession_engine.relationship import (
    RelationshipEdge,
    RelationshipStrength,
    RelationshipType,
    inverse_type,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DistributionPlan:
    """
    Distribution of one estate.

    A polygamous plan with no eligible house carries the monogamous plan the
    estate falls through to in ``intestate``.
    """
    total_estate_value: Any
    intestate: Optional[IntestateDistributionPlan] = None
    polygamous: Optional[PolygamousDistributionPlan] = None

    @property
    def is_polygamous(self) -> bool:
        return self.polygamous is not None

    @property
    def warnings(self) -> Tuple[Issue, ...]:
        issues: Tuple[Issue, ...] = ()
        if self.polygamous is not None:
            issues += self.polygamous.warnings
        if self.intestate is not None:
            issues += self.intestate.warnings
        return issues


class Succession:
    """
    Owns one family snapshot and runs the engine over it.

    Example:
        succession = Succession(members, relationships, marriages, houses)
        plan = succession.distribute("deceased-1", 1_000_000)
        if plan.is_polygamous:
            for allocation in plan.polygamous.allocations:
                ...
    """

    def __init__(
        self,
        members: Iterable[Person],
        relationships: Iterable[RelationshipEdge] = (),
        marriages: Iterable[MarriageRecord] = (),
        houses: Iterable[PolygamousHouse] = (),
        config_dict: Optional[Dict[str, Any]] = None,
        config_file: Optional[Path] = None,
    ) -> None:
        """
        Build the family graph for a snapshot.

        Args:
            members: Member records
            relationships: Relationship edges
            marriages: Marriage records
            houses: Polygamous house records
            config_dict: Configuration overrides laid out like config.yaml
            config_file: Path to YAML config file
        """
        if config_dict:
            self.config = SuccessionConfig.from_dict(config_dict)
        elif config_file:
            self.config = SuccessionConfig.from_yaml(config_file)
        else:
            self.config = SuccessionConfig.load_default()

        self.relationships = tuple(relationships)
        self.marriages = tuple(marriages)
        self.houses = tuple(houses)
        members = list(members)

        self.graph = FamilyGraph.build(members, self.relationships, self.marriages, self.houses, self.config)
        self.members: Dict[str, Person] = {mid: node.member for mid, node in self.graph.items()}

        registry = get_policy_registry()
        self.intestate_policy = registry['intestate'](config=self.config)
        self.polygamous_policy = registry['polygamous'](config=self.config)
        self.analyzer = SuccessionStructureAnalyzer()
        self.path_finder = RelationshipPathFinder(self.config)
        self.dependant_policy = DependantQualificationPolicy(self.config)
        logger.info(f"Succession snapshot: {len(self.members)} members, {len(self.relationships)} "
                    f"relationships, {len(self.marriages)} marriages, {len(self.houses)} houses")

    @property
    def issues(self) -> Tuple[Issue, ...]:
        """Data-quality issues found while building the graph."""
        return tuple(self.graph.issues)

    def _member(self, member_id: str, what: str = "Member") -> Person:
        if member_id not in self.members:
            raise NotFoundError(member_id, what)
        return self.members[member_id]

    def structure(self, deceased_id: str) -> SuccessionStructure:
        return self.analyzer.analyze(deceased_id, self.graph, self.houses)

    def is_polygamous(self, deceased_id: str) -> bool:
        """True for more than one current spouse, or a current union that created a house."""
        self._member(deceased_id, "Deceased member")
        if len(self.graph[deceased_id].spouse_ids) > 1:
            return True
        return any(
            m.is_current and m.involves(deceased_id) and m.is_potentially_polygamous
            and m.polygamous_house_id is not None
            for m in self.marriages
        )

    def distribute(self, deceased_id: str, net_estate_value: Money, personal_effects_value: Money = 0,
                   polygamous: Optional[bool] = None) -> DistributionPlan:
        """
        Distribute the estate under S.40 or the monogamous rules.

        Args:
            deceased_id: The deceased member.
            net_estate_value: Estate value after debts.
            personal_effects_value: Personal and household effects (monogamous rules only).
            polygamous: Force the rule set; decided by is_polygamous() when None.

        Returns:
            DistributionPlan
        """
        structure = self.structure(deceased_id)
        net = to_money(net_estate_value)
        if polygamous is None:
            polygamous = self.is_polygamous(deceased_id)

        if not polygamous:
            plan = self.intestate_policy.calculate(net, structure, self.members, personal_effects_value)
            return DistributionPlan(total_estate_value=net, intestate=plan)

        house_plan = self.polygamous_policy.calculate(net, structure, self.houses)
        fallback = None
        if house_plan.total_units == 0:
            logger.info(f"{deceased_id}: no house eligible under S.40; applying monogamous rules")
            fallback = self.intestate_policy.calculate(net, structure, self.members, personal_effects_value)
        return DistributionPlan(total_estate_value=net, intestate=fallback, polygamous=house_plan)

    def find_path(self, from_id: str, to_id: str) -> Optional[PathResult]:
        return self.path_finder.find_path(from_id, to_id, self.relationships, self.marriages)

    def assess_dependant(self, deceased_id: str, candidate_id: str,
                         relationship: Optional[RelationshipType] = None,
                         context: Optional[DependantContext] = None) -> DependantAssessment:
        """
        Check whether a member is a dependant of the deceased.

        The relationship, its strength and the marriage record are looked up
        in the snapshot when not given.
        """
        deceased = self._member(deceased_id, "Deceased member")
        candidate = self._member(candidate_id, "Candidate member")
        context = context or DependantContext()

        marriage = self._marriage_between(deceased_id, candidate_id)
        found_type, found_strength = self._relationship_between(deceased_id, candidate_id)
        if relationship is None:
            relationship = RelationshipType.SPOUSE if marriage is not None else found_type
        if relationship == RelationshipType.SPOUSE and context.marriage is None and marriage is not None:
            context = replace(context, marriage=marriage)
        if context.strength is None and found_strength is not None:
            context = replace(context, strength=found_strength)
        return self.dependant_policy.qualifies(deceased, candidate, relationship, context)

    def _marriage_between(self, a: str, b: str) -> Optional[MarriageRecord]:
        found = [m for m in self.marriages if m.involves(a) and m.partner(a) == b]
        current = [m for m in found if m.is_current]
        return (current or found or [None])[0]

    def _relationship_between(self, deceased_id: str, candidate_id: str
                              ) -> Tuple[RelationshipType, Optional[RelationshipStrength]]:
        """Role of the candidate relative to the deceased: the first matching edge, else derived from the graph."""
        for edge in self.relationships:
            if edge.from_id == candidate_id and edge.to_id == deceased_id:
                return edge.type, edge.strength
            if edge.from_id == deceased_id and edge.to_id == candidate_id:
                return inverse_type(edge.type), edge.strength
        derived = self.graph.relationship_of(candidate_id, deceased_id)
        return derived or RelationshipType.OTHER, None
