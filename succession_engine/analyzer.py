"""
analyzer.py - Extracts the statutory succession structure for a deceased member.

Module: succession_engine.analyzer
"""
from __future__ import annotations

__all__ = ['HouseStructure', 'SuccessionStructure', 'SuccessionStructureAnalyzer']

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from succession_engine.exceptions import NotFoundError
from succession_engine.family_graph import FamilyGraph
from succession_engine.house import PolygamousHouse

logger = logging.getLogger(__name__)


def _frozen_map(data: Mapping[str, Iterable[str]]) -> Mapping[str, Tuple[str, ...]]:
    return MappingProxyType({key: tuple(value) for key, value in data.items()})


@dataclass(frozen=True)
class HouseStructure:
    """
    House-scoped beneficiaries.

    Attributes:
        house_id: The house.
        house_head_id: Head of the house, living or not.
        living_children_ids: Living children of the deceased belonging to the house, eldest first.
        deceased_children_with_issue: Dead children of the house mapped to their living children.
    """
    house_id: str
    house_head_id: Optional[str] = None
    living_children_ids: Tuple[str, ...] = ()
    deceased_children_with_issue: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))


@dataclass(frozen=True)
class SuccessionStructure:
    """
    The facts about a deceased member's family that the distribution rules need.

    Attributes:
        deceased_id: The deceased.
        surviving_spouse_ids: Current spouses who are alive.
        living_children_ids: Living children, eldest first.
        deceased_children_with_living_issue: Per-stirpes substitutions: dead child -> living children.
        living_parent_ids: Living parents.
        polygamous_houses: Houses with at least one live beneficiary, in house input order.
    """
    deceased_id: str
    surviving_spouse_ids: FrozenSet[str] = frozenset()
    living_children_ids: Tuple[str, ...] = ()
    deceased_children_with_living_issue: Mapping[str, Tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType({}))
    living_parent_ids: FrozenSet[str] = frozenset()
    polygamous_houses: Tuple[HouseStructure, ...] = ()

    @property
    def has_spouse(self) -> bool:
        return bool(self.surviving_spouse_ids)

    @property
    def has_issue(self) -> bool:
        """True if a living child or a per-stirpes substitution exists."""
        return bool(self.living_children_ids or self.deceased_children_with_living_issue)

    @property
    def child_units(self) -> int:
        return len(self.living_children_ids) + len(self.deceased_children_with_living_issue)

    def house(self, house_id: str) -> Optional[HouseStructure]:
        for house in self.polygamous_houses:
            if house.house_id == house_id:
                return house
        return None


class SuccessionStructureAnalyzer:
    """Walks a FamilyGraph from a deceased member to build a SuccessionStructure."""

    def analyze(self, deceased_id: str, graph: FamilyGraph,
                houses: Iterable[PolygamousHouse] = ()) -> SuccessionStructure:
        """
        Args:
            deceased_id: The deceased member.
            graph: Graph built from the family snapshot.
            houses: House records; output keeps their order.

        Returns:
            SuccessionStructure

        Raises:
            NotFoundError: If deceased_id is not in the graph.
        """
        if deceased_id not in graph:
            raise NotFoundError(deceased_id, "Deceased member")
        node = graph[deceased_id]

        spouses = frozenset(graph.living(node.spouse_ids))
        living_children = self._eldest_first(graph, graph.living(node.child_ids))
        per_stirpes = self._per_stirpes(graph, node.child_ids)
        parents = frozenset(graph.living(node.parent_ids))

        house_structures = []
        for house in houses:
            structure = self._house_structure(graph, house, spouses, living_children, per_stirpes)
            if structure is None:
                logger.debug(f"{house} has no live beneficiary; omitted")
                continue
            house_structures.append(structure)

        logger.debug(
            f"Succession structure for {deceased_id}: {len(spouses)} spouse(s), "
            f"{len(living_children)} living child(ren), {len(per_stirpes)} per-stirpes line(s), "
            f"{len(parents)} parent(s), {len(house_structures)} house(s)"
        )
        return SuccessionStructure(
            deceased_id=deceased_id,
            surviving_spouse_ids=spouses,
            living_children_ids=tuple(living_children),
            deceased_children_with_living_issue=_frozen_map(per_stirpes),
            living_parent_ids=parents,
            polygamous_houses=tuple(house_structures),
        )

    @staticmethod
    def _eldest_first(graph: FamilyGraph, member_ids: List[str]) -> List[str]:
        return sorted(member_ids, key=lambda mid: graph[mid].member.birth_sort_key())

    def _per_stirpes(self, graph: FamilyGraph, child_ids: Iterable[str]) -> Dict[str, List[str]]:
        result: Dict[str, List[str]] = {}
        for child_id in child_ids:
            child = graph[child_id]
            if not child.is_deceased:
                continue
            issue = self._eldest_first(graph, graph.living(child.child_ids))
            if issue:
                result[child_id] = issue
        return result

    @staticmethod
    def _house_structure(graph: FamilyGraph, house: PolygamousHouse, spouses: FrozenSet[str],
                         living_children: List[str],
                         per_stirpes: Dict[str, List[str]]) -> Optional[HouseStructure]:
        house_children = [cid for cid in living_children if graph[cid].house_id == house.id]
        house_stirpes = {cid: issue for cid, issue in per_stirpes.items() if graph[cid].house_id == house.id}
        head_survives = house.head_member_id is not None and house.head_member_id in spouses
        if not (head_survives or house_children or house_stirpes):
            return None
        return HouseStructure(
            house_id=house.id,
            house_head_id=house.head_member_id,
            living_children_ids=tuple(house_children),
            deceased_children_with_issue=_frozen_map(house_stirpes),
        )
