"""
path_finder.py - Shortest relationship path between two family members.

Classifies the legal nature of an arbitrary pair of members: how far apart
they are, the weakest inheritance rights along the way, whether adoption,
half-blood or step links are involved, and a kinship label.

The search is a BFS capped at a configurable number of edges. When several
shortest paths exist the first one found wins, in edge insertion order; the
result is therefore not unique, only minimal.

Module: succession_engine.path_finder
"""
from __future__ import annotations

__all__ = ['PathStep', 'PathResult', 'RelationshipPathFinder']

import logging
from collections import defaultdict, deque
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from succession_engine.config import SuccessionConfig
from succession_engine.marriage import MarriageRecord
from succession_engine.relationship import (
    InheritanceRights,
    RelationshipEdge,
    RelationshipStrength,
    RelationshipType,
    inverse_type,
)

logger = logging.getLogger(__name__)

# Generation change when stepping to a member holding this role
_GENERATION_STEP = {
    RelationshipType.PARENT: -1,
    RelationshipType.CHILD: 1,
    RelationshipType.ADOPTED_CHILD: 1,
    RelationshipType.STEPCHILD: 1,
    RelationshipType.GRANDPARENT: -2,
    RelationshipType.GRANDCHILD: 2,
    RelationshipType.AUNT_UNCLE: -1,
    RelationshipType.NIECE_NEPHEW: 1,
}

_SINGLE_STEP_LABELS = {
    RelationshipType.PARENT: 'parent',
    RelationshipType.CHILD: 'child',
    RelationshipType.ADOPTED_CHILD: 'adopted child',
    RelationshipType.STEPCHILD: 'stepchild',
    RelationshipType.SPOUSE: 'spouse',
    RelationshipType.SIBLING: 'sibling',
    RelationshipType.HALF_SIBLING: 'half-sibling',
    RelationshipType.GRANDPARENT: 'grandparent',
    RelationshipType.GRANDCHILD: 'grandchild',
    RelationshipType.AUNT_UNCLE: 'aunt/uncle',
    RelationshipType.NIECE_NEPHEW: 'niece/nephew',
    RelationshipType.COUSIN: 'cousin',
    RelationshipType.GUARDIAN: 'guardian',
    RelationshipType.OTHER: 'relative',
}

_NON_BLOOD_TYPES = frozenset({
    RelationshipType.SPOUSE,
    RelationshipType.STEPCHILD,
    RelationshipType.GUARDIAN,
    RelationshipType.OTHER,
})


@dataclass(frozen=True)
class PathStep:
    """
    One edge traversed on a path.

    Attributes:
        from_id: Member the step leaves.
        to_id: Member the step reaches.
        relationship_type: Role of to_id relative to from_id.
        recorded_type: Type of the underlying edge as it was recorded.
        strength: Strength of the underlying edge.
        inheritance_rights: Rights carried by the underlying edge.
    """
    from_id: str
    to_id: str
    relationship_type: RelationshipType
    recorded_type: RelationshipType
    strength: RelationshipStrength
    inheritance_rights: InheritanceRights


@dataclass(frozen=True)
class PathResult:
    from_id: str
    to_id: str
    member_ids: Tuple[str, ...]
    steps: Tuple[PathStep, ...]
    distance: int
    inheritance_rights: InheritanceRights
    relationship_strength: RelationshipStrength
    generation_delta: int
    kinship: str
    is_blood_relation: bool


def _weakest_rights(steps: Sequence[PathStep]) -> InheritanceRights:
    if not steps:
        return InheritanceRights.FULL
    return min((step.inheritance_rights for step in steps), key=lambda rights: rights.rank)


def _classify_strength(steps: Sequence[PathStep]) -> RelationshipStrength:
    """ADOPTED beats HALF beats STEP beats FULL, on presence rather than count."""
    def any_step(edge_type: RelationshipType, strength: RelationshipStrength) -> bool:
        return any(s.recorded_type == edge_type or s.strength == strength for s in steps)

    if any_step(RelationshipType.ADOPTED_CHILD, RelationshipStrength.ADOPTED):
        return RelationshipStrength.ADOPTED
    if any_step(RelationshipType.HALF_SIBLING, RelationshipStrength.HALF):
        return RelationshipStrength.HALF
    if any_step(RelationshipType.STEPCHILD, RelationshipStrength.STEP):
        return RelationshipStrength.STEP
    return RelationshipStrength.FULL


def _is_blood(steps: Sequence[PathStep]) -> bool:
    return all(
        s.recorded_type not in _NON_BLOOD_TYPES
        and s.strength not in (RelationshipStrength.STEP, RelationshipStrength.FOSTER)
        for s in steps
    )


def _determine_kinship(steps: Sequence[PathStep], generation: int, is_blood: bool) -> str:
    """Kinship label from step count and generation difference."""
    distance = len(steps)
    if distance == 0:
        return 'self'
    if distance == 1:
        step = steps[0]
        if step.relationship_type == RelationshipType.PARENT:
            if step.recorded_type == RelationshipType.STEPCHILD:
                return 'step-parent'
            if step.recorded_type == RelationshipType.ADOPTED_CHILD:
                return 'adoptive parent'
        return _SINGLE_STEP_LABELS[step.relationship_type]

    if not is_blood:
        if any(s.recorded_type == RelationshipType.SPOUSE for s in steps):
            return 'in-law'
        return 'step-relative'

    # Direct ancestors
    if generation < 0 and distance == -generation:
        if generation == -1:
            return 'parent'
        elif generation == -2:
            return 'grandparent'
        elif generation == -3:
            return 'great-grandparent'
        else:
            return 'ancestor'

    # Direct descendants
    if generation > 0 and distance == generation:
        if generation == 1:
            return 'child'
        elif generation == 2:
            return 'grandchild'
        elif generation == 3:
            return 'great-grandchild'
        else:
            return 'descendant'

    # Collateral lines
    if generation == -1:
        return 'aunt/uncle'
    if generation < -1:
        return 'great-aunt/uncle'
    if generation == 1:
        return 'niece/nephew'
    if generation > 1:
        return 'grand-niece/nephew'
    if distance == 2:
        return 'sibling'
    if distance <= 4:
        return 'cousin'
    return f'relative ({distance} steps away)'


class RelationshipPathFinder:
    """
    BFS over relationship and marriage records.

    Attributes:
        max_depth: Longest path, in edges, that will be searched.
    """

    def __init__(self, config: Optional[SuccessionConfig] = None, max_depth: Optional[int] = None) -> None:
        config = config or SuccessionConfig.load_default()
        self.max_depth = config.max_path_depth if max_depth is None else max_depth

    @staticmethod
    def build_adjacency(relationships: Iterable[RelationshipEdge],
                        marriages: Iterable[MarriageRecord] = ()) -> Dict[str, List[PathStep]]:
        """Adjacency list holding both directions of every edge, in insertion order."""
        adjacency: Dict[str, List[PathStep]] = defaultdict(list)
        for edge in relationships:
            adjacency[edge.from_id].append(PathStep(
                edge.from_id, edge.to_id, inverse_type(edge.type), edge.type,
                edge.strength, edge.inheritance_rights))
            adjacency[edge.to_id].append(PathStep(
                edge.to_id, edge.from_id, edge.type, edge.type,
                edge.strength, edge.inheritance_rights))
        for marriage in marriages:
            if not marriage.is_current:
                continue
            for a, b in ((marriage.spouse1_id, marriage.spouse2_id), (marriage.spouse2_id, marriage.spouse1_id)):
                adjacency[a].append(PathStep(
                    a, b, RelationshipType.SPOUSE, RelationshipType.SPOUSE,
                    RelationshipStrength.FULL, InheritanceRights.FULL))
        return adjacency

    def find_path(self, from_id: str, to_id: str, relationships: Iterable[RelationshipEdge],
                  marriages: Iterable[MarriageRecord] = ()) -> Optional[PathResult]:
        """
        Find the first shortest path from from_id to to_id.

        Args:
            from_id: Start member.
            to_id: Target member.
            relationships: Relationship edges (one direction is enough).
            marriages: Marriage records; current ones are traversable spouse links.

        Returns:
            PathResult, or None if either member is unknown or no path exists within max_depth.
        """
        adjacency = self.build_adjacency(relationships, marriages)
        if from_id not in adjacency or to_id not in adjacency:
            logger.debug(f"No path {from_id} -> {to_id}: member not in any relationship")
            return None
        if from_id == to_id:
            return self._analyze(from_id, to_id, [])

        queue = deque([(from_id, [])])
        visited = {from_id}
        while queue:
            current_id, path = queue.popleft()
            if len(path) >= self.max_depth:
                continue
            for step in adjacency[current_id]:
                if step.to_id in visited:
                    continue
                new_path = path + [step]
                if step.to_id == to_id:
                    return self._analyze(from_id, to_id, new_path)
                visited.add(step.to_id)
                queue.append((step.to_id, new_path))

        logger.debug(f"No path {from_id} -> {to_id} within {self.max_depth} steps")
        return None

    @staticmethod
    def _analyze(from_id: str, to_id: str, steps: List[PathStep]) -> PathResult:
        generation = sum(_GENERATION_STEP.get(step.relationship_type, 0) for step in steps)
        is_blood = _is_blood(steps)
        return PathResult(
            from_id=from_id,
            to_id=to_id,
            member_ids=(from_id,) + tuple(step.to_id for step in steps),
            steps=tuple(steps),
            distance=len(steps),
            inheritance_rights=_weakest_rights(steps),
            relationship_strength=_classify_strength(steps),
            generation_delta=generation,
            kinship=_determine_kinship(steps, generation, is_blood),
            is_blood_relation=is_blood,
        )
