"""
family_graph.py - Kinship graph built from a flat snapshot of family records.

FamilyGraph turns members, relationship edges, marriages and houses into a
read-only mapping of member id to FamilyGraphNode. It supports:
    - A single edge insertion point that records the statutory inverse
    - Current marriages materialised as spouse links
    - Ancestry cycle detection before generational layering
    - Multi-source BFS depth calculation (spouses share a generation)

Referentially incomplete snapshots are tolerated: anything that cannot be
linked is skipped and reported in ``FamilyGraph.issues``.

Module: succession_engine.family_graph
"""
from __future__ import annotations

__all__ = ['FamilyGraphNode', 'FamilyGraph']

import logging
from collections import deque
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from succession_engine.config import SuccessionConfig
from succession_engine.exceptions import DataIntegrityError
from succession_engine.house import PolygamousHouse, validate_house_order
from succession_engine.marriage import MarriageRecord
from succession_engine.model import Issue
from succession_engine.person import Person
from succession_engine.relationship import RelationshipEdge, RelationshipType, inverse_type

logger = logging.getLogger(__name__)

# Forward type -> (list on the from-node receiving to_id, list on the to-node receiving from_id)
_STRUCTURAL_LINKS: Dict[RelationshipType, Tuple[str, str]] = {
    RelationshipType.PARENT: ('child_ids', 'parent_ids'),
    RelationshipType.CHILD: ('parent_ids', 'child_ids'),
    RelationshipType.ADOPTED_CHILD: ('parent_ids', 'child_ids'),
    RelationshipType.SPOUSE: ('spouse_ids', 'spouse_ids'),
    RelationshipType.SIBLING: ('sibling_ids', 'sibling_ids'),
    RelationshipType.HALF_SIBLING: ('sibling_ids', 'sibling_ids'),
}


def _append_unique(items: List, value) -> bool:
    if value in items:
        return False
    items.append(value)
    return True


@dataclass
class FamilyGraphNode:
    """
    One member's position in the graph.

    Id lists are lookups into the owning FamilyGraph, never ownership of
    other members' records.

    Attributes:
        member: The member record, as supplied.
        parent_ids: Parents (biological or adoptive).
        child_ids: Children (biological or adopted).
        spouse_ids: Current spouses.
        sibling_ids: Full and half siblings.
        kin: (role of this member, other member id) for every recorded edge, inverses included.
        depth: Generation distance from the shallowest root ancestor.
        house_id: House the member belongs to.
        is_house_head: Whether any house names this member as its head.
    """
    member: Person
    parent_ids: List[str] = field(default_factory=list)
    child_ids: List[str] = field(default_factory=list)
    spouse_ids: List[str] = field(default_factory=list)
    sibling_ids: List[str] = field(default_factory=list)
    kin: List[Tuple[RelationshipType, str]] = field(default_factory=list)
    depth: Optional[int] = None
    house_id: Optional[str] = None
    is_house_head: bool = False

    @property
    def id(self) -> str:
        return self.member.id

    @property
    def is_deceased(self) -> bool:
        return self.member.is_deceased

    def __str__(self) -> str:
        return f"FamilyGraphNode({self.id}, depth={self.depth}, house={self.house_id})"


class FamilyGraph(Mapping):
    """
    Read-only mapping of member id to FamilyGraphNode.

    Build with FamilyGraph.build(); the constructor only creates the empty
    node set so edges can be added through add_edge().

    Attributes:
        issues: Non-fatal problems found while building.
    """

    def __init__(self, members: Iterable[Person], houses: Iterable[PolygamousHouse] = (),
                 config: Optional[SuccessionConfig] = None) -> None:
        self.config = config or SuccessionConfig.load_default()
        self.issues: List[Issue] = []
        self._nodes: Dict[str, FamilyGraphNode] = {}

        for member in members:
            if member.id in self._nodes:
                self._issue('duplicate_member', f"Member {member.id} supplied more than once; "
                                                f"keeping the first record", member.id)
                continue
            self._nodes[member.id] = FamilyGraphNode(member=member, house_id=member.polygamous_house_id)

        for house in houses:
            if house.head_member_id is None:
                continue
            node = self._nodes.get(house.head_member_id)
            if node is None:
                self._issue('unknown_house_head', f"House {house.id} head {house.head_member_id} "
                                                  f"is not in the snapshot", house.head_member_id)
                continue
            node.is_house_head = True
            if node.house_id is None:
                node.house_id = house.id

    # Mapping interface

    def __getitem__(self, member_id: str) -> FamilyGraphNode:
        return self._nodes[member_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"FamilyGraph(members={len(self._nodes)}, issues={len(self.issues)})"

    @classmethod
    def build(
        cls,
        members: Iterable[Person],
        relationships: Iterable[RelationshipEdge] = (),
        marriages: Iterable[MarriageRecord] = (),
        houses: Iterable[PolygamousHouse] = (),
        config: Optional[SuccessionConfig] = None,
    ) -> FamilyGraph:
        """
        Build a graph from a snapshot.

        Args:
            members: Member records.
            relationships: Directed relationship edges; either or both directions may be supplied.
            marriages: Marriage records; only current ones become spouse links.
            houses: House records of the family.
            config: Engine configuration (packaged defaults when None).

        Returns:
            FamilyGraph with depths calculated.

        Raises:
            DataIntegrityError: If parent/child links form a cycle and cycles are configured to raise.
        """
        houses = list(houses)
        graph = cls(members, houses, config)

        for edge in relationships:
            graph._add_recorded_edge(edge)

        for marriage in marriages:
            if not marriage.is_current:
                logger.debug(f"Skipping non-current {marriage}")
                continue
            missing = [sid for sid in (marriage.spouse1_id, marriage.spouse2_id) if sid not in graph]
            if missing:
                graph._issue('dangling_marriage', f"{marriage} references unknown members {missing}",
                             related=(marriage.spouse1_id, marriage.spouse2_id))
                continue
            graph.add_edge(marriage.spouse1_id, marriage.spouse2_id, RelationshipType.SPOUSE)

        graph.issues.extend(validate_house_order(houses))
        graph.check_ancestry_cycles()
        graph.calculate_depth()
        logger.debug(f"Built {graph!r}")
        return graph

    def _issue(self, issue_type: str, message: str, person_id: Optional[str] = None,
               related: Sequence[str] = ()) -> None:
        issue = Issue(issue_type=issue_type, severity="warning", message=message,
                      person_id=person_id, related_person_ids=tuple(related))
        logger.debug(str(issue))
        self.issues.append(issue)

    def _add_recorded_edge(self, edge: RelationshipEdge) -> None:
        missing = [mid for mid in (edge.from_id, edge.to_id) if mid not in self._nodes]
        if missing:
            self._issue('dangling_relationship',
                        f"Skipped {edge.type.value} edge {edge.from_id} -> {edge.to_id}: "
                        f"unknown members {missing}",
                        related=(edge.from_id, edge.to_id))
            return
        self.add_edge(edge.from_id, edge.to_id, edge.type)

    def add_edge(self, from_id: str, to_id: str, relationship_type: RelationshipType) -> bool:
        """
        Record that from_id is ``relationship_type`` of to_id, along with the inverse.

        Structural links (parent/child/spouse/sibling) follow the forward type;
        step and wider kin types are recorded in ``kin`` only. Adding a link
        that already exists is a no-op.

        Returns:
            bool: True if anything new was recorded.
        """
        source = self._nodes[from_id]
        target = self._nodes[to_id]
        added = _append_unique(source.kin, (relationship_type, to_id))
        added = _append_unique(target.kin, (inverse_type(relationship_type), from_id)) or added

        links = _STRUCTURAL_LINKS.get(relationship_type)
        if links:
            source_list, target_list = links
            added = _append_unique(getattr(source, source_list), to_id) or added
            added = _append_unique(getattr(target, target_list), from_id) or added
        return added

    def find_ancestry_cycle(self) -> Optional[List[str]]:
        """Return one parent -> child cycle as a list of member ids, or None."""
        state: Dict[str, int] = {}  # 1 = on stack, 2 = done
        for start in self._nodes:
            if start in state:
                continue
            stack: List[Tuple[str, Iterator[str]]] = [(start, iter(self._nodes[start].child_ids))]
            path = [start]
            state[start] = 1
            while stack:
                current, children = stack[-1]
                child = next(children, None)
                if child is None:
                    state[current] = 2
                    stack.pop()
                    path.pop()
                elif state.get(child) == 1:
                    return path[path.index(child):] + [child]
                elif child not in state:
                    state[child] = 1
                    path.append(child)
                    stack.append((child, iter(self._nodes[child].child_ids)))
        return None

    def check_ancestry_cycles(self) -> None:
        cycle = self.find_ancestry_cycle()
        if cycle is None:
            return
        message = f"Ancestry cycle: {' -> '.join(cycle)}"
        if self.config.strict_cycles:
            raise DataIntegrityError(message)
        logger.warning(message)
        self._issue('ancestry_cycle', message, person_id=cycle[0], related=tuple(cycle[1:-1]))

    def calculate_depth(self) -> None:
        """
        Assign generational depth by multi-source BFS.

        Roots (members with no in-graph parent) start at depth 0; spouses share
        a depth and children sit one below. Members only reachable through a
        tolerated cycle are seeded at depth 0 afterwards.
        """
        for node in self._nodes.values():
            node.depth = None

        roots = [mid for mid, node in self._nodes.items() if not node.parent_ids]
        self._layer(roots)
        unreached = [mid for mid, node in self._nodes.items() if node.depth is None]
        for member_id in unreached:
            if self._nodes[member_id].depth is None:
                self._layer([member_id])

    def _layer(self, seeds: List[str]) -> None:
        queue = deque()
        for member_id in seeds:
            self._nodes[member_id].depth = 0
            queue.append(member_id)
        while queue:
            node = self._nodes[queue.popleft()]
            for spouse_id in node.spouse_ids:
                if self._nodes[spouse_id].depth is None:
                    self._nodes[spouse_id].depth = node.depth
                    queue.append(spouse_id)
            for child_id in node.child_ids:
                if self._nodes[child_id].depth is None:
                    self._nodes[child_id].depth = node.depth + 1
                    queue.append(child_id)

    def generation(self, depth: int) -> List[str]:
        """Members at the given depth, in member order."""
        return [mid for mid, node in self._nodes.items() if node.depth == depth]

    @property
    def num_generations(self) -> int:
        depths = [node.depth for node in self._nodes.values() if node.depth is not None]
        if not depths:
            return 0
        return max(depths) - min(depths) + 1

    def living(self, member_ids: Iterable[str]) -> List[str]:
        """Filter ids to members present in the graph and not deceased, keeping order."""
        return [mid for mid in member_ids if mid in self._nodes and not self._nodes[mid].is_deceased]

    def relationship_of(self, member_id: str, other_id: str) -> Optional[RelationshipType]:
        """
        Role of member_id relative to other_id.

        A recorded edge between the two wins. Otherwise the role is derived
        through parent, child and sibling links: spouse, parent, child,
        sibling (half when both have two recorded parents and share one),
        grandparent, grandchild.

        Returns:
            RelationshipType, or None if either member is unknown or no such link exists.
        """
        if member_id not in self._nodes or other_id not in self._nodes or member_id == other_id:
            return None
        member = self._nodes[member_id]
        other = self._nodes[other_id]

        for role, kin_id in member.kin:
            if kin_id == other_id:
                return role

        if member_id in other.spouse_ids:
            return RelationshipType.SPOUSE
        if member_id in other.parent_ids:
            return RelationshipType.PARENT
        if member_id in other.child_ids:
            return RelationshipType.CHILD

        shared = set(member.parent_ids) & set(other.parent_ids)
        if member_id in other.sibling_ids or shared:
            if shared and len(member.parent_ids) > 1 and len(other.parent_ids) > 1 \
                    and set(member.parent_ids) != set(other.parent_ids):
                return RelationshipType.HALF_SIBLING
            return RelationshipType.SIBLING

        if any(member_id in self._nodes[pid].parent_ids for pid in other.parent_ids):
            return RelationshipType.GRANDPARENT
        if any(member_id in self._nodes[cid].child_ids for cid in other.child_ids):
            return RelationshipType.GRANDCHILD
        return None
