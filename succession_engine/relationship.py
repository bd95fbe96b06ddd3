"""
relationship.py - Typed kinship edges and the statutory inverse table.

An edge's type is the role of ``from_id`` relative to ``to_id``: a PARENT edge
from A to B says A is B's parent. Callers supply one direction; traversal
derives the other through INVERSE_TYPES, which is the only place inverse
logic lives.

Module: succession_engine.relationship
"""
from __future__ import annotations

__all__ = [
    'RelationshipType',
    'RelationshipStrength',
    'InheritanceRights',
    'RelationshipEdge',
    'INVERSE_TYPES',
    'inverse_type',
    'default_strength',
    'default_inheritance_rights',
]

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class RelationshipType(str, Enum):
    PARENT = "PARENT"
    CHILD = "CHILD"
    ADOPTED_CHILD = "ADOPTED_CHILD"
    STEPCHILD = "STEPCHILD"
    SPOUSE = "SPOUSE"
    SIBLING = "SIBLING"
    HALF_SIBLING = "HALF_SIBLING"
    GRANDPARENT = "GRANDPARENT"
    GRANDCHILD = "GRANDCHILD"
    AUNT_UNCLE = "AUNT_UNCLE"
    NIECE_NEPHEW = "NIECE_NEPHEW"
    COUSIN = "COUSIN"
    GUARDIAN = "GUARDIAN"
    OTHER = "OTHER"


class RelationshipStrength(str, Enum):
    FULL = "FULL"
    HALF = "HALF"
    STEP = "STEP"
    ADOPTED = "ADOPTED"
    FOSTER = "FOSTER"


class InheritanceRights(str, Enum):
    """Ordered weakest first so ``min`` gives the weakest link."""
    NONE = "NONE"
    PARTIAL = "PARTIAL"
    FULL = "FULL"

    @property
    def rank(self) -> int:
        return _RIGHTS_RANK[self]


_RIGHTS_RANK = {
    InheritanceRights.NONE: 0,
    InheritanceRights.PARTIAL: 1,
    InheritanceRights.FULL: 2,
}

INVERSE_TYPES: Mapping[RelationshipType, RelationshipType] = MappingProxyType({
    RelationshipType.PARENT: RelationshipType.CHILD,
    RelationshipType.CHILD: RelationshipType.PARENT,
    RelationshipType.ADOPTED_CHILD: RelationshipType.PARENT,
    RelationshipType.STEPCHILD: RelationshipType.PARENT,
    RelationshipType.SPOUSE: RelationshipType.SPOUSE,
    RelationshipType.SIBLING: RelationshipType.SIBLING,
    RelationshipType.HALF_SIBLING: RelationshipType.HALF_SIBLING,
    RelationshipType.GRANDPARENT: RelationshipType.GRANDCHILD,
    RelationshipType.GRANDCHILD: RelationshipType.GRANDPARENT,
    RelationshipType.AUNT_UNCLE: RelationshipType.NIECE_NEPHEW,
    RelationshipType.NIECE_NEPHEW: RelationshipType.AUNT_UNCLE,
    RelationshipType.COUSIN: RelationshipType.COUSIN,
    RelationshipType.GUARDIAN: RelationshipType.OTHER,
    RelationshipType.OTHER: RelationshipType.OTHER,
})

_DEFAULT_STRENGTH = MappingProxyType({
    RelationshipType.ADOPTED_CHILD: RelationshipStrength.ADOPTED,
    RelationshipType.STEPCHILD: RelationshipStrength.STEP,
    RelationshipType.HALF_SIBLING: RelationshipStrength.HALF,
})

_DEFAULT_RIGHTS = MappingProxyType({
    RelationshipType.PARENT: InheritanceRights.FULL,
    RelationshipType.CHILD: InheritanceRights.FULL,
    RelationshipType.ADOPTED_CHILD: InheritanceRights.FULL,
    RelationshipType.SPOUSE: InheritanceRights.FULL,
    RelationshipType.STEPCHILD: InheritanceRights.PARTIAL,
    RelationshipType.SIBLING: InheritanceRights.PARTIAL,
    RelationshipType.HALF_SIBLING: InheritanceRights.PARTIAL,
    RelationshipType.GRANDPARENT: InheritanceRights.PARTIAL,
    RelationshipType.GRANDCHILD: InheritanceRights.PARTIAL,
    RelationshipType.AUNT_UNCLE: InheritanceRights.PARTIAL,
    RelationshipType.NIECE_NEPHEW: InheritanceRights.PARTIAL,
    RelationshipType.COUSIN: InheritanceRights.PARTIAL,
    RelationshipType.GUARDIAN: InheritanceRights.NONE,
    RelationshipType.OTHER: InheritanceRights.NONE,
})


def inverse_type(relationship_type: RelationshipType) -> RelationshipType:
    """Role of ``to_id`` relative to ``from_id`` for an edge of the given type."""
    return INVERSE_TYPES[relationship_type]


def default_strength(relationship_type: RelationshipType, is_adopted: bool = False) -> RelationshipStrength:
    if is_adopted:
        return RelationshipStrength.ADOPTED
    return _DEFAULT_STRENGTH.get(relationship_type, RelationshipStrength.FULL)


def default_inheritance_rights(relationship_type: RelationshipType) -> InheritanceRights:
    return _DEFAULT_RIGHTS[relationship_type]


@dataclass(frozen=True)
class RelationshipEdge:
    """
    A directed kinship record between two members.

    Attributes:
        from_id: Member whose role the type names.
        to_id: The other member.
        type: Role of from_id relative to to_id.
        is_biological: Blood relationship flag from the relationship store.
        is_adopted: Legal adoption flag.
        strength: FULL/HALF/STEP/ADOPTED/FOSTER; derived from the type when omitted.
        inheritance_rights: FULL/PARTIAL/NONE; derived from the type when omitted.
    """
    from_id: str
    to_id: str
    type: RelationshipType
    is_biological: bool = True
    is_adopted: bool = False
    strength: Optional[RelationshipStrength] = None
    inheritance_rights: Optional[InheritanceRights] = None

    def __post_init__(self) -> None:
        if self.from_id == self.to_id:
            raise ValueError(f"Relationship cannot link member {self.from_id} to themselves")
        if self.strength is None:
            object.__setattr__(self, 'strength', default_strength(self.type, self.is_adopted))
        if self.inheritance_rights is None:
            object.__setattr__(self, 'inheritance_rights', default_inheritance_rights(self.type))

    @property
    def inverse(self) -> RelationshipType:
        return inverse_type(self.type)

    def __str__(self) -> str:
        return f"{self.from_id} -[{self.type.value}/{self.strength.value}]-> {self.to_id}"
