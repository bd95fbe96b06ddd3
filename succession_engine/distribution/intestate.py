"""
Monogamous intestate distribution (S.35, S.36, S.38, S.39).

The applicable section is chosen from the succession structure:
    - spouse and children: personal effects to the spouse, life interest in
      the residue to the spouse, residue in remainder to the children (S.35)
    - spouse, no children: everything to the spouse (S.36)
    - children, no spouse: equal shares to the children (S.38)
    - neither: parents in equal shares, otherwise unallocated (S.39)

A dead child who left living issue counts as one child unit whose share is
held for that issue (S.41).
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from succession_engine.analyzer import SuccessionStructure
from succession_engine.distribution.base import DistributionPolicy, register_policy
from succession_engine.distribution.model import (
    ZERO,
    InterestType,
    IntestateDistributionPlan,
    Money,
    Share,
    ShareRole,
    percentage,
    split_evenly,
    to_money,
)
from succession_engine.law import LawSection
from succession_engine.model import Issue
from succession_engine.person import Person

logger = logging.getLogger(__name__)

Members = Union[Mapping[str, Person], Iterable[Person], None]

# (beneficiary id, role, substitutes)
_ChildUnit = Tuple[str, ShareRole, Tuple[str, ...]]


def _index_members(members: Members) -> Dict[str, Person]:
    if members is None:
        return {}
    if isinstance(members, Mapping):
        return dict(members)
    return {member.id: member for member in members}


@register_policy
@dataclass
class IntestateDistributionPolicy(DistributionPolicy):
    """Distributes a monogamous intestate estate."""
    policy_id: str = "intestate"

    def calculate(self, net_estate_value: Money, structure: SuccessionStructure,
                  members: Members = None, personal_effects_value: Money = 0) -> IntestateDistributionPlan:
        """
        Args:
            net_estate_value: Estate value after debts.
            structure: Succession structure of the deceased.
            members: Member records, used to find minors; without them no interest is contingent.
            personal_effects_value: Part of the estate that is personal and household effects.

        Returns:
            IntestateDistributionPlan

        Raises:
            ValueError: If an amount is negative, or the effects exceed the estate.
        """
        net = to_money(net_estate_value)
        effects = to_money(personal_effects_value, "Personal effects value")
        if effects > net:
            raise ValueError(f"Personal effects value {effects} exceeds the net estate {net}")

        index = _index_members(members)
        spouses = sorted(structure.surviving_spouse_ids)
        child_units = self._child_units(structure)
        warnings: List[Issue] = []

        if spouses and child_units:
            if len(spouses) > 1:
                warnings.append(Issue(
                    "multiple_spouses", "warning",
                    f"{len(spouses)} surviving spouses under monogamous rules; consider {LawSection.S40}",
                    person_id=structure.deceased_id, related_person_ids=tuple(spouses),
                ))
            section = LawSection.S35
            shares = self._spouse_and_children(net, effects, spouses, child_units, index)
        elif spouses:
            section = LawSection.S36
            shares = [self._share(sid, ShareRole.SPOUSE, InterestType.ABSOLUTE, value, net, LawSection.S36)
                      for sid, value in zip(spouses, split_evenly(net, len(spouses)))]
        elif child_units:
            section = LawSection.S38
            shares = self._children(net, net, child_units, InterestType.ABSOLUTE, LawSection.S38, index)
        else:
            section = LawSection.S39
            parents = sorted(structure.living_parent_ids)
            shares = [self._share(pid, ShareRole.PARENT, InterestType.ABSOLUTE, value, net, LawSection.S39)
                      for pid, value in zip(parents, split_evenly(net, len(parents)))]

        unallocated = ZERO
        if not shares:
            unallocated = net
            message = ("No surviving spouse, issue or parent; the estate passes to more remote "
                       "relatives in the order of S.39")
            logger.warning(f"{structure.deceased_id}: {message}")
            warnings.append(Issue("no_close_relatives", "warning", message, person_id=structure.deceased_id))

        logger.debug(f"{structure.deceased_id}: {section} distribution with {len(shares)} share(s)")
        return IntestateDistributionPlan(
            total_estate_value=net,
            section=section,
            shares=tuple(shares),
            unallocated_value=unallocated,
            warnings=tuple(warnings),
        )

    @staticmethod
    def _child_units(structure: SuccessionStructure) -> List[_ChildUnit]:
        units: List[_ChildUnit] = [(cid, ShareRole.CHILD, ()) for cid in structure.living_children_ids]
        for dead_child_id, issue in structure.deceased_children_with_living_issue.items():
            units.append((dead_child_id, ShareRole.PER_STIRPES, tuple(issue)))
        return units

    def _spouse_and_children(self, net, effects, spouses: List[str],
                             child_units: List[_ChildUnit], index: Dict[str, Person]) -> List[Share]:
        residue = net - effects
        shares = []
        if effects:
            for sid, value in zip(spouses, split_evenly(effects, len(spouses))):
                shares.append(self._share(sid, ShareRole.SPOUSE, InterestType.PERSONAL_EFFECTS,
                                          value, net, LawSection.S35_1_A))
        for sid, value in zip(spouses, split_evenly(residue, len(spouses))):
            shares.append(self._share(
                sid, ShareRole.SPOUSE, InterestType.LIFE_INTEREST, value, net, LawSection.S35_1_B,
                conditions=("Life interest ends on the spouse's death or remarriage",),
            ))
        shares.extend(self._children(residue, net, child_units, InterestType.REMAINDER,
                                     LawSection.S35_1_B, index))
        return shares

    def _children(self, amount, net, child_units: List[_ChildUnit], interest: InterestType,
                  basis: LawSection, index: Dict[str, Person]) -> List[Share]:
        shares = []
        majority = self.config.majority_age
        for (beneficiary_id, role, substitutes), value in zip(child_units, split_evenly(amount, len(child_units))):
            conditions = []
            share_interest = interest
            if interest == InterestType.REMAINDER:
                conditions.append("Vests in possession when the life interest ends")
            if role == ShareRole.PER_STIRPES:
                conditions.append(f"Held for {', '.join(substitutes)} in equal shares ({LawSection.S41})")
                minors = [sid for sid in substitutes if self._is_minor(sid, index)]
                if minors:
                    conditions.append(f"Shares of {', '.join(minors)} vest at age {majority}")
            elif self._is_minor(beneficiary_id, index):
                share_interest = InterestType.CONTINGENT
                conditions.append(f"Vests at age {majority}")
            shares.append(self._share(
                beneficiary_id, role, share_interest, value, net,
                LawSection.S41 if role == ShareRole.PER_STIRPES else basis,
                substitutes=substitutes, conditions=tuple(conditions),
            ))
        return shares

    def _is_minor(self, member_id: str, index: Dict[str, Person]) -> bool:
        member: Optional[Person] = index.get(member_id)
        return member is not None and member.is_minor_on(self.config.majority_age)

    def _share(self, beneficiary_id: str, role: ShareRole, interest: InterestType, value, net,
               basis: LawSection, substitutes: Tuple[str, ...] = (),
               conditions: Tuple[str, ...] = ()) -> Share:
        return Share(
            beneficiary_id=beneficiary_id,
            role=role,
            interest=interest,
            share_percentage=percentage(value, net, self.config.percentage_places),
            share_value=value,
            legal_basis=basis,
            substitutes=substitutes,
            conditions=conditions,
        )
