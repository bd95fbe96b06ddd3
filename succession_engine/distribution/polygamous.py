"""
S.40 distribution across the houses of a polygamous deceased.

Two passes: count units per house, then allocate floor(net * units / total)
to each house and give the remainder to the first house in iteration order
(not the house with the largest share).
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Dict, Iterable, List, Tuple

from succession_engine.analyzer import HouseStructure, SuccessionStructure
from succession_engine.distribution.base import DistributionPolicy, register_policy
from succession_engine.distribution.model import (
    ZERO,
    HouseAllocation,
    Money,
    PolygamousDistributionPlan,
    floor_share,
    percentage,
    to_money,
)
from succession_engine.house import PolygamousHouse
from succession_engine.law import LawSection
from succession_engine.model import Issue

logger = logging.getLogger(__name__)


@register_policy
@dataclass
class PolygamousDistributionPolicy(DistributionPolicy):
    """Allocates a net estate across houses by unit count (S.40)."""
    policy_id: str = "polygamous"

    def calculate(self, net_estate_value: Money, structure: SuccessionStructure,
                  houses: Iterable[PolygamousHouse] = ()) -> PolygamousDistributionPlan:
        """
        Args:
            net_estate_value: Estate value after debts.
            structure: Succession structure with house-scoped beneficiaries.
            houses: House records backing the structure's houses.

        Returns:
            PolygamousDistributionPlan

        Raises:
            ValueError: If the estate value is negative or not a number.
        """
        net = to_money(net_estate_value)
        registry = {house.id: house for house in houses}
        warnings: List[Issue] = []

        counted: List[Tuple[HouseStructure, PolygamousHouse, int, bool]] = []
        for house_structure in structure.polygamous_houses:
            house = registry.get(house_structure.house_id)
            if house is None:
                message = f"House {house_structure.house_id} not found in house registry; skipped"
                logger.warning(message)
                warnings.append(Issue("missing_house", "warning", message,
                                      related_person_ids=self._beneficiaries(house_structure, False)))
                continue
            wife_unit = house_structure.house_head_id in structure.surviving_spouse_ids
            units = int(wife_unit) + len(house_structure.living_children_ids) \
                + len(house_structure.deceased_children_with_issue)
            logger.debug(f"{house}: {units} unit(s) (wife={int(wife_unit)})")
            counted.append((house_structure, house, units, wife_unit))

        warnings.extend(self._unhoused_warnings(structure))
        total_units = sum(units for _, _, units, _ in counted)

        if total_units == 0:
            message = (f"No eligible beneficiary in any house; {LawSection.S40} does not apply "
                       f"and the estate falls to the kin-based rules")
            logger.warning(message)
            warnings.append(Issue("section_not_applicable", "warning", message,
                                  person_id=structure.deceased_id))
            return PolygamousDistributionPlan(
                total_estate_value=net,
                total_units=0,
                allocations=(),
                unallocated_value=net,
                warnings=tuple(warnings),
            )

        values = [floor_share(net, units, total_units) for _, _, units, _ in counted]
        remainder = net - sum(values, ZERO)
        values[0] += remainder
        if remainder:
            logger.debug(f"Remainder {remainder} assigned to first house {counted[0][1].id}")

        allocations = []
        for (house_structure, house, units, wife_unit), value in zip(counted, values):
            house_warnings = []
            blocked = house.assets_frozen or house.dissolved
            if blocked:
                state = "dissolved" if house.dissolved else "frozen"
                house_warnings.append(Issue(
                    "distribution_blocked", "warning",
                    f"House {house.id} assets are {state}: distribution blocked pending court order",
                    person_id=house.head_member_id,
                ))
            allocations.append(HouseAllocation(
                house_id=house.id,
                units=units,
                share_percentage=percentage(units, total_units, self.config.percentage_places),
                share_value=value,
                beneficiary_ids=self._beneficiaries(house_structure, wife_unit),
                warnings=tuple(house_warnings),
                is_blocked=blocked,
            ))

        return PolygamousDistributionPlan(
            total_estate_value=net,
            total_units=total_units,
            allocations=tuple(allocations),
            unallocated_value=ZERO,
            warnings=tuple(warnings),
        )

    @staticmethod
    def _beneficiaries(house_structure: HouseStructure, wife_unit: bool) -> Tuple[str, ...]:
        head = (house_structure.house_head_id,) if wife_unit else ()
        return head + tuple(house_structure.living_children_ids) \
            + tuple(house_structure.deceased_children_with_issue)

    @staticmethod
    def _unhoused_warnings(structure: SuccessionStructure) -> List[Issue]:
        heads = {h.house_head_id for h in structure.polygamous_houses}
        housed: Dict[str, str] = {}
        for house_structure in structure.polygamous_houses:
            for member_id in house_structure.living_children_ids:
                housed[member_id] = house_structure.house_id
            for member_id in house_structure.deceased_children_with_issue:
                housed[member_id] = house_structure.house_id

        issues = []
        for spouse_id in sorted(structure.surviving_spouse_ids - heads):
            issues.append(Issue("spouse_without_house", "warning",
                                f"Surviving spouse {spouse_id} heads no house and receives no unit",
                                person_id=spouse_id))
        heirs = list(structure.living_children_ids) + list(structure.deceased_children_with_living_issue)
        for child_id in heirs:
            if child_id not in housed:
                issues.append(Issue("child_without_house", "warning",
                                    f"Child {child_id} belongs to no house and receives no unit",
                                    person_id=child_id))
        return issues
