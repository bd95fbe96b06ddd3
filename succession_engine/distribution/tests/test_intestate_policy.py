"""
Tests for distribution.intestate module.
"""
from __future__ import annotations

import pytest
from decimal import Decimal

from succession_engine.config import SuccessionConfig
from succession_engine.distribution import (
    InterestType,
    IntestateDistributionPolicy,
    ShareRole,
    get_policy_registry,
)
from succession_engine.law import LawSection
from succession_engine.person import Person


def _by_interest(plan, interest):
    return [s for s in plan.shares if s.interest == interest]


class TestSpouseAndChildren:
    """S.35: effects and life interest to the spouse, remainder to the children."""

    @pytest.fixture
    def structure(self, make_structure):
        return make_structure(spouses=("W",), children=("C1", "C2"), stirpes={"X": ("G1", "G2")})

    def test_section_and_shares(self, intestate_policy, structure):
        plan = intestate_policy.calculate(900_000, structure, personal_effects_value=90_000)

        assert plan.section == LawSection.S35
        effects = _by_interest(plan, InterestType.PERSONAL_EFFECTS)
        assert [(s.beneficiary_id, s.share_value) for s in effects] == [("W", Decimal(90_000))]
        assert effects[0].legal_basis == LawSection.S35_1_A
        assert effects[0].share_percentage == Decimal("10.0000")

        life = _by_interest(plan, InterestType.LIFE_INTEREST)
        assert [(s.beneficiary_id, s.share_value) for s in life] == [("W", Decimal(810_000))]
        assert life[0].conditions

        remainders = _by_interest(plan, InterestType.REMAINDER)
        assert [(s.beneficiary_id, s.share_value) for s in remainders] == [
            ("C1", Decimal(270_000)), ("C2", Decimal(270_000)), ("X", Decimal(270_000)),
        ]

    def test_per_stirpes_unit(self, intestate_policy, structure):
        plan = intestate_policy.calculate(900_000, structure)

        share = plan.shares_for("X")[0]
        assert share.role == ShareRole.PER_STIRPES
        assert share.substitutes == ("G1", "G2")
        assert share.legal_basis == LawSection.S41
        assert any("G1, G2" in condition for condition in share.conditions)

    def test_capital_adds_up(self, intestate_policy, structure):
        plan = intestate_policy.calculate(1_000_001, structure, personal_effects_value=100)

        assert plan.distributed_value == Decimal(1_000_001)
        assert plan.unallocated_value == 0

    def test_no_effects_share_without_effects(self, intestate_policy, structure):
        plan = intestate_policy.calculate(900_000, structure)

        assert _by_interest(plan, InterestType.PERSONAL_EFFECTS) == []
        assert _by_interest(plan, InterestType.LIFE_INTEREST)[0].share_value == Decimal(900_000)

    def test_multiple_spouses_warn(self, intestate_policy, make_structure):
        structure = make_structure(spouses=("W2", "W1"), children=("C1",))

        plan = intestate_policy.calculate(1000, structure, personal_effects_value=101)

        assert [w.issue_type for w in plan.warnings] == ["multiple_spouses"]
        effects = _by_interest(plan, InterestType.PERSONAL_EFFECTS)
        assert [(s.beneficiary_id, s.share_value) for s in effects] == [("W1", Decimal(51)), ("W2", Decimal(50))]
        assert plan.distributed_value == Decimal(1000)

    def test_effects_exceeding_estate(self, intestate_policy, structure):
        with pytest.raises(ValueError, match="exceeds"):
            intestate_policy.calculate(100, structure, personal_effects_value=101)


class TestSingleClassOfHeirs:

    def test_spouse_only(self, intestate_policy, make_structure):
        plan = intestate_policy.calculate(500_000, make_structure(spouses=("W",), parents=("P",)))

        assert plan.section == LawSection.S36
        assert [(s.beneficiary_id, s.interest, s.share_value) for s in plan.shares] == [
            ("W", InterestType.ABSOLUTE, Decimal(500_000)),
        ]
        assert plan.shares[0].share_percentage == Decimal("100.0000")

    def test_children_only(self, intestate_policy, make_structure):
        plan = intestate_policy.calculate(100, make_structure(children=("C1", "C2", "C3")))

        assert plan.section == LawSection.S38
        assert [s.share_value for s in plan.shares] == [Decimal(34), Decimal(33), Decimal(33)]
        assert all(s.interest == InterestType.ABSOLUTE for s in plan.shares)
        assert plan.distributed_value == Decimal(100)

    def test_parents_only(self, intestate_policy, make_structure):
        plan = intestate_policy.calculate(1001, make_structure(parents=("PM", "PF")))

        assert plan.section == LawSection.S39
        assert [(s.beneficiary_id, s.role, s.share_value) for s in plan.shares] == [
            ("PF", ShareRole.PARENT, Decimal(501)), ("PM", ShareRole.PARENT, Decimal(500)),
        ]

    def test_nobody(self, intestate_policy, make_structure):
        plan = intestate_policy.calculate(750, make_structure())

        assert plan.shares == ()
        assert plan.unallocated_value == Decimal(750)
        assert [w.issue_type for w in plan.warnings] == ["no_close_relatives"]

    def test_zero_estate(self, intestate_policy, make_structure):
        plan = intestate_policy.calculate(0, make_structure(children=("C1",)))

        assert plan.shares[0].share_value == 0
        assert plan.shares[0].share_percentage == Decimal("0.0000")

    def test_negative_estate(self, intestate_policy, make_structure):
        with pytest.raises(ValueError):
            intestate_policy.calculate(-5, make_structure(children=("C1",)))


class TestMinors:
    """A minor's interest is contingent on reaching majority."""

    @pytest.fixture
    def members(self):
        return [
            Person("C1", age=30),
            Person("C2", is_minor=True),
            Person("G1", is_minor=True),
            Person("G2", age=25),
        ]

    def test_minor_child_contingent(self, intestate_policy, make_structure, members):
        plan = intestate_policy.calculate(1000, make_structure(children=("C1", "C2")), members)

        adult, minor = plan.shares
        assert adult.interest == InterestType.ABSOLUTE
        assert minor.interest == InterestType.CONTINGENT
        assert "Vests at age 18" in minor.conditions

    def test_minor_under_life_interest(self, intestate_policy, make_structure, members):
        plan = intestate_policy.calculate(1000, make_structure(spouses=("W",), children=("C2",)), members)

        share = plan.shares_for("C2")[0]
        assert share.interest == InterestType.CONTINGENT
        assert "Vests in possession when the life interest ends" in share.conditions

    def test_minor_substitutes_noted(self, intestate_policy, make_structure, members):
        structure = make_structure(stirpes={"X": ("G1", "G2")})

        share = intestate_policy.calculate(1000, structure, {m.id: m for m in members}).shares[0]

        assert share.interest == InterestType.ABSOLUTE
        assert "Shares of G1 vest at age 18" in share.conditions

    def test_majority_age_configurable(self, make_structure):
        policy = IntestateDistributionPolicy(config=SuccessionConfig(majority_age=21))
        plan = policy.calculate(1000, make_structure(children=("C1",)), [Person("C1", age=19)])

        assert plan.shares[0].interest == InterestType.CONTINGENT
        assert "Vests at age 21" in plan.shares[0].conditions

    def test_without_members_nothing_contingent(self, intestate_policy, make_structure):
        plan = intestate_policy.calculate(1000, make_structure(children=("C2",)))

        assert plan.shares[0].interest == InterestType.ABSOLUTE


def test_registered():
    assert get_policy_registry()["intestate"] is IntestateDistributionPolicy
