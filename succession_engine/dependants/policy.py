"""
S.29 dependant qualification.

The rules are evaluated in priority order and the first that matches
decides. The spouse and cohabitant rules follow the statute's gendered
wording literally: a wife of a male deceased, or a woman living with him as
his wife, is an automatic dependant; a husband must show he was maintained.
These branches transcribe the law and must not be made symmetric without
legal sign-off.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging
from typing import Dict, Iterable, Optional, Tuple

from succession_engine.config import SuccessionConfig
from succession_engine.dependants.model import DependantAssessment, DependantContext, DependencyLevel
from succession_engine.law import CITATIONS, LawSection
from succession_engine.marriage import MarriageEndReason
from succession_engine.person import Gender, Person
from succession_engine.relationship import RelationshipStrength, RelationshipType

logger = logging.getLogger(__name__)

_CHILD_TYPES = frozenset({RelationshipType.CHILD, RelationshipType.ADOPTED_CHILD})
_NON_BIRTH_STRENGTHS = frozenset({RelationshipStrength.STEP, RelationshipStrength.FOSTER})
_EXTENDED_FAMILY = frozenset({
    RelationshipType.PARENT,
    RelationshipType.SIBLING,
    RelationshipType.HALF_SIBLING,
    RelationshipType.GRANDPARENT,
    RelationshipType.GRANDCHILD,
})


def _automatic(basis: LawSection, reason: str) -> DependantAssessment:
    return DependantAssessment(True, basis, DependencyLevel.FULL, False, reason)


def _with_proof(basis: LawSection, reason: str) -> DependantAssessment:
    return DependantAssessment(True, basis, DependencyLevel.PARTIAL, True, reason)


def _fails(basis: Optional[LawSection], reason: str, proof_would_help: bool = False) -> DependantAssessment:
    return DependantAssessment(False, basis, DependencyLevel.NONE, proof_would_help, reason)


@dataclass
class DependantQualificationPolicy:
    """
    Decides whether a candidate is a dependant of the deceased.

    Attributes:
        config: Engine configuration (age of majority for considerations)
    """
    config: SuccessionConfig = field(default_factory=SuccessionConfig.load_default)

    def qualifies(self, deceased: Person, candidate: Person, relationship: RelationshipType,
                  context: Optional[DependantContext] = None) -> DependantAssessment:
        """
        Args:
            deceased: The deceased member.
            candidate: The claimant.
            relationship: Role of the candidate relative to the deceased.
            context: Evidence facts; all false when omitted.

        Returns:
            DependantAssessment with a non-empty reason.
        """
        context = context or DependantContext()
        assessment = self._decide(deceased, candidate, relationship, context)
        assessment = replace(assessment, considerations=self._considerations(candidate))
        logger.debug(f"Dependant check {candidate.id} ({relationship.value}) of {deceased.id}: "
                     f"{assessment.dependency_level.value} - {assessment.reason}")
        return assessment

    def assess_all(self, deceased: Person,
                   candidates: Iterable[Tuple[Person, RelationshipType, Optional[DependantContext]]]
                   ) -> Dict[str, DependantAssessment]:
        """Assess several candidates; keyed by candidate id in input order."""
        return {
            candidate.id: self.qualifies(deceased, candidate, relationship, context)
            for candidate, relationship, context in candidates
        }

    def _decide(self, deceased: Person, candidate: Person, relationship: RelationshipType,
                context: DependantContext) -> DependantAssessment:
        if relationship == RelationshipType.SPOUSE:
            return self._spouse(deceased, context)

        if relationship in _CHILD_TYPES and context.strength not in _NON_BIRTH_STRENGTHS:
            return _automatic(LawSection.S29_A,
                              f"Child of the deceased qualifies whether or not maintained "
                              f"({LawSection.S29_A}: {CITATIONS[LawSection.S29_A]})")

        if relationship == RelationshipType.STEPCHILD or relationship in _CHILD_TYPES:
            kind = "Foster child" if context.strength == RelationshipStrength.FOSTER else "Stepchild"
            if context.was_maintained:
                return _with_proof(LawSection.S29_B,
                                   f"{kind} qualifies as maintained by the deceased ({LawSection.S29_B})")
            return _fails(LawSection.S29_B,
                          f"{kind} was not maintained by the deceased; {LawSection.S29_B} covers "
                          f"step-children only where maintained", proof_would_help=True)

        if context.is_cohabitant:
            return self._cohabitant(deceased, candidate)

        if relationship in _EXTENDED_FAMILY:
            label = relationship.value.lower().replace('_', '-')
            if context.was_maintained:
                return _with_proof(LawSection.S29_B,
                                   f"{label.capitalize()} qualifies as maintained by the deceased "
                                   f"({LawSection.S29_B})")
            return _fails(LawSection.S29_B,
                          f"{label.capitalize()} qualifies under {LawSection.S29_B} only if maintained "
                          f"by the deceased; no maintenance shown", proof_would_help=True)

        return _fails(None, f"Relationship type not covered: {relationship.value} is not a dependant "
                            f"category under S.29")

    @staticmethod
    def _spouse(deceased: Person, context: DependantContext) -> DependantAssessment:
        marriage = context.marriage
        subsisting = marriage is None or marriage.is_current \
            or marriage.end_reason == MarriageEndReason.DEATH_OF_SPOUSE
        if not subsisting:
            if context.maintenance_order_exists or context.was_maintained:
                evidence = "a maintenance order" if context.maintenance_order_exists else "maintenance"
                return _with_proof(LawSection.S29_A,
                                   f"Former spouse qualifies on proof of {evidence} ({LawSection.S29_A})")
            ended = marriage.end_reason.value.lower() if marriage.end_reason else "union no longer active"
            return _fails(LawSection.S29_A,
                          f"Former spouse ({ended}) without a maintenance "
                          f"order or maintenance does not qualify", proof_would_help=True)

        # Statutory wording: "wife or wives" automatically; a husband only if maintained (S.29(c))
        if deceased.gender == Gender.MALE:
            return _automatic(LawSection.S29_A,
                              f"Wife of the deceased qualifies whether or not maintained ({LawSection.S29_A})")
        if context.was_maintained:
            return _with_proof(LawSection.S29_C,
                               f"Husband qualifies as maintained by the deceased "
                               f"({LawSection.S29_C}: {CITATIONS[LawSection.S29_C]})")
        return _fails(LawSection.S29_C,
                      f"Husband qualifies only if maintained by the deceased ({LawSection.S29_C}); "
                      f"no maintenance shown", proof_would_help=True)

    @staticmethod
    def _cohabitant(deceased: Person, candidate: Person) -> DependantAssessment:
        # Literal statutory wording: "a woman ... living as his wife"
        if deceased.gender == Gender.MALE and candidate.gender == Gender.FEMALE:
            return _automatic(LawSection.S3_5,
                              f"Woman living with the deceased as his wife is treated as a wife "
                              f"({LawSection.S3_5})")
        return _fails(LawSection.S3_5,
                      f"Cohabitation presumption applies only to {CITATIONS[LawSection.S3_5]} "
                      f"({LawSection.S3_5})")

    def _considerations(self, candidate: Person) -> Tuple[str, ...]:
        facts = []
        if candidate.is_minor_on(self.config.majority_age):
            facts.append("minor")
        if candidate.is_disabled:
            facts.append("disabled")
        if candidate.is_student:
            facts.append("student")
        return tuple(facts)
