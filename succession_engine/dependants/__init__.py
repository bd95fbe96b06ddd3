"""
Dependant qualification (S.29).
"""
from .model import DependantAssessment, DependantContext, DependencyLevel
from .policy import DependantQualificationPolicy

__all__ = [
    'DependantAssessment',
    'DependantContext',
    'DependencyLevel',
    'DependantQualificationPolicy',
]
