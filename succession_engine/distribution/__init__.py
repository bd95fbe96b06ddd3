"""
Estate distribution policies.

Importing this package registers the built-in policies:
    - intestate: monogamous rules (S.35 to S.39)
    - polygamous: house unit allocation (S.40)
"""
from .base import DistributionPolicy, get_policy_registry, register_policy
from .model import (
    HouseAllocation,
    InterestType,
    IntestateDistributionPlan,
    PolygamousDistributionPlan,
    Share,
    ShareRole,
    to_money,
)
from .intestate import IntestateDistributionPolicy
from .polygamous import PolygamousDistributionPolicy

__all__ = [
    'DistributionPolicy',
    'register_policy',
    'get_policy_registry',
    'HouseAllocation',
    'InterestType',
    'IntestateDistributionPlan',
    'PolygamousDistributionPlan',
    'Share',
    'ShareRole',
    'to_money',
    'IntestateDistributionPolicy',
    'PolygamousDistributionPolicy',
]
