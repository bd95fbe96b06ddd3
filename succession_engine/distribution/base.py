"""
Base classes for distribution policies.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import logging
from typing import Any, Dict, Type

from succession_engine.config import SuccessionConfig

logger = logging.getLogger(__name__)

# Policy Registry
_POLICY_REGISTRY: Dict[str, Type['DistributionPolicy']] = {}


def register_policy(cls: Type['DistributionPolicy']) -> Type['DistributionPolicy']:
    """
    Decorator to register a policy class in the global registry.

    Usage:
        @register_policy
        @dataclass
        class MyPolicy(DistributionPolicy):
            policy_id: str = "my_policy"
            ...
    """
    policy_id = getattr(cls, 'policy_id', None)
    if policy_id:
        _POLICY_REGISTRY[policy_id] = cls
        logger.debug(f"Registered distribution policy: {policy_id}")
    else:
        logger.warning(f"Policy {cls.__name__} missing 'policy_id' attribute, not registered")
    return cls


def get_policy_registry() -> Dict[str, Type['DistributionPolicy']]:
    """Get the global policy registry."""
    return _POLICY_REGISTRY.copy()


@dataclass
class DistributionPolicy(ABC):
    """
    Base class for distribution policies.

    Policies are pure: they read a SuccessionStructure and return a new plan.

    Attributes:
        policy_id: Unique identifier for this policy
        config: Engine configuration (rounding places, majority age)
    """
    policy_id: str = ""
    config: SuccessionConfig = field(default_factory=SuccessionConfig.load_default)

    @abstractmethod
    def calculate(self, net_estate_value: Any, structure: Any, *args, **kwargs) -> Any:
        """
        Compute a distribution plan.

        Args:
            net_estate_value: Estate value after debts, as int, str or Decimal
            structure: SuccessionStructure of the deceased

        Returns:
            A plan object
        """

    def __post_init__(self):
        if not self.policy_id:
            raise ValueError(f"{self.__class__.__name__} must define policy_id")
