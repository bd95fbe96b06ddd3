"""
config.py - Configuration for the succession engine.

Defaults live in config.yaml beside this module. Values can be overridden
from another YAML file or from a dictionary with the same nested layout:

    graph:
      ancestry_cycles: warn
    path_finder:
      max_depth: 3

Module: succession_engine.config
"""
from __future__ import annotations

__all__ = ['SuccessionConfig', 'DEFAULT_CONFIG_PATH']

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"

# (section, key) in YAML for each config field
_YAML_KEYS = {
    'ancestry_cycles': ('graph', 'ancestry_cycles'),
    'max_path_depth': ('path_finder', 'max_depth'),
    'percentage_places': ('distribution', 'percentage_places'),
    'majority_age': ('distribution', 'majority_age'),
}

_CYCLE_MODES = ('raise', 'warn')


def _read_yaml(yaml_path: Path) -> Dict[str, Any]:
    try:
        with open(yaml_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing {yaml_path}: {e}")
    if not isinstance(data, dict):
        raise ValueError(f"Configuration in {yaml_path} must be a mapping")
    return data


@dataclass(frozen=True)
class SuccessionConfig:
    """
    Configuration for graph building, path finding and distribution.

    Attributes:
        ancestry_cycles: 'raise' to reject cyclic ancestry, 'warn' to record an issue and continue
        max_path_depth: Maximum number of edges the path finder will traverse
        percentage_places: Decimal places kept in share percentages
        majority_age: Age at which a minor's contingent interest vests
    """
    ancestry_cycles: str = 'raise'
    max_path_depth: int = 4
    percentage_places: int = 4
    majority_age: int = 18

    def __post_init__(self) -> None:
        if self.ancestry_cycles not in _CYCLE_MODES:
            raise ValueError(
                f"graph.ancestry_cycles must be one of {_CYCLE_MODES}, got {self.ancestry_cycles!r}"
            )
        for name in ('max_path_depth', 'percentage_places', 'majority_age'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"{name} must be a non-negative integer, got {value!r}")

    @property
    def strict_cycles(self) -> bool:
        return self.ancestry_cycles == 'raise'

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base: Optional[SuccessionConfig] = None) -> SuccessionConfig:
        """
        Create configuration from a nested dictionary.

        Unknown sections and keys are ignored; missing keys keep the values of
        ``base`` (the packaged defaults when not given).

        Args:
            data: Dictionary laid out like config.yaml
            base: Configuration supplying values for missing keys

        Returns:
            SuccessionConfig instance
        """
        base = base or cls.load_default()
        values = {f.name: getattr(base, f.name) for f in fields(cls)}
        for name, (section, key) in _YAML_KEYS.items():
            section_data = data.get(section) or {}
            if not isinstance(section_data, dict):
                raise ValueError(f"Configuration section '{section}' must be a mapping")
            if key in section_data:
                values[name] = section_data[key]
        return cls(**values)

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> SuccessionConfig:
        """
        Load configuration from a specific YAML file.

        Args:
            yaml_path: Path to YAML config file

        Returns:
            SuccessionConfig loaded from YAML, with packaged defaults for missing keys
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {yaml_path}")
        config = cls.from_dict(_read_yaml(yaml_path))
        logger.info(f"Loaded succession config from {yaml_path}")
        return config

    @classmethod
    def load_default(cls) -> SuccessionConfig:
        """Load the packaged config.yaml, or built-in defaults if it is absent."""
        if not DEFAULT_CONFIG_PATH.exists():
            logger.warning(f"Default config not found at {DEFAULT_CONFIG_PATH}; using built-in defaults")
            return cls()
        return cls.from_dict(_read_yaml(DEFAULT_CONFIG_PATH), base=cls())
