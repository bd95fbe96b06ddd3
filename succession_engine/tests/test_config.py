"""
Tests for succession_engine.config module.
"""
from __future__ import annotations

import pytest

from succession_engine.config import DEFAULT_CONFIG_PATH, SuccessionConfig


class TestSuccessionConfig:
    """Tests for SuccessionConfig loading."""

    def test_packaged_defaults(self):
        """Test that the shipped config.yaml loads with the documented defaults."""
        assert DEFAULT_CONFIG_PATH.exists()
        config = SuccessionConfig.load_default()

        assert config.ancestry_cycles == 'raise'
        assert config.max_path_depth == 4
        assert config.percentage_places == 4
        assert config.majority_age == 18
        assert config.strict_cycles is True

    def test_from_dict_overrides(self):
        config = SuccessionConfig.from_dict({
            'graph': {'ancestry_cycles': 'warn'},
            'path_finder': {'max_depth': 6},
        })

        assert config.ancestry_cycles == 'warn'
        assert config.strict_cycles is False
        assert config.max_path_depth == 6
        assert config.majority_age == 18

    def test_from_dict_ignores_unknown_keys(self):
        config = SuccessionConfig.from_dict({'other': {'x': 1}, 'distribution': {'unknown': True}})

        assert config == SuccessionConfig.load_default()

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "succession.yaml"
        path.write_text("distribution:\n  majority_age: 21\n  percentage_places: 2\n", encoding='utf-8')

        config = SuccessionConfig.from_yaml(path)

        assert config.majority_age == 21
        assert config.percentage_places == 2
        assert config.max_path_depth == 4

    def test_from_yaml_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding='utf-8')

        assert SuccessionConfig.from_yaml(path) == SuccessionConfig.load_default()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            SuccessionConfig.from_yaml(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("graph: [unclosed\n", encoding='utf-8')

        with pytest.raises(ValueError, match="Error parsing"):
            SuccessionConfig.from_yaml(path)

    @pytest.mark.parametrize("data", [
        {'graph': {'ancestry_cycles': 'ignore'}},
        {'path_finder': {'max_depth': -1}},
        {'distribution': {'percentage_places': 'four'}},
        {'distribution': {'majority_age': True}},
        {'graph': 'warn'},
    ])
    def test_invalid_values(self, data):
        with pytest.raises(ValueError):
            SuccessionConfig.from_dict(data)
