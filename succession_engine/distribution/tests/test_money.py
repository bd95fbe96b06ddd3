"""
Tests for the money helpers in distribution.model.
"""
from __future__ import annotations

import pytest
from decimal import Decimal

from succession_engine.distribution.model import floor_share, percentage, split_evenly, to_money


class TestToMoney:

    @pytest.mark.parametrize("value,expected", [
        (100, Decimal(100)),
        ("250.75", Decimal("250.75")),
        (Decimal("1.5"), Decimal("1.5")),
        (0, Decimal(0)),
    ])
    def test_accepted(self, value, expected):
        assert to_money(value) == expected

    @pytest.mark.parametrize("value", [-1, "-0.01", "abc", "NaN", "Infinity", True])
    def test_rejected(self, value):
        with pytest.raises(ValueError):
            to_money(value)


class TestArithmetic:

    def test_floor_share_is_exact(self):
        # 0.29 * 100 in binary floating point floors to 28
        assert floor_share(Decimal("0.29"), 100, 1) == Decimal(29)
        assert floor_share(Decimal(10), 1, 3) == Decimal(3)
        assert floor_share(Decimal("99999999999999999999"), 2, 3) == Decimal("66666666666666666666")

    def test_percentage_rounds_half_up(self):
        assert percentage(1, 8, 2) == Decimal("12.50")
        assert percentage(1, 8, 1) == Decimal("12.5")
        assert percentage(1, 16, 2) == Decimal("6.25")
        assert percentage(1, 32, 2) == Decimal("3.13")
        assert percentage(2, 3) == Decimal("66.6667")

    def test_split_evenly(self):
        assert split_evenly(Decimal(10), 3) == [Decimal(4), Decimal(3), Decimal(3)]
        assert split_evenly(Decimal(10), 0) == []
        assert sum(split_evenly(Decimal("10.01"), 4)) == Decimal("10.01")
