import math

import pytest

from order_totals.engine import round_money


@pytest.mark.parametrize("value, expected", [
    (0.125, 0.13),
    (-0.125, -0.13),
    (2.675, 2.68),
    (1.005, 1.01),
    (17.9982, 18.0),
    (0.0001, 0.0),
    (0.0049, 0.0),
    (99.99, 99.99),
    (100, 100.0),
    (117.9882, 117.99),
])
def test_round_half_up(value, expected):
    assert round_money(value) == expected


def test_returns_float():
    assert isinstance(round_money(5), float)


def test_negative_zero_is_normalized():
    result = round_money(-0.001)
    assert result == 0.0
    assert math.copysign(1, result) == 1


@pytest.mark.parametrize("value", [float("inf"), float("-inf")])
def test_infinity_passes_through(value):
    assert round_money(value) == value


def test_nan_passes_through():
    assert math.isnan(round_money(float("nan")))


@pytest.mark.parametrize("value", [1e25, 1e26, 1e30, -1e30, 1.5e300])
def test_large_amounts_round_without_error(value):
    assert round_money(value) == value
