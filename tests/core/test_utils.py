import math

import numpy as np
import pytest

from imslider.core.utils import (
    clamp,
    is_over_rect,
    map_range,
    percentage,
    value_from_perc,
)


def test_clamp_limits_both_sides():
    assert clamp(-1.0, 0.0, 1.0) == 0.0
    assert clamp(2.0, 0.0, 1.0) == 1.0
    assert clamp(0.25, 0.0, 1.0) == 0.25


def test_map_range_maps_linearly():
    assert map_range(0.0, -95.0, 95.0, 0.0, 190.0) == pytest.approx(95.0)
    assert map_range(-95.0, -95.0, 95.0, 0.0, 190.0) == pytest.approx(0.0)
    assert map_range(142.5, -95.0, 95.0, 0.0, 190.0) == pytest.approx(237.5)


def test_map_range_with_empty_input_range_returns_out_min():
    assert map_range(3.0, 1.0, 1.0, 5.0, 10.0) == 5.0


def test_is_over_rect_uses_centre_origin_and_inclusive_edges():
    dim = (192.0, 48.0)
    assert is_over_rect((0.0, 0.0), (0.0, 0.0), dim)
    assert is_over_rect((0.0, 0.0), (96.0, 24.0), dim)
    assert is_over_rect((0.0, 0.0), (-96.0, -24.0), dim)
    assert not is_over_rect((0.0, 0.0), (96.5, 0.0), dim)
    assert not is_over_rect((0.0, 0.0), (0.0, -24.5), dim)
    assert is_over_rect((100.0, 0.0), (190.0, 0.0), dim)


def test_percentage_is_single_precision_and_unclamped():
    p = percentage(25.0, 0.0, 100.0)
    assert isinstance(p, np.float32)
    assert float(p) == pytest.approx(0.25)
    assert float(percentage(150.0, 0.0, 100.0)) == pytest.approx(1.5)
    assert float(percentage(-50.0, 0.0, 100.0)) == pytest.approx(-0.5)


def test_percentage_with_empty_range_is_zero():
    assert float(percentage(3.0, 2.0, 2.0)) == 0.0


@pytest.mark.parametrize("value", [0.0, 0.1, 1.0 / 3.0, 0.5, 0.9, 1.0])
def test_value_from_perc_round_trips(value: float):
    perc = percentage(value, 0.0, 1.0)
    out = value_from_perc(perc, 0.0, 1.0)
    assert math.isfinite(out)
    assert out == pytest.approx(value, rel=1e-6, abs=1e-6)


def test_value_from_perc_handles_offset_ranges():
    assert value_from_perc(0.5, -10.0, 30.0) == pytest.approx(10.0)
    assert value_from_perc(0.0, -10.0, 30.0) == pytest.approx(-10.0)
    assert value_from_perc(1.0, -10.0, 30.0) == pytest.approx(30.0)
