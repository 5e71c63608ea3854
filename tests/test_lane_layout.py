"""Tests for lane geometry computation."""

from __future__ import annotations

import pytest

from lanes.dto import LayoutOptions, Margins, TickSpec
from lanes.errors import LayoutError
from lanes.layout import compute_layout, lane_item_height

pytestmark = pytest.mark.unit


def test_compute_layout_applies_lane_height_formula() -> None:
    """item_height = (H - M*N - F) / N with the default margins."""

    layout = compute_layout(3, 800, 400)

    assert layout.item_height == pytest.approx((400 - 15 * 3 - 25) / 3)
    assert layout.item_margin == 15
    assert layout.total_width == 800
    assert layout.total_height == 400
    assert layout.stacked is True
    assert layout.margins == Margins(left=128, right=0, top=0, bottom=0)
    assert layout.tick_spec == TickSpec(format="%b %e", tick_unit="days", tick_interval=1, tick_size=6)


def test_compute_layout_uses_custom_options() -> None:
    """Margins, axis offset and label width come from LayoutOptions."""

    options = LayoutOptions(item_margin=10, axis_offset=0, label_margin=64, tick_spec=TickSpec(tick_unit="hours"))

    layout = compute_layout(2, 500, 120, options=options)

    assert layout.item_height == pytest.approx(50)
    assert layout.margins.left == 64
    assert layout.tick_spec.tick_unit == "hours"


def test_compute_layout_rejects_zero_lanes() -> None:
    """Zero lanes fails instead of dividing by zero."""

    with pytest.raises(LayoutError, match="no lanes to render"):
        compute_layout(0, 800, 400)


def test_compute_layout_rejects_undersized_container() -> None:
    """Three lanes cannot fit into 40px with 15px margins and a 25px axis."""

    with pytest.raises(LayoutError, match="insufficient height for 3 lanes"):
        compute_layout(3, 800, 40)


@pytest.mark.parametrize("height", [70, 69.5, 0, -10])
def test_lane_item_height_never_returns_non_positive(height: float) -> None:
    """A height at or below the fixed overhead is rejected, never clamped to zero."""

    with pytest.raises(LayoutError):
        lane_item_height(3, height, item_margin=15, axis_offset=25)


def test_lane_item_height_accepts_smallest_positive_fit() -> None:
    """One pixel above the overhead leaves a positive lane height."""

    assert lane_item_height(1, 41, item_margin=15, axis_offset=25) == pytest.approx(1)


def test_compute_layout_rejects_unmeasured_width() -> None:
    """A zero-width container (not measured yet) cannot host the chart."""

    with pytest.raises(LayoutError, match="insufficient width"):
        compute_layout(2, 0, 400)


@pytest.mark.parametrize("height", [float("nan"), float("inf"), float("-inf")])
def test_compute_layout_rejects_non_finite_height(height: float) -> None:
    """NaN or infinite heights never produce a lane height."""

    with pytest.raises(LayoutError):
        compute_layout(2, 800, height)


@pytest.mark.parametrize("width", [float("nan"), float("inf")])
def test_compute_layout_rejects_non_finite_width(width: float) -> None:
    """NaN or infinite widths are not a measured container."""

    with pytest.raises(LayoutError, match="insufficient width"):
        compute_layout(2, width, 400)


def test_lane_item_height_rejects_non_finite_overhead() -> None:
    """An infinite margin cannot yield a usable lane height."""

    with pytest.raises(LayoutError):
        lane_item_height(2, 400, item_margin=float("inf"), axis_offset=25)
