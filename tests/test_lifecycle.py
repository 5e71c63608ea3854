"""Tests for the chart lifecycle state machine."""

from __future__ import annotations

import pytest

from lanes import lifecycle
from lanes.dto import Column, LayoutOptions, ResultData, Series
from lanes.errors import DataError, LayoutError, LifecycleError, SchemaError
from lanes.lifecycle import Mount, Phase, Unmount, Update, initial_state, transition

pytestmark = pytest.mark.unit


@pytest.fixture
def call_counts(monkeypatch) -> dict[str, int]:
    """Count grouping and layout invocations made by `transition`."""

    counts = {"compose_lanes": 0, "compute_layout": 0}
    real_compose = lifecycle.compose_lanes
    real_layout = lifecycle.compute_layout

    def counting_compose(*args, **kwargs):
        counts["compose_lanes"] += 1
        return real_compose(*args, **kwargs)

    def counting_layout(*args, **kwargs):
        counts["compute_layout"] += 1
        return real_layout(*args, **kwargs)

    monkeypatch.setattr(lifecycle, "compose_lanes", counting_compose)
    monkeypatch.setattr(lifecycle, "compute_layout", counting_layout)
    return counts


def test_mount_walks_every_phase_and_requests_render(timeline_series) -> None:
    """A first cycle validates, groups, lays out and asks for a render."""

    state = transition(initial_state(), Mount(width=800, height=400, series=timeline_series))

    assert state.phase is Phase.RENDERED
    assert state.trace == (
        Phase.MEASURING,
        Phase.VALIDATING,
        Phase.LAYOUT_PENDING,
        Phase.COMPOSING,
        Phase.LAYING_OUT,
        Phase.RENDERED,
    )
    assert state.render_pending is True
    assert [lane.label for lane in state.lanes] == ["A", "B"]
    assert state.layout is not None
    assert state.view is not None and state.view.last_data is timeline_series[0].data


def test_identical_update_skips_grouping_and_layout(timeline_series, call_counts) -> None:
    """Same rows, columns, width and height twice: no second recompute."""

    first = transition(initial_state(), Mount(width=800, height=400, series=timeline_series))
    second = transition(first, Update(width=800, height=400, series=timeline_series))

    assert call_counts == {"compose_lanes": 1, "compute_layout": 1}
    assert second.phase is Phase.RENDERED
    assert second.render_pending is False
    assert second.layout is first.layout
    assert second.lanes is first.lanes
    assert Phase.COMPOSING not in second.trace


def test_resize_recomputes_layout(timeline_series, call_counts) -> None:
    """A height change reruns the pipeline with the new geometry."""

    first = transition(initial_state(), Mount(width=800, height=400, series=timeline_series))
    second = transition(first, Update(width=800, height=200, series=timeline_series))

    assert call_counts == {"compose_lanes": 2, "compute_layout": 2}
    assert second.render_pending is True
    assert second.layout is not None and first.layout is not None
    assert second.layout.item_height < first.layout.item_height


def test_schema_failure_short_circuits_before_grouping(timeline_rows, call_counts) -> None:
    """Missing CLASS_TYPE fails in VALIDATING; grouping never runs."""

    series = (Series(data=ResultData(cols=(Column("START_TIME"), Column("END_TIME")), rows=timeline_rows)),)

    state = transition(initial_state(), Mount(width=800, height=400, series=series))

    assert state.phase is Phase.ERROR
    assert isinstance(state.error, SchemaError)
    assert state.trace == (Phase.MEASURING, Phase.VALIDATING, Phase.ERROR)
    assert call_counts == {"compose_lanes": 0, "compute_layout": 0}
    assert state.render_pending is False


def test_data_and_layout_failures_land_in_error(timeline_cols, timeline_series) -> None:
    """Grouping and layout failures are reported through the ERROR phase."""

    bad = (Series(data=ResultData(cols=timeline_cols, rows=(("not-a-date", 1, "A"),))),)
    state = transition(initial_state(), Mount(width=800, height=400, series=bad))
    assert isinstance(state.error, DataError)
    assert state.trace[-2:] == (Phase.COMPOSING, Phase.ERROR)

    cramped = transition(initial_state(), Mount(width=800, height=40, series=timeline_series))
    assert isinstance(cramped.error, LayoutError)
    assert cramped.trace[-2:] == (Phase.LAYING_OUT, Phase.ERROR)


def test_error_recovers_on_next_valid_update(timeline_series) -> None:
    """ERROR lasts until an update passes; the view is reset so it recomputes."""

    failed = transition(initial_state(), Mount(width=800, height=40, series=timeline_series))
    assert failed.view is None

    recovered = transition(failed, Update(width=800, height=400, series=timeline_series))

    assert recovered.phase is Phase.RENDERED
    assert recovered.error is None
    assert recovered.render_pending is True


def test_options_drive_scan_order_and_geometry(timeline_series) -> None:
    """LayoutOptions flow into grouping and layout."""

    options = LayoutOptions(item_margin=0, axis_offset=0, scan_order="reverse")

    state = transition(initial_state(), Mount(width=800, height=400, series=timeline_series), options=options)

    assert state.layout is not None
    assert state.layout.item_height == pytest.approx(200)
    assert state.lanes[0].intervals[0].start > state.lanes[0].intervals[1].start


def test_unmount_resets_state(timeline_series) -> None:
    """Unmount discards lanes, layout and view."""

    mounted = transition(initial_state(), Mount(width=800, height=400, series=timeline_series))

    state = transition(mounted, Unmount())

    assert state.phase is Phase.UNMOUNTED
    assert state.view is None
    assert state.layout is None
    assert state.lanes == ()


def test_out_of_order_messages_raise(timeline_series) -> None:
    """Updates and unmounts need a mounted chart; mounts need an unmounted one."""

    with pytest.raises(LifecycleError):
        transition(initial_state(), Update(width=1, height=1, series=timeline_series))
    with pytest.raises(LifecycleError):
        transition(initial_state(), Unmount())

    mounted = transition(initial_state(), Mount(width=800, height=400, series=timeline_series))
    with pytest.raises(LifecycleError):
        transition(mounted, Mount(width=800, height=400, series=timeline_series))
