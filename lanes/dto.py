"""DTO types for the timeline data-to-layout pipeline.

DTOs are plain data containers passed between the grouping, layout, and
render stages. They intentionally avoid any Django dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from typing import Any, Literal

ScanOrder = Literal["forward", "reverse"]


@dataclass(frozen=True, slots=True)
class Column:
    """A result-set column.

    Args:
        name: Column name as reported by the query layer.
        type: Column type label (opaque to the timeline).
    """

    name: str
    type: str = "type/*"


@dataclass(frozen=True, slots=True)
class ResultData:
    """The tabular payload of a single series.

    Args:
        cols: Ordered column descriptors.
        rows: Value tuples positionally aligned with `cols`.
    """

    cols: tuple[Column, ...]
    rows: tuple[tuple[Any, ...], ...]


@dataclass(frozen=True, slots=True)
class Series:
    """A single series supplied by the host."""

    data: ResultData


@dataclass(frozen=True, slots=True)
class Interval:
    """One event's start/end pair, in epoch milliseconds."""

    start: int
    end: int


@dataclass(frozen=True, slots=True)
class Lane:
    """Intervals belonging to one category, drawn as one horizontal row.

    Args:
        label: Category key; unique within one render cycle.
        intervals: Intervals in the order their rows were scanned.
    """

    label: str
    intervals: tuple[Interval, ...] = ()


@dataclass(frozen=True, slots=True)
class Margins:
    """Outer chart margins in pixels."""

    left: float
    right: float = 0
    top: float = 0
    bottom: float = 0


@dataclass(frozen=True, slots=True)
class TickSpec:
    """Time-axis tick configuration handed through to the rendering engine.

    Args:
        format: strftime-style label format for ticks.
        tick_unit: Time unit between ticks (e.g. `days`).
        tick_interval: Number of `tick_unit`s between ticks.
        tick_size: Tick mark length in pixels.
    """

    format: str = "%b %e"
    tick_unit: str = "days"
    tick_interval: int = 1
    tick_size: int = 6


@dataclass(frozen=True, slots=True)
class LayoutOptions:
    """Tunables for grouping and lane geometry.

    Args:
        item_margin: Vertical gap reserved per lane.
        axis_offset: Fixed vertical space used by the time axis.
        label_margin: Left margin wide enough for lane labels.
        tick_spec: Tick configuration forwarded to the engine.
        scan_order: Direction rows are scanned while grouping.
    """

    item_margin: float = 15
    axis_offset: float = 25
    label_margin: float = 128
    tick_spec: TickSpec = field(default_factory=TickSpec)
    scan_order: ScanOrder = "forward"


@dataclass(frozen=True, slots=True)
class LayoutConfig:
    """Fully-specified lane geometry for one render.

    Args:
        total_width: Width of the drawing surface.
        total_height: Height of the drawing surface.
        item_height: Height applied to every lane.
        item_margin: Gap applied below every lane.
        margins: Outer margins; `left` hosts the lane labels.
        tick_spec: Time-axis tick configuration.
        stacked: Whether lanes are stacked vertically (always True here).
    """

    total_width: float
    total_height: float
    item_height: float
    item_margin: float
    margins: Margins
    tick_spec: TickSpec
    stacked: bool = True


@dataclass(frozen=True, slots=True)
class ViewState:
    """Last accepted viewport and data identity for one chart instance."""

    last_width: float
    last_height: float
    last_data: object
