"""d3-timeline payload adapter.

The browser-side d3-timeline engine is configured through a fluent builder
(`timeline().width(...).stack().itemHeight(...)...`). On the server the
equivalent is a JSON payload: `PayloadTimelineRenderer` encodes the builder
parameters and the lane datum, and `PayloadContainer` collects the surfaces
so a view can return them.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from dataclasses import field
from typing import Any, TypedDict

from lanes.dto import Lane, LayoutConfig, TickSpec


class TickFormatPayload(TypedDict):
    """The engine's `tickFormat` block."""

    format: str
    tickUnit: str
    tickInterval: int
    tickSize: int


class MarginPayload(TypedDict):
    """The engine's `margin` block."""

    left: float
    right: float
    top: float
    bottom: float


class TimelineEnginePayload(TypedDict):
    """Builder parameters for one d3-timeline render."""

    width: float
    height: float
    stacked: bool
    itemHeight: float
    itemMargin: float
    margin: MarginPayload
    tickFormat: TickFormatPayload


def encode_engine_config(layout: LayoutConfig, tick_spec: TickSpec) -> TimelineEnginePayload:
    """Encode a LayoutConfig into the engine's builder parameters.

    Args:
        layout: Computed lane geometry.
        tick_spec: Tick configuration for the time axis.

    Returns:
        JSON-serializable engine configuration.
    """

    return {
        "width": layout.total_width,
        "height": layout.total_height,
        "stacked": layout.stacked,
        "itemHeight": layout.item_height,
        "itemMargin": layout.item_margin,
        "margin": {
            "left": layout.margins.left,
            "right": layout.margins.right,
            "top": layout.margins.top,
            "bottom": layout.margins.bottom,
        },
        "tickFormat": {
            "format": tick_spec.format,
            "tickUnit": tick_spec.tick_unit,
            "tickInterval": tick_spec.tick_interval,
            "tickSize": tick_spec.tick_size,
        },
    }


def encode_lanes(lanes: Sequence[Lane]) -> list[dict[str, Any]]:
    """Encode lanes as the d3-timeline datum (`label` plus `times`)."""

    return [
        {
            "label": lane.label,
            "times": [
                {"starting_time": interval.start, "ending_time": interval.end} for interval in lane.intervals
            ],
        }
        for lane in lanes
    ]


@dataclass(slots=True)
class PayloadSurface:
    """An in-memory drawing surface holding the last encoded render.

    Destroying the surface detaches it from the container that created it.
    """

    surface_id: str
    width: float
    config: dict[str, Any] | None = None
    datum: list[dict[str, Any]] | None = None
    destroyed: bool = False
    container: PayloadContainer | None = field(default=None, repr=False, compare=False)

    def draw(self, config: dict[str, Any], datum: list[dict[str, Any]]) -> None:
        """Store the engine config and lane datum of one render."""

        self.config = config
        self.datum = datum

    def destroy(self) -> None:
        """Mark the surface destroyed and detach it from its container."""

        self.destroyed = True
        if self.container is not None and self.container.surfaces.get(self.surface_id) is self:
            del self.container.surfaces[self.surface_id]

    def as_json(self) -> dict[str, Any]:
        """Return the surface and its render as a JSON-serializable dict."""

        return {
            "surface": {"id": self.surface_id, "width": self.width},
            "config": self.config,
            "data": self.datum,
        }


@dataclass(slots=True)
class PayloadContainer:
    """A container with fixed, host-reported dimensions.

    Args:
        width: Reported container width.
        height: Reported container height.
        surfaces: Live surfaces keyed by id.
    """

    width: float
    height: float
    surfaces: dict[str, PayloadSurface] = field(default_factory=dict)

    def measure(self) -> tuple[float, float]:
        """Return the reported `(width, height)`."""

        return self.width, self.height

    def resize(self, *, width: float, height: float) -> None:
        """Change the reported dimensions, as a host resize would."""

        self.width = width
        self.height = height

    def create_surface(self, *, surface_id: str, width: float) -> PayloadSurface:
        """Create and register a surface under a unique id.

        Raises:
            ValueError: When a live surface already uses `surface_id`.
        """

        if surface_id in self.surfaces:
            raise ValueError(f"Surface {surface_id!r} already exists in this container.")
        surface = PayloadSurface(surface_id=surface_id, width=width, container=self)
        self.surfaces[surface_id] = surface
        return surface


class _ConfiguredPayloadRenderer:
    """A PayloadTimelineRenderer bound to one layout."""

    def __init__(self, config: TimelineEnginePayload) -> None:
        self._config = config

    def render(self, surface: PayloadSurface, lanes: Sequence[Lane]) -> None:
        """Encode the lanes and draw them with the bound config."""

        surface.draw(dict(self._config), encode_lanes(lanes))


class PayloadTimelineRenderer:
    """Renderer that emits d3-timeline payloads instead of drawing."""

    def configure(self, layout: LayoutConfig, tick_spec: TickSpec) -> _ConfiguredPayloadRenderer:
        """Bind the encoded engine config for one layout."""

        return _ConfiguredPayloadRenderer(encode_engine_config(layout, tick_spec))
