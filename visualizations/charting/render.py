"""Render delegation for the timeline chart.

The timeline never draws primitives itself. `RenderDelegate` hands lanes and
layout to an external engine through the narrow `Renderer` protocol and owns
the drawing surface the engine draws into: one surface per chart instance,
replaced wholesale on every render and released on unmount.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace
from typing import Any, Protocol
from uuid import uuid4

from lanes.dto import Lane, LayoutConfig, LayoutOptions, Series, TickSpec
from lanes.lifecycle import Mount, Phase, TimelineState, Unmount, Update, initial_state, transition

logger = logging.getLogger(__name__)

SURFACE_ID_PREFIX = "timeline-chart"


class DrawingSurface(Protocol):
    """A drawing surface created inside a host container."""

    surface_id: str

    def draw(self, config: dict[str, Any], datum: list[dict[str, Any]]) -> None: ...

    def destroy(self) -> None: ...


class SurfaceContainer(Protocol):
    """The host-provided node the chart lives in."""

    def measure(self) -> tuple[float, float]: ...

    def create_surface(self, *, surface_id: str, width: float) -> DrawingSurface: ...


class ConfiguredRenderer(Protocol):
    """An engine instance configured for one layout."""

    def render(self, surface: DrawingSurface, lanes: Sequence[Lane]) -> None: ...


class Renderer(Protocol):
    """External rendering engine entry point."""

    def configure(self, layout: LayoutConfig, tick_spec: TickSpec) -> ConfiguredRenderer: ...


class RenderDelegate:
    """Hand computed lanes and layout to the engine and own the drawing surface."""

    def __init__(self, *, container: SurfaceContainer, renderer: Renderer) -> None:
        """Initialize the delegate.

        Args:
            container: Container the surface is created in.
            renderer: Engine that draws into the surface.
        """

        self._container = container
        self._renderer = renderer
        self._surface_id = f"{SURFACE_ID_PREFIX}-{uuid4().hex}"
        self._surface: DrawingSurface | None = None

    @property
    def surface_id(self) -> str:
        """Identifier of the surface owned by this instance."""

        return self._surface_id

    @property
    def surface(self) -> DrawingSurface | None:
        """The current surface, or None when nothing is rendered."""

        return self._surface

    def delegate(self, lanes: Sequence[Lane], layout: LayoutConfig, tick_spec: TickSpec | None = None) -> DrawingSurface:
        """Replace the owned surface and render `lanes` into it.

        Args:
            lanes: Lanes to draw.
            layout: Geometry for the render.
            tick_spec: Tick configuration; defaults to `layout.tick_spec`.

        Returns:
            The freshly created surface.
        """

        self.release()
        surface = self._container.create_surface(surface_id=self._surface_id, width=layout.total_width)
        self._surface = surface
        configured = self._renderer.configure(layout, tick_spec or layout.tick_spec)
        configured.render(surface, lanes)
        logger.debug("Rendered %d lanes into surface %s.", len(lanes), self._surface_id)
        return surface

    def release(self) -> None:
        """Destroy the owned surface, if any. Safe to call repeatedly."""

        if self._surface is None:
            return
        self._surface.destroy()
        self._surface = None


class TimelineChart:
    """One mounted timeline: lifecycle state plus its render delegate.

    The host calls `mount`, `update` and `unmount`; calls are expected to be
    serialized. Timeline errors are re-raised to the host after the surface
    is released, so no stale chart stays visible next to the error.
    """

    def __init__(
        self,
        *,
        container: SurfaceContainer,
        renderer: Renderer,
        options: LayoutOptions | None = None,
    ) -> None:
        self._container = container
        self._options = options or LayoutOptions()
        self._delegate = RenderDelegate(container=container, renderer=renderer)
        self._state = initial_state()

    @property
    def state(self) -> TimelineState:
        """Current lifecycle state."""

        return self._state

    @property
    def surface(self) -> DrawingSurface | None:
        """Live drawing surface, or None when nothing is drawn."""

        return self._delegate.surface

    @property
    def surface_id(self) -> str:
        """Identifier of this chart's surface."""

        return self._delegate.surface_id

    def mount(self, series: Sequence[Series]) -> TimelineState:
        """Measure the container and run the first cycle."""

        width, height = self._container.measure()
        return self._apply(Mount(width=width, height=height, series=series))

    def update(self, series: Sequence[Series]) -> TimelineState:
        """Re-measure the container and run a cycle for new props or a resize."""

        width, height = self._container.measure()
        return self._apply(Update(width=width, height=height, series=series))

    def unmount(self) -> None:
        """Release the surface and return to UNMOUNTED."""

        self._state = transition(self._state, Unmount(), options=self._options)
        self._delegate.release()

    def _apply(self, message: Mount | Update) -> TimelineState:
        state = transition(self._state, message, options=self._options)
        self._state = state
        if state.phase is Phase.ERROR:
            self._delegate.release()
            assert state.error is not None
            raise state.error
        if state.render_pending:
            assert state.layout is not None
            try:
                self._delegate.delegate(state.lanes, state.layout)
            except Exception:
                # Force the next cycle to recompute instead of reusing a failed render.
                self._delegate.release()
                self._state = replace(state, view=None)
                raise
        return self._state
