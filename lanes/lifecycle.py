"""Explicit lifecycle state machine for one timeline chart instance.

Host callbacks (mount, update, unmount) become messages fed to `transition`,
a pure function from (state, message) to the next state. The function never
touches a drawing surface: it only tells the caller, via `render_pending`,
that a fresh layout must be delegated to the rendering engine.

One cycle walks MEASURING -> VALIDATING -> LAYOUT_PENDING and then either
straight to RENDERED (nothing changed, prior lanes and layout are reused) or
through COMPOSING -> LAYING_OUT -> RENDERED. Any failure lands in ERROR,
which stays until a later update passes validation.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from dataclasses import replace
from enum import StrEnum

from .change import advance_view, needs_recompute
from .dto import Lane, LayoutConfig, LayoutOptions, Series, ViewState
from .errors import LifecycleError, TimelineError
from .grouping import compose_lanes
from .layout import compute_layout
from .validation import check_renderable

logger = logging.getLogger(__name__)


class Phase(StrEnum):
    """Lifecycle phase of a chart instance."""

    UNMOUNTED = "unmounted"
    MEASURING = "measuring"
    VALIDATING = "validating"
    ERROR = "error"
    COMPOSING = "composing"
    LAYOUT_PENDING = "layout_pending"
    LAYING_OUT = "laying_out"
    RENDERED = "rendered"


@dataclass(frozen=True, slots=True)
class Mount:
    """The host attached the chart to a measured container."""

    width: float
    height: float
    series: Sequence[Series]


@dataclass(frozen=True, slots=True)
class Update:
    """The host delivered new props or the container was resized."""

    width: float
    height: float
    series: Sequence[Series]


@dataclass(frozen=True, slots=True)
class Unmount:
    """The host is tearing the chart down."""


Message = Mount | Update | Unmount


@dataclass(frozen=True, slots=True)
class TimelineState:
    """Snapshot of a chart instance between host callbacks.

    Args:
        phase: Phase the last cycle ended in.
        view: Viewport and data identity of the last accepted recompute.
        lanes: Lanes from the last accepted recompute.
        layout: Layout from the last accepted recompute.
        error: The failure that moved the chart into ERROR, if any.
        render_pending: Whether the caller must delegate `lanes`/`layout` now.
        trace: Phases visited by the last cycle, in order.
    """

    phase: Phase = Phase.UNMOUNTED
    view: ViewState | None = None
    lanes: tuple[Lane, ...] = ()
    layout: LayoutConfig | None = None
    error: TimelineError | None = None
    render_pending: bool = False
    trace: tuple[Phase, ...] = ()


def initial_state() -> TimelineState:
    """Return the state of a chart that has not been mounted yet."""

    return TimelineState()


def transition(
    state: TimelineState,
    message: Message,
    *,
    options: LayoutOptions | None = None,
) -> TimelineState:
    """Apply one host message to a chart state.

    Args:
        state: Current state.
        message: Mount, Update or Unmount.
        options: Grouping and layout tunables.

    Returns:
        The next state. Validation, data and layout failures are reported
        through `phase=ERROR` and `error`, not raised.

    Raises:
        LifecycleError: When the message is not valid in the current phase.
    """

    if isinstance(message, Unmount):
        if state.phase is Phase.UNMOUNTED:
            raise LifecycleError("Cannot unmount a timeline that is not mounted.")
        return TimelineState(trace=(Phase.UNMOUNTED,))
    if isinstance(message, Mount) and state.phase is not Phase.UNMOUNTED:
        raise LifecycleError("Timeline is already mounted.")
    if isinstance(message, Update) and state.phase is Phase.UNMOUNTED:
        raise LifecycleError("Cannot update a timeline that is not mounted.")
    return _run_cycle(state, message, options=options or LayoutOptions())


def _run_cycle(state: TimelineState, message: Mount | Update, *, options: LayoutOptions) -> TimelineState:
    """Run validation, change detection, grouping and layout for one cycle."""

    trace = [Phase.MEASURING, Phase.VALIDATING]
    try:
        check_renderable(message.series)
    except TimelineError as exc:
        return _failed(exc, trace)

    data = message.series[0].data
    trace.append(Phase.LAYOUT_PENDING)
    if not needs_recompute(state.view, message.width, message.height, data):
        logger.debug("Timeline unchanged at %sx%s; reusing prior layout.", message.width, message.height)
        trace.append(Phase.RENDERED)
        return replace(state, phase=Phase.RENDERED, render_pending=False, trace=tuple(trace))

    try:
        trace.append(Phase.COMPOSING)
        lanes = compose_lanes(data.rows, data.cols, scan_order=options.scan_order)
        trace.append(Phase.LAYING_OUT)
        layout = compute_layout(len(lanes), message.width, message.height, options=options)
    except TimelineError as exc:
        return _failed(exc, trace)

    trace.append(Phase.RENDERED)
    logger.debug(
        "Timeline recomputed: %d lanes at %sx%s (item_height=%.2f).",
        len(lanes),
        message.width,
        message.height,
        layout.item_height,
    )
    return TimelineState(
        phase=Phase.RENDERED,
        view=advance_view(message.width, message.height, data),
        lanes=lanes,
        layout=layout,
        render_pending=True,
        trace=tuple(trace),
    )


def _failed(error: TimelineError, trace: list[Phase]) -> TimelineState:
    """Return an ERROR state; the view is cleared so the next valid props recompute."""

    trace.append(Phase.ERROR)
    logger.debug("Timeline cycle failed (%s): %s", error.kind, error)
    return TimelineState(phase=Phase.ERROR, error=error, trace=tuple(trace))
