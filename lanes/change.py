"""Change detection between render cycles."""

from __future__ import annotations

from .dto import ViewState


def needs_recompute(previous: ViewState | None, width: float, height: float, data: object) -> bool:
    """Return whether grouping and layout must run again.

    Data is compared by identity: a new but structurally equal payload still
    counts as a change.

    Args:
        previous: State from the last accepted recompute, or None before the first one.
        width: Current container width.
        height: Current container height.
        data: Current data payload.

    Returns:
        True when nothing was computed yet, or the size or data reference changed.
    """

    if previous is None:
        return True
    return previous.last_width != width or previous.last_height != height or previous.last_data is not data


def advance_view(width: float, height: float, data: object) -> ViewState:
    """Return the ViewState recorded after an accepted recompute."""

    return ViewState(last_width=width, last_height=height, last_data=data)
