"""Lane geometry: fit N stacked lanes into the available drawing area."""

from __future__ import annotations

import math

from .dto import LayoutConfig, LayoutOptions, Margins
from .errors import LayoutError


def lane_item_height(lane_count: int, height: float, *, item_margin: float, axis_offset: float) -> float:
    """Return the per-lane height, `(H - M*N - F) / N`.

    Args:
        lane_count: Number of lanes N.
        height: Available height H.
        item_margin: Margin reserved per lane M.
        axis_offset: Fixed vertical overhead F for the time axis.

    Returns:
        A strictly positive lane height.

    Raises:
        LayoutError: When there are no lanes, the height is not finite, or the lanes do not fit.
    """

    if lane_count <= 0:
        raise LayoutError("no lanes to render")
    if not math.isfinite(height):
        raise LayoutError(f"container height must be finite; got {height!r}")
    item_height = (height - item_margin * lane_count - axis_offset) / lane_count
    if not math.isfinite(item_height) or item_height <= 0:
        raise LayoutError(f"insufficient height for {lane_count} lanes")
    return item_height


def compute_layout(
    lane_count: int,
    width: float,
    height: float,
    *,
    options: LayoutOptions | None = None,
) -> LayoutConfig:
    """Compute the stacked lane layout for a drawing area.

    Args:
        lane_count: Number of lanes to draw.
        width: Available width.
        height: Available height.
        options: Margins, axis offset and tick configuration; defaults apply when omitted.

    Returns:
        LayoutConfig with a uniform lane height and a label-wide left margin.

    Raises:
        LayoutError: When there are no lanes, or the width or height cannot hold them.
    """

    options = options or LayoutOptions()
    item_height = lane_item_height(
        lane_count,
        height,
        item_margin=options.item_margin,
        axis_offset=options.axis_offset,
    )
    if not math.isfinite(width) or width <= 0:
        raise LayoutError("insufficient width to render the timeline")
    return LayoutConfig(
        total_width=width,
        total_height=height,
        item_height=item_height,
        item_margin=options.item_margin,
        margins=Margins(left=options.label_margin),
        tick_spec=options.tick_spec,
    )
