"""Settings adapter for the timeline visualization.

Django settings carry the timeline tunables as flat `TIMELINE_*` values; this
module turns them into the `LayoutOptions` the pure `lanes` package expects.
"""

from __future__ import annotations

import math
from typing import cast

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from lanes.dto import LayoutOptions, ScanOrder, TickSpec

_SCAN_ORDERS: frozenset[str] = frozenset({"forward", "reverse"})


def timeline_options() -> LayoutOptions:
    """Build LayoutOptions from Django settings.

    Returns:
        LayoutOptions populated from `TIMELINE_*` settings (defaults when unset).

    Raises:
        ImproperlyConfigured: When a setting holds an unusable value.
    """

    defaults = LayoutOptions()
    scan_order = str(getattr(settings, "TIMELINE_SCAN_ORDER", defaults.scan_order)).strip().lower()
    if scan_order not in _SCAN_ORDERS:
        raise ImproperlyConfigured(f"TIMELINE_SCAN_ORDER must be one of {sorted(_SCAN_ORDERS)}; got {scan_order!r}.")

    item_margin = _non_negative("TIMELINE_ITEM_MARGIN", default=defaults.item_margin)
    axis_offset = _non_negative("TIMELINE_AXIS_OFFSET", default=defaults.axis_offset)
    label_margin = _non_negative("TIMELINE_LABEL_MARGIN", default=defaults.label_margin)

    tick_defaults = defaults.tick_spec
    tick_interval = _setting_int("TIMELINE_TICK_INTERVAL", default=tick_defaults.tick_interval)
    if tick_interval < 1:
        raise ImproperlyConfigured("TIMELINE_TICK_INTERVAL must be >= 1.")
    tick_size = _setting_int("TIMELINE_TICK_SIZE", default=tick_defaults.tick_size)
    if tick_size < 0:
        raise ImproperlyConfigured("TIMELINE_TICK_SIZE must not be negative.")
    tick_spec = TickSpec(
        format=str(getattr(settings, "TIMELINE_TICK_FORMAT", tick_defaults.format)),
        tick_unit=str(getattr(settings, "TIMELINE_TICK_UNIT", tick_defaults.tick_unit)),
        tick_interval=tick_interval,
        tick_size=tick_size,
    )

    return LayoutOptions(
        item_margin=item_margin,
        axis_offset=axis_offset,
        label_margin=label_margin,
        tick_spec=tick_spec,
        scan_order=cast(ScanOrder, scan_order),
    )


def _non_negative(name: str, *, default: float) -> float:
    """Read a finite numeric setting that must not be negative."""

    raw = getattr(settings, name, default)
    try:
        value = float(raw)
    except (TypeError, ValueError, OverflowError) as exc:
        raise ImproperlyConfigured(f"{name} must be a number; got {raw!r}.") from exc
    if not math.isfinite(value):
        raise ImproperlyConfigured(f"{name} must be finite; got {raw!r}.")
    if value < 0:
        raise ImproperlyConfigured(f"{name} must not be negative.")
    return value


def _setting_int(name: str, *, default: int) -> int:
    """Read an integer setting."""

    raw = getattr(settings, name, default)
    try:
        return int(raw)
    except (TypeError, ValueError, OverflowError) as exc:
        raise ImproperlyConfigured(f"{name} must be an integer; got {raw!r}.") from exc
