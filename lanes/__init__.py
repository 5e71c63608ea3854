"""Pure data-to-layout core for the swimlane timeline visualization.

This package turns a tabular result set into lanes of intervals and a lane
layout that an external rendering engine can draw. It must not import Django
or touch any drawing surface.
"""

from .errors import DataError, LayoutError, LifecycleError, SchemaError, TimelineError
from .grouping import compose_lanes
from .layout import compute_layout

__all__ = [
    "DataError",
    "LayoutError",
    "LifecycleError",
    "SchemaError",
    "TimelineError",
    "compose_lanes",
    "compute_layout",
]
