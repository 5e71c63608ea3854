"""Visualization descriptors exposed to the host's visualization picker.

The host reads these descriptors to list available chart types, decide which
ones to offer for a result shape (`is_sensible`), and gate rendering
(`check_renderable`).
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Final

from lanes.dto import Series
from lanes.validation import check_renderable, is_sensible


@dataclass(frozen=True, slots=True)
class VisualizationSpec:
    """A visualization type offered by the host.

    Args:
        identifier: Stable identifier used by the host registry.
        ui_name: Name displayed in the visualization picker.
        icon_name: Icon key for the picker.
        min_size: Minimum dashboard card size as (width, height) grid units.
        is_sensible: Cheap shape check; receives (column_count, row_count).
        check_renderable: Strict check; raises when the series cannot be drawn.
    """

    identifier: str
    ui_name: str
    icon_name: str
    min_size: tuple[int, int]
    is_sensible: Callable[[int, int], bool]
    check_renderable: Callable[[Sequence[Series]], None]

    def as_json(self, *, column_count: int | None = None, row_count: int | None = None) -> dict[str, Any]:
        """Return the descriptor as JSON, optionally with a sensibility verdict."""

        payload: dict[str, Any] = {
            "identifier": self.identifier,
            "ui_name": self.ui_name,
            "icon_name": self.icon_name,
            "min_size": {"width": self.min_size[0], "height": self.min_size[1]},
        }
        if column_count is not None:
            payload["sensible"] = self.is_sensible(column_count, row_count or 0)
        return payload


TIMELINE: Final[VisualizationSpec] = VisualizationSpec(
    identifier="timeline",
    ui_name="Timeline",
    icon_name="filter",
    min_size=(4, 4),
    is_sensible=is_sensible,
    check_renderable=check_renderable,
)

VISUALIZATIONS: Final[tuple[VisualizationSpec, ...]] = (TIMELINE,)


def get_visualization(identifier: str) -> VisualizationSpec | None:
    """Return the descriptor registered under `identifier`, if any."""

    for spec in VISUALIZATIONS:
        if spec.identifier == identifier:
            return spec
    return None
