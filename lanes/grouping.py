"""Row grouping: flat result rows into per-category lanes of intervals."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from .dto import Column, Interval, Lane, ScanOrder
from .errors import DataError
from .timestamps import to_epoch_millis
from .validation import CLASS_TYPE, END_TIME, START_TIME, column_index, validate_columns

logger = logging.getLogger(__name__)


def compose_lanes(
    rows: Sequence[Sequence[Any]],
    cols: Sequence[Column],
    *,
    scan_order: ScanOrder = "forward",
) -> tuple[Lane, ...]:
    """Group rows into lanes keyed by their CLASS_TYPE value.

    Lanes are emitted in the order their category is first seen during the
    scan, and intervals keep the order their rows were scanned in. A null
    category shares the empty-string lane.

    Args:
        rows: Value tuples aligned with `cols`.
        cols: Column descriptors containing START_TIME, END_TIME and CLASS_TYPE.
        scan_order: `forward` scans rows top-down, `reverse` bottom-up.

    Returns:
        Lanes with unique labels; their interval counts sum to `len(rows)`.

    Raises:
        SchemaError: When a required column is missing.
        DataError: When a row is too short or holds an unparseable timestamp.
    """

    validate_columns(cols)
    start_idx = column_index(cols, START_TIME)
    end_idx = column_index(cols, END_TIME)
    class_idx = column_index(cols, CLASS_TYPE)

    if scan_order == "reverse":
        indexes = range(len(rows) - 1, -1, -1)
    else:
        indexes = range(len(rows))

    grouped: dict[str, list[Interval]] = {}
    for row_index in indexes:
        row = rows[row_index]
        label = _lane_label(_cell(row, class_idx, row_index=row_index, cols=cols))
        interval = Interval(
            start=_timestamp(row, start_idx, row_index=row_index, cols=cols),
            end=_timestamp(row, end_idx, row_index=row_index, cols=cols),
        )
        grouped.setdefault(label, []).append(interval)

    lanes = tuple(Lane(label=label, intervals=tuple(intervals)) for label, intervals in grouped.items())
    logger.debug("Grouped %d rows into %d lanes (scan_order=%s).", len(rows), len(lanes), scan_order)
    return lanes


def _lane_label(value: object) -> str:
    """Render a category value as a lane label."""

    if value is None:
        return ""
    return str(value)


def _cell(row: Sequence[Any], idx: int, *, row_index: int, cols: Sequence[Column]) -> Any:
    """Return a row value, failing with DataError when the row is too short."""

    if idx >= len(row):
        raise DataError(row_index=row_index, column=cols[idx].name, value=None, reason="is missing")
    return row[idx]


def _timestamp(row: Sequence[Any], idx: int, *, row_index: int, cols: Sequence[Column]) -> int:
    """Coerce a row value to epoch milliseconds, naming the row and column on failure."""

    value = _cell(row, idx, row_index=row_index, cols=cols)
    try:
        return to_epoch_millis(value)
    except ValueError as exc:
        raise DataError(row_index=row_index, column=cols[idx].name, value=value) from exc
