"""Schema validation and the sensibility heuristic for timeline input.

Validation is strict and fails fast: a result set that lacks any required
column never reaches grouping or layout.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Final

from .dto import Column, Series
from .errors import SchemaError

START_TIME: Final[str] = "START_TIME"
END_TIME: Final[str] = "END_TIME"
CLASS_TYPE: Final[str] = "CLASS_TYPE"

REQUIRED_COLUMNS: Final[tuple[str, ...]] = (START_TIME, END_TIME, CLASS_TYPE)

MIN_SENSIBLE_COLUMNS: Final[int] = 2

RAW_DATA_REQUIRED: Final[str] = "Timeline visualization requires raw data."


def column_index(cols: Sequence[Column], name: str) -> int:
    """Return the position of the first column matching `name`, ignoring case.

    Args:
        cols: Ordered column descriptors.
        name: Required column name (upper case).

    Returns:
        The column index, or -1 when no column matches.
    """

    for idx, col in enumerate(cols):
        if col.name.upper() == name:
            return idx
    return -1


def missing_required_columns(cols: Iterable[Column]) -> tuple[str, ...]:
    """Return the required column names absent from `cols`.

    Args:
        cols: Column descriptors in any order and casing.

    Returns:
        Missing names in `REQUIRED_COLUMNS` order; empty when all are present.
    """

    present = {col.name.upper() for col in cols}
    return tuple(name for name in REQUIRED_COLUMNS if name not in present)


def validate_columns(cols: Iterable[Column]) -> None:
    """Ensure START_TIME, END_TIME and CLASS_TYPE columns are all present.

    Args:
        cols: Column descriptors to check.

    Raises:
        SchemaError: When at least one required column is missing.
    """

    missing = missing_required_columns(cols)
    if missing:
        raise SchemaError(
            f"{RAW_DATA_REQUIRED} Missing columns: {', '.join(missing)}.",
            missing=missing,
        )


def check_renderable(series: Sequence[Series]) -> None:
    """Host entry point: refuse to render series the timeline cannot draw.

    Args:
        series: Series supplied by the host; only the first one is drawn.

    Raises:
        SchemaError: When no series is present or its columns fail validation.
    """

    if not series:
        raise SchemaError(RAW_DATA_REQUIRED, missing=REQUIRED_COLUMNS)
    validate_columns(series[0].data.cols)


def is_sensible(column_count: int, row_count: int) -> bool:
    """Return whether the timeline is a plausible choice for a result shape.

    Advisory only: column names are not inspected, so a sensible shape may
    still fail `check_renderable`.

    Args:
        column_count: Number of columns in the result set.
        row_count: Number of rows in the result set (not used by the check).

    Returns:
        True when there are more than `MIN_SENSIBLE_COLUMNS` columns.
    """

    return column_count > MIN_SENSIBLE_COLUMNS
