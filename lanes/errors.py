"""Error taxonomy for the timeline data-to-layout pipeline.

Every error raised by this package is a `TimelineError`, so hosts can surface
the message to the end user without knowing which stage failed.
"""

from __future__ import annotations


class TimelineError(ValueError):
    """Base class for failures that abort a timeline render cycle."""

    kind = "timeline"


class SchemaError(TimelineError):
    """Raised when the result set lacks a column the timeline requires."""

    kind = "schema"

    def __init__(self, message: str, *, missing: tuple[str, ...] = ()) -> None:
        """Initialize the error.

        Args:
            message: User-facing description of the failure.
            missing: Required column names that were not found.
        """

        super().__init__(message)
        self.missing = missing


class DataError(TimelineError):
    """Raised when a row value cannot be coerced into a timestamp."""

    kind = "data"

    def __init__(self, *, row_index: int, column: str, value: object, reason: str | None = None) -> None:
        """Initialize the error.

        Args:
            row_index: Position of the offending row in the input rows.
            column: Name of the column holding the offending value.
            value: The raw value that failed coercion.
            reason: Optional override for the default explanation.
        """

        detail = reason or f"has an unparseable timestamp: {value!r}"
        super().__init__(f"Row {row_index} column {column!r} {detail}.")
        self.row_index = row_index
        self.column = column
        self.value = value


class LayoutError(TimelineError):
    """Raised when the lanes cannot be fitted into the available area."""

    kind = "layout"


class LifecycleError(TimelineError):
    """Raised when a lifecycle message arrives in a phase that cannot accept it."""

    kind = "lifecycle"
