"""Pytest fixtures shared across timeline tests."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import pytest

from lanes.dto import Column, ResultData, Series


@pytest.fixture
def timeline_cols() -> tuple[Column, ...]:
    """Return the canonical START_TIME/END_TIME/CLASS_TYPE columns."""

    return (
        Column(name="START_TIME", type="type/DateTime"),
        Column(name="END_TIME", type="type/DateTime"),
        Column(name="CLASS_TYPE", type="type/Text"),
    )


@pytest.fixture
def timeline_rows() -> tuple[tuple[Any, ...], ...]:
    """Return three rows spread over two categories (A, B, A)."""

    return (
        ("2020-01-01T00:00:00Z", "2020-01-01T06:00:00Z", "A"),
        ("2020-01-02T00:00:00Z", "2020-01-02T06:00:00Z", "B"),
        ("2020-01-03T00:00:00Z", "2020-01-03T06:00:00Z", "A"),
    )


@pytest.fixture
def timeline_series(timeline_cols, timeline_rows) -> tuple[Series, ...]:
    """Return a single-series host payload built from the canonical rows."""

    return (Series(data=ResultData(cols=timeline_cols, rows=timeline_rows)),)


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    The suite must be runnable by intent:
    - `unit`: pure, fast tests with no Django request handling.
    - `integration`: tests touching Django settings, views, or the HTTP layer.

    Each test must have exactly one of these markers.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
