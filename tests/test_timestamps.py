"""Tests for START_TIME/END_TIME coercion to epoch milliseconds."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from lanes.timestamps import to_epoch_millis

pytestmark = pytest.mark.unit

NEW_YEAR_2020_MS = 1_577_836_800_000


@pytest.mark.parametrize(
    "value",
    [
        "2020-01-01T00:00:00Z",
        "2020-01-01T00:00:00+00:00",
        "2020-01-01 00:00:00",
        "2020-01-01",
        "2020-01-01T01:00:00+01:00",
        datetime(2020, 1, 1, tzinfo=UTC),
        datetime(2020, 1, 1),
        date(2020, 1, 1),
        NEW_YEAR_2020_MS,
        float(NEW_YEAR_2020_MS),
    ],
)
def test_to_epoch_millis_normalizes_supported_inputs(value: object) -> None:
    """Strings, date objects and numbers all land on the same instant."""

    assert to_epoch_millis(value) == NEW_YEAR_2020_MS


def test_to_epoch_millis_keeps_millisecond_precision() -> None:
    """Sub-second parts survive the conversion exactly."""

    assert to_epoch_millis("1970-01-01T00:00:01.250Z") == 1250
    offset = timezone(timedelta(hours=-5))
    assert to_epoch_millis(datetime(1970, 1, 1, tzinfo=offset)) == 5 * 3600 * 1000


def test_to_epoch_millis_truncates_fractional_numbers() -> None:
    """Numeric inputs are truncated toward zero like a JS Date."""

    assert to_epoch_millis(1.9) == 1
    assert to_epoch_millis(-1.9) == -1


@pytest.mark.parametrize("value", ["not-a-date", "", "   ", None, True, float("nan"), float("inf"), object()])
def test_to_epoch_millis_rejects_unparseable_values(value: object) -> None:
    """Anything that is not a point in time fails instead of producing garbage."""

    with pytest.raises(ValueError):
        to_epoch_millis(value)
