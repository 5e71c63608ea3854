"""Decoding helpers for host-supplied timeline payloads.

The host posts the same shape the query layer produces:
`{"series": [{"data": {"cols": [{"name", "type"}], "rows": [[...]]}}],
"width": W, "height": H}`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, cast

from lanes.dto import Column, ResultData, Series


@dataclass(frozen=True, slots=True)
class TimelineRequest:
    """A decoded timeline request.

    Args:
        series: Decoded series; only the first is drawn.
        width: Container width reported by the host.
        height: Container height reported by the host.
    """

    series: tuple[Series, ...]
    width: float
    height: float


def decode_timeline_request(payload: object) -> TimelineRequest:
    """Decode a JSON timeline request.

    Args:
        payload: Parsed JSON body.

    Returns:
        TimelineRequest instance.

    Raises:
        ValueError: When the payload shape is malformed.
    """

    if not isinstance(payload, dict):
        raise ValueError("Timeline request must be a JSON object.")
    body = cast(dict[str, Any], payload)
    return TimelineRequest(
        series=decode_series(body.get("series")),
        width=_parse_dimension(body.get("width"), name="width"),
        height=_parse_dimension(body.get("height"), name="height"),
    )


def decode_series(raw: object) -> tuple[Series, ...]:
    """Decode the host's `series` list.

    Args:
        raw: JSON list of `{"data": {"cols": [...], "rows": [...]}}` entries.

    Returns:
        Tuple of Series in payload order.

    Raises:
        ValueError: When the list or any entry is malformed.
    """

    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ValueError("series must be a list.")
    decoded: list[Series] = []
    for idx, entry in enumerate(raw):
        data = entry.get("data") if isinstance(entry, dict) else None
        if not isinstance(data, dict):
            raise ValueError(f"series[{idx}].data must be an object.")
        decoded.append(Series(data=_decode_result_data(data, idx=idx)))
    return tuple(decoded)


def _decode_result_data(data: dict[str, Any], *, idx: int) -> ResultData:
    """Decode one series' `cols`/`rows` block."""

    cols_raw = data.get("cols") or []
    rows_raw = data.get("rows") or []
    if not isinstance(cols_raw, list):
        raise ValueError(f"series[{idx}].data.cols must be a list.")
    if not isinstance(rows_raw, list):
        raise ValueError(f"series[{idx}].data.rows must be a list.")

    cols: list[Column] = []
    for col_idx, col in enumerate(cols_raw):
        if not isinstance(col, dict) or not isinstance(col.get("name"), str):
            raise ValueError(f"series[{idx}].data.cols[{col_idx}] must have a string name.")
        cols.append(Column(name=col["name"], type=str(col.get("type") or "type/*")))

    rows: list[tuple[Any, ...]] = []
    for row_idx, row in enumerate(rows_raw):
        if not isinstance(row, list):
            raise ValueError(f"series[{idx}].data.rows[{row_idx}] must be a list.")
        rows.append(tuple(row))
    return ResultData(cols=tuple(cols), rows=tuple(rows))


def _parse_dimension(value: object, *, name: str) -> float:
    """Parse a container dimension; non-numeric and non-finite values are rejected."""

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number.")
    try:
        number = float(value)
    except OverflowError as exc:
        raise ValueError(f"{name} must be finite.") from exc
    if not math.isfinite(number):
        raise ValueError(f"{name} must be finite.")
    return number
