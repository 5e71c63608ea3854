"""JSON views for the timeline visualization."""

from __future__ import annotations

import json
import logging

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from lanes.errors import TimelineError
from visualizations.charting.codec import decode_timeline_request
from visualizations.charting.engine import PayloadContainer, PayloadTimelineRenderer
from visualizations.charting.render import TimelineChart
from visualizations.conf import timeline_options
from visualizations.registry import VISUALIZATIONS

logger = logging.getLogger(__name__)


@require_GET
def visualization_list(request: HttpRequest) -> JsonResponse:
    """Return the registered visualization descriptors.

    When `columns` (and optionally `rows`) are given in the query string, each
    descriptor also reports whether it is sensible for that result shape.
    """

    column_count = _query_int(request, "columns")
    row_count = _query_int(request, "rows")
    return JsonResponse(
        {
            "visualizations": [
                spec.as_json(column_count=column_count, row_count=row_count) for spec in VISUALIZATIONS
            ]
        }
    )


@csrf_exempt
@require_POST
def timeline_layout(request: HttpRequest) -> JsonResponse:
    """Compute the timeline engine payload for a posted result set.

    The request is handled as one full chart lifetime: mount into a container
    of the posted size, read the rendered surface, unmount.
    """

    try:
        body = json.loads(request.body or b"null")
        timeline_request = decode_timeline_request(body)
    except ValueError as exc:
        logger.warning("Rejected malformed timeline request: %s", exc)
        return JsonResponse({"error": str(exc), "kind": "request"}, status=400)

    container = PayloadContainer(width=timeline_request.width, height=timeline_request.height)
    chart = TimelineChart(container=container, renderer=PayloadTimelineRenderer(), options=timeline_options())
    try:
        chart.mount(timeline_request.series)
        payload = container.surfaces[chart.surface_id].as_json()
    except TimelineError as exc:
        logger.warning("Timeline could not be rendered (%s): %s", exc.kind, exc)
        return JsonResponse({"error": str(exc), "kind": exc.kind}, status=400)
    finally:
        chart.unmount()
    return JsonResponse(payload)


def _query_int(request: HttpRequest, name: str) -> int | None:
    """Parse an optional non-negative integer query parameter."""

    raw = (request.GET.get(name) or "").strip()
    if not raw.isdigit():
        return None
    return int(raw)
