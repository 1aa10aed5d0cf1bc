"""Prometheus exposition of itinerary and external lookup metrics."""

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from backend.app.utils.metrics import registry

router = APIRouter()


@router.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    """Render the itinerary registry in Prometheus text format.

    Mutation counters are labelled by operation, so a rejected ``create_section``
    and a committed ``delete_trip`` land in separate series.
    """
    return Response(content=generate_latest(registry), media_type=CONTENT_TYPE_LATEST)
