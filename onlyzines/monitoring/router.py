"""Route serving Prometheus metrics."""

from __future__ import annotations

from fastapi import APIRouter, Response

from .middleware import render_metrics

router = APIRouter(tags=["Monitoring"])


@router.get("/metrics", include_in_schema=False)
def metrics() -> Response:
    return Response(content=render_metrics(), media_type="text/plain; version=0.0.4")
