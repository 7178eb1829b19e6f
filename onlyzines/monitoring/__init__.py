"""Monitoring utilities for Prometheus instrumentation."""

from .middleware import MetricsMiddleware, record_spread_regeneration
from .router import router

__all__ = ["MetricsMiddleware", "record_spread_regeneration", "router"]
