"""Prometheus-compatible metrics for the API and the spread deriver."""

from __future__ import annotations

import threading
import time
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Tuple

MetricKey = Tuple[str, str, str]
PathKey = Tuple[str, str]


@dataclass
class LatencyStats:
    """Aggregate latency metrics for a route."""

    count: int = 0
    total_duration: float = 0.0

    def observe(self, duration: float) -> None:
        self.count += 1
        self.total_duration += duration


@dataclass
class RegenerationStats:
    runs: int = 0
    pages: int = 0
    spreads: int = 0


_request_counts: Dict[MetricKey, int] = defaultdict(int)
_error_counts: Dict[MetricKey, int] = defaultdict(int)
_latency_stats: Dict[PathKey, LatencyStats] = defaultdict(LatencyStats)
_regeneration_stats = RegenerationStats()
_metrics_lock = threading.Lock()


def _route_path(scope) -> str:
    # Matched FastAPI routes leave themselves in the scope; label by template
    # (/api/publisher/issues/{issue_id}) rather than by concrete id.
    route = scope.get("route")
    template = getattr(route, "path_format", None) or getattr(route, "path", None)
    if not template:
        return scope.get("path", "")
    # Routes under an included/mounted router only know their local path
    root_path = scope.get("root_path", "")
    if root_path and not template.startswith(root_path):
        template = root_path.rstrip("/") + template
    return template


class MetricsMiddleware:
    """ASGI middleware that records request metrics."""

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):  # type: ignore[override]
        if scope.get("type") != "http" or scope.get("path") == "/metrics":
            await self.app(scope, receive, send)
            return

        method = scope.get("method", "UNKNOWN")
        start_time = time.perf_counter()
        status_holder: Dict[str, int] = {}

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                status_holder["status"] = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception:
            _record_request(method, _route_path(scope), 500, time.perf_counter() - start_time)
            raise
        else:
            status_code = status_holder.get("status", 500)
            _record_request(method, _route_path(scope), status_code, time.perf_counter() - start_time)


def _record_request(method: str, path: str, status: int, duration: float) -> None:
    key: MetricKey = (method, path, str(status))
    with _metrics_lock:
        _request_counts[key] += 1
        _latency_stats[(method, path)].observe(duration)
        if status >= 500:
            _error_counts[key] += 1


def record_spread_regeneration(page_count: int, spread_count: int) -> None:
    """Count one spread regeneration and the pages/spreads it produced."""

    with _metrics_lock:
        _regeneration_stats.runs += 1
        _regeneration_stats.pages += page_count
        _regeneration_stats.spreads += spread_count


def render_metrics() -> str:
    """Render collected metrics in the Prometheus exposition format."""

    lines: list[str] = []
    with _metrics_lock:
        lines.append("# HELP onlyzines_requests_total Total HTTP requests")
        lines.append("# TYPE onlyzines_requests_total counter")
        for (method, path, status), value in sorted(_request_counts.items()):
            lines.append(
                f'onlyzines_requests_total{{method="{method}",path="{path}",status="{status}"}} {value}'
            )

        lines.append("# HELP onlyzines_request_errors_total HTTP requests that resulted in server errors")
        lines.append("# TYPE onlyzines_request_errors_total counter")
        for (method, path, status), value in sorted(_error_counts.items()):
            lines.append(
                f'onlyzines_request_errors_total{{method="{method}",path="{path}",status="{status}"}} {value}'
            )

        lines.append("# HELP onlyzines_request_duration_seconds Time spent handling requests")
        lines.append("# TYPE onlyzines_request_duration_seconds summary")
        for (method, path), stats in sorted(_latency_stats.items()):
            labels = f'method="{method}",path="{path}"'
            lines.append(f"onlyzines_request_duration_seconds_sum{{{labels}}} {stats.total_duration}")
            lines.append(f"onlyzines_request_duration_seconds_count{{{labels}}} {stats.count}")

        lines.append("# HELP onlyzines_spread_regenerations_total Spread regenerations run")
        lines.append("# TYPE onlyzines_spread_regenerations_total counter")
        lines.append(f"onlyzines_spread_regenerations_total {_regeneration_stats.runs}")
        lines.append("# HELP onlyzines_spreads_generated_total Spreads written by regenerations")
        lines.append("# TYPE onlyzines_spreads_generated_total counter")
        lines.append(f"onlyzines_spreads_generated_total {_regeneration_stats.spreads}")
        lines.append("# HELP onlyzines_spread_pages_total Pages paired by regenerations")
        lines.append("# TYPE onlyzines_spread_pages_total counter")
        lines.append(f"onlyzines_spread_pages_total {_regeneration_stats.pages}")

    return "\n".join(lines) + "\n"
