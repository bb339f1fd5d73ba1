"""Prometheus metrics for monitoring and observability."""

from __future__ import annotations

import re
import time
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)
from starlette.middleware.base import BaseHTTPMiddleware

# Request metrics
REQUEST_COUNT = Counter(
    "botcheck_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

REQUEST_LATENCY = Histogram(
    "botcheck_http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 15.0, 30.0],
)

REQUEST_IN_PROGRESS = Gauge(
    "botcheck_http_requests_in_progress",
    "HTTP requests currently being processed",
    ["method", "endpoint"],
)

# Error metrics
ERROR_COUNT = Counter(
    "botcheck_errors_total",
    "Total application errors",
    ["error_type", "endpoint"],
)

# Scan metrics
SCANS_TOTAL = Counter(
    "botcheck_scans_total",
    "Total scans by mode and outcome",
    ["mode", "outcome"],
)

SCAN_SCORE = Histogram(
    "botcheck_scan_score",
    "Final scan score distribution",
    ["mode"],
    buckets=[10, 20, 30, 40, 50, 60, 70, 80, 90, 100],
)


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    metrics: bytes = generate_latest()
    return metrics


def get_metrics_content_type() -> str:
    """Get the content type for Prometheus metrics."""
    content_type: str = CONTENT_TYPE_LATEST
    return content_type


class MetricsMiddleware(BaseHTTPMiddleware):
    """Middleware to collect request metrics."""

    # Paths to exclude from metrics
    EXCLUDE_PATHS = {"/metrics", "/api/health", "/api/ready", "/favicon.ico"}

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        if request.url.path in self.EXCLUDE_PATHS:
            return await call_next(request)

        method = request.method
        endpoint = self._normalize_path(request.url.path)

        REQUEST_IN_PROGRESS.labels(method=method, endpoint=endpoint).inc()
        start_time = time.perf_counter()

        try:
            response = await call_next(request)

            REQUEST_COUNT.labels(
                method=method,
                endpoint=endpoint,
                status_code=str(response.status_code),
            ).inc()
            REQUEST_LATENCY.labels(method=method, endpoint=endpoint).observe(
                time.perf_counter() - start_time
            )
            return response

        except Exception as e:
            ERROR_COUNT.labels(error_type=type(e).__name__, endpoint=endpoint).inc()
            raise

        finally:
            REQUEST_IN_PROGRESS.labels(method=method, endpoint=endpoint).dec()

    def _normalize_path(self, path: str) -> str:
        """Replace UUIDs and numeric ids so label cardinality stays bounded."""
        path = re.sub(
            r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
            "{id}",
            path,
            flags=re.IGNORECASE,
        )
        return re.sub(r"/\d+(/|$)", r"/{id}\1", path)


def record_scan_completed(mode: str, score: int) -> None:
    """Record a successful scan and its score."""
    SCANS_TOTAL.labels(mode=mode, outcome="completed").inc()
    SCAN_SCORE.labels(mode=mode).observe(score)


def record_scan_failed(mode: str) -> None:
    """Record a scan that ended in an unexpected failure."""
    SCANS_TOTAL.labels(mode=mode, outcome="failed").inc()
