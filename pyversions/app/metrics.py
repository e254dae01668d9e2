"""
Métriques Prometheus pour l'application.

Ce module définit les métriques HTTP, de rate limiting et de scan exposées sur `/metrics`.
"""

import time

from fastapi import APIRouter, Request
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Histogram,
    generate_latest,
)
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

metrics_router = APIRouter()

REQUEST_COUNT = Counter(
    "http_requests_total", "Total HTTP requests", ["method", "route", "status"]
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds", "Latency of HTTP requests", ["route"]
)

RATE_LIMIT_BLOCKS = Counter(
    "rate_limit_blocks_total",
    "Requests rejected by the rate limiter",
    ["route"],
)

VERSION_SCANS = Counter(
    "version_scans_total",
    "Version scans by target and outcome",
    ["target", "result"],
)
VERSION_SCAN_DURATION = Histogram(
    "version_scan_duration_seconds",
    "Duration of a version scan (fetch + parse)",
    ["target"],
)

KNOWN_ROUTES = ("/python-stable", "/python-prerelease", "/health", "/metrics")


def normalize_route(path: str) -> str:
    """Limite la cardinalité du label `route` aux routes connues."""
    if path in KNOWN_ROUTES:
        return path
    return "other"


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Compte les requêtes et mesure leur latence par route."""

    async def dispatch(self, request: Request, call_next):  # type: ignore[no-untyped-def]
        route = normalize_route(request.url.path)
        start = time.perf_counter()
        response = await call_next(request)
        REQUEST_LATENCY.labels(route=route).observe(time.perf_counter() - start)
        REQUEST_COUNT.labels(
            method=request.method, route=route, status=str(response.status_code)
        ).inc()
        return response


@metrics_router.get("/metrics")
def metrics() -> Response:
    """Expose les métriques au format texte Prometheus."""
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
