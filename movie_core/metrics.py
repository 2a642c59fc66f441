"""Prometheus metrics for the movie service.

Two kinds of series live here: per-request HTTP timings/counts recorded by
app-wide hooks, and catalog series (store size, writes by operation) fed by
the movie routes.
"""

import logging
from time import perf_counter
from flask import Blueprint, current_app, g, request, Response
from prometheus_client import Counter, Gauge, Histogram, generate_latest, CONTENT_TYPE_LATEST

logger = logging.getLogger(__name__)

metrics_bp = Blueprint("metrics", __name__)

HTTP_LABELS = ["method", "route", "status"]

REQUEST_LATENCY = Histogram(
    "moviesearch_http_request_latency_seconds",
    "Latency of HTTP requests",
    HTTP_LABELS,
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1),
)
REQUEST_COUNT = Counter("moviesearch_http_requests_total", "Total HTTP requests", HTTP_LABELS)
ERROR_COUNT = Counter("moviesearch_http_errors_total", "Total HTTP 5xx responses", HTTP_LABELS)

MOVIES_STORED = Gauge("moviesearch_movies_stored", "Movies currently held by the store")
MOVIE_WRITES = Counter(
    "moviesearch_movie_writes_total",
    "Successful writes to the movie store",
    ["operation"],  # insert | update | remove
)
WRITE_OPERATIONS = ("insert", "update", "remove")
for _op in WRITE_OPERATIONS:
    MOVIE_WRITES.labels(_op)  # export zeros before the first write


def record_write(operation: str):
    """Count one successful store write; called by the api routes."""
    MOVIE_WRITES.labels(operation).inc()


@metrics_bp.before_app_request
def _start_timer():
    g._t_start = perf_counter()

@metrics_bp.after_app_request
def _observe_request(resp):
    start = getattr(g, "_t_start", None)
    if start is None:
        return resp
    try:
        # rule pattern keeps /movies/<movie_id> as one series
        route = request.url_rule.rule if request.url_rule else "<unmatched>"
        labels = (request.method, route, str(resp.status_code))
        REQUEST_LATENCY.labels(*labels).observe(perf_counter() - start)
        REQUEST_COUNT.labels(*labels).inc()
        if resp.status_code >= 500:
            ERROR_COUNT.labels(*labels).inc()
    except Exception:
        logger.warning("Failed to record request metrics", exc_info=True)
    return resp

@metrics_bp.get("/metrics")
def metrics():
    MOVIES_STORED.set(current_app.extensions["movie_store"].count())
    return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)
