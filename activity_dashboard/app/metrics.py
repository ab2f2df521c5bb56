from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

REQUEST_COUNT = Counter(
    "activity_dashboard_requests_total",
    "Total HTTP requests processed by the activity dashboard",
    ("method", "path", "status"),
)

REQUEST_LATENCY = Histogram(
    "activity_dashboard_request_latency_seconds",
    "HTTP request latency in seconds",
    ("method", "path"),
)

REQUEST_ERRORS = Counter(
    "activity_dashboard_request_errors_total",
    "HTTP requests resulting in server errors",
    ("method", "path", "status"),
)

POLLER_REQUESTS = Counter(
    "activity_dashboard_poller_requests_total",
    "Snapshot reads issued by the dashboard's own poller, by status",
    ("status",),
)

POLL_RESULTS = Counter(
    "activity_dashboard_polls_total",
    "Snapshot polls by outcome",
    ("result",),
)

SOURCE_READS = Counter(
    "activity_dashboard_source_reads_total",
    "Reads of the activity data file by outcome",
    ("result",),
)

SNAPSHOT_DAYS = Gauge(
    "activity_dashboard_snapshot_days",
    "Number of days recorded in the currently loaded snapshot",
)

__all__ = [
    "POLLER_REQUESTS",
    "POLL_RESULTS",
    "REQUEST_COUNT",
    "REQUEST_ERRORS",
    "REQUEST_LATENCY",
    "SNAPSHOT_DAYS",
    "SOURCE_READS",
]
