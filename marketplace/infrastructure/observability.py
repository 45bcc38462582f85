# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Prometheus metrics for HTTP traffic and the trust boundary components."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

from marketplace.shared.config import load_config

_metrics_enabled = load_config().observability.metrics_enabled

REQUEST_LATENCY = Histogram(
    "marketplace_request_latency_seconds",
    "HTTP request latency by route",
    labelnames=("endpoint",),
    # Password hashing puts login/register near 50-100ms; image probes can take seconds.
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10),
)
REQUEST_COUNTER = Counter(
    "marketplace_requests_total",
    "HTTP requests by route and status",
    labelnames=("endpoint", "status"),
)
SESSION_EVENTS = Counter(
    "marketplace_session_events_total",
    "Session lifecycle events (created, revoked, collision)",
    labelnames=("event",),
)
IMAGE_ADMISSIONS = Counter(
    "marketplace_image_admissions_total",
    "Remote image admission results, by accept or rejection reason",
    labelnames=("outcome",),
)


def record_session_event(event: str, amount: int = 1) -> None:
    if _metrics_enabled and amount > 0:
        SESSION_EVENTS.labels(event=event).inc(amount)


def record_image_admission(outcome: str) -> None:
    if _metrics_enabled:
        IMAGE_ADMISSIONS.labels(outcome=outcome).inc()


def observe_request(endpoint: str, status: str, duration: float) -> None:
    if not _metrics_enabled:
        return
    REQUEST_LATENCY.labels(endpoint=endpoint).observe(duration)
    REQUEST_COUNTER.labels(endpoint=endpoint, status=status).inc()


__all__ = [
    "IMAGE_ADMISSIONS",
    "REQUEST_COUNTER",
    "REQUEST_LATENCY",
    "SESSION_EVENTS",
    "observe_request",
    "record_image_admission",
    "record_session_event",
]
