"""Prometheus metrics for the record service."""

from __future__ import annotations

from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Counter, Gauge, Histogram, generate_latest

from recordstore.storage import ValueStore

__all__ = ["CONTENT_TYPE_LATEST", "Metrics"]


class Metrics:
    """Collectors bound to a private registry, one per application."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry or CollectorRegistry()
        self.requests = Counter(
            "recordstore_requests_total",
            "HTTP requests",
            ["method", "path", "status"],
            registry=self.registry,
        )
        self.latency = Histogram(
            "recordstore_request_seconds",
            "HTTP latency seconds",
            ["method", "path"],
            buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5),
            registry=self.registry,
        )
        self.records = Gauge("recordstore_records", "Live records", registry=self.registry)
        self.auth_failures = Counter(
            "recordstore_auth_failures_total",
            "Rejected credential headers",
            registry=self.registry,
        )

    def bind_store(self, store: ValueStore) -> None:
        """Report the store's live record count at scrape time."""
        self.records.set_function(store.count)

    def render(self) -> bytes:
        return generate_latest(self.registry)
