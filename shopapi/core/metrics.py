"""
Prometheus counters for the product and user services.

Counters live at module level so they are registered exactly once per
process, whatever the number of app instances built (tests build many).
Each service owns a registry, scraped through its own ``/metrics``.
"""

from __future__ import annotations

from dataclasses import dataclass

from prometheus_client import CollectorRegistry, Counter, generate_latest


@dataclass(frozen=True)
class ServiceMetrics:
    """Request/creation counter pair for one service."""

    registry: CollectorRegistry
    requests: Counter
    created: Counter

    def record_request(self) -> None:
        self.requests.inc()

    def record_created(self) -> None:
        self.created.inc()

    def render(self) -> bytes:
        """Prometheus text exposition of this service's registry."""
        return generate_latest(self.registry)


def build_service_metrics(requests_name: str, requests_help: str, created_name: str, created_help: str) -> ServiceMetrics:
    registry = CollectorRegistry()
    return ServiceMetrics(
        registry=registry,
        requests=Counter(requests_name, requests_help, registry=registry),
        created=Counter(created_name, created_help, registry=registry),
    )


PRODUCT_METRICS = build_service_metrics(
    "product_requests_total",
    "Total number of product API requests",
    "products_created_total",
    "Total number of products created",
)

USER_METRICS = build_service_metrics(
    "user_requests_total",
    "Total number of user API requests",
    "users_created_total",
    "Total number of users created",
)
