"""
Shared metrics configuration for the Storefront Gateway.
"""

from prometheus_client import Counter, Histogram, Info, CollectorRegistry
from typing import Dict, Any, Optional


class MetricsCollector:
    """Centralized metrics collector for services."""

    def __init__(self, service_name: str, registry: Optional[CollectorRegistry] = None):
        self.service_name = service_name
        # Private registry per collector so several apps can live in one process
        self.registry = registry if registry is not None else CollectorRegistry()
        self._metrics: Dict[str, Any] = {}
        self._setup_metrics()

    def _setup_metrics(self):
        """Set up common metrics for the service."""

        self._metrics["service_info"] = Info(
            "service_info",
            "Service information",
            registry=self.registry
        )
        self._metrics["service_info"].info({
            "service": self.service_name,
            "version": "1.0.0"
        })

        # HTTP metrics
        self._metrics["http_requests_total"] = Counter(
            "http_requests_total",
            "Total HTTP requests",
            ["method", "endpoint", "status_code"],
            registry=self.registry
        )

        self._metrics["http_request_duration_seconds"] = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["method", "endpoint"],
            registry=self.registry
        )

        self._metrics["health_check_total"] = Counter(
            "health_check_total",
            "Total health check requests",
            ["status"],
            registry=self.registry
        )

        self._setup_gateway_metrics()

    def _setup_gateway_metrics(self):
        """Set up gateway-specific metrics."""
        self._metrics["gateway_upstream_requests_total"] = Counter(
            "gateway_upstream_requests_total",
            "Total upstream provider calls",
            ["operation", "outcome"],
            registry=self.registry
        )

        self._metrics["gateway_upstream_duration_seconds"] = Histogram(
            "gateway_upstream_duration_seconds",
            "Upstream provider call duration in seconds",
            ["operation"],
            registry=self.registry
        )

        self._metrics["gateway_errors_total"] = Counter(
            "gateway_errors_total",
            "Total classified gateway failures",
            ["error_type"],
            registry=self.registry
        )

    def get_metric(self, name: str):
        """Get a metric by name."""
        return self._metrics.get(name)

    def record_http_request(self, method: str, endpoint: str, status_code: int, duration: float):
        """Record HTTP request metrics."""
        self._metrics["http_requests_total"].labels(
            method=method,
            endpoint=endpoint,
            status_code=str(status_code)
        ).inc()

        self._metrics["http_request_duration_seconds"].labels(
            method=method,
            endpoint=endpoint
        ).observe(duration)

    def record_health_check(self, status: str):
        """Record health check metrics."""
        self._metrics["health_check_total"].labels(status=status).inc()

    def record_upstream_call(self, operation: str, outcome: str, duration: float):
        """Record one upstream provider call."""
        self._metrics["gateway_upstream_requests_total"].labels(
            operation=operation,
            outcome=outcome
        ).inc()
        self._metrics["gateway_upstream_duration_seconds"].labels(operation=operation).observe(duration)

    def record_error(self, error_type: str):
        """Record a classified failure."""
        self._metrics["gateway_errors_total"].labels(error_type=error_type).inc()


def get_metrics_collector(service_name: str, registry: Optional[CollectorRegistry] = None) -> MetricsCollector:
    """Get a metrics collector for a service."""
    return MetricsCollector(service_name, registry)
