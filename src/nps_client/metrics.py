"""Prometheus collector exposing the NPS API rate-limit counters.

Register a :class:`RateLimitCollector` with a registry to publish the
counters reported by the most recent API response.
"""

from collections.abc import Iterator

import structlog
from prometheus_client.core import GaugeMetricFamily
from prometheus_client.metrics_core import Metric
from prometheus_client.registry import Collector

from . import api

logger = structlog.get_logger(__name__)


def _parse_count(value: str) -> float | None:
    """Parse a rate-limit header value, None if absent or not a number."""
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        logger.warning("Ignoring non-numeric rate limit header", value=value)
        return None


class RateLimitCollector(Collector):
    """Yields the rate-limit snapshot of a client as gauges.

    All three metric families are always yielded; a family only has a
    sample once the corresponding value is known.
    """

    def __init__(self, client: api.Client, metric_prefix: str = "nps_api"):
        """Initialize the collector.

        Args:
            client: Client whose rate-limit snapshot is exported.
            metric_prefix: Prefix for the metric names.
        """
        self._client = client
        self._metric_prefix = metric_prefix

    def collect(self) -> Iterator[Metric]:
        """Collect the rate-limit metrics for a Prometheus scrape."""
        snapshot = self._client.rate_limit

        limit = GaugeMetricFamily(
            f"{self._metric_prefix}_rate_limit",
            "requests allowed per hour as reported by the API",
        )
        if (value := _parse_count(snapshot.limit)) is not None:
            limit.add_metric([], value)
        yield limit

        remaining = GaugeMetricFamily(
            f"{self._metric_prefix}_rate_limit_remaining",
            "requests remaining in the current window as reported by the API",
        )
        if (value := _parse_count(snapshot.remaining)) is not None:
            remaining.add_metric([], value)
        yield remaining

        last_updated = GaugeMetricFamily(
            f"{self._metric_prefix}_rate_limit_last_updated_seconds",
            "unix time of the response the rate limit was read from",
        )
        if snapshot.last_updated is not None:
            last_updated.add_metric([], snapshot.last_updated.timestamp())
        yield last_updated
