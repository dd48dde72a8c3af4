"""Process-local counters and gauges for the ledger backend.

Metric families:

- ``entry_store_<op>_total`` / ``entry_store_<op>_failed_total``: one per
  Entry Store request (``fetch_all``, ``create``, ``update``, ``delete``).
- ``recipe_store_fetch_all_total`` / ``recipe_store_fetch_all_failed_total``.
- ``entry_store_last_fetch_size``: gauge of the last fetched collection.
- ``<route>_http_total``: one per router hit.

The health endpoint exposes :meth:`InMemoryMetricsClient.snapshot`.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import DefaultDict

from .logging import get_logger

logger = get_logger(__name__)


def store_metric(store: str, operation: str, *, failed: bool = False) -> str:
    """Counter name for one store request, e.g. ``entry_store_delete_failed_total``."""

    suffix = "failed_total" if failed else "total"
    return f"{store}_store_{operation}_{suffix}"


class MetricsClient:  # pragma: no cover
    """Counter/gauge sink used by the store clients and routers."""

    def increment(self, metric: str, value: int = 1) -> None:
        raise NotImplementedError

    def gauge(self, metric: str, value: int) -> None:
        raise NotImplementedError


@dataclass
class InMemoryMetricsClient(MetricsClient):
    counters: DefaultDict[str, int] = field(default_factory=lambda: defaultdict(int))
    gauges: dict[str, int] = field(default_factory=dict)

    def increment(self, metric: str, value: int = 1) -> None:
        self.counters[metric] += value
        logger.debug("metrics_increment", extra={"metric": metric, "value": value})

    def gauge(self, metric: str, value: int) -> None:
        self.gauges[metric] = value
        logger.debug("metrics_gauge", extra={"metric": metric, "value": value})

    def counter(self, metric: str) -> int:
        """Current count without creating the key."""

        return self.counters.get(metric, 0)

    def snapshot(self) -> dict[str, dict[str, int]]:
        return {"counters": dict(self.counters), "gauges": dict(self.gauges)}


_metrics_singleton: InMemoryMetricsClient | None = None


def get_metrics_client() -> InMemoryMetricsClient:
    """Return the shared metrics client."""

    global _metrics_singleton
    if _metrics_singleton is None:
        _metrics_singleton = InMemoryMetricsClient()
    return _metrics_singleton
