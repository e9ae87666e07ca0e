"""Prometheus gauge holding the chart version status series."""

from __future__ import annotations

import logging
import threading
from typing import Iterable

from prometheus_client import CollectorRegistry, Gauge, start_http_server

from helm_version_exporter.models.status import LABEL_NAMES, SeriesKey, StatusSample

logger = logging.getLogger(__name__)

METRIC_NAME = "helm_chart_version_status"
METRIC_HELP = "Status of Helm chart versions (1 = up-to-date, 0 = outdated)"


class MetricsSink:
    """Label-keyed gauge store shared by the reconcile loop and the scrape endpoint.

    The gauge itself is safe for concurrent scrapes and writes; the lock only
    guards the set of known series used for stale-series removal.
    """

    def __init__(self, registry: CollectorRegistry | None = None):
        self.registry = registry if registry is not None else CollectorRegistry()
        self.gauge = Gauge(
            METRIC_NAME,
            METRIC_HELP,
            labelnames=LABEL_NAMES,
            registry=self.registry,
        )
        self._lock = threading.Lock()
        self._series: set[SeriesKey] = set()

    def set_status(self, sample: StatusSample) -> None:
        key = sample.label_values()
        with self._lock:
            self.gauge.labels(*key).set(sample.value)
            self._series.add(key)
        logger.debug("Set metric: app=%s, status=%s", sample.application, sample.value)

    def get_status(self, key: SeriesKey) -> float | None:
        """Return the current value of a series, or None if it is not exported."""
        return self.registry.get_sample_value(METRIC_NAME, dict(zip(LABEL_NAMES, key)))

    @property
    def series(self) -> frozenset[SeriesKey]:
        with self._lock:
            return frozenset(self._series)

    def retain_only(self, keys: Iterable[SeriesKey]) -> list[SeriesKey]:
        """Remove every series not in ``keys``; returns the removed keys."""
        keep = set(keys)
        with self._lock:
            stale = sorted(self._series - keep)
            for key in stale:
                self.gauge.remove(*key)
                self._series.discard(key)
        for key in stale:
            logger.info("Removed stale series for application %s chart %s", key[0], key[1])
        return stale

    def serve(self, port: int, addr: str = "0.0.0.0") -> None:
        """Expose the registry on ``http://<addr>:<port>/metrics`` from a daemon thread."""
        logger.debug("Starting Prometheus metrics server on %s:%d", addr, port)
        start_http_server(port, addr=addr, registry=self.registry)
