"""Tests for the cycle scheduler."""

import threading
from typing import Any
from unittest.mock import MagicMock

from helm_version_exporter.core.index_resolver import ChartIndexResolver
from helm_version_exporter.core.metrics import MetricsSink
from helm_version_exporter.core.reconciler import Reconciler
from helm_version_exporter.core.scheduler import CycleScheduler
from helm_version_exporter.exceptions import DiscoveryError
from helm_version_exporter.models.status import StatusSample

from .conftest import FakeSession, helm_source, make_app

REPO = "https://charts.example.com/"


def test_run_cycle(session: FakeSession, resolver: ChartIndexResolver) -> None:
    session.add_index(REPO + "index.yaml", {"nginx": ["1.0.0"]})
    apps = [make_app("web", {"source": helm_source("nginx", REPO, "1.0.0")})]
    scheduler = CycleScheduler(lambda: apps, Reconciler(resolver))

    samples = scheduler.run_cycle()

    assert samples is not None
    assert [s.application for s in samples] == ["web"]
    assert scheduler.cycles == 1


def test_discovery_failure_skips_cycle() -> None:
    """A failed listing is logged and the cycle produces nothing."""
    reconciler = MagicMock()

    def discover() -> list[dict[str, Any]]:
        raise DiscoveryError("Error listing applications in namespace argocd: 403 Forbidden")

    scheduler = CycleScheduler(discover, reconciler)
    assert scheduler.run_cycle() is None
    reconciler.run_once.assert_not_called()
    assert scheduler.cycles == 0


def test_stale_series_kept_by_default(session: FakeSession, resolver: ChartIndexResolver) -> None:
    session.add_index(REPO + "index.yaml", {"nginx": ["1.0.0"], "redis": ["2.0.0"]})
    sink = MetricsSink()
    apps = [
        make_app("web", {"source": helm_source("nginx", REPO, "1.0.0")}),
        make_app("cache", {"source": helm_source("redis", REPO, "2.0.0")}),
    ]
    scheduler = CycleScheduler(lambda: apps, Reconciler(resolver, sink=sink))
    scheduler.run_cycle()
    apps.pop()
    scheduler.run_cycle()

    assert len(sink.series) == 2


def test_stale_series_expired(session: FakeSession, resolver: ChartIndexResolver) -> None:
    """With expiry enabled, series for vanished applications are removed."""
    session.add_index(REPO + "index.yaml", {"nginx": ["1.0.0"], "redis": ["2.0.0"]})
    sink = MetricsSink()
    apps = [
        make_app("web", {"source": helm_source("nginx", REPO, "1.0.0")}),
        make_app("cache", {"source": helm_source("redis", REPO, "2.0.0")}),
    ]
    scheduler = CycleScheduler(
        lambda: apps, Reconciler(resolver, sink=sink), expire_stale_series=True
    )
    scheduler.run_cycle()
    apps.pop()
    scheduler.run_cycle()

    assert [key[0] for key in sink.series] == ["web"]


def test_failed_discovery_does_not_expire(resolver: ChartIndexResolver) -> None:
    sink = MetricsSink()
    sink.set_status(StatusSample("web", "nginx", REPO, "1.0.0", "1.0.0", True))

    def discover() -> list[dict[str, Any]]:
        raise DiscoveryError("boom")

    scheduler = CycleScheduler(discover, Reconciler(resolver, sink=sink), expire_stale_series=True)
    scheduler.run_cycle()
    assert len(sink.series) == 1


def test_run_forever_stops() -> None:
    """The loop keeps cycling on the interval until stopped."""
    calls = threading.Semaphore(0)
    reconciler = MagicMock()
    reconciler.sink = None
    reconciler.run_once.return_value = []

    def discover() -> list[dict[str, Any]]:
        calls.release()
        return []

    scheduler = CycleScheduler(discover, reconciler, interval=0.01)
    thread = threading.Thread(target=scheduler.run_forever, daemon=True)
    thread.start()
    assert calls.acquire(timeout=5)
    assert calls.acquire(timeout=5)
    scheduler.stop()
    thread.join(timeout=5)

    assert not thread.is_alive()
    assert scheduler.stopped


def test_run_forever_survives_unexpected_errors() -> None:
    reconciler = MagicMock()
    reconciler.sink = None
    scheduler = CycleScheduler(lambda: [], reconciler, interval=0.01)

    def run_once(applications: list[dict[str, Any]]) -> list[Any]:
        if reconciler.run_once.call_count >= 2:
            scheduler.stop()
        raise RuntimeError("unexpected")

    reconciler.run_once.side_effect = run_once
    scheduler.run_forever()
    assert reconciler.run_once.call_count == 2
