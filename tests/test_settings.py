"""Tests for environment driven settings."""

import pytest

from helm_version_exporter.config.settings import Settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "NAMESPACE",
        "LOGLEVEL",
        "METRICS_PORT",
        "CYCLE_INTERVAL",
        "REQUEST_TIMEOUT",
        "RESOLVER_WORKERS",
        "EXPIRE_STALE_SERIES",
        "KUBE_CONTEXT",
    ):
        monkeypatch.delenv(name, raising=False)

    s = Settings()
    assert s.namespace == "argocd"
    assert not s.verbose
    assert s.metrics_port == 9080
    assert s.cycle_interval == 60.0
    assert s.request_timeout is None
    assert s.resolver_workers == 1
    assert not s.expire_stale_series
    assert s.kube_context is None
    assert (s.application_group, s.application_version, s.application_plural) == (
        "argoproj.io",
        "v1alpha1",
        "applications",
    )


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NAMESPACE", "gitops")
    monkeypatch.setenv("LOGLEVEL", "DEBUG")
    monkeypatch.setenv("METRICS_PORT", "9100")
    monkeypatch.setenv("REQUEST_TIMEOUT", "2.5")
    monkeypatch.setenv("EXPIRE_STALE_SERIES", "true")

    s = Settings()
    assert s.namespace == "gitops"
    assert s.verbose
    assert s.metrics_port == 9100
    assert s.request_timeout == 2.5
    assert s.expire_stale_series


def test_invalid_numbers_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("METRICS_PORT", "nine")
    monkeypatch.setenv("CYCLE_INTERVAL", "soon")
    s = Settings()
    assert s.metrics_port == 9080
    assert s.cycle_interval == 60.0
