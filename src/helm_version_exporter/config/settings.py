"""Application configuration and defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


def _env_str(name: str, default: str) -> str:
    value = os.environ.get(name, "")
    return value if value else default


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name, "")
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_float(name: str, default: float | None) -> float | None:
    value = os.environ.get(name, "")
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.environ.get(name, "")
    if not value:
        return default
    return value.strip().lower() in _TRUE_VALUES


def _default_verbose() -> bool:
    # Matches the LOGLEVEL=debug toggle of the container image.
    return os.environ.get("LOGLEVEL", "").lower() == "debug"


@dataclass
class Settings:
    namespace: str = field(default_factory=lambda: _env_str("NAMESPACE", "argocd"))
    verbose: bool = field(default_factory=_default_verbose)
    metrics_port: int = field(default_factory=lambda: _env_int("METRICS_PORT", 9080))
    metrics_addr: str = field(default_factory=lambda: _env_str("METRICS_ADDR", "0.0.0.0"))
    cycle_interval: float = field(default_factory=lambda: _env_float("CYCLE_INTERVAL", 60.0))
    request_timeout: float | None = field(default_factory=lambda: _env_float("REQUEST_TIMEOUT", None))
    resolver_workers: int = field(default_factory=lambda: _env_int("RESOLVER_WORKERS", 1))
    expire_stale_series: bool = field(default_factory=lambda: _env_bool("EXPIRE_STALE_SERIES"))
    kube_context: str | None = field(default_factory=lambda: os.environ.get("KUBE_CONTEXT") or None)

    # Argo CD Application custom resource
    application_group: str = "argoproj.io"
    application_version: str = "v1alpha1"
    application_plural: str = "applications"


# Global singleton
settings = Settings()
