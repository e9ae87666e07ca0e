"""Compare declared chart versions of applications against their repositories."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Iterable, Protocol

from helm_version_exporter.core.metrics import MetricsSink
from helm_version_exporter.core.source_extractor import extract_helm_sources
from helm_version_exporter.exceptions import ResolutionError
from helm_version_exporter.models import VersionComparison
from helm_version_exporter.models.source import HelmSource
from helm_version_exporter.models.status import StatusSample
from helm_version_exporter.utils.version_compare import compare

logger = logging.getLogger(__name__)


class Resolver(Protocol):
    def resolve_latest(self, repo_url: str, chart_name: str) -> str: ...


def application_name(app: dict[str, Any]) -> str:
    metadata = app.get("metadata")
    if isinstance(metadata, dict) and isinstance(metadata.get("name"), str):
        return metadata["name"]
    return ""


def build_sample(app_name: str, source: HelmSource, latest_version: str) -> StatusSample:
    """Create a sample; only an EQUAL comparison counts as up to date."""
    result = compare(source.target_revision, latest_version)
    if result is VersionComparison.INCOMPARABLE:
        logger.debug(
            "Cannot compare %s with %s for %s, reporting outdated",
            source.target_revision,
            latest_version,
            app_name,
        )
    return StatusSample(
        application=app_name,
        chart_name=source.chart_name,
        repo_url=source.repo_url,
        current_version=source.target_revision,
        latest_version=latest_version,
        is_current=result is VersionComparison.EQUAL,
    )


class Reconciler:
    """Runs one reconciliation pass over a list of application records."""

    def __init__(
        self,
        resolver: Resolver,
        sink: MetricsSink | None = None,
        max_workers: int = 1,
    ):
        self.resolver = resolver
        self.sink = sink
        self.max_workers = max(1, max_workers)

    def collect_sources(
        self, applications: Iterable[dict[str, Any]]
    ) -> list[tuple[str, HelmSource]]:
        """Return (application name, source) pairs in listing order."""
        pairs: list[tuple[str, HelmSource]] = []
        for app in applications:
            if not isinstance(app, dict):
                logger.debug("Skipping application record that is not a map")
                continue
            app_name = application_name(app)
            logger.debug("Processing application: %s", app_name)

            spec = app.get("spec")
            if not isinstance(spec, dict):
                logger.debug("Skipping %s: spec is not a map or is missing", app_name)
                continue

            for source in extract_helm_sources(app_name, spec):
                pairs.append((app_name, source))
        return pairs

    def _resolve(self, source: HelmSource) -> str | None:
        try:
            return self.resolver.resolve_latest(source.repo_url, source.chart_name)
        except ResolutionError as err:
            logger.warning("Error getting latest version for %s: %s", source.chart_name, err)
            return None

    def _resolve_all(self, sources: list[HelmSource]) -> list[str | None]:
        if self.max_workers == 1 or len(sources) <= 1:
            return [self._resolve(s) for s in sources]
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            return list(pool.map(self._resolve, sources))

    def run_once(self, applications: Iterable[dict[str, Any]]) -> list[StatusSample]:
        """Reconcile all applications and publish one sample per resolved source.

        Failures to resolve a single source are logged and skipped.
        """
        pairs = self.collect_sources(applications)
        latest_versions = self._resolve_all([source for _, source in pairs])

        samples: list[StatusSample] = []
        for (app_name, source), latest in zip(pairs, latest_versions):
            if latest is None:
                continue
            sample = build_sample(app_name, source, latest)
            if self.sink is not None:
                self.sink.set_status(sample)
            logger.info(
                "Application %s: chart %s from %s current=%s latest=%s up-to-date=%s",
                sample.application,
                sample.chart_name,
                sample.repo_url,
                sample.current_version,
                sample.latest_version,
                sample.is_current,
            )
            samples.append(sample)
        return samples
