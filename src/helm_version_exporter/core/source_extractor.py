"""Extract Helm chart references from Argo CD Application sources."""

from __future__ import annotations

import logging
from typing import Any, Iterator

from helm_version_exporter.models.source import HelmSource

logger = logging.getLogger(__name__)


def _str_field(source: dict[str, Any], key: str) -> str:
    value = source.get(key)
    return value if isinstance(value, str) else ""


def normalize_repo_url(repo_url: str) -> str:
    """Ensure the repository URL ends with exactly one trailing slash."""
    if repo_url.endswith("/"):
        return repo_url
    return repo_url + "/"


def extract_helm_source(app_name: str, source: dict[str, Any]) -> HelmSource | None:
    """Build a HelmSource from one application source map.

    Returns None for git/kustomize sources (no ``chart`` key) and for Helm
    sources missing any of chart, repoURL or targetRevision.
    """
    if source.get("chart") is None:
        logger.debug("No Helm source found for %s in this source", app_name)
        return None

    chart_name = _str_field(source, "chart")
    repo_url = _str_field(source, "repoURL")
    target_revision = _str_field(source, "targetRevision")

    if not chart_name or not repo_url or not target_revision:
        logger.debug(
            "Skipping %s: incomplete Helm data (chart=%s, repoURL=%s, version=%s)",
            app_name,
            chart_name,
            repo_url,
            target_revision,
        )
        return None

    return HelmSource(
        chart_name=chart_name,
        repo_url=normalize_repo_url(repo_url),
        target_revision=target_revision,
    )


def iter_source_candidates(app_name: str, spec: dict[str, Any]) -> Iterator[dict[str, Any]]:
    """Yield the source maps of an application spec.

    ``spec.source`` comes first, followed by every map in ``spec.sources``.
    Entries that are not maps are skipped.
    """
    source = spec.get("source")
    if isinstance(source, dict):
        yield source

    sources = spec.get("sources")
    if isinstance(sources, list):
        for i, src in enumerate(sources, 1):
            if isinstance(src, dict):
                yield src
            else:
                logger.debug("Skipping source #%d for %s: not a map", i, app_name)
    elif source is None:
        logger.debug("No sources found for %s", app_name)


def extract_helm_sources(app_name: str, spec: dict[str, Any]) -> list[HelmSource]:
    """Return every valid Helm source declared by an application spec."""
    helm_sources: list[HelmSource] = []
    for candidate in iter_source_candidates(app_name, spec):
        helm_source = extract_helm_source(app_name, candidate)
        if helm_source is not None:
            helm_sources.append(helm_source)
    return helm_sources
