"""Latest chart version lookup from remote Helm repository indexes."""

from __future__ import annotations

import logging
from typing import Any

import requests
import yaml

from helm_version_exporter.exceptions import ChartNotFoundError, FetchError
from helm_version_exporter.models import VersionComparison
from helm_version_exporter.models.source import INDEX_FILE, ChartIndexEntry
from helm_version_exporter.utils.version_compare import compare, parse_version

logger = logging.getLogger(__name__)

# Index scalars keep their literal text (``version: 1.0`` stays "1.0"), so
# no implicit int/float/bool resolution. Prefer the C loader when available.
_YamlLoader = getattr(yaml, "CBaseLoader", yaml.BaseLoader)


def select_latest(versions: list[str]) -> str:
    """Pick the highest version from a published version list.

    The first entry seeds the running maximum even when it does not parse;
    later entries replace it only if they parse and compare greater.
    Unparsable entries are skipped without aborting the scan, so an index
    with only malformed versions yields its first listed string.
    """
    if not versions:
        raise ValueError("versions must not be empty")

    latest = versions[0]
    for candidate in versions[1:]:
        if parse_version(candidate) is None:
            logger.debug("Skipping unparsable chart version %r", candidate)
            continue
        if compare(candidate, latest) is VersionComparison.GREATER:
            latest = candidate
    return latest


def decode_index(content: str | bytes) -> dict[str, Any]:
    """Decode an index.yaml payload.

    Raises ValueError when the payload is not YAML or not shaped like an
    index: a mapping whose ``entries`` maps chart names to lists of version
    records. Empty values are normalized to empty containers.
    """
    try:
        document = yaml.load(content, Loader=_YamlLoader)
    except yaml.YAMLError as err:
        raise ValueError(f"invalid YAML: {err}") from err
    if not isinstance(document, dict):
        raise ValueError("document is not a mapping")

    entries = document.get("entries")
    if entries in (None, ""):
        entries = {}
    if not isinstance(entries, dict):
        raise ValueError("entries is not a mapping")

    for chart_name, records in entries.items():
        if records in (None, ""):
            entries[chart_name] = []
            continue
        if not isinstance(records, list):
            raise ValueError(f"entries for chart {chart_name} is not a list")
        if not all(isinstance(r, dict) for r in records):
            raise ValueError(f"entries for chart {chart_name} contain a non-mapping record")
    document["entries"] = entries
    return document


class ChartIndexResolver:
    """Fetches repository indexes and returns the newest version of a chart.

    Nothing is cached: every call issues one request, so results are at most
    one reconciliation interval old.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ):
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def fetch_index(self, repo_url: str, chart_name: str = "") -> dict[str, Any]:
        """Fetch and decode ``<repo_url>index.yaml``.

        ``repo_url`` must already end with a trailing slash.
        """
        index_url = repo_url + INDEX_FILE
        logger.debug("Fetching %s for chart %s", index_url, chart_name)
        try:
            resp = self.session.get(index_url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as err:
            raise FetchError(
                repo_url, chart_name, f"Failed to fetch {index_url}: {err}"
            ) from err
        try:
            return decode_index(resp.content)
        except ValueError as err:
            raise FetchError(
                repo_url, chart_name, f"Failed to decode {index_url}: {err}"
            ) from err

    def resolve_latest(self, repo_url: str, chart_name: str) -> str:
        """Return the latest published version of ``chart_name``.

        Raises FetchError when the index is unreachable or undecodable and
        ChartNotFoundError when the chart has no version records.
        """
        document = self.fetch_index(repo_url, chart_name)
        entry = ChartIndexEntry.from_index(document, chart_name)
        if not entry.versions:
            raise ChartNotFoundError(
                repo_url,
                chart_name,
                f"Chart {chart_name} not found in repository {repo_url}",
            )

        latest = select_latest(entry.versions)
        logger.debug("Determined latest version for %s: %s", chart_name, latest)
        return latest
