"""Helm source and chart index models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

INDEX_FILE = "index.yaml"


@dataclass(frozen=True)
class HelmSource:
    """A validated Helm chart reference taken from an application source."""

    chart_name: str
    repo_url: str
    target_revision: str


@dataclass
class ChartIndexEntry:
    chart_name: str
    versions: list[str] = field(default_factory=list)

    @classmethod
    def from_index(cls, document: dict[str, Any], chart_name: str) -> ChartIndexEntry:
        """Build the entry for one chart out of a decoded index document.

        Records without a string ``version`` field are dropped; the
        published order of the remaining versions is kept.
        """
        entries = document.get("entries") or {}
        records = entries.get(chart_name)
        if not isinstance(records, list):
            records = []
        versions = [
            r["version"]
            for r in records
            if isinstance(r, dict) and isinstance(r.get("version"), str)
        ]
        return cls(chart_name=chart_name, versions=versions)
