"""Shared fixtures for helm-version-exporter tests."""

from __future__ import annotations

from typing import Any

import pytest
import requests
import yaml

from helm_version_exporter.core.index_resolver import ChartIndexResolver


class FakeResponse:
    def __init__(self, content: bytes, status_code: int = 200):
        self.content = content
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeSession:
    """Serves canned index.yaml payloads keyed by URL."""

    def __init__(self) -> None:
        self.responses: dict[str, FakeResponse | Exception] = {}
        self.requested: list[str] = []

    def add_index(self, url: str, entries: dict[str, list[str]]) -> None:
        document = {
            "apiVersion": "v1",
            "entries": {
                chart: [{"name": chart, "version": v} for v in versions]
                for chart, versions in entries.items()
            },
        }
        self.responses[url] = FakeResponse(yaml.safe_dump(document).encode("utf-8"))

    def add_raw(self, url: str, content: bytes, status_code: int = 200) -> None:
        self.responses[url] = FakeResponse(content, status_code)

    def add_error(self, url: str, err: Exception) -> None:
        self.responses[url] = err

    def get(self, url: str, timeout: float | None = None) -> FakeResponse:
        self.requested.append(url)
        response = self.responses.get(url)
        if response is None:
            raise requests.ConnectionError(f"no route to {url}")
        if isinstance(response, Exception):
            raise response
        return response


def make_app(name: str, spec: Any) -> dict[str, Any]:
    return {
        "apiVersion": "argoproj.io/v1alpha1",
        "kind": "Application",
        "metadata": {"name": name, "namespace": "argocd"},
        "spec": spec,
    }


def helm_source(chart: str, repo_url: str, revision: str) -> dict[str, Any]:
    return {"chart": chart, "repoURL": repo_url, "targetRevision": revision}


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def resolver(session: FakeSession) -> ChartIndexResolver:
    return ChartIndexResolver(session=session)  # type: ignore[arg-type]
