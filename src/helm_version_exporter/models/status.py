"""Version status samples published as metrics."""

from __future__ import annotations

from dataclasses import dataclass

SeriesKey = tuple[str, str, str, str, str]

LABEL_NAMES: tuple[str, ...] = (
    "application",
    "chart",
    "repo_url",
    "current_version",
    "latest_version",
)


@dataclass(frozen=True)
class StatusSample:
    application: str
    chart_name: str
    repo_url: str
    current_version: str
    latest_version: str
    is_current: bool

    @property
    def value(self) -> float:
        return 1.0 if self.is_current else 0.0

    def label_values(self) -> SeriesKey:
        return (
            self.application,
            self.chart_name,
            self.repo_url,
            self.current_version,
            self.latest_version,
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "application": self.application,
            "chart": self.chart_name,
            "repo_url": self.repo_url,
            "current_version": self.current_version,
            "latest_version": self.latest_version,
            "up_to_date": self.is_current,
        }
