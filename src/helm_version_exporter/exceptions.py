"""Exceptions raised by helm-version-exporter."""

__all__ = [
    "HelmVersionExporterError",
    "ClusterAccessError",
    "DiscoveryError",
    "ResolutionError",
    "FetchError",
    "ChartNotFoundError",
]


class HelmVersionExporterError(Exception):
    """Generic base exception used for this package."""


class ClusterAccessError(HelmVersionExporterError):
    """Raised when no Kubernetes client configuration can be loaded."""


class DiscoveryError(HelmVersionExporterError):
    """Raised when listing applications fails for a cycle."""


class ResolutionError(HelmVersionExporterError):
    """Raised when the latest version of a chart cannot be determined."""

    def __init__(self, repo_url: str, chart_name: str, message: str) -> None:
        super().__init__(message)
        self.repo_url = repo_url
        self.chart_name = chart_name


class FetchError(ResolutionError):
    """Raised when a repository index cannot be fetched or decoded."""


class ChartNotFoundError(ResolutionError):
    """Raised when a chart is absent from a repository index."""
