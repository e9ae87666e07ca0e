"""Semver comparison utilities."""

from __future__ import annotations

import semver

from helm_version_exporter.models import VersionComparison


def parse_version(v: str) -> semver.Version | None:
    """Parse a version string, returning None on failure.

    A leading ``v`` is accepted and missing minor/patch parts default to 0.
    Surrounding whitespace is not trimmed.
    """
    if not isinstance(v, str):
        return None
    raw = v
    if raw[:1] in ("v", "V"):
        raw = raw[1:]
    if not raw:
        return None
    try:
        return semver.Version.parse(raw, optional_minor_and_patch=True)
    except (ValueError, TypeError):
        return None


def compare(a: str, b: str) -> VersionComparison:
    """Order ``a`` relative to ``b`` under semver precedence.

    Returns INCOMPARABLE if either side does not parse.
    """
    left = parse_version(a)
    right = parse_version(b)
    if left is None or right is None:
        return VersionComparison.INCOMPARABLE

    result = left.compare(right)
    if result < 0:
        return VersionComparison.LESS
    if result > 0:
        return VersionComparison.GREATER
    return VersionComparison.EQUAL
