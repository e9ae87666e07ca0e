"""Data models for helm-version-exporter."""

from __future__ import annotations

import enum


class VersionComparison(enum.Enum):
    EQUAL = "equal"
    LESS = "less"
    GREATER = "greater"
    INCOMPARABLE = "incomparable"
