"""Centralised exception hierarchy for covtree."""

from __future__ import annotations


class CovtreeError(Exception):
    """Base class for all custom covtree exceptions."""


class HierarchyFileError(CovtreeError):
    """Base class for errors related to hierarchy dump handling."""


class HierarchyFileNotFoundError(HierarchyFileError):
    """Hierarchy dump could not be located on disk."""


class ConfigError(CovtreeError):
    """The ``[tool.covtree]`` configuration holds an invalid value."""


__all__ = [
    "ConfigError",
    "CovtreeError",
    "HierarchyFileError",
    "HierarchyFileNotFoundError",
]
