"""Shared enumerations used across covtree."""

from __future__ import annotations

from enum import StrEnum


class OutputFormat(StrEnum):
    """Supported output formats."""

    HUMAN = "human"
    JSON = "json"


__all__ = ["OutputFormat"]
