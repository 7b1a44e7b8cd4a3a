"""Central configuration and constants for ``covtree``."""

from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass
from functools import cache
from importlib import resources
from pathlib import Path

from covtree._meta import logger
from covtree.errors import ConfigError, HierarchyFileNotFoundError

# Default logging format used by the CLI entry point.
LOG_FORMAT = "%(levelname)s: %(message)s"

# A dump row carries six metrics followed by the instance name.
METRIC_FIELDS = 6
MIN_FIELDS = METRIC_FIELDS + 1

# Spaces per nesting level in the hierarchy dump.
INDENT_WIDTH = 2

# Leading tabs count as one nesting level unless configured otherwise.
DEFAULT_TAB_WIDTH = INDENT_WIDTH

# Line-count approximation carried by the dump format.
LINES_SCALE = 1000
TOTAL_LINES = 10000

ROOT_NAME = "Coverage Data"

DEFAULT_HIERARCHY_FILE = "hierarchy.txt"

_SCHEMA_FILES: dict[str, str] = {
    "v1": "schema.json",
}


@cache
def get_schema(version: str = "v1") -> dict[str, object]:
    """Load and cache the JSON schema for structured output."""
    try:
        filename = _SCHEMA_FILES[version]
    except KeyError as exc:
        choices = ", ".join(sorted(_SCHEMA_FILES))
        msg = f"Unsupported schema version: {version!r}. Available versions: {choices}"
        raise ValueError(msg) from exc
    return json.loads(resources.files("covtree.data").joinpath(filename).read_text(encoding="utf-8"))


@dataclass(frozen=True, slots=True)
class Settings:
    """Values read from ``[tool.covtree]``."""

    hierarchy: str | None = None
    tab_width: int = DEFAULT_TAB_WIDTH
    link_template: str | None = None


def _settings_from_table(table: dict[str, object], *, source: Path) -> Settings:
    hierarchy = table.get("hierarchy")
    if hierarchy is not None and not isinstance(hierarchy, str):
        msg = f"{source}: tool.covtree.hierarchy must be a string, got {type(hierarchy).__name__}"
        raise ConfigError(msg)

    tab_width = table.get("tab_width", DEFAULT_TAB_WIDTH)
    if isinstance(tab_width, bool) or not isinstance(tab_width, int) or tab_width < 0:
        msg = f"{source}: tool.covtree.tab_width must be a non-negative integer, got {tab_width!r}"
        raise ConfigError(msg)

    link_template = table.get("link_template")
    if link_template is not None and not isinstance(link_template, str):
        msg = f"{source}: tool.covtree.link_template must be a string"
        raise ConfigError(msg)

    return Settings(
        hierarchy=(hierarchy.strip() or None) if hierarchy else None,
        tab_width=tab_width,
        link_template=link_template or None,
    )


def load_settings(pyproject: Path | None = None) -> Settings:
    """Read ``[tool.covtree]`` from *pyproject* (``./pyproject.toml`` by default).

    A missing or unreadable file yields the defaults; only invalid values raise.
    """
    path = pyproject if pyproject is not None else Path("./pyproject.toml").resolve()
    if not path.exists():
        return Settings()
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Failed to parse %s: %s", path, e)
        return Settings()

    table = data.get("tool", {}).get("covtree", {})
    if not isinstance(table, dict):
        msg = f"{path}: [tool.covtree] must be a table"
        raise ConfigError(msg)
    return _settings_from_table(table, source=path)


def determine_hierarchy_file(explicit: Path | str | None, settings: Settings | None = None) -> Path:
    """Resolve the hierarchy dump from an explicit path, configuration, or the default name."""
    if explicit:
        path = Path(explicit).resolve()
        if not path.exists():
            msg = f"Hierarchy file not found: {path}"
            raise HierarchyFileNotFoundError(msg)
        return path

    if settings is not None and settings.hierarchy:
        path = Path(settings.hierarchy).resolve()
        if path.exists():
            logger.info("Using hierarchy file from config: %s", path)
            return path
        msg = f"Hierarchy file from config not found: {path}"
        raise HierarchyFileNotFoundError(msg)

    default = Path(DEFAULT_HIERARCHY_FILE).resolve()
    if default.exists():
        return default

    msg = f"No hierarchy file given and {DEFAULT_HIERARCHY_FILE} not found in {Path.cwd()}"
    raise HierarchyFileNotFoundError(msg)


__all__ = [
    "DEFAULT_HIERARCHY_FILE",
    "DEFAULT_TAB_WIDTH",
    "INDENT_WIDTH",
    "LINES_SCALE",
    "LOG_FORMAT",
    "METRIC_FIELDS",
    "MIN_FIELDS",
    "ROOT_NAME",
    "TOTAL_LINES",
    "Settings",
    "determine_hierarchy_file",
    "get_schema",
    "load_settings",
]
