from covtree.core.config import (
    DEFAULT_TAB_WIDTH,
    INDENT_WIDTH,
    LINES_SCALE,
    LOG_FORMAT,
    ROOT_NAME,
    TOTAL_LINES,
    Settings,
    determine_hierarchy_file,
    get_schema,
    load_settings,
)
from covtree.core.pipeline import (
    DataError,
    LoadResult,
    LoadStats,
    NoInputError,
    PipelineError,
    SystemIOError,
    UnexpectedError,
    decode_hierarchy,
    load_hierarchy,
    load_hierarchy_file,
    load_hierarchy_text,
)
from covtree.core.records import (
    CoverageMetrics,
    CoverageRecord,
    ParseResult,
    ParseStats,
    parse_line,
    parse_lines,
    split_rows,
)
from covtree.core.resolve import resolve_paths
from covtree.core.severity import (
    SEVERITY_STYLES,
    gradient_color,
    percentage_to_style_index,
    severity_style,
    style_for_index,
)
from covtree.core.tree import BuildResult, HierarchyNode, build_tree, parent_path, template_link_hint
from covtree.core.types import OutputFormat

__all__ = [
    "DEFAULT_TAB_WIDTH",
    "INDENT_WIDTH",
    "LINES_SCALE",
    "LOG_FORMAT",
    "ROOT_NAME",
    "SEVERITY_STYLES",
    "TOTAL_LINES",
    "BuildResult",
    "CoverageMetrics",
    "CoverageRecord",
    "DataError",
    "HierarchyNode",
    "LoadResult",
    "LoadStats",
    "NoInputError",
    "OutputFormat",
    "ParseResult",
    "ParseStats",
    "PipelineError",
    "Settings",
    "SystemIOError",
    "UnexpectedError",
    "build_tree",
    "decode_hierarchy",
    "determine_hierarchy_file",
    "get_schema",
    "gradient_color",
    "load_hierarchy",
    "load_hierarchy_file",
    "load_hierarchy_text",
    "load_settings",
    "parent_path",
    "parse_line",
    "parse_lines",
    "percentage_to_style_index",
    "resolve_paths",
    "severity_style",
    "split_rows",
    "style_for_index",
    "template_link_hint",
]
