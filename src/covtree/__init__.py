"""Browse hierarchical coverage dumps as a colored tree."""

from covtree._meta import __version__, logger

__all__ = ["__version__", "logger"]
