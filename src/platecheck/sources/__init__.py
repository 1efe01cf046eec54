"""Vehicle data source implementations."""

from platecheck.sources.base import BaseSource
from platecheck.sources.registry import get_source, list_sources

__all__ = [
    "BaseSource",
    "get_source",
    "list_sources",
]
