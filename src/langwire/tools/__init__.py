"""Agent tools."""

from .base import Tool, ToolRegistry
from .wikipedia import WikipediaQuery, WikipediaQueryOptions

__all__ = [
    "Tool",
    "ToolRegistry",
    "WikipediaQuery",
    "WikipediaQueryOptions",
]
