"""Core services for platecheck."""

from platecheck.core.browser import BrowserManager
from platecheck.core.cache import RateLimiter, ResponseCache
from platecheck.core.config import ConfigManager

__all__ = [
    "BrowserManager",
    "ConfigManager",
    "RateLimiter",
    "ResponseCache",
]
