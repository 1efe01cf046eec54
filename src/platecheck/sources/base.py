"""Abstract base source for vehicle data lookups."""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

from platecheck.core.cache import ResponseCache
from platecheck.exceptions import VehicleNotFoundError
from platecheck.models import FetchResult

logger = logging.getLogger(__name__)

DEFAULT_HTTP_TIMEOUT = 8.0

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class BaseSource(ABC):
    """Abstract base class for data sources.

    Each source knows how to:
    - Query one upstream service for a canonical plate
    - Map the response into platecheck models
    - Report missing vehicles by raising VehicleNotFoundError

    ``fetch()`` wraps ``_lookup()`` with caching, an overall deadline and
    error conversion, so callers always get a FetchResult and never an
    exception.
    """

    # Override in subclasses
    name: str
    label: str
    cache_ttl: float = 3600
    deadline: float = 30.0

    def __init__(
        self,
        cache: Optional[ResponseCache] = None,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize source.

        Args:
            cache: Cache owned by this source (a fresh one by default)
            timeout: Per-request HTTP timeout in seconds
            transport: httpx transport override (tests use MockTransport)
        """
        self.cache = cache if cache is not None else ResponseCache(default_ttl=self.cache_ttl)
        self.timeout = timeout
        self.transport = transport

    @property
    def is_configured(self) -> bool:
        """Whether credentials/config needed by this source are present."""
        return True

    async def fetch(self, plate: str) -> FetchResult:
        """Look up a canonical plate. Never raises."""
        cached = self.cache.get(plate)
        if cached is not None:
            logger.debug("%s: cache hit for %s", self.name, plate)
            return cached.model_copy(update={"from_cache": True})

        try:
            data = await asyncio.wait_for(self._lookup(plate), timeout=self.deadline)
        except VehicleNotFoundError:
            logger.info("%s: %s not found", self.name, plate)
            result = FetchResult.not_found(self.name)
            self.cache.set(plate, result)
            return result
        except asyncio.TimeoutError:
            logger.warning("%s: lookup for %s exceeded %ss", self.name, plate, self.deadline)
            return FetchResult.unavailable(self.name, f"Timed out after {self.deadline}s")
        except Exception as e:
            cause = _describe(e)
            logger.warning("%s: unavailable for %s: %s", self.name, plate, cause)
            return FetchResult.unavailable(self.name, cause)

        result = FetchResult.found(self.name, data)
        if self.cacheable(data):
            self.cache.set(plate, result)
        return result

    def cacheable(self, data: Any) -> bool:
        """Whether a found payload should be cached. Override to skip partial data."""
        return True

    # ─────────────────────────────────────────────────────────────────────
    # Abstract methods - must be implemented by each source
    # ─────────────────────────────────────────────────────────────────────

    @abstractmethod
    async def _lookup(self, plate: str) -> Any:
        """Query the upstream service.

        Args:
            plate: Canonical plate (uppercase, no whitespace)

        Returns:
            Source-specific model

        Raises:
            VehicleNotFoundError: Upstream says the plate does not exist
            SourceUnavailableError: Missing config, bad status, bad payload
        """
        ...

    # ─────────────────────────────────────────────────────────────────────
    # Helper methods - available to all sources
    # ─────────────────────────────────────────────────────────────────────

    def http_client(self, **kwargs: Any) -> httpx.AsyncClient:
        """Create an HTTP client with this source's timeout and transport."""
        headers = {"User-Agent": USER_AGENT}
        headers.update(kwargs.pop("headers", {}))
        return httpx.AsyncClient(
            timeout=self.timeout,
            transport=self.transport,
            headers=headers,
            **kwargs,
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r}>"


def _describe(error: Exception) -> str:
    details = getattr(error, "details", None)
    message = str(error) or type(error).__name__
    return f"{message} ({details})" if details else message

