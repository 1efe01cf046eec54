"""Source registry for discovering and instantiating sources."""

from typing import Type

from platecheck.sources.base import BaseSource


def _get_sources() -> dict[str, Type[BaseSource]]:
    """Get all available sources.

    Lazy import to avoid circular dependencies.
    """
    from platecheck.sources.dvla import DVLASource
    from platecheck.sources.insurance import InsuranceChecker
    from platecheck.sources.iom import IsleOfManSource
    from platecheck.sources.mock import MockMOTSource, MockVehicleSource
    from platecheck.sources.mot import MOTHistorySource
    from platecheck.sources.totalcarcheck import TotalCarCheckSource

    return {
        source.name: source
        for source in (
            DVLASource,
            MOTHistorySource,
            MockVehicleSource,
            MockMOTSource,
            TotalCarCheckSource,
            IsleOfManSource,
            InsuranceChecker,
        )
    }


def get_source(name: str) -> Type[BaseSource]:
    """Get source class by name.

    Args:
        name: Source name (e.g., "dvla", "gov.im")

    Returns:
        Source class

    Raises:
        ValueError: If no source has that name
    """
    sources = _get_sources()
    key = name.lower()

    if key not in sources:
        available = ", ".join(sorted(sources.keys()))
        raise ValueError(
            f"No source named '{name}'. "
            f"Available sources: {available}"
        )

    return sources[key]


def list_sources() -> list[str]:
    """List registered source names."""
    return sorted(_get_sources().keys())
