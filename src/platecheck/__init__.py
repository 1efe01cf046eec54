"""platecheck - UK and Isle of Man vehicle registration lookup."""

__version__ = "0.1.0"

_aggregator = None
_aggregator_settings = None


def get_aggregator(settings=None):
    """Return the process-wide Aggregator, rebuilt only when settings change.

    Source caches and the scrape rate limiter live on the sources, so
    reusing one Aggregator keeps them shared across lookups.
    """
    global _aggregator, _aggregator_settings
    from platecheck.core.aggregator import Aggregator
    from platecheck.core.config import ConfigManager

    if settings is None:
        settings = ConfigManager().load()

    if _aggregator is None or settings != _aggregator_settings:
        _aggregator = Aggregator.from_settings(settings)
        _aggregator_settings = settings.model_copy()
    return _aggregator


def reset_aggregator() -> None:
    """Drop the shared Aggregator and its caches."""
    global _aggregator, _aggregator_settings
    _aggregator = None
    _aggregator_settings = None


async def get_vehicle_info(registration: str, settings=None):
    """Look up a registration with the shared Aggregator."""
    return await get_aggregator(settings).get_vehicle_info(registration)
