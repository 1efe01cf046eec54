"""Fixture-backed sources used when the official APIs are not configured."""

import asyncio
import logging
import random

from platecheck.exceptions import VehicleNotFoundError
from platecheck.models import MotHistory, VehicleRecord
from platecheck.sources.base import BaseSource
from platecheck.sources.fixtures import MOCK_MOT_HISTORY, MOCK_VEHICLES

logger = logging.getLogger(__name__)

# Provenance tag on every record built from fixtures
MOCK_PROVENANCE = "mock"


class _MockSource(BaseSource):
    """Shared latency simulation for fixture sources."""

    # (min, max) seconds of simulated API delay
    latency_range: tuple[float, float] = (0.3, 0.7)

    def __init__(self, latency: bool = True, **kwargs) -> None:
        super().__init__(**kwargs)
        self.latency = latency

    async def _simulate_latency(self) -> None:
        if self.latency:
            low, high = self.latency_range
            await asyncio.sleep(random.uniform(low, high))


class MockVehicleSource(_MockSource):
    """Stand-in for the DVLA registry."""

    name = "mock-dvla"
    label = "Mock vehicle fixtures"

    async def _lookup(self, plate: str) -> VehicleRecord:
        await self._simulate_latency()
        data = MOCK_VEHICLES.get(plate)
        if data is None:
            raise VehicleNotFoundError(plate)
        return VehicleRecord(**data, source=MOCK_PROVENANCE)


class MockMOTSource(_MockSource):
    """Stand-in for the DVSA MOT history API."""

    name = "mock-mot"
    label = "Mock MOT fixtures"
    latency_range = (0.4, 0.9)

    async def _lookup(self, plate: str) -> MotHistory:
        await self._simulate_latency()
        data = MOCK_MOT_HISTORY.get(plate)
        if data is None:
            raise VehicleNotFoundError(plate)
        return MotHistory(**data, source=MOCK_PROVENANCE)
