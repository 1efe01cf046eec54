"""Tests for the fixture-backed mock sources."""

import asyncio

from platecheck.models import FetchStatus, MotStatus, TaxStatus
from platecheck.sources.fixtures import MOCK_MOT_HISTORY, MOCK_VEHICLES
from platecheck.sources.mock import MockMOTSource, MockVehicleSource


class TestMockVehicleSource:
    def test_known_plate(self):
        result = asyncio.run(MockVehicleSource(latency=False).fetch("AB12CDE"))
        assert result.status == FetchStatus.FOUND
        vehicle = result.data
        assert vehicle.make == "VOLKSWAGEN"
        assert vehicle.tax_status == TaxStatus.TAXED
        assert vehicle.source == "mock"

    def test_sorn_fixture(self):
        vehicle = asyncio.run(MockVehicleSource(latency=False).fetch("YH65ABC")).data
        assert vehicle.tax_status == TaxStatus.SORN
        assert vehicle.mot_status == MotStatus.NOT_VALID

    def test_unknown_plate(self):
        result = asyncio.run(MockVehicleSource(latency=False).fetch("ZZ99ZZZ"))
        assert result.status == FetchStatus.NOT_FOUND

    def test_every_fixture_builds(self):
        source = MockVehicleSource(latency=False)
        for plate in MOCK_VEHICLES:
            assert asyncio.run(source.fetch(plate)).is_found

    def test_latency_range_can_be_narrowed(self):
        source = MockVehicleSource()
        source.latency_range = (0.0, 0.01)
        assert asyncio.run(source.fetch("AB12CDE")).is_found


class TestMockMOTSource:
    def test_history_sorted(self):
        history = asyncio.run(MockMOTSource(latency=False).fetch("AB12CDE")).data
        dates = [t.completed_date for t in history.mot_tests]
        assert dates == sorted(dates, reverse=True)
        assert history.source == "mock"

    def test_dangerous_fixture(self):
        history = asyncio.run(MockMOTSource(latency=False).fetch("MK08GHI")).data
        assert any(t.has_dangerous_defects for t in history.mot_tests)

    def test_every_fixture_builds(self):
        source = MockMOTSource(latency=False)
        for plate in MOCK_MOT_HISTORY:
            assert asyncio.run(source.fetch(plate)).is_found

    def test_unknown_plate(self):
        result = asyncio.run(MockMOTSource(latency=False).fetch("ZZ99ZZZ"))
        assert result.status == FetchStatus.NOT_FOUND
