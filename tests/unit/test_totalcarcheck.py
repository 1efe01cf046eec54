"""Tests for the totalcarcheck.co.uk scraper."""

import asyncio

import httpx
import pytest

from platecheck.core.cache import RateLimiter
from platecheck.exceptions import VehicleNotFoundError
from platecheck.models import FetchStatus
from platecheck.sources.totalcarcheck import TotalCarCheckSource

RESULT_PAGE = """
<html><body>
<h1>Free Vehicle Check</h1>
<table>
  <tr><th>Manufacturer</th><td>FORD</td></tr>
  <tr><th>Model</th><td>FIESTA ZETEC</td></tr>
  <tr><th>Colour</th><td>Grey</td></tr>
  <tr><th>Fuel Type</th><td>Petrol</td></tr>
  <tr><th>Engine Size</th><td>998 cc</td></tr>
  <tr><th>Year of Manufacture</th><td>2017</td></tr>
  <tr><th>BHP</th><td>123 BHP</td></tr>
  <tr><th>Top Speed</th><td>117 mph</td></tr>
  <tr><th>Road Tax Status</th><td>Taxed</td></tr>
  <tr><th>MOT Status</th><td>Expires 12 May 2025</td></tr>
  <tr><th>ULEZ Compliant</th><td>Yes</td></tr>
</table>
</body></html>
"""

NOT_FOUND_PAGE = "<html><body><p>No vehicle found for that registration.</p></body></html>"


class TestParsePage:
    def test_table_fields(self):
        scraped = TotalCarCheckSource.parse_page(RESULT_PAGE, "FD17ABC")

        assert scraped.manufacturer == "FORD"
        assert scraped.model == "FIESTA ZETEC"
        assert scraped.colour == "Grey"
        assert scraped.fuel_type == "Petrol"
        assert scraped.engine_size == "998 cc"
        assert scraped.year_of_manufacture == 2017
        assert scraped.bhp == 123
        assert scraped.tax_status == "Taxed"
        assert scraped.ulez_compliant is True
        assert scraped.scraped_from == "totalcarcheck.co.uk"

    def test_missing_fields_are_none(self):
        scraped = TotalCarCheckSource.parse_page(RESULT_PAGE, "FD17ABC")
        assert scraped.previous_price is None
        assert scraped.caz_compliant is None

    def test_not_found_phrase(self):
        with pytest.raises(VehicleNotFoundError):
            TotalCarCheckSource.parse_page(NOT_FOUND_PAGE, "ZZ99ZZZ")

    def test_invalid_registration_phrase(self):
        with pytest.raises(VehicleNotFoundError):
            TotalCarCheckSource.parse_page("<p>Please enter a valid registration</p>", "X")

    def test_unrecognised_page_is_empty(self):
        scraped = TotalCarCheckSource.parse_page("<html><body>Hello</body></html>", "AB12CDE")
        assert scraped.is_empty

    def test_non_compliant(self):
        html = "<table><tr><th>ULEZ</th><td>Non-compliant</td></tr></table>"
        assert TotalCarCheckSource.parse_page(html, "AB12CDE").ulez_compliant is False


class TestFetch:
    def make_source(self, handler) -> TotalCarCheckSource:
        return TotalCarCheckSource(
            rate_limiter=RateLimiter(min_interval=0),
            transport=httpx.MockTransport(handler),
        )

    def test_found(self):
        seen = []

        def handler(request):
            seen.append(request.url.params["regno"])
            return httpx.Response(200, text=RESULT_PAGE)

        result = asyncio.run(self.make_source(handler).fetch("FD17ABC"))
        assert result.status == FetchStatus.FOUND
        assert result.data.manufacturer == "FORD"
        assert seen == ["FD17ABC"]

    def test_not_found(self):
        source = self.make_source(lambda request: httpx.Response(200, text=NOT_FOUND_PAGE))
        result = asyncio.run(source.fetch("ZZ99ZZZ"))
        assert result.status == FetchStatus.NOT_FOUND

    def test_server_error(self):
        source = self.make_source(lambda request: httpx.Response(500))
        result = asyncio.run(source.fetch("FD17ABC"))
        assert result.status == FetchStatus.UNAVAILABLE
        assert "HTTP 500" in result.cause

    def test_result_cached(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, text=RESULT_PAGE)

        source = self.make_source(handler)

        async def twice():
            await source.fetch("FD17ABC")
            return await source.fetch("FD17ABC")

        second = asyncio.run(twice())
        assert second.from_cache is True
        assert len(calls) == 1
