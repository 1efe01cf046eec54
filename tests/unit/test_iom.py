"""Tests for the Isle of Man government register source."""

import asyncio
from urllib.parse import parse_qs

import httpx
import pytest

from platecheck.exceptions import SourceUnavailableError, VehicleNotFoundError
from platecheck.models import FetchStatus
from platecheck.sources.iom import IsleOfManSource

SEARCH_PAGE = """
<html><body>
<form action="/service/VehicleSearch/Search" method="post">
  <input name="__RequestVerificationToken" type="hidden" value="csrf-abc" />
  <label for="RegMarkNo">Registration mark</label>
  <input id="RegMarkNo" name="RegMarkNo" type="text" />
  <button type="submit">Search</button>
</form>
</body></html>
"""

RESULT_PAGE = """
<html><body>
<table>
  <tr><th>Make</th><td>VAUXHALL</td></tr>
  <tr><th>Model</th><td>ASTRA</td></tr>
  <tr><th>Model Variant</th><td>SRI</td></tr>
  <tr><th>Category</th><td>M1</td></tr>
  <tr><th>Colour</th><td>RED</td></tr>
  <tr><th>Cubic Capacity</th><td>1796 cc</td></tr>
  <tr><th>Fuel</th><td>PETROL</td></tr>
  <tr><th>CO2 Emission</th><td>174 g/km</td></tr>
  <tr><th>Date of First Registration</th><td>12/03/2008</td></tr>
  <tr><th>Previous Registration Number</th><td>MK08GHI</td></tr>
  <tr><th>Date of First Registration on IOM</th><td>01/06/2015</td></tr>
  <tr><th>Wheel Plan</th><td>2 AXLE RIGID BODY</td></tr>
  <tr><th>Status of Vehicle Licence</th><td>Active</td></tr>
  <tr><th>Expiry Date of Vehicle Licence</th><td>31/03/2025</td></tr>
</table>
</body></html>
"""

NO_MAKE_PAGE = "<table><tr><th>Colour</th><td>RED</td></tr></table>"


class TestParseSearchForm:
    def test_action_and_token(self):
        action, token = IsleOfManSource.parse_search_form(
            SEARCH_PAGE, "https://services.gov.im/service/VehicleSearch"
        )
        assert action == "https://services.gov.im/service/VehicleSearch/Search"
        assert token == "csrf-abc"

    def test_missing_action_posts_back(self):
        html = '<form method="post"><input name="RegMarkNo" /></form>'
        action, token = IsleOfManSource.parse_search_form(html, "https://example.im/search")
        assert action == "https://example.im/search"
        assert token is None

    def test_no_form(self):
        with pytest.raises(SourceUnavailableError):
            IsleOfManSource.parse_search_form("<p>Maintenance</p>", "https://services.gov.im/")


class TestParseResult:
    def test_fields(self):
        record = IsleOfManSource.parse_result(RESULT_PAGE, "PMN147E")

        assert record.registration_number == "PMN147E"
        assert record.make == "VAUXHALL"
        assert record.model == "ASTRA"
        assert record.model_variant == "SRI"
        assert record.cubic_capacity == 1796
        assert record.co2_emissions == 174
        assert record.previous_uk_registration == "MK08GHI"
        assert record.date_of_first_registration == "12/03/2008"
        assert record.date_of_first_registration_iom == "01/06/2015"
        assert record.tax_status == "Active"
        assert record.has_make

    def test_debug_lists_matches(self):
        record = IsleOfManSource.parse_result(RESULT_PAGE, "PMN147E", debug="url=x")
        assert record.debug.startswith("url=x | matched=")
        assert "make" in record.debug

    @pytest.mark.parametrize(
        "html",
        [
            "<p>No vehicle found</p>",
            "<p>Vehicle not found</p>",
            "<p>Your search was rejected</p>",
        ],
    )
    def test_not_found_phrases(self, html):
        with pytest.raises(VehicleNotFoundError):
            IsleOfManSource.parse_result(html, "MAN1")

    def test_no_make(self):
        record = IsleOfManSource.parse_result(NO_MAKE_PAGE, "MAN1")
        assert record.make is None
        assert not record.has_make
        assert "matched=colour" in record.debug


class FakeRegister:
    """Search page on GET, result page on POST."""

    def __init__(self, result_page: str = RESULT_PAGE, search_status: int = 200) -> None:
        self.result_page = result_page
        self.search_status = search_status
        self.posted = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(self.search_status, text=SEARCH_PAGE)
        assert request.url.path == "/service/VehicleSearch/Search"
        self.posted.append(parse_qs(request.content.decode()))
        return httpx.Response(200, text=self.result_page)


class TestFetch:
    def test_two_step_search(self):
        register = FakeRegister()
        source = IsleOfManSource(transport=httpx.MockTransport(register))

        result = asyncio.run(source.fetch("PMN147E"))

        assert result.status == FetchStatus.FOUND
        assert result.data.make == "VAUXHALL"
        assert register.posted == [
            {"RegMarkNo": ["PMN-147-E"], "__RequestVerificationToken": ["csrf-abc"]}
        ]

    def test_search_page_down(self):
        source = IsleOfManSource(transport=httpx.MockTransport(FakeRegister(search_status=503)))
        result = asyncio.run(source.fetch("PMN147E"))
        assert result.status == FetchStatus.UNAVAILABLE

    def test_record_without_make_not_cached(self):
        register = FakeRegister(result_page=NO_MAKE_PAGE)
        source = IsleOfManSource(transport=httpx.MockTransport(register))

        async def twice():
            await source.fetch("MAN1")
            return await source.fetch("MAN1")

        second = asyncio.run(twice())
        assert second.is_found
        assert second.from_cache is False
        assert len(register.posted) == 2

    def test_record_with_make_cached(self):
        register = FakeRegister()
        source = IsleOfManSource(transport=httpx.MockTransport(register))

        async def twice():
            await source.fetch("PMN147E")
            return await source.fetch("PMN147E")

        assert asyncio.run(twice()).from_cache is True
        assert len(register.posted) == 1
