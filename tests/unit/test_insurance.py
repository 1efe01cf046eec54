"""Tests for the Motor Insurance Database checker."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from platecheck.models import FetchStatus, InsuranceState
from platecheck.sources.insurance import (
    UNKNOWN_MESSAGE,
    InsuranceChecker,
    format_for_form,
    parse_insurance_text,
)


class TestParseInsuranceText:
    @pytest.mark.parametrize(
        "body",
        [
            "Result: This vehicle IS INSURED.",
            "A policy has been found for AB12 CDE",
            "The vehicle appears on the MID",
        ],
    )
    def test_insured(self, body):
        assert parse_insurance_text(body).state == InsuranceState.INSURED

    @pytest.mark.parametrize(
        "body",
        [
            "This vehicle does not appear on the database",
            "No record of insurance was located",
            "Vehicle not currently insured",
        ],
    )
    def test_not_insured(self, body):
        assert parse_insurance_text(body).state == InsuranceState.NOT_INSURED

    @pytest.mark.parametrize(
        "body",
        [
            "Result: No insurance was found for this vehicle.",
            "This vehicle is not insured",
        ],
    )
    def test_negative_wording_beats_positive_phrase(self, body):
        assert parse_insurance_text(body).state == InsuranceState.NOT_INSURED

    def test_no_record_found_is_not_insured(self):
        status = parse_insurance_text("No record found for this vehicle")
        assert status.state == InsuranceState.NOT_INSURED

    def test_unrecognised(self):
        assert parse_insurance_text("Service temporarily unavailable") is None


class TestFormatForForm:
    def test_inserts_space(self):
        assert format_for_form("AB12CDE") == "AB12 CDE"

    def test_short_plate_unchanged(self):
        assert format_for_form("A1") == "A1"


def fake_browser(body: str, present: tuple[str, ...]):
    """Browser factory whose page reports the given selectors as present."""
    page = AsyncMock()
    page.query_selector.side_effect = lambda selector: selector in present or None
    page.inner_text.return_value = body

    class FakeBrowser:
        def __init__(self, **kwargs):
            self.kwargs = kwargs

        async def __aenter__(self):
            return self

        async def __aexit__(self, exc_type, exc, tb):
            return None

        async def open(self, url):
            self.opened = url
            return page

    return FakeBrowser, page


class TestInsuranceChecker:
    def test_insured(self):
        factory, page = fake_browser(
            "This vehicle is insured", ('input[name="vrm"]', 'button[type="submit"]')
        )
        checker = InsuranceChecker(browser_factory=factory)

        status = asyncio.run(checker.check("AB12CDE"))

        assert status.state == InsuranceState.INSURED
        assert status.insured is True
        page.type.assert_awaited_once_with('input[name="vrm"]', "AB12 CDE", delay=50)
        page.click.assert_any_await('button[type="submit"]')

    def test_enter_pressed_without_submit_button(self):
        factory, page = fake_browser("Vehicle is not insured", ('input[type="text"]',))
        status = asyncio.run(InsuranceChecker(browser_factory=factory).check("AB12CDE"))

        assert status.state == InsuranceState.NOT_INSURED
        page.keyboard.press.assert_awaited_once_with("Enter")

    def test_unrecognised_page_is_unknown(self):
        factory, _ = fake_browser("Something went wrong", ('input[name="vrm"]',))
        status = asyncio.run(InsuranceChecker(browser_factory=factory).check("AB12CDE"))

        assert status.state == InsuranceState.UNKNOWN
        assert status.message == UNKNOWN_MESSAGE
        assert status.insured is None

    def test_missing_input_is_unavailable(self):
        factory, _ = fake_browser("This vehicle is insured", ())
        result = asyncio.run(InsuranceChecker(browser_factory=factory).fetch("AB12CDE"))

        assert result.status == FetchStatus.UNAVAILABLE
        assert "Registration input not found" in result.cause

    def test_browser_failure_is_unknown(self):
        class BrokenBrowser:
            def __init__(self, **kwargs):
                pass

            async def __aenter__(self):
                raise RuntimeError("Executable doesn't exist")

            async def __aexit__(self, exc_type, exc, tb):
                return None

        status = asyncio.run(InsuranceChecker(browser_factory=BrokenBrowser).check("AB12CDE"))
        assert status.state == InsuranceState.UNKNOWN
