"""Tests for BrowserManager with Playwright mocked out."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from playwright.async_api import Error as PlaywrightError

from platecheck.core.browser import GB_LOCALE, STEALTH_SCRIPT, TRACKER_ROUTES, BrowserManager
from platecheck.exceptions import BrowserError, NavigationError


def fake_playwright():
    """async_playwright() stand-in returning a driver, browser, context and page."""
    page = AsyncMock()
    context = AsyncMock()
    context.set_default_timeout = MagicMock()
    context.new_page.return_value = page
    browser = AsyncMock()
    browser.new_context.return_value = context
    driver = AsyncMock()
    driver.chromium.launch.return_value = browser

    starter = MagicMock()
    starter.start = AsyncMock(return_value=driver)
    return MagicMock(return_value=starter), driver, browser, context, page


class TestBrowserManager:
    def test_launch_configures_uk_context(self):
        factory, driver, browser, context, _ = fake_playwright()

        async def run():
            with patch("platecheck.core.browser.async_playwright", factory):
                async with BrowserManager(user_agent="UA/1.0"):
                    pass

        asyncio.run(run())

        options = browser.new_context.await_args.kwargs
        assert options["locale"] == GB_LOCALE
        assert options["user_agent"] == "UA/1.0"
        context.add_init_script.assert_awaited_once_with(STEALTH_SCRIPT)
        assert context.route.await_count == len(TRACKER_ROUTES)
        context.close.assert_awaited_once()
        browser.close.assert_awaited_once()
        driver.stop.assert_awaited_once()

    def test_open_navigates(self):
        factory, _, _, _, page = fake_playwright()

        async def run():
            with patch("platecheck.core.browser.async_playwright", factory):
                async with BrowserManager(block_trackers=False) as browser:
                    return await browser.open("https://example.test/check")

        assert asyncio.run(run()) is page
        page.goto.assert_awaited_once_with("https://example.test/check", wait_until="networkidle")

    def test_navigation_failure(self):
        factory, _, _, _, page = fake_playwright()
        page.goto.side_effect = PlaywrightError("net::ERR_NAME_NOT_RESOLVED")

        async def run():
            with patch("platecheck.core.browser.async_playwright", factory):
                async with BrowserManager() as browser:
                    await browser.open("https://example.test/check")

        with pytest.raises(NavigationError) as exc_info:
            asyncio.run(run())
        assert "ERR_NAME_NOT_RESOLVED" in exc_info.value.details

    def test_missing_chromium(self):
        factory, driver, _, _, _ = fake_playwright()
        driver.chromium.launch.side_effect = PlaywrightError("Executable doesn't exist")

        async def run():
            with patch("platecheck.core.browser.async_playwright", factory):
                await BrowserManager().launch()

        with pytest.raises(BrowserError) as exc_info:
            asyncio.run(run())
        assert "playwright install chromium" in exc_info.value.details
        driver.stop.assert_awaited_once()

    def test_new_page_before_launch(self):
        with pytest.raises(BrowserError):
            asyncio.run(BrowserManager().new_page())
