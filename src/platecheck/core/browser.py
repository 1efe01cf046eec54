"""Headless Chromium session for form-driven lookups."""

import logging
from typing import Optional

from playwright.async_api import Browser, BrowserContext, Page, async_playwright
from playwright.async_api import Error as PlaywrightError

from platecheck.exceptions import BrowserError, NavigationError

logger = logging.getLogger(__name__)

GB_LOCALE = "en-GB"
GB_TIMEZONE = "Europe/London"
DESKTOP_VIEWPORT = {"width": 1920, "height": 1080}

CHROMIUM_ARGS = [
    "--disable-extensions",
    "--disable-sync",
    "--no-first-run",
    "--disable-blink-features=AutomationControlled",
]

# Analytics and ad hosts; blocking them speeds up network-idle waits
TRACKER_ROUTES = [
    "**/google-analytics.com/**",
    "**/googletagmanager.com/**",
    "**/doubleclick.net/**",
    "**/facebook.net/**",
    "**/hotjar.com/**",
]

# Hide the most obvious automation markers before any page script runs
STEALTH_SCRIPT = """
Object.defineProperty(navigator, 'webdriver', { get: () => undefined });
Object.defineProperty(navigator, 'languages', { get: () => ['en-GB', 'en'] });
Object.defineProperty(navigator, 'plugins', { get: () => [1, 2, 3, 4, 5] });
window.chrome = window.chrome || { runtime: {} };
"""


class BrowserManager:
    """One browser, one context, closed on exit.

    Usage:
        async with BrowserManager(user_agent=USER_AGENT) as browser:
            page = await browser.open("https://enquiry.navigate.mib.org.uk/checkyourvehicle")
    """

    def __init__(
        self,
        headless: bool = True,
        timeout_ms: int = 30000,
        user_agent: Optional[str] = None,
        block_trackers: bool = True,
    ) -> None:
        self.headless = headless
        self.timeout_ms = timeout_ms
        self.user_agent = user_agent
        self.block_trackers = block_trackers
        self._playwright = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None

    async def launch(self) -> "BrowserManager":
        """Start Chromium with a UK desktop profile.

        Raises:
            BrowserError: Chromium is missing or failed to start
        """
        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(
                headless=self.headless, args=CHROMIUM_ARGS
            )
            self._context = await self._browser.new_context(**self._context_options())
        except PlaywrightError as e:
            await self.close()
            raise BrowserError(
                "Could not start the browser",
                f"{e.message}. Run 'playwright install chromium'.",
            ) from e

        self._context.set_default_timeout(self.timeout_ms)
        await self._context.add_init_script(STEALTH_SCRIPT)
        if self.block_trackers:
            for pattern in TRACKER_ROUTES:
                await self._context.route(pattern, lambda route: route.abort())

        logger.debug("Browser launched (headless=%s)", self.headless)
        return self

    def _context_options(self) -> dict:
        options = {
            "viewport": DESKTOP_VIEWPORT,
            "locale": GB_LOCALE,
            "timezone_id": GB_TIMEZONE,
            "extra_http_headers": {"Accept-Language": "en-GB,en;q=0.9"},
        }
        if self.user_agent:
            options["user_agent"] = self.user_agent
        return options

    async def new_page(self) -> Page:
        if self._context is None:
            raise BrowserError("Browser not launched", "Use BrowserManager as a context manager.")
        return await self._context.new_page()

    async def open(self, url: str, wait_until: str = "networkidle") -> Page:
        """Open ``url`` in a fresh page.

        Raises:
            NavigationError: The page failed to load or timed out
        """
        page = await self.new_page()
        try:
            await page.goto(url, wait_until=wait_until)
        except PlaywrightError as e:
            raise NavigationError(url, e.message) from e
        return page

    async def close(self) -> None:
        """Close context, browser and driver, in that order."""
        if self._context:
            await self._context.close()
            self._context = None
        if self._browser:
            await self._browser.close()
            self._browser = None
        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

    async def __aenter__(self) -> "BrowserManager":
        return await self.launch()

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
