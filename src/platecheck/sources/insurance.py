"""Motor Insurance Database check via MIB Navigate (askMID)."""

import logging
from typing import Callable, Optional

from playwright.async_api import Page

from platecheck.core.browser import BrowserManager
from platecheck.exceptions import NoUsableDataError
from platecheck.models import InsuranceState, InsuranceStatus
from platecheck.sources.base import USER_AGENT, BaseSource

logger = logging.getLogger(__name__)

INSURED_MESSAGE = "Vehicle appears on the Motor Insurance Database"
NOT_INSURED_MESSAGE = "Vehicle does not appear on the Motor Insurance Database"
UNKNOWN_MESSAGE = "Insurance status could not be determined"

# Negatives are checked first: "no insurance was found" contains a positive phrase
INSURED_PHRASES = (
    "vehicle is insured",
    "is currently insured",
    "insurance was found",
    "appears on the mid",
    "has been found on the motor insurance database",
    "details have been found",
    "a policy has been found",
    "is insured",
)
NOT_INSURED_PHRASES = (
    "vehicle is not insured",
    "not currently insured",
    "no insurance",
    "does not appear",
    "has not been found",
    "not found on the motor insurance database",
    "no record",
    "no policy found",
    "not insured",
)

COOKIE_SELECTORS = [
    'button[id*="accept"]',
    'button[class*="accept"]',
    'button[data-testid*="accept"]',
    'a[id*="accept"]',
]

INPUT_SELECTORS = [
    'input[name="vrm"]',
    'input[name="registration"]',
    'input[name="reg"]',
    'input[name="registrationNumber"]',
    'input[name="vehicleRegistrationMark"]',
    'input[id*="vrm" i]',
    'input[id*="reg" i]',
    'input[data-testid*="vrm" i]',
    'input[data-testid*="reg" i]',
    'input[placeholder*="registration" i]',
    'input[placeholder*="number plate" i]',
    'input[aria-label*="registration" i]',
    'input[type="text"]',
]

SUBMIT_SELECTORS = [
    'button[type="submit"]',
    'input[type="submit"]',
]


def format_for_form(plate: str) -> str:
    """Insert the conventional space after the fourth character."""
    return f"{plate[:4]} {plate[4:]}" if len(plate) > 4 else plate


def parse_insurance_text(body: str) -> Optional[InsuranceStatus]:
    """Classify the result page text, or None when it is not recognised."""
    text = body.lower()
    if any(phrase in text for phrase in NOT_INSURED_PHRASES):
        return InsuranceStatus(state=InsuranceState.NOT_INSURED, message=NOT_INSURED_MESSAGE)
    if any(phrase in text for phrase in INSURED_PHRASES):
        return InsuranceStatus(state=InsuranceState.INSURED, message=INSURED_MESSAGE)
    return None


class InsuranceChecker(BaseSource):
    """Drives the MIB enquiry form in a headless browser."""

    name = "mib"
    label = "MIB Navigate (askMID)"
    cache_ttl = 60 * 60
    deadline = 60.0

    CHECK_URL = "https://enquiry.navigate.mib.org.uk/checkyourvehicle"
    RESULT_TIMEOUT_MS = 15000

    def __init__(
        self,
        headless: bool = True,
        browser_factory: Callable[..., BrowserManager] = BrowserManager,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.headless = headless
        self.browser_factory = browser_factory

    async def check(self, plate: str) -> InsuranceStatus:
        """Tri-state answer for a canonical plate. Never raises."""
        result = await self.fetch(plate)
        if result.is_found:
            return result.data
        return InsuranceStatus(state=InsuranceState.UNKNOWN, message=UNKNOWN_MESSAGE)

    async def _lookup(self, plate: str) -> InsuranceStatus:
        async with self.browser_factory(headless=self.headless, user_agent=USER_AGENT) as browser:
            logger.info("Insurance check: opening %s", self.CHECK_URL)
            page = await browser.open(self.CHECK_URL)
            body = await self._submit_enquiry(page, format_for_form(plate))

        status = parse_insurance_text(body)
        if status is None:
            raise NoUsableDataError(self.name, "Result page text not recognised")
        return status

    async def _submit_enquiry(self, page: Page, registration: str) -> str:
        await self._dismiss_cookie_banner(page)

        selector = await self._first_present(page, INPUT_SELECTORS)
        if selector is None:
            raise NoUsableDataError(self.name, "Registration input not found")

        await page.click(selector, click_count=3)
        await page.type(selector, registration, delay=50)
        logger.debug("Insurance check: typed into %s", selector)

        submit = await self._first_present(page, SUBMIT_SELECTORS)
        if submit:
            await page.click(submit)
        else:
            await page.keyboard.press("Enter")

        await page.wait_for_load_state("networkidle", timeout=self.RESULT_TIMEOUT_MS)
        return await page.inner_text("body")

    async def _dismiss_cookie_banner(self, page: Page) -> None:
        selector = await self._first_present(page, COOKIE_SELECTORS)
        if selector:
            await page.click(selector)

    @staticmethod
    async def _first_present(page: Page, selectors: list[str]) -> Optional[str]:
        for selector in selectors:
            if await page.query_selector(selector):
                return selector
        return None
