"""Vehicle specification scraper for totalcarcheck.co.uk."""

import logging
from typing import Optional

from platecheck.core.cache import RateLimiter
from platecheck.core.html import LabelExtractor
from platecheck.core.sanitize import parse_first_int, parse_year
from platecheck.exceptions import SourceUnavailableError, VehicleNotFoundError
from platecheck.models import ScrapedVehicle
from platecheck.sources.base import BaseSource

logger = logging.getLogger(__name__)

# Page text meaning the site has no record for the plate
NOT_FOUND_PHRASES = ("No vehicle found", "Please enter a valid")

# Field -> labels to try, in order
FIELD_LABELS: dict[str, tuple[str, ...]] = {
    "manufacturer": ("Manufacturer", "Make"),
    "model": ("Model",),
    "colour": ("Colour", "Color"),
    "body_style": ("Body Style", "Body Type"),
    "fuel_type": ("Fuel Type", "Fuel"),
    "engine_size": ("Engine Size", "Engine"),
    "euro_status": ("Euro Status", "Euro"),
    "top_speed": ("Top Speed",),
    "zero_to_sixty": ("0-60", "0-62", "Acceleration"),
    "insurance_group": ("Insurance Group", "Insurance"),
    "mot_status": ("MOT Status", "MOT"),
    "tax_status": ("Road Tax Status", "Tax Status", "Tax"),
    "previous_price": ("Previously Seen Price", "Price", "Advertised Price"),
    "previous_mileage": ("Previously Seen Mileage", "Advertised Mileage"),
    "registration_location": ("Registration Location", "Registered Location"),
}

BHP_LABELS = ("BHP", "Power")
YEAR_LABELS = ("Year of Manufacture", "Year")
ULEZ_LABELS = ("ULEZ", "London ULEZ")
CAZ_LABELS = ("CAZ", "Clean Air Zone")

_shared_limiters: dict[float, RateLimiter] = {}


def shared_rate_limiter(scrape_interval: float) -> RateLimiter:
    """Process-wide limiter for the given spacing, so every scraper instance queues together."""
    limiter = _shared_limiters.get(scrape_interval)
    if limiter is None:
        limiter = _shared_limiters[scrape_interval] = RateLimiter(min_interval=scrape_interval)
    return limiter


class TotalCarCheckSource(BaseSource):
    """Free-check page scraper. Values are raw; sanitize before display."""

    name = "totalcarcheck.co.uk"
    label = "TotalCarCheck free vehicle check"
    cache_ttl = 60 * 60

    URL = "https://totalcarcheck.co.uk/FreeCheck"

    def __init__(
        self,
        rate_limiter: Optional[RateLimiter] = None,
        scrape_interval: float = 2.0,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.rate_limiter = rate_limiter or RateLimiter(min_interval=scrape_interval)

    async def _lookup(self, plate: str) -> ScrapedVehicle:
        await self.rate_limiter.wait()

        async with self.http_client(
            headers={
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                "Accept-Language": "en-GB,en;q=0.5",
            },
            follow_redirects=True,
        ) as client:
            response = await client.get(self.URL, params={"regno": plate})

        if not response.is_success:
            raise SourceUnavailableError(self.name, f"HTTP {response.status_code}")

        return self.parse_page(response.text, plate)

    @classmethod
    def parse_page(cls, html: str, plate: str) -> ScrapedVehicle:
        """Read every known field from a result page.

        Raises:
            VehicleNotFoundError: The page says the plate is unknown
        """
        if any(phrase in html for phrase in NOT_FOUND_PHRASES):
            raise VehicleNotFoundError(plate)

        page = LabelExtractor(html)
        fields: dict = {name: page.first(*labels) for name, labels in FIELD_LABELS.items()}

        fields["bhp"] = parse_first_int(page.first(*BHP_LABELS))
        year = parse_year(page.first(*YEAR_LABELS))
        fields["year_of_manufacture"] = year or None
        fields["ulez_compliant"] = _compliance(page.first(*ULEZ_LABELS))
        fields["caz_compliant"] = _compliance(page.first(*CAZ_LABELS))

        scraped = ScrapedVehicle(**fields, scraped_from=cls.name)
        if scraped.is_empty:
            logger.info("%s: page for %s had no recognisable fields", cls.name, plate)
        return scraped


def _compliance(text: Optional[str]) -> Optional[bool]:
    if text is None:
        return None
    lower = text.lower()
    if "non-compliant" in lower or "not compliant" in lower:
        return False
    return "yes" in lower or "compliant" in lower
