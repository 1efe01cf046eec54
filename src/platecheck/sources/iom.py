"""Isle of Man government vehicle register (services.gov.im)."""

import logging
from typing import Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from platecheck.core.html import LabelExtractor
from platecheck.core.plates import format_for_registry_query
from platecheck.core.sanitize import parse_first_int
from platecheck.exceptions import SourceUnavailableError, VehicleNotFoundError
from platecheck.models import IomVehicle, Jurisdiction
from platecheck.sources.base import BaseSource

logger = logging.getLogger(__name__)

NOT_FOUND_PHRASES = ("No vehicle found", "Vehicle not found", "was rejected")

TOKEN_FIELD = "__RequestVerificationToken"
PLATE_FIELD = "RegMarkNo"

# Field -> labels on the result table
FIELD_LABELS: dict[str, tuple[str, ...]] = {
    "make": ("Make",),
    "model": ("Model",),
    "model_variant": ("Model Variant", "Variant"),
    "category": ("Category",),
    "colour": ("Colour", "Color"),
    "fuel_type": ("Fuel",),
    "date_of_first_registration": ("Date of First Registration",),
    "previous_uk_registration": ("Previous Registration Number",),
    "date_of_first_registration_iom": ("Date of First Registration on IOM",),
    "wheel_plan": ("Wheel Plan",),
    "tax_status": ("Status of Vehicle Licence",),
    "tax_expiry_date": ("Expiry Date of Vehicle Licence",),
}


class IsleOfManSource(BaseSource):
    """Form-based search on the Manx register.

    The search is a two-step session: load the search page to pick up the
    anti-forgery token and cookies, then post the registration back to the
    form action within the same client.
    """

    name = "gov.im"
    label = "Isle of Man Government vehicle search"
    cache_ttl = 60 * 60 * 24

    SEARCH_URL = "https://services.gov.im/service/VehicleSearch"

    async def _lookup(self, plate: str) -> IomVehicle:
        query = format_for_registry_query(plate, Jurisdiction.ISLE_OF_MAN)

        async with self.http_client(follow_redirects=True) as client:
            search_page = await client.get(self.SEARCH_URL)
            if not search_page.is_success:
                raise SourceUnavailableError(
                    self.name, f"Search page returned HTTP {search_page.status_code}"
                )

            action, token = self.parse_search_form(search_page.text, str(search_page.url))
            form = {PLATE_FIELD: query}
            if token:
                form[TOKEN_FIELD] = token

            response = await client.post(action, data=form)

        if not response.is_success:
            raise SourceUnavailableError(self.name, f"Search returned HTTP {response.status_code}")

        return self.parse_result(response.text, plate, debug=f"url={response.url} query={query}")

    @classmethod
    def parse_search_form(cls, html: str, base_url: str) -> tuple[str, Optional[str]]:
        """Return the absolute form action and the anti-forgery token.

        Raises:
            SourceUnavailableError: The page has no registration search form
        """
        soup = BeautifulSoup(html, "html.parser")
        field = soup.find("input", attrs={"name": PLATE_FIELD}) or soup.find(id=PLATE_FIELD)
        if field is None:
            raise SourceUnavailableError(cls.name, "Search form not found on page")

        form = field.find_parent("form")
        action = form.get("action") if form is not None else None
        token_input = (form or soup).find("input", attrs={"name": TOKEN_FIELD})
        token = token_input.get("value") if token_input is not None else None

        return urljoin(base_url, action or base_url), token

    @classmethod
    def parse_result(cls, html: str, plate: str, debug: Optional[str] = None) -> IomVehicle:
        """Read a result page into an IomVehicle.

        A page with none of the expected labels still returns a record,
        just without ``make``; the caller decides what that means.

        Raises:
            VehicleNotFoundError: The register says the plate is unknown
        """
        if any(phrase in html for phrase in NOT_FOUND_PHRASES):
            raise VehicleNotFoundError(plate)

        page = LabelExtractor(html)
        fields: dict = {name: page.first(*labels) for name, labels in FIELD_LABELS.items()}

        # "Model" can resolve to the variant row on some layouts
        if fields["model"] and "variant" in fields["model"].lower():
            fields["model"] = None

        fields["cubic_capacity"] = parse_first_int(page.extract("Cubic Capacity"))
        fields["co2_emissions"] = parse_first_int(page.extract("CO2 Emission"))

        matched = sorted(name for name, value in fields.items() if value is not None)
        notes = [debug] if debug else []
        notes.append(f"matched={','.join(matched) or 'none'}")

        record = IomVehicle(registration_number=plate, debug=" | ".join(notes), **fields)
        if not record.has_make:
            logger.info("%s: result page for %s had no make", cls.name, plate)
        return record

    def cacheable(self, data: IomVehicle) -> bool:
        return data.has_make
