"""Lookup orchestration: plate classification, source fan-out and merging."""

import asyncio
import logging
from typing import Any, Optional

from pydantic import BaseModel

from platecheck.core.plates import normalize_plate, parse_plate
from platecheck.core.sanitize import (
    parse_date_text,
    parse_engine_size,
    parse_year,
    sanitize_insurance_group,
    sanitize_price,
    sanitize_text,
    sanitize_uk_plate,
)
from platecheck.core.status_maps import iom_tax_status, scraped_mot_status, scraped_tax_status
from platecheck.models import (
    AggregateResult,
    ExtrasRecord,
    FetchStatus,
    InsuranceState,
    InsuranceStatus,
    IomVehicle,
    MotHistory,
    MotStatus,
    Plate,
    ScrapedVehicle,
    Settings,
    VehicleRecord,
)
from platecheck.sources.base import BaseSource

logger = logging.getLogger(__name__)

INVALID_PLATE_MESSAGE = "Invalid registration number"
NOT_FOUND_MESSAGE = "Vehicle not found. Please check the registration number and try again."
UNAVAILABLE_MESSAGE = "Vehicle data services are currently unavailable. Please try again later."
IOM_UNAVAILABLE_MESSAGE = "Could not reach the Isle of Man vehicle registry. Please try again later."
IOM_NOT_FOUND_MESSAGE = "Vehicle not found on the Isle of Man register."
IOM_NO_DATA_MESSAGE = "Found an Isle of Man record but could not read the vehicle details."
GENERIC_ERROR_MESSAGE = "An error occurred while fetching vehicle data. Please try again."


class UkLookup(BaseModel):
    """What one UK fan-out produced, before it becomes a result."""

    vehicle: Optional[VehicleRecord] = None
    mot_history: Optional[MotHistory] = None
    scraped: Optional[ScrapedVehicle] = None
    extras: Optional[ExtrasRecord] = None
    all_unavailable: bool = False

    @property
    def found(self) -> bool:
        """Any of vehicle, MOT history or a non-empty scraped page."""
        has_scraped = self.scraped is not None and not self.scraped.is_empty
        return self.vehicle is not None or self.mot_history is not None or has_scraped


class Aggregator:
    """Single entry point for vehicle lookups.

    Sources are injected so callers decide which are official, mocked or
    disabled. The aggregator never raises from ``get_vehicle_info``; every
    failure comes back as an AggregateResult with ``error`` set.
    """

    def __init__(
        self,
        vehicle_source: BaseSource,
        history_source: BaseSource,
        iom_source: BaseSource,
        scraper: Optional[BaseSource] = None,
        insurance: Optional[Any] = None,
    ) -> None:
        """Initialize aggregator.

        Args:
            vehicle_source: Official registry, or the mock fallback
            history_source: MOT history, official or mock
            iom_source: Isle of Man register
            scraper: Third-party spec site; None disables scraping
            insurance: InsuranceChecker; None disables insurance checks
        """
        self.vehicle_source = vehicle_source
        self.history_source = history_source
        self.iom_source = iom_source
        self.scraper = scraper
        self.insurance = insurance

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **source_kwargs: Any) -> "Aggregator":
        """Wire sources from settings.

        The official DVLA and MOT sources are used when their credentials
        are present, the fixture sources otherwise. A configured source
        that fails is reported as unavailable, never swapped for a mock.

        Args:
            settings: Loaded settings (read via ConfigManager when omitted)
            **source_kwargs: Passed to every HTTP source (e.g. ``transport``)
        """
        from platecheck.core.config import ConfigManager
        from platecheck.sources.dvla import DVLASource
        from platecheck.sources.insurance import InsuranceChecker
        from platecheck.sources.iom import IsleOfManSource
        from platecheck.sources.mock import MockMOTSource, MockVehicleSource
        from platecheck.sources.mot import MOTHistorySource
        from platecheck.sources.totalcarcheck import TotalCarCheckSource, shared_rate_limiter

        if settings is None:
            settings = ConfigManager().load()

        common = {"timeout": settings.http_timeout, **source_kwargs}

        if settings.dvla_configured:
            vehicle_source = DVLASource(
                api_key=settings.dvla_api_key.get_secret_value(), **common
            )
        else:
            vehicle_source = MockVehicleSource(latency=settings.mock_latency)

        if settings.mot_configured:
            history_source = MOTHistorySource(
                client_id=settings.mot_client_id,
                client_secret=settings.mot_client_secret.get_secret_value(),
                api_key=settings.mot_api_key.get_secret_value(),
                tenant_id=settings.mot_tenant_id,
                **common,
            )
        else:
            history_source = MockMOTSource(latency=settings.mock_latency)

        scraper = None
        if settings.scraping_enabled:
            scraper = TotalCarCheckSource(
                rate_limiter=shared_rate_limiter(settings.scrape_interval), **common
            )

        insurance = InsuranceChecker() if settings.insurance_enabled else None

        return cls(
            vehicle_source=vehicle_source,
            history_source=history_source,
            iom_source=IsleOfManSource(**common),
            scraper=scraper,
            insurance=insurance,
        )

    @property
    def sources(self) -> list[BaseSource]:
        """Every source this aggregator may dispatch to."""
        active = [self.vehicle_source, self.history_source, self.iom_source]
        if self.scraper is not None:
            active.append(self.scraper)
        if self.insurance is not None:
            active.append(self.insurance)
        return active

    async def get_vehicle_info(self, raw: str) -> AggregateResult:
        """Look up a raw plate string. Never raises."""
        plate = parse_plate(raw)
        if not plate.is_valid:
            return AggregateResult.failure(plate.canonical, INVALID_PLATE_MESSAGE)

        try:
            if plate.is_manx:
                return await self._lookup_iom(plate)
            return await self._lookup_uk_result(plate)
        except Exception:
            logger.exception("Lookup failed for %s", plate.canonical)
            return AggregateResult.failure(
                plate.canonical, GENERIC_ERROR_MESSAGE, jurisdiction=plate.jurisdiction
            )

    async def check_insurance(self, raw: str) -> InsuranceStatus:
        """Insurance side channel. Unknown whenever the answer is not definite."""
        plate = parse_plate(raw)
        if not plate.is_valid:
            return InsuranceStatus(state=InsuranceState.UNKNOWN, message=INVALID_PLATE_MESSAGE)
        if self.insurance is None:
            return InsuranceStatus(
                state=InsuranceState.UNKNOWN, message="Insurance checking is not enabled"
            )
        return await self.insurance.check(plate.canonical)

    # ─────────────────────────────────────────────────────────────────────
    # UK branch
    # ─────────────────────────────────────────────────────────────────────

    async def _lookup_uk_result(self, plate: Plate) -> AggregateResult:
        lookup = await self._lookup_uk(plate.canonical)

        if not lookup.found:
            message = UNAVAILABLE_MESSAGE if lookup.all_unavailable else NOT_FOUND_MESSAGE
            return AggregateResult.failure(plate.canonical, message)

        return AggregateResult(
            registration=plate.canonical,
            vehicle=lookup.vehicle,
            mot_history=lookup.mot_history,
            extras=lookup.extras,
        )

    async def _lookup_uk(self, canonical: str) -> UkLookup:
        """Fan out to the UK sources and join on all of them."""
        dispatched = [self.vehicle_source, self.history_source]
        if self.scraper is not None:
            dispatched.append(self.scraper)

        logger.info(
            "UK lookup %s via %s", canonical, ", ".join(source.name for source in dispatched)
        )
        results = await asyncio.gather(*(source.fetch(canonical) for source in dispatched))
        vehicle_result, history_result = results[0], results[1]
        scrape_result = results[2] if len(results) > 2 else None

        lookup = UkLookup(
            vehicle=vehicle_result.data if vehicle_result.is_found else None,
            mot_history=history_result.data if history_result.is_found else None,
            all_unavailable=all(r.status == FetchStatus.UNAVAILABLE for r in results),
        )

        if scrape_result is not None and scrape_result.is_found:
            scraped: ScrapedVehicle = scrape_result.data
            lookup.scraped = scraped
            if not scraped.is_empty:
                lookup.extras = self._extras_from_scraped(scraped)
                if lookup.vehicle is None:
                    lookup.vehicle = self._vehicle_from_scraped(scraped, canonical)

        return lookup

    @staticmethod
    def _vehicle_from_scraped(scraped: ScrapedVehicle, canonical: str) -> Optional[VehicleRecord]:
        """Synthesize a record when no official one exists. Needs a manufacturer."""
        make = sanitize_text(scraped.manufacturer)
        if make is None:
            return None

        return VehicleRecord(
            registration_number=canonical,
            make=make,
            model=sanitize_text(scraped.model),
            colour=sanitize_text(scraped.colour) or "Unknown",
            fuel_type=sanitize_text(scraped.fuel_type) or "Unknown",
            engine_capacity=parse_engine_size(scraped.engine_size),
            year_of_manufacture=scraped.year_of_manufacture or 0,
            tax_status=scraped_tax_status(scraped.tax_status),
            mot_status=scraped_mot_status(scraped.mot_status),
            euro_status=sanitize_text(scraped.euro_status, max_length=30),
            source=scraped.scraped_from,
        )

    @staticmethod
    def _extras_from_scraped(scraped: ScrapedVehicle) -> ExtrasRecord:
        return ExtrasRecord(
            bhp=scraped.bhp,
            top_speed=sanitize_text(scraped.top_speed, max_length=30),
            zero_to_sixty=sanitize_text(scraped.zero_to_sixty, max_length=30),
            insurance_group=sanitize_insurance_group(scraped.insurance_group),
            ulez_compliant=scraped.ulez_compliant,
            caz_compliant=scraped.caz_compliant,
            previous_price=sanitize_price(scraped.previous_price),
            previous_mileage=sanitize_text(scraped.previous_mileage, max_length=30),
            body_style=sanitize_text(scraped.body_style, max_length=50),
            registration_location=sanitize_text(scraped.registration_location, max_length=50),
            sources=[scraped.scraped_from],
        )

    # ─────────────────────────────────────────────────────────────────────
    # Isle of Man branch
    # ─────────────────────────────────────────────────────────────────────

    async def _lookup_iom(self, plate: Plate) -> AggregateResult:
        logger.info("Isle of Man lookup %s via %s", plate.canonical, self.iom_source.name)
        result = await self.iom_source.fetch(plate.canonical)

        def failure(message: str, detail: Optional[str] = None) -> AggregateResult:
            return AggregateResult.failure(
                plate.canonical, message, jurisdiction=plate.jurisdiction, detail=detail
            )

        if result.status == FetchStatus.UNAVAILABLE:
            return failure(IOM_UNAVAILABLE_MESSAGE)
        if result.status == FetchStatus.NOT_FOUND:
            return failure(IOM_NOT_FOUND_MESSAGE)

        record: IomVehicle = result.data
        vehicle = self._vehicle_from_iom(record)
        if vehicle is None:
            return failure(IOM_NO_DATA_MESSAGE, detail=record.debug)

        extras = self._extras_from_iom(record)
        mot_history = None
        uk_vehicle = None

        # Second stage: the previous UK registration, if it is a real UK plate
        if extras.previous_uk_registration:
            uk_plate = normalize_plate(extras.previous_uk_registration)
            logger.info("%s was previously UK-registered as %s", plate.canonical, uk_plate)
            uk = await self._lookup_uk(uk_plate)
            uk_vehicle = uk.vehicle
            mot_history = uk.mot_history
            if uk.extras is not None:
                extras = extras.fill_gaps(uk.extras)

        return AggregateResult(
            registration=plate.canonical,
            jurisdiction=plate.jurisdiction,
            vehicle=vehicle,
            mot_history=mot_history,
            extras=extras,
            uk_vehicle=uk_vehicle,
        )

    def _vehicle_from_iom(self, record: IomVehicle) -> Optional[VehicleRecord]:
        """Map a register record; None when it has no usable make."""
        make = sanitize_text(record.make)
        if make is None:
            return None

        return VehicleRecord(
            registration_number=record.registration_number,
            make=make,
            model=sanitize_text(record.model_variant) or sanitize_text(record.model),
            colour=sanitize_text(record.colour) or "Unknown",
            fuel_type=sanitize_text(record.fuel_type) or "Unknown",
            engine_capacity=record.cubic_capacity or 0,
            co2_emissions=record.co2_emissions,
            year_of_manufacture=parse_year(record.date_of_first_registration),
            tax_status=iom_tax_status(record.tax_status),
            tax_due_date=parse_date_text(record.tax_expiry_date),
            mot_status=MotStatus.NO_DETAILS_HELD,
            wheelplan=sanitize_text(record.wheel_plan),
            source=self.iom_source.name,
        )

    def _extras_from_iom(self, record: IomVehicle) -> ExtrasRecord:
        return ExtrasRecord(
            previous_uk_registration=sanitize_uk_plate(record.previous_uk_registration),
            iom_first_registration=sanitize_text(record.date_of_first_registration_iom, max_length=30),
            model_variant=sanitize_text(record.model_variant),
            category=sanitize_text(record.category, max_length=50),
            sources=[self.iom_source.name],
        )
