"""DVLA Vehicle Enquiry Service source."""

import logging
from typing import Optional

from platecheck.core.status_maps import dvla_mot_status, dvla_tax_status
from platecheck.exceptions import (
    SourceNotConfiguredError,
    SourceUnavailableError,
    VehicleNotFoundError,
)
from platecheck.models import VehicleRecord
from platecheck.sources.base import BaseSource

logger = logging.getLogger(__name__)


class DVLASource(BaseSource):
    """Official UK vehicle registry, API-key authenticated."""

    name = "dvla"
    label = "DVLA Vehicle Enquiry Service"
    cache_ttl = 60 * 60

    API_URL = "https://driver-vehicle-licensing.api.gov.uk/vehicle-enquiry/v1/vehicles"

    def __init__(self, api_key: Optional[str] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.api_key = api_key

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def _lookup(self, plate: str) -> VehicleRecord:
        if not self.api_key:
            raise SourceNotConfiguredError(self.name)

        async with self.http_client() as client:
            response = await client.post(
                self.API_URL,
                headers={"x-api-key": self.api_key},
                json={"registrationNumber": plate},
            )

        if response.status_code == 404:
            raise VehicleNotFoundError(plate)
        if not response.is_success:
            raise SourceUnavailableError(self.name, f"HTTP {response.status_code}")

        return self.to_vehicle_record(response.json(), plate)

    @classmethod
    def to_vehicle_record(cls, data: dict, plate: str) -> VehicleRecord:
        """Map a DVLA response body onto VehicleRecord."""
        return VehicleRecord(
            registration_number=data.get("registrationNumber") or plate,
            make=data.get("make") or "Unknown",
            model=data.get("model"),
            colour=data.get("colour") or "Unknown",
            fuel_type=data.get("fuelType") or "Unknown",
            engine_capacity=data.get("engineCapacity") or 0,
            co2_emissions=data.get("co2Emissions"),
            year_of_manufacture=data.get("yearOfManufacture") or 0,
            tax_status=dvla_tax_status(data.get("taxStatus")),
            tax_due_date=data.get("taxDueDate"),
            mot_status=dvla_mot_status(data.get("motStatus")),
            mot_expiry_date=data.get("motExpiryDate"),
            date_of_last_v5c_issued=data.get("dateOfLastV5CIssued"),
            wheelplan=data.get("wheelplan"),
            month_of_first_registration=(
                data.get("monthOfFirstRegistration")
                or data.get("monthOfFirstDvlaRegistration")
            ),
            euro_status=data.get("euroStatus"),
            marked_for_export=data.get("markedForExport"),
            source=cls.name,
        )
