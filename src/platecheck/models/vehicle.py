"""Vehicle data model."""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class TaxStatus(str, Enum):
    """Vehicle excise duty status."""

    TAXED = "Taxed"
    SORN = "SORN"
    UNTAXED = "Untaxed"
    NOT_TAXED_FOR_ROAD_USE = "Not Taxed for on Road Use"


class MotStatus(str, Enum):
    """MOT (roadworthiness inspection) status."""

    VALID = "Valid"
    NO_DETAILS_HELD = "No details held by DVLA"
    NOT_VALID = "Not valid"


class VehicleRecord(BaseModel):
    """Canonical vehicle facts from one authoritative source."""

    registration_number: str
    make: str
    model: Optional[str] = None
    colour: str = "Unknown"
    fuel_type: str = "Unknown"
    engine_capacity: int = Field(default=0, ge=0, description="cc, 0 if unknown/electric")
    co2_emissions: Optional[int] = None
    year_of_manufacture: int = 0
    tax_status: TaxStatus
    tax_due_date: Optional[date] = None
    mot_status: MotStatus
    mot_expiry_date: Optional[date] = None

    # Provenance details, only some sources supply these
    date_of_last_v5c_issued: Optional[date] = None
    wheelplan: Optional[str] = None
    month_of_first_registration: Optional[str] = None
    euro_status: Optional[str] = None
    marked_for_export: Optional[bool] = None

    source: str = Field(..., description="Origin: dvla, mock, gov.im or a scraped site")

    @property
    def description(self) -> str:
        """Short human description, e.g. '2012 VOLKSWAGEN GOLF'."""
        parts = []
        if self.year_of_manufacture:
            parts.append(str(self.year_of_manufacture))
        parts.append(self.make)
        if self.model:
            parts.append(self.model)
        return " ".join(parts)

    @property
    def is_taxed(self) -> bool:
        return self.tax_status == TaxStatus.TAXED

    @property
    def has_valid_mot(self) -> bool:
        return self.mot_status == MotStatus.VALID
