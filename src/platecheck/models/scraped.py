"""Raw records returned by scraping sources, before sanitization."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ScrapedVehicle(BaseModel):
    """Best-effort field map from a third-party vehicle specification page."""

    manufacturer: Optional[str] = None
    model: Optional[str] = None
    colour: Optional[str] = None
    body_style: Optional[str] = None
    fuel_type: Optional[str] = None
    engine_size: Optional[str] = None
    euro_status: Optional[str] = None
    year_of_manufacture: Optional[int] = None

    bhp: Optional[int] = None
    top_speed: Optional[str] = None
    zero_to_sixty: Optional[str] = None

    insurance_group: Optional[str] = None
    mot_status: Optional[str] = None
    tax_status: Optional[str] = None
    ulez_compliant: Optional[bool] = None
    caz_compliant: Optional[bool] = None

    previous_price: Optional[str] = None
    previous_mileage: Optional[str] = None
    registration_location: Optional[str] = None

    scraped_from: str
    scraped_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_empty(self) -> bool:
        """True when the page yielded no vehicle fields at all."""
        return not self.model_dump(
            exclude_none=True, exclude={"scraped_from", "scraped_at"}
        )


class IomVehicle(BaseModel):
    """Vehicle record read from the Isle of Man government register."""

    model_config = ConfigDict(protected_namespaces=())

    registration_number: str
    make: Optional[str] = None
    model: Optional[str] = None
    model_variant: Optional[str] = None
    category: Optional[str] = None
    colour: Optional[str] = None
    cubic_capacity: Optional[int] = None
    fuel_type: Optional[str] = None
    co2_emissions: Optional[int] = None
    date_of_first_registration: Optional[str] = None
    previous_uk_registration: Optional[str] = None
    date_of_first_registration_iom: Optional[str] = None
    wheel_plan: Optional[str] = None
    tax_status: Optional[str] = None
    tax_expiry_date: Optional[str] = None
    scraped_at: datetime = Field(default_factory=datetime.now)

    # Informational only, e.g. the URL and which labels matched
    debug: Optional[str] = None

    @property
    def has_make(self) -> bool:
        return bool(self.make and self.make.strip())
