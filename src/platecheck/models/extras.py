"""Low-confidence supplementary vehicle facts."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ExtrasRecord(BaseModel):
    """Scrape-derived extras. Every free-text field is sanitized before it lands here."""

    model_config = ConfigDict(protected_namespaces=())

    # Performance
    bhp: Optional[int] = None
    top_speed: Optional[str] = None
    zero_to_sixty: Optional[str] = None

    # Status
    insurance_group: Optional[str] = None
    ulez_compliant: Optional[bool] = None
    caz_compliant: Optional[bool] = None

    # Market data
    previous_price: Optional[str] = None
    previous_mileage: Optional[str] = None

    body_style: Optional[str] = None
    registration_location: Optional[str] = None

    # Isle of Man specific
    previous_uk_registration: Optional[str] = None
    iom_first_registration: Optional[str] = None
    model_variant: Optional[str] = None
    category: Optional[str] = None

    sources: list[str] = Field(default_factory=list)

    def fill_gaps(self, other: "ExtrasRecord") -> "ExtrasRecord":
        """Return a copy with missing fields taken from ``other``.

        Fields already set here always win. Sources are concatenated,
        ours first, so provenance order is preserved.
        """
        merged = other.model_dump(exclude_none=True, exclude={"sources"})
        merged.update(self.model_dump(exclude_none=True, exclude={"sources"}))
        return ExtrasRecord(**merged, sources=[*self.sources, *other.sources])

    @property
    def is_empty(self) -> bool:
        """True when no field besides sources is set."""
        return not self.model_dump(exclude_none=True, exclude={"sources"})
