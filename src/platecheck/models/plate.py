"""Registration plate model."""

from enum import Enum

from pydantic import BaseModel, ConfigDict

# Canonical plates shorter than this are rejected before any lookup
MIN_PLATE_LENGTH = 2


class Jurisdiction(str, Enum):
    """Which authority's data sources apply to a plate."""

    UK = "uk"
    ISLE_OF_MAN = "isle_of_man"


class Plate(BaseModel):
    """A normalized registration, derived fresh from user input per request.

    Built by ``platecheck.core.plates.parse_plate``.
    """

    model_config = ConfigDict(frozen=True)

    raw: str
    canonical: str
    jurisdiction: Jurisdiction
    display: str
    query: str

    @property
    def is_valid(self) -> bool:
        """Check the canonical form is long enough to look up."""
        return len(self.canonical) >= MIN_PLATE_LENGTH

    @property
    def is_manx(self) -> bool:
        """Shortcut for Isle of Man jurisdiction."""
        return self.jurisdiction == Jurisdiction.ISLE_OF_MAN
