"""Result models for lookups."""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator

from platecheck.models.extras import ExtrasRecord
from platecheck.models.mot import MotHistory
from platecheck.models.plate import Jurisdiction
from platecheck.models.vehicle import VehicleRecord


class FetchStatus(str, Enum):
    """Outcome of asking one source about one plate."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    UNAVAILABLE = "unavailable"


class FetchResult(BaseModel):
    """What a source returns. Sources never raise past this."""

    source: str
    status: FetchStatus
    data: Any = None
    cause: Optional[str] = None  # For logs only, never shown to users
    from_cache: bool = False

    @classmethod
    def found(cls, source: str, data: Any) -> "FetchResult":
        return cls(source=source, status=FetchStatus.FOUND, data=data)

    @classmethod
    def not_found(cls, source: str) -> "FetchResult":
        return cls(source=source, status=FetchStatus.NOT_FOUND)

    @classmethod
    def unavailable(cls, source: str, cause: Optional[str] = None) -> "FetchResult":
        return cls(source=source, status=FetchStatus.UNAVAILABLE, cause=cause)

    @property
    def is_found(self) -> bool:
        return self.status == FetchStatus.FOUND

    @property
    def is_unavailable(self) -> bool:
        return self.status == FetchStatus.UNAVAILABLE


class InsuranceState(str, Enum):
    INSURED = "insured"
    NOT_INSURED = "not_insured"
    UNKNOWN = "unknown"


class InsuranceStatus(BaseModel):
    """Motor Insurance Database check result."""

    state: InsuranceState
    message: str
    checked_at: datetime = Field(default_factory=datetime.now)

    @property
    def insured(self) -> Optional[bool]:
        """True/False when known, None when the check was inconclusive."""
        if self.state == InsuranceState.UNKNOWN:
            return None
        return self.state == InsuranceState.INSURED

    @property
    def status_display(self) -> str:
        status_map = {
            InsuranceState.INSURED: "Insured",
            InsuranceState.NOT_INSURED: "Not insured",
            InsuranceState.UNKNOWN: "Unknown",
        }
        return status_map[self.state]


class AggregateResult(BaseModel):
    """Unified lookup response. Either carries data or an error, never neither."""

    registration: str
    jurisdiction: Jurisdiction = Jurisdiction.UK
    vehicle: Optional[VehicleRecord] = None
    mot_history: Optional[MotHistory] = None
    extras: Optional[ExtrasRecord] = None
    uk_vehicle: Optional[VehicleRecord] = None  # From a Manx plate's previous UK registration
    error: Optional[str] = None
    error_detail: Optional[str] = None  # Informational diagnostics only

    @model_validator(mode="after")
    def validate_not_empty(self) -> "AggregateResult":
        """Reject a result with neither data nor an error."""
        has_data = any(
            field is not None
            for field in (self.vehicle, self.mot_history, self.extras, self.uk_vehicle)
        )
        if not has_data and not self.error:
            raise ValueError("Result must carry vehicle data or an error")
        return self

    @classmethod
    def failure(
        cls,
        registration: str,
        error: str,
        jurisdiction: Jurisdiction = Jurisdiction.UK,
        detail: Optional[str] = None,
    ) -> "AggregateResult":
        return cls(
            registration=registration,
            jurisdiction=jurisdiction,
            error=error,
            error_detail=detail,
        )

    @property
    def is_manx(self) -> bool:
        return self.jurisdiction == Jurisdiction.ISLE_OF_MAN

    @property
    def ok(self) -> bool:
        return self.error is None
