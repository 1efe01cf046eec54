"""MOT inspection history models."""

from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class TestResult(str, Enum):
    """Outcome of a single MOT test."""

    __test__ = False  # not a pytest class

    PASSED = "PASSED"
    FAILED = "FAILED"


class OdometerUnit(str, Enum):
    MILES = "mi"
    KILOMETRES = "km"


class DefectType(str, Enum):
    """Severity of a recorded defect."""

    ADVISORY = "ADVISORY"
    MINOR = "MINOR"
    MAJOR = "MAJOR"
    DANGEROUS = "DANGEROUS"
    FAIL = "FAIL"
    PRS = "PRS"  # Passed after rectification at station


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO date or datetime into a naive UTC datetime.

    Accepts '2024-08-15', '2024-08-15T10:34:05' and '2024-08-15T10:34:05.000Z'.
    """
    parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


class MotDefect(BaseModel):
    """A defect, advisory or comment recorded against a test."""

    text: str = ""
    type: DefectType = DefectType.ADVISORY
    dangerous: bool = False


class MotTest(BaseModel):
    """A single MOT test."""

    completed_date: datetime
    test_result: TestResult
    expiry_date: Optional[date] = None
    odometer_value: int = Field(default=0, ge=0)
    odometer_unit: OdometerUnit = OdometerUnit.MILES
    mot_test_number: str = ""
    defects: list[MotDefect] = Field(default_factory=list)

    @field_validator("completed_date", mode="before")
    @classmethod
    def parse_completed_date(cls, v: object) -> object:
        if isinstance(v, str):
            return parse_timestamp(v)
        return v

    @property
    def passed(self) -> bool:
        return self.test_result == TestResult.PASSED

    @property
    def has_dangerous_defects(self) -> bool:
        return any(d.dangerous or d.type == DefectType.DANGEROUS for d in self.defects)


class MotHistory(BaseModel):
    """Inspection history for one vehicle, most recent test first."""

    registration: str
    make: str = ""
    model: str = ""
    first_used_date: Optional[str] = None
    fuel_type: Optional[str] = None
    primary_colour: Optional[str] = None
    mot_tests: list[MotTest] = Field(default_factory=list)
    source: str

    @model_validator(mode="after")
    def sort_tests(self) -> "MotHistory":
        """Keep tests ordered by completion date, newest first."""
        self.mot_tests.sort(key=lambda t: t.completed_date, reverse=True)
        return self

    @property
    def latest_test(self) -> Optional[MotTest]:
        return self.mot_tests[0] if self.mot_tests else None
