"""Data models for platecheck."""

from platecheck.models.config import SECRET_FIELDS, Settings
from platecheck.models.extras import ExtrasRecord
from platecheck.models.mot import (
    DefectType,
    MotDefect,
    MotHistory,
    MotTest,
    OdometerUnit,
    TestResult,
)
from platecheck.models.plate import Jurisdiction, Plate
from platecheck.models.results import (
    AggregateResult,
    FetchResult,
    FetchStatus,
    InsuranceState,
    InsuranceStatus,
)
from platecheck.models.scraped import IomVehicle, ScrapedVehicle
from platecheck.models.vehicle import MotStatus, TaxStatus, VehicleRecord

__all__ = [
    # Config
    "SECRET_FIELDS",
    "Settings",
    # Plate
    "Plate",
    "Jurisdiction",
    # Vehicle
    "VehicleRecord",
    "TaxStatus",
    "MotStatus",
    # MOT
    "MotHistory",
    "MotTest",
    "MotDefect",
    "DefectType",
    "OdometerUnit",
    "TestResult",
    # Scraped
    "ExtrasRecord",
    "ScrapedVehicle",
    "IomVehicle",
    # Results
    "AggregateResult",
    "FetchResult",
    "FetchStatus",
    "InsuranceState",
    "InsuranceStatus",
]
