"""Custom exceptions for platecheck."""

from typing import Optional


class PlatecheckError(Exception):
    """Base exception for all platecheck errors."""

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)


# ─────────────────────────────────────────────────────────────────────────────
# Config Errors
# ─────────────────────────────────────────────────────────────────────────────


class ConfigError(PlatecheckError):
    """Base class for configuration errors."""


class ConfigValidationError(ConfigError):
    """Configuration validation failed."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(
            f"Invalid configuration: {field}",
            reason,
        )


# ─────────────────────────────────────────────────────────────────────────────
# Plate Errors
# ─────────────────────────────────────────────────────────────────────────────


class PlateError(PlatecheckError):
    """Base class for registration plate errors."""


class InvalidPlateError(PlateError):
    """Registration too short or empty after normalization."""

    def __init__(self, raw: str) -> None:
        super().__init__(
            "Invalid registration number",
            f"'{raw}' needs at least 2 characters once spaces are removed.",
        )


# ─────────────────────────────────────────────────────────────────────────────
# Source Errors
# ─────────────────────────────────────────────────────────────────────────────


class SourceError(PlatecheckError):
    """Base class for data source errors."""


class SourceUnavailableError(SourceError):
    """Source could not be reached, authenticated or parsed."""

    def __init__(self, source: str, reason: Optional[str] = None) -> None:
        self.source = source
        super().__init__(
            f"Source unavailable: {source}",
            reason,
        )


class SourceNotConfiguredError(SourceUnavailableError):
    """Source is missing credentials or configuration."""

    def __init__(self, source: str) -> None:
        super().__init__(
            source,
            "Credentials not configured. Run 'platecheck config' to add them.",
        )


class VehicleNotFoundError(SourceError):
    """Source reports the plate does not exist in its dataset."""

    def __init__(self, plate: str) -> None:
        self.plate = plate
        super().__init__(
            f"Vehicle not found: {plate}",
            "Check the registration number and try again.",
        )


class NoUsableDataError(SourceError):
    """Source responded but essential fields could not be extracted."""

    def __init__(self, source: str, details: Optional[str] = None) -> None:
        self.source = source
        super().__init__(
            f"No usable data from {source}",
            details,
        )


# ─────────────────────────────────────────────────────────────────────────────
# Browser Errors
# ─────────────────────────────────────────────────────────────────────────────


class BrowserError(PlatecheckError):
    """Base class for browser automation errors."""


class NavigationError(BrowserError):
    """Failed to navigate to page."""

    def __init__(self, url: str, reason: Optional[str] = None) -> None:
        super().__init__(
            f"Failed to navigate to {url}",
            reason,
        )
