"""DVSA MOT history source."""

import logging
import time
from typing import Optional

from platecheck.exceptions import (
    SourceNotConfiguredError,
    SourceUnavailableError,
    VehicleNotFoundError,
)
from platecheck.models import DefectType, MotDefect, MotHistory, MotTest, OdometerUnit
from platecheck.sources.base import BaseSource

logger = logging.getLogger(__name__)

# Refresh the token this many seconds before it expires
TOKEN_EXPIRY_BUFFER = 60


class MOTHistorySource(BaseSource):
    """Official MOT history API.

    Authenticates with an OAuth2 client-credentials grant against
    Microsoft Entra ID. The token is held on the instance and reused
    across lookups until shortly before it expires.
    """

    name = "dvsa-mot"
    label = "DVSA MOT History"
    cache_ttl = 60 * 60

    TOKEN_URL = "https://login.microsoftonline.com/{tenant_id}/oauth2/v2.0/token"
    TOKEN_SCOPE = "https://tapi.dvsa.gov.uk/.default"
    API_URL = "https://history.mot.api.gov.uk/v1/trade/vehicles/registration/{plate}"

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        api_key: Optional[str] = None,
        tenant_id: Optional[str] = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.client_id = client_id
        self.client_secret = client_secret
        self.api_key = api_key
        self.tenant_id = tenant_id
        self._token: Optional[str] = None
        self._token_expires_at = 0.0

    @property
    def is_configured(self) -> bool:
        return all([self.client_id, self.client_secret, self.api_key, self.tenant_id])

    async def _lookup(self, plate: str) -> MotHistory:
        if not self.is_configured:
            raise SourceNotConfiguredError(self.name)

        async with self.http_client() as client:
            token = await self._get_access_token(client)
            response = await client.get(
                self.API_URL.format(plate=plate),
                headers={
                    "Authorization": f"Bearer {token}",
                    "X-API-Key": self.api_key,
                },
            )

        if response.status_code == 404:
            raise VehicleNotFoundError(plate)
        if not response.is_success:
            raise SourceUnavailableError(self.name, f"HTTP {response.status_code}")

        return self.to_history(response.json(), plate)

    async def _get_access_token(self, client) -> str:
        """Return a cached token, fetching a new one when near expiry."""
        if self._token and time.monotonic() < self._token_expires_at - TOKEN_EXPIRY_BUFFER:
            return self._token

        response = await client.post(
            self.TOKEN_URL.format(tenant_id=self.tenant_id),
            data={
                "grant_type": "client_credentials",
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "scope": self.TOKEN_SCOPE,
            },
        )
        if not response.is_success:
            raise SourceUnavailableError(
                self.name, f"Token request failed (HTTP {response.status_code})"
            )

        data = response.json()
        self._token = data["access_token"]
        self._token_expires_at = time.monotonic() + int(data.get("expires_in", 3600))
        logger.debug("MOT access token refreshed")
        return self._token

    # ─────────────────────────────────────────────────────────────────────
    # Response mapping
    # ─────────────────────────────────────────────────────────────────────

    @classmethod
    def to_history(cls, data: dict, plate: str) -> MotHistory:
        return MotHistory(
            registration=data.get("registration") or plate,
            make=data.get("make") or "",
            model=data.get("model") or "",
            first_used_date=data.get("firstUsedDate"),
            fuel_type=data.get("fuelType"),
            primary_colour=data.get("primaryColour"),
            mot_tests=[cls._to_test(t) for t in data.get("motTests") or []],
            source=cls.name,
        )

    @classmethod
    def _to_test(cls, test: dict) -> MotTest:
        expiry = test.get("expiryDate")
        return MotTest(
            completed_date=test["completedDate"],
            test_result=test["testResult"],
            expiry_date=expiry[:10] if expiry else None,
            odometer_value=cls._parse_odometer(test),
            odometer_unit=cls._parse_unit(test.get("odometerUnit")),
            mot_test_number=test.get("motTestNumber") or "",
            defects=[cls._to_defect(d) for d in test.get("defects") or []],
        )

    @staticmethod
    def _parse_odometer(test: dict) -> int:
        """Comma-formatted reading, only when the result type is an actual read."""
        value = test.get("odometerValue")
        if not value or test.get("odometerResultType") != "READ":
            return 0
        try:
            return int(str(value).replace(",", ""))
        except ValueError:
            return 0

    @staticmethod
    def _parse_unit(unit: Optional[str]) -> OdometerUnit:
        if unit and unit.lower() == "km":
            return OdometerUnit.KILOMETRES
        return OdometerUnit.MILES

    @staticmethod
    def _to_defect(defect: dict) -> MotDefect:
        return MotDefect(
            text=defect.get("text") or "",
            type=map_defect_type(defect.get("type")),
            dangerous=bool(defect.get("dangerous")),
        )


def map_defect_type(value: Optional[str]) -> DefectType:
    """Case-insensitive defect severity, ADVISORY when unrecognized."""
    if not value:
        return DefectType.ADVISORY
    try:
        return DefectType(value.upper())
    except ValueError:
        return DefectType.ADVISORY
