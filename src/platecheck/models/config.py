"""Application settings model."""

from typing import Optional

from pydantic import BaseModel, Field, SecretStr

# Secret fields live in the OS keychain, never in config.toml
SECRET_FIELDS = ("dvla_api_key", "mot_client_secret", "mot_api_key")


class Settings(BaseModel):
    """Credentials and behaviour flags for the lookup sources."""

    version: int = Field(default=1, description="Config schema version")

    # DVLA Vehicle Enquiry Service
    dvla_api_key: Optional[SecretStr] = Field(default=None, exclude=True)

    # DVSA MOT history API (OAuth2 client credentials)
    mot_client_id: Optional[str] = None
    mot_client_secret: Optional[SecretStr] = Field(default=None, exclude=True)
    mot_api_key: Optional[SecretStr] = Field(default=None, exclude=True)
    mot_tenant_id: Optional[str] = None

    scraping_enabled: bool = True
    insurance_enabled: bool = False
    mock_latency: bool = Field(default=True, description="Simulate API delay in mock sources")

    http_timeout: float = Field(default=8.0, gt=0, le=30)
    scrape_interval: float = Field(default=2.0, ge=0)

    @property
    def dvla_configured(self) -> bool:
        return self.dvla_api_key is not None and bool(self.dvla_api_key.get_secret_value())

    @property
    def mot_configured(self) -> bool:
        return all(
            [
                self.mot_client_id,
                self.mot_tenant_id,
                self.mot_client_secret and self.mot_client_secret.get_secret_value(),
                self.mot_api_key and self.mot_api_key.get_secret_value(),
            ]
        )
