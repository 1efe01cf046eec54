"""Configuration management."""

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

import platformdirs
import tomli
import tomli_w
from pydantic import ValidationError

from platecheck.core.keychain import CredentialKeychain
from platecheck.exceptions import ConfigValidationError
from platecheck.models import SECRET_FIELDS, Settings

logger = logging.getLogger(__name__)

# Environment variable -> Settings field
ENV_OVERRIDES = {
    "DVLA_API_KEY": "dvla_api_key",
    "MOT_CLIENT_ID": "mot_client_id",
    "MOT_CLIENT_SECRET": "mot_client_secret",
    "MOT_API_KEY": "mot_api_key",
    "MOT_TENANT_ID": "mot_tenant_id",
    "PLATECHECK_SCRAPING": "scraping_enabled",
    "PLATECHECK_INSURANCE": "insurance_enabled",
    "PLATECHECK_HTTP_TIMEOUT": "http_timeout",
    "PLATECHECK_SCRAPE_INTERVAL": "scrape_interval",
    "PLATECHECK_MOCK_LATENCY": "mock_latency",
}


class ConfigManager:
    """Loads settings from config.toml, the environment and the OS keychain.

    Precedence, highest first: environment, config file, keychain (secrets
    only), model defaults.
    """

    CONFIG_FILENAME = "config.toml"

    def __init__(
        self,
        config_dir: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
        use_keychain: bool = True,
    ) -> None:
        """Initialize config manager.

        Args:
            config_dir: Override config directory (for testing)
            environ: Override environment mapping (for testing)
            use_keychain: Fill missing secrets from the OS keychain
        """
        if config_dir:
            self._config_dir = Path(config_dir)
        else:
            self._config_dir = Path(platformdirs.user_config_dir("platecheck"))
        self._environ = environ if environ is not None else os.environ
        self.use_keychain = use_keychain

    @property
    def config_path(self) -> Path:
        """Path to config file."""
        return self._config_dir / self.CONFIG_FILENAME

    @property
    def exists(self) -> bool:
        """Check if config file exists."""
        return self.config_path.exists()

    def save(self, settings: Settings) -> None:
        """Write non-secret settings to TOML and secrets to the keychain."""
        self._config_dir.mkdir(parents=True, exist_ok=True)

        config_dict = settings.model_dump(mode="json", exclude_none=True)
        self.config_path.write_text(tomli_w.dumps(config_dict), encoding="utf-8")

        if self.use_keychain:
            CredentialKeychain.store(settings)

    def load(self) -> Settings:
        """Build Settings from every configured layer.

        A missing config file is not an error; defaults apply.

        Raises:
            ConfigValidationError: If the file is malformed or a value is invalid
        """
        config_dict = self._read_file()

        for env_name, field in ENV_OVERRIDES.items():
            value = self._environ.get(env_name)
            if value not in (None, ""):
                config_dict[field] = value

        if self.use_keychain:
            for field in SECRET_FIELDS:
                if not config_dict.get(field):
                    secret = CredentialKeychain.retrieve(field)
                    if secret:
                        config_dict[field] = secret

        try:
            return Settings.model_validate(config_dict)
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first["loc"]) or "config"
            raise ConfigValidationError(field, first["msg"])

    def delete(self) -> bool:
        """Delete configuration file.

        Returns:
            True if file was deleted, False if it didn't exist
        """
        if self.exists:
            self.config_path.unlink()
            return True
        return False

    def _read_file(self) -> dict:
        if not self.exists:
            logger.debug("No config file at %s, using defaults", self.config_path)
            return {}

        try:
            return tomli.loads(self.config_path.read_text(encoding="utf-8"))
        except tomli.TOMLDecodeError as e:
            raise ConfigValidationError("config.toml", str(e))
