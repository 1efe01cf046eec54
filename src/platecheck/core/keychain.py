"""OS keychain integration for secure credential storage."""

import logging
from typing import Optional

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

from platecheck.models import SECRET_FIELDS, Settings

logger = logging.getLogger(__name__)

SERVICE_NAME = "platecheck"


class CredentialKeychain:
    """Secure storage for API secrets using OS keychain.

    Each secret field of Settings is stored under its own key.
    """

    KEYS = SECRET_FIELDS

    @classmethod
    def store(cls, settings: Settings) -> None:
        """Store every secret that is set on ``settings``."""
        for key in cls.KEYS:
            secret = getattr(settings, key)
            if secret is not None and secret.get_secret_value():
                keyring.set_password(SERVICE_NAME, key, secret.get_secret_value())

    @classmethod
    def retrieve(cls, key: str) -> Optional[str]:
        """Retrieve one secret by settings field name.

        Returns:
            The secret, or None if absent or no keychain backend is available
        """
        try:
            return keyring.get_password(SERVICE_NAME, key)
        except KeyringError as e:
            logger.debug("Keychain unavailable reading %s: %s", key, e)
            return None

    @classmethod
    def retrieve_all(cls) -> dict[str, str]:
        """All stored secrets keyed by settings field name."""
        found = {}
        for key in cls.KEYS:
            value = cls.retrieve(key)
            if value:
                found[key] = value
        return found

    @classmethod
    def delete(cls) -> None:
        """Remove all secrets from keychain."""
        for key in cls.KEYS:
            try:
                keyring.delete_password(SERVICE_NAME, key)
            except PasswordDeleteError:
                pass  # Key doesn't exist

    @classmethod
    def exists(cls) -> bool:
        """Check if any secret exists in keychain."""
        return any(cls.retrieve(key) is not None for key in cls.KEYS)
