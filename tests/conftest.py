"""Shared test fixtures for platecheck."""

import pytest

import platecheck
from platecheck.models import Settings


@pytest.fixture
def temp_config_dir(tmp_path):
    """Provide isolated config directory for tests."""
    config_dir = tmp_path / ".config" / "platecheck"
    config_dir.mkdir(parents=True)
    return config_dir


@pytest.fixture
def mock_keyring(monkeypatch):
    """Mock keyring for credential tests."""
    storage = {}

    def mock_get(service, key):
        return storage.get(f"{service}:{key}")

    def mock_set(service, key, value):
        storage[f"{service}:{key}"] = value

    def mock_delete(service, key):
        k = f"{service}:{key}"
        if k not in storage:
            from keyring.errors import PasswordDeleteError
            raise PasswordDeleteError(f"No password for {key}")
        storage.pop(k)

    monkeypatch.setattr("keyring.get_password", mock_get)
    monkeypatch.setattr("keyring.set_password", mock_set)
    monkeypatch.setattr("keyring.delete_password", mock_delete)

    return storage


@pytest.fixture
def fast_settings():
    """Unconfigured settings with no mock latency and no scraping."""
    return Settings(mock_latency=False, scraping_enabled=False)


@pytest.fixture(autouse=True)
def fresh_aggregator():
    """Each test starts without the process-wide Aggregator."""
    platecheck.reset_aggregator()
    yield
    platecheck.reset_aggregator()
