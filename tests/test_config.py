import pytest

from docman.config import DEFAULT_API_ENDPOINT, Settings
from docman.errors import ConfigurationError


def test_defaults(monkeypatch):
    monkeypatch.delenv("DOCMAN_API_ENDPOINT", raising=False)
    monkeypatch.delenv("DOCMAN_LOOKUP_TIMEOUT", raising=False)

    settings = Settings.from_env()

    assert settings.api_endpoint == DEFAULT_API_ENDPOINT
    assert settings.lookup_timeout == 10.0


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DOCMAN_API_ENDPOINT", "http://localhost:9000/")
    monkeypatch.setenv("DOCMAN_LOOKUP_TIMEOUT", "2.5")

    settings = Settings.from_env()

    assert settings.api_endpoint == "http://localhost:9000"
    assert settings.lookup_timeout == 2.5


def test_invalid_timeout_is_a_configuration_error(monkeypatch):
    monkeypatch.setenv("DOCMAN_LOOKUP_TIMEOUT", "0")

    with pytest.raises(ConfigurationError):
        Settings.from_env()
