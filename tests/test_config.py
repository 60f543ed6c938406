from __future__ import annotations

import logging

import pytest

from autocrm_client_sdk.config import ClientConfig, ConfigError, load_config
from autocrm_client_sdk.logging_setup import configure_logging


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in (
        "AUTOCRM_ENV",
        "AUTOCRM_API_BASE_URL",
        "AUTOCRM_API_BASE_URL_DEVELOPMENT",
        "AUTOCRM_API_BASE_URL_STAGING",
        "AUTOCRM_TIMEOUT_SECONDS",
        "AUTOCRM_MAX_CONNECTIONS",
        "AUTOCRM_VERIFY_SSL",
        "AUTOCRM_DEBUG",
        "AUTOCRM_FIREBASE_API_KEY",
    ):
        monkeypatch.delenv(key, raising=False)


def test_load_config_requires_base_url() -> None:
    with pytest.raises(ConfigError, match="AUTOCRM_API_BASE_URL"):
        load_config()


def test_load_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AUTOCRM_API_BASE_URL", "https://api.example.com/api/")
    cfg = load_config()
    assert cfg.api_base_url == "https://api.example.com/api"
    assert cfg.env_name == "development"
    assert cfg.timeout_seconds == 30.0
    assert cfg.max_connections == 20
    assert cfg.verify_ssl is True
    assert cfg.firebase_api_key is None
    assert cfg.diagnostics_enabled is True


def test_load_config_profile_url_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AUTOCRM_ENV", "staging")
    monkeypatch.setenv("AUTOCRM_API_BASE_URL", "https://api.example.com")
    monkeypatch.setenv("AUTOCRM_API_BASE_URL_STAGING", "https://staging.example.com")
    cfg = load_config()
    assert cfg.api_base_url == "https://staging.example.com"
    assert cfg.env_name == "staging"


@pytest.mark.parametrize(
    ("key", "value"),
    [
        ("AUTOCRM_TIMEOUT_SECONDS", "0"),
        ("AUTOCRM_TIMEOUT_SECONDS", "soon"),
        ("AUTOCRM_MAX_CONNECTIONS", "0"),
        ("AUTOCRM_MAX_CONNECTIONS", "2.5"),
    ],
)
def test_load_config_rejects_invalid_values(monkeypatch: pytest.MonkeyPatch, key: str, value: str) -> None:
    monkeypatch.setenv("AUTOCRM_API_BASE_URL", "https://api.example.com")
    monkeypatch.setenv(key, value)
    with pytest.raises(ConfigError, match=key):
        load_config()


def test_production_disables_diagnostics_unless_debug() -> None:
    prod = ClientConfig(env_name="Production", api_base_url="https://api.example.com")
    assert prod.is_production is True
    assert prod.diagnostics_enabled is False
    debug = ClientConfig(env_name="prod", api_base_url="https://api.example.com", debug=True)
    assert debug.diagnostics_enabled is True


def test_flags_are_parsed(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AUTOCRM_API_BASE_URL", "https://api.example.com")
    monkeypatch.setenv("AUTOCRM_VERIFY_SSL", "false")
    monkeypatch.setenv("AUTOCRM_DEBUG", "yes")
    monkeypatch.setenv("AUTOCRM_FIREBASE_API_KEY", " key-123 ")
    cfg = load_config()
    assert cfg.verify_ssl is False
    assert cfg.debug is True
    assert cfg.firebase_api_key == "key-123"


def test_configure_logging_uses_plain_format(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: dict = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: seen.update(kwargs))

    configure_logging("DEBUG")

    assert seen == {"level": "DEBUG", "format": "%(message)s"}
