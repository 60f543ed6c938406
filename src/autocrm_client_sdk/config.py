from __future__ import annotations

import os
from dataclasses import dataclass
from dotenv import load_dotenv

PRODUCTION_ENVS = {"production", "prod"}


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str
    api_base_url: str
    timeout_seconds: float = 30.0
    max_connections: int = 20
    verify_ssl: bool = True
    debug: bool = False
    firebase_api_key: str | None = None
    app_name: str = "autocrm"

    @property
    def normalized_env(self) -> str:
        return self.env_name.lower().strip()

    @property
    def is_production(self) -> bool:
        return self.normalized_env in PRODUCTION_ENVS

    @property
    def diagnostics_enabled(self) -> bool:
        return self.debug or not self.is_production


TRUE_VALUES = {"1", "true", "yes", "on"}


def _read_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in TRUE_VALUES


def _base_url(env_key: str) -> str:
    for name in (f"AUTOCRM_API_BASE_URL_{env_key}", "AUTOCRM_API_BASE_URL"):
        value = (os.getenv(name) or "").strip()
        if value:
            return value.rstrip("/")
    raise ConfigError("Missing required config value: AUTOCRM_API_BASE_URL")


def _read_float(name: str, default: float) -> float:
    raw = os.getenv(name, str(default))
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected a number, got {raw!r}") from exc


def _read_int(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected an integer, got {raw!r}") from exc


def load_config(env_file: str | None = None) -> ClientConfig:
    """Load config from environment with optional .env override."""
    load_dotenv(env_file)

    env_name = (os.getenv("AUTOCRM_ENV") or "development").strip()
    api_base_url = _base_url(env_name.upper())

    timeout_seconds = _read_float("AUTOCRM_TIMEOUT_SECONDS", 30.0)
    if timeout_seconds <= 0:
        raise ConfigError(f"Invalid AUTOCRM_TIMEOUT_SECONDS: expected > 0, got {timeout_seconds}")

    max_connections = _read_int("AUTOCRM_MAX_CONNECTIONS", 20)
    if max_connections < 1:
        raise ConfigError(f"Invalid AUTOCRM_MAX_CONNECTIONS: expected >= 1, got {max_connections}")

    verify_ssl = _read_bool("AUTOCRM_VERIFY_SSL", True)
    debug = _read_bool("AUTOCRM_DEBUG", False)
    firebase_api_key = (os.getenv("AUTOCRM_FIREBASE_API_KEY") or "").strip() or None

    return ClientConfig(
        env_name=env_name,
        api_base_url=api_base_url,
        timeout_seconds=timeout_seconds,
        max_connections=max_connections,
        verify_ssl=verify_ssl,
        debug=debug,
        firebase_api_key=firebase_api_key,
    )
