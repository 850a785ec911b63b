"""Settings for the catalog front-end.

Values come from the environment (a local .env file is honoured).
Bad values fail fast with a ConfigurationError.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_BASE_URL = "https://fakestoreapi.com"


class ConfigurationError(Exception):
    """Raised when a setting is missing or invalid."""
    pass


@dataclass(frozen=True)
class Settings:
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 10.0
    log_level: str = "INFO"
    gateway_host: str = "127.0.0.1"
    gateway_port: int = 8085


def _get_env(key: str, default: str) -> str:
    value = os.environ.get(key)
    return value if value else default


def _parse_timeout(raw: str) -> float:
    try:
        timeout = float(raw)
    except ValueError:
        raise ConfigurationError(f"FAKESTORE_TIMEOUT must be a number, got '{raw}'")
    if timeout <= 0:
        raise ConfigurationError("FAKESTORE_TIMEOUT must be > 0")
    return timeout


def _parse_port(raw: str) -> int:
    try:
        port = int(raw)
    except ValueError:
        raise ConfigurationError(f"GATEWAY_PORT must be an integer, got '{raw}'")
    if not 0 < port < 65536:
        raise ConfigurationError(f"GATEWAY_PORT out of range: {port}")
    return port


def _parse_level(raw: str) -> str:
    level = raw.upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigurationError(f"LOG_LEVEL '{raw}' is not a logging level")
    return level


def load_settings() -> Settings:
    """
    Build Settings from the environment.

    Raises:
        ConfigurationError: If a value cannot be parsed.
    """
    load_dotenv()

    base_url = _get_env("FAKESTORE_BASE_URL", DEFAULT_BASE_URL).rstrip("/")
    if not base_url.startswith(("http://", "https://")):
        raise ConfigurationError(f"FAKESTORE_BASE_URL must be an http(s) URL, got '{base_url}'")

    return Settings(
        base_url=base_url,
        timeout=_parse_timeout(_get_env("FAKESTORE_TIMEOUT", "10")),
        log_level=_parse_level(_get_env("LOG_LEVEL", "INFO")),
        gateway_host=_get_env("GATEWAY_HOST", "127.0.0.1"),
        gateway_port=_parse_port(_get_env("GATEWAY_PORT", "8085")),
    )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Lazy-load and cache the settings."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings
