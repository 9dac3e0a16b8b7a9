"""Configuration loaded from the environment (and a .env file when present)."""
import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from api_response import VALID_UNITS

DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5"


class ConfigError(Exception):
    """Required configuration is missing or invalid."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"Configuration error [{field}]: {message}")


@dataclass
class Config:
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout: int = 10  # seconds
    lang: str = "en"
    units: str = "metric"
    log_level: str = "info"  # debug, info, warning, error

    def validate(self) -> None:
        if not self.api_key:
            raise ConfigError(
                "OPENWEATHERMAP_API_KEY",
                "OpenWeatherMap API key is required. Get one at https://openweathermap.org/api",
            )
        if self.timeout <= 0:
            raise ConfigError("WEATHER_TIMEOUT", "Timeout must be a positive number of seconds")
        if self.units not in VALID_UNITS:
            raise ConfigError("WEATHER_UNITS", f"Units must be one of: {', '.join(VALID_UNITS)}")


def _get_int(env: Mapping[str, str], key: str, default: int) -> int:
    value = env.get(key)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        logging.warning("Ignoring invalid %s=%r, using %s", key, value, default)
        return default


def load_config(env: Optional[Mapping[str, str]] = None) -> Config:
    """
    Build a Config from environment variables.

    Args:
        env: Mapping to read instead of os.environ (no .env file is loaded then)
    """
    if env is None:
        load_dotenv()
        env = os.environ

    config = Config(
        api_key=env.get("OPENWEATHERMAP_API_KEY", ""),
        base_url=env.get("OPENWEATHERMAP_BASE_URL") or DEFAULT_BASE_URL,
        timeout=_get_int(env, "WEATHER_TIMEOUT", 10),
        lang=env.get("WEATHER_LANG") or "en",
        units=env.get("WEATHER_UNITS") or "metric",
        log_level=(env.get("LOG_LEVEL") or "info").lower(),
    )
    logging.info("Configuration loaded: units=%s timeout=%ss", config.units, config.timeout)
    return config
