"""Tests for configuration loading."""
import pytest
from config import DEFAULT_BASE_URL, Config, ConfigError, load_config


def test_load_config_defaults():
    config = load_config({"OPENWEATHERMAP_API_KEY": "abc"})

    assert config.api_key == "abc"
    assert config.base_url == DEFAULT_BASE_URL
    assert config.timeout == 10
    assert config.lang == "en"
    assert config.units == "metric"
    assert config.log_level == "info"


def test_load_config_overrides():
    config = load_config({
        "OPENWEATHERMAP_API_KEY": "abc",
        "OPENWEATHERMAP_BASE_URL": "http://localhost:8080",
        "WEATHER_TIMEOUT": "3",
        "WEATHER_LANG": "de",
        "WEATHER_UNITS": "imperial",
        "LOG_LEVEL": "DEBUG",
    })

    assert config.base_url == "http://localhost:8080"
    assert config.timeout == 3
    assert config.lang == "de"
    assert config.units == "imperial"
    assert config.log_level == "debug"


def test_invalid_timeout_falls_back_to_default():
    config = load_config({"OPENWEATHERMAP_API_KEY": "abc", "WEATHER_TIMEOUT": "soon"})
    assert config.timeout == 10


def test_validate_requires_api_key():
    with pytest.raises(ConfigError) as exc_info:
        load_config({}).validate()

    assert exc_info.value.field == "OPENWEATHERMAP_API_KEY"


def test_validate_rejects_non_positive_timeout():
    with pytest.raises(ConfigError):
        Config(api_key="abc", timeout=0).validate()


def test_validate_accepts_complete_config():
    Config(api_key="abc").validate()


@pytest.mark.parametrize("units", ["standard", "celsius"])
def test_validate_rejects_unknown_units(units):
    config = load_config({"OPENWEATHERMAP_API_KEY": "abc", "WEATHER_UNITS": units})

    with pytest.raises(ConfigError) as exc_info:
        config.validate()

    assert exc_info.value.field == "WEATHER_UNITS"


@pytest.mark.parametrize("units", ["metric", "imperial", "kelvin"])
def test_validate_accepts_known_units(units):
    Config(api_key="abc", units=units).validate()
