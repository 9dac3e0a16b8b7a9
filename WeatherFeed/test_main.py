"""Tests for the command line front end."""
import json
import pytest
from datetime import date, datetime, timezone
from unittest.mock import Mock, patch
import main
from config import Config
from weather_data import CurrentWeather, DailyForecast, Location
from weather_provider import UpstreamError, WeatherProviderBase
from weather_service import WeatherService


class StubProvider(WeatherProviderBase):
    def __init__(self, raise_error=None):
        self.raise_error = raise_error
        self.closed = False

    def get_current(self, location, units=""):
        if self.raise_error:
            raise self.raise_error
        return Location("Testville", "GB", 1.0, 2.0), CurrentWeather(
            temperature=12.0,
            feels_like=11.0,
            humidity=70,
            pressure=1010.0,
            wind_speed=3.0,
            wind_direction=180,
            condition="Rain",
            description="Light Rain",
            icon="10d",
            cloud_cover=90,
            last_updated=datetime(2025, 1, 1, tzinfo=timezone.utc),
        )

    def get_forecast(self, location, units="", days=5):
        if self.raise_error:
            raise self.raise_error
        return Location("Testville", "GB", 1.0, 2.0), [DailyForecast(date=date(2025, 1, d)) for d in range(1, days + 1)]

    def close(self):
        self.closed = True


def test_parse_args_forecast():
    args = main.parse_args(["forecast", "London", "--days", "3", "--units", "imperial"])

    assert args.command == "forecast"
    assert args.location == "London"
    assert args.days == 3
    assert args.units == "imperial"


def test_parse_args_rejects_unknown_units():
    with pytest.raises(SystemExit):
        main.parse_args(["current", "London", "--units", "celsius"])


def test_run_current_success():
    args = main.parse_args(["current", "Testville"])
    envelope = main.run(args, WeatherService(StubProvider()))

    assert envelope["success"] is True
    assert envelope["data"]["location"]["name"] == "Testville"
    assert envelope["data"]["current"]["condition"] == "Rain"


def test_run_forecast_success():
    args = main.parse_args(["forecast", "Testville", "--days", "2"])
    envelope = main.run(args, WeatherService(StubProvider()))

    assert [day["date"] for day in envelope["data"]["forecast"]] == ["2025-01-01", "2025-01-02"]


def test_run_maps_upstream_error():
    args = main.parse_args(["current", "Nowhere"])
    envelope = main.run(args, WeatherService(StubProvider(raise_error=UpstreamError(404, "city not found"))))

    assert envelope["success"] is False
    assert envelope["error"]["code"] == 404


def test_run_maps_validation_error():
    args = main.parse_args(["forecast", "Testville", "--days", "9"])
    envelope = main.run(args, WeatherService(StubProvider()))

    assert envelope["success"] is False
    assert envelope["error"]["code"] == 400


def test_build_weather_service_uses_config():
    config = Config(api_key="abc", base_url="http://localhost:1234", timeout=4, lang="fr", units="imperial")
    service = main.build_weather_service(config)

    assert service.provider.api_key == "abc"
    assert service.provider.base_url == "http://localhost:1234"
    assert service.provider.timeout == 4
    assert service.provider.lang == "fr"
    assert service.default_units == "imperial"
    service.provider.close()


def test_main_prints_envelope_and_closes_provider(capsys):
    provider = StubProvider()
    with patch("main.load_config", return_value=Config(api_key="abc")), \
            patch("main.setup_logging"), \
            patch("main.build_weather_service", return_value=WeatherService(provider)):
        exit_code = main.main(["current", "Testville"])

    output = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert output["success"] is True
    assert provider.closed is True


def test_main_exit_code_on_error(capsys):
    provider = StubProvider(raise_error=UpstreamError(401, "bad key"))
    with patch("main.load_config", return_value=Config(api_key="abc")), \
            patch("main.setup_logging"), \
            patch("main.build_weather_service", return_value=WeatherService(provider)):
        exit_code = main.main(["current", "Testville"])

    output = json.loads(capsys.readouterr().out)
    assert exit_code == 1
    assert output["error"]["message"] == "Invalid API key"


def test_main_requires_api_key():
    with patch("main.load_config", return_value=Config(api_key="")), patch("main.setup_logging"):
        with pytest.raises(SystemExit):
            main.main(["current", "Testville"])


def test_api_key_flag_overrides_config(capsys):
    captured = {}

    def fake_build(config):
        captured["config"] = config
        return WeatherService(StubProvider())

    with patch("main.load_config", return_value=Config(api_key="")), \
            patch("main.setup_logging"), \
            patch("main.build_weather_service", side_effect=fake_build):
        main.main(["--api-key", "cli-key", "current", "Testville"])

    assert captured["config"].api_key == "cli-key"


def test_logging_is_configured_before_config_is_loaded(capsys):
    calls = Mock()
    calls.load_config.return_value = Config(api_key="abc")
    calls.build_weather_service.return_value = WeatherService(StubProvider())

    with patch("main.setup_logging", calls.setup_logging), \
            patch("main.load_config", calls.load_config), \
            patch("main.build_weather_service", calls.build_weather_service):
        main.main(["current", "Testville"])

    called = [name for name, _, _ in calls.mock_calls]
    assert called.index("setup_logging") < called.index("load_config")
