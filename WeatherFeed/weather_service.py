"""Weather service: validates requests and wraps provider results in reports."""
import logging
from api_response import validate_days, validate_location, validate_units
from weather_data import WeatherReport
from weather_provider import WeatherProviderBase


class WeatherService:
    """
    Front door used by the CLI.

    Rejects malformed input before the provider is called, then packages
    the provider's result into a WeatherReport stamped with the request time.
    Provider errors propagate unchanged; there is no caching or retrying.
    """

    def __init__(self, provider: WeatherProviderBase, default_units: str = ""):
        """
        Initialize weather service.

        Args:
            provider: Weather provider to use
            default_units: Units used when the caller passes none
        """
        self.provider = provider
        self.default_units = default_units

    def get_current(self, location: str, units: str = "") -> WeatherReport:
        """
        Raises:
            ValidationError: If location or units are malformed
            WeatherProviderError: If the provider fails
        """
        units = units or self.default_units
        validate_location(location)
        validate_units(units)

        logging.info(f"Fetching current weather for '{location}'")
        location_info, current = self.provider.get_current(location, units)
        return WeatherReport(location=location_info, current=current)

    def get_forecast(self, location: str, units: str = "", days: int = 5) -> WeatherReport:
        """
        Raises:
            ValidationError: If location, units or days are malformed
            WeatherProviderError: If the provider fails
        """
        units = units or self.default_units
        validate_location(location)
        validate_units(units)
        validate_days(days)

        logging.info(f"Fetching {days} day forecast for '{location}'")
        location_info, forecast = self.provider.get_forecast(location, units, days)
        return WeatherReport(location=location_info, forecast=forecast)
