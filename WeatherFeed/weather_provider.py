"""Weather provider abstraction - allows swapping different weather APIs."""
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from weather_data import CurrentWeather, DailyForecast, Location


class WeatherProviderBase(ABC):
    """Abstract base class for weather data providers."""

    @abstractmethod
    def get_current(self, location: str, units: str = "") -> Tuple[Location, CurrentWeather]:
        """
        Fetch current weather data for a location.

        Returns:
            Tuple of (Location, CurrentWeather)

        Raises:
            WeatherProviderError: If the provider fails to fetch data
        """
        pass

    @abstractmethod
    def get_forecast(
        self, location: str, units: str = "", days: int = 5
    ) -> Tuple[Location, List[DailyForecast]]:
        """
        Fetch a daily forecast for a location.

        Returns:
            Tuple of (Location, list of DailyForecast in date order)

        Raises:
            WeatherProviderError: If the provider fails to fetch data
        """
        pass

    def close(self) -> None:
        """Release resources held by the provider (HTTP sessions etc.)."""
        pass


class WeatherProviderError(Exception):
    """Exception raised when a weather provider fails."""
    pass


class TransientFetchError(WeatherProviderError):
    """Network-level failure (DNS, connect, timeout). Safe to retry later."""
    pass


class UpstreamError(WeatherProviderError):
    """Provider answered with a non-success HTTP status."""

    def __init__(self, status_code: int, body: str, message: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        super().__init__(message or f"HTTP {status_code}: {body[:200]}")


class MalformedResponseError(WeatherProviderError):
    """Provider payload did not decode against the expected schema."""
    pass
