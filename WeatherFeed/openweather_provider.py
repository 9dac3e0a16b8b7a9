"""OpenWeather Current Weather and 5 day Forecast API provider implementation."""
import logging
import requests
from typing import Any, Dict, List, Optional, Tuple
from openweather_normalizer import normalize_current, normalize_forecast
from weather_data import CurrentWeather, DailyForecast, Location
from weather_provider import (
    MalformedResponseError,
    TransientFetchError,
    UpstreamError,
    WeatherProviderBase,
)

DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5"
DEFAULT_UNITS = "metric"
MIN_FORECAST_DAYS = 1
MAX_FORECAST_DAYS = 5  # free tier forecast covers 5 days

# Units accepted at the boundary -> units understood by OpenWeather
UNITS_ALIASES = {"kelvin": "standard"}


def clamp_days(days: int) -> int:
    """Force a day count into the range the forecast endpoint can serve."""
    return max(MIN_FORECAST_DAYS, min(MAX_FORECAST_DAYS, days))


class OpenWeatherProvider(WeatherProviderBase):
    """
    Weather provider using the free OpenWeather endpoints.

    Current weather: https://openweathermap.org/current
    5 day / 3 hour forecast: https://openweathermap.org/forecast5

    Makes exactly one request per call: no retries, no caching.
    """

    CURRENT_ENDPOINT = "/weather"
    FORECAST_ENDPOINT = "/forecast"

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        lang: str = "en",
        timeout: float = 10,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize OpenWeather provider.

        Args:
            api_key: OpenWeather API key
            base_url: API root, without the endpoint path
            lang: Language code for descriptions (e.g., "en", "de")
            timeout: HTTP request timeout in seconds
            session: Shared requests session; one is created when omitted
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.lang = lang
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session or requests.Session()

    def close(self) -> None:
        """Release the HTTP session if this provider created it."""
        if self._owns_session:
            self.session.close()

    def get_current(self, location: str, units: str = "") -> Tuple[Location, CurrentWeather]:
        return self.fetch_current(location, units)

    def get_forecast(
        self, location: str, units: str = "", days: int = MAX_FORECAST_DAYS
    ) -> Tuple[Location, List[DailyForecast]]:
        return self.fetch_forecast(location, units, days)

    def fetch_current(
        self, location: str, units: str = "", api_key: Optional[str] = None
    ) -> Tuple[Location, CurrentWeather]:
        """
        Fetch current weather from the OpenWeather Current Weather API.

        Args:
            location: City name query, e.g. "London,GB"
            units: "metric", "imperial" or "kelvin"; empty means metric
            api_key: Overrides the configured key for this call only

        Returns:
            Tuple of (Location, CurrentWeather)

        Raises:
            TransientFetchError: On connection problems or timeout
            UpstreamError: If the API answers with a non-success status
            MalformedResponseError: If the body cannot be decoded
        """
        data = self._request(self.CURRENT_ENDPOINT, location, units, api_key)
        location_info, current = normalize_current(data)
        logging.info(
            f"Parsed current weather for {location_info.name}: "
            f"{current.temperature}°, {current.condition}"
        )
        return location_info, current

    def fetch_forecast(
        self,
        location: str,
        units: str = "",
        days: int = MAX_FORECAST_DAYS,
        api_key: Optional[str] = None,
    ) -> Tuple[Location, List[DailyForecast]]:
        """
        Fetch the 5 day / 3 hour forecast and summarize it per day.

        Args:
            location: City name query, e.g. "London,GB"
            units: "metric", "imperial" or "kelvin"; empty means metric
            days: Number of days wanted, clamped into [1, 5]
            api_key: Overrides the configured key for this call only

        Returns:
            Tuple of (Location, list of DailyForecast in date order)

        Raises:
            TransientFetchError: On connection problems or timeout
            UpstreamError: If the API answers with a non-success status
            MalformedResponseError: If the body cannot be decoded
        """
        clamped = clamp_days(days)
        if clamped != days:
            logging.debug(f"Clamped forecast days from {days} to {clamped}")
        data = self._request(self.FORECAST_ENDPOINT, location, units, api_key)
        location_info, forecasts = normalize_forecast(data, clamped)
        logging.info(f"Parsed {len(forecasts)} forecast day(s) for {location_info.name}")
        return location_info, forecasts

    def _build_params(self, location: str, units: str, api_key: Optional[str]) -> Dict[str, Any]:
        units = units or DEFAULT_UNITS
        return {
            "q": location,
            "appid": api_key or self.api_key,
            "units": UNITS_ALIASES.get(units, units),
            "lang": self.lang,
        }

    def _request(self, endpoint: str, location: str, units: str, api_key: Optional[str]) -> Any:
        url = f"{self.base_url}{endpoint}"
        params = self._build_params(location, units, api_key)

        try:
            logging.info(f"Making OpenWeather API request: {url}")
            logging.debug(f"Request parameters: q={location}, units={params['units']}, lang={self.lang}")
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logging.error(f"Network error during API request: {e}")
            raise TransientFetchError(f"Network error: {e}") from e

        logging.info(f"API response status: {response.status_code}")

        if not response.ok:
            logging.error(f"API request failed with status {response.status_code}")
            self._handle_error_response(response)

        try:
            data = response.json()
        except ValueError as e:
            logging.error(f"Failed to parse API response: {e}")
            raise MalformedResponseError(f"Failed to parse response: {e}") from e

        logging.debug(f"API response (truncated): {str(data)[:500]}...")
        return data

    def _handle_error_response(self, response: requests.Response) -> None:
        """Raise UpstreamError, using OpenWeather's JSON message when there is one."""
        body = response.text
        try:
            error_data = response.json()
        except ValueError:
            logging.error(f"Non-JSON error response: HTTP {response.status_code}, body: {body[:500]}")
            raise UpstreamError(response.status_code, body)

        message = None
        if isinstance(error_data, dict) and error_data.get("message"):
            logging.error(f"OpenWeather API error response: {error_data}")
            message = f"OpenWeather API error {response.status_code}: {error_data['message']}"
        raise UpstreamError(response.status_code, body, message)
