"""Weather domain model - pure data structures independent of any API."""
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional


@dataclass
class Location:
    """Geographical location a report refers to."""
    name: str
    country: str  # ISO 3166 country code, e.g. "GB"
    latitude: float
    longitude: float
    timezone_offset: int = 0  # Offset from UTC in seconds

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "country": self.country,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "timezone_offset": self.timezone_offset,
        }


@dataclass
class CurrentWeather:
    """Current conditions, independent of any specific API."""
    temperature: float
    feels_like: float
    humidity: int
    pressure: float
    wind_speed: float
    wind_direction: int
    condition: str  # e.g., "Clouds", "Rain", "Clear"
    description: str  # e.g., "Broken Clouds"
    icon: str
    cloud_cover: int  # percentage
    last_updated: datetime

    # Optional fields, absent from some payloads
    wind_gust: float = 0.0
    visibility: float = 0.0
    uv_index: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "temperature": self.temperature,
            "feels_like": self.feels_like,
            "humidity": self.humidity,
            "pressure": self.pressure,
            "visibility": self.visibility,
            "wind_speed": self.wind_speed,
            "wind_direction": self.wind_direction,
            "wind_gust": self.wind_gust,
            "condition": self.condition,
            "description": self.description,
            "icon": self.icon,
            "uv_index": self.uv_index,
            "cloud_cover": self.cloud_cover,
            "last_updated": self.last_updated.isoformat(),
        }


@dataclass
class DailyForecast:
    """Summary of one calendar day of forecast samples."""
    date: date
    min_temp: float = 0.0
    max_temp: float = 0.0
    avg_temp: float = 0.0
    condition: str = ""
    description: str = ""
    icon: str = ""
    humidity: int = 0
    wind_speed: float = 0.0
    precipitation: float = 0.0  # rain + snow, mm

    # Not populated by the 3-hour feed yet
    chance_of_rain: int = 0
    uv_index: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "max_temperature": self.max_temp,
            "min_temperature": self.min_temp,
            "avg_temperature": self.avg_temp,
            "condition": self.condition,
            "description": self.description,
            "icon": self.icon,
            "humidity": self.humidity,
            "wind_speed": self.wind_speed,
            "precipitation": self.precipitation,
            "chance_of_rain": self.chance_of_rain,
            "uv_index": self.uv_index,
        }


@dataclass
class WeatherReport:
    """What a caller gets back: a location plus current and/or forecast data."""
    location: Location
    current: Optional[CurrentWeather] = None
    forecast: List[DailyForecast] = field(default_factory=list)
    request_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"location": self.location.to_dict()}
        if self.current is not None:
            data["current"] = self.current.to_dict()
        if self.forecast:
            data["forecast"] = [day.to_dict() for day in self.forecast]
        data["request_time"] = self.request_time.isoformat()
        return data
