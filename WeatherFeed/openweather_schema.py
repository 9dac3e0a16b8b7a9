"""OpenWeather payload shapes and their decoders.

The decoders accept the dictionaries returned by ``response.json()`` and turn
them into immutable dataclasses. Optional blocks (``rain``, ``snow``,
``wind.gust``, ...) default to zero. Required blocks that are missing, or
fields of the wrong JSON type, raise ``MalformedResponseError``.
"""
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Tuple

from weather_provider import MalformedResponseError


@dataclass(frozen=True)
class Condition:
    main: str  # short code, e.g. "Rain"
    description: str  # e.g. "light rain"
    icon: str  # e.g. "10d"


@dataclass(frozen=True)
class MainBlock:
    temp: float = 0.0
    feels_like: float = 0.0
    temp_min: float = 0.0
    temp_max: float = 0.0
    pressure: float = 0.0
    humidity: int = 0


@dataclass(frozen=True)
class Wind:
    speed: float = 0.0
    deg: int = 0
    gust: float = 0.0


@dataclass(frozen=True)
class Precipitation:
    three_hour: float = 0.0


@dataclass(frozen=True)
class Coordinates:
    lat: float = 0.0
    lon: float = 0.0


@dataclass(frozen=True)
class RawForecastSample:
    """One 3-hour step of the 5 day forecast feed."""
    dt: int
    main: MainBlock
    wind: Wind = Wind()
    clouds: int = 0
    weather: Tuple[Condition, ...] = ()
    rain: Precipitation = Precipitation()
    snow: Precipitation = Precipitation()


@dataclass(frozen=True)
class City:
    name: str = ""
    country: str = ""
    coord: Coordinates = Coordinates()
    timezone: int = 0


@dataclass(frozen=True)
class ForecastPayload:
    city: City
    samples: Tuple[RawForecastSample, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class CurrentPayload:
    """Body of the /weather endpoint."""
    dt: int
    main: MainBlock
    name: str = ""
    country: str = ""
    coord: Coordinates = Coordinates()
    weather: Tuple[Condition, ...] = ()
    wind: Wind = Wind()
    clouds: int = 0
    visibility: float = 0.0
    timezone: int = 0


def _block(data: Dict[str, Any], key: str, required: bool = False) -> Dict[str, Any]:
    value = data.get(key)
    if value is None:
        if required:
            raise MalformedResponseError(f"Response missing '{key}' block")
        return {}
    if not isinstance(value, dict):
        raise MalformedResponseError(f"Expected object for '{key}', got {type(value).__name__}")
    return value


def _number(data: Dict[str, Any], key: str, default: float = 0.0) -> float:
    value = data.get(key)
    if value is None:
        return default
    # bool is an int subclass but never a valid measurement
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedResponseError(f"Expected number for '{key}', got {type(value).__name__}")
    try:
        number = float(value)
    except OverflowError as e:
        raise MalformedResponseError(f"Number out of range for '{key}'") from e
    # NaN and Infinity are valid for response.json() but never a measurement
    if not math.isfinite(number):
        raise MalformedResponseError(f"Expected finite number for '{key}', got {value}")
    return number


def _integer(data: Dict[str, Any], key: str, default: int = 0) -> int:
    return int(_number(data, key, default))


def _string(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise MalformedResponseError(f"Expected string for '{key}', got {type(value).__name__}")
    return value


def _timestamp(data: Dict[str, Any]) -> int:
    if data.get("dt") is None:
        raise MalformedResponseError("Response missing 'dt' timestamp")
    dt = _integer(data, "dt")
    try:
        datetime.fromtimestamp(dt, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise MalformedResponseError(f"Timestamp out of range: {dt}") from e
    return dt


def _list(data: Dict[str, Any], key: str) -> List[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise MalformedResponseError(f"Expected list for '{key}', got {type(value).__name__}")
    return value


def parse_conditions(data: Dict[str, Any]) -> Tuple[Condition, ...]:
    conditions = []
    for item in _list(data, "weather"):
        if not isinstance(item, dict):
            raise MalformedResponseError("Expected object in 'weather' list")
        conditions.append(Condition(
            main=_string(item, "main"),
            description=_string(item, "description"),
            icon=_string(item, "icon"),
        ))
    return tuple(conditions)


def parse_main(data: Dict[str, Any]) -> MainBlock:
    main = _block(data, "main", required=True)
    return MainBlock(
        temp=_number(main, "temp"),
        feels_like=_number(main, "feels_like"),
        temp_min=_number(main, "temp_min"),
        temp_max=_number(main, "temp_max"),
        pressure=_number(main, "pressure"),
        humidity=_integer(main, "humidity"),
    )


def parse_wind(data: Dict[str, Any]) -> Wind:
    wind = _block(data, "wind")
    return Wind(
        speed=_number(wind, "speed"),
        deg=_integer(wind, "deg"),
        gust=_number(wind, "gust"),
    )


def parse_precipitation(data: Dict[str, Any], key: str) -> Precipitation:
    block = _block(data, key)
    return Precipitation(
        three_hour=_number(block, "3h"),
    )


def parse_coordinates(data: Dict[str, Any]) -> Coordinates:
    coord = _block(data, "coord")
    return Coordinates(lat=_number(coord, "lat"), lon=_number(coord, "lon"))


def parse_forecast_sample(data: Dict[str, Any]) -> RawForecastSample:
    if not isinstance(data, dict):
        raise MalformedResponseError("Expected object in forecast 'list'")
    return RawForecastSample(
        dt=_timestamp(data),
        main=parse_main(data),
        wind=parse_wind(data),
        clouds=_integer(_block(data, "clouds"), "all"),
        weather=parse_conditions(data),
        rain=parse_precipitation(data, "rain"),
        snow=parse_precipitation(data, "snow"),
    )


def parse_current_payload(data: Any) -> CurrentPayload:
    """Decode the body of the current weather endpoint."""
    if not isinstance(data, dict):
        raise MalformedResponseError(f"Expected JSON object, got {type(data).__name__}")
    return CurrentPayload(
        dt=_timestamp(data),
        main=parse_main(data),
        name=_string(data, "name"),
        country=_string(_block(data, "sys"), "country"),
        coord=parse_coordinates(data),
        weather=parse_conditions(data),
        wind=parse_wind(data),
        clouds=_integer(_block(data, "clouds"), "all"),
        visibility=_number(data, "visibility"),
        timezone=_integer(data, "timezone"),
    )


def parse_forecast_payload(data: Any) -> ForecastPayload:
    """Decode the body of the 5 day / 3 hour forecast endpoint."""
    if not isinstance(data, dict):
        raise MalformedResponseError(f"Expected JSON object, got {type(data).__name__}")
    city = _block(data, "city")
    return ForecastPayload(
        city=City(
            name=_string(city, "name"),
            country=_string(city, "country"),
            coord=parse_coordinates(city),
            timezone=_integer(city, "timezone"),
        ),
        samples=tuple(parse_forecast_sample(item) for item in _list(data, "list")),
    )
