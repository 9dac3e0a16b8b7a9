"""Map OpenWeather payloads onto the provider-agnostic weather model."""
from datetime import datetime, timezone
from typing import Any, List, Tuple

from forecast_aggregator import aggregate_daily
from openweather_schema import parse_current_payload, parse_forecast_payload
from text_format import title_case
from weather_data import CurrentWeather, DailyForecast, Location


def normalize_current(raw: Any) -> Tuple[Location, CurrentWeather]:
    """
    Map a current weather payload to (Location, CurrentWeather).

    Condition, description and icon come from the first entry of the
    'weather' list and stay empty when the list is empty.

    Raises:
        MalformedResponseError: If the payload does not match the schema
    """
    payload = parse_current_payload(raw)

    condition = description = icon = ""
    if payload.weather:
        first = payload.weather[0]
        condition, description, icon = first.main, first.description, first.icon

    location = Location(
        name=payload.name,
        country=payload.country,
        latitude=payload.coord.lat,
        longitude=payload.coord.lon,
        timezone_offset=payload.timezone,
    )
    current = CurrentWeather(
        temperature=payload.main.temp,
        feels_like=payload.main.feels_like,
        humidity=payload.main.humidity,
        pressure=payload.main.pressure,
        wind_speed=payload.wind.speed,
        wind_direction=payload.wind.deg,
        wind_gust=payload.wind.gust,
        condition=condition,
        description=title_case(description),
        icon=icon,
        cloud_cover=payload.clouds,
        visibility=payload.visibility,
        last_updated=datetime.fromtimestamp(payload.dt, tz=timezone.utc),
    )
    return location, current


def normalize_forecast(raw: Any, max_days: int) -> Tuple[Location, List[DailyForecast]]:
    """
    Map a 5 day / 3 hour forecast payload to (Location, daily summaries).

    Raises:
        MalformedResponseError: If the payload does not match the schema
    """
    payload = parse_forecast_payload(raw)
    city = payload.city
    location = Location(
        name=city.name,
        country=city.country,
        latitude=city.coord.lat,
        longitude=city.coord.lon,
        timezone_offset=city.timezone,
    )
    return location, aggregate_daily(payload.samples, max_days)
