"""Reduce 3-hour forecast samples to one summary per calendar day - pure functions."""
from collections import OrderedDict
from datetime import date, datetime, timezone
from typing import Dict, List, Optional, Sequence

from openweather_schema import RawForecastSample
from text_format import title_case
from weather_data import DailyForecast


def sample_date(sample: RawForecastSample) -> date:
    """Calendar date of a sample in the provider's reporting zone (UTC)."""
    return datetime.fromtimestamp(sample.dt, tz=timezone.utc).date()


def group_by_date(
    samples: Sequence[RawForecastSample], max_days: Optional[int] = None
) -> "OrderedDict[date, List[RawForecastSample]]":
    """
    Group samples by calendar date in first-seen order.

    Args:
        samples: Forecast samples as delivered by the provider
        max_days: Stop opening new groups once this many dates were seen.
            Samples for dates already grouped are still collected.

    Returns:
        OrderedDict of date -> samples, in the order dates were first seen
    """
    groups: Dict[date, List[RawForecastSample]] = OrderedDict()
    for sample in samples:
        day = sample_date(sample)
        if day not in groups:
            if max_days is not None and len(groups) >= max_days:
                continue
            groups[day] = []
        groups[day].append(sample)
    return groups


def summarize_day(day: date, samples: Sequence[RawForecastSample]) -> DailyForecast:
    """
    Reduce one day's samples to a DailyForecast.

    Extremes come from temp_min/temp_max, the average from the instantaneous
    temp. The representative condition is the one of the middle sample
    (index count // 2); if that sample has no condition the fields stay empty.
    An empty group gives a summary carrying only the date.
    """
    if not samples:
        return DailyForecast(date=day)

    count = len(samples)
    min_temp = samples[0].main.temp_min
    max_temp = samples[0].main.temp_max
    total_temp = 0.0
    total_humidity = 0.0
    total_wind = 0.0
    precipitation = 0.0

    for sample in samples:
        min_temp = min(min_temp, sample.main.temp_min)
        max_temp = max(max_temp, sample.main.temp_max)
        total_temp += sample.main.temp
        total_humidity += sample.main.humidity
        total_wind += sample.wind.speed
        precipitation += sample.rain.three_hour + sample.snow.three_hour

    condition = description = icon = ""
    middle = samples[count // 2]
    if middle.weather:
        condition = middle.weather[0].main
        description = middle.weather[0].description
        icon = middle.weather[0].icon

    return DailyForecast(
        date=day,
        min_temp=min_temp,
        max_temp=max_temp,
        avg_temp=total_temp / count,
        condition=condition,
        description=title_case(description),
        icon=icon,
        humidity=int(total_humidity / count),
        wind_speed=total_wind / count,
        precipitation=precipitation,
    )


def aggregate_daily(samples: Sequence[RawForecastSample], max_days: int) -> List[DailyForecast]:
    """
    Turn a forecast feed into at most ``max_days`` daily summaries.

    Dates are picked in arrival order, then the summaries are returned
    sorted by date so a feed delivered out of order still reads
    chronologically.
    """
    groups = group_by_date(samples, max_days)
    summaries = [summarize_day(day, items) for day, items in groups.items()]
    summaries.sort(key=lambda summary: summary.date)
    return summaries
