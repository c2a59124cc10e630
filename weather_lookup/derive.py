# ABOUTME: Pure derivations from a WeatherSnapshot to display-ready structures.
# ABOUTME: Coordinate/time/temperature formatting, daily forecast grouping, AQI descriptors and chart series.

from collections import defaultdict
from collections.abc import Sequence
from datetime import date, datetime, timedelta, timezone

from weather_lookup import config
from weather_lookup.models import (
    AirQualityBlock,
    AirQualityComponent,
    AqiPoint,
    CurrentWeather,
    DayForecast,
    ForecastSample,
    GeoInfoBlock,
    HourlyIcon,
    WeatherInfoBlock,
    WeatherSnapshot,
    WidgetSummary,
)

COMPASS_POINTS = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")

AQI_DESCRIPTIONS = {
    1: "Good",
    2: "Fair",
    3: "Moderate",
    4: "Poor",
    5: "Very Poor",
}

# Display order of the pollutant grid
AIR_QUALITY_COMPONENTS = (
    ("NO", "no"),
    ("PM10", "pm10"),
    ("O3", "o3"),
    ("NH3", "nh3"),
    ("NO2", "no2"),
    ("PM2.5", "pm25"),
    ("CO", "co"),
    ("SO2", "so2"),
)

TODAY_LABEL = "Today"


# --- Formatting helpers ---


def _fixed_zone(offset_seconds: int) -> timezone:
    return timezone(timedelta(seconds=offset_seconds))


def local_datetime(timestamp: int, offset_seconds: int) -> datetime:
    """Unix seconds rendered at a fixed UTC offset."""
    return datetime.fromtimestamp(timestamp, tz=_fixed_zone(offset_seconds))


def format_coordinate(value: float, is_latitude: bool) -> str:
    """Decimal degrees to a truncated degrees/minutes/seconds string, e.g. ``53°18'24" N``."""
    if is_latitude:
        hemisphere = "N" if value >= 0 else "S"
    else:
        hemisphere = "E" if value >= 0 else "W"
    magnitude = abs(value)
    degrees = int(magnitude)
    minutes_exact = (magnitude - degrees) * 60.0
    minutes = int(minutes_exact)
    seconds = int((minutes_exact - minutes) * 60.0)
    return f"{degrees}°{minutes}'{seconds}\" {hemisphere}"


def time_string(timestamp: int, offset_seconds: int) -> str:
    return local_datetime(timestamp, offset_seconds).strftime("%H:%M")


def local_and_utc_times(timestamp: int, offset_seconds: int) -> tuple[str, str]:
    """``HH:MM`` at the location's offset, paired with the same instant in UTC."""
    return time_string(timestamp, offset_seconds), time_string(timestamp, 0)


def format_timezone_offset(offset_seconds: int) -> str:
    """Whole hours from UTC, truncated toward zero: 3600 -> ``+01H``, -18000 -> ``-05H``."""
    hours = int(offset_seconds / 3600)
    return f"{hours:+03d}H"


def cardinal_direction(degrees: int) -> str:
    """Compass point for a wind bearing in [0, 360)."""
    return COMPASS_POINTS[int((degrees + 22.5) / 45.0) % 8]


def format_temperature(value: float) -> str:
    return f"{value:.1f}°C"


def format_low_high(low: float, high: float) -> str:
    return f"(L: {format_temperature(low)} H: {format_temperature(high)})"


def _capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def _format_widget_temperature(value: float) -> str:
    return f"{value:.0f}°"


def aqi_description(index: int) -> str:
    return AQI_DESCRIPTIONS.get(index, "Unknown")


def _current_temperature(weather: CurrentWeather, from_min: bool | None) -> float:
    if from_min is None:
        from_min = config.CURRENT_TEMP_FROM_MIN
    return weather.main.temp_min if from_min else weather.main.temp


# --- Forecast grouping ---


def group_daily_forecast(
    samples: Sequence[ForecastSample],
    offset_seconds: int,
    now: datetime,
) -> list[DayForecast]:
    """Group forecast samples by calendar day at the location's UTC offset.

    Low and high scan every sample of the day. Leading and trailing partial days are
    kept as they are. The day matching ``now`` at the same offset is labelled "Today",
    every other day by its full weekday name.
    """
    zone = _fixed_zone(offset_seconds)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    today = now.astimezone(zone).date()

    by_day: dict[date, list[tuple[datetime, ForecastSample]]] = defaultdict(list)
    for sample in samples:
        local = datetime.fromtimestamp(sample.timestamp, tz=zone)
        by_day[local.date()].append((local, sample))

    days = []
    for day in sorted(by_day):
        entries = sorted(by_day[day], key=lambda entry: entry[0])
        low = min(sample.main.temp_min for _, sample in entries)
        high = max(sample.main.temp_max for _, sample in entries)
        days.append(
            DayForecast(
                date=day,
                label=TODAY_LABEL if day == today else day.strftime("%A"),
                low=low,
                high=high,
                low_high=format_low_high(low, high),
                hourly=tuple(
                    HourlyIcon(hour=local.strftime("%H"), icon=sample.icon, timestamp=sample.timestamp)
                    for local, sample in entries
                ),
            )
        )
    return days


# --- Snapshot views ---


def widget_summary(snapshot: WeatherSnapshot, current_temp_from_min: bool | None = None) -> WidgetSummary | None:
    weather = snapshot.current_weather
    if weather is None:
        return None
    name = snapshot.geo_location.name if snapshot.geo_location is not None else weather.name
    return WidgetSummary(
        name=name,
        current_temp=_format_widget_temperature(_current_temperature(weather, current_temp_from_min)),
        description=_capitalize_first(weather.description),
        low_high=(
            f"L: {_format_widget_temperature(weather.main.temp_min)} "
            f"H: {_format_widget_temperature(weather.main.temp_max)}"
        ),
    )


def geo_info(snapshot: WeatherSnapshot) -> GeoInfoBlock | None:
    """Coordinates, sunrise/sunset (local and UTC) and the UTC offset of the location."""
    weather = snapshot.current_weather
    coordinate = snapshot.coordinate or snapshot.geo_location
    if weather is None or coordinate is None:
        return None
    offset = weather.timezone_offset_seconds
    return GeoInfoBlock(
        latitude=format_coordinate(coordinate.lat, is_latitude=True),
        longitude=format_coordinate(coordinate.lon, is_latitude=False),
        sunrise=local_and_utc_times(weather.sys.sunrise, offset),
        sunset=local_and_utc_times(weather.sys.sunset, offset),
        timezone_offset=format_timezone_offset(offset),
    )


def weather_info(snapshot: WeatherSnapshot, current_temp_from_min: bool | None = None) -> WeatherInfoBlock | None:
    weather = snapshot.current_weather
    if weather is None:
        return None
    main = weather.main
    # m/s to km/h
    wind_kmh = weather.wind.speed * 3.6
    return WeatherInfoBlock(
        description=weather.description,
        current_temp=format_temperature(_current_temperature(weather, current_temp_from_min)),
        low_high=format_low_high(main.temp_min, main.temp_max),
        feels_like=format_temperature(main.feels_like),
        clouds=f"{weather.clouds.all}% coverage",
        wind=f"{wind_kmh:.1f} km/h, dir: {weather.wind.deg} {cardinal_direction(weather.wind.deg)}",
        humidity=f"{main.humidity}%",
        pressure=f"{main.pressure} hPa",
    )


def daily_forecast(snapshot: WeatherSnapshot, now: datetime | None = None) -> list[DayForecast] | None:
    """Grouped forecast using the current weather's UTC offset; None if either is missing."""
    if snapshot.forecast is None or snapshot.current_weather is None:
        return None
    if now is None:
        now = datetime.now(timezone.utc)
    return group_daily_forecast(snapshot.forecast, snapshot.current_weather.timezone_offset_seconds, now)


def air_quality_info(snapshot: WeatherSnapshot) -> AirQualityBlock | None:
    """Current AQI (first forecast sample) with its pollutant grid."""
    if not snapshot.air_quality:
        return None
    current = snapshot.air_quality[0]
    return AirQualityBlock(
        aqi_index=current.aqi_index,
        description=aqi_description(current.aqi_index),
        components=tuple(
            AirQualityComponent(label=label, value=getattr(current.components, field))
            for label, field in AIR_QUALITY_COMPONENTS
        ),
    )


def aqi_forecast_series(snapshot: WeatherSnapshot) -> list[AqiPoint] | None:
    """Time/AQI pairs for the air-pollution forecast chart, oldest first."""
    if snapshot.air_quality is None:
        return None
    return [
        AqiPoint(time=datetime.fromtimestamp(sample.timestamp, tz=timezone.utc), aqi_index=sample.aqi_index)
        for sample in sorted(snapshot.air_quality, key=lambda sample: sample.timestamp)
    ]
