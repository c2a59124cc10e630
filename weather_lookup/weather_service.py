# ABOUTME: Service layer for OpenWeatherMap API calls and response decoding.
# ABOUTME: Geocoding, current weather, 5-day forecast and air-quality forecast; failures become None.

import logging
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from weather_lookup.models import AirQualitySample, CurrentWeather, ForecastSample, GeoLocation

logger = logging.getLogger(__name__)

GEOCODING_PATH = "geo/1.0/direct"
WEATHER_PATH = "data/2.5/weather"
FORECAST_PATH = "data/2.5/forecast"
AIR_POLLUTION_PATH = "data/2.5/air_pollution/forecast"

UNITS = "metric"

_geo_locations = TypeAdapter(list[GeoLocation])
_forecast_samples = TypeAdapter(tuple[ForecastSample, ...])
_air_quality_samples = TypeAdapter(tuple[AirQualitySample, ...])


async def _fetch_json(client: httpx.AsyncClient, path: str, params: dict[str, Any]) -> Any | None:
    """GET ``path`` and return the decoded JSON body, or None on any transport or status failure."""
    try:
        resp = await client.get(path, params=params)
        resp.raise_for_status()
        return resp.json()
    except httpx.HTTPError as e:
        logger.warning("Request to %s failed: %s", path, e)
    except ValueError as e:
        logger.warning("Response from %s is not valid JSON: %s", path, e)
    return None


def _decode(path: str, decoder, payload: Any):
    """Validate ``payload`` with ``decoder``, logging and returning None on schema mismatch."""
    try:
        return decoder(payload)
    except ValidationError as e:
        logger.warning("Unexpected payload from %s: %s", path, e)
        return None


async def geocode(client: httpx.AsyncClient, query: str, limit: int = 1) -> list[GeoLocation] | None:
    """Resolve a free-text place name to up to ``limit`` matches.

    An empty list means the query matched nothing; None means the call itself failed.
    """
    data = await _fetch_json(client, GEOCODING_PATH, {"q": query, "limit": limit})
    if data is None:
        return None
    return _decode(GEOCODING_PATH, _geo_locations.validate_python, data)


async def get_current_weather(client: httpx.AsyncClient, lat: float, lon: float) -> CurrentWeather | None:
    """Fetch current conditions in metric units."""
    data = await _fetch_json(client, WEATHER_PATH, {"lat": lat, "lon": lon, "units": UNITS})
    if data is None:
        return None
    return _decode(WEATHER_PATH, CurrentWeather.model_validate, data)


async def get_forecast(client: httpx.AsyncClient, lat: float, lon: float) -> tuple[ForecastSample, ...] | None:
    """Fetch the 5-day / 3-hour forecast in metric units."""
    data = await _fetch_json(client, FORECAST_PATH, {"lat": lat, "lon": lon, "units": UNITS})
    if data is None:
        return None
    return _decode(FORECAST_PATH, _forecast_samples.validate_python, _unwrap_list(data))


async def get_air_quality_forecast(
    client: httpx.AsyncClient, lat: float, lon: float
) -> tuple[AirQualitySample, ...] | None:
    """Fetch the hourly air-pollution forecast, unwrapped from its ``list`` envelope."""
    data = await _fetch_json(client, AIR_POLLUTION_PATH, {"lat": lat, "lon": lon})
    if data is None:
        return None
    return _decode(AIR_POLLUTION_PATH, _air_quality_samples.validate_python, _unwrap_list(data))


def _unwrap_list(data: Any) -> Any:
    """Return the ``list`` member of an envelope; anything else is passed through for validation to reject."""
    if isinstance(data, dict):
        return data.get("list", data)
    return data
