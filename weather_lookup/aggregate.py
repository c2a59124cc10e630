# ABOUTME: Single-writer store holding the latest weather snapshot for one location query.
# ABOUTME: Fetches by place name or coordinate and discards results of superseded fetches.

import asyncio
import logging

from weather_lookup.deps import WeatherDeps
from weather_lookup.models import Coordinate, GeoLocation, WeatherSnapshot
from weather_lookup.weather_service import (
    geocode,
    get_air_quality_forecast,
    get_current_weather,
    get_forecast,
)

logger = logging.getLogger(__name__)

EMPTY_SNAPSHOT = WeatherSnapshot()


class WeatherStore:
    """Owns the current WeatherSnapshot and replaces it atomically on every fetch.

    Each fetch takes a new generation number and publishes an empty snapshot before
    issuing requests. Results are committed only while that generation is still the
    latest one, so a slow fetch can never overwrite a newer query's data.
    """

    def __init__(self, deps: WeatherDeps):
        self.http_client = deps.http_client
        self._snapshot = EMPTY_SNAPSHOT
        self._generation = 0

    @property
    def snapshot(self) -> WeatherSnapshot:
        return self._snapshot

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def display_name(self) -> str | None:
        """Name for the search box: the geocoded match, else the weather station's name."""
        snapshot = self._snapshot
        if snapshot.geo_location is not None:
            return snapshot.geo_location.name
        if snapshot.current_weather is not None and snapshot.current_weather.name:
            return snapshot.current_weather.name
        return None

    def _begin(self) -> int:
        self._generation += 1
        self._snapshot = EMPTY_SNAPSHOT
        return self._generation

    def _is_current(self, generation: int) -> bool:
        if generation != self._generation:
            logger.debug("Discarding results of fetch %d, superseded by %d", generation, self._generation)
            return False
        return True

    def _commit(self, generation: int, snapshot: WeatherSnapshot) -> bool:
        if not self._is_current(generation):
            return False
        self._snapshot = snapshot
        return True

    async def fetch_by_name(self, query: str) -> bool:
        """Geocode ``query`` and fetch weather for the first match.

        Returns True when the fetch was committed (including the no-match case,
        which leaves the snapshot empty), False when it was superseded.
        """
        generation = self._begin()
        matches = await geocode(self.http_client, query, limit=1)
        if not self._is_current(generation):
            return False
        if not matches:
            logger.info("No location found for %r", query)
            return True

        match = matches[0]
        current, forecast, air_quality = await self._fetch_location(match.lat, match.lon)
        return self._commit(
            generation,
            WeatherSnapshot(
                coordinate=Coordinate(lat=match.lat, lon=match.lon),
                geo_location=match,
                current_weather=current,
                forecast=forecast,
                air_quality=air_quality,
            ),
        )

    async def fetch_by_coordinate(self, lat: float, lon: float) -> bool:
        """Fetch weather at a coordinate, then resolve a display name from the weather result."""
        generation = self._begin()
        current, forecast, air_quality = await self._fetch_location(lat, lon)
        if not self._is_current(generation):
            return False

        geo_location: GeoLocation | None = None
        if current is not None and current.name:
            matches = await geocode(self.http_client, current.name, limit=1)
            if matches:
                geo_location = matches[0]

        return self._commit(
            generation,
            WeatherSnapshot(
                coordinate=Coordinate(lat=lat, lon=lon),
                geo_location=geo_location,
                current_weather=current,
                forecast=forecast,
                air_quality=air_quality,
            ),
        )

    async def _fetch_location(self, lat: float, lon: float):
        logger.info("Fetching weather for lat=%s, lon=%s", lat, lon)
        return await asyncio.gather(
            get_current_weather(self.http_client, lat, lon),
            get_forecast(self.http_client, lat, lon),
            get_air_quality_forecast(self.http_client, lat, lon),
        )

    def clear(self) -> None:
        """Drop the current snapshot and invalidate any fetch still in flight."""
        self._begin()
