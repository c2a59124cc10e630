# ABOUTME: Location session that turns search submissions and coordinate changes into store fetches.
# ABOUTME: Queues requests, cancels the superseded fetch and refreshes the search text afterwards.

import asyncio
import contextlib
import logging

from weather_lookup.aggregate import WeatherStore
from weather_lookup.models import Coordinate, Record

logger = logging.getLogger(__name__)


class SearchRequest(Record):
    query: str


class CoordinateRequest(Record):
    lat: float
    lon: float


class WeatherSession:
    """Owns the UI-facing triggers and serializes fetches through one WeatherStore.

    ``search_text`` and ``coordinate`` are written by the presentation layer. Changes are
    pushed as requests onto a queue consumed by :meth:`run`; each dispatched request
    cancels the fetch still in flight, and the store's generation check discards
    anything that slips through.
    """

    def __init__(self, store: WeatherStore):
        self.store = store
        self.search_text = ""
        self.coordinate: Coordinate | None = None
        self.location_authorized = False
        self._requests: asyncio.Queue[SearchRequest | CoordinateRequest] = asyncio.Queue()
        self._active: asyncio.Task | None = None

    # --- Triggers ---

    def submit_search(self, text: str | None = None) -> bool:
        if text is not None:
            self.search_text = text
        query = self.search_text.strip()
        if not query:
            return False
        self._requests.put_nowait(SearchRequest(query=query))
        return True

    def move_pin(self, lat: float, lon: float) -> None:
        self.coordinate = Coordinate(lat=lat, lon=lon)
        self._requests.put_nowait(CoordinateRequest(lat=lat, lon=lon))

    def device_location_changed(self, lat: float, lon: float) -> bool:
        """Geolocation update; only acted on once location permission was granted."""
        if not self.location_authorized:
            logger.debug("Ignoring device location update without permission")
            return False
        self.move_pin(lat, lon)
        return True

    def set_location_authorized(self, authorized: bool) -> None:
        self.location_authorized = authorized

    # --- Dispatch ---

    async def run(self) -> None:
        """Consume requests until cancelled."""
        try:
            while True:
                request = await self._requests.get()
                try:
                    self._dispatch(request)
                finally:
                    self._requests.task_done()
        finally:
            if self._active is not None:
                self._active.cancel()

    async def join(self) -> None:
        """Wait until every queued request was dispatched and the latest fetch finished."""
        await self._requests.join()
        if self._active is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await self._active

    def _dispatch(self, request: SearchRequest | CoordinateRequest) -> asyncio.Task:
        if self._active is not None and not self._active.done():
            self._active.cancel()
        self._active = asyncio.create_task(self._fetch(request))
        return self._active

    async def _fetch(self, request: SearchRequest | CoordinateRequest) -> None:
        if isinstance(request, SearchRequest):
            committed = await self.store.fetch_by_name(request.query)
        else:
            committed = await self.store.fetch_by_coordinate(request.lat, request.lon)
        if not committed:
            return

        snapshot = self.store.snapshot
        if snapshot.coordinate is not None:
            self.coordinate = snapshot.coordinate
        name = self.store.display_name
        if name:
            self.search_text = name
