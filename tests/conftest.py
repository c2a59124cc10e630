# ABOUTME: Shared test fixtures for the weather lookup test suite.
# ABOUTME: Provides OpenWeatherMap payload builders and a path-routing mock HTTP client.

from unittest.mock import AsyncMock

import httpx
import pytest

# 2023-11-14 00:00:00 UTC (a Tuesday)
DAY_START = 1699920000


def _geo_payload(name="Dublin", lat=53.3498, lon=-6.2603, country="IE"):
    return [
        {
            "name": name,
            "local_names": {"en": name, "ga": "Baile Átha Cliath"},
            "lat": lat,
            "lon": lon,
            "country": country,
            "state": "Leinster",
        }
    ]


def _weather_payload(name="Dublin", timezone=0, temp=11.3, temp_min=10.1, temp_max=12.6):
    return {
        "coord": {"lon": -6.2603, "lat": 53.3498},
        "weather": [{"id": 803, "main": "Clouds", "description": "broken clouds", "icon": "04d"}],
        "base": "stations",
        "main": {
            "temp": temp,
            "feels_like": 10.4,
            "temp_min": temp_min,
            "temp_max": temp_max,
            "pressure": 1012,
            "humidity": 81,
        },
        "visibility": 10000,
        "wind": {"speed": 5.1, "deg": 240, "gust": 9.3},
        "clouds": {"all": 75},
        "dt": DAY_START + 12 * 3600,
        "sys": {"type": 2, "id": 2037117, "country": "IE", "sunrise": DAY_START + 27000, "sunset": DAY_START + 58800},
        "timezone": timezone,
        "id": 2964574,
        "name": name,
        "cod": 200,
    }


def _forecast_item(dt, temp_min=8.0, temp_max=12.0, icon="04d"):
    return {
        "dt": dt,
        "main": {
            "temp": (temp_min + temp_max) / 2,
            "feels_like": temp_min,
            "temp_min": temp_min,
            "temp_max": temp_max,
            "pressure": 1012,
            "humidity": 80,
        },
        "weather": [{"id": 500, "main": "Rain", "description": "light rain", "icon": icon}],
        "clouds": {"all": 40},
        "wind": {"speed": 3.2, "deg": 200},
        "dt_txt": "",
    }


def _forecast_payload(items=None):
    if items is None:
        items = [_forecast_item(DAY_START + i * 3 * 3600) for i in range(40)]
    return {"cod": "200", "message": 0, "cnt": len(items), "list": items, "city": {"name": "Dublin", "timezone": 0}}


def _air_item(dt, aqi=2):
    return {
        "main": {"aqi": aqi},
        "components": {
            "co": 201.94,
            "no": 0.02,
            "no2": 0.77,
            "o3": 68.66,
            "so2": 0.64,
            "pm2_5": 0.5,
            "pm10": 0.54,
            "nh3": 0.12,
        },
        "dt": dt,
    }


def _air_payload(items=None):
    if items is None:
        items = [_air_item(DAY_START + i * 3600, aqi=2 + (i % 2)) for i in range(4)]
    return {"coord": {"lon": -6.2603, "lat": 53.3498}, "list": items}


def json_response(body, status_code=200) -> httpx.Response:
    return httpx.Response(status_code=status_code, json=body, request=httpx.Request("GET", "https://test"))


def _routing_client(routes: dict) -> httpx.AsyncClient:
    """Mock AsyncClient answering by request path.

    A route may be a JSON body, a ``(status, body)`` tuple, an exception to raise, or an
    async callable taking the request params and returning an ``httpx.Response``.
    """
    mock = AsyncMock(spec=httpx.AsyncClient)

    async def fake_get(url, params=None, **kwargs):
        handler = routes[url]
        if isinstance(handler, Exception):
            raise handler
        if callable(handler):
            return await handler(params or {})
        if isinstance(handler, tuple):
            return json_response(handler[1], handler[0])
        return json_response(handler)

    mock.get.side_effect = fake_get
    return mock


@pytest.fixture
def geo_payload():
    return _geo_payload


@pytest.fixture
def weather_payload():
    return _weather_payload


@pytest.fixture
def forecast_item():
    return _forecast_item


@pytest.fixture
def forecast_payload():
    return _forecast_payload


@pytest.fixture
def air_item():
    return _air_item


@pytest.fixture
def air_payload():
    return _air_payload


@pytest.fixture
def routing_client():
    return _routing_client


@pytest.fixture
def default_routes():
    """Routes for a fully successful Dublin lookup."""
    return {
        "geo/1.0/direct": _geo_payload(),
        "data/2.5/weather": _weather_payload(),
        "data/2.5/forecast": _forecast_payload(),
        "data/2.5/air_pollution/forecast": _air_payload(),
    }
