# ABOUTME: Dependency container for the weather lookup core using Pydantic BaseModel.
# ABOUTME: Builds the httpx.AsyncClient that carries the OpenWeatherMap base URL, timeout and API key.

import httpx
from pydantic import BaseModel, ConfigDict

from weather_lookup import config


class WeatherDeps(BaseModel):
    """Dependencies shared by the store and the API client functions."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    http_client: httpx.AsyncClient


def create_http_client(
    api_key: str | None = None,
    base_url: str | None = None,
    timeout: float | None = None,
) -> httpx.AsyncClient:
    """Create an httpx client bound to the OpenWeatherMap API.

    The static API key travels as the ``appid`` query parameter on every request.
    No retry policy is applied: a failed call yields no data until the next fetch.
    """
    return httpx.AsyncClient(
        base_url=base_url or config.OPENWEATHER_BASE_URL,
        timeout=timeout if timeout is not None else config.HTTP_TIMEOUT_SECONDS,
        params={"appid": api_key if api_key is not None else config.OPENWEATHER_API_KEY},
    )


def create_deps(api_key: str | None = None) -> WeatherDeps:
    return WeatherDeps(http_client=create_http_client(api_key=api_key))
