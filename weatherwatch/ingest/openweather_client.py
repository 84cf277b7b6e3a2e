"""OpenWeather current-conditions API client."""

import logging
import os

import httpx

from weatherwatch.config.defaults import API_KEY_ENV
from weatherwatch.errors import WeatherWatchError

logger = logging.getLogger(__name__)

OPENWEATHER_BASE_URL = "https://api.openweathermap.org"
CURRENT_WEATHER_PATH = "/data/2.5/weather"


class OpenWeatherClientError(WeatherWatchError):
    """Raised when the OpenWeather API call fails for any reason."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class OpenWeatherClient:
    """Thin async wrapper around the OpenWeather 2.5 weather endpoint.

    Both lookups (by city name and by coordinates) hit the same endpoint with
    different query parameters. Pass ``http_client`` to share a connection
    pool (its own timeout then applies); otherwise a short-lived
    ``httpx.AsyncClient`` is opened per request.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = OPENWEATHER_BASE_URL,
        units: str = "metric",
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key or os.environ.get(API_KEY_ENV, "")
        if not self.api_key:
            raise OpenWeatherClientError(f"{API_KEY_ENV} not set")
        self.base_url = base_url.rstrip("/")
        self.units = units
        self.timeout = timeout
        self._http = http_client

    async def current_by_city(self, city: str) -> dict:
        """Current conditions for a city name (``q=`` lookup)."""
        return await self._get(CURRENT_WEATHER_PATH, {"q": city})

    async def conditions_by_coordinates(self, lat: float, lon: float) -> dict:
        """Current conditions for a latitude/longitude pair."""
        return await self._get(CURRENT_WEATHER_PATH, {"lat": lat, "lon": lon})

    async def _get(self, endpoint: str, params: dict) -> dict:
        url = f"{self.base_url}{endpoint}"
        query = {**params, "appid": self.api_key, "units": self.units}
        try:
            if self._http is not None:
                resp = await self._http.get(url, params=query)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    resp = await client.get(url, params=query)
        except httpx.RequestError as e:
            logger.error("OpenWeather request failed: GET %s -> %s", endpoint, e)
            raise OpenWeatherClientError(f"Request failed: {e}") from e

        if not resp.is_success:
            logger.error(
                "OpenWeather API %d: GET %s -> %s",
                resp.status_code, endpoint, resp.text[:200],
            )
            raise OpenWeatherClientError(
                f"HTTP {resp.status_code}", resp.status_code
            )
        try:
            data = resp.json()
        except ValueError as e:
            logger.error("OpenWeather returned non-JSON body for GET %s", endpoint)
            raise OpenWeatherClientError(f"Malformed response: {e}") from e
        if not isinstance(data, dict):
            raise OpenWeatherClientError("Malformed response: expected a JSON object")
        return data
