"""Live stages: resolve a city to coordinates and current conditions via OpenWeather."""

import logging
import math

from weatherwatch.errors import (
    CityResolutionError,
    CoordinateResolutionError,
    InvalidInputError,
    WeatherResolutionError,
)
from weatherwatch.ingest.openweather_client import (
    OpenWeatherClient,
    OpenWeatherClientError,
)
from weatherwatch.models.common import City, utc_now_iso
from weatherwatch.models.weather import Coordinates, WeatherReport
from weatherwatch.pipeline.stages import require_city

logger = logging.getLogger(__name__)


class OpenWeatherStages:
    """Stage provider backed by two OpenWeather calls.

    The city is caller-supplied; the second call depends on the
    coordinates embedded in the first response.
    """

    def __init__(self, client: OpenWeatherClient):
        self.client = client

    async def resolve_city(self, seed: City | None = None) -> City:
        if seed is None or not seed.strip():
            raise CityResolutionError("No city supplied")
        city = seed.strip()
        logger.info("Using city: %s", city)
        return city

    async def resolve_coordinates(self, city: City) -> Coordinates:
        city = require_city(city)
        try:
            raw = await self.client.current_by_city(city)
            coords = _extract_coordinates(raw)
        except (OpenWeatherClientError, ValueError) as e:
            raise CoordinateResolutionError(
                f"Could not resolve coordinates for {city}"
            ) from e
        logger.info(
            "Got coordinates for %s: (%s, %s)",
            city, coords.latitude, coords.longitude,
        )
        return coords

    async def resolve_conditions(self, coords: Coordinates) -> WeatherReport:
        try:
            raw = await self.client.conditions_by_coordinates(
                coords.latitude, coords.longitude
            )
            report = _extract_report(raw, self.client.units)
        except (OpenWeatherClientError, ValueError) as e:
            raise WeatherResolutionError(
                f"Could not fetch weather for ({coords.latitude}, {coords.longitude})"
            ) from e
        logger.info(
            "Weather fetched for (%s, %s)", coords.latitude, coords.longitude
        )
        return report


def _extract_coordinates(raw: dict) -> Coordinates:
    """Read ``coord.lat``/``coord.lon`` from a current-weather response."""
    coord = raw.get("coord")
    if not isinstance(coord, dict):
        raise ValueError("Response has no coord block")
    try:
        return Coordinates(
            latitude=float(coord["lat"]), longitude=float(coord["lon"])
        )
    except InvalidInputError:
        raise
    except (KeyError, TypeError, ValueError, OverflowError) as e:
        raise ValueError(f"Malformed coord block: {coord!r}") from e


def _extract_report(raw: dict, units: str = "metric") -> WeatherReport:
    """Build a WeatherReport from a current-weather response."""
    main = raw.get("main")
    if not isinstance(main, dict) or main.get("temp") is None:
        raise ValueError("Response has no main.temp")
    sys_block = _block(raw, "sys")
    wind = _block(raw, "wind")
    weather = raw.get("weather")
    first = weather[0] if isinstance(weather, list) and weather else {}
    if not isinstance(first, dict):
        first = {}

    try:
        return WeatherReport(
            city_name=_opt_str(raw.get("name")),
            country=_opt_str(sys_block.get("country")),
            temperature=_finite(main["temp"]),
            description=str(first.get("description") or ""),
            temp_min=_opt_float(main.get("temp_min")),
            temp_max=_opt_float(main.get("temp_max")),
            icon=_opt_str(first.get("icon")),
            wind_speed=_opt_float(wind.get("speed")),
            sunrise=_opt_int(sys_block.get("sunrise")),
            sunset=_opt_int(sys_block.get("sunset")),
            units=units,
            fetched_at=utc_now_iso(),
            raw=raw,
        )
    except (TypeError, ValueError, OverflowError) as e:
        raise ValueError(f"Malformed weather response: {e}") from e


def _block(raw: dict, key: str) -> dict:
    value = raw.get(key)
    return value if isinstance(value, dict) else {}


def _finite(value) -> float:
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"Non-finite number: {value!r}")
    return number


def _opt_float(value) -> float | None:
    return None if value is None else _finite(value)


def _opt_int(value) -> int | None:
    return None if value is None else int(_finite(value))


def _opt_str(value) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"Expected a string, got {value!r}")
    return value
