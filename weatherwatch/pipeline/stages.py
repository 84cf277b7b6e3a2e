"""Stage provider contract and the simulated (offline) implementation."""

import asyncio
import logging
from typing import Protocol, runtime_checkable

from weatherwatch.config.defaults import (
    SIMULATED_CITY,
    SIMULATED_COORDINATES,
    SIMULATED_DESCRIPTION,
    SIMULATED_ICON,
    SIMULATED_TEMPERATURE_C,
)
from weatherwatch.errors import InvalidInputError
from weatherwatch.models.common import City, utc_now_iso
from weatherwatch.models.weather import Coordinates, WeatherReport

logger = logging.getLogger(__name__)


@runtime_checkable
class WeatherStages(Protocol):
    """The three ordered stages of a fetch pipeline.

    Each method is awaited only after the previous one returned.
    """

    async def resolve_city(self, seed: City | None = None) -> City: ...

    async def resolve_coordinates(self, city: City) -> Coordinates: ...

    async def resolve_conditions(self, coords: Coordinates) -> WeatherReport: ...


def require_city(city: City | None) -> City:
    """Return the stripped city name, or raise if it is empty."""
    if city is None or not str(city).strip():
        raise InvalidInputError("City not found")
    return str(city).strip()


class SimulatedStages:
    """Offline stages: each waits ``delay`` seconds and returns a canned value."""

    def __init__(self, delay: float = 1.0):
        self.delay = delay

    async def resolve_city(self, seed: City | None = None) -> City:
        await asyncio.sleep(self.delay)
        city = seed.strip() if seed and seed.strip() else SIMULATED_CITY
        logger.info("Fetched city: %s", city)
        return city

    async def resolve_coordinates(self, city: City) -> Coordinates:
        city = require_city(city)
        await asyncio.sleep(self.delay)
        logger.info("Got coordinates for %s", city)
        return SIMULATED_COORDINATES

    async def resolve_conditions(self, coords: Coordinates) -> WeatherReport:
        await asyncio.sleep(self.delay)
        logger.info(
            "Weather fetched for (%s, %s)", coords.latitude, coords.longitude
        )
        return WeatherReport(
            city_name=None,
            country=None,
            temperature=SIMULATED_TEMPERATURE_C,
            description=SIMULATED_DESCRIPTION,
            icon=SIMULATED_ICON,
            fetched_at=utc_now_iso(),
        )
