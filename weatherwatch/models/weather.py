"""Value types passed between pipeline stages."""

from dataclasses import dataclass, field
from typing import Any

from weatherwatch.errors import InvalidInputError


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise InvalidInputError(f"Latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise InvalidInputError(f"Longitude out of range: {self.longitude}")


@dataclass(frozen=True)
class WeatherReport:
    """Current conditions for one location, as handed to presentation."""

    city_name: str | None
    country: str | None
    temperature: float
    description: str = ""
    temp_min: float | None = None
    temp_max: float | None = None
    icon: str | None = None
    wind_speed: float | None = None
    sunrise: int | None = None  # UNIX seconds
    sunset: int | None = None  # UNIX seconds
    units: str = "metric"
    fetched_at: str = ""
    raw: dict[str, Any] = field(default_factory=dict, compare=False)
