"""Canned values returned by the simulated stages."""

from weatherwatch.models.weather import Coordinates

SIMULATED_CITY = "Bangalore"
SIMULATED_COORDINATES = Coordinates(latitude=12.97, longitude=77.59)
SIMULATED_TEMPERATURE_C = 28.0
SIMULATED_DESCRIPTION = "sunny"
SIMULATED_ICON = "02d"

API_KEY_ENV = "OPENWEATHER_API_KEY"
