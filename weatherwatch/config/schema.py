"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum

from pydantic import BaseModel, Field


class PipelineMode(StrEnum):
    SIMULATED = "simulated"
    LIVE = "live"


class Units(StrEnum):
    STANDARD = "standard"
    METRIC = "metric"
    IMPERIAL = "imperial"


class OutputFormat(StrEnum):
    TEXT = "text"
    HTML = "html"
    JSON = "json"


class OpenWeatherConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = "https://api.openweathermap.org"
    icon_base_url: str = "https://openweathermap.org/img/wn"
    units: Units = Units.METRIC
    # None disables the HTTP timeout entirely
    timeout_seconds: float | None = Field(default=None, gt=0.0)


class PipelineConfig(BaseModel):
    model_config = {"extra": "forbid"}

    mode: PipelineMode = PipelineMode.SIMULATED
    default_city: str = Field(default="Bangalore", min_length=1)
    simulated_delay_seconds: float = Field(default=1.0, ge=0.0)


class OutputConfig(BaseModel):
    model_config = {"extra": "forbid"}

    format: OutputFormat = OutputFormat.TEXT


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    openweather: OpenWeatherConfig = OpenWeatherConfig()
    pipeline: PipelineConfig = PipelineConfig()
    output: OutputConfig = OutputConfig()
