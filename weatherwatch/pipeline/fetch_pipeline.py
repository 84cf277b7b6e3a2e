"""Sequential fetch pipeline: city -> coordinates -> weather."""

import logging

import httpx

from weatherwatch.config.schema import AppConfig, PipelineMode
from weatherwatch.errors import PipelineFailure, WeatherWatchError
from weatherwatch.ingest.openweather_client import OpenWeatherClient
from weatherwatch.ingest.weather_fetcher import OpenWeatherStages
from weatherwatch.models.common import City
from weatherwatch.models.weather import WeatherReport
from weatherwatch.pipeline.stages import SimulatedStages, WeatherStages

logger = logging.getLogger(__name__)


class SequentialFetchPipeline:
    """Runs the three stages strictly in order, stopping at the first failure.

    With ``collapse_errors`` every failure surfaces as a single
    ``PipelineFailure``; the original exception is kept as ``__cause__``.
    """

    def __init__(self, stages: WeatherStages, collapse_errors: bool = False):
        self.stages = stages
        self.collapse_errors = collapse_errors

    async def run(self, seed_city: City | None = None) -> WeatherReport:
        if not self.collapse_errors:
            return await self._run_stages(seed_city)
        try:
            return await self._run_stages(seed_city)
        except (WeatherWatchError, httpx.HTTPError) as e:
            logger.warning(
                "Pipeline failed at %s stage: %s", getattr(e, "stage", "") or "unknown", e
            )
            raise PipelineFailure() from e

    async def _run_stages(self, seed_city: City | None) -> WeatherReport:
        # 1. CITY
        city = await self.stages.resolve_city(seed_city)
        logger.info("Resolved city: %s", city)

        # 2. COORDINATES
        coords = await self.stages.resolve_coordinates(city)
        logger.info(
            "Resolved coordinates for %s: (%s, %s)",
            city, coords.latitude, coords.longitude,
        )

        # 3. CONDITIONS
        report = await self.stages.resolve_conditions(coords)
        logger.info(
            "Pipeline complete for %s: %.1f, %s",
            city, report.temperature, report.description or "n/a",
        )
        return report


def build_pipeline(
    config: AppConfig,
    mode: PipelineMode | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> SequentialFetchPipeline:
    """Wire a pipeline for the configured (or explicitly requested) mode.

    Live pipelines collapse errors; simulated ones propagate stage errors.
    """
    mode = mode or config.pipeline.mode
    if mode == PipelineMode.LIVE:
        ow = config.openweather
        client = OpenWeatherClient(
            base_url=ow.base_url,
            units=ow.units.value,
            timeout=ow.timeout_seconds,
            http_client=http_client,
        )
        return SequentialFetchPipeline(
            OpenWeatherStages(client), collapse_errors=True
        )
    return SequentialFetchPipeline(
        SimulatedStages(delay=config.pipeline.simulated_delay_seconds)
    )
