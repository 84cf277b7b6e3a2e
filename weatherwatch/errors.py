"""Exception hierarchy for the fetch pipeline and its collaborators."""


class WeatherWatchError(Exception):
    """Base class for every error raised by weatherwatch."""


class InvalidInputError(WeatherWatchError, ValueError):
    """A stage received an empty or out-of-range input."""


class StageError(WeatherWatchError):
    """A pipeline stage could not produce its output.

    The originating transport/service failure is kept as ``__cause__``.
    """

    stage: str = ""


class CityResolutionError(StageError):
    stage = "city"


class CoordinateResolutionError(StageError):
    stage = "coordinates"


class WeatherResolutionError(StageError):
    stage = "conditions"


class PipelineFailure(WeatherWatchError):
    """Uniform failure raised when the pipeline hides which stage failed."""

    DEFAULT_MESSAGE = "Weather data not found"

    def __init__(self, message: str = DEFAULT_MESSAGE):
        super().__init__(message)
