"""Tests for the OpenWeather API client with mocked httpx."""

import asyncio

import httpx
import pytest
import respx

from weatherwatch.ingest.openweather_client import (
    OpenWeatherClient,
    OpenWeatherClientError,
)

BASE = "https://test-openweather.example.com"
WEATHER_URL = f"{BASE}/data/2.5/weather"


@pytest.fixture
def client() -> OpenWeatherClient:
    return OpenWeatherClient(api_key="test-key-123", base_url=BASE)


class TestCurrentByCity:
    @respx.mock
    def test_success(self, client: OpenWeatherClient, bangalore_weather: dict):
        route = respx.get(WEATHER_URL).mock(
            return_value=httpx.Response(200, json=bangalore_weather)
        )
        result = asyncio.run(client.current_by_city("Bangalore"))

        assert result["coord"] == {"lon": 77.59, "lat": 12.97}
        params = route.calls[0].request.url.params
        assert params["q"] == "Bangalore"
        assert params["appid"] == "test-key-123"
        assert params["units"] == "metric"

    @respx.mock
    def test_non_2xx_raises_regardless_of_body(self, client: OpenWeatherClient):
        respx.get(WEATHER_URL).mock(
            return_value=httpx.Response(404, json={"cod": "404", "message": "city not found"})
        )
        with pytest.raises(OpenWeatherClientError, match="404") as exc_info:
            asyncio.run(client.current_by_city("Atlantis"))
        assert exc_info.value.status_code == 404

    @respx.mock
    def test_redirect_is_failure(self, client: OpenWeatherClient):
        respx.get(WEATHER_URL).mock(
            return_value=httpx.Response(301, headers={"Location": "https://elsewhere"})
        )
        with pytest.raises(OpenWeatherClientError, match="301"):
            asyncio.run(client.current_by_city("Bangalore"))

    @respx.mock
    def test_transport_error_wrapped(self, client: OpenWeatherClient):
        respx.get(WEATHER_URL).mock(side_effect=httpx.ConnectError("boom"))
        with pytest.raises(OpenWeatherClientError, match="Request failed") as exc_info:
            asyncio.run(client.current_by_city("Bangalore"))
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert exc_info.value.status_code is None

    @respx.mock
    def test_malformed_json(self, client: OpenWeatherClient):
        respx.get(WEATHER_URL).mock(
            return_value=httpx.Response(200, content=b"<html>not json</html>")
        )
        with pytest.raises(OpenWeatherClientError, match="Malformed"):
            asyncio.run(client.current_by_city("Bangalore"))

    @respx.mock
    def test_non_object_json(self, client: OpenWeatherClient):
        respx.get(WEATHER_URL).mock(return_value=httpx.Response(200, json=[1, 2]))
        with pytest.raises(OpenWeatherClientError, match="JSON object"):
            asyncio.run(client.current_by_city("Bangalore"))


class TestConditionsByCoordinates:
    @respx.mock
    def test_success(self, client: OpenWeatherClient, bangalore_weather: dict):
        route = respx.get(WEATHER_URL).mock(
            return_value=httpx.Response(200, json=bangalore_weather)
        )
        result = asyncio.run(client.conditions_by_coordinates(12.97, 77.59))

        assert result["name"] == "Bengaluru"
        params = route.calls[0].request.url.params
        assert params["lat"] == "12.97"
        assert params["lon"] == "77.59"
        assert "q" not in params

    @respx.mock
    def test_injected_http_client(self, bangalore_weather: dict):
        route = respx.get(WEATHER_URL).mock(
            return_value=httpx.Response(200, json=bangalore_weather)
        )

        async def _go() -> dict:
            async with httpx.AsyncClient() as http:
                ow = OpenWeatherClient(
                    api_key="k", base_url=BASE, units="imperial", http_client=http
                )
                return await ow.conditions_by_coordinates(1.0, 2.0)

        asyncio.run(_go())
        assert route.calls[0].request.url.params["units"] == "imperial"


class TestApiKey:
    def test_from_env(self, api_key: str):
        assert OpenWeatherClient().api_key == api_key

    def test_no_api_key_raises(self, monkeypatch):
        monkeypatch.delenv("OPENWEATHER_API_KEY", raising=False)
        with pytest.raises(OpenWeatherClientError, match="not set"):
            OpenWeatherClient(api_key="")

    @respx.mock
    def test_api_key_not_logged(self, client: OpenWeatherClient, caplog):
        respx.get(WEATHER_URL).mock(return_value=httpx.Response(500, text="oops"))
        with pytest.raises(OpenWeatherClientError):
            asyncio.run(client.current_by_city("Bangalore"))
        assert "test-key-123" not in caplog.text
