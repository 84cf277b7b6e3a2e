"""Shared test fixtures."""

import json
from pathlib import Path

import pytest
import yaml

from weatherwatch.config.schema import AppConfig

TEST_BASE_URL = "https://test-openweather.example.com"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def bangalore_weather(fixtures_dir: Path) -> dict:
    with open(fixtures_dir / "openweather_bangalore.json") as f:
        return json.load(f)


@pytest.fixture
def london_weather(fixtures_dir: Path) -> dict:
    with open(fixtures_dir / "openweather_london.json") as f:
        return json.load(f)


@pytest.fixture
def api_key(monkeypatch) -> str:
    """Provide an API key through the environment."""
    monkeypatch.setenv("OPENWEATHER_API_KEY", "test-key-123")
    return "test-key-123"


@pytest.fixture
def live_config() -> AppConfig:
    """Live-mode config pointed at the mocked test host."""
    return AppConfig(
        openweather={"base_url": TEST_BASE_URL},
        pipeline={"mode": "live"},
    )


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "openweather": {"units": "imperial"},
        "pipeline": {"simulated_delay_seconds": 0},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
