"""Pytest configuration and fixtures for water body advisory tests."""

from datetime import datetime
from typing import Generator
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from aquamap.main import app
from aquamap.models.schemas import (
    Coordinate,
    WaterBody,
    WaterBodyType,
    WaterQuality,
    WeatherReading,
)
from aquamap.services.notifications import clear_notification_feed
from aquamap.services.weather import weather_cache
from helpers import FixedClock


@pytest.fixture(autouse=True)
def reset_state() -> Generator[None, None, None]:
    """Start every test with an empty cache and feed."""
    weather_cache.clear()
    clear_notification_feed()
    yield
    weather_cache.clear()
    clear_notification_feed()


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Create test client for FastAPI app."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def mock_settings() -> MagicMock:
    """Create mock settings object."""
    settings = MagicMock()
    settings.weather_api_key = "test_weather_key"
    settings.weather_api_url = "https://api.openweathermap.org/data/2.5/weather"
    settings.weather_timeout = 10.0
    settings.weather_cache_ttl = 300
    settings.map_center_latitude = 20.5937
    settings.map_center_longitude = 78.9629
    return settings


@pytest.fixture
def coordinate() -> Coordinate:
    return Coordinate(latitude=34.1688, longitude=74.8619)


@pytest.fixture
def rich_water_body(coordinate: Coordinate) -> WaterBody:
    """Good quality, deep, five species."""
    return WaterBody(
        name="Test Reservoir",
        type=WaterBodyType.LAKE,
        coordinate=coordinate,
        water_quality=WaterQuality.GOOD,
        depth_meters=12,
        fish_species=["Trout", "Carp", "Mahseer", "Rohu", "Catla"],
        best_fishing_window="6:00 AM - 9:00 AM",
    )


@pytest.fixture
def poor_water_body(coordinate: Coordinate) -> WaterBody:
    """Poor quality, no depth, no species."""
    return WaterBody(
        name="Dry Pond",
        type=WaterBodyType.LAKE,
        coordinate=coordinate,
        water_quality=WaterQuality.POOR,
    )


@pytest.fixture
def friendly_reading() -> WeatherReading:
    return WeatherReading(
        temperature_c=22,
        humidity_pct=60,
        wind_speed_kmh=10,
        visibility_km=10,
        condition_text="clear sky",
    )


@pytest.fixture
def cold_reading() -> WeatherReading:
    return WeatherReading(
        temperature_c=10,
        humidity_pct=60,
        wind_speed_kmh=10,
        visibility_km=8,
        condition_text="mist",
    )


@pytest.fixture
def sample_weather_api_response() -> dict:
    """Sample OpenWeatherMap API response."""
    return {
        "coord": {"lon": 74.8619, "lat": 34.1688},
        "weather": [
            {
                "id": 800,
                "main": "Clear",
                "description": "clear sky",
                "icon": "01d",
            }
        ],
        "base": "stations",
        "main": {
            "temp": 22.4,
            "feels_like": 22.0,
            "temp_min": 21.0,
            "temp_max": 23.0,
            "pressure": 1012,
            "humidity": 62,
        },
        "visibility": 9500,
        "wind": {"speed": 2.5, "deg": 220},
        "clouds": {"all": 0},
        "dt": 1717221600,
        "sys": {"country": "IN", "sunrise": 1717199000, "sunset": 1717251000},
        "timezone": 19800,
        "id": 1255634,
        "name": "Srinagar",
        "cod": 200,
    }


@pytest.fixture
def water_body_click_payload() -> dict:
    """Feature click payload as sent by the map surface."""
    return {
        "kind": "water_body",
        "coordinate": {"latitude": 34.1688, "longitude": 74.8619},
        "properties": {
            "name": "Dal Lake",
            "type": "lake",
            "waterQuality": "Good",
            "depth": "6 m",
            "fishTypes": ["Trout", "Carp", "Snow Trout", "Mirror Carp"],
            "bestFishingTime": "6:00 AM - 10:00 AM",
        },
    }
