"""Weather API integration and fishing advisory classification."""

import asyncio
import logging
import math
from typing import Awaitable, Callable

import httpx
from cachetools import TTLCache

from aquamap.config import get_settings
from aquamap.logging_config import get_logger, location_label
from aquamap.models.schemas import (
    AdvisoryVerdict,
    WeatherAdvisory,
    WeatherPanelState,
    WeatherPanelStatus,
    WeatherReading,
    WeatherResponse,
)

logger = logging.getLogger(__name__)

MS_TO_KMH = 3.6

FRIENDLY_MIN_TEMP_C = 15
FRIENDLY_MAX_TEMP_C = 30
FRIENDLY_MAX_WIND_KMH = 5 * MS_TO_KMH  # 5 m/s
FRIENDLY_MIN_HUMIDITY = 40

ADVICE_FRIENDLY = "Excellent fishing conditions! Perfect temperature and calm waters."
ADVICE_COLD = "Cold water - fish may be less active. Try deeper areas."
ADVICE_HOT = "Hot weather - fish early morning or evening for best results."
ADVICE_WINDY = "Windy conditions - fishing may be challenging from shore."
ADVICE_MODERATE = "Moderate conditions - adjust your fishing strategy accordingly."

UNAVAILABLE_MESSAGE = (
    "Weather data unavailable right now. "
    "Click the map again to retry."
)

# Cache weather data for 5 minutes to reduce API calls
weather_cache: TTLCache = TTLCache(maxsize=100, ttl=get_settings().weather_cache_ttl)

# Singleton HTTP client (initialized lazily)
_http_client: httpx.AsyncClient | None = None

WeatherFetcher = Callable[[float, float], Awaitable[WeatherResponse]]


async def get_http_client() -> httpx.AsyncClient:
    """Get or create the singleton HTTP client."""
    global _http_client
    if _http_client is None:
        _http_client = httpx.AsyncClient(timeout=get_settings().weather_timeout)
    return _http_client


async def close_http_client() -> None:
    """Close the HTTP client (call on app shutdown)."""
    global _http_client
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None


async def get_weather_by_coordinates(
    latitude: float,
    longitude: float,
) -> WeatherResponse:
    """
    Fetch current weather for given coordinates.

    A failed call, a non-200 status or a payload missing required fields
    all produce an unsuccessful response. No partial reading is returned.

    Args:
        latitude: Latitude of the clicked point.
        longitude: Longitude of the clicked point.

    Returns:
        WeatherResponse with a reading or an error message.
    """
    settings = get_settings()
    if not settings.weather_api_key:
        logger.warning("Weather API key not configured")
        return WeatherResponse(success=False, error_message=UNAVAILABLE_MESSAGE)

    location = location_label(latitude, longitude)
    log = get_logger(__name__, location=location)
    cache_key = f"coords:{location}"
    if cache_key in weather_cache:
        return weather_cache[cache_key]

    params = {
        "lat": latitude,
        "lon": longitude,
        "appid": settings.weather_api_key,
        "units": "metric",
    }

    try:
        client = await get_http_client()
        response = await client.get(settings.weather_api_url, params=params)

        if response.status_code != 200:
            log.warning("Weather provider returned status %s", response.status_code)
            return WeatherResponse(success=False, error_message=UNAVAILABLE_MESSAGE)

        reading = parse_weather_response(response.json())

    except httpx.TimeoutException:
        log.warning("Weather provider timed out")
        return WeatherResponse(
            success=False,
            error_message="The weather service is taking too long to respond. "
            "Please try again.",
        )
    except httpx.RequestError as e:
        log.warning("Weather provider request failed: %s", e)
        return WeatherResponse(success=False, error_message=UNAVAILABLE_MESSAGE)
    except (KeyError, IndexError, TypeError, ValueError) as e:
        log.error("Malformed weather payload: %s", e)
        return WeatherResponse(success=False, error_message=UNAVAILABLE_MESSAGE)

    result = WeatherResponse(success=True, data=reading)
    weather_cache[cache_key] = result
    return result


def parse_weather_response(data: dict) -> WeatherReading:
    """
    Parse an OpenWeatherMap response into a WeatherReading.

    Wind arrives in m/s and visibility in metres; both are converted
    without rounding.

    Args:
        data: Raw API response dictionary.

    Returns:
        WeatherReading in classifier units.
    """
    return WeatherReading(
        temperature_c=data["main"]["temp"],
        humidity_pct=data["main"]["humidity"],
        wind_speed_kmh=data["wind"]["speed"] * MS_TO_KMH,
        visibility_km=data.get("visibility", 0) / 1000,
        condition_text=data["weather"][0]["description"],
    )


def is_fishing_friendly(reading: WeatherReading) -> bool:
    """Check the fishing-friendly threshold rule on unrounded values."""
    return (
        FRIENDLY_MIN_TEMP_C <= reading.temperature_c <= FRIENDLY_MAX_TEMP_C
        and reading.wind_speed_kmh < FRIENDLY_MAX_WIND_KMH
        and reading.humidity_pct > FRIENDLY_MIN_HUMIDITY
    )


def classify(reading: WeatherReading) -> AdvisoryVerdict:
    """
    Derive the fishing verdict for a weather reading.

    Args:
        reading: Current conditions.

    Returns:
        AdvisoryVerdict; the first matching advice rule wins.
    """
    friendly = is_fishing_friendly(reading)

    if friendly:
        text = ADVICE_FRIENDLY
    elif reading.temperature_c < FRIENDLY_MIN_TEMP_C:
        text = ADVICE_COLD
    elif reading.temperature_c > FRIENDLY_MAX_TEMP_C:
        text = ADVICE_HOT
    elif reading.wind_speed_kmh >= FRIENDLY_MAX_WIND_KMH:
        text = ADVICE_WINDY
    else:
        text = ADVICE_MODERATE

    return AdvisoryVerdict(is_fishing_friendly=friendly, advice_text=text)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def build_advisory(reading: WeatherReading) -> WeatherAdvisory:
    """Combine rounded display values with the verdict."""
    verdict = classify(reading)
    return WeatherAdvisory(
        temperature=_round_half_up(reading.temperature_c),
        humidity=_round_half_up(reading.humidity_pct),
        wind_speed_kmh=_round_half_up(reading.wind_speed_kmh),
        visibility_km=_round_half_up(reading.visibility_km),
        description=reading.condition_text,
        is_fishing_friendly=verdict.is_fishing_friendly,
        fishing_advice=verdict.advice_text,
    )


async def get_weather_advisory(
    latitude: float,
    longitude: float,
    fetcher: WeatherFetcher | None = None,
) -> WeatherPanelState:
    """
    Fetch weather for a point and classify it in one step.

    Args:
        latitude: Latitude of the point.
        longitude: Longitude of the point.
        fetcher: Weather provider call (defaults to OpenWeatherMap).

    Returns:
        WeatherPanelState that is either loaded or unavailable.
    """
    fetch = fetcher or get_weather_by_coordinates
    response = await fetch(latitude, longitude)
    return _state_from_response(latitude, longitude, response)


def _state_from_response(
    latitude: float,
    longitude: float,
    response: WeatherResponse,
) -> WeatherPanelState:
    if not response.success or response.data is None:
        return WeatherPanelState(
            status=WeatherPanelStatus.UNAVAILABLE,
            latitude=latitude,
            longitude=longitude,
            error_message=response.error_message or UNAVAILABLE_MESSAGE,
        )
    return WeatherPanelState(
        status=WeatherPanelStatus.LOADED,
        latitude=latitude,
        longitude=longitude,
        advisory=build_advisory(response.data),
    )


class WeatherAdvisoryPanel:
    """
    Stateful weather panel driven by map clicks.

    Only the most recent query may update the state. Issuing a new query
    cancels the one in flight, and close() cancels it for teardown.
    """

    def __init__(
        self,
        fetcher: WeatherFetcher | None = None,
        on_change: Callable[[WeatherPanelState], None] | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._on_change = on_change
        self._sequence = 0
        self._task: asyncio.Future | None = None
        self._closed = False
        self.state = WeatherPanelState()

    @property
    def closed(self) -> bool:
        return self._closed

    def _set_state(self, state: WeatherPanelState) -> None:
        self.state = state
        if self._on_change is not None:
            self._on_change(state)

    async def query(self, latitude: float, longitude: float) -> WeatherPanelState:
        """
        Look up weather for a point, superseding any earlier query.

        Args:
            latitude: Latitude of the clicked point.
            longitude: Longitude of the clicked point.

        Returns:
            The panel state after this query settles. For a superseded
            query this is whatever state the newer query has produced.
        """
        if self._closed:
            return self.state

        self._sequence += 1
        sequence = self._sequence

        if self._task is not None and not self._task.done():
            self._task.cancel()

        self._set_state(
            WeatherPanelState(
                status=WeatherPanelStatus.LOADING,
                latitude=latitude,
                longitude=longitude,
            )
        )

        fetch = self._fetcher or get_weather_by_coordinates
        task = asyncio.ensure_future(fetch(latitude, longitude))
        self._task = task
        try:
            response = await task
        except asyncio.CancelledError:
            if sequence != self._sequence or self._closed:
                return self.state
            raise

        if sequence != self._sequence or self._closed:
            logger.debug("Ignoring stale weather response for %s,%s", latitude, longitude)
            return self.state

        self._set_state(_state_from_response(latitude, longitude, response))
        return self.state

    def close(self) -> None:
        """Cancel any in-flight request and stop accepting queries."""
        self._closed = True
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
