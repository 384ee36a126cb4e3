"""Viewport control: turns a selected location into a camera animation."""

import logging
from typing import Protocol

from aquamap.config import get_settings
from aquamap.models.map_schemas import CameraRequest
from aquamap.models.schemas import Coordinate, SearchResult

logger = logging.getLogger(__name__)


class MapSurface(Protocol):
    """The part of the map library the core talks to."""

    def fly_to(self, request: CameraRequest) -> None:
        """Animate the camera."""
        ...


class RecordingMapSurface:
    """Map surface that records camera requests instead of animating."""

    def __init__(self) -> None:
        self.requests: list[CameraRequest] = []

    def fly_to(self, request: CameraRequest) -> None:
        self.requests.append(request)

    @property
    def last_request(self) -> CameraRequest | None:
        return self.requests[-1] if self.requests else None


class ViewportController:
    """Stateless translation from a location to a fly_to call."""

    def __init__(self, surface: MapSurface) -> None:
        self.surface = surface

    def move_to(
        self,
        coordinate: Coordinate,
        zoom_level: float,
        duration_ms: int,
    ) -> CameraRequest:
        """
        Issue a camera animation to the map surface.

        Args:
            coordinate: Target centre.
            zoom_level: Target zoom.
            duration_ms: Animation length in milliseconds.

        Returns:
            The request that was sent.
        """
        request = CameraRequest(center=coordinate, zoom=zoom_level, duration_ms=duration_ms)
        self.surface.fly_to(request)
        logger.debug(
            "Flying to %.4f,%.4f (zoom %s)",
            coordinate.latitude,
            coordinate.longitude,
            zoom_level,
        )
        return request

    def select(self, result: SearchResult) -> CameraRequest:
        """Fly to a chosen search result with the default zoom and duration."""
        settings = get_settings()
        return self.move_to(
            result.entry.coordinate,
            settings.viewport_zoom,
            settings.viewport_duration_ms,
        )
