"""Validation of click payloads coming from the map surface."""

import logging
import math
import re

from pydantic import TypeAdapter, ValidationError

from aquamap.models.map_schemas import (
    MapEvent,
    PointClick,
    WaterBodyClick,
    WaterBodyProperties,
)
from aquamap.models.schemas import Coordinate, WaterBody, WaterQuality

logger = logging.getLogger(__name__)

_map_event_adapter: TypeAdapter = TypeAdapter(MapEvent)

# Leading number in depth strings such as "12 m" or "7.5m"
DEPTH_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)")


class MapEventError(ValueError):
    """Raised when a map click payload does not match a known shape."""


def parse_map_event(payload: dict) -> PointClick | WaterBodyClick:
    """
    Validate a raw click payload.

    Args:
        payload: Dict with a "kind" tag ("point" or "water_body").

    Returns:
        The typed click event.

    Raises:
        MapEventError: If the payload is not a valid click.
    """
    try:
        return _map_event_adapter.validate_python(payload)
    except ValidationError as e:
        logger.warning("Rejected map event: %s", e.errors()[0].get("msg", "invalid"))
        raise MapEventError(str(e)) from e


def parse_depth(value: float | str | None) -> float | None:
    """Read a depth in metres from a number or a string like "12 m"."""
    if value is None:
        return None
    if isinstance(value, str):
        match = DEPTH_PATTERN.match(value)
        if match is None:
            return None
        value = match.group(1)
    depth = float(value)
    if not math.isfinite(depth) or depth < 0:
        return None
    return depth


def water_body_from_properties(
    properties: WaterBodyProperties,
    coordinate: Coordinate,
) -> WaterBody:
    """
    Convert feature properties into a WaterBody for scoring.

    Raises:
        MapEventError: If the properties do not form a valid water body.
    """
    try:
        return WaterBody(
            name=properties.name,
            type=properties.type,
            coordinate=coordinate,
            water_quality=properties.water_quality or WaterQuality.POOR,
            depth_meters=parse_depth(properties.depth),
            fish_species=properties.fish_types,
            best_fishing_window=properties.best_fishing_time,
        )
    except ValidationError as e:
        raise MapEventError(str(e)) from e
