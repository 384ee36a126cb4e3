"""Static gazetteer of searchable water features and ports."""

import logging
from typing import Iterable

from pydantic import ValidationError

from aquamap.models.schemas import GazetteerEntry

logger = logging.getLogger(__name__)

WATER_FEATURES: list[dict] = [
    {"name": "Ganges River", "category": "river", "latitude": 25.3176, "longitude": 82.9739},
    {"name": "Brahmaputra River", "category": "river", "latitude": 26.2006, "longitude": 92.9376},
    {"name": "Dal Lake", "category": "lake", "latitude": 34.1688, "longitude": 74.8619},
    {"name": "Vembanad Lake", "category": "lake", "latitude": 9.5916, "longitude": 76.3847},
    {"name": "Arabian Sea", "category": "sea", "latitude": 15.0, "longitude": 68.0},
    {"name": "Bay of Bengal", "category": "sea", "latitude": 15.0, "longitude": 88.0},
]

PORTS: list[dict] = [
    {"name": "Mumbai Port", "category": "port", "latitude": 18.9220, "longitude": 72.8347},
    {"name": "Kolkata Port", "category": "port", "latitude": 22.5726, "longitude": 88.3639},
    {"name": "Chennai Port", "category": "port", "latitude": 13.0827, "longitude": 80.2707},
    {"name": "Cochin Port", "category": "port", "latitude": 9.9312, "longitude": 76.2673},
]

# Water features are listed before ports in search results
DEFAULT_RECORDS: list[dict] = WATER_FEATURES + PORTS


class GazetteerError(ValueError):
    """Raised when gazetteer data is invalid."""


def load_gazetteer(records: Iterable[dict]) -> list[GazetteerEntry]:
    """
    Validate raw gazetteer records.

    Args:
        records: Dicts with name, category, latitude and longitude.

    Returns:
        Entries in declaration order.

    Raises:
        GazetteerError: On an invalid record or a duplicate name.
    """
    entries: list[GazetteerEntry] = []
    seen: set[str] = set()

    for index, record in enumerate(records):
        try:
            entry = GazetteerEntry.model_validate(record)
        except ValidationError as e:
            raise GazetteerError(f"Invalid gazetteer record #{index}: {e}") from e

        key = entry.name.lower()
        if key in seen:
            raise GazetteerError(f"Duplicate gazetteer name: {entry.name}")
        seen.add(key)
        entries.append(entry)

    logger.info("Loaded %d gazetteer entries", len(entries))
    return entries


_default_gazetteer: list[GazetteerEntry] | None = None


def get_gazetteer() -> list[GazetteerEntry]:
    """Get the default gazetteer, validated on first use."""
    global _default_gazetteer
    if _default_gazetteer is None:
        _default_gazetteer = load_gazetteer(DEFAULT_RECORDS)
    return _default_gazetteer

