"""Water body catalog used for the info panel and fishing scores."""

import logging

from pydantic import ValidationError

from aquamap.models.schemas import WaterBody
from aquamap.services.gazetteer import GazetteerError

logger = logging.getLogger(__name__)

WATER_BODY_RECORDS: list[dict] = [
    {
        "name": "Ganges River",
        "type": "river",
        "coordinate": {"latitude": 25.3176, "longitude": 82.9739},
        "water_quality": "Moderate",
        "depth_meters": 16,
        "fish_species": ["Rohu", "Catla", "Mrigal", "Hilsa", "Mahseer"],
        "best_fishing_window": "5:00 AM - 8:00 AM",
    },
    {
        "name": "Brahmaputra River",
        "type": "river",
        "coordinate": {"latitude": 26.2006, "longitude": 92.9376},
        "water_quality": "Good",
        "depth_meters": 30,
        "fish_species": ["Mahseer", "Rohu", "Boral", "Chital"],
        "best_fishing_window": "6:00 AM - 9:00 AM",
    },
    {
        "name": "Dal Lake",
        "type": "lake",
        "coordinate": {"latitude": 34.1688, "longitude": 74.8619},
        "water_quality": "Moderate",
        "depth_meters": 6,
        "fish_species": ["Trout", "Common Carp"],
        "best_fishing_window": "6:00 AM - 10:00 AM",
    },
    {
        "name": "Vembanad Lake",
        "type": "lake",
        "coordinate": {"latitude": 9.5916, "longitude": 76.3847},
        "water_quality": "Poor",
        "depth_meters": 3,
        "fish_species": ["Pearl Spot", "Tilapia", "Prawn"],
        "best_fishing_window": "4:00 PM - 6:30 PM",
    },
    {
        "name": "Arabian Sea",
        "type": "sea",
        "coordinate": {"latitude": 15.0, "longitude": 68.0},
        "water_quality": "Good",
        "depth_meters": 2700,
        "fish_species": ["Pomfret", "Mackerel", "Sardine", "Tuna", "Seer Fish"],
        "best_fishing_window": "Early morning, October - March",
    },
    {
        "name": "Bay of Bengal",
        "type": "sea",
        "coordinate": {"latitude": 15.0, "longitude": 88.0},
        "water_quality": "Good",
        "depth_meters": 2600,
        "fish_species": ["Hilsa", "Pomfret", "Bombay Duck", "Tuna"],
        "best_fishing_window": "Dawn, November - February",
    },
]


def load_water_bodies(records: list[dict]) -> dict[str, WaterBody]:
    """
    Validate water body records and index them by lower-cased name.

    Raises:
        GazetteerError: On an invalid record or a duplicate name.
    """
    catalog: dict[str, WaterBody] = {}
    for index, record in enumerate(records):
        try:
            body = WaterBody.model_validate(record)
        except ValidationError as e:
            raise GazetteerError(f"Invalid water body record #{index}: {e}") from e
        key = body.name.lower()
        if key in catalog:
            raise GazetteerError(f"Duplicate water body name: {body.name}")
        catalog[key] = body
    return catalog


_catalog: dict[str, WaterBody] | None = None


def get_catalog() -> dict[str, WaterBody]:
    """Get the water body catalog, validated on first use."""
    global _catalog
    if _catalog is None:
        _catalog = load_water_bodies(WATER_BODY_RECORDS)
        logger.info("Loaded %d water bodies", len(_catalog))
    return _catalog


def get_water_body(name: str) -> WaterBody | None:
    """Look up a water body by name (case-insensitive)."""
    return get_catalog().get(name.strip().lower())
