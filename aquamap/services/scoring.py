"""Fishing suitability scoring for water bodies."""

import logging

from aquamap.models.schemas import (
    FishingAssessment,
    FishingTier,
    WaterBody,
    WaterQuality,
)

logger = logging.getLogger(__name__)

QUALITY_POINTS: dict[WaterQuality, int] = {
    WaterQuality.GOOD: 30,
    WaterQuality.MODERATE: 20,
    WaterQuality.POOR: 0,
}

# Diversity bonuses stack: a flat bonus for rich waters plus a per-species bonus
RICH_DIVERSITY_MIN_SPECIES = 4
RICH_DIVERSITY_BONUS = 25
PER_SPECIES_POINTS = 5
PER_SPECIES_CAP = 25

DEEP_WATER_METERS = 5
DEEP_WATER_BONUS = 20

EXCELLENT_THRESHOLD = 80
GOOD_THRESHOLD = 60

TIER_ADVICE: dict[FishingTier, str] = {
    FishingTier.EXCELLENT: (
        "Excellent spot! Try live bait near the deeper areas "
        "during recommended hours."
    ),
    FishingTier.GOOD: (
        "Good fishing potential. Check weather conditions "
        "and use appropriate tackle."
    ),
    FishingTier.CHALLENGING: (
        "Challenging conditions. Consider alternative locations "
        "or wait for better weather."
    ),
}


def score(water_body: WaterBody) -> int:
    """
    Calculate the fishing score for a water body.

    Combines water quality, fish diversity and depth. Missing optional
    attributes contribute nothing.

    Args:
        water_body: Water body to score.

    Returns:
        Score clamped to the range 0-100.
    """
    total = QUALITY_POINTS.get(water_body.water_quality, 0)

    species_count = water_body.species_count
    if species_count >= RICH_DIVERSITY_MIN_SPECIES:
        total += RICH_DIVERSITY_BONUS
    total += min(species_count * PER_SPECIES_POINTS, PER_SPECIES_CAP)

    if water_body.depth_meters is not None and water_body.depth_meters > DEEP_WATER_METERS:
        total += DEEP_WATER_BONUS

    return max(0, min(total, 100))


def tier_for(value: int) -> FishingTier:
    """Map a score onto its qualitative tier."""
    if value >= EXCELLENT_THRESHOLD:
        return FishingTier.EXCELLENT
    if value >= GOOD_THRESHOLD:
        return FishingTier.GOOD
    return FishingTier.CHALLENGING


def advice(value: int) -> str:
    """Return the fishing tip for a score."""
    return TIER_ADVICE[tier_for(value)]


def assess(water_body: WaterBody) -> FishingAssessment:
    """
    Build the full assessment shown in the water body info panel.

    Args:
        water_body: Water body to assess.

    Returns:
        FishingAssessment with score, tier, advice and the scored attributes.
    """
    value = score(water_body)
    tier = tier_for(value)
    logger.debug("Scored %s: %d (%s)", water_body.name, value, tier.value)
    return FishingAssessment(
        name=water_body.name,
        score=value,
        tier=tier,
        advice=TIER_ADVICE[tier],
        water_quality=water_body.water_quality,
        depth_meters=water_body.depth_meters,
        fish_species=list(water_body.fish_species),
        best_fishing_window=water_body.best_fishing_window,
    )
