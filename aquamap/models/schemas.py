"""Pydantic models for water bodies, weather advisories, search and notifications."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Coordinate(BaseModel):
    """Geographic point. Both values must be finite and within range."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(ge=-180, le=180, allow_inf_nan=False)


class WaterBodyType(str, Enum):
    """Kinds of named water features on the map."""

    RIVER = "river"
    LAKE = "lake"
    SEA = "sea"
    OCEAN = "ocean"
    PORT = "port"


class WaterQuality(str, Enum):
    """Water quality grades used by the fishing score."""

    POOR = "Poor"
    MODERATE = "Moderate"
    GOOD = "Good"


class WaterBody(BaseModel):
    """Model for a water body and its fishing attributes."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: WaterBodyType
    coordinate: Coordinate
    water_quality: WaterQuality = WaterQuality.POOR
    depth_meters: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    fish_species: tuple[str, ...] = ()
    best_fishing_window: str = ""

    @field_validator("fish_species", mode="before")
    @classmethod
    def _unique_species(cls, value):
        # Keep first occurrence so display order follows insertion order
        if value is None:
            return ()
        seen: list[str] = []
        for species in value:
            if species not in seen:
                seen.append(species)
        return tuple(seen)

    @property
    def species_count(self) -> int:
        return len(self.fish_species)


class FishingTier(str, Enum):
    """Qualitative bands for the fishing score."""

    EXCELLENT = "excellent"
    GOOD = "good"
    CHALLENGING = "challenging"


class FishingAssessment(BaseModel):
    """Score and recommendation for a single water body."""

    name: str
    score: int = Field(ge=0, le=100)
    tier: FishingTier
    advice: str
    water_quality: WaterQuality
    depth_meters: Optional[float] = None
    fish_species: list[str] = Field(default_factory=list)
    best_fishing_window: str = ""


class WeatherReading(BaseModel):
    """Current conditions in the units the classifier works with."""

    temperature_c: float
    humidity_pct: float = Field(ge=0, le=100)
    wind_speed_kmh: float = Field(ge=0)
    visibility_km: float = Field(default=0.0, ge=0)
    condition_text: str = ""


class AdvisoryVerdict(BaseModel):
    """Fishing-friendliness verdict derived from a weather reading."""

    is_fishing_friendly: bool
    advice_text: str


class WeatherAdvisory(BaseModel):
    """Display-ready weather values plus the fishing verdict."""

    temperature: int
    humidity: int
    wind_speed_kmh: int
    visibility_km: int
    description: str
    is_fishing_friendly: bool
    fishing_advice: str


class WeatherResponse(BaseModel):
    """Model for weather provider response."""

    success: bool
    data: Optional[WeatherReading] = None
    error_message: Optional[str] = None


class WeatherPanelStatus(str, Enum):
    """Lifecycle of the weather panel."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    UNAVAILABLE = "unavailable"


class WeatherPanelState(BaseModel):
    """Current state of the weather panel as shown to the user."""

    status: WeatherPanelStatus = WeatherPanelStatus.IDLE
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    advisory: Optional[WeatherAdvisory] = None
    error_message: Optional[str] = None

    @property
    def is_retryable(self) -> bool:
        """Unavailable results can be retried by issuing a new query."""
        return self.status == WeatherPanelStatus.UNAVAILABLE


class GazetteerEntry(BaseModel):
    """Named location that can be searched for."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    category: WaterBodyType
    latitude: float = Field(ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(ge=-180, le=180, allow_inf_nan=False)

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(latitude=self.latitude, longitude=self.longitude)


class SearchResult(BaseModel):
    """A gazetteer match. Rank is the 1-based position in the result list."""

    entry: GazetteerEntry
    rank: int
    matched_on: str = "name"  # name or category
    is_prefix: bool = False


class SearchStatus(str, Enum):
    """Whether a search ran and what it found."""

    IDLE = "idle"  # no query issued, or query too short
    RESULTS = "results"
    NO_RESULTS = "no_results"


class SearchOutcome(BaseModel):
    """Search results with an explicit state for the presentation layer."""

    query: str = ""
    status: SearchStatus = SearchStatus.IDLE
    results: list[SearchResult] = Field(default_factory=list)


def as_utc(value: datetime) -> datetime:
    """Read naive datetimes as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class NotificationCategory(str, Enum):
    """Notification kinds shown in the feed."""

    WEATHER = "weather"
    FISHING = "fishing"
    ALERT = "alert"


class NotificationPriority(str, Enum):
    """Notification urgency."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Notification(BaseModel):
    """A single entry in the notification feed."""

    model_config = ConfigDict(frozen=True)

    id: str
    category: NotificationCategory
    title: str
    message: str
    created_at: datetime
    priority: NotificationPriority = NotificationPriority.MEDIUM

    @field_validator("created_at")
    @classmethod
    def normalize_created_at(cls, value: datetime) -> datetime:
        return as_utc(value)


class NotificationCreate(BaseModel):
    """Model for externally submitted notifications."""

    category: NotificationCategory
    title: str = Field(min_length=1)
    message: str = ""
    priority: NotificationPriority = NotificationPriority.MEDIUM
