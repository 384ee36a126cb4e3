"""Pydantic models for the map surface boundary."""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from aquamap.models.schemas import Coordinate, WaterBodyType, WaterQuality


class CameraRequest(BaseModel):
    """Camera animation request sent to the map surface."""

    center: Coordinate
    zoom: float = Field(ge=0, le=24)
    duration_ms: int = Field(ge=0)

    def as_fly_to(self) -> dict:
        """Return the map library's flyTo options ([lng, lat] order)."""
        return {
            "center": [self.center.longitude, self.center.latitude],
            "zoom": self.zoom,
            "duration": self.duration_ms,
        }


class WaterBodyProperties(BaseModel):
    """Feature properties attached to a water-body polygon on the map."""

    name: str
    type: WaterBodyType
    water_quality: Optional[WaterQuality] = Field(default=None, alias="waterQuality")
    depth: Optional[Union[float, str]] = None
    fish_types: list[str] = Field(default_factory=list, alias="fishTypes")
    best_fishing_time: str = Field(default="", alias="bestFishingTime")

    model_config = ConfigDict(populate_by_name=True)


class PointClick(BaseModel):
    """Click on an empty part of the map."""

    kind: Literal["point"] = "point"
    coordinate: Coordinate


class WaterBodyClick(BaseModel):
    """Click on a water-body feature."""

    kind: Literal["water_body"] = "water_body"
    coordinate: Coordinate
    properties: WaterBodyProperties


MapEvent = Annotated[Union[PointClick, WaterBodyClick], Field(discriminator="kind")]
