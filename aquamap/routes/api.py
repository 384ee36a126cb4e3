"""HTTP endpoints for the map front-end."""

from fastapi import APIRouter, HTTPException, Query, Request
from pydantic import BaseModel
from slowapi import Limiter
from slowapi.util import get_remote_address

from aquamap.config import get_settings
from aquamap.logging_config import get_logger, location_label
from aquamap.models.map_schemas import PointClick, WaterBodyClick
from aquamap.models.schemas import (
    FishingAssessment,
    Notification,
    NotificationCreate,
    SearchOutcome,
    WeatherPanelState,
)
from aquamap.services.map_events import (
    MapEventError,
    parse_map_event,
    water_body_from_properties,
)
from aquamap.services.notifications import get_notification_feed
from aquamap.services.scoring import assess
from aquamap.services.search import SEARCH_PRESETS, get_search_index
from aquamap.services.viewport import RecordingMapSurface, ViewportController
from aquamap.services.water_bodies import get_catalog, get_water_body
from aquamap.services.weather import WeatherAdvisoryPanel, get_weather_advisory

router = APIRouter()

limiter = Limiter(
    key_func=get_remote_address,
    enabled=get_settings().rate_limit_enabled,
)


class SelectRequest(BaseModel):
    """Search result chosen by the user."""

    name: str


@router.get("/search", response_model=SearchOutcome)
@limiter.limit(get_settings().rate_limit)
async def search_locations(request: Request, q: str = "") -> SearchOutcome:
    """Search rivers, lakes, seas and ports by name."""
    return get_search_index().lookup(q)


@router.get("/search/presets")
async def list_search_presets() -> dict[str, str]:
    """Quick filter labels and the query each one runs."""
    return dict(SEARCH_PRESETS)


@router.get("/search/presets/{label}", response_model=SearchOutcome)
async def run_search_preset(label: str) -> SearchOutcome:
    if label not in SEARCH_PRESETS:
        raise HTTPException(status_code=404, detail=f"Unknown preset '{label}'")
    return get_search_index().preset(label)


@router.post("/search/select")
async def select_location(body: SelectRequest) -> dict:
    """
    Turn a selected search result into a camera animation.

    Returns:
        flyTo options for the map library.
    """
    result = get_search_index().result_for(body.name)
    if result is None:
        raise HTTPException(status_code=404, detail=f"Unknown location '{body.name}'")

    camera = ViewportController(RecordingMapSurface()).select(result)
    return {"name": result.entry.name, "fly_to": camera.as_fly_to()}


@router.get("/water-bodies")
async def list_water_bodies() -> list[dict]:
    return [
        {
            "name": body.name,
            "type": body.type.value,
            "latitude": body.coordinate.latitude,
            "longitude": body.coordinate.longitude,
        }
        for body in get_catalog().values()
    ]


@router.get("/water-bodies/{name}/assessment", response_model=FishingAssessment)
async def water_body_assessment(name: str) -> FishingAssessment:
    """Fishing score and tips for a catalogued water body."""
    body = get_water_body(name)
    if body is None:
        raise HTTPException(status_code=404, detail=f"Unknown water body '{name}'")
    return assess(body)


@router.get("/weather", response_model=WeatherPanelState)
@limiter.limit(get_settings().rate_limit)
async def weather_at_point(
    request: Request,
    lat: float = Query(default=get_settings().map_center_latitude, ge=-90, le=90),
    lon: float = Query(default=get_settings().map_center_longitude, ge=-180, le=180),
) -> WeatherPanelState:
    """
    Current weather and fishing advice for a point (map centre by default).

    An unreachable provider yields status "unavailable" rather than an
    HTTP error, so the client can show an inline retry message.
    """
    state = await get_weather_advisory(lat, lon)
    get_logger(__name__, location=location_label(lat, lon)).info(
        "Weather advisory: %s", state.status.value
    )
    return state


@router.post("/map/click")
async def map_click(request: Request, payload: dict) -> dict:
    """
    Handle a map click.

    Point clicks go through the shared weather panel, so a newer click
    supersedes one still waiting on the provider. Water body clicks return
    the fishing assessment for the clicked feature.
    """
    try:
        event = parse_map_event(payload)
        if isinstance(event, WaterBodyClick):
            body = water_body_from_properties(event.properties, event.coordinate)
    except MapEventError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    if isinstance(event, PointClick):
        panel: WeatherAdvisoryPanel = request.app.state.weather_panel
        state = await panel.query(
            event.coordinate.latitude,
            event.coordinate.longitude,
        )
        return {"kind": event.kind, "weather": state.model_dump(mode="json")}

    return {"kind": event.kind, "assessment": assess(body).model_dump(mode="json")}


@router.get("/notifications", response_model=list[Notification])
async def list_notifications() -> list[Notification]:
    """Current feed, newest first."""
    return get_notification_feed().items


@router.post("/notifications", response_model=Notification, status_code=201)
async def create_notification(body: NotificationCreate) -> Notification:
    notification = get_notification_feed().submit(body)
    get_logger(__name__, notification_id=notification.id).info(
        "Notification submitted: %s", notification.title
    )
    return notification


@router.delete("/notifications/{notification_id}")
async def dismiss_notification(notification_id: str) -> dict:
    """Dismiss a notification. Unknown ids are not an error."""
    removed = get_notification_feed().dismiss(notification_id)
    return {"id": notification_id, "dismissed": removed}
