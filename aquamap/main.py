"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from aquamap.config import get_settings
from aquamap.logging_config import setup_logging
from aquamap.routes.api import limiter, router as api_router
from aquamap.services.gazetteer import get_gazetteer
from aquamap.services.notifications import (
    FeedTicker,
    clear_notification_feed,
    get_notification_feed,
)
from aquamap.services.water_bodies import get_catalog
from aquamap.services.weather import WeatherAdvisoryPanel, close_http_client


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, json_format=settings.log_json)

    # Static data is validated up front so bad coordinates fail at startup
    get_gazetteer()
    get_catalog()

    feed = get_notification_feed()
    if settings.feed_seed_welcome and len(feed) == 0:
        feed.seed_welcome()

    ticker = FeedTicker(feed)
    if settings.feed_ticker_enabled:
        ticker.start()
    app.state.ticker = ticker

    # Weather panel behind point clicks on the map
    app.state.weather_panel = WeatherAdvisoryPanel()

    yield

    # Cleanup on shutdown
    app.state.weather_panel.close()
    await ticker.stop()
    await close_http_client()
    clear_notification_feed()


app = FastAPI(
    title="India Water Bodies API",
    description="Fishing advisories, weather and search for an interactive water body map",
    version="1.0.0",
    lifespan=lifespan,
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.include_router(api_router, tags=["map"])


@app.get("/health")
async def health_check() -> dict:
    """
    Health check endpoint with service status.

    Returns:
        Status dictionary with service health information.
    """
    settings = get_settings()
    ticker = getattr(app.state, "ticker", None)

    return {
        "status": "healthy",
        "service": "aquamap",
        "version": "1.0.0",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "services": {
            "openweathermap": "configured" if settings.weather_api_key else "not_configured",
            "notification_ticker": "running" if ticker and ticker.running else "stopped",
            "notifications": len(get_notification_feed()),
        },
    }


@app.get("/")
async def root() -> dict:
    """
    Root endpoint.

    Returns:
        Welcome message with API information.
    """
    return {
        "message": "India Water Bodies API",
        "docs": "/docs",
        "health": "/health",
    }
