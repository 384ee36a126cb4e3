"""Notification feed with bounded capacity and an ambient live-feed ticker."""

import asyncio
import itertools
import logging
import random
from datetime import datetime, timezone
from typing import Callable, Protocol

from aquamap.config import get_settings
from aquamap.logging_config import get_logger
from aquamap.models.schemas import (
    Notification,
    NotificationCategory,
    NotificationCreate,
    NotificationPriority,
    as_utc,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
FeedListener = Callable[[list[Notification]], None]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RandomSource(Protocol):
    """Subset of random.Random used by the feed."""

    def random(self) -> float:
        ...

    def choice(self, seq):
        ...


WELCOME_NOTIFICATION = NotificationCreate(
    category=NotificationCategory.FISHING,
    title="Welcome to India Water Bodies",
    message=(
        "Click on any water body to get detailed fishing information "
        "and weather conditions."
    ),
    priority=NotificationPriority.MEDIUM,
)

AMBIENT_TEMPLATES: list[NotificationCreate] = [
    NotificationCreate(
        category=NotificationCategory.FISHING,
        title="Great Fishing Alert",
        message=(
            "Excellent fishing conditions detected at Dal Lake. "
            "Water temperature perfect for Trout fishing."
        ),
        priority=NotificationPriority.MEDIUM,
    ),
    NotificationCreate(
        category=NotificationCategory.WEATHER,
        title="Weather Update",
        message=(
            "Clear skies and calm winds forecast for the next 4 hours - "
            "ideal for fishing."
        ),
        priority=NotificationPriority.LOW,
    ),
    NotificationCreate(
        category=NotificationCategory.ALERT,
        title="High Wind Warning",
        message=(
            "Strong winds expected in coastal areas. "
            "Exercise caution while fishing."
        ),
        priority=NotificationPriority.HIGH,
    ),
]


class NotificationFeed:
    """
    Bounded, newest-first notification feed.

    Entries are ordered by created_at, newest first. Entries with equal
    timestamps keep the most recently inserted one first. When the feed
    grows beyond capacity the oldest entries are evicted.
    """

    def __init__(
        self,
        capacity: int | None = None,
        clock: Clock | None = None,
        rng: RandomSource | None = None,
        tick_threshold: float | None = None,
        templates: list[NotificationCreate] | None = None,
    ) -> None:
        settings = get_settings()
        self.capacity = capacity if capacity is not None else settings.feed_capacity
        if self.capacity < 1:
            raise ValueError("Feed capacity must be at least 1")
        self.tick_threshold = (
            tick_threshold if tick_threshold is not None else settings.feed_tick_threshold
        )
        self._clock = clock or utc_now
        self._rng = rng or random.Random()
        self._templates = templates if templates is not None else AMBIENT_TEMPLATES
        self._items: list[Notification] = []
        self._counter = itertools.count(1)
        self._listeners: list[FeedListener] = []

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, notification_id: str) -> bool:
        return any(n.id == notification_id for n in self._items)

    @property
    def items(self) -> list[Notification]:
        """Snapshot of the feed, newest first."""
        return list(self._items)

    def subscribe(self, listener: FeedListener) -> Callable[[], None]:
        """
        Register a callback invoked with the feed after every change.

        Returns:
            A function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.items
        for listener in list(self._listeners):
            listener(snapshot)

    def next_id(self, created_at: datetime) -> str:
        """Generate an id from the creation time plus a sequence number."""
        return f"{int(created_at.timestamp() * 1000)}-{next(self._counter)}"

    def create(self, data: NotificationCreate, now: datetime | None = None) -> Notification:
        """Build a notification stamped with the feed's clock."""
        created_at = as_utc(now or self._clock())
        return Notification(
            id=self.next_id(created_at),
            category=data.category,
            title=data.title,
            message=data.message,
            priority=data.priority,
            created_at=created_at,
        )

    def ingest(self, notification: Notification) -> Notification:
        """
        Insert a notification at its newest-first position.

        An entry with the same id is replaced. Entries beyond capacity are
        evicted from the tail.

        Args:
            notification: Notification to add.

        Returns:
            The ingested notification.
        """
        self._items = [n for n in self._items if n.id != notification.id]

        created_at = as_utc(notification.created_at)
        position = len(self._items)
        for index, existing in enumerate(self._items):
            if created_at >= as_utc(existing.created_at):
                position = index
                break
        self._items.insert(position, notification)

        while len(self._items) > self.capacity:
            evicted = self._items.pop()
            get_logger(__name__, notification_id=evicted.id).debug(
                "Evicted notification: %s", evicted.title
            )

        self._notify()
        return notification

    def submit(self, data: NotificationCreate, now: datetime | None = None) -> Notification:
        """Create a notification from external input and ingest it."""
        return self.ingest(self.create(data, now))

    def dismiss(self, notification_id: str) -> bool:
        """
        Remove a notification by id.

        Args:
            notification_id: Id of the notification to remove.

        Returns:
            True if an entry was removed, False if it was not in the feed.
        """
        remaining = [n for n in self._items if n.id != notification_id]
        if len(remaining) == len(self._items):
            return False
        self._items = remaining
        self._notify()
        return True

    def clear(self) -> None:
        """Remove every notification."""
        if self._items:
            self._items = []
            self._notify()

    def seed_welcome(self) -> Notification:
        """Add the welcome message shown when the map opens."""
        return self.submit(WELCOME_NOTIFICATION)

    def tick(self, now: datetime | None = None) -> Notification | None:
        """
        Maybe synthesize an ambient notification.

        Args:
            now: Time of the tick (defaults to the feed clock).

        Returns:
            The new notification, or None when the draw did not fire.
        """
        if not self._templates:
            return None
        if self._rng.random() <= self.tick_threshold:
            return None
        template = self._rng.choice(self._templates)
        notification = self.submit(template, now)
        get_logger(__name__, notification_id=notification.id).info(
            "Ambient notification: %s", notification.title
        )
        return notification


class FeedTicker:
    """Cooperative interval timer that drives NotificationFeed.tick."""

    def __init__(
        self,
        feed: NotificationFeed,
        interval_seconds: float | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.feed = feed
        self.interval_seconds = (
            interval_seconds
            if interval_seconds is not None
            else get_settings().feed_tick_interval_seconds
        )
        self._clock = clock or utc_now
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                self.feed.tick(self._clock())
            except Exception:
                logger.exception("Notification tick failed")

    def start(self) -> None:
        """Start ticking on the running event loop."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.info("Notification ticker started (every %ss)", self.interval_seconds)

    async def stop(self) -> None:
        """Cancel the timer and wait for it to finish."""
        if self._task is None:
            return
        task, self._task = self._task, None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Notification ticker stopped")


_feed: NotificationFeed | None = None


def get_notification_feed() -> NotificationFeed:
    """Get or create the process-wide notification feed."""
    global _feed
    if _feed is None:
        _feed = NotificationFeed()
    return _feed


def clear_notification_feed() -> None:
    """Drop the process-wide feed (used on shutdown and in tests)."""
    global _feed
    _feed = None
