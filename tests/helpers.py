"""Deterministic clock and random source for feed tests."""

from datetime import datetime, timedelta, timezone


class FixedClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 6, 1, 6, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float = 1) -> datetime:
        self.now = self.now + timedelta(seconds=seconds)
        return self.now


class ScriptedRandom:
    """Random source returning scripted draws and picking by index."""

    def __init__(self, draws: list[float], picks: list[int] | None = None) -> None:
        self.draws = list(draws)
        self.picks = list(picks or [])

    def random(self) -> float:
        return self.draws.pop(0)

    def choice(self, seq):
        index = self.picks.pop(0) if self.picks else 0
        return seq[index]
