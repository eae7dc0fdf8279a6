from datetime import UTC, datetime, timedelta

from ..application.ports.outbound import Clock


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now(UTC)


class FrozenClock(Clock):
    """Clock pinned to a fixed instant, movable by hand."""

    def __init__(self, now: datetime) -> None:
        if now.tzinfo is None:
            now = now.replace(tzinfo=UTC)
        self._now = now

    def now(self) -> datetime:
        return self._now

    def set(self, now: datetime) -> None:
        self._now = now if now.tzinfo else now.replace(tzinfo=UTC)

    def advance(self, **kwargs: float) -> None:
        self._now += timedelta(**kwargs)
