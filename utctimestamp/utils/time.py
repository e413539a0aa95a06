"""
Clock abstractions used by `UtcTimeStamp.now()`.

Reading the system clock is the only side effect in this library. Routing it
through a Clock object lets tests and replays pin "now" to a fixed instant
instead of depending on wall-clock time.

Every clock returns an aware UTC datetime; conversion to milliseconds happens
in UtcTimeStamp.now().
"""

from datetime import datetime, timedelta, timezone
from typing import Protocol


class Clock(Protocol):
    """
    Abstract time source protocol.

    **Usage**: Anything with a `now()` method returning a datetime qualifies.

        UtcTimeStamp.now()                    # system clock
        UtcTimeStamp.now(FrozenClock(fixed))  # deterministic
    """

    def now(self) -> datetime:
        """Return the current time according to this clock (aware, UTC)."""
        ...


class RealClock:
    """Clock that returns the actual current system time in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FrozenClock:
    """
    Clock that returns a fixed instant until explicitly advanced.

    **Usage**:
        clock = FrozenClock(datetime(2019, 4, 14, tzinfo=timezone.utc))
        UtcTimeStamp.now(clock)    # 2019-04-14 00:00:00+00:00
        clock.advance(timedelta(hours=12))
        UtcTimeStamp.now(clock)    # 2019-04-14 12:00:00+00:00

    Naive datetimes are taken to be UTC, matching the conversion rules of
    utctimestamp.calendar.
    """

    def __init__(self, fixed_now: datetime):
        """
        Args:
            fixed_now: The datetime to return from now(). Aware values in
                       other zones are converted to UTC.
        """
        self._fixed_now = _as_utc(fixed_now)

    def now(self) -> datetime:
        return self._fixed_now

    def advance(self, delta: timedelta) -> None:
        """Move the frozen instant by `delta` (may be negative)."""
        self._fixed_now = self._fixed_now + delta


def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def get_real_clock() -> Clock:
    """Factory for the system clock."""
    return RealClock()


def get_frozen_clock(fixed_now: datetime) -> Clock:
    """
    Factory for a clock frozen at `fixed_now`.

    Args:
        fixed_now: The datetime to freeze at.

    Returns:
        FrozenClock instance configured with fixed_now.
    """
    return FrozenClock(fixed_now)
