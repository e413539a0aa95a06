"""
Lazy iteration over timestamps stepped by a time delta.

**Conceptual**: A TimeRange walks from `start` toward `end`, producing one
UtcTimeStamp per step. The range is always left-closed (it starts at `start`
unless `start` is already past `end`); the constructor chosen decides whether
`end` itself is produced:

    TimeRange.right_closed(start, end, step)   [start, end]
    TimeRange.right_open(start, end, step)     [start, end)

**State machine**: the range is either active or exhausted. Each `next()`
checks the cursor against `end` (`cursor > end` when right-closed,
`cursor >= end` when right-open). If the check fails the range becomes
exhausted for good; otherwise the cursor is returned and advanced by `step`.
A TimeRange is single-pass: build a new one to iterate again.

**Non-terminating ranges**: the end check only looks at the cursor, so a
non-empty range with a zero or negative step never finishes. By default this
is allowed (a warning is logged); with `strict=True`, or
UTCTIMESTAMP_STRICT_RANGE_DIRECTION set, construction raises
RangeDirectionError instead.

Example:
    >>> from datetime import datetime, timedelta, timezone
    >>> start = datetime(2019, 4, 14, tzinfo=timezone.utc)
    >>> end = datetime(2019, 4, 16, tzinfo=timezone.utc)
    >>> [str(ts) for ts in TimeRange.right_closed(start, end, timedelta(hours=12))]
    ['2019-04-14 00:00:00+00:00', '2019-04-14 12:00:00+00:00', '2019-04-15 00:00:00+00:00', '2019-04-15 12:00:00+00:00', '2019-04-16 00:00:00+00:00']
"""

import logging

from utctimestamp.calendar.boundary import coerce_timedelta, coerce_timestamp
from utctimestamp.config.settings import get_settings
from utctimestamp.core.errors import RangeDirectionError
from utctimestamp.core.timedelta import TimeDelta
from utctimestamp.core.timestamp import UtcTimeStamp
from utctimestamp.utils.math import INT64_MAX

log = logging.getLogger(__name__)


class TimeRange:
    """
    An iterator looping over timestamps given a time delta as step.

    Use the `right_closed` / `right_open` constructors. Start and end accept
    a UtcTimeStamp, a datetime or int milliseconds; step accepts a TimeDelta,
    a timedelta or int milliseconds. All are converted when the range is built.
    """

    def __init__(self, start, end, step, right_closed: bool = True, strict: bool | None = None):
        """
        Args:
            start: First candidate timestamp.
            end: End bound.
            step: Amount the cursor advances after each produced value.
            right_closed: Whether `end` itself may be produced.
            strict: Enable the direction guard. None uses
                    Settings.strict_range_direction.

        Raises:
            RangeDirectionError: If strict and the range would never terminate.
            TypeError: If an argument cannot be converted.
        """
        self._cur: UtcTimeStamp = coerce_timestamp(start)
        self._end: UtcTimeStamp = coerce_timestamp(end)
        self._step: TimeDelta = coerce_timedelta(step)
        self._right_closed = bool(right_closed)
        self._exhausted = False

        if strict is None:
            strict = get_settings().strict_range_direction
        self._check_direction(strict)

    @classmethod
    def right_closed(cls, start, end, step, strict: bool | None = None) -> "TimeRange":
        """Create a time range that includes the end date."""
        return cls(start, end, step, right_closed=True, strict=strict)

    @classmethod
    def right_open(cls, start, end, step, strict: bool | None = None) -> "TimeRange":
        """Create a time range that excludes the end date."""
        return cls(start, end, step, right_closed=False, strict=strict)

    @property
    def is_right_closed(self) -> bool:
        return self._right_closed

    @property
    def is_exhausted(self) -> bool:
        """True once the range has reported the end of iteration."""
        return self._exhausted

    def _past_end(self) -> bool:
        if self._right_closed:
            return self._cur > self._end
        return self._cur >= self._end

    def _check_direction(self, strict: bool) -> None:
        # An empty range terminates immediately whatever the step
        if self._past_end() or self._step.is_positive():
            return

        message = (
            f"{self!r} never terminates: step {self._step!r} does not move the "
            f"cursor past the end bound."
        )
        if strict:
            raise RangeDirectionError(message)
        log.warning(message)

    def __iter__(self) -> "TimeRange":
        return self

    def __next__(self) -> UtcTimeStamp:
        if self._exhausted:
            raise StopIteration

        if self._past_end():
            self._exhausted = True
            raise StopIteration

        cur = self._cur
        if cur.as_milliseconds() + self._step.as_milliseconds() > INT64_MAX:
            # No end bound lies beyond INT64_MAX, so this was the last value
            self._exhausted = True
        else:
            self._cur = cur + self._step
        return cur

    def __repr__(self) -> str:
        return (
            f"TimeRange(cur={self._cur!r}, end={self._end!r}, step={self._step!r}, "
            f"right_closed={self._right_closed})"
        )
