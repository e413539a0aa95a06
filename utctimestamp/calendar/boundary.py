"""
Typed conversion boundary between the millisecond types and `datetime`.

**Conceptual**: Application code builds UtcTimeStamp/TimeDelta values either
directly from integers or by converting `datetime`/`timedelta` objects, does
its bulk arithmetic on the integer types, and converts back only for display
or calendar-aware work. These functions are that boundary, named explicitly:

    timestamp_from_datetime(dt)   datetime  -> UtcTimeStamp
    timestamp_to_datetime(ts)     UtcTimeStamp -> datetime (aware, UTC)
    timedelta_from_calendar(td)   timedelta -> TimeDelta
    timedelta_to_calendar(delta)  TimeDelta -> timedelta

`coerce_timestamp` / `coerce_timedelta` accept any of the supported input
forms (library type, calendar type, or int milliseconds) and are what
TimeRange uses to convert its arguments eagerly.
"""

from datetime import datetime, timedelta

from utctimestamp.core.timedelta import TimeDelta
from utctimestamp.core.timestamp import UtcTimeStamp


def timestamp_from_datetime(dt: datetime) -> UtcTimeStamp:
    """Create a timestamp from a datetime (naive values are taken as UTC)."""
    return UtcTimeStamp.from_datetime(dt)


def timestamp_to_datetime(ts: UtcTimeStamp) -> datetime:
    """
    Convert a timestamp to an aware UTC datetime.

    Raises:
        CalendarRangeError: If the timestamp falls outside years 1..9999.
    """
    return ts.to_datetime()


def timedelta_from_calendar(td: timedelta) -> TimeDelta:
    """Create a TimeDelta from a timedelta, truncating toward zero."""
    return TimeDelta.from_timedelta(td)


def timedelta_to_calendar(delta: TimeDelta) -> timedelta:
    """Convert a TimeDelta to a timedelta."""
    return delta.to_timedelta()


def coerce_timestamp(value) -> UtcTimeStamp:
    """
    Convert any supported timestamp-like value to a UtcTimeStamp.

    Accepts:
      - UtcTimeStamp (returned unchanged)
      - datetime, including pandas.Timestamp (converted, naive = UTC)
      - integer milliseconds since the epoch

    Raises:
        TypeError: For anything else (floats and strings included).
    """
    if isinstance(value, UtcTimeStamp):
        return value
    if isinstance(value, datetime):
        return UtcTimeStamp.from_datetime(value)
    if isinstance(value, TimeDelta):
        raise TypeError(f"Expected a timestamp, got a TimeDelta: {value!r}")
    return UtcTimeStamp.from_milliseconds(value)


def coerce_timedelta(value) -> TimeDelta:
    """
    Convert any supported delta-like value to a TimeDelta.

    Accepts TimeDelta, timedelta (including pandas.Timedelta) or integer
    milliseconds.
    """
    if isinstance(value, TimeDelta):
        return value
    if isinstance(value, timedelta):
        return TimeDelta.from_timedelta(value)
    if isinstance(value, UtcTimeStamp):
        raise TypeError(f"Expected a time delta, got a UtcTimeStamp: {value!r}")
    return TimeDelta.from_milliseconds(value)


def format_timestamp(ts: UtcTimeStamp) -> str:
    """Render a timestamp with datetime's default formatting, e.g. '2019-04-14 00:00:00+00:00'."""
    return str(ts.to_datetime())


def format_timedelta(delta: TimeDelta) -> str:
    """Render a delta with timedelta's default formatting, e.g. '12:00:00'."""
    return str(delta.to_timedelta())
