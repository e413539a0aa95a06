"""
Integer-level conversion between milliseconds and the `datetime` module.

**Conceptual**: `datetime` is the calendar library this package wraps. It
knows about leap years, time zones and formatting; the millisecond types do
not. This module is the single place where millisecond counts cross into
`datetime`/`timedelta` objects and back. It works on plain ints so the value
types in utctimestamp.core can call it without a circular import; the typed
wrappers live in utctimestamp.calendar.boundary.

**Rounding rules**:
  - datetime -> milliseconds floors sub-millisecond parts (an instant belongs
    to the millisecond it falls in, also before the epoch).
  - milliseconds -> datetime splits with floor division, so the sub-second
    component is never negative.
  - timedelta -> milliseconds truncates toward zero (a span of -1.5 ms is
    -1 ms, not -2 ms).

pandas.Timestamp and pandas.Timedelta subclass datetime and timedelta, so they
are accepted everywhere a datetime/timedelta is expected.
"""

from datetime import datetime, timedelta, timezone

from utctimestamp.core.errors import CalendarRangeError
from utctimestamp.utils.math import trunc_div

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_ONE_MILLISECOND = timedelta(milliseconds=1)


def milliseconds_to_datetime(ms: int) -> datetime:
    """
    Convert milliseconds since the epoch to an aware UTC datetime.

    Args:
        ms: Milliseconds since 1970-01-01T00:00:00Z (may be negative).

    Returns:
        datetime with tzinfo=timezone.utc.

    Raises:
        CalendarRangeError: If the instant falls outside datetime's supported
                            years (1 through 9999).

    Example:
        >>> milliseconds_to_datetime(-1)
        datetime.datetime(1969, 12, 31, 23, 59, 59, 999000, tzinfo=datetime.timezone.utc)
    """
    # Floor split: -1 ms is (-1 s, +999 ms), not (0 s, -1 ms)
    seconds, millis = divmod(ms, 1000)
    try:
        return EPOCH + timedelta(seconds=seconds, milliseconds=millis)
    except OverflowError as e:
        raise CalendarRangeError(
            f"Timestamp {ms} ms is outside the range representable by datetime "
            f"({datetime.min.year:04d}-01-01 to {datetime.max.year:04d}-12-31). Error: {e}"
        ) from e


def datetime_to_milliseconds(dt: datetime) -> int:
    """
    Convert a datetime to milliseconds since the epoch.

    Naive datetimes are treated as UTC. Aware datetimes in other zones are
    converted to UTC first (subtraction of aware datetimes does this).

    Args:
        dt: The datetime to convert.

    Returns:
        Milliseconds since the epoch, floored to whole milliseconds.

    Raises:
        TypeError: If dt is not a datetime.
    """
    if not isinstance(dt, datetime):
        raise TypeError(f"Expected a datetime, got {type(dt).__name__}: {dt!r}")
    if dt.tzinfo is None or dt.utcoffset() is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return (dt - EPOCH) // _ONE_MILLISECOND


def milliseconds_to_timedelta(ms: int) -> timedelta:
    """
    Convert a millisecond count to a timedelta.

    Raises:
        CalendarRangeError: If |ms| exceeds timedelta's limit (999999999 days).
    """
    try:
        return timedelta(milliseconds=ms)
    except OverflowError as e:
        raise CalendarRangeError(
            f"Time delta {ms} ms is outside the range representable by timedelta. Error: {e}"
        ) from e


def timedelta_to_milliseconds(td: timedelta) -> int:
    """
    Convert a timedelta to whole milliseconds, truncating toward zero.

    Example:
        >>> timedelta_to_milliseconds(timedelta(microseconds=-1500))
        -1
    """
    if not isinstance(td, timedelta):
        raise TypeError(f"Expected a timedelta, got {type(td).__name__}: {td!r}")
    micros = (td.days * 86_400 + td.seconds) * 1_000_000 + td.microseconds
    return trunc_div(micros, 1000)
