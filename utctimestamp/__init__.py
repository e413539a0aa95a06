"""
utctimestamp: simple and fast UTC time types.

Re-exports the public types for convenient access:
    from utctimestamp import UtcTimeStamp, TimeDelta, TimeRange

`datetime` is great for dealing with time in most cases, but a datetime
object per value is costly when processing and storing large amounts of
timestamp data. UtcTimeStamp and TimeDelta are single 64-bit millisecond
counts that convert to and from datetime/timedelta at the edges, where
formatting, time zones and calendar math are needed.
"""
from utctimestamp.core.errors import (
    CalendarRangeError,
    RangeDirectionError,
    TimeArithmeticError,
    TimeDivisionByZeroError,
    TimeOverflowError,
)
from utctimestamp.core.timedelta import TimeDelta
from utctimestamp.core.timestamp import UtcTimeStamp
from utctimestamp.core.time_range import TimeRange

__version__ = "0.1.0"

__all__ = [
    "UtcTimeStamp",
    "TimeDelta",
    "TimeRange",
    "TimeArithmeticError",
    "TimeDivisionByZeroError",
    "TimeOverflowError",
    "CalendarRangeError",
    "RangeDirectionError",
]
