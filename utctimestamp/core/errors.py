"""
Error taxonomy for timestamp and time delta arithmetic.

Every failure in this library is local, synchronous and immediate: there is no
I/O in the core and nothing to retry. The classes below also inherit from the
matching built-in exception, so callers can catch either the specific class
or the familiar built-in (ZeroDivisionError, OverflowError, ValueError).
"""


class TimeArithmeticError(ArithmeticError):
    """Base class for arithmetic failures on UtcTimeStamp and TimeDelta values."""
    pass


class TimeDivisionByZeroError(TimeArithmeticError, ZeroDivisionError):
    """
    Raised when dividing by a zero divisor.

    **Raised by**:
      - TimeDelta / 0 and TimeDelta / TimeDelta.zero()
      - TimeDelta % TimeDelta.zero()
      - UtcTimeStamp.align_to / align_to_anchored with a zero frequency
    """
    pass


class TimeOverflowError(TimeArithmeticError, OverflowError):
    """
    Raised when a millisecond count leaves the signed 64-bit range.

    Arithmetic raises this only under the "raise" overflow policy (the
    default). Constructing a value from an out-of-range integer always raises.
    """
    pass


class CalendarRangeError(TimeOverflowError):
    """
    Raised when a timestamp cannot be represented as a `datetime`.

    `datetime` covers years 1 through 9999, a much smaller span than the
    signed 64-bit millisecond range.
    """
    pass


class RangeDirectionError(ValueError):
    """
    Raised by the TimeRange direction guard.

    A non-empty range whose step is zero or points away from the end bound
    would never terminate. The guard is opt-in (see Settings.strict_range_direction).
    """
    pass
