"""
Millisecond-precision time delta.

A TimeDelta is a signed 64-bit count of milliseconds. It is the difference
type of UtcTimeStamp: subtracting two timestamps yields a TimeDelta, and a
timestamp plus or minus a TimeDelta is a timestamp.

Division follows integer semantics that round toward zero:
  - `delta / n` -> TimeDelta (shorten by a factor)
  - `delta / other` -> int (how many whole `other` fit into `delta`)
  - `delta % other` -> TimeDelta (remainder, takes the sign of `delta`)

so that `(a / b) * b + a % b == a`. Floor division (`//`) is not defined on
purpose; use `/`.
"""

import operator
from dataclasses import dataclass, field
from datetime import timedelta

from utctimestamp.calendar.conversion import milliseconds_to_timedelta, timedelta_to_milliseconds
from utctimestamp.utils.math import (
    apply_overflow_policy,
    as_integer,
    check_int64,
    trunc_div,
    trunc_rem,
)

_MS_PER_SECOND = 1000
_MS_PER_MINUTE = 60 * _MS_PER_SECOND
_MS_PER_HOUR = 60 * _MS_PER_MINUTE


@dataclass(frozen=True, order=True, slots=True, repr=False)
class TimeDelta:
    """Millisecond precision time delta. Zero, positive and negative are all valid."""
    _milliseconds: int = field(default=0)

    def __post_init__(self):
        ms = check_int64(as_integer(self._milliseconds, "milliseconds"), "TimeDelta")
        object.__setattr__(self, "_milliseconds", ms)

    @classmethod
    def zero(cls) -> "TimeDelta":
        """The zero-length delta."""
        return cls(0)

    @classmethod
    def from_hours(cls, hours: int) -> "TimeDelta":
        """Explicit conversion from integer hours (exactly x3,600,000)."""
        return cls._scaled(hours, _MS_PER_HOUR, "hours")

    @classmethod
    def from_minutes(cls, minutes: int) -> "TimeDelta":
        """Explicit conversion from integer minutes (exactly x60,000)."""
        return cls._scaled(minutes, _MS_PER_MINUTE, "minutes")

    @classmethod
    def from_seconds(cls, seconds: int) -> "TimeDelta":
        """Explicit conversion from integer seconds (exactly x1000)."""
        return cls._scaled(seconds, _MS_PER_SECOND, "seconds")

    @classmethod
    def from_milliseconds(cls, ms: int) -> "TimeDelta":
        """Explicit conversion from integer milliseconds."""
        return cls(ms)

    @classmethod
    def from_timedelta(cls, td: timedelta) -> "TimeDelta":
        """Create from a datetime.timedelta, truncating toward zero to milliseconds."""
        return cls(timedelta_to_milliseconds(td))

    @classmethod
    def _scaled(cls, count, factor: int, unit: str) -> "TimeDelta":
        count = as_integer(count, unit)
        return cls(apply_overflow_policy(count * factor, context=f"TimeDelta.from_{unit}"))

    def as_milliseconds(self) -> int:
        """Explicit conversion to integer milliseconds."""
        return self._milliseconds

    def to_timedelta(self) -> timedelta:
        """Convert to a datetime.timedelta (exact)."""
        return milliseconds_to_timedelta(self._milliseconds)

    def is_zero(self) -> bool:
        """Check whether the timedelta is 0."""
        return self._milliseconds == 0

    def is_positive(self) -> bool:
        """True if the timedelta is strictly positive, False if zero or negative."""
        return self._milliseconds > 0

    def is_negative(self) -> bool:
        """True if the timedelta is strictly negative, False if zero or positive."""
        return self._milliseconds < 0

    # Named forms of the operators below

    def scale(self, factor: int) -> "TimeDelta":
        """Multiply the delta to be `factor` times as long."""
        factor = as_integer(factor, "factor")
        return TimeDelta(apply_overflow_policy(
            self._milliseconds * factor, context="TimeDelta * int",
        ))

    def divide(self, divisor):
        """
        Truncating division.

        Args:
            divisor: An int (returns a shorter TimeDelta) or a TimeDelta
                     (returns how many whole divisors fit, as an int).

        Raises:
            TimeDivisionByZeroError: If divisor is zero.
        """
        if isinstance(divisor, TimeDelta):
            return apply_overflow_policy(
                trunc_div(self._milliseconds, divisor._milliseconds),
                context="TimeDelta / TimeDelta",
            )
        divisor = as_integer(divisor, "divisor")
        return TimeDelta(apply_overflow_policy(
            trunc_div(self._milliseconds, divisor), context="TimeDelta / int",
        ))

    def remainder(self, other: "TimeDelta") -> "TimeDelta":
        """
        How far the delta is from being aligned to `other`.

        Raises:
            TimeDivisionByZeroError: If other is zero.
        """
        if not isinstance(other, TimeDelta):
            raise TypeError(f"Expected a TimeDelta, got {type(other).__name__}")
        return TimeDelta(trunc_rem(self._milliseconds, other._milliseconds))

    def __add__(self, other):
        if isinstance(other, TimeDelta):
            return TimeDelta(apply_overflow_policy(
                self._milliseconds + other._milliseconds, context="TimeDelta + TimeDelta",
            ))
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, TimeDelta):
            return TimeDelta(apply_overflow_policy(
                self._milliseconds - other._milliseconds, context="TimeDelta - TimeDelta",
            ))
        return NotImplemented

    def __mul__(self, other):
        if isinstance(other, TimeDelta):
            return NotImplemented
        try:
            operator.index(other)
        except TypeError:
            return NotImplemented
        return self.scale(other)

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, TimeDelta):
            return self.divide(other)
        try:
            operator.index(other)
        except TypeError:
            return NotImplemented
        return self.divide(other)

    def __mod__(self, other):
        if isinstance(other, TimeDelta):
            return self.remainder(other)
        return NotImplemented

    def __neg__(self) -> "TimeDelta":
        return TimeDelta(apply_overflow_policy(-self._milliseconds, context="-TimeDelta"))

    def __str__(self) -> str:
        return str(self.to_timedelta())

    def __repr__(self) -> str:
        return f"TimeDelta({self._milliseconds})"

    def __reduce__(self):
        return (TimeDelta, (self._milliseconds,))
