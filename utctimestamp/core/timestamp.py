"""
Millisecond-resolution UTC timestamp.

**Conceptual**: A UtcTimeStamp is a single signed 64-bit integer counting
milliseconds since 1970-01-01T00:00:00Z. It carries no time zone, no calendar
fields and no sub-millisecond precision. That makes it cheap to store, hash,
compare and add to, which matters when a dataset holds millions of
timestamps. Anything calendar-related (formatting, leap years, time zones) is
handled by converting to a `datetime` at the edges.

**Functionally**:
  - Construct from ints (`from_milliseconds`, `from_seconds`), from a
    datetime (`from_datetime`) or from a clock (`now`).
  - Arithmetic with TimeDelta: `ts + delta`, `delta + ts`, `ts - delta`,
    and `ts - ts` (which yields a TimeDelta).
  - Alignment to a frequency grid (`align_to`, `align_to_anchored`).
  - Total ordering and hashing by the underlying integer.

**Usage**:
    >>> from datetime import datetime, timezone
    >>> ts = UtcTimeStamp.from_datetime(datetime(2019, 4, 14, tzinfo=timezone.utc))
    >>> ts.as_milliseconds()
    1555200000000
    >>> str(ts + TimeDelta.from_hours(12))
    '2019-04-14 12:00:00+00:00'
"""

from dataclasses import dataclass, field
from datetime import datetime

from utctimestamp.calendar.conversion import datetime_to_milliseconds, milliseconds_to_datetime
from utctimestamp.core.errors import TimeDivisionByZeroError
from utctimestamp.core.timedelta import TimeDelta
from utctimestamp.utils.math import (
    apply_overflow_policy,
    as_integer,
    check_int64,
    trunc_div,
)
from utctimestamp.utils.time import Clock, get_real_clock


@dataclass(frozen=True, order=True, slots=True, repr=False)
class UtcTimeStamp:
    """
    A dumb but fast UTC timestamp: milliseconds since the Unix epoch.

    Any signed 64-bit value is valid, including negative values (instants
    before 1970). Values are immutable; arithmetic returns new instances.

    Attributes:
        _milliseconds: The underlying count. Read it with `as_milliseconds()`.
    """
    _milliseconds: int = field(default=0)

    def __post_init__(self):
        """Coerce to a plain int and enforce the 64-bit range."""
        ms = check_int64(as_integer(self._milliseconds, "milliseconds"), "Timestamp")
        object.__setattr__(self, "_milliseconds", ms)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def zero(cls) -> "UtcTimeStamp":
        """The epoch, 1970-01-01 00:00:00 UTC."""
        return cls(0)

    @classmethod
    def now(cls, clock: Clock | None = None) -> "UtcTimeStamp":
        """
        The current instant, truncated to milliseconds.

        Args:
            clock: Source of the current time. Defaults to the system clock
                   (RealClock). Pass a FrozenClock for deterministic tests.

        Returns:
            UtcTimeStamp for clock.now().
        """
        if clock is None:
            clock = get_real_clock()
        return cls.from_datetime(clock.now())

    @classmethod
    def from_milliseconds(cls, ms: int) -> "UtcTimeStamp":
        """Explicit conversion from integer milliseconds."""
        return cls(ms)

    @classmethod
    def from_seconds(cls, seconds: int) -> "UtcTimeStamp":
        """Explicit conversion from integer seconds (exactly x1000)."""
        seconds = as_integer(seconds, "seconds")
        return cls(apply_overflow_policy(seconds * 1000, context="UtcTimeStamp.from_seconds"))

    @classmethod
    def from_datetime(cls, dt: datetime) -> "UtcTimeStamp":
        """
        Create a timestamp from a datetime.

        Naive datetimes are interpreted as UTC; aware datetimes are converted
        to UTC. Sub-millisecond parts are floored.
        """
        return cls(datetime_to_milliseconds(dt))

    # ------------------------------------------------------------------
    # Inspection and conversion
    # ------------------------------------------------------------------

    def as_milliseconds(self) -> int:
        """Explicit conversion to integer milliseconds."""
        return self._milliseconds

    def is_zero(self) -> bool:
        """Check whether the timestamp is the epoch."""
        return self._milliseconds == 0

    def to_datetime(self) -> datetime:
        """
        Convert to an aware UTC datetime.

        Raises:
            CalendarRangeError: If the timestamp is outside datetime's years 1..9999.
        """
        return milliseconds_to_datetime(self._milliseconds)

    # ------------------------------------------------------------------
    # Alignment
    # ------------------------------------------------------------------

    def align_to(self, freq: TimeDelta) -> "UtcTimeStamp":
        """Align the timestamp to a frequency grid anchored at the epoch."""
        return self.align_to_anchored(UtcTimeStamp.zero(), freq)

    def align_to_anchored(self, anchor: "UtcTimeStamp", freq: TimeDelta) -> "UtcTimeStamp":
        """
        Align the timestamp to a frequency grid passing through `anchor`.

        **Mathematical**:
            result = trunc((self - anchor) / freq) * freq + anchor

        The quotient is truncated toward zero, not floored. For timestamps
        after the anchor this snaps down; for timestamps before the anchor it
        snaps toward the anchor (i.e., up in absolute time).

        Args:
            anchor: A point on the grid.
            freq: Grid spacing. Must be non-zero.

        Returns:
            The aligned timestamp.

        Raises:
            TimeDivisionByZeroError: If freq is zero.
            TypeError: If anchor or freq have the wrong type.

        Example:
            >>> ts = UtcTimeStamp.from_seconds(1601321571)   # 2020-09-28 19:32:51
            >>> anchor = UtcTimeStamp.from_seconds(1601251263)  # 2020-09-28 00:01:03
            >>> str(ts.align_to_anchored(anchor, TimeDelta.from_minutes(5)))
            '2020-09-28 19:31:03+00:00'
        """
        if not isinstance(anchor, UtcTimeStamp):
            raise TypeError(f"anchor must be a UtcTimeStamp, got {type(anchor).__name__}")
        if not isinstance(freq, TimeDelta):
            raise TypeError(f"freq must be a TimeDelta, got {type(freq).__name__}")
        if freq.is_zero():
            raise TimeDivisionByZeroError(
                f"Cannot align {self!r} to a zero frequency. Frequency must be non-zero."
            )

        offset = apply_overflow_policy(
            self._milliseconds - anchor._milliseconds,
            context="UtcTimeStamp.align_to_anchored offset",
        )
        steps = trunc_div(offset, freq.as_milliseconds())
        aligned = apply_overflow_policy(
            steps * freq.as_milliseconds() + anchor._milliseconds,
            context="UtcTimeStamp.align_to_anchored result",
        )
        return UtcTimeStamp(aligned)

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def __add__(self, other):
        if isinstance(other, TimeDelta):
            return UtcTimeStamp(apply_overflow_policy(
                self._milliseconds + other.as_milliseconds(),
                context="UtcTimeStamp + TimeDelta",
            ))
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, TimeDelta):
            return UtcTimeStamp(apply_overflow_policy(
                self._milliseconds - other.as_milliseconds(),
                context="UtcTimeStamp - TimeDelta",
            ))
        if isinstance(other, UtcTimeStamp):
            return TimeDelta(apply_overflow_policy(
                self._milliseconds - other._milliseconds,
                context="UtcTimeStamp - UtcTimeStamp",
            ))
        return NotImplemented

    # ------------------------------------------------------------------
    # Display and pickling
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return str(self.to_datetime())

    def __repr__(self) -> str:
        return f"UtcTimeStamp({self._milliseconds})"

    def __reduce__(self):
        return (UtcTimeStamp, (self._milliseconds,))
