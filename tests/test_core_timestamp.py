"""
Tests for utctimestamp/core/timestamp.py

These tests verify construction, ordering, arithmetic with TimeDelta,
alignment (including the truncating behaviour before the anchor) and the
overflow policy at the 64-bit bounds.
"""

import pickle
from datetime import datetime, timedelta, timezone

import numpy as np
import pytest

from utctimestamp import (
    TimeDelta,
    TimeDivisionByZeroError,
    TimeOverflowError,
    UtcTimeStamp,
)
from utctimestamp.config.settings import Settings, set_settings
from utctimestamp.utils.math import INT64_MAX, INT64_MIN
from utctimestamp.utils.time import FrozenClock


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def ts(*args) -> UtcTimeStamp:
    return UtcTimeStamp.from_datetime(utc(*args))


# ============================================================================
# Construction
# ============================================================================

def test_zero_is_epoch():
    """Test that zero() is the epoch and reports is_zero()."""
    zero = UtcTimeStamp.zero()
    assert zero.as_milliseconds() == 0
    assert zero.is_zero()
    assert zero.to_datetime() == utc(1970, 1, 1)
    assert not UtcTimeStamp.from_milliseconds(1).is_zero()


def test_from_seconds_multiplies_exactly():
    """Test that from_seconds is exactly milliseconds * 1000."""
    assert UtcTimeStamp.from_seconds(1555200000).as_milliseconds() == 1555200000000
    assert UtcTimeStamp.from_seconds(-3).as_milliseconds() == -3000


def test_negative_timestamps_are_valid():
    """Test that instants before the epoch are representable."""
    before = UtcTimeStamp.from_milliseconds(-1)
    assert before < UtcTimeStamp.zero()
    assert before.to_datetime() == utc(1969, 12, 31, 23, 59, 59, 999000)


def test_any_int64_is_valid():
    """Test that the 64-bit extremes construct without calendar checks."""
    assert UtcTimeStamp(INT64_MAX).as_milliseconds() == INT64_MAX
    assert UtcTimeStamp(INT64_MIN).as_milliseconds() == INT64_MIN


def test_out_of_range_construction_raises():
    """Test that integers beyond 64 bits are rejected."""
    with pytest.raises(TimeOverflowError):
        UtcTimeStamp(INT64_MAX + 1)
    with pytest.raises(TimeOverflowError):
        UtcTimeStamp.from_milliseconds(INT64_MIN - 1)


def test_non_integer_construction_raises():
    """Test that floats and strings are not accepted as milliseconds."""
    with pytest.raises(TypeError):
        UtcTimeStamp(1.5)
    with pytest.raises(TypeError):
        UtcTimeStamp("1000")


def test_numpy_integers_are_accepted():
    """Test that numpy int64 scalars coerce to plain ints."""
    value = UtcTimeStamp(np.int64(42))
    assert value.as_milliseconds() == 42
    assert type(value.as_milliseconds()) is int


def test_now_uses_injected_clock():
    """Test that now() converts the clock's datetime."""
    clock = FrozenClock(utc(2019, 3, 13, 16, 14, 9))
    assert UtcTimeStamp.now(clock) == ts(2019, 3, 13, 16, 14, 9)


def test_now_defaults_to_system_clock():
    """Test that now() without a clock is close to the real current time."""
    before = UtcTimeStamp.from_datetime(datetime.now(timezone.utc))
    current = UtcTimeStamp.now()
    after = UtcTimeStamp.from_datetime(datetime.now(timezone.utc))
    assert before <= current <= after


def test_immutable():
    """Test that timestamps cannot be mutated in place."""
    value = UtcTimeStamp(5)
    with pytest.raises(AttributeError):
        value._milliseconds = 6


# ============================================================================
# Ordering and equality
# ============================================================================

def test_timestamp_ord_eq():
    """Test ordering and equality by underlying integer."""
    ts1 = UtcTimeStamp.from_milliseconds(111)
    ts2 = UtcTimeStamp.from_milliseconds(222)
    ts3 = UtcTimeStamp.from_milliseconds(222)

    assert ts1 < ts2
    assert ts2 > ts1
    assert ts1 <= ts2
    assert ts2 >= ts3
    assert ts2 <= ts3
    assert ts2 == ts3
    assert ts1 != ts3


def test_ordering_matches_milliseconds():
    """Test a < b iff a.as_milliseconds() < b.as_milliseconds() over a sample."""
    values = [-5000, -1, 0, 1, 999, 1000, 1555200000000]
    for a in values:
        for b in values:
            assert (UtcTimeStamp(a) < UtcTimeStamp(b)) == (a < b)
            assert (UtcTimeStamp(a) == UtcTimeStamp(b)) == (a == b)


def test_hash_follows_equality():
    """Test that equal timestamps hash equally (usable as dict keys)."""
    lookup = {UtcTimeStamp(1000): "a"}
    assert lookup[UtcTimeStamp.from_seconds(1)] == "a"
    assert len({UtcTimeStamp(1), UtcTimeStamp(1), UtcTimeStamp(2)}) == 2


def test_timestamp_not_equal_to_delta():
    """Test that a timestamp and a delta with the same count differ."""
    assert UtcTimeStamp(5) != TimeDelta(5)
    with pytest.raises(TypeError):
        UtcTimeStamp(5) < TimeDelta(6)


# ============================================================================
# Arithmetic
# ============================================================================

def test_add_and_subtract_delta():
    """Test timestamp +/- delta and delta + timestamp."""
    start = ts(2019, 4, 14)
    twelve_hours = TimeDelta.from_hours(12)

    assert start + twelve_hours == ts(2019, 4, 14, 12)
    assert twelve_hours + start == ts(2019, 4, 14, 12)
    assert start - twelve_hours == ts(2019, 4, 13, 12)


def test_augmented_assignment_rebinds():
    """Test that += and -= produce new values and leave the original alone."""
    original = UtcTimeStamp(1000)
    cursor = original
    cursor += TimeDelta(500)
    assert cursor == UtcTimeStamp(1500)
    cursor -= TimeDelta(2000)
    assert cursor == UtcTimeStamp(-500)
    assert original == UtcTimeStamp(1000)


def test_difference_of_timestamps_is_delta():
    """Test that timestamp - timestamp yields a signed TimeDelta."""
    a = ts(2019, 4, 16)
    b = ts(2019, 4, 14)
    assert a - b == TimeDelta.from_hours(48)
    assert b - a == TimeDelta.from_hours(-48)


def test_arithmetic_identities():
    """Test (t + d) - d == t and (t + d) - t == d."""
    for t_ms in (-86_400_000, 0, 1555200000000):
        for d_ms in (-123456, 0, 1, 43_200_000):
            t = UtcTimeStamp(t_ms)
            d = TimeDelta(d_ms)
            assert (t + d) - d == t
            assert (t + d) - t == d


def test_unsupported_operands():
    """Test that adding two timestamps or an int is a TypeError."""
    with pytest.raises(TypeError):
        UtcTimeStamp(1) + UtcTimeStamp(2)
    with pytest.raises(TypeError):
        UtcTimeStamp(1) + 5
    with pytest.raises(TypeError):
        TimeDelta(1) - UtcTimeStamp(2)


def test_timestamp_and_delta_vs_datetime():
    """Test that millisecond arithmetic agrees with datetime arithmetic."""
    c_dt = utc(2019, 3, 13, 16, 14, 9)
    c_td = timedelta(milliseconds=123456)

    my_dt = UtcTimeStamp.from_datetime(c_dt)
    my_td = TimeDelta.from_milliseconds(123456)
    assert TimeDelta.from_timedelta(c_td) == my_td

    c_result = c_dt + c_td * 555
    my_result = my_dt + my_td * 555
    assert UtcTimeStamp.from_datetime(c_result) == my_result


def test_overflow_raises_by_default():
    """Test the default "raise" policy at the 64-bit bounds."""
    with pytest.raises(TimeOverflowError):
        UtcTimeStamp(INT64_MAX) + TimeDelta(1)
    with pytest.raises(TimeOverflowError):
        UtcTimeStamp(INT64_MIN) - TimeDelta(1)
    with pytest.raises(TimeOverflowError):
        UtcTimeStamp(INT64_MAX) - UtcTimeStamp(-1)
    with pytest.raises(OverflowError):
        UtcTimeStamp.from_seconds(INT64_MAX)


def test_overflow_wraps_under_wrap_policy():
    """Test two's complement wrap-around when configured."""
    set_settings(Settings(overflow_policy="wrap"))
    assert UtcTimeStamp(INT64_MAX) + TimeDelta(1) == UtcTimeStamp(INT64_MIN)
    assert UtcTimeStamp(INT64_MIN) - TimeDelta(2) == UtcTimeStamp(INT64_MAX - 1)


def test_overflow_saturates_under_saturate_policy():
    """Test clamping to the bounds when configured."""
    set_settings(Settings(overflow_policy="saturate"))
    assert UtcTimeStamp(INT64_MAX) + TimeDelta(10) == UtcTimeStamp(INT64_MAX)
    assert UtcTimeStamp(INT64_MIN) - TimeDelta(10) == UtcTimeStamp(INT64_MIN)


# ============================================================================
# Alignment
# ============================================================================

def test_align_to_anchored():
    """Test alignment to a 5 minute grid anchored at midnight and at 09:01:03."""
    value = ts(2020, 9, 28, 19, 32, 51)
    freq = TimeDelta.from_seconds(60 * 5)

    assert value.align_to_anchored(ts(2020, 9, 28, 0, 0, 0), freq) == ts(2020, 9, 28, 19, 30, 0)
    assert value.align_to_anchored(ts(2020, 9, 28, 9, 1, 3), freq) == ts(2020, 9, 28, 19, 31, 3)


def test_align_to_anchored_eq():
    """Test that two timestamps in the same bucket align to the same value."""
    anchor = ts(2020, 1, 1)
    freq = TimeDelta.from_seconds(5 * 60)

    ts1 = ts(2020, 1, 1, 12, 1, 11)
    ts2 = ts(2020, 1, 1, 12, 4, 11)
    assert ts1.align_to_anchored(anchor, freq) == ts2.align_to_anchored(anchor, freq)


def test_align_to_uses_epoch_anchor():
    """Test that align_to equals align_to_anchored(zero(), freq)."""
    value = ts(2020, 9, 28, 19, 32, 51)
    freq = TimeDelta.from_minutes(15)
    assert value.align_to(freq) == value.align_to_anchored(UtcTimeStamp.zero(), freq)
    assert value.align_to(freq) == ts(2020, 9, 28, 19, 30)


def test_align_truncates_toward_anchor():
    """Test that timestamps before the anchor snap toward it, not away."""
    freq = TimeDelta.from_milliseconds(1000)
    # -1500 ms: truncating division gives -1, so -1000 (floor would give -2000)
    assert UtcTimeStamp(-1500).align_to(freq) == UtcTimeStamp(-1000)
    assert UtcTimeStamp(-999).align_to(freq) == UtcTimeStamp(0)
    assert UtcTimeStamp(1500).align_to(freq) == UtcTimeStamp(1000)


def test_align_with_negative_frequency():
    """Test that a negative frequency gives the same grid as its magnitude."""
    assert UtcTimeStamp(1500).align_to(TimeDelta(-1000)) == UtcTimeStamp(1000)
    assert UtcTimeStamp(-1500).align_to(TimeDelta(-1000)) == UtcTimeStamp(-1000)


def test_align_is_idempotent():
    """Test that aligning twice equals aligning once."""
    for t_ms in (-7_777_777, -1, 0, 1, 1601321571000, 1601321571123):
        for f_ms in (1, 7, 1000, 300_000, -300_000):
            t = UtcTimeStamp(t_ms)
            freq = TimeDelta(f_ms)
            assert t.align_to(freq).align_to(freq) == t.align_to(freq)


def test_align_to_zero_frequency_raises():
    """Test that a zero frequency is an explicit error."""
    with pytest.raises(TimeDivisionByZeroError):
        UtcTimeStamp(1000).align_to(TimeDelta.zero())
    with pytest.raises(ZeroDivisionError):
        UtcTimeStamp(1000).align_to_anchored(UtcTimeStamp(5), TimeDelta.zero())


def test_align_rejects_wrong_types():
    """Test that align_to requires a TimeDelta frequency."""
    with pytest.raises(TypeError):
        UtcTimeStamp(1000).align_to(1000)
    with pytest.raises(TypeError):
        UtcTimeStamp(1000).align_to_anchored(TimeDelta(1), TimeDelta(1))


# ============================================================================
# Display and pickling
# ============================================================================

def test_str_delegates_to_datetime():
    """Test that str() uses datetime's default rendering."""
    assert str(ts(2019, 4, 14)) == "2019-04-14 00:00:00+00:00"
    assert str(UtcTimeStamp(1)) == "1970-01-01 00:00:00.001000+00:00"


def test_repr_shows_raw_value():
    """Test that repr() shows the underlying count."""
    assert repr(UtcTimeStamp(1555200000000)) == "UtcTimeStamp(1555200000000)"


def test_pickle_round_trip():
    """Test that timestamps pickle by value."""
    value = UtcTimeStamp(-123456789)
    assert pickle.loads(pickle.dumps(value)) == value
