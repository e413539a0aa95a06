"""
Tests for utctimestamp/utils/math.py

These tests verify truncating division/remainder, 64-bit range helpers and
the overflow policy using small hand-picked values.
"""

import numpy as np
import pytest

from utctimestamp import TimeDivisionByZeroError, TimeOverflowError
from utctimestamp.config.settings import Settings, set_settings
from utctimestamp.utils.math import (
    INT64_MAX,
    INT64_MIN,
    apply_overflow_policy,
    as_integer,
    check_int64,
    is_int64,
    saturate_int64,
    trunc_div,
    trunc_rem,
    wrap_int64,
)


def test_trunc_div_rounds_toward_zero():
    """Test truncating division for every sign combination."""
    assert trunc_div(7, 2) == 3
    assert trunc_div(-7, 2) == -3
    assert trunc_div(7, -2) == -3
    assert trunc_div(-7, -2) == 3
    assert trunc_div(6, 3) == 2
    assert trunc_div(0, -5) == 0


def test_trunc_rem_takes_sign_of_dividend():
    """Test the remainder matching truncating division."""
    assert trunc_rem(7, 2) == 1
    assert trunc_rem(-7, 2) == -1
    assert trunc_rem(7, -2) == 1
    assert trunc_rem(-7, -2) == -1
    assert trunc_rem(6, 3) == 0


def test_div_rem_law():
    """Test trunc_div(a, b) * b + trunc_rem(a, b) == a."""
    for a in range(-20, 21):
        for b in (-7, -3, -1, 1, 2, 5):
            assert trunc_div(a, b) * b + trunc_rem(a, b) == a


def test_zero_divisor_raises():
    """Test that a zero divisor raises the library error (a ZeroDivisionError)."""
    with pytest.raises(TimeDivisionByZeroError):
        trunc_div(1, 0)
    with pytest.raises(ZeroDivisionError):
        trunc_rem(1, 0)


def test_int64_helpers():
    """Test range check, wrap and saturate at the bounds."""
    assert is_int64(INT64_MAX)
    assert not is_int64(INT64_MAX + 1)
    assert wrap_int64(INT64_MAX + 1) == INT64_MIN
    assert wrap_int64(INT64_MIN - 1) == INT64_MAX
    assert wrap_int64(-5) == -5
    assert saturate_int64(INT64_MAX * 3) == INT64_MAX
    assert saturate_int64(INT64_MIN * 3) == INT64_MIN
    assert check_int64(42) == 42
    with pytest.raises(TimeOverflowError):
        check_int64(INT64_MIN - 1)


def test_apply_overflow_policy_explicit():
    """Test each policy passed explicitly."""
    assert apply_overflow_policy(5, "raise") == 5
    with pytest.raises(TimeOverflowError):
        apply_overflow_policy(INT64_MAX + 1, "raise")
    assert apply_overflow_policy(INT64_MAX + 1, "wrap") == INT64_MIN
    assert apply_overflow_policy(INT64_MAX + 1, "saturate") == INT64_MAX
    with pytest.raises(ValueError):
        apply_overflow_policy(INT64_MAX + 1, "explode")


def test_apply_overflow_policy_uses_settings():
    """Test that the configured policy is the default."""
    with pytest.raises(TimeOverflowError):
        apply_overflow_policy(INT64_MAX + 1)
    set_settings(Settings(overflow_policy="saturate"))
    assert apply_overflow_policy(INT64_MIN - 10) == INT64_MIN


def test_as_integer():
    """Test integral coercion and rejection of non-integers."""
    assert as_integer(np.int32(7)) == 7
    assert as_integer(True) == 1
    with pytest.raises(TypeError, match="seconds must be an integer"):
        as_integer(1.0, "seconds")
