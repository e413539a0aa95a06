"""
Signed 64-bit integer helpers for millisecond arithmetic.

This module holds the small set of integer operations the value types are
built on:
  - 64-bit range constants and range checks
  - Truncating (round-toward-zero) division and remainder
  - The overflow policy: raise, wrap (two's complement) or saturate

Python integers are unbounded, so the 64-bit limits of the millisecond
representation are enforced here explicitly. Every arithmetic result produced
by UtcTimeStamp and TimeDelta passes through `apply_overflow_policy`.
"""

import logging
import operator

from utctimestamp.core.errors import TimeDivisionByZeroError, TimeOverflowError

log = logging.getLogger(__name__)

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

OVERFLOW_RAISE = "raise"
OVERFLOW_WRAP = "wrap"
OVERFLOW_SATURATE = "saturate"
OVERFLOW_POLICIES = (OVERFLOW_RAISE, OVERFLOW_WRAP, OVERFLOW_SATURATE)


def as_integer(value, what: str = "value") -> int:
    """
    Coerce an integral value to a plain Python int.

    Accepts anything implementing `__index__` (int, bool, numpy integer
    scalars). Floats, strings and other non-integral objects are rejected.

    Args:
        value: The value to coerce.
        what: Name used in the error message (e.g., "milliseconds").

    Returns:
        The value as a plain int.

    Raises:
        TypeError: If value is not integral.
    """
    try:
        return operator.index(value)
    except TypeError:
        raise TypeError(
            f"{what} must be an integer, got {type(value).__name__}: {value!r}"
        ) from None


def is_int64(value: int) -> bool:
    """Return True if value fits in a signed 64-bit integer."""
    return INT64_MIN <= value <= INT64_MAX


def check_int64(value: int, context: str = "value") -> int:
    """
    Reject integers outside the signed 64-bit range.

    Unlike `apply_overflow_policy`, this always raises. It guards construction
    from raw integers, where no arithmetic took place to wrap or saturate.

    Raises:
        TimeOverflowError: If value is outside [INT64_MIN, INT64_MAX].
    """
    if not is_int64(value):
        raise TimeOverflowError(
            f"{context} {value} is outside the signed 64-bit millisecond range "
            f"[{INT64_MIN}, {INT64_MAX}]."
        )
    return value


def wrap_int64(value: int) -> int:
    """
    Wrap an integer into the signed 64-bit range (two's complement).

    Example:
        >>> wrap_int64(INT64_MAX + 1) == INT64_MIN
        True
    """
    return (value - INT64_MIN) % 2**64 + INT64_MIN


def saturate_int64(value: int) -> int:
    """Clamp an integer to [INT64_MIN, INT64_MAX]."""
    return max(INT64_MIN, min(INT64_MAX, value))


def apply_overflow_policy(value: int, policy: str | None = None, context: str = "result") -> int:
    """
    Bring an arithmetic result back into the signed 64-bit range.

    **Functionally**:
      - In-range results are returned unchanged under every policy.
      - "raise": out-of-range results raise TimeOverflowError.
      - "wrap": out-of-range results wrap around (two's complement).
      - "saturate": out-of-range results clamp to the nearest bound.

    Args:
        value: Unbounded integer result of an arithmetic operation.
        policy: One of OVERFLOW_POLICIES. Defaults to the configured policy
                (see utctimestamp.config.settings).
        context: Description of the operation, used in messages.

    Returns:
        An integer within the signed 64-bit range.

    Raises:
        TimeOverflowError: Under the "raise" policy when value is out of range.
        ValueError: If policy is not a known policy name.
    """
    if is_int64(value):
        return value

    if policy is None:
        # settings imports this module, so resolve it at call time
        from utctimestamp.config.settings import get_settings
        policy = get_settings().overflow_policy

    if policy == OVERFLOW_RAISE:
        raise TimeOverflowError(
            f"{context} overflowed the signed 64-bit millisecond range: {value}."
        )
    if policy == OVERFLOW_WRAP:
        wrapped = wrap_int64(value)
        log.debug("%s overflowed (%d), wrapped to %d", context, value, wrapped)
        return wrapped
    if policy == OVERFLOW_SATURATE:
        saturated = saturate_int64(value)
        log.debug("%s overflowed (%d), saturated to %d", context, value, saturated)
        return saturated

    raise ValueError(
        f"Unknown overflow policy {policy!r}. Expected one of {list(OVERFLOW_POLICIES)}."
    )


def trunc_div(dividend: int, divisor: int) -> int:
    """
    Integer division rounding toward zero.

    Python's `//` floors (rounds toward negative infinity). Millisecond
    arithmetic here truncates instead, so that e.g. -7 / 2 == -3.

    Examples:
        >>> trunc_div(7, 2)
        3
        >>> trunc_div(-7, 2)
        -3
        >>> trunc_div(7, -2)
        -3

    Raises:
        TimeDivisionByZeroError: If divisor is 0.
    """
    if divisor == 0:
        raise TimeDivisionByZeroError(f"Cannot divide {dividend} by zero.")
    quotient = abs(dividend) // abs(divisor)
    # Result is negative exactly when the operand signs differ
    if (dividend < 0) != (divisor < 0):
        return -quotient
    return quotient


def trunc_rem(dividend: int, divisor: int) -> int:
    """
    Remainder matching `trunc_div`: the result takes the sign of the dividend.

    Satisfies `trunc_div(a, b) * b + trunc_rem(a, b) == a` for all b != 0.

    Examples:
        >>> trunc_rem(-7, 2)
        -1
        >>> trunc_rem(7, -2)
        1

    Raises:
        TimeDivisionByZeroError: If divisor is 0.
    """
    if divisor == 0:
        raise TimeDivisionByZeroError(f"Cannot take {dividend} modulo zero.")
    return dividend - trunc_div(dividend, divisor) * divisor
