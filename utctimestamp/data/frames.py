"""
Vectorized conversions between millisecond arrays and numpy/pandas datetimes.

**Conceptual**: UtcTimeStamp and TimeDelta are for scalar work. Large batches
of timestamps are better kept as a numpy int64 array of milliseconds (the
exact same representation, eight bytes per value). This module converts such
arrays to and from pandas datetime structures for display and calendar-aware
operations, and provides array versions of TimeRange and alignment.

**Conventions**:
  - Millisecond arrays are numpy int64, milliseconds since the epoch.
  - Datetime outputs are tz-aware UTC with millisecond resolution
    (`datetime64[ms, UTC]`), which covers the full datetime year range
    instead of the 1677-2262 window of nanosecond resolution.
  - Naive datetime inputs are taken as UTC; aware ones are converted to UTC.
  - Sub-millisecond parts are floored, as in the scalar conversion.

**Overflow**: these functions operate on raw int64 arrays and follow numpy
integer semantics (wrap-around) for intermediate arithmetic; the configured
overflow policy applies to the scalar types only.
"""

from typing import Iterable

import numpy as np
import pandas as pd

from utctimestamp.calendar.boundary import coerce_timedelta, coerce_timestamp
from utctimestamp.core.errors import RangeDirectionError, TimeDivisionByZeroError
from utctimestamp.core.timedelta import TimeDelta
from utctimestamp.core.timestamp import UtcTimeStamp

# Multiplier (positive) or divisor (negative) to reach milliseconds per numpy unit
_UNIT_TO_MS = {
    "s": 1000,
    "ms": 1,
    "us": -1000,
    "ns": -1_000_000,
}


def timestamps_to_array(timestamps: Iterable[UtcTimeStamp]) -> np.ndarray:
    """
    Pack timestamps into an int64 millisecond array.

    Example:
        >>> timestamps_to_array([UtcTimeStamp(1), UtcTimeStamp(2)])
        array([1, 2])
    """
    return np.fromiter((coerce_timestamp(ts).as_milliseconds() for ts in timestamps), dtype=np.int64)


def array_to_timestamps(ms: Iterable[int]) -> list[UtcTimeStamp]:
    """Unpack an int64 millisecond array into UtcTimeStamp values."""
    return [UtcTimeStamp(int(value)) for value in np.asarray(ms, dtype=np.int64)]


def timedeltas_to_array(deltas: Iterable[TimeDelta]) -> np.ndarray:
    """Pack time deltas into an int64 millisecond array."""
    return np.fromiter((coerce_timedelta(d).as_milliseconds() for d in deltas), dtype=np.int64)


def milliseconds_to_datetime_index(ms: Iterable[int], name: str | None = None) -> pd.DatetimeIndex:
    """
    Convert milliseconds since the epoch to a UTC DatetimeIndex.

    Args:
        ms: Array-like of integer milliseconds.
        name: Optional index name.

    Returns:
        DatetimeIndex with dtype datetime64[ms, UTC].
    """
    values = np.asarray(ms, dtype=np.int64).view("datetime64[ms]")
    return pd.DatetimeIndex(values, name=name).tz_localize("UTC")


def milliseconds_to_timedelta_index(ms: Iterable[int], name: str | None = None) -> pd.TimedeltaIndex:
    """Convert integer milliseconds to a TimedeltaIndex (timedelta64[ms])."""
    values = np.asarray(ms, dtype=np.int64).view("timedelta64[ms]")
    return pd.TimedeltaIndex(values, name=name)


def datetime_series_to_milliseconds(values) -> np.ndarray:
    """
    Convert datetimes (Series, DatetimeIndex, list of datetime) to milliseconds.

    Args:
        values: Anything pd.DatetimeIndex accepts. ISO 8601 strings are parsed
                by pandas.

    Returns:
        int64 numpy array of milliseconds since the epoch.

    Raises:
        ValueError: If any value is missing (NaT).
    """
    index = pd.DatetimeIndex(values)
    if index.hasnans:
        raise ValueError(
            f"Cannot convert missing datetimes (NaT) to milliseconds. "
            f"Found {int(index.isna().sum())} missing value(s)."
        )
    if index.tz is not None:
        index = index.tz_convert("UTC").tz_localize(None)

    factor = _UNIT_TO_MS[index.unit]
    raw = index.asi8
    if factor > 0:
        return raw * factor
    # numpy // floors, matching the scalar conversion
    return raw // -factor


def timedelta_series_to_milliseconds(values) -> np.ndarray:
    """
    Convert timedeltas (Series, TimedeltaIndex, list of timedelta) to milliseconds.

    Sub-millisecond parts are truncated toward zero, as in TimeDelta.from_timedelta.

    Raises:
        ValueError: If any value is missing (NaT).
    """
    index = pd.TimedeltaIndex(values)
    if index.hasnans:
        raise ValueError(
            f"Cannot convert missing timedeltas (NaT) to milliseconds. "
            f"Found {int(index.isna().sum())} missing value(s)."
        )

    factor = _UNIT_TO_MS[index.unit]
    raw = index.asi8
    if factor > 0:
        return raw * factor
    return np.sign(raw) * (np.abs(raw) // -factor)


def time_range_to_array(start, end, step, right_closed: bool = True) -> np.ndarray:
    """
    Array equivalent of TimeRange: every timestamp of the range as int64 ms.

    Same left-closed / right-closed-or-open semantics as TimeRange. An array
    has to be finite, so a non-empty range with a non-positive step raises
    RangeDirectionError regardless of the strict setting.

    Args:
        start, end: Timestamp-like values (UtcTimeStamp, datetime or int ms).
        step: Delta-like value (TimeDelta, timedelta or int ms).
        right_closed: Whether `end` may be included.

    Returns:
        int64 numpy array of milliseconds.
    """
    start_ms = coerce_timestamp(start).as_milliseconds()
    end_ms = coerce_timestamp(end).as_milliseconds()
    step_ms = coerce_timedelta(step).as_milliseconds()

    empty = start_ms > end_ms if right_closed else start_ms >= end_ms
    if empty:
        return np.empty(0, dtype=np.int64)
    if step_ms <= 0:
        raise RangeDirectionError(
            f"Cannot materialize a non-terminating range from {start_ms} to {end_ms} "
            f"with step {step_ms} ms."
        )

    span = end_ms - start_ms
    if right_closed:
        count = span // step_ms + 1
    else:
        count = -(-span // step_ms)
    return start_ms + step_ms * np.arange(count, dtype=np.int64)


def align_milliseconds(ms: Iterable[int], freq, anchor=0) -> np.ndarray:
    """
    Vectorized UtcTimeStamp.align_to_anchored.

    Uses the same truncating (round-toward-zero) quotient as the scalar
    version, so values before the anchor snap toward it.

    Raises:
        TimeDivisionByZeroError: If freq is zero.
    """
    freq_ms = coerce_timedelta(freq).as_milliseconds()
    anchor_ms = coerce_timestamp(anchor).as_milliseconds()
    if freq_ms == 0:
        raise TimeDivisionByZeroError("Cannot align to a zero frequency. Frequency must be non-zero.")

    offset = np.asarray(ms, dtype=np.int64) - np.int64(anchor_ms)
    quotient = offset // freq_ms
    # Floor -> truncate: bump inexact quotients whose operand signs differ
    inexact = (offset % freq_ms) != 0
    quotient = quotient + (inexact & ((offset < 0) != (freq_ms < 0)))
    return quotient * freq_ms + anchor_ms


def add_datetime_column(
    df: pd.DataFrame,
    ms_col: str,
    out_col: str | None = None,
) -> pd.DataFrame:
    """
    Return a copy of df with a UTC datetime column derived from a millisecond column.

    Args:
        df: DataFrame holding an integer millisecond column.
        ms_col: Name of the millisecond column.
        out_col: Name of the new column. Defaults to ms_col with a trailing
                 "_ms" removed, or ms_col + "_datetime".

    Raises:
        KeyError: If ms_col is missing.
    """
    if ms_col not in df.columns:
        raise KeyError(
            f"Millisecond column '{ms_col}' not found in DataFrame. "
            f"Available columns: {list(df.columns)}"
        )
    if out_col is None:
        out_col = ms_col[:-3] if ms_col.endswith("_ms") and len(ms_col) > 3 else f"{ms_col}_datetime"

    result = df.copy()
    result[out_col] = pd.Series(
        milliseconds_to_datetime_index(result[ms_col].to_numpy()),
        index=result.index,
    )
    return result
