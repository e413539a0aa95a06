"""
Serialization of timestamps and deltas: raw integer wire format and CSV files.

**Wire format**: a UtcTimeStamp or TimeDelta serializes to one bare signed
64-bit integer meaning **milliseconds** (since the epoch for timestamps).
There is no other schema, so the unit must be documented by whatever format
embeds the value; the CSV helpers below use a `_ms` column-name suffix by
convention.

**CSV files**: millisecond columns are written as integers and validated on
both write and read (see utctimestamp.data.schemas). Datetime columns are
converted to milliseconds on write; use
utctimestamp.data.frames.add_datetime_column to get human-readable datetimes
back after reading.
"""

import json
import logging
from pathlib import Path

import numpy as np
import pandas as pd

from utctimestamp.core.timedelta import TimeDelta
from utctimestamp.core.timestamp import UtcTimeStamp
from utctimestamp.data.frames import (
    datetime_series_to_milliseconds,
    timedelta_series_to_milliseconds,
    timedeltas_to_array,
    timestamps_to_array,
)
from utctimestamp.data.schemas import SchemaValidationError, validate_millisecond_columns
from utctimestamp.utils.math import as_integer

log = logging.getLogger(__name__)


def to_wire(value: UtcTimeStamp | TimeDelta) -> int:
    """
    Serialize a timestamp or delta to its raw millisecond integer.

    Raises:
        TypeError: If value is neither a UtcTimeStamp nor a TimeDelta.
    """
    if isinstance(value, (UtcTimeStamp, TimeDelta)):
        return value.as_milliseconds()
    raise TypeError(f"Cannot serialize {type(value).__name__} as milliseconds: {value!r}")


def _wire_int(raw, what: str) -> int:
    # bool is an int subclass but never a valid wire value
    if isinstance(raw, bool):
        raise TypeError(f"{what} wire value must be an integer, got bool: {raw!r}")
    return as_integer(raw, f"{what} wire value")


def timestamp_from_wire(raw: int) -> UtcTimeStamp:
    """Deserialize a timestamp from raw milliseconds since the epoch."""
    return UtcTimeStamp(_wire_int(raw, "UtcTimeStamp"))


def timedelta_from_wire(raw: int) -> TimeDelta:
    """Deserialize a delta from raw milliseconds."""
    return TimeDelta(_wire_int(raw, "TimeDelta"))


def json_default(obj):
    """
    `default=` hook for json.dumps encoding timestamps and deltas as integers.

    Example:
        >>> json.dumps({"at_ms": UtcTimeStamp(5)}, default=json_default)
        '{"at_ms": 5}'
    """
    if isinstance(obj, (UtcTimeStamp, TimeDelta)):
        return obj.as_milliseconds()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def dumps_json(obj, **kwargs) -> str:
    """json.dumps with timestamps and deltas encoded as millisecond integers."""
    return json.dumps(obj, default=json_default, **kwargs)


def _column_to_milliseconds(series: pd.Series, col: str) -> np.ndarray:
    """Convert one DataFrame column to int64 milliseconds, whatever it holds."""
    if pd.api.types.is_integer_dtype(series):
        return series.to_numpy(dtype=np.int64)
    if pd.api.types.is_datetime64_any_dtype(series):
        return datetime_series_to_milliseconds(series)
    if pd.api.types.is_timedelta64_dtype(series):
        return timedelta_series_to_milliseconds(series)
    if len(series) and all(isinstance(v, UtcTimeStamp) for v in series):
        return timestamps_to_array(series)
    if len(series) and all(isinstance(v, TimeDelta) for v in series):
        return timedeltas_to_array(series)
    raise SchemaValidationError(
        f"Column '{col}' cannot be converted to milliseconds (dtype {series.dtype}). "
        f"Expected integers, datetimes, timedeltas, UtcTimeStamp or TimeDelta values."
    )


def write_timestamp_csv(
    df: pd.DataFrame,
    path: Path | str,
    ms_columns: list[str],
    ascending_column: str | None = None,
) -> None:
    """
    Write a DataFrame to CSV with its millisecond columns as int64.

    **Functionally**:
      - Converts each of `ms_columns` to int64 milliseconds (integer,
        datetime64, timedelta64, UtcTimeStamp and TimeDelta columns accepted).
      - Validates the millisecond schema before anything touches disk.
      - Creates the parent directory if needed and writes with index=False.

    Args:
        df: DataFrame to write.
        path: Destination CSV path.
        ms_columns: Columns holding timestamps or deltas.
        ascending_column: Optional column that must be strictly ascending.

    Raises:
        SchemaValidationError: If a column is missing or invalid.
        OSError: If the file cannot be written.
    """
    path = Path(path)

    missing_cols = set(ms_columns) - set(df.columns)
    if missing_cols:
        raise SchemaValidationError(
            f"{path}: Missing required millisecond columns: {sorted(missing_cols)}. "
            f"Found columns: {list(df.columns)}."
        )

    df_to_write = df.copy()
    for col in ms_columns:
        df_to_write[col] = _column_to_milliseconds(df_to_write[col], col)

    validate_millisecond_columns(
        df_to_write, ms_columns, context=str(path), ascending_column=ascending_column,
    )

    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        df_to_write.to_csv(path, index=False)
    except Exception as e:
        raise OSError(f"Failed to write CSV to {path}. Error: {e}") from e

    log.info("Wrote %d rows to %s", len(df_to_write), path)


def read_timestamp_csv(
    path: Path | str,
    ms_columns: list[str],
    ascending_column: str | None = None,
) -> pd.DataFrame:
    """
    Read a CSV written by write_timestamp_csv, validating millisecond columns.

    Args:
        path: CSV path.
        ms_columns: Columns that must hold int64 milliseconds.
        ascending_column: Optional column that must be strictly ascending.

    Returns:
        DataFrame with the millisecond columns as int64.

    Raises:
        FileNotFoundError: If the file does not exist.
        SchemaValidationError: If the CSV cannot be parsed or violates the schema.
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(
            f"Timestamp CSV not found: {path}. "
            f"Ensure the file exists and the path is correct."
        )

    try:
        df = pd.read_csv(path)
    except Exception as e:
        raise SchemaValidationError(f"{path}: Failed to read CSV. Error: {e}") from e

    validate_millisecond_columns(df, ms_columns, context=str(path), ascending_column=ascending_column)
    for col in ms_columns:
        df[col] = df[col].astype(np.int64)

    log.info("Read %d rows from %s", len(df), path)
    return df
