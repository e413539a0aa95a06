"""
Schema validation for millisecond timestamp columns.

**Conceptual**: On disk and in DataFrames, timestamps and deltas are stored
as plain signed 64-bit integers in milliseconds. That representation carries
no schema of its own, so this module checks the contract explicitly wherever
such data crosses an I/O boundary:
  - Every declared millisecond column is present.
  - Each column has an integer dtype (no floats, no strings).
  - No missing values.
  - Every value fits in the signed 64-bit range.
  - Optionally, one column is strictly ascending (a time index).

Validation raises SchemaValidationError with the offending column, rows and
source so the file can be fixed quickly.
"""

import numpy as np
import pandas as pd

from utctimestamp.utils.math import INT64_MAX, INT64_MIN


class SchemaValidationError(Exception):
    """
    Raised when a DataFrame does not conform to the millisecond column schema.

    The message includes the source context (file path or caller-supplied
    label), the column and the first offending rows.
    """
    pass


def validate_millisecond_columns(
    df: pd.DataFrame,
    columns: list[str],
    context: str | None = None,
    ascending_column: str | None = None,
) -> None:
    """
    Validate that `columns` of `df` hold well-formed millisecond integers.

    Args:
        df: DataFrame to validate.
        columns: Names of the millisecond columns (timestamps or deltas).
        context: Optional string describing the source (e.g., a file path),
                 included in error messages.
        ascending_column: Optional column (must be in `columns`) that must be
                          strictly ascending, e.g. the time index of a series.

    Raises:
        SchemaValidationError: On the first violation found.
    """
    # Build context prefix for error messages
    ctx = f"{context}: " if context else ""

    # Check 1: All required columns must be present
    missing_cols = set(columns) - set(df.columns)
    if missing_cols:
        raise SchemaValidationError(
            f"{ctx}Missing required millisecond columns: {sorted(missing_cols)}. "
            f"Found columns: {list(df.columns)}."
        )

    for col in columns:
        series = df[col]

        # Check 2: integer dtype (nullable Int64 is allowed, then checked for NA)
        if not pd.api.types.is_integer_dtype(series):
            raise SchemaValidationError(
                f"{ctx}Column '{col}' must hold integer milliseconds, "
                f"got dtype {series.dtype}."
            )

        # Check 3: no missing values
        if series.isna().any():
            bad_indices = series[series.isna()].index.tolist()
            raise SchemaValidationError(
                f"{ctx}Column '{col}' has missing values at row indices: "
                f"{bad_indices[:5]} (showing first 5)."
            )

        # Check 4: signed 64-bit range (only unsigned dtypes can exceed it)
        if len(series) and (int(series.max()) > INT64_MAX or int(series.min()) < INT64_MIN):
            raise SchemaValidationError(
                f"{ctx}Column '{col}' has values outside the signed 64-bit "
                f"millisecond range [{INT64_MIN}, {INT64_MAX}]."
            )

    # Check 5: strictly ascending time index
    if ascending_column is not None:
        if ascending_column not in columns:
            raise ValueError(
                f"ascending_column '{ascending_column}' must be one of the validated columns {columns}."
            )
        values = df[ascending_column]
        if len(values) > 1:
            # Compare neighbours directly; diff() would go through float64
            arr = values.to_numpy(dtype="int64")
            violations = np.nonzero(arr[1:] <= arr[:-1])[0] + 1
            if len(violations):
                bad_indices = values.index[violations].tolist()
                raise SchemaValidationError(
                    f"{ctx}Column '{ascending_column}' is not strictly ascending. "
                    f"Violations found at row indices: {bad_indices[:5]} (showing first 5). "
                    f"Hint: sort by '{ascending_column}' and drop duplicate timestamps."
                )
