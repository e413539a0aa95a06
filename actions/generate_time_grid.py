#!/usr/bin/env python3
"""
Generate a regular UTC time grid and write it to CSV.

**Purpose**: Produces the timestamps of a TimeRange (optionally aligned to the
step first) as a CSV with an integer millisecond column and a human-readable
ISO column. Useful as a join key / resampling index for timestamped datasets.

**Usage**:
    From project root:
    ```bash
    python actions/generate_time_grid.py --start 2019-04-14T00:00:00 \\
        --end 2019-04-16T00:00:00 --step-seconds 43200 --output data/grid.csv
    ```

**Output columns**:
  - timestamp_ms: milliseconds since the epoch (int64)
  - timestamp: ISO 8601 rendering of the same instant (UTC)
"""

import argparse
import sys
from datetime import datetime
from pathlib import Path

import pandas as pd

# Ensure project root is on path for imports
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from utctimestamp import RangeDirectionError, TimeArithmeticError, TimeDelta, TimeRange, UtcTimeStamp
from utctimestamp.data.frames import timestamps_to_array
from utctimestamp.data.io import write_timestamp_csv
from utctimestamp.data.schemas import SchemaValidationError
from utctimestamp.utils.logging_setup import configure_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Returns:
        Namespace with attributes: start, end (str), step_seconds (int),
        right_open (bool), align (bool), output (str).
    """
    parser = argparse.ArgumentParser(
        description="Write a regular UTC time grid to CSV",
        epilog="""
Examples:
  # Every 12 hours, end included
  python actions/generate_time_grid.py --start 2019-04-14 --end 2019-04-16 --step-seconds 43200

  # Every 5 minutes, end excluded, start snapped to the 5 minute grid
  python actions/generate_time_grid.py --start 2020-09-28T19:32:51 --end 2020-09-28T20:00:00 \\
      --step-seconds 300 --right-open --align
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--start",
        type=str,
        required=True,
        help="Start instant, ISO 8601 such as 2019-04-14T00:00:00Z (naive values are UTC)",
    )
    parser.add_argument(
        "--end",
        type=str,
        required=True,
        help="End instant, ISO 8601 (naive values are UTC)",
    )
    parser.add_argument(
        "--step-seconds",
        type=int,
        default=3600,
        help="Grid spacing in seconds (default: 3600)",
    )
    parser.add_argument(
        "--right-open",
        action="store_true",
        help="Exclude the end instant (default: included)",
    )
    parser.add_argument(
        "--align",
        action="store_true",
        help="Align the start instant to the step (epoch-anchored) before generating",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="data/time_grid.csv",
        help="Output CSV path (default: data/time_grid.csv)",
    )

    return parser.parse_args(argv)


def build_grid(
    start: UtcTimeStamp,
    end: UtcTimeStamp,
    step: TimeDelta,
    right_open: bool = False,
    align: bool = False,
) -> pd.DataFrame:
    """
    Build the grid DataFrame for the given range parameters.

    Raises:
        RangeDirectionError: If the step cannot reach the end bound.
    """
    if align:
        start = start.align_to(step)

    if right_open:
        grid = TimeRange.right_open(start, end, step, strict=True)
    else:
        grid = TimeRange.right_closed(start, end, step, strict=True)

    timestamps = list(grid)
    return pd.DataFrame({
        "timestamp_ms": timestamps_to_array(timestamps),
        "timestamp": [ts.to_datetime().isoformat() for ts in timestamps],
    })


def main(argv: list[str] | None = None) -> int:
    """
    Main entrypoint.

    **Exit codes**:
      - 0: Success
      - 1: Invalid arguments (unparseable dates, bad or out-of-range step)
      - 2: Output could not be written
    """
    configure_logging()
    args = parse_args(argv)

    try:
        start = UtcTimeStamp.from_datetime(datetime.fromisoformat(args.start))
        end = UtcTimeStamp.from_datetime(datetime.fromisoformat(args.end))
        step = TimeDelta.from_seconds(args.step_seconds)
        df = build_grid(start, end, step, right_open=args.right_open, align=args.align)
    except (ValueError, RangeDirectionError, TimeArithmeticError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        write_timestamp_csv(df, args.output, ms_columns=["timestamp_ms"], ascending_column="timestamp_ms")
    except (SchemaValidationError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print(f"  ✓ Wrote {len(df)} timestamps to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
