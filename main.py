"""
utctimestamp – Main entry point.

Minimal bootstrap script printing the current instant as a millisecond
timestamp, to verify the package imports and the clock works.
"""

from utctimestamp import UtcTimeStamp, __version__


def main() -> None:
    """Print the library version and the current UTC timestamp."""
    now = UtcTimeStamp.now()
    print(f"utctimestamp {__version__}: {now} ({now.as_milliseconds()} ms)")


if __name__ == "__main__":
    main()
