"""
Conversion boundary with the `datetime` calendar library.

Handles millisecond <-> datetime/timedelta conversion and display formatting.
"""
