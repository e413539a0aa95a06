"""
Vectorized numpy/pandas conversion, serialization and CSV I/O.

Handles millisecond columns with strict schema validation.
"""
