"""
Core value types: UtcTimeStamp, TimeDelta and TimeRange.

Includes the error taxonomy shared by all arithmetic on these types.
"""
