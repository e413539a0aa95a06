"""
Generic utility functions shared across modules.

Includes 64-bit integer arithmetic helpers, clock abstractions and logging
setup.
"""
