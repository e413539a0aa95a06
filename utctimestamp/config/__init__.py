"""
Configuration management and settings.

Loads overflow policy, range direction guard and log level from environment
variables or a .env file.
"""
