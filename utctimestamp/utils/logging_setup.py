"""
Logging setup for utctimestamp.

Modules log through `logging.getLogger(__name__)`, so everything lands under
the "utctimestamp" logger. The library never configures handlers on import;
applications and scripts call `configure_logging()` once at startup.
"""

import logging

from utctimestamp.config.settings import get_settings

LOGGER_NAME = "utctimestamp"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """
    Attach a stream handler to the package logger.

    Args:
        level: Level name or number. Defaults to Settings.log_level
               (UTCTIMESTAMP_LOG_LEVEL).

    Returns:
        The configured "utctimestamp" logger.

    Calling this more than once replaces the handler instead of stacking
    duplicates.
    """
    if level is None:
        level = get_settings().log_level

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if getattr(handler, "_utctimestamp_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._utctimestamp_handler = True
    logger.addHandler(handler)
    return logger
