"""Package-level logger for wkbstructures"""

__all__ = ['LOGGER', 'set_log_level', 'warn_once']

import logging
from typing import Union

LOGGER = logging.getLogger('wkbstructures')
LOGGER.setLevel(logging.WARNING)
_LOG_HANDLER = logging.StreamHandler()
_LOG_HANDLER.setFormatter(logging.Formatter('[%(levelname)s] %(name)s: %(message)s'))
LOGGER.addHandler(_LOG_HANDLER)

_WARNINGS = set()


def set_log_level(level: Union[int, str]) -> None:
    """
    Sets the level of the package logger (and therefore of every
    codec logger beneath it).

    Args:
        level:
            A logging level, either as an int (logging.DEBUG) or a name ('DEBUG')
    """
    LOGGER.setLevel(level.upper() if isinstance(level, str) else level)


def warn_once(warning: str):
    """Logs a warning on the package logger, only the first time it's seen"""
    if warning not in _WARNINGS:
        LOGGER.warning(warning)
        _WARNINGS.add(warning)
