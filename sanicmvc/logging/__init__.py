"""
Logging Package
Structured logging for the dispatch engine

Every framework logger lives under the ``sanicmvc`` namespace so that
one LoggerConfig.setup_logger('sanicmvc', ...) call configures them all.
"""
from sanicmvc.logging.logger_config import (
    LoggerConfig,
    JSONFormatter,
    SensitiveDataFilter
)
import logging
from typing import Optional

__all__ = [
    'LoggerConfig',
    'JSONFormatter',
    'SensitiveDataFilter',
    'getLogger',
    'ROOT_LOGGER',
]

ROOT_LOGGER = 'sanicmvc'


def getLogger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance (drop-in replacement for logging.getLogger)

    Args:
        name: Logger name; module names from this package are used as is,
              short names ('access', 'error') are placed under 'sanicmvc.'

    Example:
        from sanicmvc.logging import getLogger
        logger = getLogger(__name__)
        logger.warning("Default page %r matched no route", name)
    """
    # Allow Sanic's own loggers through untouched
    if name and name.startswith('sanic.'):
        return logging.getLogger(name)

    if not name:
        return logging.getLogger(ROOT_LOGGER)

    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + '.'):
        return logging.getLogger(name)

    return logging.getLogger(f'{ROOT_LOGGER}.{name}')
