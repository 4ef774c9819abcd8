"""
Centralized application-specific logging using Loguru.

This module provides a function-based logging mechanism (`LOG`) that dynamically
respects the `beQuiet` flag from application settings.

Example:
    from pricetoken.lib.log import LOG
    LOG("Quote unavailable; using fallback phrase.")

Environment:
- Set `PRICETOKEN_BEQUIET=True` to suppress detailed logging output.
"""

from loguru import logger
from typing import Any
import sys

# Create a distinct logger instance for the engine
app_logger = logger.bind(app="PRICETOKEN")

logger_format = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<yellow>{name: >28}</yellow>::"
    "<cyan>{function: <24}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)


def app_filter(record: dict) -> bool:
    """Only records from the engine logger reach its sink."""
    return record["extra"].get("app") == "PRICETOKEN"


# Handlers of the host application are left in place
app_logger.add(sys.stderr, format=logger_format, filter=app_filter)


def LOG(*args: Any, **kwargs: Any) -> None:
    """
    Application-specific logging function.

    Logs the message at debug level unless `appsettings.beQuiet` is set.

    :param args: Positional arguments for the log message.
    :param kwargs: Keyword arguments for additional log metadata.
    """
    from pricetoken.config.settings import appsettings

    if not appsettings.beQuiet:
        app_logger.opt(depth=1).debug(*args, **kwargs)
