"""Logging setup driven by settings.LOG_LEVEL."""

import logging

from society.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """
    Configure the root logger for the process.

    A handler is only installed when none exists yet (uvicorn and pytest
    install their own); the level is always applied.

    Args:
        level: Override for settings.LOG_LEVEL (e.g. "DEBUG")
    """
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel((level or settings.LOG_LEVEL).upper())
