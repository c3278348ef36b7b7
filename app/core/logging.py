"""Logging setup for the rentals backend."""

import logging

from app.core.config import settings

ROOT_LOGGER = "rentals"


def configure_logging(namespace: str = ROOT_LOGGER) -> logging.Logger:
    """Return the namespaced application logger, configuring it on first use.

    Records are single lines of ``timestamp level logger message`` so they stay
    readable in a terminal and parseable by log aggregators.
    """
    logger = logging.getLogger(namespace)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )

    logger.addHandler(handler)
    logger.setLevel(settings.LOG_LEVEL.upper())
    logger.propagate = False
    return logger


def get_logger(child: str | None = None) -> logging.Logger:
    """Get the application logger or one of its children."""
    base = configure_logging()
    if child:
        return base.getChild(child)
    return base
