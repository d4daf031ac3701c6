"""Logging configuration for the API process."""

from __future__ import annotations

import logging.config


def configure_logging(level: str = "INFO") -> None:
    """Install a single console handler on the root logger.

    Uvicorn's own loggers keep their handlers; only the level is aligned.
    """
    level = level.upper()
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "root": {"handlers": ["console"], "level": level},
            "loggers": {
                "uvicorn": {"level": level},
                "sqlalchemy.engine": {"level": "WARNING"},
            },
        }
    )
