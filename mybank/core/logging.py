"""
Logging setup for the API process.

Modules log through `logging.getLogger(__name__)`; this only wires the root
handler and format once at startup (see `mybank/main.py`).
"""

from __future__ import annotations

import logging.config


LOG_FORMAT = "%(asctime)s level=%(levelname)s logger=%(name)s message=%(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "plain": {"format": LOG_FORMAT},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "plain",
                },
            },
            "loggers": {
                "mybank": {
                    "handlers": ["console"],
                    "level": level.upper(),
                    "propagate": False,
                },
            },
        }
    )
