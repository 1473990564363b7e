"""Process-wide logging setup."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install a root handler with the application log format."""

    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
