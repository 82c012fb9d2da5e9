"""Process-wide logging configuration.

Console output always; an additional append-mode log file when
``settings.log_file`` is set.
"""

from __future__ import annotations

import logging

from sectionforge.config import Settings

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"


def configure_logging(settings: Settings) -> None:
    """Install handlers on the ``sectionforge`` logger.

    Safe to call more than once; existing handlers are replaced.
    """
    logger = logging.getLogger("sectionforge")
    logger.setLevel(settings.log_level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    logger.addHandler(console)

    if settings.log_file:
        file_handler = logging.FileHandler(settings.log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False
