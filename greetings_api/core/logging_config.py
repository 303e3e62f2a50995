"""
Logging setup for the Greetings API.

Handlers are attached to the ``greetings_api`` logger rather than the root
logger, so uvicorn keeps its own access/error logging and module loggers
(``greetings_api.services...``, ``greetings_api.access``) inherit ours.
Records still propagate to the root, which is where pytest's ``caplog``
listens.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "greetings_api"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_CONSOLE_HANDLER = "greetings_api.console"
_FILE_HANDLER = "greetings_api.file"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> logging.Logger:
    """Configure the package logger and return it.

    Safe to call repeatedly (``create_app`` does so once per app): the level
    is updated every time, each named handler is added at most once.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(getattr(logging, (level or "INFO").upper(), logging.INFO))
    installed = {handler.get_name() for handler in logger.handlers}
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    if _CONSOLE_HANDLER not in installed:
        console = logging.StreamHandler()
        console.set_name(_CONSOLE_HANDLER)
        console.setFormatter(formatter)
        logger.addHandler(console)

    if logfile and _FILE_HANDLER not in installed:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.set_name(_FILE_HANDLER)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
