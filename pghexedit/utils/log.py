"""
Logging configuration.

Diagnostics go to stderr through rich; stdout is reserved for the tag file.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "pghexedit"

_stderr_console = Console(stderr=True)


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Return a logger in the package's hierarchy."""
    if name != LOGGER_NAME and not name.startswith(LOGGER_NAME + "."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(level: int = logging.WARNING) -> logging.Logger:
    """Attach a rich handler to the package logger, once."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=_stderr_console,
                              show_time=False,
                              show_path=False,
                              markup=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    return logger
