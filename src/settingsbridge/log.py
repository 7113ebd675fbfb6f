"""Logging setup: rich-rendered log lines on stderr, stdout stays for records."""

import logging

from rich.console import Console
from rich.logging import RichHandler

err_console = Console(stderr=True)


def configure_logging(level: str = "WARNING") -> None:
    """Route the package logger through a stderr RichHandler; idempotent."""
    logger = logging.getLogger("settingsbridge")
    logger.setLevel(level.upper())
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        handler = RichHandler(console=err_console, show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    logger.propagate = False
