"""
Centralized logging configuration for daybook.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

from daybook.config import Config


def setup_logger(name: str = "daybook", level: Optional[Union[int, str]] = None) -> logging.Logger:
    """
    Configure and return a logger instance.

    Args:
        name: Logger name
        level: Logging level (default: DAYBOOK_LOG_LEVEL or INFO)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if level is None:
        level = Config.log_level()
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    # Prevent duplicate handlers, but honour a new level
    if logger.handlers:
        has_file = False
        for handler in logger.handlers:
            if isinstance(handler, RichHandler):
                handler.setLevel(level)
            elif isinstance(handler, logging.FileHandler):
                has_file = True
        logger.setLevel(min(level, logging.DEBUG) if has_file else level)
        return logger

    logger.setLevel(level)

    console_handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(message)s", datefmt="%H:%M:%S"))
    logger.addHandler(console_handler)

    log_file = Config.log_file()
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)
        # file handler wants debug records even when the console is quieter
        logger.setLevel(min(level, logging.DEBUG))

    return logger
