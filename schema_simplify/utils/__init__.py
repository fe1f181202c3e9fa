"""
Utility functions and helpers.

This module contains shared utilities used across schema_simplify components.

Components:
    - setup_logging: Logging configuration with a Rich handler

Example:
    ```python
    from schema_simplify.utils import setup_logging

    # Show lossy-conversion warnings and traversal details
    setup_logging(level="DEBUG")
    ```
"""

import logging
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["setup_logging"]


def setup_logging(
    level: Union[int, str] = logging.WARNING,
    console: Optional[Console] = None,
) -> logging.Logger:
    """
    Route schema_simplify log records to a Rich handler.

    Calling this more than once replaces the previously installed handler.

    Args:
        level: Logging level name or number
        console: Console to write to (default: stderr)

    Returns:
        logging.Logger: The configured "schema_simplify" logger
    """
    logger = logging.getLogger("schema_simplify")
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)

    return logger
