"""Logging configuration."""

import logging
import sys
from typing import Optional


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging for the command line.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR). Unknown names
            fall back to WARNING.
    """
    numeric_level = getattr(logging, (level or "WARNING").upper(), logging.WARNING)
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Replace only the handler installed by a previous call
    for existing in list(root_logger.handlers):
        if getattr(existing, "_horadofrango", False):
            root_logger.removeHandler(existing)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(formatter)
    handler._horadofrango = True
    root_logger.addHandler(handler)

    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
