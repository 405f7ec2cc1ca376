"""
logging_setup.py

Responsibility: configure process-wide logging for the CLI.

Every module logs through `logging.getLogger(__name__)`; this module only
installs the single stderr handler those records end up on.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> None:
    """Send all log output to stderr in a single human-readable format."""
    root = logging.getLogger()

    # Remove any existing handlers to avoid duplicate lines when re-configuring.
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(handler)

    numeric = logging.getLevelName(level.upper())
    root.setLevel(numeric if isinstance(numeric, int) else logging.INFO)

    logging.getLogger("urllib3").setLevel(max(root.level, logging.WARNING))
