"""Logging setup."""

import logging
import os
import sys
from typing import Optional


def configure_logging(run_id: Optional[str] = None, level: Optional[str] = None) -> None:
    """Configure logging for a prediction cycle.

    Logs go to stderr so the terminal card on stdout stays clean.
    """
    level_name = (level or os.environ.get("PROPSTRADAMUS_LOG_LEVEL", "WARNING")).upper()
    resolved = getattr(logging, level_name, logging.WARNING)
    run_prefix = f"[run_id={run_id}] " if run_id else ""
    fmt = "%(asctime)s %(levelname)s " + run_prefix + "%(name)s: %(message)s"
    logging.basicConfig(level=resolved, format=fmt, stream=sys.stderr, force=True)
