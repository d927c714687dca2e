from __future__ import annotations

import logging
import os
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s | %(message)s"


def configure_logging(level: str | None = None) -> None:
    """
    Send log records to stderr, keeping stdout free for record output.
    Level comes from the argument, else LOG_LEVEL (default WARNING);
    unknown names fall back to WARNING.
    """
    if level is None:
        level = os.getenv("LOG_LEVEL", "WARNING")
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        numeric = logging.WARNING
    logging.basicConfig(level=numeric, format=LOG_FORMAT, stream=sys.stderr)
