"""
Logging setup for the truck POS server.

Everything under the ``truck_pos`` logger goes to stdout at LOG_LEVEL
(default INFO). Checkout failures that leave sales unreversed are logged
at ERROR by services/checkout.py, so an INFO or WARNING level is enough
for reconciliation.

    from truck_pos.logging_config import setup_logging
    setup_logging()
"""
import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Chatty library loggers, held at WARNING unless running at DEBUG
QUIET_LOGGERS = ("sqlalchemy.engine", "uvicorn.access", "slowapi")

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _resolve_level(level: Optional[str]) -> str:
    name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    return name if name in _LEVELS else "INFO"


def setup_logging(level: Optional[str] = None) -> None:
    """Send log records to stdout. Unknown levels fall back to INFO."""
    name = _resolve_level(level)
    numeric_level = getattr(logging, name)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))

    root = logging.getLogger()
    # Replace only our own handler so repeated calls do not duplicate output
    for existing in [h for h in root.handlers if getattr(h, "_truck_pos", False)]:
        root.removeHandler(existing)
    handler._truck_pos = True
    root.addHandler(handler)
    root.setLevel(numeric_level)

    logging.getLogger("truck_pos").setLevel(numeric_level)
    library_level = logging.DEBUG if name == "DEBUG" else logging.WARNING
    for logger_name in QUIET_LOGGERS:
        logging.getLogger(logger_name).setLevel(library_level)

    logging.getLogger(__name__).debug("Logging configured at %s", name)
