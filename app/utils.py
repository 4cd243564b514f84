# app/utils.py
"""Shared utilities: logging setup and lenient query-string parsing."""
import os
import re
import logging
from dotenv import load_dotenv

load_dotenv()

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

def get_logger(name=__name__):
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        level=getattr(logging, level, logging.INFO)
    )
    return logging.getLogger(name)

logger = get_logger("coin-feed")

def parse_int(value):
    """Parse the leading integer of a query-string value.

    Mirrors browser ``parseInt``: surrounding whitespace and trailing junk are
    tolerated ("15abc" -> 15). Returns None for missing or non-numeric input.
    """
    if value is None:
        return None
    m = _LEADING_INT.match(str(value))
    return int(m.group(1)) if m else None

def clamp(value, low, high=None):
    value = max(low, value)
    if high is not None:
        value = min(high, value)
    return value
