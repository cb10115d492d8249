# parsing.py — lenient coercion of raw form values (numbers, "ddd/ss" winds)

import re, math, logging
from typing import Any

from holdcalc.models import WindVector

logger = logging.getLogger(__name__)

# Leading numeric prefix, so "270T" reads as 270 and "abc" as nothing
PAT_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

def parse_number(value: Any, default: float = 0.0) -> float:
    """Float from a number or numeric-looking string; anything else gives `default`."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        v = float(value)
        return v if math.isfinite(v) else default
    m = PAT_NUMBER.match(str(value))
    if not m:
        if str(value).strip():
            logger.debug(f"Unparseable number {value!r}, using {default}")
        return default
    try:
        v = float(m.group(1))
    except (TypeError, ValueError):
        return default
    if not math.isfinite(v):
        logger.debug(f"Out of range number {value!r}, using {default}")
        return default
    return v

def parse_positive(value: Any, default: float) -> float:
    """Like parse_number, but zero/negative values also fall back to `default`."""
    v = parse_number(value, default)
    if v <= 0:
        logger.debug(f"Non-positive value {value!r}, using {default}")
        return default
    return v

def parse_wind(value: Any) -> WindVector:
    """
    Wind from "ddd/ss" text.
      "270/20" -> 270°/20 kt, "270" -> 270°/0 kt, "/15" -> 0°/15 kt, "" -> 0°/0 kt
    """
    if isinstance(value, WindVector):
        return value
    if value is None:
        return WindVector(0.0, 0.0)
    parts = str(value).split("/")
    direction = parse_number(parts[0])
    speed = parse_number(parts[1]) if len(parts) > 1 else 0.0
    return WindVector(direction, speed)

