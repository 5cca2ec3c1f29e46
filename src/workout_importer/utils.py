"""Utility functions."""
import math
from typing import Optional


def strip_quotes(s: Optional[str]) -> str:
    """Remove quote characters left over from CSV quoting."""
    if s is None:
        return ""
    return s.replace('"', "")


def to_int(s: Optional[str]) -> Optional[int]:
    """Convert string to int, returning None if conversion fails."""
    if s is None:
        return None
    s = s.strip()
    if not s:
        return None
    try:
        return int(s)
    except ValueError:
        pass
    # Some exporters write counts as "10.0"
    value = to_float(s)
    if value is not None and value.is_integer():
        return int(value)
    return None


def to_float(s: Optional[str]) -> Optional[float]:
    """Convert string to float, returning None if conversion fails."""
    if s is None:
        return None
    s = s.strip()
    if not s:
        return None
    try:
        value = float(s)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value
