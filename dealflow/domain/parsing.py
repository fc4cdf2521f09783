# dealflow/domain/parsing.py
from __future__ import annotations

import math
from typing import Any


def to_float(x: Any) -> float | None:
    """Lenient number coercion. NaN/inf and booleans count as missing."""
    if x is None or x == "" or isinstance(x, bool):
        return None
    try:
        v = float(x)
    except (TypeError, ValueError):
        return None
    if math.isnan(v) or math.isinf(v):
        return None
    return v


def to_text(x: Any) -> str:
    """Lower-cased, trimmed string; anything that isn't a string becomes ''."""
    if not isinstance(x, str):
        return ""
    return x.strip().lower()


def clamp(x: float, lo: float = 0.0, hi: float = 100.0) -> float:
    return max(lo, min(hi, x))


def round_half_up(x: float, ndigits: int = 0) -> float:
    """Half-up rounding: 78.5 -> 79 (built-in round() gives 78)."""
    q = 10.0**ndigits
    return math.floor(x * q + 0.5) / q
