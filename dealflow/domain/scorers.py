# dealflow/domain/scorers.py
"""
Reusable feature-scorer shapes.

Every scorer is total: missing, empty, unrecognised or malformed input falls
back to the scorer's `default` instead of raising. Outputs are in [0, 100].
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Protocol, Sequence

from .errors import ConfigurationError
from .parsing import clamp, to_float, to_text


def _check_score(x: float, what: str) -> float:
    if not 0.0 <= float(x) <= 100.0:
        raise ConfigurationError(f"{what} score out of range [0, 100]: {x}")
    return float(x)


@dataclass(frozen=True)
class Band:
    lo: float | None  # inclusive; None = unbounded
    hi: float | None  # inclusive; None = unbounded
    score: float

    def contains(self, v: float) -> bool:
        if self.lo is not None and v < self.lo:
            return False
        if self.hi is not None and v > self.hi:
            return False
        return True


class BandedScorer:
    """
    Numeric value -> fixed score of the first band that contains it.
    Bands may overlap; order decides. Anything no band claims gets `default`
    (the catch-all band).
    """

    def __init__(self, bands: Sequence[Band], default: float) -> None:
        for b in bands:
            _check_score(b.score, "band")
            if b.lo is not None and b.hi is not None and b.lo > b.hi:
                raise ConfigurationError(f"band lo > hi: {b}")
        self.bands = tuple(bands)
        self.default = _check_score(default, "default")

    def __call__(self, value: Any) -> float:
        v = to_float(value)
        if v is None:
            return self.default
        for b in self.bands:
            if b.contains(v):
                return b.score
        return self.default


class CategoricalScorer:
    """Case-insensitive lookup of a known category; unknown/missing -> default."""

    def __init__(self, table: Mapping[str, float], default: float) -> None:
        self.table = {k.strip().lower(): _check_score(v, k) for k, v in table.items()}
        self.default = _check_score(default, "default")

    def __call__(self, value: Any) -> float:
        return self.table.get(to_text(value), self.default)


class KeywordScorer:
    """`hit` when the text contains any keyword (case-insensitive), else `miss`."""

    def __init__(self, keywords: Sequence[str], hit: float, miss: float) -> None:
        self.keywords = tuple(k.lower() for k in keywords if k)
        self.hit = _check_score(hit, "hit")
        self.miss = _check_score(miss, "miss")

    def __call__(self, value: Any) -> float:
        text = to_text(value)
        if text and any(k in text for k in self.keywords):
            return self.hit
        return self.miss


class MarginScorer:
    """
    (price, arv) -> score from margin = (arv - price) / price.

    `thresholds` are (exclusive lower bound, score), highest first; a margin
    not above any threshold gets `floor`. Missing arv or price <= 0 -> default.
    """

    def __init__(self, thresholds: Sequence[tuple[float, float]], floor: float, default: float) -> None:
        bounds = [t for t, _ in thresholds]
        if bounds != sorted(bounds, reverse=True):
            raise ConfigurationError(f"margin thresholds must be descending: {bounds}")
        self.thresholds = tuple((float(t), _check_score(s, "threshold")) for t, s in thresholds)
        self.floor = _check_score(floor, "floor")
        self.default = _check_score(default, "default")

    @staticmethod
    def margin(price: Any, arv: Any) -> float | None:
        p = to_float(price)
        a = to_float(arv)
        if not a or p is None or p <= 0:
            return None
        return (a - p) / p

    def __call__(self, value: Any) -> float:
        try:
            price, arv = value
        except (TypeError, ValueError):
            return self.default
        m = self.margin(price, arv)
        if m is None:
            return self.default
        for bound, score in self.thresholds:
            if m > bound:
                return score
        return self.floor


# -----------------------------
# Market timing seam
# -----------------------------
class MarketTimingSource(Protocol):
    def score(self, location: str | None) -> float:
        ...


class ConstantMarketTiming:
    """
    Stand-in until a market-data feed exists. Deterministic by construction:
    same value for every location, every call.
    """

    def __init__(self, value: float = 80.0) -> None:
        self.value = _check_score(value, "market timing")

    def score(self, location: str | None) -> float:
        return self.value


def market_timing_scorer(source: MarketTimingSource) -> Callable[[Any], float]:
    def _score(location: Any) -> float:
        loc = location if isinstance(location, str) else None
        return clamp(float(source.score(loc)))

    return _score
