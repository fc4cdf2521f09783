# dealflow/domain/engine.py
from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Generic, Mapping, Sequence, TypeVar

from .errors import ConfigurationError
from .parsing import clamp
from .types import ScoreBreakdown

T = TypeVar("T")

WEIGHT_SUM_TOLERANCE = 1e-9


@dataclass(frozen=True)
class Feature(Generic[T]):
    """
    One named factor of a scoring context.

    `extract` pulls the raw value off a candidate; `score` maps that raw value
    (and only that) into [0, 100].
    """

    name: str
    extract: Callable[[T], Any]
    score: Callable[[Any], float]


class WeightTable:
    """
    Declarative feature -> weight mapping. Validated once, at construction:
      - at least one feature
      - no negative / non-finite weights
      - weights sum to 1.0 (within WEIGHT_SUM_TOLERANCE)
    """

    def __init__(self, weights: Mapping[str, float]) -> None:
        if not weights:
            raise ConfigurationError("weight table is empty")
        for name, w in weights.items():
            if not isinstance(w, (int, float)) or isinstance(w, bool) or not math.isfinite(w):
                raise ConfigurationError(f"weight for {name!r} is not a finite number: {w!r}")
            if w < 0:
                raise ConfigurationError(f"weight for {name!r} is negative: {w}")
        total = math.fsum(weights.values())
        if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
            raise ConfigurationError(f"weights must sum to 1.0, got {total!r}")
        self._weights = MappingProxyType({k: float(v) for k, v in weights.items()})

    @property
    def weights(self) -> Mapping[str, float]:
        return self._weights

    def names(self) -> frozenset[str]:
        return frozenset(self._weights)

    def as_dict(self) -> dict[str, float]:
        return dict(self._weights)

    def __repr__(self) -> str:
        return f"WeightTable({dict(self._weights)!r})"


def aggregate(scores: Mapping[str, float], weights: Mapping[str, float]) -> float:
    """
    Weighted sum of bounded sub-scores, clamped to [0, 100].
    Key sets must match exactly.
    """
    if set(scores) != set(weights):
        missing = sorted(set(weights) - set(scores))
        extra = sorted(set(scores) - set(weights))
        raise ConfigurationError(f"score/weight mismatch: missing={missing} extra={extra}")
    # iterate in weight-table order so float summation order is stable
    total = math.fsum(float(scores[name]) * float(w) for name, w in weights.items())
    return clamp(total)


class ScoringContext(Generic[T]):
    """Features + weights for one kind of candidate."""

    def __init__(self, name: str, features: Sequence[Feature[T]], weights: WeightTable) -> None:
        names = [f.name for f in features]
        if len(names) != len(set(names)):
            raise ConfigurationError(f"{name}: duplicate feature names {names}")
        if set(names) != weights.names():
            raise ConfigurationError(
                f"{name}: scorers {sorted(names)} do not match weights {sorted(weights.names())}"
            )
        self.name = name
        self.features = tuple(features)
        self.weights = weights

    def feature_scores(self, candidate: T) -> dict[str, float]:
        # scorers are trusted to be bounded; clamp anyway so one bad scorer can't leak out of range
        return {f.name: clamp(float(f.score(f.extract(candidate)))) for f in self.features}

    def score(self, candidate: T) -> ScoreBreakdown:
        factors = self.feature_scores(candidate)
        return ScoreBreakdown(
            aggregate=aggregate(factors, self.weights.weights),
            factors=factors,
            weights=self.weights.as_dict(),
        )


class RecommendationBands:
    """
    Ordered (inclusive lower bound, label) pairs covering [0, 100].
    The first bound must be 0 and bounds must strictly increase, so the bands
    are exhaustive and non-overlapping.
    """

    def __init__(self, bands: Sequence[tuple[float, str]]) -> None:
        if not bands:
            raise ConfigurationError("recommendation bands are empty")
        bounds = [float(lo) for lo, _ in bands]
        if bounds[0] != 0.0:
            raise ConfigurationError(f"lowest band must start at 0, got {bounds[0]}")
        if any(b >= a for a, b in zip(bounds[1:], bounds)):
            raise ConfigurationError(f"band bounds must strictly increase: {bounds}")
        if bounds[-1] > 100.0:
            raise ConfigurationError(f"band bound above 100: {bounds[-1]}")
        self.bands: tuple[tuple[float, str], ...] = tuple((float(lo), label) for lo, label in bands)

    def label_for(self, score: float) -> str:
        s = float(score)
        s = 0.0 if math.isnan(s) else clamp(s)
        for lo, label in reversed(self.bands):
            if s >= lo:
                return label
        return self.bands[0][1]

    def labels(self) -> list[str]:
        return [label for _, label in self.bands]
