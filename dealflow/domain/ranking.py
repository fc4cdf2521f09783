# dealflow/domain/ranking.py
from __future__ import annotations

from typing import Any, Callable, Iterable, Sequence, TypeVar

from .types import ScoreBreakdown

C = TypeVar("C")


def rank_candidates(
    candidates: Iterable[C],
    *,
    eligible: Callable[[C], bool],
    score: Callable[[C], ScoreBreakdown],
    tie_key: Callable[[C], Any],
) -> list[tuple[C, ScoreBreakdown]]:
    """
    Drop ineligible candidates, score the rest, sort best-first.

    Order: aggregate descending, then `tie_key` ascending. With a tie_key that
    is unique per candidate the result is fully deterministic.
    """
    scored = [(c, score(c)) for c in candidates if eligible(c)]
    scored.sort(key=lambda pair: (-pair[1].aggregate, tie_key(pair[0])))
    return scored


def _fmt_float(x: float, decimals: int = 2) -> str:
    return f"{float(x):.{decimals}f}"


def explain(breakdown: ScoreBreakdown, *, order: Sequence[str] | None = None) -> str:
    """
    Human-debuggable explanation string.

    Example:
      specialization=100.00(x0.40) | performance=88.10(x0.25) | ... | score=83.42
    """
    bits: list[str] = []
    names = list(order) if order else list(breakdown.factors)
    for k in names:
        if k not in breakdown.factors:
            continue
        s = _fmt_float(breakdown.factors[k])
        w = breakdown.weights.get(k)
        if w is None:
            bits.append(f"{k}={s}")
        else:
            bits.append(f"{k}={s}(x{w:.2f})")
    bits.append(f"score={breakdown.aggregate:.2f}")
    return " | ".join(bits)
