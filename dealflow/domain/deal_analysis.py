# dealflow/domain/deal_analysis.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

ARV_MULTIPLIER = 1.4  # v0: no comps feed yet
REHAB_PER_SQFT = 15.0
REHAB_FLAT = 25_000.0
WHOLESALE_RULE = 0.70  # max offer = 70% of ARV

DILIGENCE_REMINDERS = (
    "Verify all numbers with local market data",
    "Consider holding costs and carrying expenses",
)


class RiskLevel(str, Enum):
    low = "Low"
    medium = "Medium"
    high = "High"


@dataclass(frozen=True)
class DealInputs:
    address: str
    purchase_price: float
    arv: float | None = None
    rehab_cost: float | None = None
    sqft: float | None = None
    condition: str | None = None


@dataclass(frozen=True)
class DealAnalysis:
    address: str
    purchase_price: float
    arv: float
    arv_estimated: bool
    rehab_cost: float
    rehab_estimated: bool
    total_investment: float
    potential_profit: float
    roi: float  # percent
    profit_margin: float  # percent
    wholesale_spread: float
    risk: RiskLevel
    recommendations: tuple[str, ...]


def estimate_arv(purchase_price: float) -> float:
    return purchase_price * ARV_MULTIPLIER


def estimate_rehab(sqft: float | None) -> float:
    if not sqft or sqft <= 0:
        return REHAB_FLAT
    return sqft * REHAB_PER_SQFT


def roi_pct(total_investment: float, profit: float) -> float:
    if total_investment <= 0:
        return 0.0
    return profit / total_investment * 100.0


def margin_pct(arv: float, profit: float) -> float:
    if arv <= 0:
        return 0.0
    return profit / arv * 100.0


def risk_level(roi: float) -> RiskLevel:
    if roi > 25:
        return RiskLevel.low
    if roi > 15:
        return RiskLevel.medium
    return RiskLevel.high


def recommendations(roi: float) -> tuple[str, ...]:
    if roi > 20:
        head = "Excellent deal - proceed with confidence"
    elif roi > 15:
        head = "Good deal - negotiate for better price if possible"
    else:
        head = "Marginal deal - consider passing or negotiate significantly lower price"
    return (head, *DILIGENCE_REMINDERS)


def analyze_deal(d: DealInputs) -> DealAnalysis:
    """
    Flip/wholesale arithmetic on one property.
    Missing ARV / rehab are estimated, and every downstream figure uses the
    resolved values.
    """
    arv = d.arv if d.arv else estimate_arv(d.purchase_price)
    rehab = d.rehab_cost if d.rehab_cost is not None else estimate_rehab(d.sqft)

    total = d.purchase_price + rehab
    profit = arv - total
    roi = roi_pct(total, profit)

    return DealAnalysis(
        address=d.address,
        purchase_price=d.purchase_price,
        arv=arv,
        arv_estimated=not d.arv,
        rehab_cost=rehab,
        rehab_estimated=d.rehab_cost is None,
        total_investment=total,
        potential_profit=profit,
        roi=roi,
        profit_margin=margin_pct(arv, profit),
        wholesale_spread=arv * WHOLESALE_RULE - d.purchase_price,
        risk=risk_level(roi),
        recommendations=recommendations(roi),
    )
