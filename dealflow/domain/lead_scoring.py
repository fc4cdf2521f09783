# dealflow/domain/lead_scoring.py
from __future__ import annotations

from .engine import Feature, RecommendationBands, ScoringContext, WeightTable
from .parsing import clamp, round_half_up
from .scorers import (
    Band,
    BandedScorer,
    CategoricalScorer,
    ConstantMarketTiming,
    KeywordScorer,
    MarginScorer,
    MarketTimingSource,
    market_timing_scorer,
)
from .types import LeadScore, PropertyData

# Wholesale sweet spot first; overlapping bands resolve in order.
price_point_score = BandedScorer(
    [
        Band(50_000, 150_000, 90.0),
        Band(30_000, 200_000, 75.0),
        Band(200_000, 300_000, 60.0),
    ],
    default=40.0,
)

location_score = KeywordScorer(["downtown", "suburbs", "growing area"], hit=85.0, miss=65.0)

condition_score = CategoricalScorer(
    {
        "excellent": 95.0,
        "good": 85.0,
        "fair": 70.0,
        "needs work": 60.0,
        "poor": 45.0,
    },
    default=65.0,
)

arv_margin_score = MarginScorer(
    [(0.4, 95.0), (0.3, 85.0), (0.2, 70.0), (0.1, 55.0)],
    floor=30.0,
    default=50.0,
)

lead_source_score = CategoricalScorer(
    {
        "referral": 90.0,
        "website": 80.0,
        "direct mail": 75.0,
        "online ad": 70.0,
        "cold call": 60.0,
    },
    default=65.0,
)

LEAD_WEIGHTS = WeightTable(
    {
        "price_point": 0.25,
        "location": 0.20,
        "condition": 0.15,
        "market_timing": 0.15,
        "arv_margin": 0.15,
        "lead_source": 0.10,
    }
)

HIGH_PRIORITY = "High Priority – Pursue Immediately"
MEDIUM_PRIORITY = "Medium Priority – Strong Potential"
LOW_PRIORITY = "Low Priority – Monitor"
SKIP = "Skip – Unlikely to Close"

LEAD_RECOMMENDATIONS = RecommendationBands(
    [
        (0, SKIP),
        (50, LOW_PRIORITY),
        (65, MEDIUM_PRIORITY),
        (80, HIGH_PRIORITY),
    ]
)


def recommendation_for(score: float) -> str:
    return LEAD_RECOMMENDATIONS.label_for(score)


def build_lead_context(market_timing: MarketTimingSource | None = None) -> ScoringContext[PropertyData]:
    timing = market_timing or ConstantMarketTiming()
    return ScoringContext(
        "lead_quality",
        [
            Feature("price_point", lambda p: p.price, price_point_score),
            Feature("location", lambda p: p.location, location_score),
            Feature("condition", lambda p: p.condition, condition_score),
            Feature("market_timing", lambda p: p.location, market_timing_scorer(timing)),
            Feature("arv_margin", lambda p: (p.price, p.arv), arv_margin_score),
            Feature("lead_source", lambda p: p.source, lead_source_score),
        ],
        LEAD_WEIGHTS,
    )


class LeadScorer:
    """
    Predictive quality score for a wholesale property lead.

    overall      = weighted sum of the six factors, rounded half-up (0..100)
    probability  = overall/100 clamped to 0..1, expressed as an integer percent
    """

    def __init__(self, market_timing: MarketTimingSource | None = None) -> None:
        self.context = build_lead_context(market_timing)

    def score(self, prop: PropertyData) -> LeadScore:
        b = self.context.score(prop)
        probability = clamp(b.aggregate / 100.0, 0.0, 1.0)
        overall = int(round_half_up(b.aggregate))
        return LeadScore(
            overall=overall,
            probability=int(round_half_up(probability * 100.0)),
            factors=b.factors,
            weights=b.weights,
            recommendation=recommendation_for(overall),
        )
