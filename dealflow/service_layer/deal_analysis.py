# dealflow/service_layer/deal_analysis.py
from __future__ import annotations

import logging

from ..domain.deal_analysis import DealAnalysis, DealInputs, analyze_deal
from ..integrations.base import EventSink

log = logging.getLogger(__name__)


def analysis_payload(a: DealAnalysis) -> dict:
    return {
        "property": {
            "address": a.address,
            "purchase_price": a.purchase_price,
            "arv": a.arv,
            "arv_estimated": a.arv_estimated,
            "rehab_cost": a.rehab_cost,
            "rehab_estimated": a.rehab_estimated,
        },
        "calculations": {
            "total_investment": a.total_investment,
            "potential_profit": a.potential_profit,
            "roi": a.roi,
            "profit_margin": a.profit_margin,
            "wholesale_spread": a.wholesale_spread,
        },
        "risk": a.risk.value,
        "recommendations": list(a.recommendations),
    }


async def analyze_and_notify(
    inputs: DealInputs,
    sink: EventSink,
    *,
    user_id: str | None = None,
) -> tuple[dict, bool]:
    """
    Run the deal analysis and forward it to the automation webhook.
    Delivery is best-effort: returns (payload, delivered).
    """
    payload = analysis_payload(analyze_deal(inputs))
    res = await sink.deliver("deal_analysis", {"user_id": user_id, **payload})
    if not res.ok:
        log.debug("deal_analysis event not delivered: %s", res.error)
    return payload, res.ok
