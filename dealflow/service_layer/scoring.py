# dealflow/service_layer/scoring.py
from __future__ import annotations

import json
import logging
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..domain.lead_scoring import LeadScorer
from ..domain.types import LeadScore, PropertyData
from ..models import LeadScoreRecord

log = logging.getLogger(__name__)


def _record(
    score: LeadScore,
    prop: PropertyData,
    *,
    lead_id: str | None,
    wholesaler_id: str,
) -> LeadScoreRecord:
    return LeadScoreRecord(
        lead_id=lead_id,
        wholesaler_id=wholesaler_id,
        score=score.overall,
        probability=score.probability,
        recommendation=score.recommendation,
        factors_json=json.dumps(dict(score.factors), sort_keys=True),
        input_json=json.dumps(
            {
                "price": prop.price,
                "location": prop.location,
                "condition": prop.condition,
                "arv": prop.arv,
                "source": prop.source,
            }
        ),
        price=prop.price,
        created_at=datetime.utcnow(),
    )


async def score_property_lead(
    session: AsyncSession,
    scorer: LeadScorer,
    prop: PropertyData,
    *,
    lead_id: str | None,
    wholesaler_id: str,
) -> tuple[LeadScore, bool]:
    """
    Score a property lead and keep an audit row of the result.

    The score is returned even when the audit write fails; the second element
    says whether it was stored.
    """
    score = scorer.score(prop)

    session.add(_record(score, prop, lead_id=lead_id, wholesaler_id=wholesaler_id))
    try:
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        log.warning("lead score storage failed (lead_id=%s wholesaler=%s): %s", lead_id, wholesaler_id, e)
        return score, False

    log.info(
        "scored lead_id=%s wholesaler=%s overall=%d recommendation=%r",
        lead_id,
        wholesaler_id,
        score.overall,
        score.recommendation,
    )
    return score, True
