# dealflow/entrypoints/api/routers/scoring.py
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..deps import get_lead_scorer, require_api_key
from ....db import get_session
from ....domain.lead_scoring import LeadScorer
from ....schemas import ScoreOut, ScorePredictRequest, ScorePredictResponse
from ....service_layer.scoring import score_property_lead

router = APIRouter(tags=["scoring"])


@router.post(
    "/analytics/scoring/predict",
    response_model=ScorePredictResponse,
    dependencies=[Depends(require_api_key)],
)
async def predict_score(
    body: ScorePredictRequest,
    scorer: LeadScorer = Depends(get_lead_scorer),
    session: AsyncSession = Depends(get_session),
) -> ScorePredictResponse:
    score, stored = await score_property_lead(
        session,
        scorer,
        body.property_data.to_domain(),
        lead_id=body.lead_id,
        wholesaler_id=body.wholesaler_id,
    )
    return ScorePredictResponse(
        score=ScoreOut(
            overall=score.overall,
            probability=score.probability,
            factors=dict(score.factors),
            weights=dict(score.weights),
        ),
        recommendation=score.recommendation,
        stored=stored,
    )
