# dealflow/entrypoints/api/routers/deal_analyzer.py
from __future__ import annotations

from fastapi import APIRouter, Depends

from ..deps import get_sink, require_api_key
from ....integrations.base import EventSink
from ....schemas import DealAnalysisOut, DealAnalyzeRequest, DealAnalyzeResponse
from ....service_layer.deal_analysis import analyze_and_notify

router = APIRouter(tags=["tools"])


@router.post(
    "/tools/deal-analyzer/analyze",
    response_model=DealAnalyzeResponse,
    dependencies=[Depends(require_api_key)],
)
async def analyze(
    body: DealAnalyzeRequest,
    sink: EventSink = Depends(get_sink),
) -> DealAnalyzeResponse:
    payload, delivered = await analyze_and_notify(
        body.property_data.to_domain(),
        sink,
        user_id=body.user_id,
    )
    return DealAnalyzeResponse(analysis=DealAnalysisOut(**payload), notified=delivered)
