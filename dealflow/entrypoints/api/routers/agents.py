# dealflow/entrypoints/api/routers/agents.py
from __future__ import annotations

from fastapi import APIRouter, Depends

from ..deps import require_api_key
from ....schemas import LeaderboardRequest, LeaderboardResponse, MatchRequest, MatchResponse
from ....service_layer.matching import leaderboard_for_request, match_for_request

router = APIRouter(tags=["agents"], dependencies=[Depends(require_api_key)])


@router.post("/agents/match", response_model=MatchResponse)
def match_agent(body: MatchRequest) -> MatchResponse:
    # "no eligible agent" is a normal answer (match=null), not an error status
    return match_for_request(body)


@router.post("/agents/leaderboard", response_model=LeaderboardResponse)
def agent_leaderboard(body: LeaderboardRequest) -> LeaderboardResponse:
    return leaderboard_for_request(body)
