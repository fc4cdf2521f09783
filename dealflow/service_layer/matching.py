# dealflow/service_layer/matching.py
from __future__ import annotations

import logging

from ..domain.agent_matching import FEATURE_ORDER, is_eligible, rank_agents
from ..domain.ranking import explain
from ..domain.types import AgentMatch
from ..schemas import AgentMatchOut, LeaderboardRequest, LeaderboardResponse, MatchRequest, MatchResponse

log = logging.getLogger(__name__)


def _match_out(m: AgentMatch) -> AgentMatchOut:
    return AgentMatchOut(
        agent_id=m.agent.id,
        name=m.agent.name,
        rank=m.rank,
        score=m.score,
        factors=dict(m.breakdown.factors),
        explain=explain(m.breakdown, order=FEATURE_ORDER),
    )


def match_for_request(body: MatchRequest) -> MatchResponse:
    lead = body.lead.to_domain()
    agents = [a.to_domain() for a in body.agents]
    ranked = rank_agents(lead, agents, limit=1)

    eligible = sum(1 for a in agents if is_eligible(a))
    if not ranked:
        log.info("no eligible agent for lead %s (%d considered)", lead.id, len(agents))
        return MatchResponse(lead_id=lead.id, match=None, considered=len(agents), eligible=0)

    best = ranked[0]
    log.info("lead %s -> agent %s (score=%.2f)", lead.id, best.agent.id, best.score)
    return MatchResponse(
        lead_id=lead.id,
        match=_match_out(best),
        considered=len(agents),
        eligible=eligible,
    )


def leaderboard_for_request(body: LeaderboardRequest) -> LeaderboardResponse:
    lead = body.lead.to_domain()
    agents = [a.to_domain() for a in body.agents]
    ranked = rank_agents(lead, agents, limit=body.limit)
    return LeaderboardResponse(
        lead_id=lead.id,
        results=[_match_out(m) for m in ranked],
        considered=len(agents),
        eligible=sum(1 for a in agents if is_eligible(a)),
    )
