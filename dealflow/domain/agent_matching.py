# dealflow/domain/agent_matching.py
from __future__ import annotations

from dataclasses import replace
from typing import Any, Iterable, Tuple

from .engine import Feature, ScoringContext, WeightTable
from .parsing import clamp, round_half_up, to_float, to_text
from .ranking import rank_candidates
from .types import (
    Agent,
    AgentAvailability,
    AgentMatch,
    AgentPerformance,
    AgentSpecialty,
    AvailabilityStatus,
    ClientPreferences,
    ExperienceLevel,
    InvestorLead,
    ResponseUrgency,
    ScoreBreakdown,
    UrgencyLevel,
)

# (lead, agent) pair being scored
Pairing = Tuple[InvestorLead, Agent]

ELIGIBLE_STATUSES = frozenset({AvailabilityStatus.online, AvailabilityStatus.busy})

AGENT_WEIGHTS = WeightTable(
    {
        "specialization": 0.40,
        "performance": 0.25,
        "availability": 0.20,
        "preference": 0.10,
        "location": 0.05,
    }
)

FEATURE_ORDER = ("specialization", "performance", "availability", "preference", "location")

# property-type keyword -> specialty that handles it
_TYPE_SPECIALTIES: tuple[tuple[str, AgentSpecialty], ...] = (
    ("luxury", AgentSpecialty.luxury_properties),
    ("commercial", AgentSpecialty.commercial_real_estate),
    ("wholesale", AgentSpecialty.wholesale_deals),
    ("rental", AgentSpecialty.rental_properties),
    ("multifamily", AgentSpecialty.multifamily),
)

_AGENT_URGENCY_RANK = {
    ResponseUrgency.immediate: 3,
    ResponseUrgency.same_day: 2,
    ResponseUrgency.next_day: 1,
}

_LEAD_URGENCY_RANK = {
    UrgencyLevel.critical: 3,
    UrgencyLevel.high: 2,
}


def is_eligible(agent: Agent) -> bool:
    """Online or busy, and strictly below capacity."""
    a = agent.availability
    return a.status in ELIGIBLE_STATUSES and a.current_load < a.max_capacity


# -----------------------------
# Feature scorers (one raw value each)
# -----------------------------
def specialization_score(raw: tuple[str, ExperienceLevel | None, float | None, AgentSpecialty]) -> float:
    """
    raw = (property_type, experience_level, deal_size, specialty)
    Additive bonuses, capped at 100. No overlap => 0.
    """
    property_type, experience, deal_size, specialty = raw
    ptype = to_text(property_type)
    score = 0.0

    for keyword, spec in _TYPE_SPECIALTIES:
        if keyword in ptype and specialty == spec:
            score += 100.0

    if experience == ExperienceLevel.beginner and specialty == AgentSpecialty.first_time_investors:
        score += 90.0
    if experience == ExperienceLevel.expert and specialty == AgentSpecialty.luxury_properties:
        score += 85.0

    size = to_float(deal_size)
    if size is not None:
        if size >= 500_000 and specialty == AgentSpecialty.luxury_properties:
            score += 80.0
        if size <= 200_000 and specialty == AgentSpecialty.wholesale_deals:
            score += 85.0

    return min(score, 100.0)


def performance_score(perf: AgentPerformance) -> float:
    """
    40% success rate, 30% satisfaction (stars -> 0..100), 20% responsiveness
    (loses 20 points per hour of average response time), 10% conversion.
    A missing metric contributes nothing.
    """
    score = 0.0

    success = to_float(perf.success_rate)
    if success is not None:
        score += clamp(success) * 0.4

    stars = to_float(perf.client_satisfaction)
    if stars is not None:
        score += clamp(stars / 5.0 * 100.0) * 0.3

    minutes = to_float(perf.avg_response_time)
    if minutes is not None:
        score += max(0.0, 100.0 - (max(minutes, 0.0) / 60.0) * 20.0) * 0.2

    conversion = to_float(perf.conversion_rate)
    if conversion is not None:
        score += clamp(conversion) * 0.1

    return clamp(score)


def availability_score(avail: AgentAvailability) -> float:
    if avail.max_capacity > 0:
        load = max(avail.current_load, 0) / avail.max_capacity
    else:
        load = 1.0
    score = 100.0 - load * 50.0
    if avail.status == AvailabilityStatus.online:
        score += 20.0
    elif avail.status == AvailabilityStatus.busy:
        score += 10.0
    return clamp(score)


def preference_score(raw: tuple[float | None, UrgencyLevel, ClientPreferences]) -> float:
    """raw = (deal_size, lead urgency, agent client preferences)"""
    deal_size, urgency, prefs = raw
    score = 50.0

    size = to_float(deal_size)
    lo = to_float(prefs.min_deal_size)
    hi = to_float(prefs.max_deal_size)
    if size is not None and lo is not None and hi is not None and lo <= size <= hi:
        score += 50.0

    agent_rank = _AGENT_URGENCY_RANK.get(prefs.response_urgency, 1)
    lead_rank = _LEAD_URGENCY_RANK.get(urgency, 1)
    if agent_rank >= lead_rank:
        score += 30.0

    return min(score, 100.0)


def location_score(raw: tuple[str, str, str]) -> float:
    """raw = (lead location, agent city, agent state). Remote handling => 50."""
    lead_location, city, state = raw
    loc = to_text(lead_location)
    for part in (to_text(city), to_text(state)):
        if part and part in loc:
            return 100.0
    return 50.0


def _specialization_raw(p: Pairing) -> Any:
    lead, agent = p
    return (
        lead.property_interest.type,
        lead.investor_profile.experience_level,
        lead.property_interest.deal_size,
        agent.specialty,
    )


def _preference_raw(p: Pairing) -> Any:
    lead, agent = p
    return (lead.property_interest.deal_size, lead.urgency_level, agent.client_preferences)


def _location_raw(p: Pairing) -> Any:
    lead, agent = p
    return (lead.property_interest.location, agent.location.city, agent.location.state)


AGENT_CONTEXT: ScoringContext[Pairing] = ScoringContext(
    "agent_match",
    [
        Feature("specialization", _specialization_raw, specialization_score),
        Feature("performance", lambda p: p[1].performance, performance_score),
        Feature("availability", lambda p: p[1].availability, availability_score),
        Feature("preference", _preference_raw, preference_score),
        Feature("location", _location_raw, location_score),
    ],
    AGENT_WEIGHTS,
)


def score_agent(lead: InvestorLead, agent: Agent) -> ScoreBreakdown:
    b = AGENT_CONTEXT.score((lead, agent))
    return replace(b, aggregate=round_half_up(b.aggregate, 2))


def _tie_key(agent: Agent) -> tuple[int, str]:
    # lighter workload first, then id so equal scores never depend on input order
    return (agent.availability.current_load, agent.id)


def rank_agents(lead: InvestorLead, agents: Iterable[Agent], limit: int | None = None) -> list[AgentMatch]:
    """Leaderboard of eligible agents for this lead, best first."""
    ranked = rank_candidates(
        agents,
        eligible=is_eligible,
        score=lambda a: score_agent(lead, a),
        tie_key=_tie_key,
    )
    if limit is not None:
        ranked = ranked[: max(limit, 0)]
    return [
        AgentMatch(agent=a, score=b.aggregate, breakdown=b, rank=i + 1)
        for i, (a, b) in enumerate(ranked)
    ]


def best_match(lead: InvestorLead, agents: Iterable[Agent]) -> AgentMatch | None:
    ranked = rank_agents(lead, agents, limit=1)
    return ranked[0] if ranked else None


def match_agent(lead: InvestorLead, agents: Iterable[Agent]) -> Agent | None:
    """Best eligible agent, or None when no agent is eligible."""
    m = best_match(lead, agents)
    return m.agent if m else None
