import math

import pytest

from dealflow.domain.agent_matching import (
    AGENT_WEIGHTS,
    availability_score,
    best_match,
    is_eligible,
    location_score,
    match_agent,
    performance_score,
    preference_score,
    rank_agents,
    score_agent,
    specialization_score,
)
from dealflow.domain.types import (
    Agent,
    AgentAvailability,
    AgentLocation,
    AgentPerformance,
    AgentSpecialty,
    AvailabilityStatus,
    ClientPreferences,
    ExperienceLevel,
    InvestorLead,
    InvestorProfile,
    PropertyInterest,
    ResponseUrgency,
    UrgencyLevel,
)

STRONG_PERF = AgentPerformance(success_rate=95, avg_response_time=5, client_satisfaction=4.9, conversion_rate=85)


def make_agent(
    agent_id: str,
    *,
    specialty: AgentSpecialty = AgentSpecialty.wholesale_deals,
    status: AvailabilityStatus = AvailabilityStatus.online,
    load: int = 2,
    capacity: int = 10,
    perf: AgentPerformance = STRONG_PERF,
    city: str = "Detroit",
    state: str = "MI",
) -> Agent:
    return Agent(
        id=agent_id,
        name=agent_id.title(),
        specialty=specialty,
        availability=AgentAvailability(status, current_load=load, max_capacity=capacity),
        performance=perf,
        location=AgentLocation(city, state, "48201"),
        client_preferences=ClientPreferences(50_000, 400_000, ResponseUrgency.same_day),
    )


@pytest.fixture
def lead() -> InvestorLead:
    return InvestorLead(
        id="lead_1",
        property_interest=PropertyInterest("wholesale single family", (120_000, 180_000), "Detroit, MI"),
        investor_profile=InvestorProfile(experience_level=ExperienceLevel.intermediate),
        urgency_level=UrgencyLevel.high,
    )


def test_agent_weights():
    assert math.isclose(math.fsum(AGENT_WEIGHTS.weights.values()), 1.0, abs_tol=1e-9)
    assert AGENT_WEIGHTS.weights == {
        "specialization": 0.40,
        "performance": 0.25,
        "availability": 0.20,
        "preference": 0.10,
        "location": 0.05,
    }


def test_eligibility():
    assert is_eligible(make_agent("a", status=AvailabilityStatus.online))
    assert is_eligible(make_agent("b", status=AvailabilityStatus.busy))
    assert not is_eligible(make_agent("c", status=AvailabilityStatus.away))
    assert not is_eligible(make_agent("d", status=AvailabilityStatus.offline))
    assert not is_eligible(make_agent("e", load=10, capacity=10))
    assert not is_eligible(make_agent("f", load=0, capacity=0))
    assert is_eligible(make_agent("g", load=9, capacity=10))


def test_offline_agent_never_selected_even_if_best(lead):
    star = make_agent("star", status=AvailabilityStatus.offline, load=0)
    meh = make_agent("meh", specialty=AgentSpecialty.international, perf=AgentPerformance(success_rate=10))
    assert score_agent(lead, star).aggregate > score_agent(lead, meh).aggregate
    assert match_agent(lead, [star, meh]) is meh


def test_full_agent_never_selected(lead):
    full = make_agent("full", load=10, capacity=10)
    assert match_agent(lead, [full]) is None


def test_no_eligible_agents_returns_none(lead):
    assert match_agent(lead, []) is None
    assert best_match(lead, []) is None
    assert rank_agents(lead, [make_agent("x", status=AvailabilityStatus.away)]) == []


def test_best_specialist_wins(lead):
    wholesaler = make_agent("wholesaler", specialty=AgentSpecialty.wholesale_deals)
    luxury = make_agent("luxury", specialty=AgentSpecialty.luxury_properties)
    assert match_agent(lead, [luxury, wholesaler]) is wholesaler


def test_tie_breaks_on_load_then_id(lead):
    # same load ratio => identical scores
    light = make_agent("zeta", load=2, capacity=10)
    heavy = make_agent("alpha", load=4, capacity=20)
    assert score_agent(lead, light).aggregate == score_agent(lead, heavy).aggregate
    assert match_agent(lead, [heavy, light]) is light
    assert match_agent(lead, [light, heavy]) is light

    twin_a = make_agent("agent_a")
    twin_b = make_agent("agent_b")
    assert match_agent(lead, [twin_b, twin_a]) is twin_a
    assert match_agent(lead, [twin_a, twin_b]) is twin_a


def test_leaderboard_sorted_and_limited(lead):
    agents = [
        make_agent("wholesaler"),
        make_agent("luxury", specialty=AgentSpecialty.luxury_properties),
        make_agent("busy", status=AvailabilityStatus.busy, load=8),
        make_agent("gone", status=AvailabilityStatus.offline),
    ]
    board = rank_agents(lead, agents)
    assert [m.agent.id for m in board][0] == "wholesaler"
    assert "gone" not in {m.agent.id for m in board}
    assert [m.rank for m in board] == [1, 2, 3]
    scores = [m.score for m in board]
    assert scores == sorted(scores, reverse=True)

    assert len(rank_agents(lead, agents, limit=2)) == 2


def test_aggregate_bounded_and_two_decimals(lead):
    for status in (AvailabilityStatus.online, AvailabilityStatus.busy):
        for spec in AgentSpecialty:
            b = score_agent(lead, make_agent("x", specialty=spec, status=status))
            assert 0.0 <= b.aggregate <= 100.0
            assert round(b.aggregate, 2) == b.aggregate
            assert all(0.0 <= v <= 100.0 for v in b.factors.values())


def test_specialization_score():
    assert specialization_score(("Luxury condo", ExperienceLevel.expert, 700_000, AgentSpecialty.luxury_properties)) == 100.0
    assert specialization_score(("wholesale", None, 150_000, AgentSpecialty.wholesale_deals)) == 100.0
    assert specialization_score(("single family", ExperienceLevel.beginner, None, AgentSpecialty.first_time_investors)) == 90.0
    assert specialization_score(("single family", None, 150_000, AgentSpecialty.wholesale_deals)) == 85.0
    assert specialization_score(("luxury", ExperienceLevel.expert, 700_000, AgentSpecialty.fix_and_flip)) == 0.0
    assert specialization_score((None, None, None, AgentSpecialty.multifamily)) == 0.0


def test_performance_score():
    perfect = AgentPerformance(success_rate=100, avg_response_time=0, client_satisfaction=5, conversion_rate=100)
    assert performance_score(perfect) == pytest.approx(100.0)

    mid = AgentPerformance(success_rate=50, avg_response_time=60, client_satisfaction=2.5, conversion_rate=0)
    # 50*.4 + 50*.3 + 80*.2 + 0
    assert performance_score(mid) == pytest.approx(51.0)

    slow = AgentPerformance(avg_response_time=600)
    assert performance_score(slow) == 0.0
    assert performance_score(AgentPerformance()) == 0.0


def test_availability_score():
    assert availability_score(AgentAvailability(AvailabilityStatus.online, 5, 10)) == pytest.approx(95.0)
    assert availability_score(AgentAvailability(AvailabilityStatus.busy, 5, 10)) == pytest.approx(85.0)
    assert availability_score(AgentAvailability(AvailabilityStatus.online, 0, 10)) == 100.0
    assert availability_score(AgentAvailability(AvailabilityStatus.away, 10, 10)) == pytest.approx(50.0)
    assert availability_score(AgentAvailability(AvailabilityStatus.online, 3, 0)) == pytest.approx(70.0)


def test_preference_score():
    prefs = ClientPreferences(100_000, 300_000, ResponseUrgency.immediate)
    assert preference_score((200_000, UrgencyLevel.critical, prefs)) == 100.0
    slow = ClientPreferences(100_000, 300_000, ResponseUrgency.next_day)
    assert preference_score((900_000, UrgencyLevel.critical, slow)) == 50.0
    same_day = ClientPreferences(100_000, 300_000, ResponseUrgency.same_day)
    assert preference_score((900_000, UrgencyLevel.high, same_day)) == 80.0
    assert preference_score((None, UrgencyLevel.low, ClientPreferences())) == 80.0


def test_location_score():
    assert location_score(("Austin, TX", "Austin", "TX")) == 100.0
    assert location_score(("somewhere in tx", "Dallas", "TX")) == 100.0
    assert location_score(("Miami, FL", "Austin", "TX")) == 50.0
    assert location_score(("Miami, FL", "", "")) == 50.0
    assert location_score((None, "Austin", "TX")) == 50.0


def test_matching_is_deterministic(lead):
    agents = [make_agent(f"a{i}", load=i) for i in range(6)]
    first = [m.agent.id for m in rank_agents(lead, agents)]
    for _ in range(5):
        assert [m.agent.id for m in rank_agents(lead, list(reversed(agents)))] == first
