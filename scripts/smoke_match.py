# scripts/smoke_match.py
from dealflow.domain.agent_matching import rank_agents
from dealflow.domain.ranking import explain
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

AGENTS = [
    Agent(
        id="agent_sarah_chen",
        name="Sarah Chen",
        specialty=AgentSpecialty.luxury_properties,
        availability=AgentAvailability(AvailabilityStatus.online, current_load=8, max_capacity=15),
        performance=AgentPerformance(
            success_rate=94.2, avg_response_time=2.3, client_satisfaction=4.9, conversion_rate=87.5
        ),
        location=AgentLocation("Beverly Hills", "CA", "90210"),
        client_preferences=ClientPreferences(300_000, 5_000_000, ResponseUrgency.same_day),
    ),
    Agent(
        id="agent_marcus_rodriguez",
        name="Marcus Rodriguez",
        specialty=AgentSpecialty.first_time_investors,
        availability=AgentAvailability(AvailabilityStatus.online, current_load=12, max_capacity=20),
        performance=AgentPerformance(
            success_rate=91.8, avg_response_time=1.7, client_satisfaction=4.8, conversion_rate=89.2
        ),
        location=AgentLocation("Austin", "TX", "78701"),
        client_preferences=ClientPreferences(100_000, 800_000, ResponseUrgency.immediate),
    ),
]


def main() -> None:
    lead = InvestorLead(
        id="lead_demo",
        property_interest=PropertyInterest("single family", (180_000, 260_000), "Austin, TX"),
        investor_profile=InvestorProfile(experience_level=ExperienceLevel.beginner),
        urgency_level=UrgencyLevel.high,
    )
    for m in rank_agents(lead, AGENTS):
        print(m.rank, m.agent.id, explain(m.breakdown))


if __name__ == "__main__":
    main()
