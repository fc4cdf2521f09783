# dealflow/domain/types.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class AgentSpecialty(str, Enum):
    luxury_properties = "luxury_properties"
    first_time_investors = "first_time_investors"
    commercial_real_estate = "commercial_real_estate"
    wholesale_deals = "wholesale_deals"
    fix_and_flip = "fix_and_flip"
    rental_properties = "rental_properties"
    land_development = "land_development"
    multifamily = "multifamily"
    international = "international"


class AvailabilityStatus(str, Enum):
    online = "online"
    busy = "busy"
    away = "away"
    offline = "offline"


class ResponseUrgency(str, Enum):
    immediate = "immediate"
    same_day = "same_day"
    next_day = "next_day"


class UrgencyLevel(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"
    critical = "critical"


class ExperienceLevel(str, Enum):
    beginner = "beginner"
    intermediate = "intermediate"
    advanced = "advanced"
    expert = "expert"


# -----------------------------
# Agents
# -----------------------------
@dataclass(frozen=True)
class AgentLocation:
    city: str = ""
    state: str = ""
    zip: str = ""


@dataclass(frozen=True)
class AgentPerformance:
    success_rate: float | None = None  # 0..100
    avg_response_time: float | None = None  # minutes
    client_satisfaction: float | None = None  # 1..5 stars
    conversion_rate: float | None = None  # 0..100
    avg_deal_size: float | None = None
    total_deals_closed: int = 0
    total_volume: float | None = None


@dataclass(frozen=True)
class AgentAvailability:
    status: AvailabilityStatus
    current_load: int
    max_capacity: int


@dataclass(frozen=True)
class ClientPreferences:
    min_deal_size: float | None = None
    max_deal_size: float | None = None
    response_urgency: ResponseUrgency = ResponseUrgency.next_day
    preferred_property_types: tuple[str, ...] = ()
    preferred_locations: tuple[str, ...] = ()


@dataclass(frozen=True)
class Agent:
    id: str
    name: str
    specialty: AgentSpecialty
    availability: AgentAvailability
    performance: AgentPerformance = field(default_factory=AgentPerformance)
    location: AgentLocation = field(default_factory=AgentLocation)
    client_preferences: ClientPreferences = field(default_factory=ClientPreferences)
    ai_score: float | None = None


# -----------------------------
# Investor leads (agent matching)
# -----------------------------
@dataclass(frozen=True)
class PropertyInterest:
    type: str = ""
    price_range: tuple[float, float] | None = None
    location: str = ""
    timeline: str | None = None

    @property
    def deal_size(self) -> float | None:
        if not self.price_range:
            return None
        lo, hi = self.price_range
        return (lo + hi) / 2.0


@dataclass(frozen=True)
class InvestorProfile:
    experience_level: ExperienceLevel | None = None
    investment_budget: float | None = None
    preferred_strategy: str | None = None
    risk_tolerance: str | None = None


@dataclass(frozen=True)
class InvestorLead:
    id: str
    property_interest: PropertyInterest = field(default_factory=PropertyInterest)
    investor_profile: InvestorProfile = field(default_factory=InvestorProfile)
    urgency_level: UrgencyLevel = UrgencyLevel.low


# -----------------------------
# Property leads (deal scoring)
# -----------------------------
@dataclass(frozen=True)
class PropertyData:
    price: float | None
    location: str | None = None
    condition: str | None = None
    arv: float | None = None
    source: str | None = None


# -----------------------------
# Results
# -----------------------------
@dataclass(frozen=True)
class ScoreBreakdown:
    """Aggregate plus the per-feature sub-scores and the weights that produced it."""

    aggregate: float
    factors: Mapping[str, float]
    weights: Mapping[str, float]

    def __post_init__(self) -> None:
        object.__setattr__(self, "factors", MappingProxyType(dict(self.factors)))
        object.__setattr__(self, "weights", MappingProxyType(dict(self.weights)))


@dataclass(frozen=True)
class LeadScore:
    overall: int  # 0..100
    probability: int  # 0..100
    factors: Mapping[str, float]
    weights: Mapping[str, float]
    recommendation: str


@dataclass(frozen=True)
class AgentMatch:
    agent: Agent
    score: float
    breakdown: ScoreBreakdown
    rank: int = 1
