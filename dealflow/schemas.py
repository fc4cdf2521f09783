# dealflow/schemas.py
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .domain.deal_analysis import DealInputs
from .domain.types import (
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
    PropertyData,
    PropertyInterest,
    ResponseUrgency,
    UrgencyLevel,
)


class _Envelope(BaseModel):
    """Request bodies: unknown keys and NaN/Infinity are a client bug, reject them."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, allow_inf_nan=False)


class _Record(BaseModel):
    """Entity rows: callers often pass full DB rows, extra columns are ignored."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, allow_inf_nan=False)


# -----------------------------
# Predictive lead scoring
# -----------------------------
class PropertyDataIn(_Envelope):
    price: float
    location: str | None = None
    condition: str | None = None
    arv: float | None = None
    source: str | None = None

    def to_domain(self) -> PropertyData:
        return PropertyData(
            price=self.price,
            location=self.location,
            condition=self.condition,
            arv=self.arv,
            source=self.source,
        )


class ScorePredictRequest(_Envelope):
    lead_id: str | None = Field(default=None, alias="leadId")
    property_data: PropertyDataIn = Field(..., alias="propertyData")
    wholesaler_id: str = Field(..., alias="wholesalerId", min_length=1)


class ScoreOut(BaseModel):
    overall: int = Field(..., ge=0, le=100)
    probability: int = Field(..., ge=0, le=100)
    factors: dict[str, float]
    weights: dict[str, float]


class ScorePredictResponse(BaseModel):
    score: ScoreOut
    recommendation: str
    stored: bool


# -----------------------------
# Agent matching
# -----------------------------
class AgentLocationIn(_Record):
    city: str = ""
    state: str = ""
    zip: str = ""


class AgentPerformanceIn(_Record):
    success_rate: float | None = None
    avg_response_time: float | None = None
    client_satisfaction: float | None = None
    conversion_rate: float | None = None
    avg_deal_size: float | None = None
    total_deals_closed: int = 0
    total_volume: float | None = None


class AgentAvailabilityIn(_Record):
    status: AvailabilityStatus
    current_load: int = Field(..., ge=0)
    max_capacity: int = Field(..., ge=0)


class ClientPreferencesIn(_Record):
    min_deal_size: float | None = None
    max_deal_size: float | None = None
    response_urgency: ResponseUrgency = ResponseUrgency.next_day
    preferred_property_types: list[str] = Field(default_factory=list)
    preferred_locations: list[str] = Field(default_factory=list)


class AgentIn(_Record):
    id: str
    name: str
    specialty: AgentSpecialty
    availability: AgentAvailabilityIn
    performance: AgentPerformanceIn = Field(default_factory=AgentPerformanceIn)
    location: AgentLocationIn = Field(default_factory=AgentLocationIn)
    client_preferences: ClientPreferencesIn = Field(default_factory=ClientPreferencesIn)
    ai_score: float | None = None

    def to_domain(self) -> Agent:
        prefs = self.client_preferences
        return Agent(
            id=self.id,
            name=self.name,
            specialty=self.specialty,
            availability=AgentAvailability(**self.availability.model_dump()),
            performance=AgentPerformance(**self.performance.model_dump()),
            location=AgentLocation(**self.location.model_dump()),
            client_preferences=ClientPreferences(
                min_deal_size=prefs.min_deal_size,
                max_deal_size=prefs.max_deal_size,
                response_urgency=prefs.response_urgency,
                preferred_property_types=tuple(prefs.preferred_property_types),
                preferred_locations=tuple(prefs.preferred_locations),
            ),
            ai_score=self.ai_score,
        )


class PropertyInterestIn(_Record):
    type: str = ""
    price_range: tuple[float, float] | None = None
    location: str = ""
    timeline: Literal["immediate", "30_days", "60_days", "90_days"] | None = None


class InvestorProfileIn(_Record):
    experience_level: ExperienceLevel | None = None
    investment_budget: float | None = None
    preferred_strategy: str | None = None
    risk_tolerance: Literal["low", "medium", "high"] | None = None


class InvestorLeadIn(_Record):
    id: str
    property_interest: PropertyInterestIn = Field(default_factory=PropertyInterestIn)
    investor_profile: InvestorProfileIn = Field(default_factory=InvestorProfileIn)
    urgency_level: UrgencyLevel = UrgencyLevel.low

    def to_domain(self) -> InvestorLead:
        pi = self.property_interest
        return InvestorLead(
            id=self.id,
            property_interest=PropertyInterest(
                type=pi.type,
                price_range=pi.price_range,
                location=pi.location,
                timeline=pi.timeline,
            ),
            investor_profile=InvestorProfile(**self.investor_profile.model_dump()),
            urgency_level=self.urgency_level,
        )


class MatchRequest(_Envelope):
    lead: InvestorLeadIn
    agents: list[AgentIn]


class LeaderboardRequest(MatchRequest):
    limit: int | None = Field(default=None, ge=1, le=500)


class AgentMatchOut(BaseModel):
    agent_id: str
    name: str
    rank: int
    score: float
    factors: dict[str, float]
    explain: str


class MatchResponse(BaseModel):
    lead_id: str
    match: AgentMatchOut | None
    considered: int
    eligible: int


class LeaderboardResponse(BaseModel):
    lead_id: str
    results: list[AgentMatchOut]
    considered: int
    eligible: int


# -----------------------------
# Deal analyzer
# -----------------------------
class DealPropertyIn(_Envelope):
    address: str = ""
    purchase_price: float = Field(..., gt=0, alias="purchasePrice")
    arv: float | None = Field(default=None, ge=0)
    rehab_cost: float | None = Field(default=None, ge=0, alias="rehabCost")
    sqft: float | None = Field(default=None, ge=0)
    condition: str | None = None

    def to_domain(self) -> DealInputs:
        return DealInputs(
            address=self.address,
            purchase_price=self.purchase_price,
            arv=self.arv,
            rehab_cost=self.rehab_cost,
            sqft=self.sqft,
            condition=self.condition,
        )


class DealAnalyzeRequest(_Envelope):
    property_data: DealPropertyIn = Field(..., alias="propertyData")
    user_id: str | None = Field(default=None, alias="userId")


class DealPropertyOut(BaseModel):
    address: str
    purchase_price: float
    arv: float
    arv_estimated: bool
    rehab_cost: float
    rehab_estimated: bool


class DealCalculationsOut(BaseModel):
    total_investment: float
    potential_profit: float
    roi: float
    profit_margin: float
    wholesale_spread: float


class DealAnalysisOut(BaseModel):
    property: DealPropertyOut
    calculations: DealCalculationsOut
    risk: Literal["Low", "Medium", "High"]
    recommendations: list[str]


class DealAnalyzeResponse(BaseModel):
    analysis: DealAnalysisOut
    notified: bool
