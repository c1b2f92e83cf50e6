"""Pydantic schemas for API request/response validation"""

from datetime import date, datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from autovest.config import RoundUpCap, settings
from autovest.domain.models import Frequency, RiskProfile, Transaction, UserFinancialProfile
from autovest.utils.date_utils import as_datetime


class TransactionSchema(BaseModel):
    """Single transaction in a request body"""

    transaction_id: str = Field(..., min_length=1)
    date: datetime
    amount: float = Field(..., ge=0, description="Transaction amount in currency units")
    merchant: str
    category: str = ""
    description: str = ""
    is_recurring: bool = False

    def to_domain(self) -> Transaction:
        return Transaction(
            transaction_id=self.transaction_id,
            date=as_datetime(self.date),
            amount=self.amount,
            merchant=self.merchant,
            category=self.category,
            description=self.description,
            is_recurring=self.is_recurring,
        )


class ProfileSchema(BaseModel):
    """User financial profile; income/expense positivity is enforced by the domain"""

    monthly_income: float
    liquid_savings: float
    monthly_expenses: float
    transactions: List[TransactionSchema] = []
    market_volatility: float = Field(default_factory=lambda: settings.default_market_volatility, ge=0, le=1)

    def to_domain(self) -> UserFinancialProfile:
        return UserFinancialProfile(
            monthly_income=self.monthly_income,
            liquid_savings=self.liquid_savings,
            monthly_expenses=self.monthly_expenses,
            transactions=[t.to_domain() for t in self.transactions],
            market_volatility=self.market_volatility,
        )


class DetectRequest(BaseModel):
    """Request body for POST /v1/subscriptions/detect"""

    transactions: List[TransactionSchema]


class InvestmentRequest(BaseModel):
    """Request body for POST /v1/investment/decision"""

    health_score: float = Field(..., ge=0, le=100)
    spare_change: float = Field(..., ge=0)
    profile: ProfileSchema


class SpareChangeRequest(BaseModel):
    """Request body for POST /v1/spare-change"""

    amounts: List[float] = Field(..., description="Transaction amounts to round up")
    round_up_cap: RoundUpCap = Field(default_factory=lambda: settings.default_round_up_cap)


class AnalysisRequest(BaseModel):
    """Request body for POST /v1/analysis"""

    profile: ProfileSchema
    round_up_cap: Optional[RoundUpCap] = None
    spare_change: Optional[float] = Field(None, ge=0, description="Overrides spare change derived from transactions")


class PredictionRequest(BaseModel):
    """Feature vector forwarded to the external ML engine"""

    daily_spending: float
    spare_change_total: float
    spending_variance: float
    emergency_balance_ratio: float
    market_risk_score: float
    user_type: str = "professional"


# Responses are validated straight from the domain dataclasses


class DomainSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class SubscriptionSchema(DomainSchema):
    subscription_id: str
    merchant: str
    amount: float
    frequency: Frequency
    last_charge: Union[datetime, date]
    detected_pattern: int
    days_since_last_use: int
    estimated_next_charge: Optional[Union[datetime, date]] = None


class DetectResponse(BaseModel):
    subscriptions: List[SubscriptionSchema]


class SpendingStabilitySchema(DomainSchema):
    score: int
    weight: float
    coefficient_of_variation: float
    interpretation: str


class EmergencyBufferSchema(DomainSchema):
    score: int
    weight: float
    months_of_expenses: float
    liquid_savings: float
    interpretation: str


class SubscriptionBurdenSchema(DomainSchema):
    score: int
    weight: float
    percentage_of_income: float
    total_subscription_cost: float
    interpretation: str


class MarketRiskSchema(DomainSchema):
    score: int
    weight: float
    volatility_index: float
    interpretation: str


class BreakdownSchema(DomainSchema):
    spending_stability: SpendingStabilitySchema
    emergency_buffer: EmergencyBufferSchema
    subscription_burden: SubscriptionBurdenSchema
    market_risk: MarketRiskSchema


class HealthScoreResponse(DomainSchema):
    """Response for POST /v1/health-score"""

    total_score: int
    breakdown: BreakdownSchema
    risk_profile: RiskProfile
    recommendations: List[str]


class SubscriptionAnalysisSchema(DomainSchema):
    subscription: SubscriptionSchema
    health_score: int
    usage_confidence: int
    cost_burden: int
    should_cancel: bool
    cancel_confidence: int
    reasoning: str
    potential_savings: float


class SubscriptionHealthResponse(DomainSchema):
    """Response for POST /v1/subscriptions/health"""

    total_score: int
    leak_risk: int
    subscriptions: List[SubscriptionAnalysisSchema]
    total_monthly_waste: float
    recommendations: List[str]


class InvestmentDecisionResponse(DomainSchema):
    """Response for POST /v1/investment/decision"""

    should_invest: bool
    amount: float
    aggression: int
    reasoning: str
    spare_change: float
    aggression_multiplier: float
    risk_level: RiskProfile
    recommendations: List[str]


class SpareChangeResponse(BaseModel):
    """Response for POST /v1/spare-change"""

    round_up_cap: int
    spare_change: List[float]
    total: float


class ExplanationsSchema(BaseModel):
    health: str
    subscriptions: str
    investment: str
    dashboard_summary: str


class AnalysisResponse(BaseModel):
    """Response for POST /v1/analysis"""

    health_score: HealthScoreResponse
    subscription_health: SubscriptionHealthResponse
    investment: InvestmentDecisionResponse
    health_label: str
    investment_mode: str
    explanations: ExplanationsSchema


class PredictionResponse(BaseModel):
    """Response for POST /v1/predict"""

    decision: str
    confidence: float
    reasoning: List[str]
