"""Domain models - pure Python dataclasses representing scoring inputs and outputs"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from autovest.utils.date_utils import DateLike


class Frequency(str, Enum):
    """Inferred billing frequency of a recurring charge"""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class RiskProfile(str, Enum):
    """Shared 4-band classification of a 0-100 score"""

    AGGRESSIVE = "aggressive"  # 80+
    MODERATE = "moderate"  # 60-79
    CONSERVATIVE = "conservative"  # 40-59
    MINIMAL = "minimal"  # <40


@dataclass(frozen=True)
class Transaction:
    """Single spending transaction supplied by the caller"""

    transaction_id: str
    date: DateLike
    amount: float
    merchant: str
    category: str
    description: str
    is_recurring: bool = False


@dataclass
class UserFinancialProfile:
    """Input aggregate for every scoring entry point"""

    monthly_income: float
    liquid_savings: float
    monthly_expenses: float
    transactions: List[Transaction] = field(default_factory=list)
    market_volatility: float = 0.15  # 0-1


@dataclass
class Subscription:
    """Recurring charge inferred from transaction history"""

    subscription_id: str
    merchant: str
    amount: float
    frequency: Frequency
    last_charge: DateLike
    detected_pattern: int  # heuristic confidence 0-100
    days_since_last_use: int
    estimated_next_charge: Optional[DateLike] = None


@dataclass
class SpendingStability:
    score: int
    weight: float
    coefficient_of_variation: float
    interpretation: str


@dataclass
class EmergencyBuffer:
    score: int
    weight: float
    months_of_expenses: float
    liquid_savings: float
    interpretation: str


@dataclass
class SubscriptionBurden:
    score: int
    weight: float
    percentage_of_income: float
    total_subscription_cost: float
    interpretation: str


@dataclass
class MarketRisk:
    score: int
    weight: float
    volatility_index: float
    interpretation: str


@dataclass
class ScoreBreakdown:
    """Weighted sub-scores behind the financial health score"""

    spending_stability: SpendingStability
    emergency_buffer: EmergencyBuffer
    subscription_burden: SubscriptionBurden
    market_risk: MarketRisk


@dataclass
class FinancialBehaviorScore:
    """Output of the financial health scorer"""

    total_score: int
    breakdown: ScoreBreakdown
    risk_profile: RiskProfile
    recommendations: List[str]


@dataclass
class SubscriptionAnalysis:
    """Per-subscription health and cancellation assessment"""

    subscription: Subscription
    health_score: int
    usage_confidence: int
    cost_burden: int
    should_cancel: bool
    cancel_confidence: int
    reasoning: str
    potential_savings: float


@dataclass
class SubscriptionHealthScore:
    """Output of the subscription health scorer"""

    total_score: int
    subscriptions: List[SubscriptionAnalysis]
    total_monthly_waste: float
    recommendations: List[str]

    @property
    def leak_risk(self) -> int:
        """Likelihood (0-100) that the subscription portfolio is leaking money"""
        return 100 - self.total_score


@dataclass
class InvestmentDecision:
    """Output of the investment decision engine"""

    should_invest: bool
    amount: float
    aggression: int
    reasoning: str
    spare_change: float
    aggression_multiplier: float
    risk_level: RiskProfile
    recommendations: List[str]
