"""Adaptive investment decision engine for spare-change auto-investing"""

import math
from typing import Iterable, List, Optional

from autovest.domain.exceptions import InvalidInputError
from autovest.domain.models import DateLike, InvestmentDecision, RiskProfile, Transaction, UserFinancialProfile
from autovest.domain.scoring import get_risk_profile, validate_profile
from autovest.domain.subscriptions import detect_subscriptions
from autovest.utils.stats import calculate_spare_change, coefficient_of_variation, monthly_spending, round_half_up

MIN_INVEST_SCORE = 35


def get_aggression_multiplier(score: float) -> float:
    """
    Linear map of a 0-100 health score to a 0.3-1.0 investment fraction.

    Computed in percent so both endpoints come out exact (0 -> 0.3, 100 -> 1.0).
    """
    return (30 + score * 0.7) / 100


def calculate_confidence_boost(profile: UserFinancialProfile, now: Optional[DateLike] = None) -> float:
    """
    Additive boosts on top of the base multiplier.

    - +0.10: 3+ months of spending history with CV < 0.20
    - +0.15: more than 3 months of expenses saved
    - +0.05: subscriptions under 10% of income
    """
    # Accumulated in percentage points so 1.15 compares exactly
    boost_points = 100

    spending = monthly_spending(profile.transactions)
    if len(spending) >= 3 and coefficient_of_variation(spending) < 0.2:
        boost_points += 10

    if profile.liquid_savings / profile.monthly_expenses > 3:
        boost_points += 15

    subscriptions = detect_subscriptions(profile.transactions, now=now)
    subscription_cost = sum((s.amount for s in subscriptions), 0.0)
    if subscription_cost / profile.monthly_income < 0.10:
        boost_points += 5

    return boost_points / 100


def calculate_total_spare_change(transactions: Iterable[Transaction], cap: float = 10) -> float:
    """Spare change available across a batch of transactions"""
    total = sum((calculate_spare_change(t.amount, cap) for t in transactions), 0.0)
    return round_half_up(total, 2)


def determine_investment_mode(
    health_score: float,
    spare_change: float,
    profile: UserFinancialProfile,
    now: Optional[DateLike] = None,
) -> InvestmentDecision:
    """
    Decide whether to invest spare change and how aggressively.

    Investing requires BOTH a health score of at least 35 AND savings
    exceeding one month of expenses. The multiplier is capped at 1.0
    however large the confidence boost.

    Raises:
        InvalidProfileError: See validate_profile
        InvalidInputError: health_score outside [0, 100] or negative spare change
    """
    validate_profile(profile)
    if health_score is None or not math.isfinite(health_score) or not 0 <= health_score <= 100:
        raise InvalidInputError(f"health_score must be within [0, 100], got {health_score}")
    if spare_change is None or not math.isfinite(spare_change) or spare_change < 0:
        raise InvalidInputError(f"spare_change must be a non-negative number, got {spare_change}")

    base_multiplier = get_aggression_multiplier(health_score)
    confidence_boost = calculate_confidence_boost(profile, now=now)
    final_multiplier = min(base_multiplier * confidence_boost, 1.0)

    investment_amount = round_half_up(spare_change * final_multiplier, 2)

    months_of_expenses = profile.liquid_savings / profile.monthly_expenses
    should_invest = health_score >= MIN_INVEST_SCORE and profile.liquid_savings > profile.monthly_expenses
    risk_level = get_risk_profile(health_score)
    aggression = round_half_up(health_score)
    invest_pct = round_half_up(final_multiplier * 100)

    if not should_invest:
        reasoning = "Investment paused - build emergency fund first"
    elif risk_level == RiskProfile.AGGRESSIVE:
        reasoning = f"Strong financial health ({health_score:g}/100) - investing {invest_pct}% of spare change"
    elif risk_level == RiskProfile.MODERATE:
        reasoning = f"Good financial position - balanced approach with {invest_pct}% investment rate"
    else:
        reasoning = f"Conservative approach recommended - investing {invest_pct}% until health improves"

    recommendations: List[str] = []
    if health_score < 60:
        recommendations.append("Focus on improving financial health score for better returns")
    if months_of_expenses < 3:
        recommendations.append("Prioritize building 3-month emergency fund")
    if confidence_boost > 1.15:
        recommendations.append("Excellent financial discipline - maximizing investment potential")

    return InvestmentDecision(
        should_invest=should_invest,
        amount=investment_amount,
        aggression=aggression,
        reasoning=reasoning,
        spare_change=spare_change,
        aggression_multiplier=final_multiplier,
        risk_level=risk_level,
        recommendations=recommendations,
    )
