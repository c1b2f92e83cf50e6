"""Unit tests for the adaptive investment decision engine"""

import math
import pytest
from datetime import datetime
from autovest.domain.exceptions import InvalidInputError, InvalidProfileError
from autovest.domain.investment import (
    calculate_confidence_boost,
    calculate_total_spare_change,
    determine_investment_mode,
    get_aggression_multiplier,
)
from autovest.domain.models import RiskProfile, Transaction, UserFinancialProfile


def _with_savings(profile: UserFinancialProfile, savings: float) -> UserFinancialProfile:
    return UserFinancialProfile(
        monthly_income=profile.monthly_income,
        liquid_savings=savings,
        monthly_expenses=profile.monthly_expenses,
        transactions=profile.transactions,
        market_volatility=profile.market_volatility,
    )


def test_aggression_multiplier_endpoints_are_exact():
    assert get_aggression_multiplier(0) == 0.3
    assert get_aggression_multiplier(100) == 1.0
    assert get_aggression_multiplier(50) == pytest.approx(0.65)


def test_confidence_boost_components(reference_profile, now):
    # Stable 3 months (+0.10) and no subscriptions (+0.05); 2.5 months saved earns nothing
    assert calculate_confidence_boost(reference_profile, now=now) == 1.15
    # All three boosts apply together
    assert calculate_confidence_boost(_with_savings(reference_profile, 20000), now=now) == 1.3


def test_reference_decision(reference_profile, now):
    decision = determine_investment_mode(76, 20, reference_profile, now=now)

    # base 0.832 x boost 1.15
    assert decision.aggression_multiplier == pytest.approx(0.9568)
    assert decision.amount == 19.14
    assert decision.should_invest is True
    assert decision.aggression == 76
    assert decision.spare_change == 20
    assert decision.risk_level == RiskProfile.MODERATE
    assert decision.reasoning == "Good financial position - balanced approach with 96% investment rate"
    assert decision.recommendations == ["Prioritize building 3-month emergency fund"]


def test_multiplier_capped_at_one(reference_profile, now):
    decision = determine_investment_mode(100, 12.5, _with_savings(reference_profile, 20000), now=now)

    assert decision.aggression_multiplier == 1.0
    assert decision.amount == 12.5
    assert decision.risk_level == RiskProfile.AGGRESSIVE
    assert decision.reasoning == "Strong financial health (100/100) - investing 100% of spare change"
    assert "Excellent financial discipline - maximizing investment potential" in decision.recommendations


def test_investing_requires_score_and_savings(reference_profile, now):
    """Both conditions are required (AND)"""
    thin_savings = _with_savings(reference_profile, 3000)  # below one month of expenses
    paused = determine_investment_mode(90, 10, thin_savings, now=now)
    assert paused.should_invest is False
    assert paused.reasoning == "Investment paused - build emergency fund first"

    low_score = determine_investment_mode(30, 10, _with_savings(reference_profile, 20000), now=now)
    assert low_score.should_invest is False

    assert determine_investment_mode(35, 10, reference_profile, now=now).should_invest is True
    assert determine_investment_mode(34.9, 10, reference_profile, now=now).should_invest is False


def test_conservative_reasoning_for_low_bands(reference_profile, now):
    conservative = determine_investment_mode(45, 10, reference_profile, now=now)

    assert conservative.risk_level == RiskProfile.CONSERVATIVE
    assert conservative.reasoning.startswith("Conservative approach recommended - investing ")
    assert "Focus on improving financial health score for better returns" in conservative.recommendations


def test_should_invest_monotonic_in_savings(reference_profile, now):
    outcomes = [
        determine_investment_mode(50, 10, _with_savings(reference_profile, s), now=now).should_invest
        for s in (0, 1000, 3200, 3201, 8000, 50000)
    ]
    assert outcomes == sorted(outcomes)
    assert outcomes[-1] is True


def test_multiplier_stays_in_range(reference_profile, now):
    for score in range(0, 101, 10):
        decision = determine_investment_mode(score, 10, reference_profile, now=now)
        assert 0.3 <= decision.aggression_multiplier <= 1.0


def test_zero_spare_change_invests_nothing(reference_profile, now):
    decision = determine_investment_mode(80, 0, reference_profile, now=now)
    assert decision.amount == 0


@pytest.mark.parametrize("health_score", [-1, 100.5, math.nan, math.inf])
def test_rejects_out_of_range_health_score(reference_profile, now, health_score):
    with pytest.raises(InvalidInputError):
        determine_investment_mode(health_score, 10, reference_profile, now=now)


def test_rejects_negative_spare_change(reference_profile, now):
    with pytest.raises(InvalidInputError):
        determine_investment_mode(50, -1, reference_profile, now=now)


def test_rejects_zero_expenses(now):
    profile = UserFinancialProfile(monthly_income=5000, liquid_savings=8000, monthly_expenses=0)
    with pytest.raises(InvalidProfileError):
        determine_investment_mode(50, 10, profile, now=now)


def test_total_spare_change_over_transactions():
    amounts = [143, 287, 1234, 649, 1876]
    transactions = [
        Transaction(str(i), datetime(2024, 1, 15), float(amount), "Shop", "Misc", "Shop")
        for i, amount in enumerate(amounts)
    ]
    assert calculate_total_spare_change(transactions, 10) == 21.0
    assert calculate_total_spare_change([], 10) == 0.0


def test_large_spare_change_is_rounded_without_overflow(reference_profile, now):
    decision = determine_investment_mode(50, 1e27, reference_profile, now=now)

    # base 0.65 x boost 1.15
    assert decision.amount == pytest.approx(1e27 * 0.7475)
    assert math.isfinite(decision.amount)


def test_strong_health_reasoning_shows_unrounded_score(reference_profile, now):
    decision = determine_investment_mode(85.4, 10, reference_profile, now=now)

    assert decision.risk_level == RiskProfile.AGGRESSIVE
    assert decision.aggression == 85
    assert decision.reasoning.startswith("Strong financial health (85.4/100) - investing ")
