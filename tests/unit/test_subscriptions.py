"""Unit tests for subscription detection"""

from datetime import date, datetime, timedelta, timezone
from autovest.domain.models import Frequency, Transaction
from autovest.domain.subscriptions import classify_frequency, detect_subscriptions


NOW = datetime(2024, 3, 1)


def _charges(merchant: str, first: datetime, gap_days: int, count: int, amount: float = 9.99, recurring: bool = True):
    return [
        Transaction(
            transaction_id=f"{merchant}_{i}",
            date=first + timedelta(days=gap_days * i),
            amount=amount,
            merchant=merchant,
            category="Entertainment",
            description=merchant,
            is_recurring=recurring,
        )
        for i in range(count)
    ]


def test_detect_netflix_monthly(netflix_charges):
    """Two charges 30 days apart -> one monthly subscription with 60% pattern confidence"""
    subscriptions = detect_subscriptions(netflix_charges, now=NOW)

    assert len(subscriptions) == 1
    sub = subscriptions[0]
    assert sub.subscription_id == "sub-netflix"
    assert sub.merchant == "Netflix"
    assert sub.frequency == Frequency.MONTHLY
    assert sub.amount == 649
    assert sub.detected_pattern == 60
    assert sub.last_charge == datetime(2024, 2, 13)
    # Feb 13 -> Mar 1 in a leap year
    assert sub.days_since_last_use == 17
    assert sub.estimated_next_charge == datetime(2024, 3, 14)


def test_single_recurring_charge_is_not_a_subscription():
    assert detect_subscriptions(_charges("Spotify", datetime(2024, 2, 1), 30, 1), now=NOW) == []


def test_non_recurring_transactions_ignored():
    transactions = _charges("Grocer", datetime(2024, 1, 1), 7, 5, recurring=False)
    assert detect_subscriptions(transactions, now=NOW) == []


def test_merchant_grouping_is_case_sensitive():
    transactions = _charges("Spotify", datetime(2024, 1, 1), 30, 1) + _charges("spotify", datetime(2024, 1, 31), 30, 1)
    assert detect_subscriptions(transactions, now=NOW) == []


def test_weekly_and_yearly_frequencies():
    weekly = _charges("Gym Class", datetime(2024, 2, 1), 7, 3)
    yearly = _charges("Domain Renewal", datetime(2022, 6, 1), 365, 2)

    subscriptions = {s.merchant: s for s in detect_subscriptions(weekly + yearly, now=NOW)}

    assert subscriptions["Gym Class"].frequency == Frequency.WEEKLY
    assert subscriptions["Gym Class"].detected_pattern == 90
    assert subscriptions["Domain Renewal"].frequency == Frequency.YEARLY


def test_unclassified_gap_falls_back_to_monthly():
    assert classify_frequency(100) == Frequency.MONTHLY
    assert classify_frequency(300) == Frequency.MONTHLY
    assert classify_frequency(301) == Frequency.YEARLY
    assert classify_frequency(7) == Frequency.WEEKLY
    assert classify_frequency(35) == Frequency.MONTHLY


def test_pattern_confidence_saturates_at_100():
    subscriptions = detect_subscriptions(_charges("Cloud Storage", datetime(2023, 11, 1), 30, 4), now=NOW)
    assert subscriptions[0].detected_pattern == 100


def test_id_replaces_whitespace_and_lowercases():
    subscriptions = detect_subscriptions(_charges("Amazon Prime Video", datetime(2024, 1, 1), 30, 2), now=NOW)
    assert subscriptions[0].subscription_id == "sub-amazon-prime-video"


def test_unsorted_history_uses_latest_charge_and_mean_amount():
    transactions = [
        Transaction("b", datetime(2024, 2, 10), 12.0, "News", "Media", "News", True),
        Transaction("a", datetime(2024, 1, 10), 8.0, "News", "Media", "News", True),
    ]
    sub = detect_subscriptions(transactions, now=NOW)[0]

    assert sub.last_charge == datetime(2024, 2, 10)
    assert sub.amount == 10.0


def test_detection_does_not_mutate_input(netflix_charges):
    snapshot = list(netflix_charges)
    detect_subscriptions(netflix_charges, now=NOW)
    assert netflix_charges == snapshot


def test_detection_is_deterministic_for_fixed_now(netflix_charges):
    assert detect_subscriptions(netflix_charges, now=NOW) == detect_subscriptions(netflix_charges, now=NOW)


def test_defaults_to_wall_clock(netflix_charges):
    sub = detect_subscriptions(netflix_charges)[0]
    assert sub.days_since_last_use >= 17


def test_mixed_date_and_datetime_charges():
    transactions = [
        Transaction("music_1", date(2024, 1, 1), 9.99, "Music", "Entertainment", "Music", True),
        Transaction("music_2", datetime(2024, 1, 31, 8), 9.99, "Music", "Entertainment", "Music", True),
    ]
    sub = detect_subscriptions(transactions, now=NOW)[0]

    assert sub.frequency == Frequency.MONTHLY
    assert sub.last_charge == datetime(2024, 1, 31, 8)
    # Jan 31 08:00 -> Mar 1 00:00, partial day counts
    assert sub.days_since_last_use == 30


def test_aware_charges_compare_in_utc():
    first = datetime(2024, 1, 1, tzinfo=timezone.utc)
    transactions = _charges("Music", first, 30, 2)

    sub = detect_subscriptions(transactions, now=datetime(2024, 3, 1, tzinfo=timezone.utc))
    assert sub[0].days_since_last_use == 30
    assert detect_subscriptions(transactions, now=NOW)[0].days_since_last_use == 30


def test_aware_charges_default_to_utc_clock():
    first = datetime(2024, 1, 1, tzinfo=timezone(timedelta(hours=5, minutes=30)))
    sub = detect_subscriptions(_charges("Music", first, 30, 2))[0]

    assert sub.frequency == Frequency.MONTHLY
    assert sub.days_since_last_use >= 30
