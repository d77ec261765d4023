"""
Tests for the promotion usage counter
"""

from promotion_engine import PercentageDiscount, Promotion, increment_usage, reset_usage


def create_promo() -> Promotion:
    """Helper to create a basic promotion for testing"""
    return Promotion(
        code="PROMO10",
        description="10% discount",
        discount=PercentageDiscount(value=10.0),
        usage_limit=5,
        used=0,
        valid_from=1_700_000_000,
        valid_until=1_800_000_000,
        min_transaction=50.0,
        currency="USD",
    )


def test_increment_usage():
    promo = create_promo()

    increment_usage(promo)
    assert promo.used == 1

    increment_usage(promo)
    assert promo.used == 2


def test_increment_past_limit_is_allowed():
    promo = create_promo()
    promo.used = 5
    increment_usage(promo)
    assert promo.used == 6


def test_reset_usage():
    promo = create_promo()
    promo.used = 5

    reset_usage(promo)
    assert promo.used == 0


def test_reset_usage_when_zero():
    promo = create_promo()

    reset_usage(promo)
    assert promo.used == 0
