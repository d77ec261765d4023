"""
Tests for applying promotions and computing discounts
"""

import pydantic
import pytest
from loguru import logger

from promotion_engine import (
    ApplyResult,
    FailureReason,
    FixedAmountDiscount,
    PercentageDiscount,
    Promotion,
    PromotionEngine,
    SpecificScope,
    apply_promotion,
    calculate_discount,
)
from promotion_engine.config import PromotionEngineConfig
from promotion_engine.exceptions import (
    BelowMinimumTransactionError,
    InvalidPeriodError,
    PromotionError,
    UsageLimitReachedError,
    error_for,
)


NOW = 1_750_000_000


def make_promotion(**overrides) -> Promotion:
    """Build a valid 10% promotion, overriding any field"""
    fields = dict(
        code="SAVE10",
        description="10% off on orders",
        discount=PercentageDiscount(value=10.0),
        usage_limit=100,
        used=10,
        valid_from=1_700_000_000,
        valid_until=1_800_000_000,
        min_transaction=100.0,
        currency="USD",
    )
    fields.update(overrides)
    return Promotion(**fields)


def test_quick_start_scenario():
    """10% of 200 within the window is 20"""
    result = apply_promotion(make_promotion(), 200.0, NOW)
    assert result.success
    assert result.discount == 20.0
    assert result.reason is None


@pytest.mark.parametrize("amount,pct", [(200.0, 10.0), (123.45, 7.5), (1000.0, 33.3)])
def test_percentage_discount_is_exact(amount, pct):
    promo = make_promotion(discount=PercentageDiscount(value=pct), min_transaction=None)
    assert apply_promotion(promo, amount, NOW).discount == amount * pct / 100


def test_fixed_amount_discount():
    promo = make_promotion(discount=FixedAmountDiscount(value=50.0), min_transaction=None)
    assert apply_promotion(promo, 200.0, NOW).discount == 50.0


def test_fixed_amount_capped_at_transaction_amount():
    promo = make_promotion(discount=FixedAmountDiscount(value=50.0), min_transaction=None)
    assert apply_promotion(promo, 30.0, NOW).discount == 30.0


def test_usage_limit_reached():
    promo = make_promotion(usage_limit=2, used=2)
    result = apply_promotion(promo, 200.0, NOW)
    assert not result.success
    assert result.reason == FailureReason.USAGE_LIMIT_REACHED
    assert result.discount is None


def test_swapped_period_is_invalid_even_when_now_lies_between():
    promo = make_promotion(valid_from=1_800_000_000, valid_until=1_700_000_000)
    assert apply_promotion(promo, 200.0, NOW).reason == FailureReason.INVALID_PERIOD


def test_invalid_time_after_window():
    assert apply_promotion(make_promotion(), 200.0, 1_900_000_000).reason == FailureReason.INVALID_TIME


def test_below_minimum_transaction():
    promo = make_promotion(min_transaction=150.0)
    assert apply_promotion(promo, 100.0, NOW).reason == FailureReason.BELOW_MINIMUM_TRANSACTION


def test_first_failure_wins():
    """A promotion failing every check reports the period problem only"""
    promo = make_promotion(
        valid_from=1_800_000_000,
        valid_until=1_700_000_000,
        min_transaction=1_000.0,
        usage_limit=1,
        used=5,
    )
    assert apply_promotion(promo, 1.0, 1_900_000_000).reason == FailureReason.INVALID_PERIOD

    promo = make_promotion(min_transaction=1_000.0, usage_limit=1, used=5)
    assert apply_promotion(promo, 1.0, 1_900_000_000).reason == FailureReason.INVALID_TIME
    assert apply_promotion(promo, 1.0, NOW).reason == FailureReason.BELOW_MINIMUM_TRANSACTION


def test_apply_does_not_mutate_promotion():
    promo = make_promotion()
    before = promo.model_dump()
    apply_promotion(promo, 200.0, NOW)
    assert promo.model_dump() == before


def test_target_scope_is_not_enforced():
    promo = make_promotion(target=SpecificScope(label="electronics"))
    assert apply_promotion(promo, 200.0, NOW).discount == 20.0


def test_calculate_discount_ignores_validity():
    promo = make_promotion(usage_limit=1, used=1, valid_from=5, valid_until=1)
    assert calculate_discount(promo, 200.0) == 20.0


def test_unwrap_returns_discount():
    assert apply_promotion(make_promotion(), 200.0, NOW).unwrap() == 20.0


def test_unwrap_raises_matching_error():
    result = apply_promotion(make_promotion(usage_limit=2, used=2), 200.0, NOW)
    with pytest.raises(UsageLimitReachedError) as exc_info:
        result.unwrap()
    assert exc_info.value.reason == FailureReason.USAGE_LIMIT_REACHED
    assert exc_info.value.promotion_code == "SAVE10"
    assert str(exc_info.value) == "Promotion usage limit has been reached"


def test_error_for_covers_every_reason():
    for reason in FailureReason:
        error = error_for(reason, "X")
        assert isinstance(error, PromotionError)
        assert error.reason == reason
        assert str(error) == reason.message


def test_not_applicable_result_message():
    result = ApplyResult(promotion_code="X", reason=FailureReason.NOT_APPLICABLE)
    assert result.message == "Promotion is not applicable"


def test_engine_apply_and_usage():
    engine = PromotionEngine(log_level="WARNING", config=PromotionEngineConfig())
    promo = make_promotion(usage_limit=2, used=0)

    assert engine.apply(promo, 200.0, NOW).discount == 20.0
    engine.record_usage(promo)
    engine.record_usage(promo)
    assert promo.used == 2
    assert not engine.is_valid(promo, 200.0, NOW)

    with pytest.raises(UsageLimitReachedError):
        engine.apply_or_raise(promo, 200.0, NOW)

    engine.reset_usage(promo)
    assert engine.apply_or_raise(promo, 200.0, NOW) == 20.0


def test_engine_apply_or_raise_errors():
    engine = PromotionEngine(log_level="WARNING", config=PromotionEngineConfig())

    with pytest.raises(InvalidPeriodError):
        engine.apply_or_raise(make_promotion(valid_from=2, valid_until=1), 200.0, NOW)
    with pytest.raises(BelowMinimumTransactionError):
        engine.apply_or_raise(make_promotion(), 99.99, NOW)


def test_engine_valid_promotions():
    engine = PromotionEngine(log_level="WARNING", config=PromotionEngineConfig())
    good = make_promotion(code="GOOD")
    expired = make_promotion(code="OLD", valid_until=1_710_000_000)
    exhausted = make_promotion(code="USED", usage_limit=1, used=1)

    valid = engine.valid_promotions([good, expired, exhausted], 200.0, NOW)
    assert [p.code for p in valid] == ["GOOD"]
    assert engine.calculate_discount(expired, 200.0) == 20.0


def test_apply_result_needs_discount_or_reason():
    with pytest.raises(pydantic.ValidationError):
        ApplyResult(promotion_code="X")


def test_apply_result_rejects_discount_and_reason_together():
    with pytest.raises(pydantic.ValidationError):
        ApplyResult(promotion_code="X", discount=5.0, reason=FailureReason.INVALID_TIME)


def test_integer_amount_is_applied_as_float():
    promo = make_promotion(discount=FixedAmountDiscount(value=50.0), min_transaction=None)
    discount = apply_promotion(promo, 30, NOW).discount
    assert discount == 30.0
    assert isinstance(discount, float)


def test_validation_failure_logs_nothing_at_warning():
    messages = []
    sink_id = logger.add(messages.append, level="WARNING")
    try:
        for promo, now in [
            (make_promotion(valid_from=2, valid_until=1), NOW),
            (make_promotion(), 1_900_000_000),
            (make_promotion(min_transaction=500.0), NOW),
            (make_promotion(usage_limit=1, used=1), NOW),
        ]:
            assert not apply_promotion(promo, 200.0, now).success
    finally:
        logger.remove(sink_id)
    assert messages == []
