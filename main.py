
from promotion_engine import (
    PercentageDiscount,
    Promotion,
    PromotionEngine,
    GlobalScope,
)


def main():
    engine = PromotionEngine(log_level="INFO")

    promo = Promotion(
        code="WELCOME10",
        description="10% off for new users",
        discount=PercentageDiscount(value=10.0),
        usage_limit=100,
        used=10,
        valid_from=1_700_000_000,
        valid_until=1_800_000_000,
        min_transaction=100.0,
        target=GlobalScope(),
        currency="USD",
    )

    result = engine.apply(promo, 200.0, 1_750_000_000)
    if result.success:
        engine.record_usage(promo)
        print(f"Promotion applied! Discount: {promo.currency or ''} {result.discount}")
    else:
        print(f"Failed to apply promotion: {result.message}")

    print(promo.model_dump_json(indent=2))


if __name__ == "__main__":
    main()
