"""
Promotion Engine

A lightweight rule engine for validating promotional discounts against a
transaction and computing the discount they grant.
"""

__version__ = "1.0.0"
__author__ = "Promotion Engine Team"

from .core import PromotionEngine, apply_promotion
from .models import (
    ApplyResult,
    FailureReason,
    FixedAmountDiscount,
    GlobalScope,
    PercentageDiscount,
    PromoContext,
    Promotion,
    SpecificScope,
)
from .eligibility_checker import EligibilityChecker, evaluate_promotion, is_promo_valid
from .discount_calculator import DiscountCalculator, calculate_discount
from .usage_tracker import increment_usage, reset_usage
from .promotion_loader import PromotionLoader
from .exceptions import PromotionEngineError, PromotionError, ValidationError, LoaderError

__all__ = [
    "PromotionEngine",
    "apply_promotion",
    "ApplyResult",
    "FailureReason",
    "FixedAmountDiscount",
    "GlobalScope",
    "PercentageDiscount",
    "PromoContext",
    "Promotion",
    "SpecificScope",
    "EligibilityChecker",
    "evaluate_promotion",
    "is_promo_valid",
    "DiscountCalculator",
    "calculate_discount",
    "increment_usage",
    "reset_usage",
    "PromotionLoader",
    "PromotionEngineError",
    "PromotionError",
    "ValidationError",
    "LoaderError",
]
