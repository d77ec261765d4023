"""
Core Promotion Engine implementation
"""

import sys
from pathlib import Path
from typing import Iterable, List, Optional, Union
from loguru import logger

from .models import ApplyResult, PromoContext, Promotion
from .config import PromotionEngineConfig, get_config
from .eligibility_checker import EligibilityChecker, _default_checker
from .discount_calculator import DiscountCalculator, _default_calculator
from .promotion_loader import PromotionLoader
from .exceptions import LoaderError
from . import usage_tracker


def apply_promotion(promotion: Promotion, transaction_amount: float, now: int) -> ApplyResult:
    """
    Apply a promotion to a transaction if every condition is satisfied.

    Validates, in order: the promotion's period (valid_from < valid_until),
    the current time against the window, the minimum transaction and the
    usage limit. The promotion is never mutated; record the application
    with ``increment_usage`` afterwards.

    Args:
        promotion: Promotion to apply
        transaction_amount: Transaction value before any discount
        now: Current timestamp (epoch seconds)

    Returns:
        ApplyResult holding the discount, or the first failure reason
    """
    return _apply(_default_checker, _default_calculator, promotion, transaction_amount, now)


def _apply(checker: EligibilityChecker, calculator: DiscountCalculator,
           promotion: Promotion, transaction_amount: float, now: int) -> ApplyResult:
    context = PromoContext(
        current_time=now,
        transaction_amount=transaction_amount,
        promotion=promotion
    )

    reason = checker.evaluate_context(context)
    if reason is not None:
        logger.debug(f"Promotion {promotion.code} not applied: {reason.message}")
        return ApplyResult(promotion_code=promotion.code, reason=reason)

    discount = calculator.calculate(promotion, context.transaction_amount)
    logger.debug(f"Promotion {promotion.code} applied, discount {discount}")
    return ApplyResult(promotion_code=promotion.code, discount=discount)


class PromotionEngine:
    """
    Main entry point for validating promotions and computing discounts
    """

    def __init__(self, log_level: Optional[str] = None, config: Optional[PromotionEngineConfig] = None):
        """
        Initialize the Promotion Engine

        Args:
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR); overrides config
            config: Engine configuration. If None, the global configuration is used.
        """
        self.config = config or get_config()
        self.log_level = (log_level or self.config.log_level).upper()

        self.eligibility_checker = EligibilityChecker()
        self.discount_calculator = DiscountCalculator()
        self.loader = PromotionLoader(strict=self.config.strict_validation)

        # Configure logging
        logger.remove()
        logger.add(
            sys.stderr,
            level=self.log_level,
            format=self.config.log_format
        )

        logger.info(f"Promotion Engine initialized (log level {self.log_level})")

    def apply(self, promotion: Promotion, transaction_amount: float, now: int) -> ApplyResult:
        """Validate a promotion and compute its discount (see ``apply_promotion``)"""
        return _apply(self.eligibility_checker, self.discount_calculator,
                      promotion, transaction_amount, now)

    def apply_or_raise(self, promotion: Promotion, transaction_amount: float, now: int) -> float:
        """
        Like ``apply`` but returns the bare discount

        Raises:
            PromotionError: subclass matching the first failing check
        """
        return self.apply(promotion, transaction_amount, now).unwrap()

    def is_valid(self, promotion: Promotion, transaction_amount: float, now: int) -> bool:
        """Check a promotion without computing a discount"""
        return self.eligibility_checker.evaluate(promotion, transaction_amount, now) is None

    def valid_promotions(self, promotions: Iterable[Promotion], transaction_amount: float,
                         now: int) -> List[Promotion]:
        """Filter candidate promotions down to the ones valid for a transaction"""
        return self.eligibility_checker.filter_valid(promotions, transaction_amount, now)

    def calculate_discount(self, promotion: Promotion, amount: float) -> float:
        """Compute a discount without validating the promotion"""
        return self.discount_calculator.calculate(promotion, amount)

    def record_usage(self, promotion: Promotion) -> None:
        """Record one application of a promotion"""
        usage_tracker.increment_usage(promotion)

    def reset_usage(self, promotion: Promotion) -> None:
        """Reset a promotion's usage count"""
        usage_tracker.reset_usage(promotion)

    def load_promotions(self, path: Optional[Union[str, Path]] = None) -> List[Promotion]:
        """
        Load promotion definitions from a JSON file or directory

        Args:
            path: File or directory. Defaults to the configured ``promotions_file``.

        Returns:
            List of Promotion objects
        """
        path = path or self.config.promotions_file
        if not path:
            raise LoaderError("No promotions file given and none configured")

        path = Path(path)
        if path.is_dir():
            return self.loader.load_directory(path)
        return self.loader.load_file(path)
