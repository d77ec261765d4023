"""
Discount computation for validated promotions
"""

from loguru import logger

from .models import FixedAmountDiscount, PercentageDiscount, Promotion
from .exceptions import PromotionEngineError


class DiscountCalculator:
    """
    Computes the monetary value of a promotion's discount.

    Validity is not checked here; run the EligibilityChecker first when
    window, minimum or usage guarantees are needed.
    """

    def __init__(self):
        """Initialize discount calculator"""
        self.logger = logger

    def calculate(self, promotion: Promotion, amount: float) -> float:
        """
        Calculate the discount for a transaction amount

        Args:
            promotion: Promotion holding the discount rule
            amount: Transaction value before any discount

        Returns:
            Discount value in the transaction's currency unit, unrounded
        """
        discount = promotion.discount

        if isinstance(discount, PercentageDiscount):
            value = amount * discount.value / 100
        elif isinstance(discount, FixedAmountDiscount):
            # Never discount more than the transaction itself
            value = min(discount.value, amount)
        else:
            raise PromotionEngineError(f"Unsupported discount type: {type(discount).__name__}")

        self.logger.debug(f"Discount for {promotion.code} on {amount}: {value}")
        return value


_default_calculator = DiscountCalculator()


def calculate_discount(promotion: Promotion, amount: float) -> float:
    """Calculate a promotion's discount for ``amount`` (see ``DiscountCalculator.calculate``)"""
    return _default_calculator.calculate(promotion, amount)
