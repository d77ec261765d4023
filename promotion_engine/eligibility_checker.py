"""
Eligibility checking for promotions

Checks run in a fixed order and the first failure wins:
1. Period sanity - the promotion's own window is well formed
2. Time window - the evaluation instant falls inside the window
3. Minimum transaction - the amount reaches the configured floor
4. Usage limit - the promotion still has applications left
"""

from typing import Iterable, List, Optional
from loguru import logger

from .models import FailureReason, PromoContext, Promotion


class EligibilityChecker:
    """
    Decides whether a promotion may be applied to a transaction at a given instant
    """

    def __init__(self):
        """Initialize eligibility checker"""
        self.logger = logger
        self.checks = [
            self._check_period,
            self._check_time_window,
            self._check_min_transaction,
            self._check_usage_limit,
        ]

    def evaluate(self, promotion: Promotion, transaction_amount: float, now: int) -> Optional[FailureReason]:
        """
        Evaluate a promotion against a transaction

        Args:
            promotion: Promotion to check
            transaction_amount: Transaction value before any discount
            now: Evaluation instant (epoch seconds)

        Returns:
            The first failing check's reason, or None if the promotion is valid
        """
        context = PromoContext(
            current_time=now,
            transaction_amount=transaction_amount,
            promotion=promotion
        )
        return self.evaluate_context(context)

    def evaluate_context(self, context: PromoContext) -> Optional[FailureReason]:
        """Run every check in order against a prepared context"""
        for check in self.checks:
            reason = check(context)
            if reason is not None:
                return reason

        self.logger.debug(f"Promotion {context.promotion.code} passed all eligibility checks")
        return None

    def is_valid(self, context: PromoContext) -> bool:
        """Simple boolean validation for filters or lightweight checks"""
        return self.evaluate_context(context) is None

    def filter_valid(self, promotions: Iterable[Promotion], transaction_amount: float,
                     now: int) -> List[Promotion]:
        """
        Keep only the promotions valid for a transaction

        Args:
            promotions: Candidate promotions
            transaction_amount: Transaction value before any discount
            now: Evaluation instant (epoch seconds)

        Returns:
            Valid promotions, in their original order
        """
        valid = [p for p in promotions if self.evaluate(p, transaction_amount, now) is None]
        self.logger.debug(f"{len(valid)} promotion(s) valid for amount {transaction_amount} at {now}")
        return valid

    def _check_period(self, context: PromoContext) -> Optional[FailureReason]:
        """The promotion's window must be well formed, regardless of the current time"""
        promo = context.promotion
        if promo.valid_from >= promo.valid_until:
            self.logger.debug(
                f"Promotion {promo.code}: invalid period "
                f"{promo.valid_from} >= {promo.valid_until}"
            )
            return FailureReason.INVALID_PERIOD
        return None

    def _check_time_window(self, context: PromoContext) -> Optional[FailureReason]:
        """Both bounds are inclusive"""
        promo = context.promotion
        if context.current_time < promo.valid_from or context.current_time > promo.valid_until:
            self.logger.debug(
                f"Promotion {promo.code}: time {context.current_time} outside "
                f"{promo.valid_from} to {promo.valid_until}"
            )
            return FailureReason.INVALID_TIME
        return None

    def _check_min_transaction(self, context: PromoContext) -> Optional[FailureReason]:
        promo = context.promotion
        if promo.min_transaction is not None and context.transaction_amount < promo.min_transaction:
            self.logger.debug(
                f"Promotion {promo.code}: amount {context.transaction_amount} "
                f"below minimum {promo.min_transaction}"
            )
            return FailureReason.BELOW_MINIMUM_TRANSACTION
        return None

    def _check_usage_limit(self, context: PromoContext) -> Optional[FailureReason]:
        # The limit counts total permitted applications, so used == limit is exhausted
        promo = context.promotion
        if promo.usage_limit is not None and promo.used >= promo.usage_limit:
            self.logger.debug(f"Promotion {promo.code}: used {promo.used} of {promo.usage_limit}")
            return FailureReason.USAGE_LIMIT_REACHED
        return None


_default_checker = EligibilityChecker()


def is_promo_valid(context: PromoContext) -> bool:
    """Module-level shortcut for ``EligibilityChecker().is_valid``"""
    return _default_checker.is_valid(context)


def evaluate_promotion(promotion: Promotion, transaction_amount: float, now: int) -> Optional[FailureReason]:
    """Module-level shortcut for ``EligibilityChecker().evaluate``"""
    return _default_checker.evaluate(promotion, transaction_amount, now)
