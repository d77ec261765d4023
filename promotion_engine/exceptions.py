"""
Custom exceptions and failure reasons for the Promotion Engine
"""

from enum import Enum
from typing import Optional


class FailureReason(str, Enum):
    """Why a promotion could not be applied"""

    INVALID_PERIOD = "invalid_period"
    INVALID_TIME = "invalid_time"
    BELOW_MINIMUM_TRANSACTION = "below_minimum_transaction"
    USAGE_LIMIT_REACHED = "usage_limit_reached"
    # Never produced by the built-in checks; reserved for callers layering
    # scope matching or other contextual rules on top.
    NOT_APPLICABLE = "not_applicable"

    @property
    def message(self) -> str:
        return _FAILURE_MESSAGES[self]


_FAILURE_MESSAGES = {
    FailureReason.INVALID_PERIOD: "Promotion period is invalid (valid_from must be earlier than valid_until)",
    FailureReason.INVALID_TIME: "Promotion is not valid at this time",
    FailureReason.BELOW_MINIMUM_TRANSACTION: "Transaction amount is below the required minimum",
    FailureReason.USAGE_LIMIT_REACHED: "Promotion usage limit has been reached",
    FailureReason.NOT_APPLICABLE: "Promotion is not applicable",
}


class PromotionEngineError(Exception):
    """Base exception for all promotion engine errors"""
    pass


class ValidationError(PromotionEngineError):
    """Raised when a promotion definition fails validation"""
    pass


class LoaderError(PromotionEngineError):
    """Raised when promotion definitions cannot be read"""
    pass


class PromotionError(PromotionEngineError):
    """
    Raised when a promotion cannot be applied to a transaction.

    Only raised at the boundary (``ApplyResult.unwrap`` and
    ``PromotionEngine.apply_or_raise``); the checks themselves return a
    ``FailureReason``.
    """

    reason: FailureReason = FailureReason.NOT_APPLICABLE

    def __init__(self, promotion_code: Optional[str] = None):
        self.promotion_code = promotion_code
        super().__init__(self.reason.message)


class InvalidPeriodError(PromotionError):
    reason = FailureReason.INVALID_PERIOD


class InvalidTimeError(PromotionError):
    reason = FailureReason.INVALID_TIME


class BelowMinimumTransactionError(PromotionError):
    reason = FailureReason.BELOW_MINIMUM_TRANSACTION


class UsageLimitReachedError(PromotionError):
    reason = FailureReason.USAGE_LIMIT_REACHED


class NotApplicableError(PromotionError):
    reason = FailureReason.NOT_APPLICABLE


_ERRORS_BY_REASON = {
    FailureReason.INVALID_PERIOD: InvalidPeriodError,
    FailureReason.INVALID_TIME: InvalidTimeError,
    FailureReason.BELOW_MINIMUM_TRANSACTION: BelowMinimumTransactionError,
    FailureReason.USAGE_LIMIT_REACHED: UsageLimitReachedError,
    FailureReason.NOT_APPLICABLE: NotApplicableError,
}


def error_for(reason: FailureReason, promotion_code: Optional[str] = None) -> PromotionError:
    """Build the exception matching a failure reason"""
    return _ERRORS_BY_REASON[reason](promotion_code)
