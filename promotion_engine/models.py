"""
Data models for the Promotion Engine
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from .exceptions import FailureReason, error_for


class PercentageDiscount(BaseModel):
    """Percentage-based discount, e.g. 10.0 = 10%"""
    kind: Literal["percentage"] = "percentage"
    value: float


class FixedAmountDiscount(BaseModel):
    """Fixed amount discount in the transaction's currency unit"""
    kind: Literal["fixed_amount"] = "fixed_amount"
    value: float


DiscountType = Annotated[
    Union[PercentageDiscount, FixedAmountDiscount],
    Field(discriminator="kind"),
]


class GlobalScope(BaseModel):
    """Promotion applies to any transaction"""
    kind: Literal["global"] = "global"


class SpecificScope(BaseModel):
    """Promotion is restricted to a named category, tag or label"""
    kind: Literal["specific"] = "specific"
    label: str


TargetScope = Annotated[
    Union[GlobalScope, SpecificScope],
    Field(discriminator="kind"),
]


class Promotion(BaseModel):
    """Model for a single discount campaign"""

    # Identity
    code: str
    description: str = ""

    # Discount mechanics
    discount: DiscountType

    # Usage tracking
    usage_limit: Optional[int] = None
    used: int = 0

    # Validity window (epoch seconds, inclusive). valid_from < valid_until is
    # checked when the promotion is evaluated, not here.
    valid_from: int
    valid_until: int

    # Constraints
    min_transaction: Optional[float] = None
    target: TargetScope = Field(default_factory=GlobalScope)

    # Informational only, never used in computation
    currency: Optional[str] = None

    @field_validator('usage_limit', 'used')
    @classmethod
    def non_negative(cls, v):
        if v is not None and v < 0:
            raise ValueError("must be non-negative")
        return v


class PromoContext(BaseModel):
    """Transaction context a promotion is evaluated against"""
    current_time: int
    transaction_amount: float
    promotion: Promotion


class ApplyResult(BaseModel):
    """Outcome of applying a promotion: either a discount or a failure reason"""

    promotion_code: str
    discount: Optional[float] = None
    reason: Optional[FailureReason] = None

    @model_validator(mode="after")
    def discount_xor_reason(self):
        if (self.discount is None) == (self.reason is None):
            raise ValueError("exactly one of discount or reason must be set")
        return self

    @property
    def success(self) -> bool:
        return self.reason is None

    @property
    def message(self) -> str:
        return "Applied" if self.success else self.reason.message

    def unwrap(self) -> float:
        """
        Return the discount, or raise the exception matching the failure

        Raises:
            PromotionError: subclass matching ``reason``
        """
        if self.reason is not None:
            raise error_for(self.reason, self.promotion_code)
        return self.discount
