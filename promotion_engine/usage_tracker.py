"""
Usage counter for promotions

Neither function is synchronized: concurrent increments on a shared
Promotion can lose updates, so callers sharing a record across threads
must guard ``used`` themselves.
"""

from loguru import logger

from .models import Promotion


def increment_usage(promotion: Promotion) -> None:
    """
    Record one application of a promotion.

    No upper bound is enforced here; call it only after a successful apply.
    """
    promotion.used += 1
    logger.debug(f"Promotion {promotion.code} usage incremented to {promotion.used}")


def reset_usage(promotion: Promotion) -> None:
    """Set the usage count back to zero"""
    promotion.used = 0
    logger.debug(f"Promotion {promotion.code} usage reset")
