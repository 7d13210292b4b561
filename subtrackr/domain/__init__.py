"""Domain models and types for subtrackr.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations and no system clock (callers pass `now`)
- Easy to test
- Business logic separated from infrastructure
"""

from subtrackr.domain.models import (
    CATEGORIES,
    INTERVALS,
    STATUSES,
    Category,
    Interval,
    InvalidInterval,
    Money,
    Status,
    SubscriptionId,
)

__all__ = [
    "CATEGORIES",
    "INTERVALS",
    "STATUSES",
    "Category",
    "Interval",
    "InvalidInterval",
    "Money",
    "Status",
    "SubscriptionId",
]
