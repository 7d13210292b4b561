"""Domain type definitions for subtrackr.

These NewTypes and literals provide semantic clarity and help with type checking:
- Money: Cost amount as a Decimal (currency-agnostic magnitude)
- SubscriptionId: Opaque subscription identifier
- Interval: Billing cadence (weekly, monthly, yearly)
- Category: One of the fixed subscription categories
- Status: Subscription lifecycle state
"""

from decimal import Decimal
from typing import Literal, NewType

# Costs are Decimals so interval normalization stays exact (13000 * 4.33 == 56290)
Money = NewType("Money", Decimal)

SubscriptionId = NewType("SubscriptionId", str)

Interval = Literal["weekly", "monthly", "yearly"]
Category = Literal["entertainment", "productivity", "education", "lifestyle", "business", "other"]
Status = Literal["subscribed", "upcoming", "cancelled"]

INTERVALS: tuple[Interval, ...] = ("weekly", "monthly", "yearly")

# Order matters: ties in category breakdowns keep this order
CATEGORIES: tuple[Category, ...] = (
    "entertainment",
    "productivity",
    "education",
    "lifestyle",
    "business",
    "other",
)

STATUSES: tuple[Status, ...] = ("subscribed", "upcoming", "cancelled")


class InvalidInterval(ValueError):
    """Raised when a billing interval is outside weekly/monthly/yearly."""

    def __init__(self, interval: object) -> None:
        super().__init__(f"Invalid interval {interval!r}, expected one of: {', '.join(INTERVALS)}")
        self.interval = interval
