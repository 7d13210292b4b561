"""Shared fixtures for subtrackr tests."""

from collections.abc import Callable
from datetime import datetime
from decimal import Decimal
from typing import Any

import pytest

from subtrackr.domain.models import Money, SubscriptionId
from subtrackr.domain.subscriptions import Subscription

# Monday 19 October 2026, midday
NOW = datetime(2026, 10, 19, 12, 0)


@pytest.fixture
def now() -> datetime:
    """Fixed current moment used across tests."""
    return NOW


@pytest.fixture
def make_subscription() -> Callable[..., Subscription]:
    """Factory for subscriptions with sensible defaults."""
    counter = iter(range(1, 10_000))

    def _make(**overrides: Any) -> Subscription:
        if "cost" in overrides and not isinstance(overrides["cost"], Decimal):
            overrides["cost"] = Money(Decimal(str(overrides["cost"])))
        fields: dict[str, Any] = {
            "id": SubscriptionId(f"sub-{next(counter)}"),
            "name": "Netflix",
            "cost": Money(Decimal("17000")),
            "currency": "KRW",
            "interval": "monthly",
            "category": "entertainment",
            "status": "subscribed",
            "next_payment": datetime(2026, 10, 26, 9, 0),
            "created_at": datetime(2026, 1, 1, 9, 0),
            "description": None,
        }
        fields.update(overrides)
        return Subscription(**fields)

    return _make
