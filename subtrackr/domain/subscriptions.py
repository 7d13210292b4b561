"""Pure functions for subscription records.

This module contains the functional core for the subscription entity:
- No I/O operations (no database, no console, no files)
- No side effects: updates return new records
- Easy to test

Costs are Decimal amounts (Money type).
"""

import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any

from subtrackr.domain.models import (
    CATEGORIES,
    INTERVALS,
    STATUSES,
    Category,
    Interval,
    Money,
    Status,
    SubscriptionId,
)

SORT_KEYS = ("name", "cost", "date", "category")

_IMMUTABLE_FIELDS = ("id", "created_at")


@dataclass(frozen=True)
class Subscription:
    """Immutable subscription record."""

    id: SubscriptionId
    name: str
    cost: Money
    currency: str
    interval: Interval
    category: Category
    status: Status
    next_payment: datetime
    created_at: datetime
    description: str | None = None


def validate_subscription_fields(
    name: str,
    cost: Money,
    interval: str,
    category: str,
    status: str,
) -> tuple[bool, str | None]:
    """Validate the user-editable fields of a subscription.

    Args:
        name: Display name.
        cost: Cost per interval.
        interval: Billing cadence.
        category: Category id.
        status: Lifecycle state.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if not name or not name.strip():
        return False, "Name must not be empty"

    if not isinstance(cost, Decimal) or not cost.is_finite() or cost <= 0:
        return False, "Cost must be positive"

    if interval not in INTERVALS:
        return False, f"Unknown interval '{interval}' (choose from: {', '.join(INTERVALS)})"

    if category not in CATEGORIES:
        return False, f"Unknown category '{category}' (choose from: {', '.join(CATEGORIES)})"

    if status not in STATUSES:
        return False, f"Unknown status '{status}' (choose from: {', '.join(STATUSES)})"

    return True, None


def new_subscription_id() -> SubscriptionId:
    """Generate a fresh opaque subscription id."""
    return SubscriptionId(uuid.uuid4().hex)


def create_subscription(
    name: str,
    cost: Money,
    interval: Interval,
    category: Category,
    next_payment: datetime,
    now: datetime,
    currency: str = "KRW",
    status: Status = "subscribed",
    description: str | None = None,
    subscription_id: SubscriptionId | None = None,
) -> Subscription:
    """Create a new subscription record.

    Args:
        name: Display name (trimmed).
        cost: Cost per interval.
        interval: Billing cadence.
        category: Category id.
        next_payment: Next due date.
        now: Creation moment, stored as created_at.
        currency: Currency tag used for display.
        status: Lifecycle state.
        description: Optional free text (trimmed, empty becomes None).
        subscription_id: Explicit id. If None, a fresh one is generated.

    Returns:
        New Subscription.

    Raises:
        ValueError: If any field is invalid.
    """
    is_valid, error = validate_subscription_fields(name, cost, interval, category, status)
    if not is_valid:
        raise ValueError(error)

    return Subscription(
        id=subscription_id or new_subscription_id(),
        name=name.strip(),
        cost=cost,
        currency=currency,
        interval=interval,
        category=category,
        status=status,
        next_payment=next_payment,
        created_at=now,
        description=_clean_description(description),
    )


def merge_subscription(subscription: Subscription, **updates: Any) -> Subscription:
    """Apply a partial update and return the replacement record.

    Args:
        subscription: Current record.
        **updates: Fields to change. id and created_at cannot be changed.

    Returns:
        New Subscription with updates merged in.

    Raises:
        ValueError: If an update targets an immutable or unknown field, or the
            merged record is invalid.
    """
    for field_name in updates:
        if field_name in _IMMUTABLE_FIELDS:
            raise ValueError(f"Field '{field_name}' cannot be changed")

    if "name" in updates and updates["name"] is not None:
        updates["name"] = updates["name"].strip()
    if "description" in updates:
        updates["description"] = _clean_description(updates["description"])

    try:
        merged = replace(subscription, **updates)
    except TypeError as e:
        raise ValueError(f"Unknown subscription field: {e}") from e

    is_valid, error = validate_subscription_fields(
        merged.name, merged.cost, merged.interval, merged.category, merged.status
    )
    if not is_valid:
        raise ValueError(error)

    return merged


def _clean_description(description: str | None) -> str | None:
    if description is None:
        return None
    return description.strip() or None


def filter_subscriptions(
    subscriptions: list[Subscription],
    status: str = "all",
    category: str = "all",
    query: str = "",
) -> list[Subscription]:
    """Filter subscriptions by status, category and search text.

    Args:
        subscriptions: Subscriptions to filter.
        status: "all" or a status to keep.
        category: "all" or a category to keep.
        query: Case-insensitive text matched against name and description.

    Returns:
        Matching subscriptions in their original order.
    """
    needle = query.strip().casefold()

    def matches(sub: Subscription) -> bool:
        if status != "all" and sub.status != status:
            return False
        if category != "all" and sub.category != category:
            return False
        if needle:
            in_name = needle in sub.name.casefold()
            in_description = sub.description is not None and needle in sub.description.casefold()
            return in_name or in_description
        return True

    return [sub for sub in subscriptions if matches(sub)]


def sort_subscriptions(subscriptions: list[Subscription], sort_by: str = "name") -> list[Subscription]:
    """Sort subscriptions for display.

    Args:
        subscriptions: Subscriptions to sort.
        sort_by: "name" (A-Z), "cost" (highest first), "date" (newest first)
            or "category" (A-Z).

    Returns:
        New sorted list.

    Raises:
        ValueError: If sort_by is not a known sort key.
    """
    if sort_by == "name":
        return sorted(subscriptions, key=lambda s: s.name.casefold())
    elif sort_by == "cost":
        return sorted(subscriptions, key=lambda s: s.cost, reverse=True)
    elif sort_by == "date":
        return sorted(subscriptions, key=lambda s: s.created_at, reverse=True)
    elif sort_by == "category":
        return sorted(subscriptions, key=lambda s: s.category)
    raise ValueError(f"Unknown sort key '{sort_by}' (choose from: {', '.join(SORT_KEYS)})")


def find_subscription(subscriptions: list[Subscription], subscription_id: str) -> Subscription | None:
    """Find a subscription by id, accepting a unique id prefix.

    Args:
        subscriptions: Subscriptions to search.
        subscription_id: Full id or an unambiguous prefix.

    Returns:
        The matching subscription, or None if there is no unique match.
    """
    for sub in subscriptions:
        if sub.id == subscription_id:
            return sub

    candidates = [sub for sub in subscriptions if sub.id.startswith(subscription_id)]
    if subscription_id and len(candidates) == 1:
        return candidates[0]
    return None


def sample_subscriptions(now: datetime) -> list[Subscription]:
    """Build the starter subscriptions shown to new users.

    Args:
        now: Creation moment; due dates are 7, 14 and 21 days later.

    Returns:
        Three subscribed monthly subscriptions.
    """
    samples = [
        ("Netflix", "Streaming service", "17000", "entertainment", 7),
        ("Spotify", "Music streaming", "13900", "entertainment", 14),
        ("Notion", "Note-taking app", "8000", "productivity", 21),
    ]

    return [
        create_subscription(
            name=name,
            cost=Money(Decimal(cost)),
            interval="monthly",
            category=category,  # type: ignore[arg-type]
            next_payment=now + timedelta(days=days),
            now=now,
            currency="KRW",
            description=description,
        )
        for name, description, cost, category, days in samples
    ]
