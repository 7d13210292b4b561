"""JSON encoding of subscription records.

Dates are stored as ISO 8601 strings and costs as decimal strings so a
save/load cycle reproduces records exactly.
"""

import json
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from subtrackr.domain.models import Money, SubscriptionId
from subtrackr.domain.subscriptions import Subscription, validate_subscription_fields


class CorruptStoreError(ValueError):
    """Raised when stored subscription data cannot be decoded."""


def subscription_to_dict(subscription: Subscription) -> dict[str, Any]:
    """Convert a subscription to a JSON-compatible dictionary.

    Args:
        subscription: Subscription to encode.

    Returns:
        Dictionary with camelCase keys matching the stored document format.
    """
    data: dict[str, Any] = {
        "id": subscription.id,
        "name": subscription.name,
        "cost": str(subscription.cost),
        "currency": subscription.currency,
        "interval": subscription.interval,
        "category": subscription.category,
        "status": subscription.status,
        "nextPayment": subscription.next_payment.isoformat(),
        "createdAt": subscription.created_at.isoformat(),
    }
    if subscription.description is not None:
        data["description"] = subscription.description
    return data


def subscription_from_dict(data: dict[str, Any]) -> Subscription:
    """Build a subscription from a stored dictionary.

    Args:
        data: Dictionary as produced by subscription_to_dict.

    Returns:
        Decoded Subscription.

    Raises:
        CorruptStoreError: If a field is missing or malformed.
    """
    try:
        if not isinstance(data, dict):
            raise TypeError(f"expected an object, got {data!r}")
        for field in ("name", "currency", "description"):
            value = data.get(field)
            if value is not None and not isinstance(value, str):
                raise TypeError(f"field '{field}' must be a string, got {value!r}")
        cost = Money(Decimal(str(data["cost"])))
        subscription = Subscription(
            id=SubscriptionId(str(data["id"])),
            name=data["name"],
            cost=cost,
            currency=data.get("currency", "KRW"),
            interval=data["interval"],
            category=data["category"],
            status=data["status"],
            next_payment=datetime.fromisoformat(data["nextPayment"]),
            created_at=datetime.fromisoformat(data["createdAt"]),
            description=data.get("description"),
        )
    except KeyError as e:
        raise CorruptStoreError(f"Stored subscription is missing field {e}") from e
    except (InvalidOperation, TypeError, ValueError) as e:
        raise CorruptStoreError(f"Stored subscription is malformed: {e}") from e

    is_valid, error = validate_subscription_fields(
        subscription.name,
        subscription.cost,
        subscription.interval,
        subscription.category,
        subscription.status,
    )
    if not is_valid:
        raise CorruptStoreError(f"Stored subscription {subscription.id} is invalid: {error}")

    return subscription


def dump_subscriptions(subscriptions: list[Subscription]) -> str:
    """Serialize a subscription list to a JSON document."""
    return json.dumps([subscription_to_dict(sub) for sub in subscriptions], ensure_ascii=False)


def load_subscriptions_json(document: str) -> list[Subscription]:
    """Deserialize a JSON document produced by dump_subscriptions.

    Raises:
        CorruptStoreError: If the document is not a list of valid records.
    """
    try:
        raw = json.loads(document)
    except json.JSONDecodeError as e:
        raise CorruptStoreError(f"Stored subscriptions are not valid JSON: {e}") from e

    if not isinstance(raw, list):
        raise CorruptStoreError("Stored subscriptions must be a JSON list")

    return [subscription_from_dict(item) for item in raw]
