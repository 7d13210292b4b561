"""Pure functions for spending aggregation.

This module contains the functional core for totals and breakdowns:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Only subscribed records contribute to any total. All amounts are monthly
equivalents (see subtrackr.domain.intervals).
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from subtrackr.domain.intervals import MONTHS_PER_YEAR, normalize_to_monthly
from subtrackr.domain.models import CATEGORIES, STATUSES, Category, Money
from subtrackr.domain.subscriptions import Subscription


@dataclass(frozen=True)
class CategorySpending:
    """Immutable monthly spending for one category."""

    category: Category
    amount: Money
    percentage: float


def active_subscriptions(subscriptions: Iterable[Subscription]) -> list[Subscription]:
    """Return the subscriptions that count towards spending."""
    return [sub for sub in subscriptions if sub.status == "subscribed"]


def calculate_monthly_total(subscriptions: Iterable[Subscription]) -> Money:
    """Calculate total monthly spending.

    Args:
        subscriptions: All subscriptions; cancelled and upcoming ones contribute 0.

    Returns:
        Sum of normalized monthly costs.

    Raises:
        InvalidInterval: If a subscribed record has an unknown interval.
    """
    total = Decimal(0)
    for sub in active_subscriptions(subscriptions):
        total += normalize_to_monthly(sub.cost, sub.interval)
    return Money(total)


def calculate_yearly_total(subscriptions: Iterable[Subscription]) -> Money:
    """Calculate yearly spending as twelve times the monthly total."""
    return Money(calculate_monthly_total(subscriptions) * MONTHS_PER_YEAR)


def calculate_percentage(amount: Money, total: Money) -> float:
    """Calculate amount as a percentage of total.

    Returns:
        Percentage (0-100), or 0.0 when total is not positive.
    """
    if total <= 0:
        return 0.0
    return float(amount / total * 100)


def calculate_category_spending(subscriptions: Iterable[Subscription]) -> list[CategorySpending]:
    """Break monthly spending down by category.

    Args:
        subscriptions: All subscriptions.

    Returns:
        CategorySpending entries sorted by amount, highest first. Categories
        without spending are omitted.
    """
    active = active_subscriptions(subscriptions)
    totals: dict[Category, Decimal] = {category: Decimal(0) for category in CATEGORIES}

    for sub in active:
        totals[sub.category] += normalize_to_monthly(sub.cost, sub.interval)

    monthly_total = Money(sum(totals.values(), Decimal(0)))

    # sorted() is stable, so equal amounts keep the CATEGORIES order
    spending = [
        CategorySpending(
            category=category,
            amount=Money(amount),
            percentage=calculate_percentage(Money(amount), monthly_total),
        )
        for category, amount in totals.items()
        if amount > 0
    ]
    return sorted(spending, key=lambda entry: entry.amount, reverse=True)


def calculate_average_cost(subscriptions: Iterable[Subscription]) -> Money:
    """Calculate the average monthly cost per subscribed record.

    Returns:
        Monthly total divided by the number of subscribed records, or 0.
    """
    active = active_subscriptions(subscriptions)
    if not active:
        return Money(Decimal(0))
    return Money(calculate_monthly_total(active) / len(active))


def count_by_status(subscriptions: Iterable[Subscription]) -> dict[str, int]:
    """Count subscriptions per status.

    Returns:
        Dictionary with an "all" entry plus one entry per status.
    """
    counts = {"all": 0, **{status: 0 for status in STATUSES}}
    for sub in subscriptions:
        counts["all"] += 1
        counts[sub.status] = counts.get(sub.status, 0) + 1
    return counts


def calculate_histogram_bar_length(
    amount: Money,
    max_amount: Money,
    bar_width: int,
) -> int:
    """Calculate histogram bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int((abs(amount) / max_amount) * bar_width)
