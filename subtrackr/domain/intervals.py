"""Interval normalization to a common monthly basis."""

from decimal import Decimal

from subtrackr.domain.models import INTERVALS, InvalidInterval, Money

# Mean weeks per month approximation, not calendar-exact
WEEKS_PER_MONTH = Decimal("4.33")

MONTHS_PER_YEAR = 12


def validate_interval(interval: str) -> None:
    """Ensure interval is one of the recognized billing cadences.

    Raises:
        InvalidInterval: If interval is not weekly, monthly or yearly.
    """
    if interval not in INTERVALS:
        raise InvalidInterval(interval)


def normalize_to_monthly(cost: Money, interval: str) -> Money:
    """Convert a cost billed every interval to its monthly equivalent.

    Args:
        cost: Cost charged once per interval.
        interval: Billing cadence.

    Returns:
        Equivalent monthly cost.

    Raises:
        InvalidInterval: If interval is not weekly, monthly or yearly.
    """
    if interval == "monthly":
        return cost
    if interval == "yearly":
        return Money(cost / MONTHS_PER_YEAR)
    if interval == "weekly":
        return Money(cost * WEEKS_PER_MONTH)
    raise InvalidInterval(interval)
