"""Pure functions for payment scheduling.

This module contains the functional core for due dates:
- No I/O operations and no system clock: callers pass `now` explicitly
- No side effects: projections return new records
- Easy to test

Boundary rule: a payment due exactly at `now` counts as already happened, so
projected dates are always strictly after `now`.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import datetime, timedelta

from subtrackr.dates import month_range, shift_months, shift_years, week_range
from subtrackr.domain.intervals import validate_interval
from subtrackr.domain.spending import active_subscriptions
from subtrackr.domain.subscriptions import Subscription

WEEK = timedelta(days=7)

DEFAULT_UPCOMING_DAYS = 7


@dataclass(frozen=True)
class PaymentSchedule:
    """Immutable upcoming payments grouped by calendar period."""

    this_week: list[Subscription]
    next_week: list[Subscription]
    this_month: list[Subscription]


def project_next_payment(base: datetime, interval: str, now: datetime) -> datetime:
    """Roll a due date forward until it lies after now.

    Args:
        base: Last known due date.
        interval: Billing cadence.
        now: Current moment.

    Returns:
        base itself if it is already after now, otherwise the first date after
        now that keeps base's phase:
        - weekly: base plus a whole number of weeks
        - monthly: base's day of month (clamped) in now's month or the next
        - yearly: base's month and day (clamped) in now's year or the next

    Raises:
        InvalidInterval: If interval is not weekly, monthly or yearly.
    """
    validate_interval(interval)

    if base > now:
        return base

    if interval == "weekly":
        weeks_elapsed = (now - base) // WEEK
        return base + WEEK * (weeks_elapsed + 1)

    if interval == "monthly":
        candidate = shift_months(base, _months_between(base, now), day=base.day)
        if candidate <= now:
            candidate = shift_months(candidate, 1, day=base.day)
        return candidate

    candidate = shift_years(base, now.year - base.year, month=base.month, day=base.day)
    if candidate <= now:
        candidate = shift_years(candidate, 1, month=base.month, day=base.day)
    return candidate


def _months_between(start: datetime, end: datetime) -> int:
    return (end.year - start.year) * 12 + (end.month - start.month)


def update_next_payment(subscription: Subscription, now: datetime) -> Subscription:
    """Return a copy of subscription with its next payment rolled forward.

    Args:
        subscription: Subscription whose next_payment may be stale.
        now: Current moment.

    Returns:
        New Subscription; the input is left untouched.
    """
    next_payment = project_next_payment(subscription.next_payment, subscription.interval, now)
    return replace(subscription, next_payment=next_payment)


def initial_next_payment(interval: str, now: datetime) -> datetime:
    """Calculate the default first due date for a new subscription.

    Args:
        interval: Billing cadence.
        now: Creation moment.

    Returns:
        One interval after now.

    Raises:
        InvalidInterval: If interval is not weekly, monthly or yearly.
    """
    validate_interval(interval)

    if interval == "weekly":
        return now + WEEK
    if interval == "monthly":
        return shift_months(now, 1)
    return shift_years(now, 1)


def get_upcoming_payments(
    subscriptions: Iterable[Subscription],
    now: datetime,
    days: int = DEFAULT_UPCOMING_DAYS,
) -> list[Subscription]:
    """Select subscribed payments due within the next few days.

    Args:
        subscriptions: All subscriptions.
        now: Current moment (inclusive lower bound).
        days: Horizon length (inclusive upper bound is now + days).

    Returns:
        Matching subscriptions sorted by next payment, soonest first.
    """
    horizon = now + timedelta(days=days)
    upcoming = [sub for sub in active_subscriptions(subscriptions) if now <= sub.next_payment <= horizon]
    return sorted(upcoming, key=lambda sub: sub.next_payment)


def group_payment_schedule(payments: Iterable[Subscription], now: datetime) -> PaymentSchedule:
    """Bucket payments into this week, next week and this month.

    Weeks start on Sunday. A payment can land in a week bucket and in the
    month bucket at the same time.

    Args:
        payments: Payments to group, typically from get_upcoming_payments.
        now: Current moment.

    Returns:
        PaymentSchedule preserving the input order within each bucket.
    """
    week_start, week_end = week_range(now)
    next_week_start, next_week_end = week_end, week_end + WEEK
    month_start, month_end, _ = month_range(now)

    this_week: list[Subscription] = []
    next_week: list[Subscription] = []
    this_month: list[Subscription] = []

    for payment in payments:
        due = payment.next_payment
        if week_start <= due < week_end:
            this_week.append(payment)
        elif next_week_start <= due < next_week_end:
            next_week.append(payment)
        if month_start <= due < month_end:
            this_month.append(payment)

    return PaymentSchedule(this_week=this_week, next_week=next_week, this_month=this_month)


def days_until(next_payment: datetime, now: datetime) -> int:
    """Whole days until a payment, rounded up."""
    return math.ceil((next_payment - now) / timedelta(days=1))


def describe_due(next_payment: datetime, now: datetime) -> str:
    """Describe when a payment is due relative to now.

    Returns:
        "today", "tomorrow", "in N days" within a week, "overdue" for past
        dates, otherwise a short date such as "Nov 3".
    """
    days = days_until(next_payment, now)
    if days < 0:
        return "overdue"
    if days == 0:
        return "today"
    if days == 1:
        return "tomorrow"
    if days < 7:
        return f"in {days} days"
    return f"{next_payment:%b} {next_payment.day}"
