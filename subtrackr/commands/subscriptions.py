"""Subscription management commands (add, edit, remove, list, renew)."""

import sqlite3
import sys
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from subtrackr.config import ConfigError, get_setting
from subtrackr.dates import parse_date
from subtrackr.domain.formatting import format_currency, format_interval, styled_category, styled_status
from subtrackr.domain.models import Money
from subtrackr.domain.schedule import describe_due, initial_next_payment, update_next_payment
from subtrackr.domain.subscriptions import (
    Subscription,
    create_subscription,
    filter_subscriptions,
    find_subscription,
    merge_subscription,
    sort_subscriptions,
)
from subtrackr.store.codec import CorruptStoreError
from subtrackr.store.queries import add_subscription, delete_subscription, load_subscriptions, save_subscriptions
from subtrackr.store.queries import update_subscription as store_update_subscription
from subtrackr.store.schema import get_db_path

console = Console()


def load_or_exit(db_path: Path) -> list[Subscription]:
    """Load subscriptions, exiting with an error message on failure."""
    if not db_path.exists():
        console.print("[red]Database not found. Run 'subtrackr init' first.[/red]", style="bold")
        sys.exit(1)

    try:
        return load_subscriptions(db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)
    except CorruptStoreError as e:
        console.print(f"[red]Stored data is corrupt: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)


def setting_or_exit(name: str) -> Any:
    """Read a config setting, exiting with an error message if the config is bad."""
    try:
        return get_setting(name)
    except ConfigError as e:
        console.print(f"[red]Config error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)


def parse_cost(raw_cost: str) -> Money:
    """Parse a cost entered on the command line.

    Raises:
        ValueError: If the text is not a positive number.
    """
    try:
        cost = Decimal(raw_cost.replace(",", "").strip())
    except InvalidOperation as e:
        raise ValueError(f"Invalid cost '{raw_cost}'") from e

    if not cost.is_finite() or cost <= 0:
        raise ValueError("Cost must be positive")
    return Money(cost)


def resolve_or_exit(subscriptions: list[Subscription], subscription_id: str) -> Subscription:
    """Find a subscription by id or unique id prefix, exiting if not found."""
    subscription = find_subscription(subscriptions, subscription_id)
    if subscription is None:
        console.print(f"[red]No unique subscription matches '{escape(subscription_id)}'[/red]", style="bold")
        sys.exit(1)
    return subscription


def add_command(
    name: str,
    cost: str,
    interval: str = "monthly",
    category: str = "other",
    status: str = "subscribed",
    currency: str | None = None,
    next_payment: str | None = None,
    description: str | None = None,
) -> None:
    """Add a subscription.

    Args:
        name: Service name.
        cost: Cost per interval.
        interval: weekly, monthly or yearly.
        category: Category id.
        status: subscribed, upcoming or cancelled.
        currency: Currency tag. If None, uses the configured default.
        next_payment: Next due date. If None, one interval from now.
        description: Optional free text.
    """
    db_path = get_db_path()
    if not db_path.exists():
        console.print("[red]Database not found. Run 'subtrackr init' first.[/red]", style="bold")
        sys.exit(1)

    now = datetime.now()

    try:
        cost_amount = parse_cost(cost)
        due = parse_date(next_payment) if next_payment else initial_next_payment(interval, now)
        subscription = create_subscription(
            name=name,
            cost=cost_amount,
            interval=interval,  # type: ignore[arg-type]
            category=category,  # type: ignore[arg-type]
            next_payment=due,
            now=now,
            currency=(currency or setting_or_exit("currency")).upper(),
            status=status,  # type: ignore[arg-type]
            description=description,
        )
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]", style="bold")
        sys.exit(1)

    try:
        add_subscription(subscription, db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)
    except CorruptStoreError as e:
        console.print(f"[red]Stored data is corrupt: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)

    console.print("[green]✓[/green] Subscription added:")
    console.print(f"  ID: {subscription.id}")
    console.print(f"  Name: {escape(subscription.name)}")
    cost_display = escape(format_currency(subscription.cost, subscription.currency))
    console.print(f"  Cost: {cost_display}{format_interval(subscription.interval)}")
    console.print(f"  Category: {styled_category(subscription.category)}")
    console.print(f"  Next payment: {subscription.next_payment:%Y-%m-%d}")


def edit_command(subscription_id: str, **changes: Any) -> None:
    """Edit fields of a subscription.

    Args:
        subscription_id: Full id or unique id prefix.
        **changes: Field values from the command line; None means unchanged.
    """
    db_path = get_db_path()
    subscriptions = load_or_exit(db_path)
    current = resolve_or_exit(subscriptions, subscription_id)

    updates = {field: value for field, value in changes.items() if value is not None}
    if not updates:
        console.print("[yellow]Nothing to change[/yellow]")
        return

    try:
        if "cost" in updates:
            updates["cost"] = parse_cost(updates["cost"])
        if "next_payment" in updates:
            updates["next_payment"] = parse_date(updates["next_payment"])
        if "currency" in updates:
            updates["currency"] = updates["currency"].upper()
        updated = merge_subscription(current, **updates)
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]", style="bold")
        sys.exit(1)

    try:
        store_update_subscription(updated, db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)
    except CorruptStoreError as e:
        console.print(f"[red]Stored data is corrupt: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Updated {escape(updated.name)}: {', '.join(sorted(updates))}")


def remove_command(subscription_id: str) -> None:
    """Remove a subscription."""
    db_path = get_db_path()
    subscriptions = load_or_exit(db_path)
    subscription = resolve_or_exit(subscriptions, subscription_id)

    try:
        delete_subscription(subscription.id, db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)
    except CorruptStoreError as e:
        console.print(f"[red]Stored data is corrupt: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Removed {escape(subscription.name)}")


def list_command(
    status: str = "all",
    category: str = "all",
    search: str = "",
    sort_by: str = "name",
) -> None:
    """List subscriptions with optional filtering and sorting."""
    db_path = get_db_path()
    subscriptions = load_or_exit(db_path)
    now = datetime.now()

    try:
        shown = sort_subscriptions(filter_subscriptions(subscriptions, status, category, search), sort_by)
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]", style="bold")
        sys.exit(1)

    if not shown:
        console.print("[yellow]No subscriptions found[/yellow]")
        return

    table = Table(title=f"Subscriptions (showing {len(shown)} of {len(subscriptions)})")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="white")
    table.add_column("Cost", justify="right")
    table.add_column("Category")
    table.add_column("Status", justify="center")
    table.add_column("Next payment", style="cyan")

    for sub in shown:
        cost_display = f"{escape(format_currency(sub.cost, sub.currency))}{format_interval(sub.interval)}"
        due_display = describe_due(sub.next_payment, now) if sub.status == "subscribed" else "[dim]-[/dim]"
        table.add_row(
            sub.id[:8],
            escape(sub.name),
            cost_display,
            styled_category(sub.category),
            styled_status(sub.status),
            due_display,
        )

    console.print(table)


def renew_command() -> None:
    """Roll stale next-payment dates of subscribed records forward."""
    db_path = get_db_path()
    subscriptions = load_or_exit(db_path)
    now = datetime.now()

    renewed: list[Subscription] = []
    changed: list[Subscription] = []
    for sub in subscriptions:
        if sub.status == "subscribed" and sub.next_payment <= now:
            updated = update_next_payment(sub, now)
            changed.append(updated)
            renewed.append(updated)
        else:
            renewed.append(sub)

    if not changed:
        console.print("[green]All payment dates are up to date[/green]")
        return

    try:
        save_subscriptions(renewed, db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)

    for sub in changed:
        console.print(f"[green]✓[/green] {escape(sub.name)}: next payment {sub.next_payment:%Y-%m-%d}")
    console.print(f"\n[green]Renewed {len(changed)} subscription(s)[/green]")
