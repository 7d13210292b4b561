"""Export command for writing subscriptions to CSV."""

import sys
from datetime import datetime
from pathlib import Path

import pandas as pd
from rich.console import Console

from subtrackr.commands.subscriptions import load_or_exit
from subtrackr.domain.intervals import normalize_to_monthly
from subtrackr.domain.subscriptions import Subscription
from subtrackr.store.schema import get_db_path

console = Console()

EXPORT_COLUMNS = [
    "id",
    "name",
    "cost",
    "currency",
    "interval",
    "monthly_cost",
    "category",
    "status",
    "next_payment",
    "created_at",
    "description",
]


def subscriptions_to_frame(subscriptions: list[Subscription]) -> pd.DataFrame:
    """Build a DataFrame with one row per subscription.

    Args:
        subscriptions: Subscriptions to export.

    Returns:
        DataFrame with EXPORT_COLUMNS, costs as strings to keep exact decimals.
    """
    rows = [
        {
            "id": sub.id,
            "name": sub.name,
            "cost": str(sub.cost),
            "currency": sub.currency,
            "interval": sub.interval,
            "monthly_cost": str(normalize_to_monthly(sub.cost, sub.interval)),
            "category": sub.category,
            "status": sub.status,
            "next_payment": sub.next_payment.isoformat(),
            "created_at": sub.created_at.isoformat(),
            "description": sub.description or "",
        }
        for sub in subscriptions
    ]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def export_command(output: str | None = None) -> None:
    """Export all subscriptions to a CSV file."""
    db_path = get_db_path()
    subscriptions = load_or_exit(db_path)

    if output:
        output_path = Path(output).expanduser()
    else:
        output_path = Path.cwd() / f"subtrackr_{datetime.now():%Y%m%d_%H%M%S}.csv"

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        subscriptions_to_frame(subscriptions).to_csv(output_path, index=False)
    except OSError as e:
        console.print(f"[red]Export failed: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Exported {len(subscriptions)} subscription(s) to: {output_path}")
