"""CLI entry point for subtrackr."""

import typer

from subtrackr.commands.admin import backup_command, clear_command, init_command
from subtrackr.commands.export import export_command
from subtrackr.commands.report import analytics_command, summary_command
from subtrackr.commands.schedule import schedule_command
from subtrackr.commands.subscriptions import (
    add_command,
    edit_command,
    list_command,
    remove_command,
    renew_command,
)

app = typer.Typer(
    name="subtrackr",
    help="SubTrackr - Track what your subscriptions really cost",
    add_completion=False,
)


@app.callback()
def main() -> None:
    """SubTrackr - Track what your subscriptions really cost."""
    pass


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing database and config"),
    sample: bool = typer.Option(False, "--sample", help="Start with a few sample subscriptions"),
) -> None:
    """Initialize subtrackr database and configuration."""
    init_command(force, sample)


@app.command(name="backup")
def backup(
    output_dir: str = typer.Option(None, "--output", "-o", help="Backup directory (default: ~/.subtrackr/backups)"),
) -> None:
    """Backup your database and configuration files."""
    backup_command(output_dir)


@app.command(name="clear")
def clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
) -> None:
    """Permanently delete all your subscriptions."""
    clear_command(yes)


@app.command()
def add(
    name: str,
    cost: str,
    interval: str = typer.Option("monthly", "--interval", "-i", help="weekly, monthly or yearly"),
    category: str = typer.Option("other", "--category", "-c", help="Category of the service"),
    status: str = typer.Option("subscribed", "--status", help="subscribed, upcoming or cancelled"),
    currency: str = typer.Option(None, "--currency", help="Currency code (default: from config)"),
    next_payment: str = typer.Option(None, "--next-payment", help="Next payment date (default: one interval from now)"),
    description: str = typer.Option(None, "--description", "-d", help="Optional note"),
) -> None:
    """Add a subscription."""
    add_command(name, cost, interval, category, status, currency, next_payment, description)


@app.command()
def edit(
    subscription_id: str,
    name: str = typer.Option(None, "--name", help="New name"),
    cost: str = typer.Option(None, "--cost", help="New cost per interval"),
    interval: str = typer.Option(None, "--interval", "-i", help="weekly, monthly or yearly"),
    category: str = typer.Option(None, "--category", "-c", help="New category"),
    status: str = typer.Option(None, "--status", help="subscribed, upcoming or cancelled"),
    currency: str = typer.Option(None, "--currency", help="New currency code"),
    next_payment: str = typer.Option(None, "--next-payment", help="New next payment date"),
    description: str = typer.Option(None, "--description", "-d", help="New note"),
) -> None:
    """Edit a subscription (by ID or unique ID prefix)."""
    edit_command(
        subscription_id,
        name=name,
        cost=cost,
        interval=interval,
        category=category,
        status=status,
        currency=currency,
        next_payment=next_payment,
        description=description,
    )


@app.command()
def remove(subscription_id: str) -> None:
    """Remove a subscription (by ID or unique ID prefix)."""
    remove_command(subscription_id)


@app.command(name="list")
def list_subscriptions(
    status: str = typer.Option("all", "--status", "-s", help="Filter by status or 'all'"),
    category: str = typer.Option("all", "--category", "-c", help="Filter by category or 'all'"),
    search: str = typer.Option("", "--search", "-q", help="Search names and descriptions"),
    sort_by: str = typer.Option("name", "--sort", help="Sort by 'name', 'cost', 'date' or 'category'"),
) -> None:
    """List your subscriptions."""
    list_command(status, category, search, sort_by)


@app.command()
def renew() -> None:
    """Roll past payment dates forward to the next due date."""
    renew_command()


@app.command()
def summary() -> None:
    """Show your monthly and yearly subscription spending."""
    summary_command()


@app.command()
def analytics(
    histogram: bool = typer.Option(True, help="Show histogram of your spending by category"),
) -> None:
    """Show spending metrics and the category breakdown."""
    analytics_command(histogram)


@app.command()
def schedule(
    days: int = typer.Option(None, "--days", help="Days ahead to include (default: from config)"),
) -> None:
    """Show upcoming payments for this week, next week and this month."""
    schedule_command(days)


@app.command()
def export(
    output: str = typer.Option(None, "--output", "-o", help="CSV file to write (default: ./subtrackr_<timestamp>.csv)"),
) -> None:
    """Export your subscriptions to CSV."""
    export_command(output)


if __name__ == "__main__":
    app()
