"""Summary and analytics commands for viewing spending."""

from datetime import datetime

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from subtrackr.commands.subscriptions import load_or_exit, setting_or_exit
from subtrackr.domain.formatting import CATEGORY_COLORS, category_label, format_currency
from subtrackr.domain.models import Money
from subtrackr.domain.schedule import get_upcoming_payments
from subtrackr.domain.spending import (
    CategorySpending,
    active_subscriptions,
    calculate_average_cost,
    calculate_category_spending,
    calculate_histogram_bar_length,
    calculate_monthly_total,
    calculate_yearly_total,
    count_by_status,
)
from subtrackr.store.schema import get_db_path

console = Console()

BAR_WIDTH = 30


def summary_command() -> None:
    """Show the dashboard summary of monthly and yearly spending."""
    db_path = get_db_path()
    subscriptions = load_or_exit(db_path)
    currency = setting_or_exit("currency")
    now = datetime.now()

    monthly_total = calculate_monthly_total(subscriptions)
    yearly_total = calculate_yearly_total(subscriptions)
    active_count = len(active_subscriptions(subscriptions))
    upcoming = get_upcoming_payments(subscriptions, now, setting_or_exit("upcoming_days"))

    console.print("\n[bold cyan]Subscription Summary[/bold cyan]\n")
    console.print(f"  [bold]Monthly spending:[/bold] {escape(format_currency(monthly_total, currency))}")
    console.print(f"  [bold]Yearly estimate:[/bold]  {escape(format_currency(yearly_total, currency))}")
    console.print(f"  [bold]Active:[/bold]           {active_count}")
    console.print(f"  [bold]Due soon:[/bold]         {len(upcoming)}")

    if upcoming:
        console.print()
        for sub in upcoming:
            cost_display = escape(format_currency(sub.cost, sub.currency))
            console.print(f"  [cyan]{sub.next_payment:%Y-%m-%d}[/cyan]  {escape(sub.name):20} {cost_display}")
    console.print()


def render_category_line(entry: CategorySpending, currency: str, histogram: bool, max_amount: Money) -> None:
    """Render a single category breakdown line.

    Args:
        entry: CategorySpending to show.
        currency: Currency used for display.
        histogram: Whether to show a histogram bar.
        max_amount: Largest category amount, for bar scaling.
    """
    label = category_label(entry.category)
    amount_display = escape(format_currency(entry.amount, currency))
    percentage_display = f"{entry.percentage:5.1f}%"

    if histogram:
        color = CATEGORY_COLORS.get(entry.category, "white")
        bar = "█" * calculate_histogram_bar_length(entry.amount, max_amount, BAR_WIDTH)
        console.print(f"  {label:15} {amount_display:>12} {percentage_display} [{color}]{bar}[/{color}]")
    else:
        console.print(f"  {label}: {amount_display} ({percentage_display.strip()})")


def analytics_command(histogram: bool = True) -> None:
    """Show key spending metrics and the category breakdown."""
    db_path = get_db_path()
    subscriptions = load_or_exit(db_path)
    currency = setting_or_exit("currency")

    monthly_total = calculate_monthly_total(subscriptions)
    counts = count_by_status(subscriptions)

    metrics = Table(title="Key Metrics", show_header=False)
    metrics.add_column("Metric", style="bold")
    metrics.add_column("Value", justify="right")
    metrics.add_row("Monthly spending", escape(format_currency(monthly_total, currency)))
    metrics.add_row("Yearly estimate", escape(format_currency(calculate_yearly_total(subscriptions), currency)))
    metrics.add_row("Active services", str(counts["subscribed"]))
    metrics.add_row("Average cost", escape(format_currency(calculate_average_cost(subscriptions), currency)))
    metrics.add_row("Upcoming / cancelled", f"{counts['upcoming']} / {counts['cancelled']}")
    console.print(metrics)

    breakdown = calculate_category_spending(subscriptions)
    console.print("\n[bold]Spending by category[/bold] [dim](monthly)[/dim]")

    if not breakdown:
        console.print("  [dim]No active subscriptions[/dim]")
        return

    max_amount = breakdown[0].amount
    for entry in breakdown:
        render_category_line(entry, currency, histogram, max_amount)
