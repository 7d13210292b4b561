"""Payment schedule command."""

from datetime import datetime

from rich.console import Console
from rich.markup import escape

from subtrackr.commands.subscriptions import load_or_exit, setting_or_exit
from subtrackr.dates import month_range
from subtrackr.domain.formatting import format_currency
from subtrackr.domain.schedule import describe_due, get_upcoming_payments, group_payment_schedule
from subtrackr.domain.subscriptions import Subscription
from subtrackr.store.schema import get_db_path

console = Console()


def render_section(title: str, payments: list[Subscription], now: datetime) -> None:
    """Render one schedule bucket."""
    console.print(f"\n[bold]{title}[/bold] [dim]({len(payments)})[/dim]")
    if not payments:
        console.print("  [dim]No payments[/dim]")
        return

    for sub in payments:
        cost_display = escape(format_currency(sub.cost, sub.currency))
        console.print(
            f"  [cyan]{sub.next_payment:%a %d %b}[/cyan]  {escape(sub.name):20} "
            f"{cost_display:>12}  [dim]{describe_due(sub.next_payment, now)}[/dim]"
        )


def schedule_command(days: int | None = None) -> None:
    """Show upcoming payments grouped by week and month."""
    db_path = get_db_path()
    subscriptions = load_or_exit(db_path)
    now = datetime.now()
    horizon = days if days is not None else setting_or_exit("upcoming_days")

    upcoming = get_upcoming_payments(subscriptions, now, horizon)
    schedule = group_payment_schedule(upcoming, now)
    _, _, month_label = month_range(now)

    console.print(f"[bold cyan]Payment schedule[/bold cyan] [dim](next {horizon} days)[/dim]")
    render_section("This week", schedule.this_week, now)
    render_section("Next week", schedule.next_week, now)
    render_section(month_label, schedule.this_month, now)
