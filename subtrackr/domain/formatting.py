"""Display formatting for amounts, intervals, categories and statuses.

Formatting only: amounts are never converted between currencies.
"""

from decimal import Decimal

from subtrackr.domain.models import Category, Money, Status

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "INR": "₹",
    "CAD": "C$",
    "AUD": "A$",
    "KRW": "₩",
}

# Currencies displayed without a fractional part
ZERO_DECIMAL_CURRENCIES = frozenset({"KRW"})

CATEGORY_LABELS: dict[Category, str] = {
    "entertainment": "Entertainment",
    "productivity": "Productivity",
    "education": "Education",
    "lifestyle": "Lifestyle",
    "business": "Business",
    "other": "Other",
}

CATEGORY_COLORS: dict[Category, str] = {
    "entertainment": "#FF6B9D",
    "productivity": "#4ECDC4",
    "education": "#45B7D1",
    "lifestyle": "#96CEB4",
    "business": "#FCEA2B",
    "other": "#DDA0DD",
}

STATUS_LABELS: dict[Status, str] = {
    "subscribed": "Subscribed",
    "upcoming": "Upcoming",
    "cancelled": "Cancelled",
}

STATUS_COLORS: dict[Status, str] = {
    "subscribed": "#4CAF50",
    "upcoming": "#FF9800",
    "cancelled": "#9E9E9E",
}

INTERVAL_SUFFIXES = {
    "weekly": "/wk",
    "monthly": "/mo",
    "yearly": "/yr",
}


def format_currency(amount: Money | Decimal | float, currency: str = "KRW") -> str:
    """Format an amount for display.

    Args:
        amount: Amount to format.
        currency: Currency tag. KRW shows no decimals, other currencies show
            up to two.

    Returns:
        Formatted string such as "₩17,000", "$9.99" or "$10".
    """
    value = Decimal(str(amount))
    sign = "-" if value < 0 else ""
    value = abs(value)

    if currency in ZERO_DECIMAL_CURRENCIES:
        digits = f"{value:,.0f}"
    else:
        digits = f"{value:,.2f}"
        if digits.endswith(".00"):
            digits = digits[:-3]
        elif digits.endswith("0"):
            digits = digits[:-1]

    symbol = CURRENCY_SYMBOLS.get(currency)
    if symbol is None:
        return f"{sign}{currency} {digits}"
    return f"{sign}{symbol}{digits}"


def format_interval(interval: str) -> str:
    """Return the per-interval suffix shown after a cost (e.g. "/mo")."""
    return INTERVAL_SUFFIXES.get(interval, "/mo")


def category_label(category: str) -> str:
    """Return the display label for a category id."""
    return CATEGORY_LABELS.get(category, category.title())  # type: ignore[call-overload]


def styled_category(category: str) -> str:
    """Return a rich markup string for a category in its colour."""
    color = CATEGORY_COLORS.get(category, "white")  # type: ignore[call-overload]
    return f"[{color}]{category_label(category)}[/{color}]"


def styled_status(status: str) -> str:
    """Return a rich markup string for a status in its colour."""
    color = STATUS_COLORS.get(status, "white")  # type: ignore[call-overload]
    label = STATUS_LABELS.get(status, status)  # type: ignore[call-overload]
    return f"[{color}]{label}[/{color}]"
