"""Tests for subtrackr.domain.spending pure functions."""

from decimal import Decimal

import pytest

from subtrackr.domain.models import InvalidInterval, Money
from subtrackr.domain.spending import (
    calculate_average_cost,
    calculate_category_spending,
    calculate_histogram_bar_length,
    calculate_monthly_total,
    calculate_percentage,
    calculate_yearly_total,
    count_by_status,
)


class TestCalculateMonthlyTotal:
    """Tests for calculate_monthly_total."""

    def test_empty_list(self) -> None:
        """Should return zero for no subscriptions."""
        assert calculate_monthly_total([]) == 0

    def test_monthly_subscription(self, make_subscription) -> None:
        """Should count a monthly cost as-is."""
        subs = [make_subscription(cost=17000, interval="monthly")]
        assert calculate_monthly_total(subs) == Decimal("17000")

    def test_weekly_subscription(self, make_subscription) -> None:
        """Should normalize a weekly cost with 4.33 weeks per month."""
        subs = [make_subscription(cost=13000, interval="weekly")]
        assert calculate_monthly_total(subs) == Decimal("56290")

    def test_mixed_intervals(self, make_subscription) -> None:
        """Should sum normalized costs across intervals."""
        subs = [
            make_subscription(cost=17000, interval="monthly"),
            make_subscription(cost=120000, interval="yearly"),
            make_subscription(cost=1000, interval="weekly"),
        ]
        assert calculate_monthly_total(subs) == Decimal("31330")

    def test_only_subscribed_count(self, make_subscription) -> None:
        """Cancelled and upcoming subscriptions contribute nothing."""
        subs = [
            make_subscription(cost=17000),
            make_subscription(cost=50000, status="cancelled"),
            make_subscription(cost=9900, status="upcoming"),
        ]
        assert calculate_monthly_total(subs) == Decimal("17000")

    def test_unknown_interval_raises(self, make_subscription) -> None:
        """Should surface invalid intervals instead of ignoring them."""
        with pytest.raises(InvalidInterval):
            calculate_monthly_total([make_subscription(interval="daily")])

    def test_accepts_generator(self, make_subscription) -> None:
        """Should work with any iterable of subscriptions."""
        subs = (make_subscription(cost=cost) for cost in (100, 200))
        assert calculate_monthly_total(subs) == Decimal("300")


class TestCalculateYearlyTotal:
    """Tests for calculate_yearly_total."""

    def test_monthly_contribution(self, make_subscription) -> None:
        """Should be twelve times a monthly cost."""
        subs = [make_subscription(cost=17000, interval="monthly")]
        assert calculate_yearly_total(subs) == Decimal("204000")

    def test_equals_twelve_times_monthly(self, make_subscription) -> None:
        """Should stay exactly consistent with the monthly total."""
        subs = [
            make_subscription(cost="9.99", interval="monthly"),
            make_subscription(cost=100, interval="yearly"),
            make_subscription(cost="3.50", interval="weekly"),
        ]
        assert calculate_yearly_total(subs) == calculate_monthly_total(subs) * 12

    def test_cancelled_contributes_zero(self, make_subscription) -> None:
        """A cancelled subscription should not affect yearly totals."""
        subs = [make_subscription(cost=50000, status="cancelled")]
        assert calculate_yearly_total(subs) == 0


class TestCalculateCategorySpending:
    """Tests for calculate_category_spending."""

    def test_breakdown_sorted_descending(self, make_subscription) -> None:
        """Should group by category with the top spender first."""
        subs = [
            make_subscription(name="Notion", cost=8000, category="productivity"),
            make_subscription(name="Netflix", cost=17000, category="entertainment"),
            make_subscription(name="Spotify", cost=13900, category="entertainment"),
        ]

        result = calculate_category_spending(subs)

        assert [entry.category for entry in result] == ["entertainment", "productivity"]
        assert result[0].amount == Decimal("30900")
        assert result[1].amount == Decimal("8000")
        assert round(result[0].percentage, 1) == 79.4
        assert round(result[1].percentage, 1) == 20.6

    def test_percentages_sum_to_hundred(self, make_subscription) -> None:
        """Percentages should add up to 100 when there is spending."""
        subs = [
            make_subscription(cost=17000, category="entertainment"),
            make_subscription(cost=99, interval="weekly", category="education"),
            make_subscription(cost=33333, interval="yearly", category="business"),
            make_subscription(cost=1, category="other"),
        ]

        result = calculate_category_spending(subs)

        assert sum(entry.percentage for entry in result) == pytest.approx(100.0)

    def test_zero_categories_excluded(self, make_subscription) -> None:
        """Categories without active spending should not appear."""
        subs = [
            make_subscription(cost=17000, category="entertainment"),
            make_subscription(cost=5000, category="lifestyle", status="cancelled"),
        ]

        result = calculate_category_spending(subs)

        assert [entry.category for entry in result] == ["entertainment"]
        assert result[0].percentage == pytest.approx(100.0)

    def test_empty_when_nothing_subscribed(self, make_subscription) -> None:
        """Should return no entries when the monthly total is zero."""
        subs = [make_subscription(cost=50000, status="cancelled")]
        assert calculate_category_spending(subs) == []

    def test_ties_keep_category_order(self, make_subscription) -> None:
        """Equal amounts should keep the fixed category order."""
        subs = [
            make_subscription(cost=1000, category="other"),
            make_subscription(cost=1000, category="education"),
            make_subscription(cost=1000, category="entertainment"),
        ]

        result = calculate_category_spending(subs)

        assert [entry.category for entry in result] == ["entertainment", "education", "other"]

    def test_amounts_are_normalized(self, make_subscription) -> None:
        """Category amounts should use monthly equivalents."""
        subs = [make_subscription(cost=120000, interval="yearly", category="business")]

        result = calculate_category_spending(subs)

        assert result[0].amount == Decimal("10000")


class TestCalculatePercentage:
    """Tests for calculate_percentage."""

    def test_zero_total_returns_zero(self) -> None:
        """Should guard against division by zero."""
        assert calculate_percentage(Money(Decimal("0")), Money(Decimal("0"))) == 0.0

    def test_returns_float(self) -> None:
        """Should return a float percentage."""
        result = calculate_percentage(Money(Decimal("1")), Money(Decimal("4")))
        assert isinstance(result, float)
        assert result == 25.0


class TestCalculateAverageCost:
    """Tests for calculate_average_cost."""

    def test_average_of_active(self, make_subscription) -> None:
        """Should divide the monthly total by active subscriptions."""
        subs = [
            make_subscription(cost=17000),
            make_subscription(cost=13000),
            make_subscription(cost=99999, status="cancelled"),
        ]
        assert calculate_average_cost(subs) == Decimal("15000")

    def test_no_active_subscriptions(self, make_subscription) -> None:
        """Should return zero instead of dividing by zero."""
        assert calculate_average_cost([make_subscription(status="upcoming")]) == 0


class TestCountByStatus:
    """Tests for count_by_status."""

    def test_counts_each_status(self, make_subscription) -> None:
        """Should count all subscriptions and each status."""
        subs = [
            make_subscription(),
            make_subscription(),
            make_subscription(status="cancelled"),
        ]

        assert count_by_status(subs) == {"all": 3, "subscribed": 2, "upcoming": 0, "cancelled": 1}

    def test_empty(self) -> None:
        """Should report zeros for an empty list."""
        assert count_by_status([]) == {"all": 0, "subscribed": 0, "upcoming": 0, "cancelled": 0}


class TestCalculateHistogramBarLength:
    """Tests for calculate_histogram_bar_length."""

    def test_largest_fills_width(self) -> None:
        """The largest amount should use the full bar width."""
        assert calculate_histogram_bar_length(Money(Decimal("500")), Money(Decimal("500")), 30) == 30

    def test_proportional(self) -> None:
        """Smaller amounts should scale proportionally."""
        assert calculate_histogram_bar_length(Money(Decimal("250")), Money(Decimal("500")), 30) == 15

    def test_zero_max(self) -> None:
        """Should return zero when there is nothing to scale against."""
        assert calculate_histogram_bar_length(Money(Decimal("0")), Money(Decimal("0")), 30) == 0
