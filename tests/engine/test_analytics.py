from dataclasses import replace
from datetime import date
from decimal import Decimal

from src.engine.analytics import (
    account_analytics,
    account_summary,
    month_over_month,
    monthly_trend,
    overall_analytics,
    payment_consistency,
    payoff_outlook,
    progress_percentage,
    trend_analysis,
)
from src.engine.financial import add_months
from src.engine.scenarios import NO_RECENT_PAYMENTS, current_trend_projection
from src.models.ledger import Snapshot
from src.models.results import OverallAnalytics, ProjectedPayoff, ProjectionUnavailable


class TestProgress:
    def test_partial_progress(self):
        assert progress_percentage(Decimal("5000"), Decimal("4000")) == Decimal("20.00")

    def test_debt_grew_clamps_to_zero(self):
        assert progress_percentage(Decimal("1000"), Decimal("1200")) == Decimal("0")

    def test_zero_baseline(self):
        assert progress_percentage(Decimal("0"), Decimal("0")) == Decimal("0")


class TestPayoffOutlook:
    def test_projected(self, card_ledger, as_of):
        outlook = payoff_outlook(card_ledger, 3, as_of)
        projection = current_trend_projection(card_ledger, 3, as_of)
        assert isinstance(outlook, ProjectedPayoff)
        assert outlook.months == projection.months
        assert outlook.payoff_date == add_months(as_of, projection.months)
        assert outlook.total_interest == projection.total_interest

    def test_no_recent_payments_is_unavailable(self, empty_ledger, as_of):
        outlook = payoff_outlook(empty_ledger, 3, as_of)
        assert outlook == ProjectionUnavailable(NO_RECENT_PAYMENTS)

    def test_payment_below_interest_is_unavailable(self, card_ledger, as_of):
        """$300/month cannot cover 18% interest on $40,000."""
        big = replace(card_ledger.account, current_balance=Decimal("40000"))
        outlook = payoff_outlook(replace(card_ledger, account=big), 3, as_of)
        assert isinstance(outlook, ProjectionUnavailable)


class TestAccountAnalytics:
    def test_lifetime_totals(self, card_ledger, as_of):
        result = account_analytics(card_ledger, 3, as_of)
        assert result.current_balance == Decimal("4000.00")
        assert result.initial_balance == Decimal("5000.00")
        assert result.total_reduction == Decimal("1250.00")
        assert result.reduction_percentage == Decimal("20.00")
        assert result.total_payments == Decimal("1625.00")
        assert result.total_charges == Decimal("375.00")
        assert result.total_interest == Decimal("325.00")

    def test_averages(self, card_ledger, as_of):
        """165 days since the first snapshot is 5.5 months."""
        result = account_analytics(card_ledger, 3, as_of)
        assert result.days_in_program == 165
        assert result.average_monthly_payment == Decimal("320.00")
        assert result.average_monthly_reduction == Decimal("227.27")

    def test_outlook_attached(self, card_ledger, as_of):
        result = account_analytics(card_ledger, 3, as_of)
        assert isinstance(result.outlook, ProjectedPayoff)
        assert result.projected_payoff_date == result.outlook.payoff_date

    def test_no_snapshots_uses_current_balance(self, empty_ledger, as_of):
        result = account_analytics(empty_ledger, 3, as_of)
        assert result.initial_balance == Decimal("800.00")
        assert result.reduction_percentage == Decimal("0")
        assert result.days_in_program == 14
        assert result.projected_payoff_date is None
        assert result.projected_total_interest == Decimal("0")


class TestAccountSummary:
    def test_summary(self, card_ledger, as_of):
        summary = account_summary(card_ledger, as_of)
        assert summary.total_payments == Decimal("1625.00")
        assert summary.total_charges == Decimal("375.00")
        assert summary.total_reduction == Decimal("1250.00")
        assert summary.progress_percentage == Decimal("20.00")
        # 161 days since the first transaction: 1250 / (161 / 30)
        assert summary.average_monthly_reduction == Decimal("232.92")
        assert summary.projected_debt_free_date == date(2026, 12, 15)

    def test_no_reduction_no_date(self, empty_ledger, as_of):
        summary = account_summary(empty_ledger, as_of)
        assert summary.average_monthly_reduction == Decimal("0")
        assert summary.projected_debt_free_date is None


class TestMonthlyTrend:
    def test_combines_accounts_per_month(self, card_ledger, loan_ledger, as_of):
        trend = monthly_trend([card_ledger, loan_ledger], 12, as_of)
        assert [t.month for t in trend] == [
            "Jan 2025", "Feb 2025", "Mar 2025", "Apr 2025", "May 2025", "Jun 2025",
        ]
        assert [t.total_balance for t in trend] == [
            Decimal(v) for v in ("5000", "4780", "6550", "4270", "4030", "5500")
        ]

    def test_reduction_against_previous_month(self, card_ledger, loan_ledger, as_of):
        trend = monthly_trend([card_ledger, loan_ledger], 12, as_of)
        assert trend[0].reduction == Decimal("0")
        assert trend[1].reduction == Decimal("220.00")
        assert trend[2].reduction == Decimal("-1770.00")

    def test_window_excludes_old_snapshots(self, card_ledger, as_of):
        trend = monthly_trend([card_ledger], 3, as_of)
        assert [t.month for t in trend] == ["Apr 2025", "May 2025", "Jun 2025"]


class TestOverallAnalytics:
    def test_empty_portfolio(self, as_of):
        assert overall_analytics([], 12, as_of) == OverallAnalytics()

    def test_portfolio_totals(self, card_ledger, loan_ledger, as_of):
        result = overall_analytics([card_ledger, loan_ledger], 12, as_of)
        assert result.total_debt == Decimal("5500.00")
        assert result.total_reduction == Decimal("1750.00")
        assert result.reduction_percentage == Decimal("21.43")
        assert result.total_accounts == 2
        assert result.active_accounts == 1
        assert result.total_interest_paid == Decimal("325.00")

    def test_average_reduction_and_debt_free_date(self, card_ledger, loan_ledger, as_of):
        result = overall_analytics([card_ledger, loan_ledger], 12, as_of)
        assert result.average_monthly_reduction == Decimal("318.18")
        assert result.projected_debt_free_date == date(2026, 12, 15)

    def test_includes_trend(self, card_ledger, loan_ledger, as_of):
        result = overall_analytics([card_ledger, loan_ledger], 12, as_of)
        assert len(result.monthly_trend) == 6


class TestTrendAnalysis:
    def test_payment_consistency(self):
        payments = [Decimal(v) for v in ("300", "300", "400", "300", "300")]
        assert payment_consistency(payments) == Decimal("0.88")

    def test_identical_payments_are_fully_consistent(self):
        assert payment_consistency([Decimal("250"), Decimal("250")]) == Decimal("1.00")

    def test_consistency_needs_two_payments(self):
        assert payment_consistency([Decimal("250")]) == Decimal("0")

    def test_zero_mean(self):
        assert payment_consistency([Decimal("0"), Decimal("0")]) == Decimal("0")

    def test_single_account(self, card_ledger, as_of):
        result = trend_analysis([card_ledger], 13, as_of)
        assert result.payment_consistency == Decimal("0.88")
        assert result.reduction_rate == Decimal("181.82")
        assert len(result.month_over_month) == 6

    def test_snapshot_limit(self, card_ledger, as_of):
        """With two snapshots the baseline is the May balance of 4,030, 1.5 months back."""
        result = trend_analysis([card_ledger], 2, as_of)
        assert [m.period for m in result.month_over_month] == ["May 2025", "Jun 2025"]
        assert result.reduction_rate == Decimal("20.00")

    def test_no_ledgers(self, as_of):
        result = trend_analysis([], 13, as_of)
        assert result.payment_consistency == Decimal("0")
        assert result.reduction_rate == Decimal("0")
        assert result.month_over_month == []


class TestMonthOverMonth:
    def test_changes(self, card_snapshots):
        comparison = month_over_month(card_snapshots)
        assert comparison[0].change == Decimal("0")
        assert comparison[0].change_percentage == Decimal("0")
        assert comparison[1].change == Decimal("220.00")
        assert comparison[1].change_percentage == Decimal("4.40")

    def test_same_month_snapshots_are_summed(self):
        snapshots = [
            Snapshot(id="a", account_id="x", balance=Decimal("100"), snapshot_date=date(2025, 1, 1)),
            Snapshot(id="b", account_id="y", balance=Decimal("200"), snapshot_date=date(2025, 1, 20)),
        ]
        comparison = month_over_month(snapshots)
        assert len(comparison) == 1
        assert comparison[0].balance == Decimal("300.00")
