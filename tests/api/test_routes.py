"""HTTP tests over the in-memory repository."""

import pytest
from fastapi.testclient import TestClient

from src.api.app import app
from src.api.deps import get_as_of, get_resolver
from src.data.resolver import LedgerResolver
from src.engine.debt import MAX_MONTHS, NON_POSITIVE_TARGET
from src.engine.financial import add_months
from src.engine.scenarios import NO_RECENT_PAYMENTS

HEADERS = {"X-User-Id": "user-1"}


@pytest.fixture
def client(repository, as_of):
    app.dependency_overrides[get_resolver] = lambda: LedgerResolver(repository)
    app.dependency_overrides[get_as_of] = lambda: as_of
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealthAndAuth:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}

    def test_missing_user_header(self, client):
        assert client.get("/api/v1/analytics/accounts/card-1").status_code == 422

    def test_unknown_account(self, client):
        resp = client.get("/api/v1/analytics/accounts/missing", headers=HEADERS)
        assert resp.status_code == 404

    def test_foreign_account(self, client):
        resp = client.get("/api/v1/analytics/accounts/other-1", headers=HEADERS)
        assert resp.status_code == 403


class TestAccountRoutes:
    def test_account_analytics(self, client, as_of):
        resp = client.get("/api/v1/analytics/accounts/card-1", headers=HEADERS)
        assert resp.status_code == 200
        data = resp.json()
        assert data["current_balance"] == "4000.00"
        assert data["reduction_percentage"] == "20.00"
        assert data["days_in_program"] == 165
        assert data["projection_unavailable_reason"] is None
        expected = add_months(as_of, data["projected_months"])
        assert data["projected_payoff_date"] == expected.isoformat()

    def test_unavailable_projection_reason(self, client):
        """The car loan's only payment is older than one month."""
        resp = client.get(
            "/api/v1/analytics/accounts/loan-1",
            params={"lookback_months": 1},
            headers=HEADERS,
        )
        data = resp.json()
        assert data["projected_payoff_date"] is None
        assert data["projected_months"] is None
        assert data["projection_unavailable_reason"] == NO_RECENT_PAYMENTS

    def test_summary(self, client):
        data = client.get("/api/v1/analytics/accounts/card-1/summary", headers=HEADERS).json()
        assert data["total_payments"] == "1625.00"
        assert data["projected_debt_free_date"] == "2026-12-15"

    def test_trend_projection(self, client):
        data = client.get("/api/v1/analytics/accounts/card-1/projection", headers=HEADERS).json()
        assert data["error"] is None
        assert data["monthly_breakdown"][0]["interest_charged"] == "60.00"
        assert len(data["monthly_breakdown"]) == data["months"]

    def test_interest_forecast(self, client):
        data = client.get("/api/v1/analytics/accounts/card-1/interest-forecast", headers=HEADERS).json()
        assert data["total_interest_paid"] == "325.00"
        assert data["next_month_estimate"] == "60.00"
        assert len(data["history"]) == 6

    @pytest.mark.parametrize(
        "path, params",
        [
            ("interest-forecast", {"months": 30000}),
            ("projection", {"lookback_months": 30000}),
            ("payoff-scenarios", {"lookback_months": MAX_MONTHS + 1}),
            ("chart/interest-accumulation", {"months": 30000}),
            ("chart/projection-comparison", {"lookback_months": 30000}),
        ],
    )
    def test_month_counts_are_bounded(self, client, path, params):
        resp = client.get(f"/api/v1/analytics/accounts/card-1/{path}", params=params, headers=HEADERS)
        assert resp.status_code == 422

    def test_longest_window_accepted(self, client):
        resp = client.get(
            "/api/v1/analytics/accounts/card-1/interest-forecast",
            params={"months": MAX_MONTHS},
            headers=HEADERS,
        )
        assert resp.status_code == 200
        assert resp.json()["total_interest_paid"] == "325.00"

    def test_payoff_scenarios(self, client):
        data = client.get("/api/v1/analytics/accounts/card-1/payoff-scenarios", headers=HEADERS).json()
        assert [s["name"] for s in data] == [
            "Minimum Payment",
            "Current Trend",
            "Extra $50/month",
            "Extra $100/month",
            "Extra $200/month",
        ]

    def test_custom_projection(self, client):
        resp = client.post(
            "/api/v1/analytics/accounts/card-1/calculate-projection",
            json={"monthly_payment": "1000"},
            headers=HEADERS,
        )
        assert resp.status_code == 200
        assert resp.json()["months"] == 5

    def test_custom_projection_rejects_zero_payment(self, client):
        resp = client.post(
            "/api/v1/analytics/accounts/card-1/calculate-projection",
            json={"monthly_payment": "0"},
            headers=HEADERS,
        )
        assert resp.status_code == 422

    def test_required_payment(self, client):
        resp = client.post(
            "/api/v1/analytics/accounts/card-1/required-payment",
            json={"target_months": 12},
            headers=HEADERS,
        )
        assert resp.status_code == 200
        assert resp.json()["target_months"] == 12

    def test_required_payment_bad_target(self, client):
        resp = client.post(
            "/api/v1/analytics/accounts/card-1/required-payment",
            json={"target_months": 0},
            headers=HEADERS,
        )
        assert resp.status_code == 400
        assert resp.json()["detail"] == NON_POSITIVE_TARGET


class TestOverviewRoutes:
    def test_overview(self, client):
        data = client.get("/api/v1/analytics/overview", headers=HEADERS).json()
        assert data["total_debt"] == "5500.00"
        assert data["total_accounts"] == 2
        assert data["active_accounts"] == 1
        assert len(data["monthly_trend"]) == 6

    def test_overview_for_user_without_accounts(self, client):
        data = client.get("/api/v1/analytics/overview", headers={"X-User-Id": "nobody"}).json()
        assert data["total_accounts"] == 0
        assert data["monthly_trend"] == []

    def test_trends(self, client):
        data = client.get("/api/v1/analytics/trends", headers=HEADERS).json()
        assert len(data["month_over_month"]) == 6
        assert data["month_over_month"][0]["change"] == "0"

    def test_multi_account_chart_date_range(self, client):
        resp = client.get(
            "/api/v1/analytics/chart/multi-account-balance",
            params={"start_date": "2025-03-01"},
            headers=HEADERS,
        )
        data = resp.json()
        assert data["labels"] == ["Mar 2025", "Apr 2025", "May 2025", "Jun 2025"]
        assert [d["label"] for d in data["datasets"]] == ["Rewards Card", "Car Loan"]


class TestChartRoutes:
    def test_payment_distribution(self, client):
        data = client.get(
            "/api/v1/analytics/accounts/card-1/chart/payment-distribution", headers=HEADERS
        ).json()
        (dataset,) = data["datasets"]
        assert dataset["renderer"] == "pie"
        assert dataset["data"] == ["1300.00", "325.00", "50.00"]

    def test_projection_comparison(self, client):
        data = client.get(
            "/api/v1/analytics/accounts/card-1/chart/projection-comparison", headers=HEADERS
        ).json()
        assert len(data["labels"]) == 61
        assert len(data["datasets"]) == 5

    def test_balance_reduction_range(self, client):
        data = client.get(
            "/api/v1/analytics/accounts/card-1/chart/balance-reduction",
            params={"end_date": "2025-02-28"},
            headers=HEADERS,
        ).json()
        assert data["labels"] == ["Jan 2025", "Feb 2025"]

    def test_interest_accumulation(self, client):
        data = client.get(
            "/api/v1/analytics/accounts/card-1/chart/interest-accumulation",
            params={"months": 3},
            headers=HEADERS,
        ).json()
        assert data["labels"] == ["Mar 2025", "Apr 2025", "May 2025"]
        assert data["datasets"][0]["renderer"] == "bar"

    def test_snapshot_balance_empty(self, client):
        data = client.get(
            "/api/v1/analytics/accounts/card-1/chart/snapshot-balance",
            params={"start_date": "2030-01-01"},
            headers=HEADERS,
        ).json()
        assert data == {"labels": [], "datasets": []}
