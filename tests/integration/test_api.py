"""Integration tests for API endpoints"""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def debts_payload():
    return [
        {"id": "card", "name": "Credit Card", "balance": 500000, "monthly_payment": 15000, "interest_rate": 0.24},
        {"id": "car", "name": "Car Loan", "balance": 150000, "monthly_payment": 10000, "interest_rate": 0.06},
    ]


@pytest.fixture
def rent_vs_buy_payload():
    return {
        "property_price": 30_000_000,
        "down_payment_percent": 0.2,
        "mortgage_rate": 0.06,
        "mortgage_term_years": 30,
        "monthly_rent": 150_000,
        "rent_increase_rate": 0.03,
        "property_tax_rate": 0.012,
        "home_insurance": 120_000,
        "maintenance_rate": 0.01,
        "home_appreciation_rate": 0.01,
        "investment_return_rate": 0.07,
        "time_horizon_years": 5,
        "closing_costs": 900_000,
    }


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient, debts_payload):
    """Test Prometheus metrics endpoint exposes calculation counters"""
    client.post("/v1/debt-payoff", json={"debts": debts_payload, "extra_monthly_payment": 5000})

    response = client.get("/metrics")
    assert response.status_code == 200
    assert "copilot_calculation_total" in response.text


def test_calculator_routes_registered(client: TestClient):
    paths = {route.path for route in client.app.routes}
    assert {
        "/v1/debt-consolidation",
        "/v1/debt-payoff",
        "/v1/rent-vs-buy",
        "/v1/financial-ratios",
    } <= paths


def test_request_id_propagated(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_consolidation_endpoint_uses_default_options(client: TestClient):
    """Test POST /v1/debt-consolidation falls back to the three default offers"""
    response = client.post(
        "/v1/debt-consolidation",
        json={
            "existing_debts": [
                {"id": "1", "name": "Visa", "balance": 300000, "monthly_payment": 15000, "interest_rate": 0.22}
            ],
            "monthly_income": 500000,
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["total_current_debt"] == 300000
    assert [c["type"] for c in data["consolidation_comparison"]] == [
        "personal_loan",
        "balance_transfer",
        "heloc",
    ]
    assert all(c["eligible"] for c in data["consolidation_comparison"])
    assert data["recommendation"]


def test_consolidation_endpoint_custom_options(client: TestClient, debts_payload):
    response = client.post(
        "/v1/debt-consolidation",
        json={
            "existing_debts": debts_payload,
            "consolidation_options": [{"type": "heloc", "rate": 0.07, "term": 120, "fees": 0}],
            "monthly_income": 800000,
            "credit_score": 700,
        },
    )

    assert response.status_code == 200
    comparison = response.json()["consolidation_comparison"]
    assert len(comparison) == 1
    assert comparison[0]["type"] == "heloc"


def test_consolidation_endpoint_never_paid_off_serialized_as_null(client: TestClient):
    response = client.post(
        "/v1/debt-consolidation",
        json={
            "existing_debts": [
                {"id": "1", "name": "Payday", "balance": 100000, "monthly_payment": 1, "interest_rate": 0.2}
            ],
            "monthly_income": 500000,
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["total_current_interest"] is None
    assert all(c["months_saved"] is None for c in data["consolidation_comparison"])
    assert all(c["total_savings"] == 0 for c in data["consolidation_comparison"])


def test_consolidation_endpoint_rejects_bad_credit_score(client: TestClient, debts_payload):
    response = client.post(
        "/v1/debt-consolidation",
        json={"existing_debts": debts_payload, "monthly_income": 500000, "credit_score": 900},
    )
    assert response.status_code == 422


def test_payoff_endpoint(client: TestClient, debts_payload):
    """Test POST /v1/debt-payoff returns three strategies"""
    response = client.post(
        "/v1/debt-payoff",
        json={"debts": debts_payload, "extra_monthly_payment": 10000, "monthly_income": 600000},
    )

    assert response.status_code == 200
    data = response.json()
    assert [s["strategy_name"] for s in data["strategies"]] == [
        "Current Plan",
        "Debt Avalanche",
        "Debt Snowball",
    ]
    current, avalanche, snowball = data["strategies"]
    assert avalanche["total_interest"] <= snowball["total_interest"]
    assert avalanche["total_amount"] == avalanche["total_principal"] + avalanche["total_interest"]
    assert avalanche["interest_saved"] == current["total_interest"] - avalanche["total_interest"]
    assert data["summary"]["proposed_monthly_payment"] == 35000


def test_payoff_endpoint_non_convergent(client: TestClient):
    response = client.post(
        "/v1/debt-payoff",
        json={
            "debts": [{"id": "1", "name": "Payday", "balance": 100000, "monthly_payment": 1, "interest_rate": 0.2}],
        },
    )

    assert response.status_code == 200
    data = response.json()
    current = data["strategies"][0]
    assert current["converges"] is False
    assert current["total_months"] is None
    assert all(s["interest_saved"] == 0 for s in data["strategies"])
    assert data["summary"]["max_interest_savings"] == 0


def test_payoff_endpoint_empty_debts(client: TestClient):
    """Test empty debt list is rejected at the boundary"""
    response = client.post("/v1/debt-payoff", json={"debts": []})
    assert response.status_code == 422


def test_payoff_endpoint_rate_above_limit(client: TestClient):
    response = client.post(
        "/v1/debt-payoff",
        json={"debts": [{"id": "1", "name": "X", "balance": 1000, "monthly_payment": 100, "interest_rate": 0.9}]},
    )
    assert response.status_code == 422


def test_rent_vs_buy_endpoint(client: TestClient, rent_vs_buy_payload):
    """Test POST /v1/rent-vs-buy"""
    response = client.post("/v1/rent-vs-buy", json=rent_vs_buy_payload)

    assert response.status_code == 200
    data = response.json()
    assert data["comparison"]["buying_is_better"] is False
    assert data["buy_scenario"]["monthly_payment"] == 208_892
    assert data["rent_scenario"]["total_rent_paid"] == 9_556_440
    assert len(data["assumptions"]) > 0


def test_rent_vs_buy_endpoint_rejects_zero_horizon(client: TestClient, rent_vs_buy_payload):
    rent_vs_buy_payload["time_horizon_years"] = 0
    response = client.post("/v1/rent-vs-buy", json=rent_vs_buy_payload)
    assert response.status_code == 422


def test_financial_ratios_endpoint(client: TestClient):
    response = client.post(
        "/v1/financial-ratios",
        json={"monthly_income": 500000, "monthly_expenses": 300000, "monthly_debt": 100000, "current_savings": 1200000},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["debt_to_income_ratio"] == 0.2
    assert data["savings_rate"] == 0.2
    assert data["emergency_fund_months"] == 3.0
    assert data["annual_debt_payments"] == 1_200_000


def test_financial_ratios_endpoint_spreads_annual_expenses(client: TestClient):
    """Test yearly bills are folded into monthly expenses"""
    response = client.post(
        "/v1/financial-ratios",
        json={
            "monthly_income": 500000,
            "monthly_expenses": 250000,
            "annual_expenses": 600000,
            "monthly_debt": 100000,
            "current_savings": 1200000,
        },
    )

    data = response.json()
    assert data["monthly_expenses"] == 300000
    assert data["savings_rate"] == 0.2
    assert data["emergency_fund_months"] == 3.0


def test_financial_ratios_endpoint_no_obligations(client: TestClient):
    response = client.post("/v1/financial-ratios", json={"monthly_income": 500000, "current_savings": 1000})
    assert response.json()["emergency_fund_months"] is None
