"""Pytest fixtures for testing"""

import pytest
from fastapi.testclient import TestClient
from copilot_engine.api.main import create_app
from copilot_engine.domain.models import Debt, RentVsBuyInputs


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def sample_debts() -> list[Debt]:
    """Credit card, car loan and student loan with diverging rate/balance order"""
    return [
        Debt(id="card", name="Credit Card", balance=500_000, monthly_payment=15_000, interest_rate=0.24),
        Debt(id="car", name="Car Loan", balance=150_000, monthly_payment=10_000, interest_rate=0.06),
        Debt(id="student", name="Student Loan", balance=1_200_000, monthly_payment=20_000, interest_rate=0.045),
    ]


@pytest.fixture
def rent_vs_buy_inputs() -> RentVsBuyInputs:
    """$300k home, 20% down, 6% 30-year mortgage vs $1,500 rent over 5 years"""
    return RentVsBuyInputs(
        property_price=30_000_000,
        down_payment_percent=0.2,
        mortgage_rate=0.06,
        mortgage_term_years=30,
        monthly_rent=150_000,
        rent_increase_rate=0.03,
        property_tax_rate=0.012,
        home_insurance=120_000,
        maintenance_rate=0.01,
        home_appreciation_rate=0.01,
        investment_return_rate=0.07,
        time_horizon_years=5,
        closing_costs=900_000,
    )
