"""Pytest fixtures for testing"""

import pytest
from datetime import date
from fastapi.testclient import TestClient
from student_finance.api.main import create_app
from student_finance.api.dependencies import get_today
from student_finance.domain.models import FinancialProfile, PeerLoan


FIXED_TODAY = date(2026, 1, 15)


@pytest.fixture
def today() -> date:
    """Pinned current date so projected dates are reproducible"""
    return FIXED_TODAY


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client with a pinned current date"""
    app = create_app()
    app.dependency_overrides[get_today] = lambda: FIXED_TODAY
    return TestClient(app)


@pytest.fixture
def sample_profile() -> FinancialProfile:
    """Ten-year $50k loan at 5.5% with $3000 income and $2000 expenses"""
    return FinancialProfile(
        loan_amount=50000,
        annual_interest_rate_percent=5.5,
        term_months=120,
        monthly_income=3000,
        monthly_expenses=2000,
    )


@pytest.fixture
def sample_payload() -> dict:
    """JSON body matching sample_profile"""
    return {
        "loan_amount": 50000,
        "annual_interest_rate_percent": 5.5,
        "term_months": 120,
        "monthly_income": 3000,
        "monthly_expenses": 2000,
    }


@pytest.fixture
def peer_loans() -> list[PeerLoan]:
    """Peer outcomes around the $40k-$60k range"""
    return [
        PeerLoan(loan_amount=40000, defaulted=False),
        PeerLoan(loan_amount=60000, defaulted=True),
        PeerLoan(loan_amount=35000, defaulted=False),
    ]
