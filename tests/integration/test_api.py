"""Integration tests for API endpoints"""

import pytest
from unittest.mock import AsyncMock, patch
from fastapi.testclient import TestClient
from student_finance.domain.exceptions import AdvisorAPIError


ADVICE_TEXT = """
1. Loan Management & Financial Aid
- Look into income-driven repayment

2. Budget Optimization
- Cap dining out at $150 per month
"""


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_request_id_header(client: TestClient):
    """Test request ID is minted when absent and echoed when supplied"""
    minted = client.get("/health")
    assert minted.headers["X-Request-ID"]

    echoed = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert echoed.headers["X-Request-ID"] == "req-123"


def test_metrics_endpoint(client: TestClient, sample_payload: dict):
    """Test Prometheus metrics endpoint"""
    client.post("/v1/metrics", json=sample_payload)

    response = client.get("/metrics")
    assert response.status_code == 200
    assert "student_finance_metrics_total" in response.text
    assert "http_request_duration_seconds" in response.text


def test_financial_metrics_endpoint(client: TestClient, sample_payload: dict):
    """Test POST /v1/metrics for the reference profile"""
    response = client.post("/v1/metrics", json=sample_payload)

    assert response.status_code == 200
    data = response.json()
    assert data["monthly_payment"] == pytest.approx(542.63, abs=0.01)
    assert data["debt_to_income_ratio"] == pytest.approx(1.389, abs=0.001)
    assert data["risk_level"] == "High"
    assert data["savings_rate_percent"] == pytest.approx(33.33, abs=0.01)
    assert data["emergency_fund_target"] == 12000
    assert data["months_to_emergency_fund"] == 27
    assert data["projected_payoff_date"] == "2033-10-15"


def test_financial_metrics_endpoint_unreachable_emergency_fund(client: TestClient, sample_payload: dict):
    """Test unreachable emergency fund serialises as null"""
    sample_payload["monthly_expenses"] = 2900

    response = client.post("/v1/metrics", json=sample_payload)

    assert response.status_code == 200
    data = response.json()
    assert data["monthly_net_savings"] < 0
    assert data["months_to_emergency_fund"] is None


def test_financial_metrics_endpoint_zero_income(client: TestClient, sample_payload: dict):
    """Test zero income returns a distinct undefined_ratio error"""
    sample_payload["monthly_income"] = 0

    response = client.post("/v1/metrics", json=sample_payload)

    assert response.status_code == 422
    assert response.json()["detail"]["error"] == "undefined_ratio"


def test_financial_metrics_endpoint_invalid_profile(client: TestClient, sample_payload: dict):
    """Test negative amounts and zero terms return the invalid_profile error"""
    response = client.post("/v1/metrics", json={**sample_payload, "loan_amount": -100})
    assert response.status_code == 422
    assert response.json()["detail"]["error"] == "invalid_profile"

    response = client.post("/v1/metrics", json={**sample_payload, "term_months": 0})
    assert response.status_code == 422
    assert response.json()["detail"]["error"] == "invalid_profile"

    metrics_text = client.get("/metrics").text
    assert 'student_finance_validation_failures_total{kind="invalid_profile"}' in metrics_text


def test_prediction_endpoint_invalid_profile(client: TestClient, sample_payload: dict):
    """Test POST /v1/predictions reports negative expenses as invalid_profile"""
    response = client.post("/v1/predictions", json={**sample_payload, "monthly_expenses": -1})

    assert response.status_code == 422
    assert response.json()["detail"]["error"] == "invalid_profile"


def test_financial_metrics_endpoint_very_long_term(client: TestClient, sample_payload: dict):
    """Test oversized terms are rejected with 422 instead of failing the request"""
    zero_rate = {**sample_payload, "annual_interest_rate_percent": 0}

    response = client.post("/v1/metrics", json={**zero_rate, "term_months": 100000})
    assert response.status_code == 422
    assert response.json()["detail"]["error"] == "invalid_profile"

    response = client.post("/v1/metrics", json={**zero_rate, "term_months": int("9" * 400)})
    assert response.status_code == 422


def test_financial_metrics_endpoint_deterministic(client: TestClient, sample_payload: dict):
    """Test identical requests return identical bodies"""
    first = client.post("/v1/metrics", json=sample_payload)
    second = client.post("/v1/metrics", json=sample_payload)

    assert first.content == second.content


def test_prediction_endpoint(client: TestClient, sample_payload: dict):
    """Test POST /v1/predictions with peer loans"""
    response = client.post(
        "/v1/predictions",
        json={
            **sample_payload,
            "peer_loans": [
                {"loan_amount": 45000, "defaulted": True},
                {"loan_amount": 55000, "defaulted": False},
                {"loan_amount": 90000, "defaulted": True},
            ],
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["similar_loan_count"] == 2
    assert data["default_risk_percent"] == pytest.approx(50000 / 36000 * 20 + 15)
    assert data["estimated_repayment_years"] == 10.0
    assert data["monthly_savings"] == pytest.approx(457.37, abs=0.01)


def test_prediction_endpoint_zero_income(client: TestClient, sample_payload: dict):
    """Test POST /v1/predictions rejects zero income"""
    sample_payload["monthly_income"] = 0

    response = client.post("/v1/predictions", json=sample_payload)

    assert response.status_code == 422
    assert response.json()["detail"]["error"] == "undefined_ratio"


@patch("student_finance.infrastructure.clients.advisor.AdvisorClient.get_advice")
def test_recommendations_endpoint(mock_advisor: AsyncMock, client: TestClient, sample_payload: dict):
    """Test POST /v1/recommendations combines advice lines with metrics"""
    mock_advisor.return_value = ADVICE_TEXT

    response = client.post(
        "/v1/recommendations",
        json={**sample_payload, "message": "How can I save more?", "country": "USA", "university": "Demo"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["recommendations"] == [
        "1. Loan Management & Financial Aid",
        "- Look into income-driven repayment",
        "2. Budget Optimization",
        "- Cap dining out at $150 per month",
    ]
    assert data["metrics"]["risk_level"] == "High"
    mock_advisor.assert_awaited_once()


@patch("student_finance.infrastructure.clients.advisor.AdvisorClient.get_advice")
def test_recommendations_endpoint_advisor_down(mock_advisor: AsyncMock, client: TestClient, sample_payload: dict):
    """Test advisor failure maps to 503"""
    mock_advisor.side_effect = AdvisorAPIError("Advisor API timeout after 10.0s")

    response = client.post("/v1/recommendations", json={**sample_payload, "message": "Help"})

    assert response.status_code == 503


@patch("student_finance.infrastructure.clients.advisor.AdvisorClient.get_advice")
def test_recommendations_endpoint_invalid_profile_skips_advisor(
    mock_advisor: AsyncMock,
    client: TestClient,
    sample_payload: dict,
):
    """Test profile validation runs before any outbound call"""
    sample_payload["monthly_income"] = 0

    response = client.post("/v1/recommendations", json={**sample_payload, "message": "Help"})

    assert response.status_code == 422
    mock_advisor.assert_not_called()


@patch("student_finance.infrastructure.clients.advisor.AdvisorClient.get_investment_advice")
def test_investment_advice_endpoint(mock_advisor: AsyncMock, client: TestClient):
    """Test POST /v1/investment-advice splits advice into lines"""
    mock_advisor.return_value = "- Keep 3 months in a high-yield savings account\n\n- Start a low-cost index fund\n"

    response = client.post(
        "/v1/investment-advice",
        json={"savings": 2500, "risk_tolerance": "low", "time_horizon": "2 years"},
    )

    assert response.status_code == 200
    assert response.json()["advice"] == [
        "- Keep 3 months in a high-yield savings account",
        "- Start a low-cost index fund",
    ]
    mock_advisor.assert_awaited_once_with(2500.0, "low", "2 years")


@patch("student_finance.infrastructure.clients.advisor.AdvisorClient.get_investment_advice")
def test_investment_advice_endpoint_advisor_down(mock_advisor: AsyncMock, client: TestClient):
    """Test advisor failure maps to 503"""
    mock_advisor.side_effect = AdvisorAPIError("Advisor API error: 500")

    response = client.post(
        "/v1/investment-advice",
        json={"savings": 2500, "risk_tolerance": "low", "time_horizon": "2 years"},
    )

    assert response.status_code == 503


@patch("student_finance.infrastructure.clients.advisor.AdvisorClient.get_cost_analysis")
def test_cost_analysis_endpoint(mock_advisor: AsyncMock, client: TestClient):
    """Test POST /v1/cost-analysis totals expenses and returns analysis lines"""
    mock_advisor.return_value = "Share a flat to cut rent\nCook at home four nights a week"
    expenses = {"rent": 900, "food": 350.5, "transport": 60}

    response = client.post("/v1/cost-analysis", json={"expenses": expenses, "location": "Berlin"})

    assert response.status_code == 200
    data = response.json()
    assert data["total_monthly_expenses"] == pytest.approx(1310.5)
    assert data["analysis"] == ["Share a flat to cut rent", "Cook at home four nights a week"]
    mock_advisor.assert_awaited_once()


@patch("student_finance.infrastructure.clients.advisor.AdvisorClient.get_cost_analysis")
def test_cost_analysis_endpoint_advisor_down(mock_advisor: AsyncMock, client: TestClient):
    """Test advisor failure maps to 503"""
    mock_advisor.side_effect = AdvisorAPIError("Advisor API unreachable")

    response = client.post("/v1/cost-analysis", json={"expenses": {"rent": 900}, "location": "Berlin"})

    assert response.status_code == 503
