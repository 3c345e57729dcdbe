"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import date
from typing import Dict, List, Optional

from student_finance.domain.models import FinancialMetrics, FinancialProfile, LoanPrediction, PeerLoan


class ProfileRequest(BaseModel):
    """Request body shared by every profile-based endpoint"""

    # Ranges are checked by the metrics engine so every out-of-domain value gets the same error shape
    loan_amount: float = Field(..., description="Loan principal in dollars")
    annual_interest_rate_percent: float = Field(..., description="Nominal yearly rate, 5.5 means 5.5%")
    term_months: int = Field(..., description="Repayment term in months")
    monthly_income: float = Field(..., description="Monthly income in dollars")
    monthly_expenses: float = Field(..., description="Monthly expenses in dollars")

    def to_profile(self) -> FinancialProfile:
        return FinancialProfile(
            loan_amount=self.loan_amount,
            annual_interest_rate_percent=self.annual_interest_rate_percent,
            term_months=self.term_months,
            monthly_income=self.monthly_income,
            monthly_expenses=self.monthly_expenses,
        )


class MetricsResponse(BaseModel):
    """Response for POST /v1/metrics"""

    monthly_payment: float
    debt_to_income_ratio: float
    monthly_net_savings: float
    savings_rate_percent: float
    risk_level: str
    projected_payoff_date: date
    total_interest_paid: float
    emergency_fund_target: float
    months_to_emergency_fund: Optional[int] = None

    @classmethod
    def from_metrics(cls, metrics: FinancialMetrics) -> "MetricsResponse":
        return cls(
            monthly_payment=metrics.monthly_payment,
            debt_to_income_ratio=metrics.debt_to_income_ratio,
            monthly_net_savings=metrics.monthly_net_savings,
            savings_rate_percent=metrics.savings_rate_percent,
            risk_level=metrics.risk_level.value,
            projected_payoff_date=metrics.projected_payoff_date,
            total_interest_paid=metrics.total_interest_paid,
            emergency_fund_target=metrics.emergency_fund_target,
            months_to_emergency_fund=metrics.months_to_emergency_fund,
        )


class PeerLoanSchema(BaseModel):
    """Single anonymised peer loan outcome"""

    loan_amount: float = Field(..., ge=0)
    defaulted: bool = False


class PredictionRequest(ProfileRequest):
    """Request body for POST /v1/predictions"""

    peer_loans: List[PeerLoanSchema] = Field(default_factory=list)

    def to_peer_loans(self) -> List[PeerLoan]:
        return [PeerLoan(loan_amount=peer.loan_amount, defaulted=peer.defaulted) for peer in self.peer_loans]


class PredictionResponse(BaseModel):
    """Response for POST /v1/predictions"""

    default_risk_percent: float
    estimated_repayment_years: float
    monthly_savings: float
    similar_loan_count: int

    @classmethod
    def from_prediction(cls, prediction: LoanPrediction) -> "PredictionResponse":
        return cls(
            default_risk_percent=prediction.default_risk_percent,
            estimated_repayment_years=prediction.estimated_repayment_years,
            monthly_savings=prediction.monthly_savings,
            similar_loan_count=prediction.similar_loan_count,
        )


class RecommendationRequest(ProfileRequest):
    """Request body for POST /v1/recommendations"""

    message: str = Field(..., min_length=1, description="Student's question for the advisor")
    country: str = ""
    university: str = ""


class RecommendationResponse(BaseModel):
    """Response for POST /v1/recommendations"""

    recommendations: List[str]
    metrics: MetricsResponse


class InvestmentAdviceRequest(BaseModel):
    """Request body for POST /v1/investment-advice"""

    savings: float = Field(..., ge=0, description="Amount available to invest in dollars")
    risk_tolerance: str = Field(..., min_length=1, description="e.g. low, medium, high")
    time_horizon: str = Field(..., min_length=1, description="e.g. 6 months, 5 years")


class InvestmentAdviceResponse(BaseModel):
    """Response for POST /v1/investment-advice"""

    advice: List[str]


class CostAnalysisRequest(BaseModel):
    """Request body for POST /v1/cost-analysis"""

    expenses: Dict[str, float] = Field(..., min_length=1, description="Monthly spend by category in dollars")
    location: str = Field(..., min_length=1, description="City or country the student lives in")


class CostAnalysisResponse(BaseModel):
    """Response for POST /v1/cost-analysis"""

    total_monthly_expenses: float
    analysis: List[str]
