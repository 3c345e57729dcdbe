"""Domain models - pure Python dataclasses representing financial entities"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional


class RiskLevel(str, Enum):
    """Coarse debt-to-income risk bucket"""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


@dataclass(frozen=True)
class FinancialProfile:
    """User-supplied loan and budget figures (monthly amounts in dollars)"""

    loan_amount: float
    annual_interest_rate_percent: float  # 5.5 means 5.5% per year
    term_months: int
    monthly_income: float
    monthly_expenses: float


@dataclass(frozen=True)
class RiskMetrics:
    """Income-based ratios and the risk bucket derived from them"""

    debt_to_income_ratio: float
    risk_level: RiskLevel
    savings_rate_percent: float
    monthly_net_savings: float  # negative means a monthly shortfall


@dataclass(frozen=True)
class Projections:
    """Forward-looking dates and savings goals"""

    projected_payoff_date: date
    total_interest_paid: float
    emergency_fund_target: float
    months_to_emergency_fund: Optional[int]  # None when savings never reach the target


@dataclass(frozen=True)
class FinancialMetrics:
    """Output of the metrics engine"""

    monthly_payment: float
    debt_to_income_ratio: float
    monthly_net_savings: float
    savings_rate_percent: float
    risk_level: RiskLevel
    projected_payoff_date: date
    total_interest_paid: float
    emergency_fund_target: float
    months_to_emergency_fund: Optional[int]


@dataclass(frozen=True)
class PeerLoan:
    """Anonymised loan outcome used for peer comparison"""

    loan_amount: float
    defaulted: bool


@dataclass(frozen=True)
class LoanPrediction:
    """Peer-adjusted outlook for a single profile"""

    default_risk_percent: float
    estimated_repayment_years: float
    monthly_savings: float
    similar_loan_count: int
