"""Peer-adjusted loan outlook - default risk blended with similar-loan outcomes"""

from typing import List, Sequence

from student_finance.domain.models import FinancialProfile, LoanPrediction, PeerLoan
from student_finance.domain.metrics import compute_monthly_payment, validate_profile

# Peers whose principal is within this many dollars count as similar
SIMILAR_LOAN_WINDOW = 10_000

# Weights: risk points per unit of debt-to-income, and per unit of peer default rate
DEBT_TO_INCOME_WEIGHT = 20
PEER_DEFAULT_WEIGHT = 30


def find_similar_loans(loan_amount: float, peer_loans: Sequence[PeerLoan]) -> List[PeerLoan]:
    """Peers with a principal strictly within SIMILAR_LOAN_WINDOW of loan_amount"""
    return [peer for peer in peer_loans if abs(peer.loan_amount - loan_amount) < SIMILAR_LOAN_WINDOW]


def estimate_default_risk(profile: FinancialProfile, peer_loans: Sequence[PeerLoan]) -> float:
    """
    Default risk as a percentage from 0.0 to 100.0.

    Base risk is 20 points per unit of debt-to-income ratio. When similar peer
    loans exist, their default rate adds up to 30 points on top. The result is
    always clamped to [0, 100].
    """
    validate_profile(profile)

    debt_to_income_ratio = profile.loan_amount / (profile.monthly_income * 12)
    risk = debt_to_income_ratio * DEBT_TO_INCOME_WEIGHT

    similar_loans = find_similar_loans(profile.loan_amount, peer_loans)
    if similar_loans:
        default_rate = sum(1 for peer in similar_loans if peer.defaulted) / len(similar_loans)
        risk += default_rate * PEER_DEFAULT_WEIGHT

    return min(100.0, max(0.0, risk))


def generate_loan_prediction(profile: FinancialProfile, peer_loans: Sequence[PeerLoan]) -> LoanPrediction:
    """Build the dashboard outlook: default risk, years to repay and spare monthly cash"""
    validate_profile(profile)

    payment = compute_monthly_payment(
        profile.loan_amount,
        profile.annual_interest_rate_percent,
        profile.term_months,
    )
    monthly_savings = max(0.0, profile.monthly_income - profile.monthly_expenses - payment)

    return LoanPrediction(
        default_risk_percent=estimate_default_risk(profile, peer_loans),
        estimated_repayment_years=profile.term_months / 12,
        monthly_savings=monthly_savings,
        similar_loan_count=len(find_similar_loans(profile.loan_amount, peer_loans)),
    )
