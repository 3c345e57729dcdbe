"""Financial metrics engine - loan amortization, risk bucketing and projections"""

import math
from datetime import date

from student_finance.domain.models import (
    FinancialMetrics,
    FinancialProfile,
    Projections,
    RiskLevel,
    RiskMetrics,
)
from student_finance.domain.exceptions import InvalidProfileError, UndefinedRatioError
from student_finance.utils.date_utils import add_months

# Risk policy: debt-to-income thresholds, compared strictly (boundary goes to the lower bucket)
HIGH_RISK_THRESHOLD = 0.43
MEDIUM_RISK_THRESHOLD = 0.36

# Emergency fund goal in months of expenses
EMERGENCY_FUND_MONTHS = 6

# Longest accepted repayment term (1000 years)
MAX_TERM_MONTHS = 12_000

# Relative float noise absorbed before ceil, e.g. 1000 / (1000 / 3) = 3.0000000000000004
_CEIL_RELATIVE_TOLERANCE = 1e-12


def _ceil_months(value: float) -> int:
    if not math.isfinite(value):
        raise InvalidProfileError("month count is not representable for this profile")
    return max(math.ceil(value - abs(value) * _CEIL_RELATIVE_TOLERANCE), 0)


def _require_amount(name: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidProfileError(f"{name} must be a number")
    try:
        as_float = float(value)
    except OverflowError:
        raise InvalidProfileError(f"{name} must be finite")
    if not math.isfinite(as_float):
        raise InvalidProfileError(f"{name} must be finite")
    if value < 0:
        raise InvalidProfileError(f"{name} must be non-negative")


def _require_term(term_months: int) -> None:
    if isinstance(term_months, bool) or not isinstance(term_months, (int, float)):
        raise InvalidProfileError("term_months must be a whole number of months")
    if isinstance(term_months, float) and not term_months.is_integer():
        raise InvalidProfileError("term_months must be a whole number of months")
    if term_months <= 0:
        raise InvalidProfileError("term_months must be positive")
    if term_months > MAX_TERM_MONTHS:
        raise InvalidProfileError(f"term_months must be at most {MAX_TERM_MONTHS}")


def validate_profile(profile: FinancialProfile) -> None:
    """
    Reject profiles outside the computable domain.

    Raises:
        InvalidProfileError: negative or non-finite amounts/rate, or a non-positive term
        UndefinedRatioError: zero monthly income
    """
    _require_amount("loan_amount", profile.loan_amount)
    _require_amount("annual_interest_rate_percent", profile.annual_interest_rate_percent)
    _require_term(profile.term_months)
    _require_amount("monthly_income", profile.monthly_income)
    _require_amount("monthly_expenses", profile.monthly_expenses)

    if profile.monthly_income == 0:
        raise UndefinedRatioError("monthly_income is zero; debt-to-income and savings rate are undefined")


def compute_monthly_payment(principal: float, annual_rate_percent: float, term_months: int) -> float:
    """
    Fixed monthly payment that repays principal plus interest over term_months.

    Standard amortization: P * r * (1+r)^n / ((1+r)^n - 1), with r the monthly rate.
    Evaluated as P * r / (1 - (1+r)^-n), which is the same quantity without
    overflowing for long terms or high rates.

    Edge cases:
    - principal == 0: payment is 0 for any rate/term
    - rate == 0: payment is principal / term_months (the formula is 0/0 there)
    """
    _require_amount("principal", principal)
    _require_amount("annual_rate_percent", annual_rate_percent)
    _require_term(term_months)

    if principal == 0:
        return 0.0

    monthly_rate = annual_rate_percent / 100 / 12
    if monthly_rate == 0:
        return principal / term_months

    denominator = 1 - (1 + monthly_rate) ** (-term_months)
    if denominator == 0:
        # Rate too small to register in (1+r)^-n; the zero-rate limit applies
        return principal / term_months

    payment = principal * monthly_rate / denominator
    if not math.isfinite(payment):
        raise InvalidProfileError("monthly payment is not representable for this principal and rate")
    return payment


def classify_risk(debt_to_income_ratio: float) -> RiskLevel:
    """
    Map debt-to-income ratio to a risk bucket.

    - ratio > 0.43:         High
    - 0.36 < ratio <= 0.43: Medium
    - ratio <= 0.36:        Low
    """
    if debt_to_income_ratio > HIGH_RISK_THRESHOLD:
        return RiskLevel.HIGH
    elif debt_to_income_ratio > MEDIUM_RISK_THRESHOLD:
        return RiskLevel.MEDIUM
    else:
        return RiskLevel.LOW


def compute_risk_metrics(profile: FinancialProfile, payment: float) -> RiskMetrics:
    """
    Income-based ratios for a profile given its monthly payment.

    Raises:
        UndefinedRatioError: monthly income is zero
    """
    if profile.monthly_income == 0:
        raise UndefinedRatioError("monthly_income is zero; debt-to-income and savings rate are undefined")

    debt_to_income_ratio = profile.loan_amount / (profile.monthly_income * 12)
    disposable_income = profile.monthly_income - profile.monthly_expenses

    return RiskMetrics(
        debt_to_income_ratio=debt_to_income_ratio,
        risk_level=classify_risk(debt_to_income_ratio),
        savings_rate_percent=disposable_income / profile.monthly_income * 100,
        monthly_net_savings=disposable_income - payment,
    )


def compute_projections(profile: FinancialProfile, payment: float, today: date) -> Projections:
    """
    Payoff date, lifetime interest and emergency fund horizon.

    ``today`` is supplied by the caller; nothing here reads the system clock.
    months_to_emergency_fund is None when net savings are zero or negative.
    """
    months_to_payoff = _ceil_months(profile.loan_amount / payment) if payment > 0 else 0

    emergency_fund_target = profile.monthly_expenses * EMERGENCY_FUND_MONTHS
    monthly_net_savings = profile.monthly_income - profile.monthly_expenses - payment
    months_to_emergency_fund = (
        _ceil_months(emergency_fund_target / monthly_net_savings)
        if monthly_net_savings > 0
        else None
    )

    try:
        projected_payoff_date = add_months(today, months_to_payoff)
    except (ValueError, OverflowError) as e:
        raise InvalidProfileError(f"projected payoff date is outside the supported calendar: {e}") from e

    return Projections(
        projected_payoff_date=projected_payoff_date,
        total_interest_paid=payment * profile.term_months - profile.loan_amount,
        emergency_fund_target=emergency_fund_target,
        months_to_emergency_fund=months_to_emergency_fund,
    )


def compute_financial_metrics(profile: FinancialProfile, today: date) -> FinancialMetrics:
    """
    Main entry point: validate the profile and derive every metric.

    Validation runs before any computation, so failures never yield partial results.
    """
    validate_profile(profile)

    payment = compute_monthly_payment(
        profile.loan_amount,
        profile.annual_interest_rate_percent,
        profile.term_months,
    )
    risk = compute_risk_metrics(profile, payment)
    projections = compute_projections(profile, payment, today)

    return FinancialMetrics(
        monthly_payment=payment,
        debt_to_income_ratio=risk.debt_to_income_ratio,
        monthly_net_savings=risk.monthly_net_savings,
        savings_rate_percent=risk.savings_rate_percent,
        risk_level=risk.risk_level,
        projected_payoff_date=projections.projected_payoff_date,
        total_interest_paid=projections.total_interest_paid,
        emergency_fund_target=projections.emergency_fund_target,
        months_to_emergency_fund=projections.months_to_emergency_fund,
    )
