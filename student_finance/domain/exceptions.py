"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    code = "domain_error"


class InvalidProfileError(DomainException):
    """Profile field is negative, non-finite, or the term is not a positive whole number"""

    code = "invalid_profile"


class UndefinedRatioError(DomainException):
    """Monthly income is zero, so income-based ratios are undefined"""

    code = "undefined_ratio"


class AdvisorAPIError(DomainException):
    """Recommendation service returned an error or is unavailable"""

    code = "advisor_unavailable"
