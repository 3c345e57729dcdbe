"""POST /v1/metrics - loan amortization and risk metrics endpoint"""

import time
import logging
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Request

from student_finance.api.v1.schemas import ProfileRequest, MetricsResponse
from student_finance.api.dependencies import get_request_id, get_today
from student_finance.domain.metrics import compute_financial_metrics
from student_finance.domain.exceptions import InvalidProfileError, UndefinedRatioError
from student_finance.infrastructure.observability.metrics import record_computation, record_validation_failure
from student_finance.infrastructure.observability.logging import log_metrics_computed

router = APIRouter()


def validation_http_error(error: InvalidProfileError | UndefinedRatioError, request_id: str) -> HTTPException:
    """Count, log and convert a rejected profile into a 422 response"""
    record_validation_failure(error.code)
    logging.warning(f"Profile rejected: {error}", extra={"request_id": request_id, "kind": error.code})
    return HTTPException(status_code=422, detail={"error": error.code, "message": str(error)})


@router.post("/metrics", response_model=MetricsResponse)
def create_metrics(
    request_body: ProfileRequest,
    request: Request,
    today: date = Depends(get_today),
):
    """
    Compute financial metrics for a student's loan and budget.

    Returns monthly payment, debt-to-income ratio, risk level, savings figures,
    projected payoff date and emergency fund horizon.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        metrics = compute_financial_metrics(request_body.to_profile(), today)
    except (InvalidProfileError, UndefinedRatioError) as e:
        raise validation_http_error(e, request_id)

    duration_ms = (time.time() - start_time) * 1000
    record_computation(metrics.risk_level.value)
    log_metrics_computed(request_id, "metrics", metrics.risk_level.value, duration_ms)

    return MetricsResponse.from_metrics(metrics)
