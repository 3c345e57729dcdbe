"""POST /v1/recommendations - advisor recommendations with computed metrics"""

import time
import logging
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Request

from student_finance.api.v1.schemas import RecommendationRequest, RecommendationResponse, MetricsResponse
from student_finance.api.v1.financial_metrics import validation_http_error
from student_finance.api.dependencies import get_advisor_client, get_request_id, get_today
from student_finance.infrastructure.clients.advisor import AdvisorClient
from student_finance.domain.metrics import compute_financial_metrics
from student_finance.domain.advice import parse_advice
from student_finance.domain.exceptions import AdvisorAPIError, InvalidProfileError, UndefinedRatioError
from student_finance.infrastructure.observability.metrics import advisor_failure_counter, record_computation
from student_finance.infrastructure.observability.logging import log_metrics_computed

router = APIRouter()


def advisor_http_error(error: AdvisorAPIError, request_id: str) -> HTTPException:
    """Count, log and convert an upstream advisor failure into a 503 response"""
    advisor_failure_counter.inc()
    logging.error(f"Advisor API error: {error}", extra={"request_id": request_id})
    return HTTPException(status_code=503, detail="Recommendation service unavailable")


@router.post("/recommendations", response_model=RecommendationResponse)
async def create_recommendations(
    request_body: RecommendationRequest,
    request: Request,
    today: date = Depends(get_today),
    advisor_client: AdvisorClient = Depends(get_advisor_client),
):
    """
    Combine advisor recommendations with the student's financial metrics.

    Flow:
    1. Validate the profile and compute metrics (no outbound call on bad input)
    2. Ask the recommendation service for advice
    3. Split the advice text into recommendation lines
    """
    start_time = time.time()
    request_id = get_request_id(request)
    profile = request_body.to_profile()

    try:
        metrics = compute_financial_metrics(profile, today)
    except (InvalidProfileError, UndefinedRatioError) as e:
        raise validation_http_error(e, request_id)

    try:
        advice = await advisor_client.get_advice(
            profile,
            request_body.message,
            country=request_body.country,
            university=request_body.university,
        )
    except AdvisorAPIError as e:
        raise advisor_http_error(e, request_id)

    duration_ms = (time.time() - start_time) * 1000
    record_computation(metrics.risk_level.value)
    log_metrics_computed(request_id, "recommendations", metrics.risk_level.value, duration_ms)

    return RecommendationResponse(
        recommendations=parse_advice(advice),
        metrics=MetricsResponse.from_metrics(metrics),
    )
