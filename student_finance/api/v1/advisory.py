"""POST /v1/investment-advice and /v1/cost-analysis - advisor passthrough endpoints"""

import logging
from fastapi import APIRouter, Depends, Request

from student_finance.api.v1.schemas import (
    CostAnalysisRequest,
    CostAnalysisResponse,
    InvestmentAdviceRequest,
    InvestmentAdviceResponse,
)
from student_finance.api.v1.recommendations import advisor_http_error
from student_finance.api.dependencies import get_advisor_client, get_request_id
from student_finance.infrastructure.clients.advisor import AdvisorClient
from student_finance.domain.advice import parse_advice
from student_finance.domain.exceptions import AdvisorAPIError

router = APIRouter()


@router.post("/investment-advice", response_model=InvestmentAdviceResponse)
async def create_investment_advice(
    request_body: InvestmentAdviceRequest,
    request: Request,
    advisor_client: AdvisorClient = Depends(get_advisor_client),
):
    """Ask the advisor where a student's savings could go"""
    request_id = get_request_id(request)

    try:
        advice = await advisor_client.get_investment_advice(
            request_body.savings,
            request_body.risk_tolerance,
            request_body.time_horizon,
        )
    except AdvisorAPIError as e:
        raise advisor_http_error(e, request_id)

    logging.info("Investment advice generated", extra={"request_id": request_id})
    return InvestmentAdviceResponse(advice=parse_advice(advice))


@router.post("/cost-analysis", response_model=CostAnalysisResponse)
async def create_cost_analysis(
    request_body: CostAnalysisRequest,
    request: Request,
    advisor_client: AdvisorClient = Depends(get_advisor_client),
):
    """
    Ask the advisor how to trim monthly expenses.

    Returns the summed monthly spend alongside the advisor's suggestions.
    """
    request_id = get_request_id(request)

    try:
        analysis = await advisor_client.get_cost_analysis(request_body.expenses, request_body.location)
    except AdvisorAPIError as e:
        raise advisor_http_error(e, request_id)

    logging.info(
        "Cost analysis generated",
        extra={"request_id": request_id, "expense_categories": len(request_body.expenses)},
    )
    return CostAnalysisResponse(
        total_monthly_expenses=sum(request_body.expenses.values()),
        analysis=parse_advice(analysis),
    )
