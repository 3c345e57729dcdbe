"""POST /v1/predictions - peer-adjusted loan outlook endpoint"""

import logging
from fastapi import APIRouter, Request

from student_finance.api.v1.schemas import PredictionRequest, PredictionResponse
from student_finance.api.v1.financial_metrics import validation_http_error
from student_finance.api.dependencies import get_request_id
from student_finance.domain.predictions import generate_loan_prediction
from student_finance.domain.exceptions import InvalidProfileError, UndefinedRatioError

router = APIRouter()


@router.post("/predictions", response_model=PredictionResponse)
def create_prediction(request_body: PredictionRequest, request: Request):
    """
    Estimate default risk against similar peer loans.

    Returns:
        Default risk percentage (0-100), repayment time in years and spare monthly cash
    """
    request_id = get_request_id(request)

    try:
        prediction = generate_loan_prediction(request_body.to_profile(), request_body.to_peer_loans())
    except (InvalidProfileError, UndefinedRatioError) as e:
        raise validation_http_error(e, request_id)

    logging.info(
        "Prediction generated",
        extra={
            "request_id": request_id,
            "default_risk_percent": prediction.default_risk_percent,
            "similar_loan_count": prediction.similar_loan_count,
        },
    )

    return PredictionResponse.from_prediction(prediction)
