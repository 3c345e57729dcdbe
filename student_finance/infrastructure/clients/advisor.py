"""Recommendation service HTTP client for AI-generated financial advice"""

import httpx
from typing import Any, Callable, Dict
from student_finance.domain.models import FinancialProfile
from student_finance.domain.exceptions import AdvisorAPIError
from student_finance.infrastructure.observability.metrics import advisor_latency_histogram
from student_finance.config import settings


class AdvisorClient:
    """Client for the external recommendation service"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.advisor_api_base
        self.timeout = settings.http_timeout_seconds if timeout is None else timeout
        self.transport = transport

    async def _post(self, path: str, payload: Dict[str, Any], extract: Callable[[Any], Any]) -> str:
        """
        POST a payload and pull the advice text out of the JSON reply.

        Raises:
            AdvisorAPIError: On timeout, HTTP errors, or invalid response
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                with advisor_latency_histogram.time():
                    response = await client.post(f"{self.base_url}{path}", json=payload)
                response.raise_for_status()

                text = extract(response.json())
                if not isinstance(text, str):
                    raise TypeError(f"advice is {type(text).__name__}, expected str")
                return text

            except httpx.TimeoutException as e:
                raise AdvisorAPIError(f"Advisor API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise AdvisorAPIError(f"Advisor API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise AdvisorAPIError(f"Advisor API unreachable: {e}") from e
            except (KeyError, ValueError, TypeError) as e:
                raise AdvisorAPIError(f"Invalid advice payload from advisor: {e}") from e

    async def get_advice(
        self,
        profile: FinancialProfile,
        question: str,
        country: str = "",
        university: str = "",
    ) -> str:
        """
        Ask the recommendation service about a student's situation.

        Returns:
            Raw advice text as produced by the service
        """
        payload = {
            "prompt": question,
            "userData": {
                "loanAmount": profile.loan_amount,
                "monthlyIncome": profile.monthly_income,
                "monthlyExpenses": profile.monthly_expenses,
                "country": country,
                "university": university,
                "userMessage": question,
            },
        }
        return await self._post(
            "/api/recommendations",
            payload,
            lambda data: data["data"]["recommendations"]["advice"],
        )

    async def get_investment_advice(self, savings: float, risk_tolerance: str, time_horizon: str) -> str:
        """Investment suggestions for a savings amount, risk appetite and horizon"""
        payload = {"savings": savings, "riskTolerance": risk_tolerance, "timeHorizon": time_horizon}
        return await self._post("/api/investment-advice", payload, lambda data: data["advice"])

    async def get_cost_analysis(self, expenses: Dict[str, float], location: str) -> str:
        """Optimisation ideas for monthly expenses in a given location"""
        payload = {"expenses": expenses, "location": location}
        return await self._post("/api/cost-analysis", payload, lambda data: data["analysis"])
