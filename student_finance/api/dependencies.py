"""Dependency injection for FastAPI endpoints"""

from datetime import date
from fastapi import Request
from student_finance.infrastructure.clients.advisor import AdvisorClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_today() -> date:
    """Current date handed to the metrics engine; override in tests to pin projections"""
    return date.today()


def get_advisor_client() -> AdvisorClient:
    """Provide recommendation service client instance"""
    return AdvisorClient()
