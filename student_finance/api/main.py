"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from student_finance.api.middleware import RequestIDMiddleware, MetricsMiddleware
from student_finance.api.v1 import advisory, financial_metrics, predictions, recommendations
from student_finance.infrastructure.observability.logging import setup_logging
from student_finance.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Student Finance Gateway",
        description="Loan amortization, risk metrics and advisor recommendations for students",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(financial_metrics.router, prefix="/v1", tags=["metrics"])
    app.include_router(predictions.router, prefix="/v1", tags=["predictions"])
    app.include_router(recommendations.router, prefix="/v1", tags=["recommendations"])
    app.include_router(advisory.router, prefix="/v1", tags=["advisory"])

    return app


app = create_app()
