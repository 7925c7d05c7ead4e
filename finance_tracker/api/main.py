"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from finance_tracker.api.middleware import RequestIDMiddleware, MetricsMiddleware
from finance_tracker.api.v1 import (
    auth,
    categories,
    credit_cards,
    dashboard,
    expenses,
    fixed_expenses,
    goals,
    incomes,
    simulations,
)
from finance_tracker.infrastructure.observability.logging import setup_logging
from finance_tracker.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Finance Tracker",
        description="Personal finance management: expenses, incomes, credit cards, goals and investment simulations",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(auth.router, prefix="/v1", tags=["auth"])
    app.include_router(categories.router, prefix="/v1", tags=["categories"])
    app.include_router(expenses.router, prefix="/v1", tags=["expenses"])
    app.include_router(incomes.router, prefix="/v1", tags=["incomes"])
    app.include_router(fixed_expenses.router, prefix="/v1", tags=["fixed-expenses"])
    app.include_router(credit_cards.router, prefix="/v1", tags=["credit-cards"])
    app.include_router(goals.router, prefix="/v1", tags=["goals"])
    app.include_router(simulations.router, prefix="/v1", tags=["simulations"])
    app.include_router(dashboard.router, prefix="/v1", tags=["dashboard"])

    return app


app = create_app()
