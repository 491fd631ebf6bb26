"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from copilot_engine.api.middleware import RequestIDMiddleware, MetricsMiddleware
from copilot_engine.api.v1 import consolidation, payoff, rent_vs_buy, ratios
from copilot_engine.infrastructure.observability.logging import setup_logging
from copilot_engine.config import settings

API_PREFIX = "/v1"

CALCULATOR_ROUTERS = (
    (consolidation.router, "debt-consolidation"),
    (payoff.router, "debt-payoff"),
    (rent_vs_buy.router, "rent-vs-buy"),
    (ratios.router, "financial-ratios"),
)


def create_app() -> FastAPI:
    """Build the calculator service with JSON logging, tracing and metrics wired in"""
    setup_logging(settings.log_level)

    app = FastAPI(
        title="Financial Copilot Engine",
        description="Debt consolidation, debt payoff and rent vs buy calculators",
        version="0.1.0",
        docs_url="/docs" if settings.docs_enabled else None,
        redoc_url="/redoc" if settings.docs_enabled else None,
    )

    # RequestIDMiddleware wraps MetricsMiddleware so the id is set before timing starts
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    for router, tag in CALCULATOR_ROUTERS:
        app.include_router(router, prefix=API_PREFIX, tags=[tag])

    return app


app = create_app()
