"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from forecast_engine.api.middleware import RequestIDMiddleware, MetricsMiddleware
from forecast_engine.api.v1 import projection, simulation
from forecast_engine.infrastructure.observability.logging import setup_logging
from forecast_engine.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Forecast Engine",
        description="Obligation scheduling and cash-flow projection service",
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

    app.include_router(projection.router, prefix="/v1", tags=["projection"])
    app.include_router(simulation.router, prefix="/v1", tags=["simulation"])

    return app


app = create_app()
