"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from claims_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from claims_gateway.api.v1 import claims, companies, timeline
from claims_gateway.infrastructure.observability.logging import setup_logging
from claims_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Claims Gateway",
        description="UK small-claims debt recovery: interest, fees, viability and workflow",
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
    app.include_router(claims.router, prefix="/v1", tags=["claims"])
    app.include_router(timeline.router, prefix="/v1", tags=["timeline"])
    app.include_router(companies.router, prefix="/v1", tags=["companies"])

    return app


app = create_app()
