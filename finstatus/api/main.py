"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from finstatus.api.middleware import MetricsMiddleware, RequestIDMiddleware
from finstatus.api.v1 import preferences, schedule, status
from finstatus.config import settings
from finstatus.infrastructure.observability.logging import setup_logging

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Finstatus Gateway",
        description="Payment status and due-date schedule service for credits, mortgages and subscriptions",
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

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(status.router, prefix="/v1", tags=["status"])
    app.include_router(preferences.router, prefix="/v1", tags=["settings"])
    app.include_router(schedule.router, prefix="/v1", tags=["schedule"])

    return app


app = create_app()
