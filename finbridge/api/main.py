"""FastAPI application factory"""

import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request
from starlette.responses import Response

from finbridge.api.middleware import RequestIDMiddleware, MetricsMiddleware
from finbridge.api.responses import error_response
from finbridge.api.v1 import alerts, health_score, personality
from finbridge.infrastructure.observability.logging import setup_logging
from finbridge.config import settings

# Setup structured logging
setup_logging(settings.log_level)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    messages = [
        f"{'.'.join(str(part) for part in err['loc'] if part != 'body')}: {err['msg']}"
        for err in exc.errors()
    ]
    return error_response(400, "; ".join(messages))


async def unhandled_exception_handler(request: Request, exc: Exception):
    logging.error(
        f"Unexpected error: {exc}",
        extra={"request_id": getattr(request.state, "request_id", "unknown"), "path": request.url.path},
    )
    return error_response(500, "Internal server error")


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="FinBridge API",
        description="Financial health scoring, personality profiling and smart alerts",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(health_score.router, prefix="/api/v1", tags=["financial-health"])
    app.include_router(personality.router, prefix="/api/v1", tags=["personality-profiler"])
    app.include_router(alerts.router, prefix="/api/v1", tags=["smart-alerts"])

    return app


app = create_app()
