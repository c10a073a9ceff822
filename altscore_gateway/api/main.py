"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from altscore_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from altscore_gateway.api.v1 import score, history, eligible
from altscore_gateway.infrastructure.observability.logging import setup_logging
from altscore_gateway.config import settings

setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="AltScore Gateway",
        description="Alternative credit scoring for small-business accounts",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Last added runs first
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(score.router, prefix="/v1", tags=["scores"])
    app.include_router(history.router, prefix="/v1", tags=["history"])
    app.include_router(eligible.router, prefix="/v1", tags=["eligibility"])

    return app


app = create_app()
