"""
Remediation Router - Main Application
=====================================

Banking support ticket classifier.

Routes each ticket to one of two remediation paths:
- technical_remediation: code-level fix
- operational_workflow: workflow / process handling

Clean Architecture Layers:
- Interfaces: FastAPI controllers
- Application: Classification service and DTOs
- Domain: Rule scoring, fusion, action planning
- Infrastructure: LLM client and external assessment adapter
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

# Configuration
from src.config import settings

# Triage module
from src.triage.application import ClassificationService, HealthResponse
from src.triage.infrastructure import create_assessment_adapter
from src.triage.interfaces import triage_router

# Logging and middleware
from src.shared.infrastructure.logging import setup_logging, get_logger
from src.shared.api.middleware import (
    CorrelationIDMiddleware,
    LoggingMiddleware,
    validation_exception_handler,
    not_found_handler,
    global_exception_handler
)

logger = get_logger(__name__)


def build_classification_service() -> ClassificationService:
    """Wire the classification service from settings."""
    adapter = create_assessment_adapter(settings)
    if not adapter.is_configured:
        logger.warning("External assessment not configured - classifying with rules only")
    return ClassificationService(adapter, model_version=settings.model_version)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager.

    STARTUP:
    1. Setup structured logging
    2. Build the classification service (LLM adapter optional)
    """
    setup_logging(settings.log_level, settings.environment)
    logger.info("Starting remediation router", extra={
        "version": settings.app_version,
        "environment": settings.environment,
        "external_assessment": settings.external_assessment_enabled
    })

    app.state.classification_service = build_classification_service()

    logger.info(f"{settings.app_name} running on port {settings.port}")

    yield  # Application runs here

    logger.info("Remediation router shutdown complete")


# Create FastAPI application
app = FastAPI(
    title="Remediation Router API",
    description="""
    ## Banking Support Ticket Classifier

    Decides whether a support ticket needs a **code-level fix**
    (`technical_remediation`) or an **operational workflow**
    (`operational_workflow`), with a confidence score, reasoning and a
    next-actions checklist.

    **Endpoints:**
    - `POST /triage/classify` - Classify a ticket
    - `GET /health` - Service health
    """,
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# === CORS Middleware ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# === Custom Middleware (from shared) ===
app.add_middleware(LoggingMiddleware)
app.add_middleware(CorrelationIDMiddleware)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, not_found_handler)
app.add_exception_handler(Exception, global_exception_handler)

# === Include Module Routers ===
app.include_router(triage_router)


# === Health Check Endpoint ===

@app.get("/health", tags=["Health"], response_model=HealthResponse)
async def health_check(request: Request):
    """
    Health check endpoint for load balancers and orchestrators.

    Reports whether the external assessment is wired in; the service is
    healthy either way since it degrades to rule-only classification.
    """
    service = getattr(request.app.state, "classification_service", None)
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=settings.app_version,
        checks={
            "classification_service": "ready" if service else "initializing",
            "external_assessment": (
                "available" if settings.external_assessment_enabled else "not_configured"
            )
        }
    )


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "health": "/health",
        "endpoints": [
            "POST /triage/classify - Classify ticket"
        ]
    }


# === Development Entry Point ===

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "development",
        log_level="info"
    )
