"""
Triage Controllers (API Routes)
================================

FastAPI routes for ticket triage endpoints.

Controllers delegate to application services.
"""

import time

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from src.core import ClassificationException
from src.triage.application import (
    ClassificationService,
    ClassifyRequest,
    ClassificationResponse,
    ErrorResponse,
)
from src.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/triage", tags=["Ticket Triage"])


# ========== Example payloads for Swagger ==========

CLASSIFY_REQUEST_EXAMPLE = {
    "channel": "api",
    "severity": "high",
    "summary": "API timeout errors causing database connection failures",
    "ticket_id": "TICKET-001"
}

CLASSIFY_RESPONSE_EXAMPLE = {
    "decision": "technical_remediation",
    "reasoning": "Rule-based decision (no external assessment used): "
                 "Technical indicators suggest code-level intervention needed",
    "confidence": 0.71,
    "next_actions": [
        "Analyze error logs and stack traces",
        "Identify root cause in codebase",
        "Generate code patch or fix",
        "Run automated tests on fix",
        "Deploy to staging environment",
        "Monitor resolution progress closely"
    ],
    "metadata": {
        "model_version": "1.0.0",
        "rule_scores": {"technical": 0.7053, "operational": 0.0},
        "external_assessment_used": False,
        "indicators": {
            "technical": ["api", "timeout", "error", "database", "connection"],
            "operational": []
        },
        "processing_time_ms": 3,
        "timestamp": "2026-10-17T09:30:00Z"
    }
}

CLASSIFICATION_FAILED_BODY = {
    "error": "Internal server error",
    "message": "Failed to classify ticket"
}


# ========== Dependencies ==========

def get_classification_service(request: Request) -> ClassificationService:
    """Get classification service from app state."""
    service = getattr(request.app.state, "classification_service", None)
    if service is None:
        raise HTTPException(
            status_code=503,
            detail="Classification service not initialized"
        )
    return service


# ========== Route Handlers ==========

@router.post(
    "/classify",
    response_model=ClassificationResponse,
    summary="Route a ticket to technical remediation or an operational workflow",
    description="""
    Classify a banking support ticket into one of two remediation paths:
    - **technical_remediation**: code-level fix (API errors, bugs, system failures)
    - **operational_workflow**: workflow handling (account issues, guidance, process)

    The decision combines deterministic keyword/channel/severity rules with an
    optional LLM assessment (60% assessment, 40% rules). Without an assessment
    the rules decide alone.

    **Example Request**:
    ```json
    {
        "channel": "api",
        "severity": "high",
        "summary": "API timeout errors causing database connection failures"
    }
    ```
    """,
    responses={
        200: {
            "description": "Ticket classified successfully",
            "content": {
                "application/json": {
                    "example": CLASSIFY_RESPONSE_EXAMPLE
                }
            }
        },
        400: {"model": ErrorResponse, "description": "Invalid input"},
        500: {"model": ErrorResponse, "description": "Classification failed"}
    }
)
async def classify_ticket(
    request: Request,
    payload: ClassifyRequest,
    service: ClassificationService = Depends(get_classification_service)
):
    start_time = time.perf_counter()
    correlation_id = getattr(request.state, "correlation_id", "unknown")

    try:
        result = await service.classify(payload.to_domain())
    except ClassificationException as e:
        logger.error(
            "Classification failed",
            extra={"correlation_id": correlation_id, "error": e.message}
        )
        return JSONResponse(status_code=500, content=CLASSIFICATION_FAILED_BODY)

    total_time = int((time.perf_counter() - start_time) * 1000)

    logger.info(
        "Ticket classified successfully",
        extra={
            "correlation_id": correlation_id,
            "ticket_id": payload.ticket_id,
            "decision": result.decision,
            "confidence": result.confidence,
            "processing_time_ms": total_time
        }
    )

    return ClassificationResponse.from_domain(result, processing_time_ms=total_time)


# Export router for inclusion in main app
triage_router = router
