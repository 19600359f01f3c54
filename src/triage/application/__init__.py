"""
Triage Application Layer
=========================

Application layer for ticket triage module.

Contains:
- Services: Classification orchestration and the assessment provider interface
- DTOs: Data transfer objects for API serialization
"""

from src.triage.application.dto import (
    ClassifyRequest,
    ClassificationResponse,
    ClassificationMetadata,
    RuleScoresInfo,
    ErrorResponse,
    HealthResponse,
)
from src.triage.application.services import (
    ClassificationService,
    IAssessmentProvider,
    NoAssessmentProvider,
)

__all__ = [
    # DTOs
    "ClassifyRequest",
    "ClassificationResponse",
    "ClassificationMetadata",
    "RuleScoresInfo",
    "ErrorResponse",
    "HealthResponse",
    # Services
    "ClassificationService",
    # Provider Interfaces
    "IAssessmentProvider",
    "NoAssessmentProvider",
]
