"""
Triage Infrastructure Layer
============================

Infrastructure implementations for ticket triage module.

Contains:
- External: LLM-backed external assessment adapter
"""

from src.triage.infrastructure.external import (
    LLMAssessmentAdapter,
    AssessmentPayload,
    create_assessment_adapter,
    parse_assessment,
    extract_json,
)

__all__ = [
    "LLMAssessmentAdapter",
    "AssessmentPayload",
    "create_assessment_adapter",
    "parse_assessment",
    "extract_json",
]
