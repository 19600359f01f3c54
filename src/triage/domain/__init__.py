"""
Triage Domain Layer
===================

Domain layer for ticket triage module.

Contains:
- Entities: Core business objects (Ticket, ExternalAssessment, ClassificationResult)
- Value Objects: Immutable objects (RuleProfile, RuleScores, FusionOutcome)
- Pure services: RuleScorer, ActionPlanner, FusionCalculator, AssessmentPromptBuilder

This layer is framework-agnostic and contains pure business logic.
"""

from src.triage.domain.entities import (
    Ticket,
    RuleProfile,
    RuleScores,
    ExternalAssessment,
    FusionOutcome,
    ClassificationResult,
    AssessmentPromptBuilder,
)
from src.triage.domain.rules import RuleScorer, DEFAULT_RULES, validate_rules
from src.triage.domain.actions import ActionPlanner, MIN_ACTIONS, MAX_ACTIONS
from src.triage.domain.fusion import FusionCalculator

__all__ = [
    "Ticket",
    "RuleProfile",
    "RuleScores",
    "ExternalAssessment",
    "FusionOutcome",
    "ClassificationResult",
    "AssessmentPromptBuilder",
    "RuleScorer",
    "DEFAULT_RULES",
    "validate_rules",
    "ActionPlanner",
    "MIN_ACTIONS",
    "MAX_ACTIONS",
    "FusionCalculator",
]
