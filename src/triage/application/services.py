"""
Triage Application Services
============================

Application services for ticket classification.

Orchestrates the rule scorer, the external assessment provider, the fusion
arithmetic and the action planner into a single classification call.
"""

from typing import Optional, Mapping
from abc import ABC, abstractmethod

from src.config import settings, DecisionCategory
from src.core import ClassificationException
from src.shared.infrastructure.logging import get_logger, log_latency
from src.triage.domain import (
    Ticket, ExternalAssessment, ClassificationResult, RuleProfile,
    RuleScorer, ActionPlanner, FusionCalculator, DEFAULT_RULES,
    MIN_ACTIONS, MAX_ACTIONS
)

logger = get_logger(__name__)


# ========== Provider Interfaces ==========

class IAssessmentProvider(ABC):
    """Interface for the optional external ticket assessment."""

    @abstractmethod
    async def assess(self, ticket: Ticket) -> Optional[ExternalAssessment]:
        """
        Return an assessment, or None when none is available.

        Implementations must not raise for unavailable or failing services.
        """


class NoAssessmentProvider(IAssessmentProvider):
    """Provider that never has an assessment (rule-only classification)."""

    async def assess(self, ticket: Ticket) -> Optional[ExternalAssessment]:
        return None


# ========== Application Services ==========

class ClassificationService:
    """
    Service for hybrid ticket classification.

    Rule scores are always computed; the external assessment refines them
    when present. Failures of the deterministic steps are raised as
    ClassificationException, assessment failures never are.
    """

    def __init__(
        self,
        assessment_provider: Optional[IAssessmentProvider] = None,
        rules: Mapping[str, RuleProfile] = DEFAULT_RULES,
        model_version: Optional[str] = None
    ):
        self._assessor = assessment_provider or NoAssessmentProvider()
        self._scorer = RuleScorer(rules)
        self._model_version = model_version or settings.model_version

    async def classify(self, ticket: Ticket) -> ClassificationResult:
        """
        Classify a ticket as technical remediation or operational workflow.

        Args:
            ticket: Validated, normalized ticket

        Returns:
            ClassificationResult with decision, confidence and next actions

        Raises:
            ClassificationException: If scoring, fusion or planning fails
        """
        logger.info(
            "Starting ticket classification",
            extra={"channel": ticket.channel, "severity": ticket.severity}
        )

        try:
            rule_scores = self._scorer.score_all(ticket)
            logger.debug("Rule-based scores calculated", extra=rule_scores.to_dict())

            assessment = await self._assess(ticket)

            outcome = FusionCalculator.fuse(rule_scores, assessment)
            confidence = FusionCalculator.final_confidence(outcome.score)

            next_actions = ActionPlanner.plan(outcome.category, ticket)
            if not MIN_ACTIONS <= len(next_actions) <= MAX_ACTIONS:
                raise ValueError(
                    f"action plan has {len(next_actions)} steps, "
                    f"expected {MIN_ACTIONS}-{MAX_ACTIONS}"
                )

            result = ClassificationResult(
                decision=outcome.category,
                reasoning=outcome.reasoning,
                confidence=confidence,
                next_actions=next_actions,
                rule_scores=rule_scores,
                external_assessment_used=outcome.external_assessment_used,
                model_version=self._model_version,
                indicators=self._indicators(ticket, assessment),
            )

        except ClassificationException:
            raise
        except Exception as e:
            logger.error("Classification failed", extra={"error": str(e)})
            raise ClassificationException(str(e), {"error_type": type(e).__name__})

        logger.info(
            "Classification completed",
            extra={"decision": result.decision, "confidence": result.confidence}
        )
        return result

    def _indicators(
        self,
        ticket: Ticket,
        assessment: Optional[ExternalAssessment]
    ) -> dict:
        """Indicators reported by the assessment, else the matched rule keywords."""
        if assessment is not None:
            return {
                "technical": list(assessment.technical_indicators),
                "operational": list(assessment.operational_indicators),
            }
        return {
            "technical": self._scorer.matched_keywords(
                ticket, DecisionCategory.TECHNICAL_REMEDIATION
            ),
            "operational": self._scorer.matched_keywords(
                ticket, DecisionCategory.OPERATIONAL_WORKFLOW
            ),
        }

    async def _assess(self, ticket: Ticket) -> Optional[ExternalAssessment]:
        """Ask the provider for an assessment; any provider failure means none."""
        try:
            with log_latency(logger, "external_assessment"):
                assessment = await self._assessor.assess(ticket)
        except Exception as e:
            logger.warning(
                "Assessment provider failed, using rule-based scores only",
                extra={"error": str(e), "error_type": type(e).__name__}
            )
            return None

        if assessment is None:
            logger.info("No external assessment, using rule-based scores only")
        else:
            logger.info(
                "External assessment received",
                extra={"recommendation": assessment.recommended_category}
            )
        return assessment
