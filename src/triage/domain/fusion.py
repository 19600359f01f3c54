"""
Triage Score Fusion
===================

Combines rule scores with the optional external assessment into one decision.
"""

from typing import Optional

from src.config import DecisionCategory
from src.triage.domain.entities import RuleScores, ExternalAssessment, FusionOutcome


EXTERNAL_WEIGHT = 0.6
RULE_WEIGHT = 0.4
CONFIDENCE_FLOOR = 0.5

TECHNICAL_REASONING_PREFIX = "Technical issue detected"
OPERATIONAL_REASONING_PREFIX = "Operational issue requiring workflow"
RULE_ONLY_PREFIX = "Rule-based decision (no external assessment used)"
RULE_ONLY_TECHNICAL = "Technical indicators suggest code-level intervention needed"
RULE_ONLY_OPERATIONAL = "Operational indicators suggest workflow-based resolution"


class FusionCalculator:
    """
    Pure fusion arithmetic.

    No I/O - callers supply the rule scores and the assessment (or None).
    Ties always go to the operational workflow: technical remediation only
    wins on a strictly greater score.
    """

    @staticmethod
    def fuse(
        rule_scores: RuleScores,
        assessment: Optional[ExternalAssessment] = None
    ) -> FusionOutcome:
        if assessment is None:
            return FusionCalculator._rules_only(rule_scores)

        technical = (
            EXTERNAL_WEIGHT * assessment.score_for(DecisionCategory.TECHNICAL_REMEDIATION)
            + RULE_WEIGHT * rule_scores.technical
        )
        operational = (
            EXTERNAL_WEIGHT * assessment.score_for(DecisionCategory.OPERATIONAL_WORKFLOW)
            + RULE_WEIGHT * rule_scores.operational
        )

        if technical > operational:
            return FusionOutcome(
                category=DecisionCategory.TECHNICAL_REMEDIATION,
                score=technical,
                reasoning=f"{TECHNICAL_REASONING_PREFIX}: {assessment.rationale}",
                external_assessment_used=True,
            )
        return FusionOutcome(
            category=DecisionCategory.OPERATIONAL_WORKFLOW,
            score=operational,
            reasoning=f"{OPERATIONAL_REASONING_PREFIX}: {assessment.rationale}",
            external_assessment_used=True,
        )

    @staticmethod
    def _rules_only(rule_scores: RuleScores) -> FusionOutcome:
        if rule_scores.technical > rule_scores.operational:
            return FusionOutcome(
                category=DecisionCategory.TECHNICAL_REMEDIATION,
                score=rule_scores.technical,
                reasoning=f"{RULE_ONLY_PREFIX}: {RULE_ONLY_TECHNICAL}",
                external_assessment_used=False,
            )
        return FusionOutcome(
            category=DecisionCategory.OPERATIONAL_WORKFLOW,
            score=rule_scores.operational,
            reasoning=f"{RULE_ONLY_PREFIX}: {RULE_ONLY_OPERATIONAL}",
            external_assessment_used=False,
        )

    @staticmethod
    def final_confidence(score: float) -> float:
        """Apply the 0.5 floor and round to two decimals."""
        return round(max(score, CONFIDENCE_FLOOR), 2)
