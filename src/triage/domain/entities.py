"""
Triage Domain Entities
======================

Domain entities for the ticket triage module.

Contains pure Python business objects for routing a banking support
ticket to technical remediation or an operational workflow.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple, Dict, Any, List

from src.config import DECISION_CATEGORIES


@dataclass(frozen=True)
class Ticket:
    """
    Support ticket as seen by the classifier.

    Channel and severity arrive already normalized by the API layer.
    The optional metadata is carried through untouched.
    """
    channel: str
    severity: str
    summary: str
    ticket_id: Optional[str] = None
    customer_id: Optional[str] = None
    timestamp: Optional[datetime] = None
    tags: Tuple[str, ...] = ()
    priority: Optional[str] = None


@dataclass(frozen=True)
class RuleProfile:
    """
    Static matching rules for one decision category.

    All three sets are immutable so a profile can be shared by
    concurrent classifications.
    """
    keywords: Tuple[str, ...]
    channels: frozenset
    severities: frozenset


@dataclass(frozen=True)
class RuleScores:
    """Rule-based suitability of a ticket for each category."""
    technical: float
    operational: float

    def to_dict(self) -> Dict[str, float]:
        return {"technical": self.technical, "operational": self.operational}


@dataclass(frozen=True)
class ExternalAssessment:
    """
    Recommendation obtained from the external language model.

    Only ever constructed from a fully valid payload.
    """
    recommended_category: str
    confidence: float  # 0.0 to 1.0
    rationale: str
    technical_indicators: Tuple[str, ...] = ()
    operational_indicators: Tuple[str, ...] = ()

    def __post_init__(self):
        """Validate assessment."""
        if self.recommended_category not in DECISION_CATEGORIES:
            raise ValueError(f"Unknown category: {self.recommended_category}")
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError("Confidence must be between 0 and 1")

    def score_for(self, category: str) -> float:
        """Confidence for the recommended category, its complement otherwise."""
        if category == self.recommended_category:
            return self.confidence
        return 1.0 - self.confidence


@dataclass(frozen=True)
class FusionOutcome:
    """Winner of the score fusion, before the confidence floor is applied."""
    category: str
    score: float
    reasoning: str
    external_assessment_used: bool


@dataclass
class ClassificationResult:
    """
    Result of ticket classification.

    Contains the decision, its confidence and the checklist to act on it.
    """
    decision: str
    reasoning: str
    confidence: float  # 0.5 to 1.0
    next_actions: List[str]
    rule_scores: RuleScores
    external_assessment_used: bool
    model_version: str
    indicators: Dict[str, List[str]] = field(default_factory=dict)

    def __post_init__(self):
        """Validate classification result."""
        if self.decision not in DECISION_CATEGORIES:
            raise ValueError(f"Unknown decision: {self.decision}")
        if not 0.5 <= self.confidence <= 1.0:
            raise ValueError("Confidence must be between 0.5 and 1")

    @property
    def metadata(self) -> Dict[str, Any]:
        """Metadata block exposed to API clients."""
        return {
            "model_version": self.model_version,
            "rule_scores": self.rule_scores.to_dict(),
            "external_assessment_used": self.external_assessment_used,
            "indicators": self.indicators,
        }


class AssessmentPromptBuilder:
    """
    Builds prompts for the external ticket assessment.

    Following DRY principle - all prompt logic in one place.
    """

    SYSTEM_PROMPT = """You are an expert banking support analyst. Analyze the following support ticket and determine whether it requires:

1. "technical_remediation" - Technical issues needing code fixes (API errors, bugs, system failures, integration problems)
2. "operational_workflow" - Operational issues needing workflow handling (account problems, user guidance, process issues)

Consider:
- Technical complexity of the issue
- Whether it involves system/code problems vs user/process problems
- Severity and channel context
- Root cause likely location (code vs operations)

Respond with JSON only:
{
    "recommendation": "technical_remediation" or "operational_workflow",
    "confidence": 0.0-1.0,
    "reasoning": "brief explanation of decision factors",
    "technical_indicators": ["list", "of", "technical", "clues"],
    "operational_indicators": ["list", "of", "operational", "clues"]
}"""

    @classmethod
    def build_prompt(cls, ticket: Ticket) -> str:
        """Build assessment prompt from ticket content."""
        return f"""Channel: {ticket.channel}
Severity: {ticket.severity}
Summary: {ticket.summary}"""

    @classmethod
    def get_system_prompt(cls) -> str:
        """Get the system prompt for the assessment."""
        return cls.SYSTEM_PROMPT

    @classmethod
    def build_messages(cls, ticket: Ticket) -> List[dict]:
        return [
            {"role": "system", "content": cls.get_system_prompt()},
            {"role": "user", "content": cls.build_prompt(ticket)}
        ]
