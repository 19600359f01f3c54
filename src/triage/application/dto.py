"""
Triage Application DTOs
========================

Data Transfer Objects for Triage API layer.

Pydantic models for request/response validation.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional, Dict, Any, Literal
from datetime import datetime, timezone


# ========== Type Aliases for Literals ==========
ChannelStr = Literal[
    "mobile_app", "web_app", "api", "phone", "email", "chat", "branch", "integration"
]
SeverityStr = Literal["low", "medium", "high", "critical"]
DecisionStr = Literal["technical_remediation", "operational_workflow"]
PriorityStr = Literal["p1", "p2", "p3", "p4"]


# ========== Request DTOs ==========

class ClassifyRequest(BaseModel):
    """
    Request model for ticket classification.

    Sanitizes as it validates: channel and severity are lowercased and
    trimmed, tags lowercased, unknown fields dropped.
    """
    model_config = ConfigDict(extra="ignore")

    channel: ChannelStr = Field(..., description="Channel the ticket came through")
    severity: SeverityStr = Field(..., description="Ticket severity")
    summary: str = Field(
        ..., min_length=10, max_length=1000, description="Free-text ticket summary"
    )
    ticket_id: Optional[str] = Field(None, description="External ticket ID")
    customer_id: Optional[str] = Field(None, description="Customer reference")
    timestamp: Optional[datetime] = Field(
        None,
        validate_default=True,
        description="When the ticket was raised (defaults to now)"
    )
    tags: List[str] = Field(default_factory=list, description="Free-form labels")
    priority: Optional[PriorityStr] = Field(None, description="Customer priority p1-p4")

    @field_validator("channel", "severity", "priority", mode="before")
    @classmethod
    def normalize_enum_text(cls, v: Any) -> Any:
        """Accept ' API ' as 'api'."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("summary", mode="before")
    @classmethod
    def strip_summary(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, list):
            return [tag.strip().lower() if isinstance(tag, str) else tag for tag in v]
        return v

    @field_validator("timestamp")
    @classmethod
    def default_timestamp(cls, v: Optional[datetime]) -> datetime:
        return v or datetime.now(timezone.utc)

    def to_domain(self) -> Any:
        """Convert to domain entity."""
        from src.triage.domain import Ticket
        return Ticket(
            channel=self.channel,
            severity=self.severity,
            summary=self.summary,
            ticket_id=self.ticket_id,
            customer_id=self.customer_id,
            timestamp=self.timestamp or datetime.now(timezone.utc),
            tags=tuple(self.tags),
            priority=self.priority
        )


# ========== Response DTOs ==========

class RuleScoresInfo(BaseModel):
    """Raw rule scores per category."""
    technical: float = Field(..., ge=0.0, le=1.0)
    operational: float = Field(..., ge=0.0, le=1.0)


class ClassificationMetadata(BaseModel):
    """Metadata attached to a classification response."""
    model_config = ConfigDict(protected_namespaces=())

    model_version: str
    rule_scores: RuleScoresInfo
    external_assessment_used: bool
    indicators: Dict[str, List[str]] = Field(default_factory=dict)
    processing_time_ms: Optional[int] = Field(None, ge=0)
    timestamp: Optional[datetime] = None


class ClassificationResponse(BaseModel):
    """Response model for ticket classification."""
    decision: DecisionStr
    reasoning: str = Field(..., min_length=10)
    confidence: float = Field(..., ge=0.0, le=1.0)
    next_actions: List[str] = Field(..., min_length=3, max_length=6)
    metadata: ClassificationMetadata

    @field_validator("next_actions")
    @classmethod
    def validate_action_text(cls, v: List[str]) -> List[str]:
        short = [action for action in v if len(action) < 5]
        if short:
            raise ValueError(f"actions too short: {short}")
        return v

    @classmethod
    def from_domain(
        cls,
        result: Any,
        processing_time_ms: Optional[int] = None
    ) -> "ClassificationResponse":
        """Create from a domain ClassificationResult."""
        metadata = dict(result.metadata)
        metadata["processing_time_ms"] = processing_time_ms
        metadata["timestamp"] = datetime.now(timezone.utc)
        return cls(
            decision=result.decision,
            reasoning=result.reasoning,
            confidence=result.confidence,
            next_actions=list(result.next_actions),
            metadata=ClassificationMetadata(**metadata)
        )


class ErrorResponse(BaseModel):
    """Error body returned by the classify endpoint."""
    error: str
    message: Optional[str] = None
    details: Optional[List[str]] = None


class HealthResponse(BaseModel):
    """Response model for the health endpoint."""
    status: str
    timestamp: datetime
    version: str
    checks: Dict[str, str] = Field(default_factory=dict)
