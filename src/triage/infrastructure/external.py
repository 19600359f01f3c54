"""
Triage External Service Adapters
==================================

Adapter for the external language-model assessment used by the triage module.

Implements the IAssessmentProvider interface of the application layer on top
of the infrastructure LLM client. Every failure of the external service is
absorbed here and reported as "no assessment".
"""

import asyncio
import json
from typing import Optional, List, Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from src.config import settings, DECISION_CATEGORIES
from src.core import LLMException
from src.infrastructure.llm import ILLMClient, create_llm_client
from src.shared.infrastructure.logging import get_logger
from src.triage.application.services import IAssessmentProvider
from src.triage.domain import Ticket, ExternalAssessment, AssessmentPromptBuilder

logger = get_logger(__name__)


class AssessmentPayload(BaseModel):
    """Shape of the JSON object the model is asked to return."""
    recommendation: str
    confidence: float = Field(..., allow_inf_nan=False)
    reasoning: str = Field(..., min_length=1)
    technical_indicators: List[str] = Field(default_factory=list)
    operational_indicators: List[str] = Field(default_factory=list)

    @field_validator("recommendation")
    @classmethod
    def validate_recommendation(cls, v: str) -> str:
        value = v.strip().lower()
        if value not in DECISION_CATEGORIES:
            raise ValueError(f"unknown recommendation: {v}")
        return value

    @field_validator("confidence", mode="before")
    @classmethod
    def require_number(cls, v: Any) -> Any:
        # bool is an int subclass; JSON true/false is not a confidence
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError("confidence must be a number")
        return v

    @field_validator("reasoning", mode="before")
    @classmethod
    def strip_reasoning(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("technical_indicators", "operational_indicators", mode="before")
    @classmethod
    def default_indicators(cls, v: Any) -> Any:
        return [] if v is None else v


def extract_json(content: str) -> str:
    """Strip markdown code fences around a JSON payload."""
    text = content.strip()
    if "```json" in text:
        text = text.split("```json")[1].split("```")[0].strip()
    elif "```" in text:
        text = text.split("```")[1].split("```")[0].strip()
    return text


def parse_assessment(content: str) -> ExternalAssessment:
    """
    Turn a raw model reply into an ExternalAssessment.

    Raises:
        ValueError: If the reply is not valid JSON or misses required fields
    """
    try:
        data = json.loads(extract_json(content))
    except json.JSONDecodeError as e:
        raise ValueError(f"assessment is not valid JSON: {e}")

    if not isinstance(data, dict):
        raise ValueError("assessment must be a JSON object")

    try:
        payload = AssessmentPayload.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"invalid assessment structure: {e.error_count()} error(s)")

    return ExternalAssessment(
        recommended_category=payload.recommendation,
        confidence=max(0.0, min(1.0, payload.confidence)),
        rationale=payload.reasoning,
        technical_indicators=tuple(payload.technical_indicators),
        operational_indicators=tuple(payload.operational_indicators),
    )


class LLMAssessmentAdapter(IAssessmentProvider):
    """
    Best-effort external assessment backed by an LLM.

    Returns None when no client is configured or when the call fails,
    times out or yields an unusable payload.
    """

    def __init__(
        self,
        llm_client: Optional[ILLMClient] = None,
        timeout_seconds: float = 10.0,
        temperature: float = 0.3,
        max_tokens: int = 300,
    ):
        self._llm = llm_client
        self._timeout = timeout_seconds
        self._temperature = temperature
        self._max_tokens = max_tokens

    @property
    def is_configured(self) -> bool:
        return self._llm is not None

    async def assess(self, ticket: Ticket) -> Optional[ExternalAssessment]:
        if self._llm is None:
            logger.info("Skipping external assessment - no API key provided")
            return None

        messages = AssessmentPromptBuilder.build_messages(ticket)

        try:
            response = await asyncio.wait_for(
                self._llm.chat_completion(
                    messages=messages,
                    temperature=self._temperature,
                    max_tokens=self._max_tokens,
                    timeout=self._timeout,
                    operation="ticket_assessment"
                ),
                timeout=self._timeout
            )
            assessment = parse_assessment(response.content)

        except asyncio.TimeoutError:
            logger.warning(
                "External assessment timed out",
                extra={"timeout_seconds": self._timeout}
            )
            return None
        except (LLMException, ValueError) as e:
            logger.error(
                "External assessment failed",
                extra={"error": str(e), "error_type": type(e).__name__}
            )
            return None
        except Exception as e:
            logger.error(
                "External assessment failed unexpectedly",
                extra={"error": str(e), "error_type": type(e).__name__}
            )
            return None

        logger.debug(
            "External assessment successful",
            extra={
                "recommendation": assessment.recommended_category,
                "assessment_confidence": assessment.confidence
            }
        )
        return assessment


def create_assessment_adapter(config=None) -> LLMAssessmentAdapter:
    """Build the adapter from settings; unconfigured means it always abstains."""
    config = config or settings
    return LLMAssessmentAdapter(
        llm_client=create_llm_client(config),
        timeout_seconds=config.llm_timeout_seconds,
        temperature=config.llm_temperature,
        max_tokens=config.llm_max_tokens,
    )
