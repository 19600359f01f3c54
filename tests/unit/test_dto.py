"""Request/response DTO unit tests"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from src.config import DecisionCategory
from src.triage.application import ClassifyRequest, ClassificationResponse
from src.triage.domain import ClassificationResult, RuleScores


class TestClassifyRequest:
    """Request validation and sanitization"""

    def test_normalizes_channel_and_severity(self):
        request = ClassifyRequest(
            channel="  API ", severity="High", summary="  API is returning 500s  "
        )
        assert request.channel == "api"
        assert request.severity == "high"
        assert request.summary == "API is returning 500s"

    def test_invalid_channel_rejected(self):
        with pytest.raises(ValidationError):
            ClassifyRequest(channel="fax", severity="low", summary="Fax machine is broken")

    def test_invalid_severity_rejected(self):
        with pytest.raises(ValidationError):
            ClassifyRequest(channel="api", severity="urgent", summary="Payments are failing")

    @pytest.mark.parametrize("summary", ["too short", "   short   ", "x" * 1001])
    def test_summary_length_enforced(self, summary):
        with pytest.raises(ValidationError):
            ClassifyRequest(channel="api", severity="low", summary=summary)

    def test_summary_boundaries_accepted(self):
        ClassifyRequest(channel="api", severity="low", summary="x" * 10)
        ClassifyRequest(channel="api", severity="low", summary="x" * 1000)

    def test_missing_summary_rejected(self):
        with pytest.raises(ValidationError):
            ClassifyRequest(channel="api", severity="low")

    def test_tags_lowercased(self):
        request = ClassifyRequest(
            channel="chat", severity="low", summary="Card was declined abroad",
            tags=[" Cards ", "TRAVEL"]
        )
        assert request.tags == ["cards", "travel"]

    def test_null_tags_become_empty(self):
        request = ClassifyRequest(
            channel="chat", severity="low", summary="Card was declined abroad", tags=None
        )
        assert request.tags == []

    def test_timestamp_defaults_to_now(self):
        before = datetime.now(timezone.utc)
        request = ClassifyRequest(channel="email", severity="low", summary="Statement is missing")
        assert request.timestamp is not None
        assert request.timestamp >= before

    def test_unknown_fields_ignored(self):
        request = ClassifyRequest(
            channel="email", severity="low", summary="Statement is missing", internal_flag=True
        )
        assert not hasattr(request, "internal_flag")

    def test_priority_normalized(self):
        request = ClassifyRequest(
            channel="email", severity="low", summary="Statement is missing", priority="P2"
        )
        assert request.priority == "p2"

        with pytest.raises(ValidationError):
            ClassifyRequest(
                channel="email", severity="low", summary="Statement is missing", priority="p9"
            )

    def test_to_domain(self):
        request = ClassifyRequest(
            channel="mobile_app", severity="critical",
            summary="App crashes on launch for all users",
            ticket_id="TICKET-42", customer_id="CUST-7", tags=["ios"]
        )
        ticket = request.to_domain()

        assert ticket.channel == "mobile_app"
        assert ticket.severity == "critical"
        assert ticket.ticket_id == "TICKET-42"
        assert ticket.customer_id == "CUST-7"
        assert ticket.tags == ("ios",)
        assert ticket.timestamp is not None


class TestClassificationResponse:
    """Response mapping"""

    def _result(self, **overrides) -> ClassificationResult:
        values = dict(
            decision=DecisionCategory.OPERATIONAL_WORKFLOW,
            reasoning="Rule-based decision (no external assessment used): test",
            confidence=0.71,
            next_actions=["Review customer account details", "Execute diagnostic workflow",
                          "Apply standard troubleshooting steps"],
            rule_scores=RuleScores(technical=0.0, operational=0.714),
            external_assessment_used=False,
            model_version="1.0.0",
            indicators={"technical": [], "operational": ["account"]},
        )
        values.update(overrides)
        return ClassificationResult(**values)

    def test_from_domain(self):
        response = ClassificationResponse.from_domain(self._result(), processing_time_ms=4)

        assert response.decision == "operational_workflow"
        assert response.confidence == 0.71
        assert len(response.next_actions) == 3
        assert response.metadata.model_version == "1.0.0"
        assert response.metadata.rule_scores.operational == 0.714
        assert response.metadata.external_assessment_used is False
        assert response.metadata.indicators["operational"] == ["account"]
        assert response.metadata.processing_time_ms == 4
        assert response.metadata.timestamp is not None

    def test_short_action_rejected(self):
        result = self._result(next_actions=["Fix", "Review account", "Call customer"])
        with pytest.raises(ValidationError):
            ClassificationResponse.from_domain(result)

    def test_more_than_six_actions_rejected(self):
        actions = [f"Follow-up step {i}" for i in range(7)]
        with pytest.raises(ValidationError):
            ClassificationResponse.from_domain(self._result(next_actions=actions))

    def test_six_actions_accepted(self):
        actions = [f"Follow-up step {i}" for i in range(6)]
        response = ClassificationResponse.from_domain(self._result(next_actions=actions))
        assert len(response.next_actions) == 6

    def test_result_rejects_low_confidence(self):
        with pytest.raises(ValueError):
            self._result(confidence=0.4)

    def test_result_rejects_unknown_decision(self):
        with pytest.raises(ValueError):
            self._result(decision="escalation")
