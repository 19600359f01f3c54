"""
Triage Rule Scoring
===================

Deterministic keyword / channel / severity scoring of a ticket against
each decision category.
"""

from types import MappingProxyType
from typing import Mapping, List

from src.config import Channel, Severity, DecisionCategory, DECISION_CATEGORIES
from src.core import DomainException
from src.triage.domain.entities import Ticket, RuleProfile, RuleScores


KEYWORD_WEIGHT = 0.4
CHANNEL_WEIGHT = 0.3
SEVERITY_WEIGHT = 0.3


DEFAULT_RULES: Mapping[str, RuleProfile] = MappingProxyType({
    DecisionCategory.TECHNICAL_REMEDIATION: RuleProfile(
        keywords=(
            "api", "timeout", "error", "bug", "crash", "exception", "database",
            "integration", "authentication", "authorization", "performance",
            "memory leak", "sql", "connection", "server error", "code",
            "deployment", "build", "compilation",
        ),
        channels=frozenset({
            Channel.API, Channel.MOBILE_APP, Channel.WEB_APP, Channel.INTEGRATION
        }),
        severities=frozenset({Severity.HIGH, Severity.CRITICAL}),
    ),
    DecisionCategory.OPERATIONAL_WORKFLOW: RuleProfile(
        keywords=(
            "account", "balance", "transaction", "transfer", "payment",
            "statement", "card", "pin", "password", "reset", "profile",
            "settings", "notification", "email", "sms", "verification", "kyc",
            "onboarding", "support", "help", "guidance",
        ),
        channels=frozenset({
            Channel.PHONE, Channel.EMAIL, Channel.CHAT, Channel.BRANCH
        }),
        severities=frozenset({Severity.LOW, Severity.MEDIUM}),
    ),
})


def validate_rules(rules: Mapping[str, RuleProfile]) -> None:
    """
    Check a rule set covers both categories and that no channel is
    preferred by both.

    Raises:
        DomainException: If the rule set is unusable
    """
    missing = [category for category in DECISION_CATEGORIES if category not in rules]
    if missing:
        raise DomainException(
            f"Rule set missing categories: {', '.join(missing)}",
            {"missing": missing}
        )

    shared = (
        rules[DecisionCategory.TECHNICAL_REMEDIATION].channels
        & rules[DecisionCategory.OPERATIONAL_WORKFLOW].channels
    )
    if shared:
        raise DomainException(
            "Preferred channels must not overlap between categories",
            {"overlap": sorted(shared)}
        )


class RuleScorer:
    """
    Scores how well a ticket fits a category.

    Score = keyword share x 0.4 + channel match x 0.3 + severity match x 0.3,
    so it always lies in [0, 1].
    """

    def __init__(self, rules: Mapping[str, RuleProfile] = DEFAULT_RULES):
        validate_rules(rules)
        self._rules = rules

    @property
    def rules(self) -> Mapping[str, RuleProfile]:
        return self._rules

    def matched_keywords(self, ticket: Ticket, category: str) -> List[str]:
        """Keywords of the category found in the summary, in profile order."""
        summary = ticket.summary.lower()
        return [
            keyword for keyword in self._rules[category].keywords
            if keyword in summary
        ]

    def score(self, ticket: Ticket, category: str) -> float:
        profile = self._rules[category]
        score = 0.0

        if profile.keywords:
            matches = len(self.matched_keywords(ticket, category))
            score += (matches / len(profile.keywords)) * KEYWORD_WEIGHT

        if ticket.channel in profile.channels:
            score += CHANNEL_WEIGHT

        if ticket.severity in profile.severities:
            score += SEVERITY_WEIGHT

        return score

    def score_all(self, ticket: Ticket) -> RuleScores:
        """Score the ticket against both categories."""
        return RuleScores(
            technical=self.score(ticket, DecisionCategory.TECHNICAL_REMEDIATION),
            operational=self.score(ticket, DecisionCategory.OPERATIONAL_WORKFLOW),
        )
