"""
Triage Action Planning
======================

Builds the next-actions checklist for a classified ticket.
"""

from typing import Dict, List, Tuple

from src.config import Channel, Severity, DecisionCategory
from src.triage.domain.entities import Ticket


MIN_ACTIONS = 3
MAX_ACTIONS = 6

ESCALATE_ACTION = "Escalate to senior team immediately"
INCIDENT_REPORT_ACTION = "Prepare incident report"
MONITOR_ACTION = "Monitor resolution progress closely"
CROSS_PLATFORM_ACTION = "Test fix on multiple mobile platforms"

# 0-based index of the 4th slot in the in-progress list
CROSS_PLATFORM_POSITION = 3

BASE_ACTIONS: Dict[str, Tuple[str, ...]] = {
    DecisionCategory.TECHNICAL_REMEDIATION: (
        "Analyze error logs and stack traces",
        "Identify root cause in codebase",
        "Generate code patch or fix",
        "Run automated tests on fix",
        "Deploy to staging environment",
        "Monitor for regression issues",
    ),
    DecisionCategory.OPERATIONAL_WORKFLOW: (
        "Review customer account details",
        "Execute diagnostic workflow",
        "Apply standard troubleshooting steps",
        "Update customer communication",
        "Document resolution steps",
        "Schedule follow-up if needed",
    ),
}


class ActionPlanner:
    """
    Pure functions for checklist generation.

    Stateless utility class - all checklist rules in one place.
    """

    @staticmethod
    def plan(decision: str, ticket: Ticket) -> List[str]:
        """
        Produce the ordered checklist for a decision.

        Edits applied to the base list, in order:
        1. critical: escalation first, incident report last
           (otherwise high: close monitoring last)
        2. technical remediation on mobile_app: cross-platform check in slot 4

        Args:
            decision: Winning category
            ticket: Ticket being classified

        Returns:
            Between 3 and 6 action strings
        """
        base = BASE_ACTIONS[decision]
        actions = list(base)

        if ticket.severity == Severity.CRITICAL:
            actions.insert(0, ESCALATE_ACTION)
            actions.append(INCIDENT_REPORT_ACTION)
        elif ticket.severity == Severity.HIGH:
            actions.append(MONITOR_ACTION)

        if (decision == DecisionCategory.TECHNICAL_REMEDIATION
                and ticket.channel == Channel.MOBILE_APP):
            actions.insert(CROSS_PLATFORM_POSITION, CROSS_PLATFORM_ACTION)

        return ActionPlanner.truncate(actions, base)

    @staticmethod
    def truncate(actions: List[str], base: Tuple[str, ...]) -> List[str]:
        """
        Cut the checklist to MAX_ACTIONS entries.

        Base steps are dropped from the tail first so the ticket-specific
        steps (escalation, incident report, monitoring, cross-platform check)
        always survive; relative order is unchanged.
        """
        trimmed = list(actions)
        for step in reversed(base):
            if len(trimmed) <= MAX_ACTIONS:
                break
            trimmed.remove(step)
        return trimmed[:MAX_ACTIONS]
