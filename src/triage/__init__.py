"""
Triage Module
=============

Bounded Context for routing banking support tickets.

Responsibilities:
- Score tickets against technical-remediation and operational-workflow rules
- Refine the decision with an optional LLM assessment
- Produce a next-actions checklist for the chosen path
"""

__version__ = "1.0.0"
