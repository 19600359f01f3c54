"""Shared pytest fixtures"""
import os
import sys
from pathlib import Path

# Keep tests off the real LLM regardless of the developer's shell
os.environ["OPENAI_API_KEY"] = "demo-key"
os.environ["MOCK_LLM"] = "false"
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "ERROR")

sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from src.triage.domain import Ticket


@pytest.fixture
def technical_ticket() -> Ticket:
    return Ticket(
        channel="api",
        severity="high",
        summary="API timeout errors causing database connection failures",
    )


@pytest.fixture
def operational_ticket() -> Ticket:
    return Ticket(
        channel="phone",
        severity="medium",
        summary="Customer needs help with account balance verification and password reset",
    )


@pytest.fixture
def critical_ticket() -> Ticket:
    return Ticket(
        channel="api",
        severity="critical",
        summary="System down, database errors",
    )


@pytest.fixture
def tied_ticket() -> Ticket:
    """Technical channel, operational severity, no keywords: both rules score 0.3"""
    return Ticket(
        channel="api",
        severity="low",
        summary="General inquiry about services",
    )
