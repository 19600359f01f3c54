"""Rule scoring unit tests"""

import pytest

from src.config import DecisionCategory, VALID_CHANNELS, SEVERITY_LEVELS
from src.core import DomainException
from src.triage.domain import (
    Ticket, RuleProfile, RuleScorer, DEFAULT_RULES, validate_rules
)
from src.triage.domain.rules import KEYWORD_WEIGHT, CHANNEL_WEIGHT, SEVERITY_WEIGHT


TECH = DecisionCategory.TECHNICAL_REMEDIATION
OPS = DecisionCategory.OPERATIONAL_WORKFLOW


class TestDefaultRules:
    """Static rule table checks"""

    def test_both_categories_defined(self):
        assert set(DEFAULT_RULES) == {TECH, OPS}
        assert len(DEFAULT_RULES[TECH].keywords) > 0
        assert len(DEFAULT_RULES[OPS].keywords) > 0

    def test_preferred_channels_disjoint(self):
        overlap = DEFAULT_RULES[TECH].channels & DEFAULT_RULES[OPS].channels
        assert overlap == frozenset()

    def test_channels_and_severities_are_known_values(self):
        for profile in DEFAULT_RULES.values():
            assert profile.channels <= set(VALID_CHANNELS)
            assert profile.severities <= set(SEVERITY_LEVELS)

    def test_rule_table_is_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_RULES[TECH] = DEFAULT_RULES[OPS]

    def test_weights_sum_to_one(self):
        assert KEYWORD_WEIGHT + CHANNEL_WEIGHT + SEVERITY_WEIGHT == pytest.approx(1.0)


class TestValidateRules:
    """Rule set validation"""

    def test_overlapping_channels_rejected(self):
        rules = {
            TECH: RuleProfile(("bug",), frozenset({"api", "phone"}), frozenset({"high"})),
            OPS: RuleProfile(("account",), frozenset({"phone"}), frozenset({"low"})),
        }
        with pytest.raises(DomainException) as exc_info:
            validate_rules(rules)
        assert exc_info.value.details["overlap"] == ["phone"]

    def test_missing_category_rejected(self):
        rules = {TECH: DEFAULT_RULES[TECH]}
        with pytest.raises(DomainException):
            RuleScorer(rules)

    def test_default_rules_valid(self):
        validate_rules(DEFAULT_RULES)


class TestRuleScorer:
    """RuleScorer.score"""

    def test_technical_ticket_scores_high(self, technical_ticket):
        scorer = RuleScorer()
        technical = scorer.score(technical_ticket, TECH)
        operational = scorer.score(technical_ticket, OPS)

        # api, timeout, error, database, connection
        assert technical == pytest.approx(5 / 19 * 0.4 + 0.6)
        assert operational == 0.0
        assert technical > 0.7

    def test_operational_ticket_scores_high(self, operational_ticket):
        scorer = RuleScorer()
        technical = scorer.score(operational_ticket, TECH)
        operational = scorer.score(operational_ticket, OPS)

        # account, balance, password, reset, verification, help
        assert operational == pytest.approx(6 / 21 * 0.4 + 0.6)
        assert technical == 0.0
        assert operational > 0.7

    def test_mixed_signals(self):
        ticket = Ticket(
            channel="mobile_app",
            severity="low",
            summary="User account shows wrong balance information",
        )
        scorer = RuleScorer()
        assert scorer.score(ticket, TECH) > 0
        assert scorer.score(ticket, OPS) > 0

    def test_keyword_match_case_insensitive(self):
        upper = Ticket(channel="branch", severity="low", summary="DATABASE CRASH")
        lower = Ticket(channel="branch", severity="low", summary="database crash")
        scorer = RuleScorer()
        assert scorer.score(upper, TECH) == scorer.score(lower, TECH)
        assert scorer.score(upper, TECH) > 0

    def test_multi_word_keyword_substring(self):
        ticket = Ticket(channel="chat", severity="low", summary="suspected memory leak on login")
        assert "memory leak" in RuleScorer().matched_keywords(ticket, TECH)

    def test_deterministic(self, technical_ticket):
        scorer = RuleScorer()
        first = scorer.score(technical_ticket, TECH)
        second = scorer.score(technical_ticket, TECH)
        assert first == second
        assert RuleScorer().score(technical_ticket, TECH) == first

    def test_score_bounds(self):
        scorer = RuleScorer()
        every_keyword = " ".join(DEFAULT_RULES[TECH].keywords)
        ticket = Ticket(channel="api", severity="critical", summary=every_keyword)
        assert scorer.score(ticket, TECH) == pytest.approx(1.0)

        empty = Ticket(channel="phone", severity="low", summary="")
        assert scorer.score(empty, TECH) == 0.0

    def test_tied_scores(self, tied_ticket):
        scores = RuleScorer().score_all(tied_ticket)
        assert scores.technical == scores.operational == pytest.approx(0.3)

    def test_substituted_rules(self):
        rules = {
            TECH: RuleProfile(("outage",), frozenset({"web_app"}), frozenset({"critical"})),
            OPS: RuleProfile(("refund", "fee"), frozenset({"email"}), frozenset()),
        }
        scorer = RuleScorer(rules)
        ticket = Ticket(channel="email", severity="low", summary="refund for fee charged twice")

        assert scorer.score(ticket, OPS) == pytest.approx(0.4 + 0.3)
        assert scorer.score(ticket, TECH) == 0.0

    def test_matched_keywords_profile_order(self, technical_ticket):
        matched = RuleScorer().matched_keywords(technical_ticket, TECH)
        assert matched == ["api", "timeout", "error", "database", "connection"]
