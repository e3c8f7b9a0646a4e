"""Tests for bulk input parsing and result summaries."""

from mailvet.services.email_validation.bulk import parse_email_list, summarize
from mailvet.services.email_validation.models import (
    BlacklistCheck,
    CheckOutcome,
    Deliverability,
    RiskLevel,
    SyntaxCheck,
    ValidationResult,
)
from mailvet.services.email_validation.validator import inert_checks


def _result(email: str, is_valid: bool, deliverability: Deliverability) -> ValidationResult:
    checks = inert_checks(SyntaxCheck(valid=is_valid, message="-"))
    return ValidationResult(
        email=email,
        is_valid=is_valid,
        score=50,
        checks=checks,
        deliverability=deliverability,
        risk=RiskLevel.MEDIUM,
    )


class TestParseEmailList:
    """Tests for parse_email_list."""

    def test_mixed_separators(self):
        """Should split on newlines, commas and semicolons."""
        text = "a@example.com\nb@example.com, c@example.com;d@example.com\r\ne@example.com"
        assert parse_email_list(text) == [
            "a@example.com",
            "b@example.com",
            "c@example.com",
            "d@example.com",
            "e@example.com",
        ]

    def test_drops_blank_and_at_less_entries(self):
        text = "\n\n  a@example.com  \nnot an email\n,;\n"
        assert parse_email_list(text) == ["a@example.com"]

    def test_case_insensitive_duplicates_keep_first(self):
        text = "User@Example.com\nuser@example.com\nother@example.com"
        assert parse_email_list(text) == ["User@Example.com", "other@example.com"]

    def test_empty_text(self):
        assert parse_email_list("") == []


class TestSummarize:
    """Tests for summarize."""

    def test_counts(self):
        results = [
            _result("a@example.com", True, Deliverability.DELIVERABLE),
            _result("b@example.com", True, Deliverability.RISKY),
            _result("c@example.com", False, Deliverability.UNDELIVERABLE),
            _result("d@example.com", True, Deliverability.UNKNOWN),
            _result("e@example.com", True, Deliverability.DELIVERABLE),
        ]

        summary = summarize(results)

        assert summary.total == 5
        assert summary.valid == 4
        assert summary.invalid == 1
        assert summary.deliverable == 2
        assert summary.risky == 1
        assert summary.undeliverable == 1
        assert summary.unknown == 1

    def test_empty(self):
        summary = summarize([])
        assert summary.total == 0
        assert summary.valid == 0

    def test_serializes_camel_case(self):
        result = _result("a@example.com", True, Deliverability.DELIVERABLE)
        data = result.model_dump(mode="json", by_alias=True)

        assert data["isValid"] is True
        assert "roleBased" in data["checks"]
        assert "catchAll" in data["checks"]
        assert data["checks"]["blacklisted"]["outcome"] == "inconclusive"
        assert ValidationResult.model_validate(data).checks.blacklisted == BlacklistCheck(
            is_blacklisted=False, outcome=CheckOutcome.INCONCLUSIVE
        )
