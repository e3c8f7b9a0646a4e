"""Tests for the structural domain check."""

from mailvet.core.cache import TTLCache
from mailvet.services.email_validation.domain import DomainValidator


class TestDomainValidator:
    """Tests for DomainValidator."""

    def test_valid_domain(self):
        result = DomainValidator().validate("example.com")
        assert result.valid is True
        assert result.exists is True
        assert result.message == "Domain format is valid"

    def test_subdomains_and_hyphens(self):
        assert DomainValidator().validate("mail.my-company.co.uk").valid is True

    def test_label_longer_than_63_characters(self):
        """Should reject labels over the DNS limit."""
        result = DomainValidator().validate("a" * 64 + ".com")
        assert result.valid is False
        assert result.exists is False
        assert result.message == "Domain label exceeds 63 characters"

    def test_invalid_format(self):
        for domain in ["localhost", "-bad.com", "bad-.com", "under_score.com", "example.c0m"]:
            result = DomainValidator().validate(domain)
            assert result.valid is False, domain
            assert result.message == "Invalid domain format"

    def test_empty_and_too_long(self):
        assert DomainValidator().validate("").valid is False
        assert DomainValidator().validate("a." * 128 + "com").message == "Domain is too long"

    def test_result_is_cached_case_insensitively(self):
        cache = TTLCache(max_size=10, ttl_seconds=60)
        validator = DomainValidator(cache)

        first = validator.validate("Example.COM")
        second = validator.validate("example.com")

        assert first is second
        assert len(cache) == 1
