"""Tests for the list-based checks and reference data."""

from mailvet.config import ReferenceDataConfig
from mailvet.services.email_validation.lists import (
    check_catch_all,
    check_disposable,
    check_free_provider,
    check_role_based,
    check_typo,
)
from mailvet.services.email_validation.reference_data import (
    BLACKLIST_HOSTS,
    DISPOSABLE_DOMAINS,
    ReferenceData,
)

DATA = ReferenceData()


class TestDisposableDomains:
    """Tests for disposable domain detection."""

    def test_bundled_list_is_loaded(self):
        """Should load the bundled list at import."""
        assert "mailinator.com" in DISPOSABLE_DOMAINS
        assert "10minutemail.com" in DISPOSABLE_DOMAINS
        assert "gmail.com" not in DISPOSABLE_DOMAINS

    def test_disposable_detected(self):
        result = check_disposable("mailinator.com", DATA)
        assert result.is_disposable is True
        assert result.message == "Disposable email detected"

    def test_case_insensitive(self):
        assert check_disposable("MAILINATOR.COM", DATA).is_disposable is True

    def test_regular_domain(self):
        result = check_disposable("example.com", DATA)
        assert result.is_disposable is False
        assert result.message == "Not a disposable email"


class TestRoleBased:
    """Tests for role account detection."""

    def test_role_prefixes(self):
        for local_part in ["admin", "support", "info", "noreply", "postmaster"]:
            result = check_role_based(local_part, DATA)
            assert result.is_role_based is True, local_part
            assert result.role == local_part

    def test_plus_tag_is_ignored(self):
        result = check_role_based("Support+tickets", DATA)
        assert result.is_role_based is True
        assert result.role == "support"

    def test_personal_address(self):
        result = check_role_based("jane.doe", DATA)
        assert result.is_role_based is False
        assert result.role is None

    def test_prefix_must_match_whole_local_part(self):
        assert check_role_based("administrator2", DATA).is_role_based is False


class TestFreeProvider:
    """Tests for free provider detection."""

    def test_known_provider(self):
        result = check_free_provider("gmail.com", DATA)
        assert result.is_free is True
        assert result.provider == "Gmail"

    def test_company_domain(self):
        result = check_free_provider("example.com", DATA)
        assert result.is_free is False
        assert result.provider is None


class TestTypo:
    """Tests for domain typo suggestions."""

    def test_known_typo(self):
        """Should suggest the corrected domain and full address."""
        result = check_typo("user", "gmial.com", DATA)
        assert result.has_typo is True
        assert result.suggestion == "gmail.com"
        assert result.suggested_email == "user@gmail.com"

    def test_correct_domain(self):
        result = check_typo("user", "gmail.com", DATA)
        assert result.has_typo is False
        assert result.suggestion is None
        assert result.suggested_email is None

    def test_no_fuzzy_matching(self):
        assert check_typo("user", "gmaaail.com", DATA).has_typo is False


class TestCatchAll:
    """Tests for the catch-all heuristic."""

    def test_known_catch_all(self):
        assert check_catch_all("mailinator.com", DATA).is_catch_all is True

    def test_unknown_domain(self):
        result = check_catch_all("example.com", DATA)
        assert result.is_catch_all is False
        assert result.message


class TestReferenceDataFromConfig:
    """Tests for extending reference data from config.yml."""

    def test_extends_defaults(self):
        config = ReferenceDataConfig(
            {
                "disposable_domains": ["Throwaway.Example"],
                "role_prefixes": ["ops"],
                "free_providers": {"mail.example": "Example Mail"},
                "typo_domains": {"exmaple.com": "Example.com"},
                "blacklist_hosts": ["dbl.example.net", "dbl.spamhaus.org"],
                "catch_all_domains": ["catchall.example"],
            }
        )

        data = ReferenceData.from_config(config)

        assert "throwaway.example" in data.disposable_domains
        assert "mailinator.com" in data.disposable_domains
        assert check_role_based("ops", data).is_role_based is True
        assert check_free_provider("mail.example", data).provider == "Example Mail"
        assert check_typo("me", "exmaple.com", data).suggestion == "example.com"
        assert data.blacklist_hosts == (*BLACKLIST_HOSTS, "dbl.example.net")
        assert check_catch_all("catchall.example", data).is_catch_all is True

    def test_empty_config_matches_defaults(self):
        data = ReferenceData.from_config(ReferenceDataConfig({}))
        assert data == ReferenceData()
