"""
Pytest configuration and fixtures for mailvet tests.

Provides:
- A fake DNS-over-HTTPS client with canned answers
- Validator factories wired to the fake client
- Test client for API testing
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from mailvet.config import Settings, get_settings
from mailvet.core.cache import TTLCache
from mailvet.core.throttle import Throttle
from mailvet.main import app
from mailvet.services.email_validation import EmailValidator, get_email_validator
from mailvet.services.email_validation.blacklist import BlacklistValidator
from mailvet.services.email_validation.mx import MXValidator
from tests.fakes import FakeDnsClient, no_sleep


# Override settings for testing
class TestSettings(Settings):
    debug: bool = True
    base_url: str = "http://localhost:8000"
    bulk_max_emails: int = 50


@pytest.fixture
def fake_dns() -> FakeDnsClient:
    """Fake resolver with gmail.com, example.com and mailinator.com mail hosts."""
    dns = FakeDnsClient()
    dns.mx("gmail.com", "gmail-smtp-in.l.google.com", "alt1.gmail-smtp-in.l.google.com")
    dns.mx("example.com", "mx1.example.com")
    dns.mx("mailinator.com", "mail.mailinator.com")
    return dns


@pytest.fixture
def make_validator(fake_dns):
    """Factory for EmailValidator instances with isolated caches and no throttle delay."""

    def _make(dns: FakeDnsClient | None = None, **kwargs) -> EmailValidator:
        dns = dns or fake_dns
        kwargs.setdefault("throttle", Throttle(tokens_per_interval=10, sleep=no_sleep))
        kwargs.setdefault("mx_validator", MXValidator(dns, TTLCache(), timeout_seconds=1.0))
        reference = kwargs.get("reference_data")
        hosts = reference.blacklist_hosts if reference else ("dbl.spamhaus.org",)
        kwargs.setdefault(
            "blacklist_validator",
            BlacklistValidator(dns, hosts, TTLCache(), timeout_seconds=1.0),
        )
        return EmailValidator(dns, **kwargs)

    return _make


@pytest.fixture
def validator(make_validator) -> EmailValidator:
    return make_validator()


@pytest_asyncio.fixture
async def client(validator: EmailValidator) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client with the validator wired to the fake resolver."""
    from mailvet.core.rate_limit import limiter

    def override_get_settings():
        return TestSettings()

    app.dependency_overrides[get_email_validator] = lambda: validator
    app.dependency_overrides[get_settings] = override_get_settings

    # Reset rate limiter storage before each test
    limiter.reset()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
