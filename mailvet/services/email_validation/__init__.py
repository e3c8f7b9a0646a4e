"""Email validation service: syntax, DNS and list checks with scoring."""

from mailvet.config import AppConfig, get_config
from mailvet.core.cache import TTLCache
from mailvet.core.throttle import Throttle
from mailvet.services.dns_client import DnsOverHttpsClient

from .base import BaseEmailValidator
from .blacklist import BlacklistValidator
from .bulk import parse_email_list, summarize
from .domain import DomainValidator
from .models import (
    BulkSummary,
    CheckOutcome,
    Checks,
    Deliverability,
    RiskLevel,
    ValidationResult,
)
from .mx import MXValidator
from .reference_data import ReferenceData
from .scoring import ScoringPolicy
from .syntax import parse_email, validate_syntax
from .validator import EmailValidator

__all__ = [
    "BaseEmailValidator",
    "BulkSummary",
    "CheckOutcome",
    "Checks",
    "Deliverability",
    "EmailValidator",
    "ReferenceData",
    "RiskLevel",
    "ScoringPolicy",
    "ValidationResult",
    "create_email_validator",
    "get_email_validator",
    "parse_email",
    "parse_email_list",
    "reset_email_validator",
    "summarize",
    "validate_syntax",
]

_validator_instance: EmailValidator | None = None


def create_email_validator(config: AppConfig) -> EmailValidator:
    """Build a validator with its own caches from settings and config.yml."""
    settings = config.settings

    client = DnsOverHttpsClient(
        resolver_url=settings.doh_resolver_url,
        timeout_seconds=settings.dns_timeout_seconds,
        max_attempts=settings.dns_max_attempts,
    )
    reference_data = ReferenceData.from_config(config.reference_data)

    return EmailValidator(
        client,
        reference_data=reference_data,
        scoring=ScoringPolicy.from_config(config.scoring),
        domain_validator=DomainValidator(
            TTLCache(max_size=settings.domain_cache_size, ttl_seconds=settings.domain_cache_ttl)
        ),
        mx_validator=MXValidator(
            client,
            TTLCache(max_size=settings.mx_cache_size, ttl_seconds=settings.mx_cache_ttl),
            timeout_seconds=settings.mx_timeout_seconds,
        ),
        blacklist_validator=BlacklistValidator(
            client,
            reference_data.blacklist_hosts,
            TTLCache(
                max_size=settings.blacklist_cache_size,
                ttl_seconds=settings.blacklist_cache_ttl,
            ),
            timeout_seconds=settings.blacklist_timeout_seconds,
        ),
        result_cache=TTLCache(
            max_size=settings.result_cache_size, ttl_seconds=settings.result_cache_ttl
        ),
        throttle=Throttle(
            tokens_per_interval=settings.bulk_batch_size,
            interval_seconds=settings.bulk_batch_interval_ms / 1000,
            max_interval_seconds=settings.bulk_max_interval_ms / 1000,
        ),
        batch_size=settings.bulk_batch_size,
        max_bulk_emails=settings.bulk_max_emails,
    )


def get_email_validator() -> EmailValidator:
    """
    Get the process-wide validator used by the API and CLI.

    Built lazily from the cached config so caches are shared across requests.
    Tests should construct EmailValidator directly or override this dependency.
    """
    global _validator_instance
    if _validator_instance is None:
        _validator_instance = create_email_validator(get_config())
    return _validator_instance


def reset_email_validator() -> None:
    """Reset the validator instance. Useful for testing."""
    global _validator_instance
    _validator_instance = None
