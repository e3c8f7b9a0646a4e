"""Structural domain check."""

from mailvet.core.cache import TTLCache

from .models import DomainCheck
from .patterns import DOMAIN_PATTERN, MAX_DOMAIN_LENGTH, MAX_LABEL_LENGTH


class DomainValidator:
    """Re-check a domain against the shared domain pattern and DNS length limits."""

    def __init__(self, cache: TTLCache[DomainCheck] | None = None) -> None:
        self._cache = cache if cache is not None else TTLCache(max_size=1000, ttl_seconds=300)

    def validate(self, domain: str) -> DomainCheck:
        domain = domain.strip().lower()
        cached = self._cache.get(domain)
        if cached is not None:
            return cached

        result = self._check(domain)
        self._cache.set(domain, result)
        return result

    def _check(self, domain: str) -> DomainCheck:
        if not domain:
            return DomainCheck(valid=False, exists=False, message="Domain is empty")
        if len(domain) > MAX_DOMAIN_LENGTH:
            return DomainCheck(valid=False, exists=False, message="Domain is too long")
        if any(len(label) > MAX_LABEL_LENGTH for label in domain.split(".")):
            return DomainCheck(
                valid=False,
                exists=False,
                message=f"Domain label exceeds {MAX_LABEL_LENGTH} characters",
            )
        if not DOMAIN_PATTERN.fullmatch(domain):
            return DomainCheck(valid=False, exists=False, message="Invalid domain format")
        return DomainCheck(valid=True, exists=True, message="Domain format is valid")
