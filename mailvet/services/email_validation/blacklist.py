"""Domain reputation check against DNS-based blacklists."""

import asyncio

from mailvet.core.cache import TTLCache
from mailvet.core.logging import get_logger
from mailvet.services.dns_client import DnsOverHttpsClient, RecordType

from .models import BlacklistCheck, CheckOutcome

logger = get_logger(__name__)


class BlacklistValidator:
    """
    Query each DNSBL host for ``<domain>.<host>`` concurrently.

    Any A answer means the domain is listed on that host. A lookup that fails
    or times out counts as not listed on that host; only when every lookup
    fails is the outcome inconclusive. Conclusive results are cached per
    domain.
    """

    def __init__(
        self,
        client: DnsOverHttpsClient,
        hosts: tuple[str, ...],
        cache: TTLCache[BlacklistCheck] | None = None,
        timeout_seconds: float = 3.0,
    ) -> None:
        self._client = client
        self.hosts = hosts
        self._cache = cache if cache is not None else TTLCache(max_size=500, ttl_seconds=3600)
        self.timeout_seconds = timeout_seconds

    async def validate(self, domain: str) -> BlacklistCheck:
        domain = domain.strip().lower()
        cached = self._cache.get(domain)
        if cached is not None:
            return cached

        if not self.hosts:
            return BlacklistCheck(is_blacklisted=False, outcome=CheckOutcome.PASS)

        answers = await asyncio.gather(*(self._lookup(domain, host) for host in self.hosts))

        listed = [host for host, answer in zip(self.hosts, answers) if answer is True]
        if listed:
            logger.bind(domain=domain, lists=listed).info("domain_blacklisted")
            result = BlacklistCheck(is_blacklisted=True, lists=listed, outcome=CheckOutcome.FAIL)
        elif all(answer is None for answer in answers):
            result = BlacklistCheck(is_blacklisted=False, outcome=CheckOutcome.INCONCLUSIVE)
        else:
            result = BlacklistCheck(is_blacklisted=False, outcome=CheckOutcome.PASS)

        if result.outcome != CheckOutcome.INCONCLUSIVE:
            self._cache.set(domain, result)
        return result

    async def _lookup(self, domain: str, host: str) -> bool | None:
        """True if listed, False if not, None if the lookup failed."""
        try:
            response = await asyncio.wait_for(
                self._client.resolve(f"{domain}.{host}", RecordType.A),
                timeout=self.timeout_seconds,
            )
        except TimeoutError:
            logger.bind(domain=domain, host=host).warning("blacklist_lookup_timeout")
            return None
        if response is None:
            return None
        codes = [answer.data for answer in response.records(RecordType.A)]
        if any(_is_error_code(code) for code in codes):
            logger.bind(domain=domain, host=host, codes=codes).warning("blacklist_query_refused")
            return None
        return bool(codes)


def _is_error_code(code: str) -> bool:
    """Return codes that mean the list refused the query, not that the domain is listed."""
    # Spamhaus answers 127.255.255.x and URIBL 127.0.0.1 to blocked resolvers
    return code.startswith("127.255.255.") or code == "127.0.0.1"
