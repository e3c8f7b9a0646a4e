"""MX record lookup over DNS-over-HTTPS."""

import asyncio

from mailvet.core.cache import TTLCache
from mailvet.core.logging import get_logger
from mailvet.services.dns_client import DnsOverHttpsClient, RecordType

from .models import CheckOutcome, MXCheck

logger = get_logger(__name__)

MSG_MX_FOUND = "MX records found"
MSG_IMPLICIT_MX = "No MX records, but domain has an A record"
MSG_NO_MX = "No MX records found"
MSG_NULL_MX = "Domain does not accept email (null MX)"
MSG_NXDOMAIN = "Domain does not exist"
MSG_INCONCLUSIVE = "Could not verify MX records"


def parse_mx_record(data: str) -> tuple[int, str] | None:
    """Parse ``"10 mx.example.com."`` into ``(10, "mx.example.com")``."""
    parts = data.split()
    if len(parts) != 2:
        return None
    try:
        preference = int(parts[0])
    except ValueError:
        return None
    return preference, parts[1].rstrip(".").lower()


class MXValidator:
    """
    Check that a domain can receive mail.

    Looks up MX records and falls back to an A record (implicit MX, RFC 5321
    section 5.1). Conclusive results are cached per domain; inconclusive ones
    are not, so a transient resolver failure is retried on the next request.
    """

    def __init__(
        self,
        client: DnsOverHttpsClient,
        cache: TTLCache[MXCheck] | None = None,
        timeout_seconds: float = 8.0,
    ) -> None:
        self._client = client
        self._cache = cache if cache is not None else TTLCache(max_size=1000, ttl_seconds=300)
        self.timeout_seconds = timeout_seconds

    async def validate(self, domain: str) -> MXCheck:
        domain = domain.strip().lower()
        cached = self._cache.get(domain)
        if cached is not None:
            return cached

        try:
            async with asyncio.timeout(self.timeout_seconds):
                result = await self._lookup(domain)
        except TimeoutError:
            logger.bind(domain=domain, timeout=self.timeout_seconds).warning("mx_lookup_timeout")
            result = _inconclusive()

        if result.outcome != CheckOutcome.INCONCLUSIVE:
            self._cache.set(domain, result)
        return result

    async def _lookup(self, domain: str) -> MXCheck:
        response = await self._client.resolve(domain, RecordType.MX)
        if response is None:
            return _inconclusive()
        if response.nxdomain:
            return MXCheck(valid=False, message=MSG_NXDOMAIN, outcome=CheckOutcome.FAIL)

        parsed = [p for p in (parse_mx_record(a.data) for a in response.records(RecordType.MX)) if p]
        if parsed:
            parsed.sort()
            hosts = [host for _, host in parsed if host]
            if not hosts:
                # RFC 7505 null MX: "0 ."
                return MXCheck(valid=False, message=MSG_NULL_MX, outcome=CheckOutcome.FAIL)
            return MXCheck(valid=True, records=hosts, message=MSG_MX_FOUND, outcome=CheckOutcome.PASS)

        fallback = await self._client.resolve(domain, RecordType.A)
        if fallback is None:
            return _inconclusive()
        if fallback.records(RecordType.A):
            return MXCheck(valid=True, message=MSG_IMPLICIT_MX, outcome=CheckOutcome.PASS)
        return MXCheck(valid=False, message=MSG_NO_MX, outcome=CheckOutcome.FAIL)


def _inconclusive() -> MXCheck:
    return MXCheck(valid=False, message=MSG_INCONCLUSIVE, outcome=CheckOutcome.INCONCLUSIVE)
