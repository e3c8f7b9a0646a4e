"""DNS-over-HTTPS client for JSON resolvers (Google, Cloudflare)."""

from enum import IntEnum

import aiohttp
import backoff
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from mailvet.core.logging import get_logger

logger = get_logger(__name__)


def _log_retry(details: dict) -> None:
    name, record_type = details["args"]
    logger.bind(
        name=name,
        type=record_type.name,
        attempt=details["tries"],
        wait_seconds=round(details["wait"], 2),
    ).debug("dns_lookup_retry")


class RecordType(IntEnum):
    """DNS record type codes used by the validators."""

    A = 1
    MX = 15


class DnsStatus(IntEnum):
    """DNS response codes that carry a definitive answer."""

    NOERROR = 0
    NXDOMAIN = 3


class DnsAnswer(BaseModel):
    """One record from the resolver's Answer section."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = ""
    type: int
    ttl: int = Field(default=0, alias="TTL")
    data: str


class DnsResponse(BaseModel):
    """JSON body returned by a DoH resolver."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    status: int = Field(alias="Status")
    answer: list[DnsAnswer] = Field(default_factory=list, alias="Answer")

    @property
    def nxdomain(self) -> bool:
        return self.status == DnsStatus.NXDOMAIN

    def records(self, record_type: RecordType) -> list[DnsAnswer]:
        """Answers of the requested type (CNAME hops are skipped)."""
        return [a for a in self.answer if a.type == record_type]


class DnsOverHttpsClient:
    """
    Query a DNS-over-HTTPS resolver using its JSON API.

    ``resolve`` never raises for lookup problems: network errors, timeouts,
    HTTP errors, malformed JSON and non-definitive status codes all come back
    as ``None`` (inconclusive). NOERROR and NXDOMAIN responses are returned.
    HTTP 429 responses also bump ``throttled_count`` so callers can back off.
    """

    def __init__(
        self,
        resolver_url: str = "https://dns.google/resolve",
        timeout_seconds: float = 5.0,
        max_attempts: int = 2,
        backoff_factor: float = 0.5,
    ) -> None:
        """
        Initialize the client.

        Args:
            resolver_url: JSON DoH endpoint
            timeout_seconds: Total timeout for one HTTP request
            max_attempts: Attempts per lookup for transient network errors
            backoff_factor: Base delay in seconds for the exponential backoff between attempts
        """
        self.resolver_url = resolver_url
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._query_with_retry = backoff.on_exception(
            backoff.expo,
            (aiohttp.ClientError, TimeoutError),
            max_tries=max(1, max_attempts),
            factor=backoff_factor,
            on_backoff=_log_retry,
        )(self._query)
        self.throttled_count = 0

    async def resolve(self, name: str, record_type: RecordType) -> DnsResponse | None:
        """Look up records of ``record_type`` for ``name``."""
        try:
            return await self._query_with_retry(name, record_type)
        except TimeoutError:
            logger.bind(name=name, type=record_type.name).warning("dns_lookup_timeout")
            return None
        except aiohttp.ClientError as e:
            logger.bind(name=name, type=record_type.name, error=str(e)).warning(
                "dns_lookup_failed"
            )
            return None

    async def _query(self, name: str, record_type: RecordType) -> DnsResponse | None:
        async with aiohttp.ClientSession(timeout=self.timeout) as session:
            async with session.get(
                self.resolver_url,
                params={"name": name, "type": record_type.name},
                headers={"Accept": "application/dns-json"},
            ) as response:
                if response.status == 429:
                    self.throttled_count += 1
                    logger.bind(name=name).warning("dns_resolver_throttled")
                    return None
                if response.status != 200:
                    logger.bind(name=name, status=response.status).warning("dns_http_error")
                    return None
                try:
                    # Resolvers disagree on the content type, so accept any
                    payload = await response.json(content_type=None)
                except ValueError as e:
                    logger.bind(name=name, error=str(e)).warning("dns_malformed_response")
                    return None

        try:
            parsed = DnsResponse.model_validate(payload)
        except ValidationError as e:
            logger.bind(name=name, error=str(e)).warning("dns_malformed_response")
            return None

        if parsed.status not in (DnsStatus.NOERROR, DnsStatus.NXDOMAIN):
            logger.bind(name=name, status=parsed.status).debug("dns_lookup_inconclusive")
            return None

        return parsed
