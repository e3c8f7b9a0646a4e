"""Validation pipeline: runs the leaf checks and combines them into a verdict."""

import asyncio

from mailvet.core.cache import TTLCache
from mailvet.core.dedup import RequestDeduplicator
from mailvet.core.logging import get_logger
from mailvet.core.throttle import Throttle
from mailvet.services.dns_client import DnsOverHttpsClient

from .base import BaseEmailValidator
from .blacklist import BlacklistValidator
from .domain import DomainValidator
from .lists import (
    check_catch_all,
    check_disposable,
    check_free_provider,
    check_role_based,
    check_typo,
)
from .models import (
    BlacklistCheck,
    CatchAllCheck,
    CheckOutcome,
    Checks,
    Deliverability,
    DisposableCheck,
    DomainCheck,
    FreeProviderCheck,
    MXCheck,
    RiskLevel,
    RoleBasedCheck,
    SyntaxCheck,
    TypoCheck,
    ValidationResult,
)
from .mx import MXValidator
from .reference_data import ReferenceData
from .scoring import ScoringPolicy, deliverability, is_valid, risk_level
from .syntax import normalize_email, parse_email, validate_syntax

logger = get_logger(__name__)

NOT_CHECKED = "Not checked"


def inert_checks(syntax: SyntaxCheck, domain: DomainCheck | None = None) -> Checks:
    """Checks for a validation that stopped early: not checked, assumed clean."""
    return Checks(
        syntax=syntax,
        domain=domain or DomainCheck(valid=False, exists=False, message=NOT_CHECKED),
        mx=MXCheck(valid=False, message=NOT_CHECKED, outcome=CheckOutcome.INCONCLUSIVE),
        disposable=DisposableCheck(is_disposable=False, message=NOT_CHECKED),
        role_based=RoleBasedCheck(is_role_based=False),
        free_provider=FreeProviderCheck(is_free=False),
        typo=TypoCheck(has_typo=False),
        blacklisted=BlacklistCheck(is_blacklisted=False, outcome=CheckOutcome.INCONCLUSIVE),
        catch_all=CatchAllCheck(is_catch_all=False, message=NOT_CHECKED),
    )


def _as_requested(result: ValidationResult, email: str) -> ValidationResult:
    """Copy of a shared result addressed to one caller's spelling of the input."""
    update: dict = {}
    if result.email != email:
        update["email"] = email
    typo = result.checks.typo
    parsed = parse_email(email) if typo.has_typo else None
    if parsed is not None:
        suggested = f"{parsed.local_part}@{typo.suggestion}"
        if suggested != typo.suggested_email:
            update["checks"] = result.checks.model_copy(
                update={"typo": typo.model_copy(update={"suggested_email": suggested})}
            )
    return result.model_copy(update=update) if update else result


class EmailValidator(BaseEmailValidator):
    """
    Validate addresses with syntax, DNS and list checks.

    Syntax gates everything. A structurally valid domain is then checked for
    MX records and DNSBL listings concurrently; the list checks are pure
    lookups. Whole results are cached briefly by normalized address and
    concurrent requests for the same address share one run.

    Every collaborator can be injected; anything left out is built from
    ``dns_client`` with default settings.
    """

    def __init__(
        self,
        dns_client: DnsOverHttpsClient,
        reference_data: ReferenceData | None = None,
        scoring: ScoringPolicy | None = None,
        *,
        domain_validator: DomainValidator | None = None,
        mx_validator: MXValidator | None = None,
        blacklist_validator: BlacklistValidator | None = None,
        result_cache: TTLCache[ValidationResult] | None = None,
        throttle: Throttle | None = None,
        batch_size: int = 10,
        max_bulk_emails: int = 1000,
    ) -> None:
        self._dns = dns_client
        self.reference_data = reference_data or ReferenceData()
        self.scoring = scoring or ScoringPolicy()
        self._domain = domain_validator or DomainValidator()
        self._mx = mx_validator or MXValidator(dns_client)
        self._blacklist = blacklist_validator or BlacklistValidator(
            dns_client, self.reference_data.blacklist_hosts
        )
        self._results = (
            result_cache if result_cache is not None else TTLCache(max_size=1000, ttl_seconds=60)
        )
        self._dedup: RequestDeduplicator[ValidationResult] = RequestDeduplicator()
        self.batch_size = max(1, batch_size)
        self._throttle = throttle or Throttle(tokens_per_interval=self.batch_size)
        self.max_bulk_emails = max_bulk_emails

    async def validate(self, email: str) -> ValidationResult:
        """Validate one address. Raises TypeError for non-string input."""
        if not isinstance(email, str):
            raise TypeError(f"email must be a str, got {type(email).__name__}")

        key = normalize_email(email)
        cached = self._results.get(key)
        if cached is not None:
            logger.bind(email=key).debug("validation_cache_hit")
            return _as_requested(cached.refreshed(), email)

        result = await self._dedup.run(key, lambda: self._run(key))
        return _as_requested(result, email)

    async def validate_bulk(self, emails: list[str]) -> list[ValidationResult]:
        """
        Validate many addresses in throttled, concurrent batches.

        Duplicates (after normalization) are validated once. One address
        failing unexpectedly yields an UNKNOWN result for that address only.

        Raises:
            TypeError: emails is not a list of str
            ValueError: more than max_bulk_emails addresses
        """
        if not isinstance(emails, list) or not all(isinstance(e, str) for e in emails):
            raise TypeError("emails must be a list of str")
        if len(emails) > self.max_bulk_emails:
            raise ValueError(f"At most {self.max_bulk_emails} emails per bulk request")

        # First spelling of each normalized address
        unique: dict[str, str] = {}
        for email in emails:
            unique.setdefault(normalize_email(email), email)

        keys = list(unique)
        resolved: dict[str, ValidationResult] = {}
        for start in range(0, len(keys), self.batch_size):
            batch = keys[start : start + self.batch_size]
            await self._throttle.acquire(len(batch))

            throttled_before = self._dns.throttled_count
            results = await asyncio.gather(*(self._validate_isolated(unique[k]) for k in batch))
            resolved.update(zip(batch, results))

            if self._dns.throttled_count > throttled_before:
                self._throttle.penalize()
            else:
                self._throttle.reset()

        logger.bind(total=len(emails), unique=len(keys)).info("bulk_validation_completed")

        output: list[ValidationResult] = []
        for email in emails:
            output.append(_as_requested(resolved[normalize_email(email)], email))
        return output

    def clear_cache(self) -> None:
        """Drop cached whole-email results."""
        self._results.clear()

    async def _validate_isolated(self, email: str) -> ValidationResult:
        try:
            return await self.validate(email)
        except Exception as e:
            logger.bind(email=email, error=str(e)).exception("bulk_email_validation_failed")
            return self._unknown_result(email)

    async def _run(self, key: str) -> ValidationResult:
        syntax = validate_syntax(key)
        if not syntax.valid:
            result = self._build(key, inert_checks(syntax))
            self._results.set(key, result)
            return result

        parsed = parse_email(key)
        if parsed is None:
            return self._build(key, inert_checks(syntax))
        local_part, domain = parsed.local_part, parsed.domain

        domain_check = self._domain.validate(domain)
        if domain_check.valid:
            mx, blacklisted = await asyncio.gather(
                self._mx.validate(domain),
                self._blacklist.validate(domain),
            )
        else:
            mx = MXCheck(
                valid=False,
                message="Skipped: invalid domain",
                outcome=CheckOutcome.FAIL,
            )
            blacklisted = BlacklistCheck(is_blacklisted=False, outcome=CheckOutcome.INCONCLUSIVE)

        # Lookups that never got an answer are retried on the next request
        conclusive = mx.outcome != CheckOutcome.INCONCLUSIVE and (
            not domain_check.valid or blacklisted.outcome != CheckOutcome.INCONCLUSIVE
        )

        data = self.reference_data
        checks = Checks(
            syntax=syntax,
            domain=domain_check,
            mx=mx,
            disposable=check_disposable(domain, data),
            role_based=check_role_based(local_part, data),
            free_provider=check_free_provider(domain, data),
            typo=check_typo(local_part, domain, data),
            blacklisted=blacklisted,
            catch_all=check_catch_all(domain, data),
        )
        result = self._build(key, checks)
        if conclusive:
            self._results.set(key, result)

        logger.bind(
            email=key,
            score=result.score,
            deliverability=result.deliverability.value,
        ).debug("email_validated")
        return result

    def _build(self, email: str, checks: Checks) -> ValidationResult:
        score = self.scoring.score(checks)
        return ValidationResult(
            email=email,
            is_valid=is_valid(checks),
            score=score,
            checks=checks,
            deliverability=deliverability(checks),
            risk=risk_level(score),
        )

    def _unknown_result(self, email: str) -> ValidationResult:
        """Result for an address whose validation raised unexpectedly."""
        return ValidationResult(
            email=email,
            is_valid=False,
            score=0,
            checks=inert_checks(validate_syntax(email)),
            deliverability=Deliverability.UNKNOWN,
            risk=RiskLevel.HIGH,
        )
