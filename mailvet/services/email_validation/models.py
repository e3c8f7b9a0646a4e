"""Email validation models.

Attributes are snake_case in Python and camelCase on the wire, so a result
serialized with ``model_dump(by_alias=True)`` validates back unchanged.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from mailvet.core.datetime_utils import to_utc, utc_now


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class CheckOutcome(str, Enum):
    """Result of a check that depends on a network lookup."""

    PASS = "pass"
    FAIL = "fail"
    INCONCLUSIVE = "inconclusive"  # Lookup failed, timed out or was malformed


class Deliverability(str, Enum):
    """Overall deliverability verdict."""

    DELIVERABLE = "deliverable"
    RISKY = "risky"  # Disposable, blacklisted or catch-all
    UNDELIVERABLE = "undeliverable"  # Bad syntax, bad domain or no MX
    UNKNOWN = "unknown"  # MX could not be verified


class RiskLevel(str, Enum):
    """Risk band derived from the score."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ParsedEmail(CamelModel):
    local_part: str
    domain: str


class SyntaxCheck(CamelModel):
    valid: bool
    message: str


class DomainCheck(CamelModel):
    valid: bool
    exists: bool
    message: str


class MXCheck(CamelModel):
    valid: bool
    records: list[str] = Field(default_factory=list)
    message: str
    outcome: CheckOutcome


class DisposableCheck(CamelModel):
    is_disposable: bool
    message: str


class RoleBasedCheck(CamelModel):
    is_role_based: bool
    role: str | None = None


class FreeProviderCheck(CamelModel):
    is_free: bool
    provider: str | None = None


class TypoCheck(CamelModel):
    has_typo: bool
    suggestion: str | None = None  # Corrected domain
    suggested_email: str | None = None


class BlacklistCheck(CamelModel):
    is_blacklisted: bool
    lists: list[str] = Field(default_factory=list)
    outcome: CheckOutcome


class CatchAllCheck(CamelModel):
    is_catch_all: bool
    message: str


class Checks(CamelModel):
    """The nine sub-results of one validation. Always complete."""

    syntax: SyntaxCheck
    domain: DomainCheck
    mx: MXCheck
    disposable: DisposableCheck
    role_based: RoleBasedCheck
    free_provider: FreeProviderCheck
    typo: TypoCheck
    blacklisted: BlacklistCheck
    catch_all: CatchAllCheck


class ValidationResult(CamelModel):
    """Full verdict for one email address."""

    email: str
    is_valid: bool
    score: int = Field(ge=0, le=100)
    checks: Checks
    deliverability: Deliverability
    risk: RiskLevel
    timestamp: datetime = Field(default_factory=utc_now)

    @field_validator("timestamp")
    @classmethod
    def _normalize_timestamp(cls, value: datetime) -> datetime:
        return to_utc(value)

    def refreshed(self, email: str | None = None) -> "ValidationResult":
        """Shallow copy with a new timestamp, optionally for another input spelling."""
        update: dict = {"timestamp": utc_now()}
        if email is not None:
            update["email"] = email
        return self.model_copy(update=update)


class BulkSummary(CamelModel):
    """Counts over a list of results."""

    total: int = 0
    valid: int = 0
    invalid: int = 0
    deliverable: int = 0
    risky: int = 0
    undeliverable: int = 0
    unknown: int = 0
