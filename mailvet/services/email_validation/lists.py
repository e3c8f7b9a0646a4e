"""Checks answered from the static reference lists. Pure and synchronous."""

from .models import (
    CatchAllCheck,
    DisposableCheck,
    FreeProviderCheck,
    RoleBasedCheck,
    TypoCheck,
)
from .reference_data import ReferenceData


def check_disposable(domain: str, data: ReferenceData) -> DisposableCheck:
    if domain.lower() in data.disposable_domains:
        return DisposableCheck(is_disposable=True, message="Disposable email detected")
    return DisposableCheck(is_disposable=False, message="Not a disposable email")


def check_role_based(local_part: str, data: ReferenceData) -> RoleBasedCheck:
    """Match the local part, ignoring any +tag, against role prefixes."""
    base = local_part.lower().split("+", 1)[0]
    if base in data.role_prefixes:
        return RoleBasedCheck(is_role_based=True, role=base)
    return RoleBasedCheck(is_role_based=False)


def check_free_provider(domain: str, data: ReferenceData) -> FreeProviderCheck:
    provider = data.free_providers.get(domain.lower())
    if provider:
        return FreeProviderCheck(is_free=True, provider=provider)
    return FreeProviderCheck(is_free=False)


def check_typo(local_part: str, domain: str, data: ReferenceData) -> TypoCheck:
    """Exact known-typo lookup. No fuzzy matching."""
    corrected = data.typo_domains.get(domain.lower())
    if corrected:
        return TypoCheck(
            has_typo=True,
            suggestion=corrected,
            suggested_email=f"{local_part}@{corrected}",
        )
    return TypoCheck(has_typo=False)


def check_catch_all(domain: str, data: ReferenceData) -> CatchAllCheck:
    # Real detection needs an SMTP RCPT probe; this only knows listed domains
    if domain.lower() in data.catch_all_domains:
        return CatchAllCheck(is_catch_all=True, message="Domain is known to accept all addresses")
    return CatchAllCheck(
        is_catch_all=False,
        message="Not a known catch-all domain (heuristic, no SMTP probe)",
    )
