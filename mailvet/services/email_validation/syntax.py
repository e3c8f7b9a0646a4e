"""Address syntax checks.

``validate_syntax`` splits on the first ``@`` so an address with several
``@`` signs keeps the extra ones in its domain and fails there.
``parse_email`` splits on the last ``@`` and is only meant for addresses
that already passed ``validate_syntax``, where both splits agree.
"""

from .models import ParsedEmail, SyntaxCheck
from .patterns import (
    EMAIL_PATTERN,
    MAX_DOMAIN_LENGTH,
    MAX_EMAIL_LENGTH,
    MAX_LOCAL_PART_LENGTH,
    TLD_PATTERN,
)

MSG_REQUIRED = "Email address is required"
MSG_MISSING_AT = "Email must contain an @ symbol"
MSG_MISSING_LOCAL = "Email must have a local part before @"
MSG_MISSING_DOMAIN = "Email must have a domain after @"
MSG_TOO_LONG = f"Email exceeds maximum length of {MAX_EMAIL_LENGTH} characters"
MSG_LOCAL_TOO_LONG = f"Local part exceeds maximum length of {MAX_LOCAL_PART_LENGTH} characters"
MSG_DOMAIN_TOO_LONG = f"Domain exceeds maximum length of {MAX_DOMAIN_LENGTH} characters"
MSG_CONSECUTIVE_DOTS = "Email cannot contain consecutive dots"
MSG_LOCAL_DOT = "Local part cannot start or end with a dot"
MSG_DOMAIN_DOT = "Domain cannot start or end with a dot"
MSG_INVALID_TLD = "Domain must have a valid TLD"
MSG_DOMAIN_HYPHEN = "Domain cannot start or end with a hyphen"
MSG_INVALID_FORMAT = "Invalid email format"
MSG_VALID = "Email syntax is valid"


def normalize_email(email: str) -> str:
    """Cache and deduplication key: trimmed and lowercased."""
    return email.strip().lower()


def _fail(message: str) -> SyntaxCheck:
    return SyntaxCheck(valid=False, message=message)


def validate_syntax(email: str) -> SyntaxCheck:
    """Check the shape of an address. Never raises for bad input text."""
    email = email.strip()

    if not email:
        return _fail(MSG_REQUIRED)

    if "@" not in email:
        return _fail(MSG_MISSING_AT)

    local_part, _, domain = email.partition("@")

    if not local_part:
        return _fail(MSG_MISSING_LOCAL)

    if not domain:
        return _fail(MSG_MISSING_DOMAIN)

    # Length limits come first so oversized input gets a length message
    if len(email) > MAX_EMAIL_LENGTH:
        return _fail(MSG_TOO_LONG)

    if len(local_part) > MAX_LOCAL_PART_LENGTH:
        return _fail(MSG_LOCAL_TOO_LONG)

    if len(domain) > MAX_DOMAIN_LENGTH:
        return _fail(MSG_DOMAIN_TOO_LONG)

    if ".." in email:
        return _fail(MSG_CONSECUTIVE_DOTS)

    if local_part.startswith(".") or local_part.endswith("."):
        return _fail(MSG_LOCAL_DOT)

    if domain.startswith(".") or domain.endswith("."):
        return _fail(MSG_DOMAIN_DOT)

    if "." not in domain or not TLD_PATTERN.fullmatch(domain.rsplit(".", 1)[1]):
        return _fail(MSG_INVALID_TLD)

    if any(label.startswith("-") or label.endswith("-") for label in domain.split(".")):
        return _fail(MSG_DOMAIN_HYPHEN)

    if not EMAIL_PATTERN.fullmatch(email):
        return _fail(MSG_INVALID_FORMAT)

    return SyntaxCheck(valid=True, message=MSG_VALID)


def parse_email(email: str) -> ParsedEmail | None:
    """Split an address on its last ``@``. Returns None without an ``@``."""
    email = email.strip()
    if "@" not in email:
        return None
    local_part, _, domain = email.rpartition("@")
    return ParsedEmail(local_part=local_part, domain=domain.lower())
