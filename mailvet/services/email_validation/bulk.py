"""Helpers around bulk validation input and output."""

from .models import BulkSummary, Deliverability, ValidationResult
from .patterns import BULK_SEPARATOR_PATTERN
from .syntax import normalize_email


def parse_email_list(text: str) -> list[str]:
    """
    Extract addresses from pasted text or an uploaded file.

    Entries may be separated by newlines, commas or semicolons. Entries
    without an ``@`` are dropped and case-insensitive duplicates keep their
    first occurrence.
    """
    seen: set[str] = set()
    emails: list[str] = []
    for entry in BULK_SEPARATOR_PATTERN.split(text):
        entry = entry.strip()
        if "@" not in entry:
            continue
        key = normalize_email(entry)
        if key in seen:
            continue
        seen.add(key)
        emails.append(entry)
    return emails


def summarize(results: list[ValidationResult]) -> BulkSummary:
    """Count results by validity and deliverability."""
    counts = {d: 0 for d in Deliverability}
    valid = 0
    for result in results:
        counts[result.deliverability] += 1
        if result.is_valid:
            valid += 1

    return BulkSummary(
        total=len(results),
        valid=valid,
        invalid=len(results) - valid,
        deliverable=counts[Deliverability.DELIVERABLE],
        risky=counts[Deliverability.RISKY],
        undeliverable=counts[Deliverability.UNDELIVERABLE],
        unknown=counts[Deliverability.UNKNOWN],
    )
