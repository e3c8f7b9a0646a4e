"""Abstract base class for email validators."""

from abc import ABC, abstractmethod

from .models import Deliverability, ValidationResult


class BaseEmailValidator(ABC):
    """Abstract base class for email validators."""

    @abstractmethod
    async def validate(self, email: str) -> ValidationResult:
        """
        Validate a single email address.

        Args:
            email: The email address to validate

        Returns:
            ValidationResult with all nine checks, score and verdict
        """
        pass

    @abstractmethod
    async def validate_bulk(self, emails: list[str]) -> list[ValidationResult]:
        """
        Validate multiple email addresses.

        Args:
            emails: List of email addresses

        Returns:
            List of ValidationResults in same order
        """
        pass

    def should_allow(self, result: ValidationResult) -> bool:
        """
        Determine if an address should be accepted, e.g. on a signup form.

        Default policy: allow everything except UNDELIVERABLE (fail open on
        UNKNOWN so resolver outages do not block users).
        """
        return result.deliverability != Deliverability.UNDELIVERABLE
