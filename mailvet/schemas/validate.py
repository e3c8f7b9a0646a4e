from pydantic import BaseModel, Field, model_validator

from mailvet.services.email_validation.models import BulkSummary, CamelModel, ValidationResult


class ValidateRequest(BaseModel):
    """Request body for single email validation."""

    # Plain str: malformed addresses are reported by the syntax check, not rejected
    email: str = Field(max_length=1024)


class BulkValidateRequest(BaseModel):
    """Request body for bulk validation: a list of emails or free text."""

    emails: list[str] | None = None
    text: str | None = Field(default=None, max_length=200_000)

    @model_validator(mode="after")
    def require_input(self) -> "BulkValidateRequest":
        if self.emails is None and self.text is None:
            raise ValueError("Provide either 'emails' or 'text'")
        return self


class BulkValidateResponse(CamelModel):
    """Results in input order plus summary counts."""

    results: list[ValidationResult]
    summary: BulkSummary
