from fastapi import APIRouter, HTTPException, Query, Request, status

from mailvet.core.logging import get_logger
from mailvet.core.rate_limit import bulk_limit, limiter, single_limit
from mailvet.dependencies import AppSettings, Validator
from mailvet.schemas.validate import BulkValidateRequest, BulkValidateResponse, ValidateRequest
from mailvet.services.email_validation import ValidationResult, parse_email_list, summarize

logger = get_logger(__name__)

router = APIRouter()


@router.post("/validate", response_model=ValidationResult)
@limiter.limit(single_limit)
async def validate_email(
    request: Request,
    body: ValidateRequest,
    validator: Validator,
) -> ValidationResult:
    """
    Validate a single email address.

    Runs syntax, domain, MX, disposable, role-based, free provider, typo,
    blacklist and catch-all checks and returns the combined verdict.
    """
    return await validator.validate(body.email)


@router.get("/validate", response_model=ValidationResult)
@limiter.limit(single_limit)
async def validate_email_query(
    request: Request,
    validator: Validator,
    email: str = Query(max_length=1024),
) -> ValidationResult:
    """Validate a single email address passed as a query parameter."""
    return await validator.validate(email)


@router.post("/validate-bulk", response_model=BulkValidateResponse)
@limiter.limit(bulk_limit)
async def validate_bulk(
    request: Request,
    body: BulkValidateRequest,
    validator: Validator,
    settings: AppSettings,
) -> BulkValidateResponse:
    """
    Validate many email addresses.

    Accepts either a list of emails or free text (one address per line, or
    separated by commas or semicolons). Results keep the input order.
    """
    emails = body.emails if body.emails is not None else parse_email_list(body.text or "")
    emails = [e for e in emails if e.strip()]

    if not emails:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No email addresses provided",
        )
    if len(emails) > settings.bulk_max_emails:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"At most {settings.bulk_max_emails} emails per request",
        )

    results = await validator.validate_bulk(emails)
    summary = summarize(results)

    logger.bind(total=summary.total, valid=summary.valid).info("bulk_request_completed")

    return BulkValidateResponse(results=results, summary=summary)
