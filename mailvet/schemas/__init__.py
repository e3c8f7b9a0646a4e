from mailvet.schemas.validate import BulkValidateRequest, BulkValidateResponse, ValidateRequest

__all__ = [
    "BulkValidateRequest",
    "BulkValidateResponse",
    "ValidateRequest",
]
