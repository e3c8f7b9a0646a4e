from typing import Annotated

from fastapi import Depends

from mailvet.config import Settings, get_settings
from mailvet.services.email_validation import EmailValidator, get_email_validator

# Type aliases for dependency injection
AppSettings = Annotated[Settings, Depends(get_settings)]
Validator = Annotated[EmailValidator, Depends(get_email_validator)]
