# app/models/schemas.py
from typing import Annotated, Any

import email_validator
from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, BeforeValidator, Field

from app.utils.validation import is_valid_object_id

# Syntax-only email checks: addresses on private/special-use domains
# (school.local, lab.internal, ...) are accepted.
email_validator.SPECIAL_USE_DOMAIN_NAMES.clear()


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def _normalize_email(value: Any) -> Any:
    return value.strip().lower() if isinstance(value, str) else value


def _check_email(value: str) -> str:
    if "<" in value or ">" in value:
        raise ValueError("Invalid email")
    try:
        validate_email(value, check_deliverability=False, globally_deliverable=False)
    except EmailNotValidError as e:
        raise ValueError(f"Invalid email: {e}") from e
    # the address is stored as given (trimmed, lowercased), not as rewritten by the validator
    return value


def _check_object_id(value: str) -> str:
    if not is_valid_object_id(value):
        raise ValueError("Invalid ObjectId")
    return value


# Stored ObjectIds are exposed to clients as plain hex strings
ObjectIdStr = Annotated[str, BeforeValidator(str)]

ObjectIdParam = Annotated[str, AfterValidator(_check_object_id)]
NonEmptyStr = Annotated[str, BeforeValidator(_strip), Field(min_length=1)]
NormalizedEmail = Annotated[str, BeforeValidator(_normalize_email), AfterValidator(_check_email)]
NonNegativeInt = Annotated[int, Field(strict=True, ge=0)]


class MessageResponse(BaseModel):
    message: str
