"""Field validation for questionnaire submissions.

Validation is pure: it reads the submission and returns a list of
`FieldError` objects without touching storage or mutating its input.
"""

from typing import Any, List

from email_validator import EmailNotValidError, validate_email

from schemas.submission_schema import (
    INVALID_EMAIL_MESSAGE,
    REQUIRED_FIELDS,
    FieldError,
    QuestionnaireSubmission,
)


def is_filled(value: Any) -> bool:
    """Return True when a value is present and not blank once trimmed."""
    if value is None:
        return False
    if isinstance(value, list):
        return any(is_filled(v) for v in value)
    return str(value).strip() != ""


def is_valid_email(value: str) -> bool:
    """Check address syntax only; no DNS or deliverability lookup.

    Internationalized (SMTPUTF8) addresses are rejected, the SMTP transport
    only carries ASCII addresses.
    """
    try:
        validate_email(value.strip(), check_deliverability=False, allow_smtputf8=False)
    except EmailNotValidError:
        return False
    return True


def validate_submission(submission: QuestionnaireSubmission) -> List[FieldError]:
    """Collect every validation error for a submission.

    One `required` error is reported per missing or blank required field,
    in form order. A present email with bad syntax adds an `invalid_email`
    error right after the email check.
    """
    errors: List[FieldError] = []
    for field, message in REQUIRED_FIELDS.items():
        value = getattr(submission, field)
        if not is_filled(value):
            errors.append(FieldError(field=field, code="required", message=message))
        elif field == "email" and not is_valid_email(value):
            errors.append(FieldError(field="email", code="invalid_email", message=INVALID_EMAIL_MESSAGE))
    return errors
