"""Pydantic schema package for request and response models."""

from .submission_schema import (
    QuestionnaireSubmission,
    FieldError,
    ResponseItem,
    SubmissionDetail,
    REQUIRED_FIELDS,
    RESPONSE_LABELS,
    INVALID_EMAIL_MESSAGE,
)

__all__ = [
    "QuestionnaireSubmission",
    "FieldError",
    "ResponseItem",
    "SubmissionDetail",
    "REQUIRED_FIELDS",
    "RESPONSE_LABELS",
    "INVALID_EMAIL_MESSAGE",
]
