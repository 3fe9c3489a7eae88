"""Normalization of validated submissions into storable values."""

import re
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from schemas.submission_schema import RESPONSE_LABELS, QuestionnaireSubmission

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def to_int(value: Any) -> int:
    """Coerce a form value to an integer using its leading digits.

    ``"72.5"`` becomes 72 and ``"abc"`` becomes 0.
    """
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0


def optional_int(value: Optional[str]) -> Optional[int]:
    """Like `to_int`, but blank or missing values become None."""
    if value is None or str(value).strip() == "":
        return None
    return to_int(value)


def clean_list(values: List[str]) -> List[str]:
    """Trim every element and drop the blank ones."""
    return [v.strip() for v in values if v is not None and v.strip()]


def _text(value: Optional[str]) -> str:
    return value.strip() if value is not None else ""


def _optional_text(value: Optional[str]) -> Optional[str]:
    text = _text(value)
    return text or None


@dataclass
class NormalizedSubmission:
    """Trimmed and typed submission values ready to be persisted."""

    name: str
    email: str
    age: int
    gender: str
    occupation: Optional[str] = None
    location: Optional[str] = None
    height_cm: Optional[int] = None
    weight_kg: Optional[int] = None
    marital_status: Optional[str] = None
    conditions: List[str] = field(default_factory=list)
    foods: List[str] = field(default_factory=list)
    responses: List[Tuple[str, str]] = field(default_factory=list)


def _answer(value: Any) -> str:
    if isinstance(value, list):
        # blank entries keep their slot in the joined answer
        return ", ".join(_text(v) for v in value)
    return _text(value)


def collect_responses(submission: QuestionnaireSubmission) -> List[Tuple[str, str]]:
    """Return (question label, answer) pairs for every recorded question.

    A question is recorded when its key was supplied, even with an empty
    value, or when it carries a non-empty value. List answers are joined
    with ``", "``.
    """
    supplied = submission.model_fields_set
    pairs = []
    for key, label in RESPONSE_LABELS.items():
        value = getattr(submission, key)
        answer = _answer(value)
        if answer == "" and key not in supplied:
            continue
        pairs.append((label, answer))
    return pairs


def normalize_submission(submission: QuestionnaireSubmission) -> NormalizedSubmission:
    """Convert a validated submission into a `NormalizedSubmission`."""
    return NormalizedSubmission(
        name=_text(submission.name),
        email=_text(submission.email),
        age=to_int(submission.age),
        gender=_text(submission.gender),
        occupation=_optional_text(submission.occupation),
        location=_optional_text(submission.location),
        height_cm=optional_int(submission.height_cm),
        weight_kg=optional_int(submission.weight_kg),
        marital_status=_optional_text(submission.marital_status),
        conditions=clean_list(submission.conditions),
        foods=clean_list(submission.foods),
        responses=collect_responses(submission),
    )
