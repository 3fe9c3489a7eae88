"""Schemas for questionnaire submissions and their stored representation."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

# Keys a submission must carry, with the message shown when one is missing.
REQUIRED_FIELDS: Dict[str, str] = {
    "name": "Name is required.",
    "email": "Email is required.",
    "age": "Age is required.",
    "gender": "Gender is required.",
    "meals_per_day": "Meals per day is required.",
    "skip_breakfast": "Breakfast question is required.",
    "foods_avoid": "Foods to avoid is required.",
    "water_intake": "Water intake is required.",
    "activity_level": "Activity level is required.",
    "sleep_hours": "Sleep hours is required.",
    "smoke": "Smoking status is required.",
    "alcohol": "Alcohol use is required.",
    "stress_level": "Stress level is required.",
    "primary_goal": "Primary goal is required.",
    "timeframe": "Time frame is required.",
    "additional_info": "Additional info is required.",
    "on_medication": "Medication question is required.",
}

INVALID_EMAIL_MESSAGE = "Invalid email address."

# Free-form questions recorded as response rows whenever they were submitted.
RESPONSE_LABELS: Dict[str, str] = {
    "allergies": "Allergies (food/medication)",
    "symptoms": "Recent symptoms",
    "on_medication": "Currently on medication",
    "medication_details": "Medication details",
    "meals_per_day": "Meals per day",
    "skip_breakfast": "Do you skip breakfast?",
    "foods_avoid": "Foods you avoid",
    "water_intake": "Daily water intake",
    "activity_level": "Physical activity level",
    "sleep_hours": "Average sleep per night",
    "smoke": "Do you smoke?",
    "alcohol": "Alcohol consumption",
    "stress_level": "Stress level",
    "supplements": "Supplements",
    "primary_goal": "Primary health goal",
    "timeframe": "Target time frame",
    "additional_info": "Additional information",
}

LIST_FIELDS = ("conditions", "foods", "symptoms")


class QuestionnaireSubmission(BaseModel):
    """Raw questionnaire values as received from the form.

    Every field is optional at this level so that validation can report all
    missing fields together. `model_fields_set` records which keys the
    caller actually supplied.
    """

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    name: Optional[str] = None
    email: Optional[str] = None
    age: Optional[str] = None
    gender: Optional[str] = None
    occupation: Optional[str] = None
    location: Optional[str] = None
    height_cm: Optional[str] = None
    weight_kg: Optional[str] = None
    marital_status: Optional[str] = None

    allergies: Optional[str] = None
    symptoms: Optional[Union[str, List[str]]] = None
    on_medication: Optional[str] = None
    medication_details: Optional[str] = None
    meals_per_day: Optional[str] = None
    skip_breakfast: Optional[str] = None
    foods_avoid: Optional[str] = None
    water_intake: Optional[str] = None
    activity_level: Optional[str] = None
    sleep_hours: Optional[str] = None
    smoke: Optional[str] = None
    alcohol: Optional[str] = None
    stress_level: Optional[str] = None
    supplements: Optional[str] = None
    primary_goal: Optional[str] = None
    timeframe: Optional[str] = None
    additional_info: Optional[str] = None

    conditions: List[str] = Field(default_factory=list)
    foods: List[str] = Field(default_factory=list)

    @field_validator("conditions", "foods", mode="before")
    @classmethod
    def _as_list(cls, value: Any) -> List[Any]:
        """Accept a lone value or None where a list of values is expected."""
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return [v for v in value if v is not None]
        return [value]

    @classmethod
    def from_form_items(cls, items: Iterable[Tuple[str, Any]]) -> "QuestionnaireSubmission":
        """Build a submission from raw form pairs.

        Keys may carry a trailing ``[]`` (``conditions[]``). List fields
        collect every value; for any other repeated key the last value wins.
        """
        data: Dict[str, Any] = {}
        for raw_key, value in items:
            if not isinstance(value, str):
                # uploaded files are not part of the questionnaire
                continue
            is_array = raw_key.endswith("[]")
            key = raw_key[:-2] if is_array else raw_key
            if key in LIST_FIELDS:
                previous = data.get(key)
                if previous is None:
                    data[key] = [value] if is_array or key != "symptoms" else value
                elif isinstance(previous, list):
                    previous.append(value)
                else:
                    data[key] = [previous, value]
            else:
                data[key] = value
        return cls.model_validate(data)


class FieldError(BaseModel):
    """A single validation failure."""

    field: str
    code: str = Field(..., description="'required' or 'invalid_email'")
    message: str


class ResponseItem(BaseModel):
    question: str
    answer: Optional[str] = None


class SubmissionDetail(BaseModel):
    """Stored submission returned by the read-back endpoint."""

    user_id: int
    name: str
    email: str
    age: int
    gender: str
    occupation: Optional[str] = None
    location: Optional[str] = None
    height_cm: Optional[int] = None
    weight_kg: Optional[int] = None
    marital_status: Optional[str] = None
    conditions: List[str]
    foods: List[str]
    responses: List[ResponseItem]
    created_at: Optional[str] = None
