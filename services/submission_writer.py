"""Submission writer: validates, stores and announces a questionnaire.

`SubmissionWriter.submit` runs one linear pass:

1. validate the raw submission (no side effects on failure);
2. normalize the values;
3. insert the user and its conditions, foods and responses in one unit of
   work, so either everything is stored or nothing is;
4. hand the two notification emails to the scheduler once the transaction
   has committed.

The result is one of the `Outcome` variants below; only programming errors
escape as exceptions.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Mapping, Optional, Union

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import DuplicateEmailError, StorageError
from core.logger import get_logger, mask_email
from core.repository import SubmissionRepository, unit_of_work
from schemas.submission_schema import FieldError, QuestionnaireSubmission
from services.normalization import NormalizedSubmission, normalize_submission
from services.notifier import EmailNotifier
from services.validation import validate_submission

logger = get_logger("services.submission_writer")


class FailureReason(str, Enum):
    DUPLICATE_EMAIL = "duplicate_email"
    STORAGE_ERROR = "storage_error"


@dataclass(frozen=True)
class Rejected:
    """The submission failed validation; nothing was stored."""

    errors: List[FieldError] = field(default_factory=list)

    @property
    def messages(self) -> List[str]:
        return [e.message for e in self.errors]


@dataclass(frozen=True)
class Failed:
    """The submission was valid but could not be stored."""

    reason: FailureReason
    message: str


@dataclass(frozen=True)
class Accepted:
    """The submission is durably stored."""

    user_id: int
    name: str
    email: str


Outcome = Union[Rejected, Failed, Accepted]

# Receives a callable plus its arguments, e.g. `BackgroundTasks.add_task`.
Scheduler = Callable[..., Any]


def _run_now(func: Callable[..., Any], *args: Any) -> None:
    func(*args)


def is_duplicate_email(exc: IntegrityError) -> bool:
    """Tell a unique violation on ``users.email`` apart from other integrity errors."""
    text = str(exc.orig).lower()
    return "email" in text and ("unique" in text or "duplicate" in text)


class SubmissionWriter:
    """Stores questionnaire submissions and triggers their notifications.

    Args:
        session: Write session; the writer owns its transaction for the
            duration of `submit`.
        notifier: Email dispatcher. When None no emails are sent.
    """

    def __init__(self, session: Session, notifier: Optional[EmailNotifier] = None):
        self.session = session
        self.notifier = notifier

    def submit(
        self,
        submission: Union[QuestionnaireSubmission, Mapping[str, Any]],
        schedule: Optional[Scheduler] = None,
    ) -> Outcome:
        """Validate, persist and announce one submission.

        Args:
            submission: Raw questionnaire values.
            schedule: Runs the notification step. Defaults to running it
                inline; the HTTP layer passes `BackgroundTasks.add_task`.

        Returns:
            `Rejected`, `Failed` or `Accepted`.
        """
        if not isinstance(submission, QuestionnaireSubmission):
            submission = QuestionnaireSubmission.model_validate(submission)

        errors = validate_submission(submission)
        if errors:
            logger.info("Submission rejected: %s", [e.field for e in errors])
            return Rejected(errors=errors)

        data = normalize_submission(submission)
        outcome = self._persist(data)

        if isinstance(outcome, Accepted) and self.notifier is not None:
            (schedule or _run_now)(self.notifier.notify_submission, outcome.name, outcome.email)
        return outcome

    def _persist(self, data: NormalizedSubmission) -> Outcome:
        try:
            with unit_of_work(self.session):
                repo = SubmissionRepository(self.session)
                try:
                    user = repo.add_user(
                        name=data.name,
                        email=data.email,
                        age=data.age,
                        gender=data.gender,
                        occupation=data.occupation,
                        location=data.location,
                        height_cm=data.height_cm,
                        weight_kg=data.weight_kg,
                        marital_status=data.marital_status,
                    )
                except IntegrityError as exc:
                    if is_duplicate_email(exc):
                        raise DuplicateEmailError(data.email) from exc
                    raise
                repo.add_conditions(user.id, data.conditions)
                repo.add_foods(user.id, data.foods)
                repo.add_responses(user.id, data.responses)
                user_id = user.id
        except DuplicateEmailError as exc:
            logger.info("Duplicate email rejected: %s", mask_email(data.email))
            return Failed(FailureReason.DUPLICATE_EMAIL, exc.message)
        except SQLAlchemyError:
            logger.exception("Could not store submission for %s", mask_email(data.email))
            return Failed(FailureReason.STORAGE_ERROR, StorageError().message)

        logger.info(
            "Submission stored: user_id=%s conditions=%s foods=%s responses=%s",
            user_id,
            len(data.conditions),
            len(data.foods),
            len(data.responses),
        )
        return Accepted(user_id=user_id, name=data.name, email=data.email)


def submit(
    session: Session,
    submission: Union[QuestionnaireSubmission, Mapping[str, Any]],
    notifier: Optional[EmailNotifier] = None,
    schedule: Optional[Scheduler] = None,
) -> Outcome:
    """Functional shortcut for `SubmissionWriter(session, notifier).submit(...)`."""
    return SubmissionWriter(session, notifier).submit(submission, schedule=schedule)
