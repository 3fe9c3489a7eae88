"""Questionnaire submission router.

`POST /submit` receives the browser form, stores it through the
`SubmissionWriter` and answers with an HTML confirmation page. Rejected or
failed submissions are raised as application exceptions and rendered as an
HTML error listing by the registered handlers. Notification emails run as a
background task after the response is sent.
"""

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session
from database.deps import get_db_read, get_db_write
from core.exceptions import DuplicateEmailError, NotFoundError, StorageError, SubmissionValidationError
from core.logger import get_logger
from core.repository import SubmissionRepository
from schemas import QuestionnaireSubmission, ResponseItem, SubmissionDetail
from services.notifier import EmailNotifier, get_notifier
from services.pages import render_confirmation
from services.submission_writer import FailureReason, Failed, Rejected, SubmissionWriter

logger = get_logger("api.submissions")
router = APIRouter(tags=["submissions"])


async def submission_form(request: Request) -> QuestionnaireSubmission:
    """Parse the form-encoded body into a `QuestionnaireSubmission`."""
    form = await request.form()
    return QuestionnaireSubmission.from_form_items(form.multi_items())


@router.post("/submit", response_class=HTMLResponse)
def submit_questionnaire(
    background_tasks: BackgroundTasks,
    submission: QuestionnaireSubmission = Depends(submission_form),
    db: Session = Depends(get_db_write),
    notifier: EmailNotifier = Depends(get_notifier),
):
    """Store a questionnaire submission and return the confirmation page.

    Raises:
        SubmissionValidationError: Required fields missing or email invalid (422).
        DuplicateEmailError: The email is already registered (409).
        StorageError: The transaction could not be committed (500).
    """
    writer = SubmissionWriter(db, notifier)
    outcome = writer.submit(submission, schedule=background_tasks.add_task)

    if isinstance(outcome, Rejected):
        raise SubmissionValidationError(outcome.messages)
    if isinstance(outcome, Failed):
        if outcome.reason is FailureReason.DUPLICATE_EMAIL:
            raise DuplicateEmailError((submission.email or "").strip())
        raise StorageError(operation="submit")

    logger.info("Questionnaire accepted for user_id=%s", outcome.user_id)
    return HTMLResponse(render_confirmation(outcome.name, outcome.email))


@router.get("/api/submissions/{user_id}", response_model=SubmissionDetail)
def get_submission(user_id: int, db: Session = Depends(get_db_read)):
    """Return a stored submission with its conditions, foods and responses.

    Raises:
        NotFoundError: If no user with this id exists.
    """
    user = SubmissionRepository(db).get_user(user_id)
    if user is None:
        raise NotFoundError("Submission", user_id)

    return SubmissionDetail(
        user_id=user.id,
        name=user.name,
        email=user.email,
        age=user.age,
        gender=user.gender,
        occupation=user.occupation,
        location=user.location,
        height_cm=user.height_cm,
        weight_kg=user.weight_kg,
        marital_status=user.marital_status,
        conditions=[c.condition_name for c in user.conditions],
        foods=[f.food_name for f in user.foods],
        responses=[ResponseItem(question=r.question, answer=r.answer) for r in user.responses],
        created_at=user.created_at.isoformat() if user.created_at else None,
    )
