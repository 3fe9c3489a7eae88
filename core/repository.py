"""Persistence helpers for questionnaire submissions.

`unit_of_work` wraps a session in a single transaction: everything done
inside the block is committed together or rolled back together.
`SubmissionRepository` only adds and flushes rows, it never commits on its
own, so its inserts always belong to the caller's unit of work.
"""

from contextlib import contextmanager
from typing import Iterable, Iterator, List, Optional, Tuple

from sqlalchemy.orm import Session, selectinload

from database.models import (
    ANSWER_MAX,
    CONDITION_NAME_MAX,
    FOOD_NAME_MAX,
    QUESTION_MAX,
    Condition,
    FoodAvoidance,
    Response,
    User,
)


@contextmanager
def unit_of_work(session: Session) -> Iterator[Session]:
    """Commit the session when the block exits cleanly, roll back otherwise.

    Args:
        session: Database session that owns the transaction.

    Yields:
        The same session, for use inside the block.
    """
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise


class SubmissionRepository:
    """Inserts and loads the user aggregate (user + conditions + foods + responses).

    Attributes:
        session: Database session for executing statements.
    """

    def __init__(self, session: Session):
        self.session = session

    def add_user(
        self,
        name: str,
        email: str,
        age: int,
        gender: str,
        occupation: Optional[str] = None,
        location: Optional[str] = None,
        height_cm: Optional[int] = None,
        weight_kg: Optional[int] = None,
        marital_status: Optional[str] = None,
    ) -> User:
        """Insert a user row and flush so the generated id is available.

        Raises:
            sqlalchemy.exc.IntegrityError: If the email is already stored.
        """
        user = User(
            name=name,
            email=email,
            age=age,
            gender=gender,
            occupation=occupation,
            location=location,
            height_cm=height_cm,
            weight_kg=weight_kg,
            marital_status=marital_status,
        )
        self.session.add(user)
        self.session.flush()
        return user

    def add_conditions(self, user_id: int, names: Iterable[str]) -> List[Condition]:
        rows = [Condition(user_id=user_id, condition_name=n[:CONDITION_NAME_MAX]) for n in names]
        return self._flush_all(rows)

    def add_foods(self, user_id: int, names: Iterable[str]) -> List[FoodAvoidance]:
        rows = [FoodAvoidance(user_id=user_id, food_name=n[:FOOD_NAME_MAX]) for n in names]
        return self._flush_all(rows)

    def add_responses(self, user_id: int, answers: Iterable[Tuple[str, str]]) -> List[Response]:
        """Insert one response row per (question label, answer) pair."""
        rows = [
            Response(user_id=user_id, question=question[:QUESTION_MAX], answer=answer[:ANSWER_MAX])
            for question, answer in answers
        ]
        return self._flush_all(rows)

    def get_user(self, user_id: int) -> Optional[User]:
        """Load a user together with all owned child rows, or None."""
        return (
            self.session.query(User)
            .options(
                selectinload(User.conditions),
                selectinload(User.foods),
                selectinload(User.responses),
            )
            .filter(User.id == user_id)
            .first()
        )

    def _flush_all(self, rows):
        if not rows:
            return rows
        self.session.add_all(rows)
        self.session.flush()
        return rows
