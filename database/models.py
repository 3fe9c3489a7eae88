"""SQLAlchemy ORM models for the questionnaire service.

`User` is the aggregate root; `Condition`, `FoodAvoidance` and `Response`
rows are owned by exactly one user and removed with it. Models stay
behavior-free, business rules live in the service layer.
"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import declarative_base, relationship
from datetime import datetime

Base = declarative_base()

CONDITION_NAME_MAX = 100
FOOD_NAME_MAX = 100
QUESTION_MAX = 255
ANSWER_MAX = 65535


class User(Base):
    """ORM model for the person who filled in the questionnaire."""

    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    age = Column(Integer, nullable=False)
    gender = Column(String(50), nullable=False)
    occupation = Column(String(255), nullable=True)
    location = Column(String(255), nullable=True)
    height_cm = Column(Integer, nullable=True)
    weight_kg = Column(Integer, nullable=True)
    marital_status = Column(String(50), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    conditions = relationship("Condition", back_populates="user", cascade="all, delete-orphan")
    foods = relationship("FoodAvoidance", back_populates="user", cascade="all, delete-orphan")
    responses = relationship("Response", back_populates="user", cascade="all, delete-orphan")


class Condition(Base):
    """A health condition reported by a user."""

    __tablename__ = "conditions"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    condition_name = Column(String(CONDITION_NAME_MAX), nullable=False)

    user = relationship("User", back_populates="conditions")


class FoodAvoidance(Base):
    """A food the user avoids or reacts to."""

    __tablename__ = "foods"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    food_name = Column(String(FOOD_NAME_MAX), nullable=False)

    user = relationship("User", back_populates="foods")


class Response(Base):
    """Answer to one free-form questionnaire question, stored with its label."""

    __tablename__ = "responses"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    question = Column(String(QUESTION_MAX), nullable=False)
    answer = Column(Text, nullable=True)

    user = relationship("User", back_populates="responses")
