import os

# Must be set before lms_grades.core.config is imported
os.environ["DATABASE_URL"] = "sqlite://"

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from lms_grades.core.database import Base, SessionLocal, engine, get_db
from lms_grades.core.limiter import limiter
from lms_grades.models import (
    Course,
    CourseEnrollment,
    Quiz,
    QuizAttempt,
    QuizQuestion,
)

BASE_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    from main import app

    app.dependency_overrides[get_db] = lambda: db
    limiter.reset()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ==================== Data helpers ====================


def make_course(db, title="Intro to Biology"):
    course = Course(title=title)
    db.add(course)
    db.commit()
    return course


def enroll(db, course, user_id, progress=0):
    enrollment = CourseEnrollment(user_id=user_id, course_id=course.id, progress=progress)
    db.add(enrollment)
    db.commit()
    return enrollment


def make_quiz(db, course, title="Quiz", passing_score=60, weight=None, published=True, **fields):
    quiz = Quiz(
        course_id=course.id,
        title=title,
        passing_score=passing_score,
        weight=weight,
        is_published=published,
        **fields,
    )
    db.add(quiz)
    db.commit()
    return quiz


def add_question(db, quiz, correct_answer="A", points=5, order=None, type="single_choice"):
    if order is None:
        order = db.query(QuizQuestion).filter(QuizQuestion.quiz_id == quiz.id).count()
    question = QuizQuestion(
        quiz_id=quiz.id,
        type=type,
        question=f"Question {order + 1}",
        options=["A", "B", "C"],
        correct_answer=correct_answer,
        points=points,
        order=order,
    )
    db.add(question)
    db.commit()
    return question


def add_attempt(db, quiz, user_id, score, minutes=0):
    """Store an attempt directly, bypassing the scorer."""
    attempt = QuizAttempt(
        quiz_id=quiz.id,
        user_id=user_id,
        score=score,
        passed=score >= quiz.passing_score,
        time_spent=60,
        answers=[],
        completed_at=BASE_TIME + timedelta(minutes=minutes),
    )
    db.add(attempt)
    db.commit()
    return attempt
