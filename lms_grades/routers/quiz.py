# lms_grades/routers/quiz.py
from typing import List

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.orm import Session

from lms_grades.core.database import get_db
from lms_grades.core.decorator import NotFoundError
from lms_grades.core.limiter import limiter
from lms_grades.schemas.quiz import (
    QuizQuestionCreate,
    QuizQuestionResponse,
    QuizQuestionUpdate,
    QuizResponse,
    QuizUpdate,
    QuizWithQuestionsResponse,
)
from lms_grades.schemas.quiz_attempt import (
    AttemptResult,
    QuizAttemptCreate,
    QuizAttemptListResponse,
    QuizAttemptResponse,
    QuizAttemptStats,
)
from lms_grades.services.course_grade import CourseGradeService
from lms_grades.services.quiz import QuizService
from lms_grades.services.quiz_attempt import QuizAttemptService

router = APIRouter(
    prefix="/quizzes",
    tags=["Quizzes"],
    responses={404: {"description": "Not found"}},
)


# ==================== Quiz Endpoints ====================


@router.get("/{quiz_id}", response_model=QuizWithQuestionsResponse)
def get_quiz(quiz_id: int, db: Session = Depends(get_db)):
    """Quiz with its ordered questions - ADMIN ONLY (includes correct answers)"""
    quiz, questions = QuizService(db).get_quiz_with_questions(quiz_id)

    return QuizWithQuestionsResponse(
        **QuizResponse.model_validate(quiz).model_dump(),
        course_name=quiz.course.title,
        questions=[QuizQuestionResponse.model_validate(q) for q in questions],
    )


@router.patch("/{quiz_id}", response_model=QuizResponse)
def update_quiz(quiz_id: int, quiz_in: QuizUpdate, db: Session = Depends(get_db)):
    return QuizService(db).update_quiz(quiz_id, quiz_in)


@router.post("/{quiz_id}/publish", response_model=QuizResponse)
def publish_quiz(quiz_id: int, db: Session = Depends(get_db)):
    return QuizService(db).publish_quiz(quiz_id)


@router.post("/{quiz_id}/unpublish", response_model=QuizResponse)
def unpublish_quiz(quiz_id: int, db: Session = Depends(get_db)):
    return QuizService(db).unpublish_quiz(quiz_id)


@router.delete("/{quiz_id}", status_code=204)
def delete_quiz(quiz_id: int, db: Session = Depends(get_db)):
    """Delete a quiz and all of its questions."""
    QuizService(db).delete_quiz(quiz_id)
    return Response(status_code=204)


# ==================== Question Endpoints ====================


@router.get("/{quiz_id}/questions", response_model=List[QuizQuestionResponse])
def list_questions(quiz_id: int, db: Session = Depends(get_db)):
    service = QuizService(db)
    service.get_quiz(quiz_id)
    return service.get_questions(quiz_id)


@router.post(
    "/{quiz_id}/questions", response_model=QuizQuestionResponse, status_code=201
)
def add_question(
    quiz_id: int, question_in: QuizQuestionCreate, db: Session = Depends(get_db)
):
    """Append a question at the end of the quiz."""
    return QuizService(db).add_question(quiz_id, question_in)


@router.patch("/{quiz_id}/questions/{question_id}", response_model=QuizQuestionResponse)
def update_question(
    quiz_id: int,
    question_id: int,
    question_in: QuizQuestionUpdate,
    db: Session = Depends(get_db),
):
    service = QuizService(db)
    if service.get_question(question_id).quiz_id != quiz_id:
        raise NotFoundError("Question not found")
    return service.update_question(question_id, question_in)


@router.delete("/{quiz_id}/questions/{question_id}", status_code=204)
def delete_question(quiz_id: int, question_id: int, db: Session = Depends(get_db)):
    service = QuizService(db)
    if service.get_question(question_id).quiz_id != quiz_id:
        raise NotFoundError("Question not found")
    service.delete_question(question_id)
    return Response(status_code=204)


# ==================== Quiz Attempt Endpoints ====================


@router.post("/{quiz_id}/attempts", response_model=AttemptResult, status_code=201)
@limiter.limit("30/minute")
def submit_quiz_attempt(
    request: Request,
    quiz_id: int,
    attempt_in: QuizAttemptCreate,
    db: Session = Depends(get_db),
):
    """
    Submit answers for a quiz.

    The attempt is scored and stored, and the user's course grade is
    recalculated in the same transaction: either both are saved or neither.
    """
    result = QuizAttemptService(db).submit_attempt(
        quiz_id,
        attempt_in.user_id,
        attempt_in.answers,
        attempt_in.time_spent,
        commit=False,
    )
    result.course_grade_id = CourseGradeService(db).recalculate_after_quiz_attempt(
        attempt_in.user_id, quiz_id
    )
    return result


@router.get("/{quiz_id}/attempts", response_model=QuizAttemptListResponse)
def list_user_attempts(
    quiz_id: int,
    user_id: int = Query(..., description="User whose attempts to list"),
    db: Session = Depends(get_db),
):
    QuizService(db).get_quiz(quiz_id)
    attempts = QuizAttemptService(db).get_user_attempts(quiz_id, user_id)
    return QuizAttemptListResponse(
        attempts=[QuizAttemptResponse.model_validate(a) for a in attempts],
        total=len(attempts),
    )


@router.get("/{quiz_id}/attempts/best", response_model=QuizAttemptResponse)
def get_best_attempt(
    quiz_id: int,
    user_id: int = Query(...),
    db: Session = Depends(get_db),
):
    QuizService(db).get_quiz(quiz_id)
    attempt = QuizAttemptService(db).get_best_attempt(quiz_id, user_id)
    if not attempt:
        raise NotFoundError("No attempts found")
    return attempt


@router.get("/{quiz_id}/attempts/stats", response_model=QuizAttemptStats)
def get_attempt_stats(
    quiz_id: int,
    user_id: int = Query(...),
    db: Session = Depends(get_db),
):
    return QuizAttemptService(db).get_attempt_stats(quiz_id, user_id)
