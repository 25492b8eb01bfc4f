# lms_grades/routers/course.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from lms_grades.core.database import get_db
from lms_grades.schemas.course import (
    CourseCreate,
    CourseEnrollmentCreate,
    CourseEnrollmentResponse,
    CourseResponse,
)
from lms_grades.schemas.quiz import QuizCreate, QuizListResponse, QuizResponse
from lms_grades.services.course import CourseEnrollmentService, CourseService
from lms_grades.services.quiz import QuizService

router = APIRouter(
    prefix="/courses",
    tags=["Courses"],
    responses={404: {"description": "Not found"}},
)


# ==================== Course Endpoints ====================


@router.post("/", response_model=CourseResponse, status_code=201)
def create_course(course_in: CourseCreate, db: Session = Depends(get_db)):
    """Register a course so its quizzes can be graded."""
    return CourseService(db).create_course(course_in)


@router.get("/{course_id}", response_model=CourseResponse)
def get_course(course_id: int, db: Session = Depends(get_db)):
    return CourseService(db).get_course(course_id)


@router.post(
    "/{course_id}/enrollments",
    response_model=CourseEnrollmentResponse,
    status_code=201,
)
def enroll_user(
    course_id: int,
    enrollment_in: CourseEnrollmentCreate,
    db: Session = Depends(get_db),
):
    return CourseEnrollmentService(db).enroll_user(course_id, enrollment_in)


# ==================== Course Quiz Endpoints ====================


@router.post("/{course_id}/quizzes", response_model=QuizResponse, status_code=201)
def create_quiz(course_id: int, quiz_in: QuizCreate, db: Session = Depends(get_db)):
    """
    Create a quiz in a course.
    The quiz is unpublished until explicitly published.
    """
    return QuizService(db).create_quiz(course_id, quiz_in)


@router.get("/{course_id}/quizzes", response_model=QuizListResponse)
def list_course_quizzes(
    course_id: int,
    published_only: bool = Query(False, description="Only published quizzes"),
    db: Session = Depends(get_db),
):
    quizzes = QuizService(db).list_course_quizzes(course_id, published_only)
    return QuizListResponse(
        quizzes=[QuizResponse.model_validate(quiz) for quiz in quizzes],
        total=len(quizzes),
    )
