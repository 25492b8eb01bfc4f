# lms_grades/routers/course_grade.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from lms_grades.core.database import get_db
from lms_grades.core.decorator import NotFoundError
from lms_grades.schemas.course_grade import (
    CourseGradeResponse,
    GradebookResponse,
    RecalculateResponse,
)
from lms_grades.services.course_grade import CourseGradeService
from lms_grades.services.gradebook import GradebookService

router = APIRouter(
    prefix="/grades",
    tags=["Grades"],
    responses={404: {"description": "Not found"}},
)


@router.post(
    "/users/{user_id}/courses/{course_id}/recalculate",
    response_model=RecalculateResponse,
)
def recalculate_course_grade(user_id: int, course_id: int, db: Session = Depends(get_db)):
    """Rebuild and store the user's grade for the course."""
    grade_id = CourseGradeService(db).recalculate(user_id, course_id)
    return RecalculateResponse(course_grade_id=grade_id)


@router.post(
    "/users/{user_id}/quizzes/{quiz_id}/recalculate",
    response_model=RecalculateResponse,
)
def recalculate_after_quiz_attempt(
    user_id: int, quiz_id: int, db: Session = Depends(get_db)
):
    grade_id = CourseGradeService(db).recalculate_after_quiz_attempt(user_id, quiz_id)
    return RecalculateResponse(course_grade_id=grade_id)


@router.get("/users/{user_id}/courses/{course_id}", response_model=CourseGradeResponse)
def get_course_grade(user_id: int, course_id: int, db: Session = Depends(get_db)):
    grade = CourseGradeService(db).get_by_student(user_id, course_id)
    if not grade:
        raise NotFoundError("Course grade not found")
    return grade


@router.get(
    "/users/{user_id}/courses/{course_id}/gradebook",
    response_model=GradebookResponse,
)
def get_student_gradebook(user_id: int, course_id: int, db: Session = Depends(get_db)):
    """
    Full gradebook of a student in a course.
    Read-only; a grade not stored yet is computed for display but not saved.
    """
    return GradebookService(db).get_student_gradebook(user_id, course_id)
