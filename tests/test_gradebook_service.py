import pytest

from lms_grades.core.decorator import NotFoundError
from lms_grades.models import CourseGrade
from lms_grades.services.course_grade import CourseGradeService
from lms_grades.services.gradebook import GradebookService
from tests.conftest import BASE_TIME, add_attempt, enroll, make_course, make_quiz

USER_ID = 11


def test_gradebook_requires_enrollment(db):
    course = make_course(db)

    with pytest.raises(NotFoundError, match="Enrollment not found"):
        GradebookService(db).get_student_gradebook(USER_ID, course.id)


def test_gradebook_computes_missing_grade_without_saving(db):
    course = make_course(db)
    enroll(db, course, USER_ID, progress=40)
    quiz = make_quiz(db, course, passing_score=70)
    add_attempt(db, quiz, USER_ID, 85)

    gradebook = GradebookService(db).get_student_gradebook(USER_ID, course.id)

    assert gradebook.final_grade == 85.0
    assert gradebook.letter_grade == "B"
    assert db.query(CourseGrade).count() == 0


def test_gradebook_prefers_stored_grade(db):
    course = make_course(db)
    enroll(db, course, USER_ID)
    quiz = make_quiz(db, course, weight=1)
    add_attempt(db, quiz, USER_ID, 65)
    CourseGradeService(db).recalculate(USER_ID, course.id)
    # Not yet recalculated, so the stored grade is still shown
    add_attempt(db, quiz, USER_ID, 99, minutes=5)

    gradebook = GradebookService(db).get_student_gradebook(USER_ID, course.id)

    assert gradebook.final_grade == 65.0
    assert gradebook.letter_grade == "D"
    assert gradebook.quizzes[0].best_score == 99


def test_gradebook_without_attempts(db):
    course = make_course(db)
    enroll(db, course, USER_ID)
    make_quiz(db, course, title="Unseen", weight=10, max_attempts=3)

    gradebook = GradebookService(db).get_student_gradebook(USER_ID, course.id)

    assert gradebook.final_grade == 0.0
    assert gradebook.letter_grade == "N/A"
    assert gradebook.assignments == []
    detail = gradebook.quizzes[0]
    assert detail.title == "Unseen"
    assert detail.weight == 10
    assert detail.max_attempts == 3
    assert detail.attempt_count == 0
    assert detail.best_score is None
    assert detail.passed is False
    assert detail.last_attempt_at is None


def test_gradebook_quiz_details(db):
    course = make_course(db, title="Genetics")
    enroll(db, course, USER_ID, progress=75)
    quiz = make_quiz(db, course, passing_score=60)
    make_quiz(db, course, title="Draft", published=False)
    add_attempt(db, quiz, USER_ID, 50, minutes=30)
    add_attempt(db, quiz, USER_ID, 72, minutes=5)
    add_attempt(db, quiz, USER_ID + 1, 100, minutes=60)

    gradebook = GradebookService(db).get_student_gradebook(USER_ID, course.id)

    assert gradebook.course.title == "Genetics"
    assert gradebook.enrollment.progress == 75
    assert gradebook.enrollment.completed_at is None
    assert len(gradebook.quizzes) == 1
    detail = gradebook.quizzes[0]
    assert detail.attempt_count == 2
    assert detail.best_score == 72
    assert detail.passed is True
    # Latest by completion time, not by insertion order
    assert detail.last_attempt_at.replace(tzinfo=None) == BASE_TIME.replace(
        tzinfo=None, minute=30
    )
