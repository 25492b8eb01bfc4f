import pytest

from lms_grades.core.decorator import NotFoundError
from lms_grades.models import CourseGrade
from lms_grades.services.course_grade import CourseGradeService
from lms_grades.services.quiz import QuizService
from tests.conftest import add_attempt, make_course, make_quiz

USER_ID = 3


def test_recalculate_uses_best_attempt(db):
    course = make_course(db)
    quiz = make_quiz(db, course, weight=10)
    for score in (40, 95, 70):
        add_attempt(db, quiz, USER_ID, score)

    service = CourseGradeService(db)
    grade_id = service.recalculate(USER_ID, course.id)

    record = db.get(CourseGrade, grade_id)
    assert record.quiz_scores == [
        {"quiz_id": quiz.id, "score": 95, "weight": 10, "weighted_score": 9.5}
    ]
    assert record.assignment_scores == []
    assert record.final_grade == 95.0
    assert record.letter_grade == "A"


def test_recalculate_weights_quizzes(db):
    course = make_course(db)
    midterm = make_quiz(db, course, title="Midterm", weight=30)
    final = make_quiz(db, course, title="Final", weight=70)
    add_attempt(db, midterm, USER_ID, 95)
    add_attempt(db, final, USER_ID, 70)

    service = CourseGradeService(db)
    record = db.get(CourseGrade, service.recalculate(USER_ID, course.id))

    assert record.final_grade == 77.5
    assert record.letter_grade == "C"


def test_unattempted_and_unpublished_quizzes_do_not_count(db):
    course = make_course(db)
    attempted = make_quiz(db, course, weight=50)
    make_quiz(db, course, weight=50)
    draft = make_quiz(db, course, weight=50, published=False)
    add_attempt(db, attempted, USER_ID, 80)
    add_attempt(db, draft, USER_ID, 10)

    record = db.get(CourseGrade, CourseGradeService(db).recalculate(USER_ID, course.id))

    assert [entry["quiz_id"] for entry in record.quiz_scores] == [attempted.id]
    assert record.final_grade == 80.0
    assert record.letter_grade == "B"


def test_unweighted_quizzes_use_simple_average(db):
    course = make_course(db)
    add_attempt(db, make_quiz(db, course), USER_ID, 60)
    add_attempt(db, make_quiz(db, course), USER_ID, 75)

    record = db.get(CourseGrade, CourseGradeService(db).recalculate(USER_ID, course.id))

    assert record.final_grade == 67.5
    assert record.letter_grade == "D"


def test_recalculate_without_attempts_stores_zero(db):
    course = make_course(db)
    make_quiz(db, course, weight=10)

    record = db.get(CourseGrade, CourseGradeService(db).recalculate(USER_ID, course.id))

    assert record.quiz_scores == []
    assert record.final_grade == 0.0
    assert record.letter_grade == "F"


def test_recalculate_is_idempotent(db):
    course = make_course(db)
    add_attempt(db, make_quiz(db, course, weight=20), USER_ID, 88)
    add_attempt(db, make_quiz(db, course, weight=30), USER_ID, 64)
    service = CourseGradeService(db)

    first_id = service.recalculate(USER_ID, course.id)
    first = service.get_by_student(USER_ID, course.id)
    second_id = service.recalculate(USER_ID, course.id)
    second = service.get_by_student(USER_ID, course.id)

    assert first_id == second_id
    assert db.query(CourseGrade).count() == 1
    assert first.final_grade == second.final_grade
    assert first.letter_grade == second.letter_grade
    assert first.quiz_scores == second.quiz_scores


def test_recalculate_replaces_score_list(db):
    course = make_course(db)
    kept = make_quiz(db, course, weight=10)
    dropped = make_quiz(db, course, weight=10)
    add_attempt(db, kept, USER_ID, 90)
    add_attempt(db, dropped, USER_ID, 50)
    service = CourseGradeService(db)
    service.recalculate(USER_ID, course.id)

    QuizService(db).unpublish_quiz(dropped.id)
    service.recalculate(USER_ID, course.id)

    record = service.get_grade_record(USER_ID, course.id)
    assert [entry["quiz_id"] for entry in record.quiz_scores] == [kept.id]
    assert record.final_grade == 90.0


def test_grades_are_per_user(db):
    course = make_course(db)
    quiz = make_quiz(db, course, weight=1)
    add_attempt(db, quiz, USER_ID, 90)
    add_attempt(db, quiz, USER_ID + 1, 20)
    service = CourseGradeService(db)

    service.recalculate(USER_ID, course.id)
    service.recalculate(USER_ID + 1, course.id)

    assert service.get_grade_record(USER_ID, course.id).final_grade == 90.0
    assert service.get_grade_record(USER_ID + 1, course.id).final_grade == 20.0


def test_recalculate_for_missing_course(db):
    with pytest.raises(NotFoundError, match="Course not found"):
        CourseGradeService(db).recalculate(USER_ID, 123)
    assert db.query(CourseGrade).count() == 0


def test_recalculate_after_quiz_attempt_resolves_course(db):
    course = make_course(db)
    quiz = make_quiz(db, course, weight=5)
    add_attempt(db, quiz, USER_ID, 72)
    service = CourseGradeService(db)

    grade_id = service.recalculate_after_quiz_attempt(USER_ID, quiz.id)

    record = db.get(CourseGrade, grade_id)
    assert record.course_id == course.id
    assert record.final_grade == 72.0


def test_recalculate_after_missing_quiz(db):
    with pytest.raises(NotFoundError, match="Quiz not found"):
        CourseGradeService(db).recalculate_after_quiz_attempt(USER_ID, 5)


def test_get_by_student_adds_quiz_names(db):
    course = make_course(db)
    quiz = make_quiz(db, course, title="Photosynthesis", weight=1)
    add_attempt(db, quiz, USER_ID, 81)
    service = CourseGradeService(db)
    service.recalculate(USER_ID, course.id)

    grade = service.get_by_student(USER_ID, course.id)

    assert grade.quiz_scores[0].quiz_name == "Photosynthesis"
    assert grade.letter_grade == "B"


def test_get_by_student_without_record(db):
    course = make_course(db)
    assert CourseGradeService(db).get_by_student(USER_ID, course.id) is None
