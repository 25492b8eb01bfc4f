import pytest

from lms_grades.core.decorator import MaxAttemptsReachedError, NotFoundError
from lms_grades.models import QuizAttempt
from lms_grades.schemas.quiz_attempt import AnswerSubmission
from lms_grades.services.course_grade import CourseGradeService
from lms_grades.services.quiz_attempt import QuizAttemptService
from tests.conftest import add_attempt, add_question, make_course, make_quiz

USER_ID = 7


@pytest.fixture
def two_question_quiz(db):
    quiz = make_quiz(db, make_course(db), passing_score=60, weight=1)
    q1 = add_question(db, quiz, correct_answer="A", points=5)
    q2 = add_question(db, quiz, correct_answer="True", points=5, type="true_false")
    return quiz, q1, q2


def test_submit_scores_and_stores_attempt(db, two_question_quiz):
    quiz, q1, q2 = two_question_quiz

    result = QuizAttemptService(db).submit_attempt(
        quiz.id,
        USER_ID,
        [
            AnswerSubmission(question_id=q1.id, answer="A"),
            AnswerSubmission(question_id=q2.id, answer="False"),
        ],
        time_spent=120,
    )

    assert result.earned_points == 5
    assert result.total_points == 10
    assert result.score == 50
    assert result.passed is False

    attempt = db.query(QuizAttempt).one()
    assert attempt.id == result.attempt_id
    assert attempt.score == 50
    assert attempt.passed is False
    assert attempt.time_spent == 120
    assert attempt.completed_at is not None
    assert [a["question_id"] for a in attempt.answers] == [q1.id, q2.id]
    assert [a["points"] for a in attempt.answers] == [5, 0]


def test_best_attempt_counts_for_course_grade(db, two_question_quiz):
    quiz, q1, q2 = two_question_quiz
    service = QuizAttemptService(db)

    first = service.submit_attempt(
        quiz.id, USER_ID, [AnswerSubmission(question_id=q1.id, answer="A")], 60
    )
    second = service.submit_attempt(
        quiz.id,
        USER_ID,
        [
            AnswerSubmission(question_id=q1.id, answer="A"),
            AnswerSubmission(question_id=q2.id, answer="True"),
        ],
        90,
    )

    assert (first.score, first.passed) == (50, False)
    assert (second.score, second.passed) == (100, True)

    grade_service = CourseGradeService(db)
    grade_service.recalculate(USER_ID, quiz.course_id)
    record = grade_service.get_grade_record(USER_ID, quiz.course_id)
    assert record.final_grade == 100.0
    assert record.letter_grade == "A"


def test_passed_uses_passing_score_threshold(db):
    quiz = make_quiz(db, make_course(db), passing_score=50)
    q1 = add_question(db, quiz, correct_answer="A", points=1)
    add_question(db, quiz, correct_answer="B", points=1)

    result = QuizAttemptService(db).submit_attempt(
        quiz.id, USER_ID, [AnswerSubmission(question_id=q1.id, answer="A")], 10
    )

    assert result.score == 50
    assert result.passed is True


def test_quiz_without_questions_scores_zero(db):
    quiz = make_quiz(db, make_course(db), passing_score=60)

    result = QuizAttemptService(db).submit_attempt(quiz.id, USER_ID, [], 5)

    assert result.total_points == 0
    assert result.score == 0
    assert result.passed is False


def test_submit_to_missing_quiz(db):
    with pytest.raises(NotFoundError):
        QuizAttemptService(db).submit_attempt(404, USER_ID, [], 5)
    assert db.query(QuizAttempt).count() == 0


def test_max_attempts_is_enforced(db):
    quiz = make_quiz(db, make_course(db), max_attempts=2)
    add_question(db, quiz)
    service = QuizAttemptService(db)

    service.submit_attempt(quiz.id, USER_ID, [], 5)
    service.submit_attempt(quiz.id, USER_ID, [], 5)
    with pytest.raises(MaxAttemptsReachedError):
        service.submit_attempt(quiz.id, USER_ID, [], 5)

    assert db.query(QuizAttempt).count() == 2
    # Other users keep their own allowance
    service.submit_attempt(quiz.id, USER_ID + 1, [], 5)


def test_user_attempts_newest_first(db):
    quiz = make_quiz(db, make_course(db))
    older = add_attempt(db, quiz, USER_ID, 40, minutes=0)
    newer = add_attempt(db, quiz, USER_ID, 30, minutes=10)
    add_attempt(db, quiz, USER_ID + 1, 100)

    attempts = QuizAttemptService(db).get_user_attempts(quiz.id, USER_ID)

    assert [a.id for a in attempts] == [newer.id, older.id]


def test_best_attempt_and_stats(db):
    quiz = make_quiz(db, make_course(db), passing_score=90)
    for minutes, score in enumerate([40, 95, 70]):
        add_attempt(db, quiz, USER_ID, score, minutes=minutes)
    service = QuizAttemptService(db)

    assert service.get_best_attempt(quiz.id, USER_ID).score == 95

    stats = service.get_attempt_stats(quiz.id, USER_ID)
    assert stats.total_attempts == 3
    assert stats.best_score == 95
    assert stats.average_score == 68.33
    assert stats.passed is True


def test_stats_without_attempts(db):
    quiz = make_quiz(db, make_course(db))

    stats = QuizAttemptService(db).get_attempt_stats(quiz.id, USER_ID)

    assert stats.total_attempts == 0
    assert stats.best_score is None
    assert stats.passed is False
    assert QuizAttemptService(db).get_best_attempt(quiz.id, USER_ID) is None
