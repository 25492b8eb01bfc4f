# lms_grades/services/gradebook.py
from sqlalchemy.orm import Session

from lms_grades.core.decorator import NotFoundError
from lms_grades.schemas.course_grade import (
    GradebookCourse,
    GradebookEnrollment,
    GradebookQuiz,
    GradebookResponse,
)
from lms_grades.services.course import CourseEnrollmentService, CourseService
from lms_grades.services.course_grade import CourseGradeService
from lms_grades.services.grading import (
    NO_GRADE_LETTER,
    compute_weighted_grade,
    quiz_score_entry,
    select_best_attempt,
)
from lms_grades.services.quiz import QuizService
from lms_grades.services.quiz_attempt import QuizAttemptService


class GradebookService:
    """Read-only gradebook report. Never writes to the database."""

    def __init__(self, db: Session):
        self.db = db

    def get_student_gradebook(self, user_id: int, course_id: int) -> GradebookResponse:
        enrollment = CourseEnrollmentService(self.db).get_enrollment(user_id, course_id)
        if not enrollment:
            raise NotFoundError("Enrollment not found")

        course = CourseService(self.db).get_course(course_id)
        quizzes = QuizService(self.db).list_course_quizzes(
            course_id, published_only=True
        )
        attempt_service = QuizAttemptService(self.db)

        quiz_details = []
        quiz_scores = []
        for quiz in quizzes:
            attempts = attempt_service.list_attempts(quiz.id, user_id)

            best = select_best_attempt(attempts)
            best_score = best.score if best else None
            last_attempt = (
                max(attempts, key=lambda attempt: attempt.completed_at)
                if attempts
                else None
            )

            quiz_details.append(
                GradebookQuiz(
                    id=quiz.id,
                    title=quiz.title,
                    weight=quiz.weight or 0,
                    max_attempts=quiz.max_attempts,
                    passing_score=quiz.passing_score,
                    attempt_count=len(attempts),
                    best_score=best_score,
                    passed=best_score is not None and best_score >= quiz.passing_score,
                    last_attempt_at=last_attempt.completed_at if last_attempt else None,
                )
            )
            if best_score is not None:
                quiz_scores.append(quiz_score_entry(quiz.id, best_score, quiz.weight))

        record = CourseGradeService(self.db).get_grade_record(user_id, course_id)
        if record:
            final_grade = record.final_grade
            letter = record.letter_grade or NO_GRADE_LETTER
        elif quiz_scores:
            # Not stored yet: compute for display only
            grade = compute_weighted_grade(quiz_scores)
            final_grade, letter = grade.final_grade, grade.letter_grade
        else:
            final_grade, letter = 0.0, NO_GRADE_LETTER

        return GradebookResponse(
            course=GradebookCourse(id=course.id, title=course.title),
            enrollment=GradebookEnrollment(
                progress=enrollment.progress,
                started_at=enrollment.started_at,
                completed_at=enrollment.completed_at,
            ),
            quizzes=quiz_details,
            assignments=[],
            final_grade=final_grade,
            letter_grade=letter,
        )
