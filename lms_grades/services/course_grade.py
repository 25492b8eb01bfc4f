# lms_grades/services/course_grade.py
import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import and_
from sqlalchemy.orm import Session

from lms_grades.core.decorator import db_exception
from lms_grades.models.course_grade import CourseGrade
from lms_grades.models.quiz import Quiz
from lms_grades.schemas.course_grade import (
    AssignmentScoreEntry,
    CourseGradeResponse,
    QuizScoreEntry,
)
from lms_grades.services.course import CourseService
from lms_grades.services.grading import (
    compute_weighted_grade,
    quiz_score_entry,
    select_best_attempt,
)
from lms_grades.services.quiz import QuizService
from lms_grades.services.quiz_attempt import QuizAttemptService

logger = logging.getLogger(__name__)

UNKNOWN_QUIZ_NAME = "Unknown quiz"


class CourseGradeService:
    def __init__(self, db: Session):
        self.db = db

    def get_grade_record(self, user_id: int, course_id: int) -> Optional[CourseGrade]:
        return (
            self.db.query(CourseGrade)
            .filter(
                and_(
                    CourseGrade.user_id == user_id,
                    CourseGrade.course_id == course_id,
                )
            )
            .first()
        )

    def collect_quiz_scores(self, user_id: int, course_id: int) -> List[QuizScoreEntry]:
        """Best score of the user on every published quiz they attempted."""
        quizzes = QuizService(self.db).list_course_quizzes(
            course_id, published_only=True
        )
        attempt_service = QuizAttemptService(self.db)

        entries = []
        for quiz in quizzes:
            attempts = attempt_service.list_attempts(quiz.id, user_id)
            best = select_best_attempt(attempts)
            # Unattempted quizzes are left out rather than counted as zero
            if best is None:
                continue
            entries.append(quiz_score_entry(quiz.id, best.score, quiz.weight))
        return entries

    def collect_assignment_scores(
        self, user_id: int, course_id: int
    ) -> List[AssignmentScoreEntry]:
        # TODO: score assignment lessons once assignment submissions are graded
        return []

    @db_exception
    def recalculate(self, user_id: int, course_id: int, commit: bool = True) -> int:
        """
        Rebuild the user's grade record for a course from their attempts.

        The stored score lists are replaced, never merged, so calling this
        repeatedly without new attempts leaves the record unchanged apart from
        ``updated_at``. Returns the grade record id.
        """
        CourseService(self.db).get_course(course_id)

        quiz_scores = self.collect_quiz_scores(user_id, course_id)
        assignment_scores = self.collect_assignment_scores(user_id, course_id)
        grade = compute_weighted_grade(quiz_scores)

        values = {
            "quiz_scores": [entry.model_dump(exclude={"quiz_name"}) for entry in quiz_scores],
            "assignment_scores": [
                entry.model_dump(exclude={"assignment_name"})
                for entry in assignment_scores
            ],
            "final_grade": grade.final_grade,
            "letter_grade": grade.letter_grade,
            "updated_at": datetime.now(timezone.utc),
        }

        record = self.get_grade_record(user_id, course_id)
        if record:
            for field, value in values.items():
                setattr(record, field, value)
        else:
            record = CourseGrade(user_id=user_id, course_id=course_id, **values)
            self.db.add(record)

        if commit:
            self.db.commit()
            self.db.refresh(record)
        else:
            self.db.flush()

        logger.info(
            f"Course grade for user {user_id} in course {course_id}: "
            f"{grade.final_grade} ({grade.letter_grade}) from {len(quiz_scores)} quizzes"
        )
        return record.id

    def recalculate_after_quiz_attempt(
        self, user_id: int, quiz_id: int, commit: bool = True
    ) -> int:
        """Recalculate the grade of the course the quiz belongs to."""
        quiz = QuizService(self.db).get_quiz(quiz_id)
        return self.recalculate(user_id, quiz.course_id, commit=commit)

    def get_by_student(
        self, user_id: int, course_id: int
    ) -> Optional[CourseGradeResponse]:
        """Stored grade record with quiz titles filled in, or None."""
        record = self.get_grade_record(user_id, course_id)
        if not record:
            return None

        quiz_ids = [entry["quiz_id"] for entry in record.quiz_scores]
        titles = {
            quiz.id: quiz.title
            for quiz in self.db.query(Quiz).filter(Quiz.id.in_(quiz_ids)).all()
        }

        response = CourseGradeResponse.model_validate(record)
        for entry in response.quiz_scores:
            entry.quiz_name = titles.get(entry.quiz_id, UNKNOWN_QUIZ_NAME)
        return response
