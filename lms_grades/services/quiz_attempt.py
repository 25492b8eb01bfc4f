# lms_grades/services/quiz_attempt.py
import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from sqlalchemy import and_, func
from sqlalchemy.orm import Session

from lms_grades.core.decorator import MaxAttemptsReachedError, db_exception
from lms_grades.models.quiz_attempt import QuizAttempt
from lms_grades.schemas.quiz_attempt import (
    AnswerSubmission,
    AttemptResult,
    QuizAttemptStats,
)
from lms_grades.services.grading import score_answers, select_best_attempt
from lms_grades.services.quiz import QuizService

logger = logging.getLogger(__name__)


class QuizAttemptService:
    def __init__(self, db: Session):
        self.db = db

    def _attempts_query(self, quiz_id: int, user_id: int):
        return self.db.query(QuizAttempt).filter(
            and_(
                QuizAttempt.quiz_id == quiz_id,
                QuizAttempt.user_id == user_id,
            )
        )

    @db_exception
    def submit_attempt(
        self,
        quiz_id: int,
        user_id: int,
        answers: Sequence[AnswerSubmission],
        time_spent: int,
        commit: bool = True,
    ) -> AttemptResult:
        """
        Score a submission and store it as a new attempt.

        With ``commit=False`` the attempt is only flushed, so the caller can
        finish further work (such as a grade recalculation) in the same
        transaction.
        """
        quiz_service = QuizService(self.db)
        quiz = quiz_service.get_quiz(quiz_id)

        if quiz.max_attempts:
            attempts_used = (
                self._attempts_query(quiz_id, user_id)
                .with_entities(func.count(QuizAttempt.id))
                .scalar()
                or 0
            )
            if attempts_used >= quiz.max_attempts:
                raise MaxAttemptsReachedError(quiz.max_attempts)

        questions = quiz_service.get_questions(quiz_id)
        summary = score_answers(questions, answers)
        passed = summary.score >= quiz.passing_score

        attempt = QuizAttempt(
            quiz_id=quiz_id,
            user_id=user_id,
            score=summary.score,
            passed=passed,
            time_spent=time_spent,
            answers=[result.model_dump() for result in summary.results],
            completed_at=datetime.now(timezone.utc),
        )
        self.db.add(attempt)

        if commit:
            self.db.commit()
            self.db.refresh(attempt)
        else:
            self.db.flush()

        logger.info(
            f"Attempt {attempt.id} on quiz {quiz_id} by user {user_id}: "
            f"{summary.earned_points}/{summary.total_points} points, score={summary.score}, passed={passed}"
        )

        return AttemptResult(
            attempt_id=attempt.id,
            score=summary.score,
            passed=passed,
            earned_points=summary.earned_points,
            total_points=summary.total_points,
            results=summary.results,
        )

    def get_user_attempts(self, quiz_id: int, user_id: int) -> List[QuizAttempt]:
        """All attempts of a user on a quiz, newest first."""
        return (
            self._attempts_query(quiz_id, user_id)
            .order_by(QuizAttempt.completed_at.desc(), QuizAttempt.id.desc())
            .all()
        )

    def list_attempts(self, quiz_id: int, user_id: int) -> List[QuizAttempt]:
        """Attempts in storage order, the order best-attempt ties are resolved in."""
        return self._attempts_query(quiz_id, user_id).order_by(QuizAttempt.id).all()

    def get_best_attempt(self, quiz_id: int, user_id: int) -> Optional[QuizAttempt]:
        attempts = self.list_attempts(quiz_id, user_id)
        return select_best_attempt(attempts)

    def get_attempt_stats(self, quiz_id: int, user_id: int) -> QuizAttemptStats:
        """Get statistics for a user's quiz attempts"""
        quiz = QuizService(self.db).get_quiz(quiz_id)
        attempts = self.list_attempts(quiz_id, user_id)

        if not attempts:
            return QuizAttemptStats(quiz_id=quiz_id, total_attempts=0)

        best = select_best_attempt(attempts)
        scores = [attempt.score for attempt in attempts]

        return QuizAttemptStats(
            quiz_id=quiz_id,
            total_attempts=len(attempts),
            best_score=best.score,
            average_score=round(sum(scores) / len(scores), 2),
            last_attempt_at=max(attempt.completed_at for attempt in attempts),
            passed=best.score >= quiz.passing_score,
        )
