# lms_grades/models/quiz_attempt.py
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer

from lms_grades.core.database import Base
from lms_grades.models.types import JSONType


class QuizAttempt(Base):
    """One scored submission. Rows are inserted once and never updated."""

    __tablename__ = "quiz_attempts"

    id = Column(Integer, primary_key=True, index=True)

    # Relationships
    quiz_id = Column(
        Integer, ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(Integer, nullable=False, index=True)

    # Attempt data
    score = Column(Integer, nullable=False)  # 0-100, rounded percentage
    passed = Column(Boolean, nullable=False)
    time_spent = Column(Integer, nullable=False, default=0)  # seconds
    answers = Column(
        JSONType, nullable=False
    )  # [{"question_id": 1, "user_answer": "a", "correct_answer": "a", "is_correct": true, "points": 5}, ...]

    completed_at = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f"<QuizAttempt(id={self.id}, quiz_id={self.quiz_id}, user_id={self.user_id}, score={self.score})>"
