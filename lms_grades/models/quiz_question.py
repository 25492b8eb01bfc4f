# lms_grades/models/quiz_question.py
from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.sql import func

from lms_grades.core.database import Base
from lms_grades.models.types import JSONType


class QuizQuestion(Base):
    __tablename__ = "quiz_questions"
    __table_args__ = (
        UniqueConstraint("quiz_id", "order", name="uq_question_quiz_order"),
    )

    id = Column(Integer, primary_key=True, index=True)
    quiz_id = Column(
        Integer, ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False, index=True
    )

    type = Column(
        String(50), nullable=False
    )  # true_false | single_choice | multiple_choice | short_answer
    question = Column(Text, nullable=False)
    options = Column(JSONType, nullable=True)  # ["Paris", "Rome", ...] for choice types
    correct_answer = Column(Text, nullable=True)
    explanation = Column(Text, nullable=True)

    points = Column(Integer, nullable=False, default=1)
    order = Column(Integer, nullable=False)  # dense, 0-based within the quiz

    created_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def __repr__(self):
        return f"<QuizQuestion(id={self.id}, quiz_id={self.quiz_id}, order={self.order}, points={self.points})>"
